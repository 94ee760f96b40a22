from collections.abc import Mapping
from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from typing import Union

import eth_abi
from eth_abi.exceptions import DecodingError
from hexbytes import HexBytes
from web3.exceptions import ContractCustomError

from multicall_helper.utils.abi import parse_error
from multicall_helper.utils.constants import ERROR_STRING_SELECTOR
from multicall_helper.utils.constants import PANIC_SELECTOR
from multicall_helper.utils.normalizer import normalize


NO_REVERT_DATA = '(no revert data)'


def _extract_reason(err: Optional[BaseException]) -> Optional[str]:
    for attr in ('reason', 'short_message'):
        reason = getattr(err, attr, None)
        if isinstance(reason, str):
            return reason
    # ContractCustomError.message is only the raw selector payload
    if not isinstance(err, ContractCustomError):
        message = getattr(err, 'message', None)
        if isinstance(message, str):
            return message
    return None


def _receipt_revert_reason(err: Optional[BaseException]):
    receipt = getattr(err, 'receipt', None)
    if receipt is None:
        return None
    if isinstance(receipt, Mapping):
        return receipt.get('revertReason')
    return getattr(receipt, 'revertReason', None)


def _to_bytes(raw: Union[bytes, str, None]) -> Optional[bytes]:
    if isinstance(raw, (bytes, bytearray)):
        return bytes(raw)
    if isinstance(raw, str) and raw.startswith('0x'):
        try:
            return bytes(HexBytes(raw))
        except ValueError:
            return None
    return None


def _stringify(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return '0x' + bytes(value).hex()
    return str(normalize(value))


def decode_revert(
    err: Optional[BaseException],
    data: Union[bytes, str, None],
    abi: Optional[List[Dict[str, Any]]] = None,
) -> str:
    """
    Turns a failed call into a human-readable reason.

    Interpretations are tried in order and the first one that works wins:

    1. a reason or short message already extracted on ``err``
    2. a standard ``Error(string)`` payload
    3. a Solidity ``Panic(uint256)`` payload
    4. a custom error declared in ``abi``
    5. a short hex snippet of the payload

    Args:
        err: The exception raised by the call, if any.
        data: Raw revert data, e.g. the return data of a failed aggregated call.
            Takes precedence over ``err.data`` and ``err.receipt.revertReason``.
        abi: ABI of the contract that was called, used to resolve custom errors.

    Returns:
        str: The revert reason, without any prefix.
    """
    reason = _extract_reason(err)
    if reason is not None:
        return reason

    raw = None
    for candidate in (data, getattr(err, 'data', None), _receipt_revert_reason(err)):
        if isinstance(candidate, (bytes, bytearray, str)):
            raw = candidate
            break

    raw = _to_bytes(raw)
    if not raw:
        return NO_REVERT_DATA

    selector, payload = raw[:4], raw[4:]

    if selector == ERROR_STRING_SELECTOR:
        try:
            return str(eth_abi.decode(['string'], payload)[0])
        except (DecodingError, UnicodeDecodeError):
            pass

    if selector == PANIC_SELECTOR:
        try:
            return 'Panic({})'.format(eth_abi.decode(['uint256'], payload)[0])
        except DecodingError:
            pass

    try:
        name, args = parse_error(abi, raw)
    except (ValueError, DecodingError):
        pass
    else:
        return '{}({})'.format(name, ', '.join(_stringify(arg) for arg in args))

    return '(unrecognized revert: {}…)'.format(('0x' + raw.hex())[:42])
