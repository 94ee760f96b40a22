from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from typing import Sequence
from typing import Tuple
from typing import Union

import eth_abi
from eth_utils import keccak
from hexbytes import HexBytes
from web3 import Web3


class AbiResult(object):
    """
    Decoded values of one ABI container (function outputs, tuple, array or error args).

    ``names`` holds the declared field names of a tuple-like container, and is
    ``None`` for arrays. A container is a struct only when every field carries
    a non-empty name; everything else is positional.
    """

    __slots__ = ('values', 'names')

    def __init__(self, values: Sequence[Any], names: Optional[Sequence[Optional[str]]] = None):
        self.values = tuple(values)
        self.names = tuple(names) if names is not None else None

    @property
    def is_struct(self) -> bool:
        return bool(self.names) and all(self.names)

    def to_dict(self) -> Dict[str, Any]:
        """Shallow field-name mapping. Raises ValueError for positional containers."""
        if not self.is_struct:
            raise ValueError('value is not a named struct')
        return dict(zip(self.names, self.values))

    def to_list(self) -> List[Any]:
        return list(self.values)

    def __len__(self):
        return len(self.values)

    def __iter__(self):
        return iter(self.values)

    def __getitem__(self, index):
        return self.values[index]

    def __eq__(self, other):
        if not isinstance(other, AbiResult):
            return NotImplemented
        return self.values == other.values and self.names == other.names

    def __repr__(self):
        return 'AbiResult(values={!r}, names={!r})'.format(self.values, self.names)


def get_canonical_type(abi_param: Dict[str, Any]) -> str:
    """
    Returns the canonical type string of an ABI parameter, expanding tuples.

    ``{'type': 'tuple[]', 'components': [{'type': 'address'}, {'type': 'bytes'}]}``
    becomes ``'(address,bytes)[]'``.
    """
    abi_type = abi_param['type']
    if abi_type.startswith('tuple'):
        inner = ','.join(get_canonical_type(component) for component in abi_param.get('components', []))
        return '({}){}'.format(inner, abi_type[len('tuple'):])
    return abi_type


def get_contract_abi_dict(abi):
    """
    Returns a dictionary of function signatures, selectors, inputs, outputs and full ABI entry.

    Every function is keyed by its full signature, e.g. ``'balanceOf(address)'``.
    Functions that are not overloaded are also keyed by their bare name.

    Args:
        abi (list): List of dictionaries representing the contract ABI.

    Returns:
        dict: Function key to its name, signature, selector, canonical input and output types, and ABI entry.
    """
    abi_dict = {}
    by_name = {}
    for abi_obj in [obj for obj in abi if obj.get('type') == 'function']:
        name = abi_obj['name']
        input_types = [get_canonical_type(param) for param in abi_obj.get('inputs', [])]
        output_types = [get_canonical_type(param) for param in abi_obj.get('outputs', [])]
        signature = '{}({})'.format(name, ','.join(input_types))
        abi_dict[signature] = {
            'name': name,
            'signature': signature,
            'selector': keccak(text=signature)[:4],
            'output': output_types,
            'input': input_types,
            'abi': abi_obj,
        }
        by_name.setdefault(name, set()).add(signature)

    for name, signatures in by_name.items():
        if len(signatures) == 1 and name not in abi_dict:
            abi_dict[name] = abi_dict[next(iter(signatures))]

    return abi_dict


def find_function_abi(abi_dict, function_name, params: Union[List, None] = None):
    """
    Looks up a function by full signature or bare name.

    An overloaded bare name is resolved by the number of ``params``.

    Raises:
        ValueError: If no function matches, or an overloaded name stays ambiguous.
    """
    if function_name in abi_dict:
        return abi_dict[function_name]

    candidates = [
        entry for key, entry in abi_dict.items()
        if key == entry['signature'] and entry['name'] == function_name
    ]
    if not candidates:
        raise ValueError('Function {} not found in ABI'.format(function_name))

    if params is not None:
        matching = [entry for entry in candidates if len(entry['input']) == len(params)]
        if len(matching) == 1:
            return matching[0]

    raise ValueError(
        'Function {} is overloaded, pass one of: {}'.format(
            function_name, ', '.join(sorted(entry['signature'] for entry in candidates)),
        ),
    )


def get_contract_error_dict(abi):
    """
    Returns the custom errors of a contract ABI keyed by their 4-byte selector.
    """
    error_dict = {}
    for abi_obj in [obj for obj in abi if obj.get('type') == 'error']:
        input_types = [get_canonical_type(param) for param in abi_obj.get('inputs', [])]
        signature = '{}({})'.format(abi_obj['name'], ','.join(input_types))
        error_dict[keccak(text=signature)[:4]] = {
            'name': abi_obj['name'],
            'signature': signature,
            'input': input_types,
            'abi': abi_obj,
        }
    return error_dict


def get_encoded_function_signature(abi_dict, function_name, params: Union[List, None]) -> HexBytes:
    """
    Returns the call data (selector followed by encoded arguments) for a function.

    Args:
        abi_dict (dict): The ABI dictionary for the contract, see get_contract_abi_dict.
        function_name (str): The bare name or full signature of the function.
        params (list or None): The arguments for the function.

    Returns:
        HexBytes: The encoded call data.

    Raises:
        ValueError: If the function is not part of the ABI, or its name is ambiguous.
    """
    function_abi = find_function_abi(abi_dict, function_name, params)
    encoded = function_abi['selector']
    if function_abi['input']:
        encoded += eth_abi.encode(function_abi['input'], list(params or []))
    return HexBytes(encoded)


def _wrap_decoded(value, abi_param):
    abi_type = abi_param['type']
    if abi_type.endswith(']'):
        element_param = dict(abi_param, type=abi_type[:abi_type.rindex('[')])
        return AbiResult([_wrap_decoded(item, element_param) for item in value])
    if abi_type == 'tuple':
        components = abi_param.get('components', [])
        return AbiResult(
            [_wrap_decoded(item, component) for item, component in zip(value, components)],
            [component.get('name') for component in components],
        )
    if abi_type == 'address':
        return Web3.to_checksum_address(value)
    return value


def _decode_params(abi_params, types, data) -> AbiResult:
    decoded = eth_abi.decode(types, HexBytes(data))
    return AbiResult(
        [_wrap_decoded(value, param) for value, param in zip(decoded, abi_params)],
        [param.get('name') for param in abi_params],
    )


def decode_function_result(
    abi_dict, function_name, data: Union[bytes, str], params: Union[List, None] = None,
) -> AbiResult:
    """
    Decodes the return data of a function call into an AbiResult tree.

    Tuples keep their declared component names so that structs and unnamed
    tuples can be told apart later; arrays are positional AbiResults.
    Addresses are checksummed. ``params`` picks an overload by argument count.

    Raises:
        ValueError: If the function is not part of the ABI, or its name is ambiguous.
        eth_abi.exceptions.DecodingError: If the data does not match the output types.
    """
    function_abi = find_function_abi(abi_dict, function_name, params)
    return _decode_params(function_abi['abi'].get('outputs', []), function_abi['output'], data)


def parse_error(abi, data: Union[bytes, str]) -> Tuple[str, AbiResult]:
    """
    Resolves revert data against the custom errors declared in ``abi``.

    Returns:
        tuple: The error name and its decoded arguments.

    Raises:
        ValueError: If no declared error matches the selector.
    """
    data = HexBytes(data)
    error_abi = get_contract_error_dict(abi or []).get(bytes(data[:4]))
    if error_abi is None:
        raise ValueError('No custom error matches selector 0x{}'.format(bytes(data[:4]).hex()))
    args = _decode_params(error_abi['abi'].get('inputs', []), error_abi['input'], data[4:])
    return error_abi['name'], args
