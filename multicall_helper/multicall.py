from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from typing import Sequence
from typing import Tuple

from hexbytes import HexBytes
from web3 import AsyncHTTPProvider
from web3 import AsyncWeb3
from web3 import Web3

from multicall_helper.utils.abi import decode_function_result
from multicall_helper.utils.abi import get_contract_abi_dict
from multicall_helper.utils.abi import get_encoded_function_signature
from multicall_helper.utils.constants import MULTICALL3_ABI
from multicall_helper.utils.constants import MULTICALL_ADDRESSES
from multicall_helper.utils.default_logger import default_logger
from multicall_helper.utils.default_logger import enable_debug_logging
from multicall_helper.utils.exceptions import NoAddressFound
from multicall_helper.utils.exceptions import SignerNotConfigured
from multicall_helper.utils.models.call_model import AggregateResult
from multicall_helper.utils.models.call_model import BlockAggregateResult
from multicall_helper.utils.models.call_model import Call
from multicall_helper.utils.models.call_model import Call3
from multicall_helper.utils.models.call_model import Call3Value
from multicall_helper.utils.models.settings_model import MulticallSettings
from multicall_helper.utils.normalizer import normalize
from multicall_helper.utils.revert import decode_revert


logger = default_logger.bind(module='Multicall')


class Multicall(object):
    """
    Batches contract calls through a deployed Multicall3 aggregator.

    Every batching method performs exactly one ``eth_call`` (or, for
    ``send_aggregate3_value``, one transaction) and returns results in the
    order of the input calls.
    """

    def __init__(
        self,
        provider: AsyncWeb3,
        chain_id: Optional[int] = None,
        multicall_address: Optional[str] = None,
        signer=None,
        debug_mode=False,
    ):
        """
        Initializes a Multicall client.

        Args:
            provider (AsyncWeb3): Web3 instance used for ``eth_call``.
            chain_id (int, optional): Chain id used to look up a known aggregator address.
            multicall_address (str, optional): Explicit aggregator address, wins over ``chain_id``.
            signer (optional): Object with an async ``send_transaction(tx)``, only needed
                for ``send_aggregate3_value``.
            debug_mode (bool, optional): Sends DEBUG and TRACE records to stdout. The sink is
                shared by all clients. Defaults to False.

        Raises:
            NoAddressFound: If no aggregator address can be resolved.
        """
        address = multicall_address
        if not address and chain_id is not None:
            address = MULTICALL_ADDRESSES.get(chain_id)
        if not address:
            raise NoAddressFound(
                request={'chain_id': chain_id},
                extra_info=f'No multicall address found for chainId {chain_id}; please pass multicall_address',
            )

        self._provider = provider
        self._target = Web3.to_checksum_address(address)
        self._signer = signer
        self._abi_dict = get_contract_abi_dict(MULTICALL3_ABI)
        self._debug_mode = debug_mode
        self._logger = logger

        if self._debug_mode:
            enable_debug_logging()

    @classmethod
    def from_settings(cls, settings: MulticallSettings, signer=None, debug_mode=False):
        """
        Builds a client with an async HTTP web3 provider from a settings model.
        """
        provider = AsyncWeb3(AsyncHTTPProvider(settings.rpc.url))
        logger.debug('Loaded async web3 provider for node {}', settings.rpc.url)
        return cls(
            provider,
            chain_id=settings.chain_id,
            multicall_address=settings.multicall_address,
            signer=signer,
            debug_mode=debug_mode,
        )

    @property
    def target(self) -> str:
        return self._target

    @property
    def provider(self) -> AsyncWeb3:
        return self._provider

    @property
    def signer(self):
        return self._signer

    async def _rpc_call(self, method: str, params: List[Any], value: Optional[int] = None):
        """
        Encodes ``method`` of the aggregator, simulates it with ``eth_call`` and decodes the outputs.

        Transport errors and reverts of the whole batch are re-raised unchanged.
        """
        tx = {
            'to': self._target,
            'data': get_encoded_function_signature(self._abi_dict, method, params),
        }
        if value is not None:
            tx['value'] = value

        try:
            raw = await self._provider.eth.call(tx)
        except Exception as e:
            self._logger.trace('Error in eth_call for multicall method {}, error {}', method, str(e))
            raise

        return decode_function_result(self._abi_dict, method, raw)

    @staticmethod
    def _build_payload(calls: Sequence[Call], allow_failure=False, with_value=False) -> List[Tuple]:
        payload = []
        for call in calls:
            entry = [call.target]
            if allow_failure:
                entry.append(getattr(call, 'allow_failure', False))
            if with_value:
                entry.append(getattr(call, 'value', 0))
            entry.append(call.encode())
            payload.append(tuple(entry))
        return payload

    async def _execute(
        self,
        method: str,
        calls: Sequence[Call],
        require_success: Optional[bool] = None,
        allow_failure=False,
        with_value=False,
    ):
        payload = self._build_payload(calls, allow_failure=allow_failure, with_value=with_value)
        params = [payload] if require_success is None else [require_success, payload]
        value = sum(getattr(call, 'value', 0) for call in calls) if with_value else None

        self._logger.debug(
            'Executing multicall {} with {} calls, require_success={}, value={}',
            method, len(calls), require_success, value,
        )
        return await self._rpc_call(method, params, value)

    def _decode_result(self, call: Call, success: bool, return_data: bytes) -> Tuple[bool, Any]:
        """
        Turns one aggregator result into ``(success, payload)``.

        Failed calls carry their revert reason. Return data that can't be decoded
        against the call's outputs is reported in-band as a failure.
        """
        if not success:
            return False, 'Revert: ' + decode_revert(None, return_data, call.abi)

        if not call.function_name:
            return True, HexBytes(return_data)

        try:
            decoded = decode_function_result(
                get_contract_abi_dict(call.abi), call.function_name, return_data, call.args,
            )
            # single outputs are unwrapped, multiple outputs stay an ordered list
            value = decoded[0] if len(decoded) == 1 else decoded.to_list()
            return True, normalize(value)
        except Exception as e:
            self._logger.warning(
                'Could not decode result of {} on {}, error {}', call.function_name, call.target, str(e),
            )
            return False, f'Data handling error: {str(e)}'

    def _decode_results(self, calls: Sequence[Call], raw_results) -> List[Tuple[bool, Any]]:
        return [
            self._decode_result(call, raw_result[0], raw_result[1])
            for call, raw_result in zip(calls, raw_results)
        ]

    async def aggregate(self, calls: Sequence[Call]) -> AggregateResult:
        """
        Executes a batch that reverts as a whole if any call fails.

        Return data is not decoded.

        Args:
            calls (list): Calls to batch.

        Returns:
            AggregateResult: Block number and raw return data of every call.
        """
        decoded = await self._execute('aggregate', calls)
        return AggregateResult(
            block_number=decoded[0],
            return_data=[HexBytes(data) for data in decoded[1]],
        )

    async def try_aggregate(self, require_success: bool, calls: Sequence[Call]) -> List[Tuple[bool, Any]]:
        """
        Executes a batch, tolerating failed calls unless ``require_success`` is set.

        Args:
            require_success (bool): If True, any failed call reverts the whole batch.
            calls (list): Calls to batch.

        Returns:
            list: ``(success, value_or_reason)`` for each call, in input order.
        """
        decoded = await self._execute('tryAggregate', calls, require_success=require_success)
        return self._decode_results(calls, decoded[0])

    async def try_block_and_aggregate(self, require_success: bool, calls: Sequence[Call]) -> BlockAggregateResult:
        """
        Same as ``try_aggregate`` but also returns the block number and hash.
        """
        decoded = await self._execute('tryBlockAndAggregate', calls, require_success=require_success)
        return BlockAggregateResult(
            block_number=decoded[0],
            block_hash=Web3.to_hex(decoded[1]),
            return_data=self._decode_results(calls, decoded[2]),
        )

    async def block_and_aggregate(self, calls: Sequence[Call]) -> BlockAggregateResult:
        return await self.try_block_and_aggregate(True, calls)

    async def aggregate3(self, calls: Sequence[Call3]) -> List[Tuple[bool, Any]]:
        """
        Executes a batch where each call decides through ``allow_failure`` whether it may fail.

        Returns:
            list: ``(success, value_or_reason)`` for each call, in input order.
        """
        decoded = await self._execute('aggregate3', calls, allow_failure=True)
        return self._decode_results(calls, decoded[0])

    async def aggregate3_value(self, calls: Sequence[Call3Value]) -> List[Tuple[bool, Any]]:
        """
        Like ``aggregate3``, forwarding ``value`` wei with each call.

        The simulated call carries the sum of all per-call values.
        """
        decoded = await self._execute('aggregate3Value', calls, allow_failure=True, with_value=True)
        return self._decode_results(calls, decoded[0])

    async def send_aggregate3_value(self, calls: Sequence[Call3Value], overrides: Optional[Dict[str, Any]] = None):
        """
        Submits an ``aggregate3Value`` batch as a transaction through the signer.

        Args:
            calls (list): Calls to batch.
            overrides (dict, optional): Transaction fields merged over ``to``, ``data``
                and ``value``. An explicit ``value`` replaces the summed total.

        Returns:
            The pending transaction handle returned by the signer.

        Raises:
            SignerNotConfigured: If the client was built without a signer.
        """
        if self._signer is None:
            raise SignerNotConfigured(
                request='aggregate3Value',
                extra_info='A signer is required to send aggregate3Value transactions',
            )

        payload = self._build_payload(calls, allow_failure=True, with_value=True)
        tx = {
            'to': self._target,
            'data': get_encoded_function_signature(self._abi_dict, 'aggregate3Value', [payload]),
            'value': sum(getattr(call, 'value', 0) for call in calls),
        }
        tx.update(overrides or {})

        self._logger.debug('Sending aggregate3Value transaction with {} calls, value={}', len(calls), tx['value'])
        return await self._signer.send_transaction(tx)

    async def _get(self, method: str, params: Optional[List[Any]] = None):
        decoded = await self._rpc_call(method, params or [])
        return decoded[0]

    async def get_block_number(self) -> int:
        return await self._get('getBlockNumber')

    async def get_block_hash(self, block_number: int) -> str:
        """Returns the hash of ``block_number`` as a 0x-prefixed hex string."""
        return Web3.to_hex(await self._get('getBlockHash', [block_number]))

    async def get_last_block_hash(self) -> str:
        """Returns the hash of the previous block as a 0x-prefixed hex string."""
        return Web3.to_hex(await self._get('getLastBlockHash'))

    async def get_current_block_timestamp(self) -> int:
        return await self._get('getCurrentBlockTimestamp')

    async def get_current_block_gas_limit(self) -> int:
        return await self._get('getCurrentBlockGasLimit')

    async def get_current_block_coinbase(self) -> str:
        return await self._get('getCurrentBlockCoinbase')

    async def get_eth_balance(self, address: str) -> int:
        """Returns the native balance of ``address`` in wei."""
        return await self._get('getEthBalance', [Web3.to_checksum_address(address)])

    async def get_basefee(self) -> int:
        return await self._get('getBasefee')

    async def get_chain_id(self) -> int:
        return await self._get('getChainId')
