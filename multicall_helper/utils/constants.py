from enum import IntEnum


class ChainId(IntEnum):
    """Chain ids the helper knows about."""

    MAINNET = 1
    ROPSTEN = 3
    RINKEBY = 4
    GOERLI = 5
    OPTIMISM = 10
    CRONOS = 25
    KOVAN = 42
    BSC = 56
    OKEX_TESTNET = 65
    OKEX = 66
    BSC_TESTNET = 97
    XDAI = 100
    HECO = 128
    MATIC = 137
    FANTOM = 250
    HECO_TESTNET = 256
    CRONOS_TESTNET = 338
    MOONRIVER = 1285
    MOONBEAM_TESTNET = 1287
    FANTOM_TESTNET = 4002
    ARBITRUM = 42161
    AVALANCHE_TESTNET = 43113
    AVALANCHE = 43114
    MATIC_TESTNET = 80001
    XRPLEVM_TESTNET = 1449000
    AURORA = 1313161554
    AURORA_TESTNET = 1313161555
    AURORA_BETANET = 1313161556
    HARMONY = 1666600000
    HARMONY_TESTNET = 1666700000
    ARBITRUM_TESTNET = 79377087078960


# Aggregator deployments, keyed by chain id. Chains missing here need an
# explicit multicall_address.
MULTICALL_ADDRESSES = {
    ChainId.MAINNET: '0x2c7002B316507F228BC6E10855856Ba93114EbB8',
    ChainId.BSC: '0x134f94adA24A7ed01AF204D72e7FcFf97E5538da',
    ChainId.BSC_TESTNET: '0x06084aF049CA61B1FC7E65a95dB09695E4014d5a',
    ChainId.ARBITRUM: '0x2697B961c5504190502533b69177f3912d3D450B',
    ChainId.XRPLEVM_TESTNET: '0x3f012a7C54dF759B145740454f61A2F2457A3028',
}

# Error(string)
ERROR_STRING_SELECTOR = bytes.fromhex('08c379a0')
# Panic(uint256)
PANIC_SELECTOR = bytes.fromhex('4e487b71')

_CALL_COMPONENTS = [
    {'internalType': 'address', 'name': 'target', 'type': 'address'},
    {'internalType': 'bytes', 'name': 'callData', 'type': 'bytes'},
]
_CALL3_COMPONENTS = [
    {'internalType': 'address', 'name': 'target', 'type': 'address'},
    {'internalType': 'bool', 'name': 'allowFailure', 'type': 'bool'},
    {'internalType': 'bytes', 'name': 'callData', 'type': 'bytes'},
]
_CALL3_VALUE_COMPONENTS = [
    {'internalType': 'address', 'name': 'target', 'type': 'address'},
    {'internalType': 'bool', 'name': 'allowFailure', 'type': 'bool'},
    {'internalType': 'uint256', 'name': 'value', 'type': 'uint256'},
    {'internalType': 'bytes', 'name': 'callData', 'type': 'bytes'},
]
_RESULT_COMPONENTS = [
    {'internalType': 'bool', 'name': 'success', 'type': 'bool'},
    {'internalType': 'bytes', 'name': 'returnData', 'type': 'bytes'},
]


def _getter(name, output_type, output_name, inputs=None):
    return {
        'inputs': inputs or [],
        'name': name,
        'outputs': [{'internalType': output_type, 'name': output_name, 'type': output_type}],
        'stateMutability': 'view',
        'type': 'function',
    }


MULTICALL3_ABI = [
    {
        'inputs': [
            {
                'components': _CALL_COMPONENTS,
                'internalType': 'struct Multicall3.Call[]',
                'name': 'calls',
                'type': 'tuple[]',
            },
        ],
        'name': 'aggregate',
        'outputs': [
            {'internalType': 'uint256', 'name': 'blockNumber', 'type': 'uint256'},
            {'internalType': 'bytes[]', 'name': 'returnData', 'type': 'bytes[]'},
        ],
        'stateMutability': 'payable',
        'type': 'function',
    },
    {
        'inputs': [
            {
                'components': _CALL3_COMPONENTS,
                'internalType': 'struct Multicall3.Call3[]',
                'name': 'calls',
                'type': 'tuple[]',
            },
        ],
        'name': 'aggregate3',
        'outputs': [
            {
                'components': _RESULT_COMPONENTS,
                'internalType': 'struct Multicall3.Result[]',
                'name': 'returnData',
                'type': 'tuple[]',
            },
        ],
        'stateMutability': 'payable',
        'type': 'function',
    },
    {
        'inputs': [
            {
                'components': _CALL3_VALUE_COMPONENTS,
                'internalType': 'struct Multicall3.Call3Value[]',
                'name': 'calls',
                'type': 'tuple[]',
            },
        ],
        'name': 'aggregate3Value',
        'outputs': [
            {
                'components': _RESULT_COMPONENTS,
                'internalType': 'struct Multicall3.Result[]',
                'name': 'returnData',
                'type': 'tuple[]',
            },
        ],
        'stateMutability': 'payable',
        'type': 'function',
    },
    {
        'inputs': [
            {
                'components': _CALL_COMPONENTS,
                'internalType': 'struct Multicall3.Call[]',
                'name': 'calls',
                'type': 'tuple[]',
            },
        ],
        'name': 'blockAndAggregate',
        'outputs': [
            {'internalType': 'uint256', 'name': 'blockNumber', 'type': 'uint256'},
            {'internalType': 'bytes32', 'name': 'blockHash', 'type': 'bytes32'},
            {
                'components': _RESULT_COMPONENTS,
                'internalType': 'struct Multicall3.Result[]',
                'name': 'returnData',
                'type': 'tuple[]',
            },
        ],
        'stateMutability': 'payable',
        'type': 'function',
    },
    {
        'inputs': [
            {'internalType': 'bool', 'name': 'requireSuccess', 'type': 'bool'},
            {
                'components': _CALL_COMPONENTS,
                'internalType': 'struct Multicall3.Call[]',
                'name': 'calls',
                'type': 'tuple[]',
            },
        ],
        'name': 'tryAggregate',
        'outputs': [
            {
                'components': _RESULT_COMPONENTS,
                'internalType': 'struct Multicall3.Result[]',
                'name': 'returnData',
                'type': 'tuple[]',
            },
        ],
        'stateMutability': 'payable',
        'type': 'function',
    },
    {
        'inputs': [
            {'internalType': 'bool', 'name': 'requireSuccess', 'type': 'bool'},
            {
                'components': _CALL_COMPONENTS,
                'internalType': 'struct Multicall3.Call[]',
                'name': 'calls',
                'type': 'tuple[]',
            },
        ],
        'name': 'tryBlockAndAggregate',
        'outputs': [
            {'internalType': 'uint256', 'name': 'blockNumber', 'type': 'uint256'},
            {'internalType': 'bytes32', 'name': 'blockHash', 'type': 'bytes32'},
            {
                'components': _RESULT_COMPONENTS,
                'internalType': 'struct Multicall3.Result[]',
                'name': 'returnData',
                'type': 'tuple[]',
            },
        ],
        'stateMutability': 'payable',
        'type': 'function',
    },
    _getter('getBasefee', 'uint256', 'basefee'),
    _getter(
        'getBlockHash', 'bytes32', 'blockHash',
        inputs=[{'internalType': 'uint256', 'name': 'blockNumber', 'type': 'uint256'}],
    ),
    _getter('getBlockNumber', 'uint256', 'blockNumber'),
    _getter('getChainId', 'uint256', 'chainid'),
    _getter('getCurrentBlockCoinbase', 'address', 'coinbase'),
    _getter('getCurrentBlockGasLimit', 'uint256', 'gaslimit'),
    _getter('getCurrentBlockTimestamp', 'uint256', 'timestamp'),
    _getter(
        'getEthBalance', 'uint256', 'balance',
        inputs=[{'internalType': 'address', 'name': 'addr', 'type': 'address'}],
    ),
    _getter('getLastBlockHash', 'bytes32', 'blockHash'),
]
