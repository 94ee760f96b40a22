"""
Pytest configuration and shared fixtures for the Multicall Helper test suite.
This module provides common test fixtures, mock objects, and ABI payload
builders used across the test suite.
"""
from typing import Any, Dict, List
from unittest.mock import AsyncMock, Mock

import eth_abi
import pytest
from eth_utils import keccak
from web3 import AsyncWeb3

from multicall_helper.multicall import Multicall
from multicall_helper.utils.constants import ChainId


DUMMY_ADDR = "0x1111111111111111111111111111111111111111"
OTHER_ADDR = "0x2222222222222222222222222222222222222222"
# has letters, so checksum casing is observable
MIXED_CASE_ADDR = "0x95222290DD7278Aa3Ddd389Cc1E1d165CC4BAfe5"
TEST_CHAIN_ID = ChainId.XRPLEVM_TESTNET

POSITION_COMPONENTS = [
    {"internalType": "address", "name": "owner", "type": "address"},
    {"internalType": "uint256", "name": "amount", "type": "uint256"},
]

EXTENDED_ERC20_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [],
        "name": "name",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "symbol",
        "outputs": [{"internalType": "string", "name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "totalSupply",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "address", "name": "account", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "address", "name": "spender", "type": "address"},
            {"internalType": "uint256", "name": "amount", "type": "uint256"},
        ],
        "name": "approve",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "getReserves",
        "outputs": [
            {"internalType": "uint112", "name": "reserve0", "type": "uint112"},
            {"internalType": "uint112", "name": "reserve1", "type": "uint112"},
            {"internalType": "uint32", "name": "blockTimestampLast", "type": "uint32"},
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "address", "name": "account", "type": "address"}],
        "name": "getPosition",
        "outputs": [
            {
                "components": POSITION_COMPONENTS,
                "internalType": "struct Token.Position",
                "name": "",
                "type": "tuple",
            }
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "getPositions",
        "outputs": [
            {
                "components": POSITION_COMPONENTS,
                "internalType": "struct Token.Position[]",
                "name": "",
                "type": "tuple[]",
            }
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "getPair",
        "outputs": [
            {
                "components": [
                    {"internalType": "address", "name": "", "type": "address"},
                    {"internalType": "uint256", "name": "", "type": "uint256"},
                ],
                "internalType": "tuple",
                "name": "",
                "type": "tuple",
            }
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "getInfo",
        "outputs": [
            {"internalType": "uint256", "name": "id", "type": "uint256"},
            {
                "components": POSITION_COMPONENTS,
                "internalType": "struct Token.Position",
                "name": "position",
                "type": "tuple",
            },
        ],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "uint256", "name": "available", "type": "uint256"},
            {"internalType": "uint256", "name": "required", "type": "uint256"},
        ],
        "name": "InsufficientBalance",
        "type": "error",
    },
]


OVERLOADED_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [{"internalType": "address", "name": "account", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [
            {"internalType": "address", "name": "account", "type": "address"},
            {"internalType": "uint256", "name": "id", "type": "uint256"},
        ],
        "name": "balanceOf",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "uint256", "name": "amount", "type": "uint256"}],
        "name": "deposit",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "inputs": [{"internalType": "address", "name": "receiver", "type": "address"}],
        "name": "deposit",
        "outputs": [],
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "owner",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    },
]

def encode_error_string(message: str) -> bytes:
    """Encodes a standard Error(string) revert payload."""
    return bytes.fromhex("08c379a0") + eth_abi.encode(["string"], [message])


def encode_panic(code: int) -> bytes:
    """Encodes a Solidity Panic(uint256) revert payload."""
    return bytes.fromhex("4e487b71") + eth_abi.encode(["uint256"], [code])


def encode_custom_error(signature: str, types: List[str], values: List[Any]) -> bytes:
    """Encodes a custom error revert payload."""
    return keccak(text=signature)[:4] + eth_abi.encode(types, values)


def encode_results(results) -> bytes:
    """Encodes an aggregator Result[] output: [(success, returnData), ...]."""
    return eth_abi.encode(["(bool,bytes)[]"], [results])


def decode_sent_payload(tx: Dict[str, Any], types: List[str]):
    """Splits call data sent to the aggregator into its selector and decoded arguments."""
    data = bytes(tx["data"])
    return data[:4], eth_abi.decode(types, data[4:])


@pytest.fixture
def erc20_abi() -> List[Dict[str, Any]]:
    """Fixture providing an ERC20 ABI extended with struct, tuple and error entries."""
    return EXTENDED_ERC20_ABI


@pytest.fixture
def overloaded_abi() -> List[Dict[str, Any]]:
    """Fixture providing an ABI with overloaded functions, as in ERC721 or ERC1155 tokens."""
    return OVERLOADED_ABI


@pytest.fixture
def mock_web3() -> Mock:
    """Fixture providing a mock AsyncWeb3 instance with an awaitable eth.call."""
    mock = Mock(spec=AsyncWeb3)
    mock.eth = Mock()
    mock.eth.call = AsyncMock()
    mock.eth.send_transaction = AsyncMock()
    mock.eth.wait_for_transaction_receipt = AsyncMock()
    return mock


@pytest.fixture
def mock_signer() -> Mock:
    """Fixture providing a signer whose send_transaction returns a sentinel handle."""
    signer = Mock()
    signer.send_transaction = AsyncMock(return_value=Mock(name="pending_tx"))
    return signer


@pytest.fixture
def multicall_instance(mock_web3) -> Multicall:
    """Fixture providing a Multicall client resolved from a known chain id."""
    return Multicall(mock_web3, chain_id=TEST_CHAIN_ID)


@pytest.fixture
def multicall_with_signer(mock_web3, mock_signer) -> Multicall:
    """Fixture providing a Multicall client able to send transactions."""
    return Multicall(mock_web3, chain_id=TEST_CHAIN_ID, signer=mock_signer)


@pytest.fixture
def mock_contract(erc20_abi) -> Mock:
    """Fixture providing a contract-like object with address and abi."""
    mock = Mock()
    mock.address = DUMMY_ADDR
    mock.abi = erc20_abi
    return mock
