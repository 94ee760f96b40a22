"""
Multicall Helper Test Suite

A test suite for the Multicall Helper library

Test Structure:
- unit/: Unit tests for individual components, with a mocked web3 transport
- integration/: Integration tests against a real RPC endpoint (set TEST_RPC_URL)

Usage:
    # Run all tests
    pytest

    # Run with coverage
    pytest --cov=multicall_helper --cov-report=html

    # Run specific test file
    pytest tests/unit/test_multicall_initialization.py
"""

__version__ = "1.0.0"
