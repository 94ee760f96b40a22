from typing import Any
from typing import Dict
from typing import Optional

from web3 import AsyncWeb3

from multicall_helper.utils.default_logger import default_logger


logger = default_logger.bind(module='Signer')


class PendingTransaction(object):
    """Handle to a submitted, not yet mined, transaction."""

    def __init__(self, web3: AsyncWeb3, tx_hash):
        self.web3 = web3
        self.hash = tx_hash

    async def wait(self, timeout: float = 120, poll_latency: float = 0.1):
        """
        Waits until the transaction is mined.

        Returns:
            dict: The transaction receipt.
        """
        return await self.web3.eth.wait_for_transaction_receipt(
            self.hash, timeout=timeout, poll_latency=poll_latency,
        )

    def __repr__(self):
        return f'PendingTransaction(hash={self.hash!r})'


class Web3Signer(object):
    """
    Submits transactions through a web3 instance that can sign for ``from_address``.

    Signing is left to the web3 instance: either the node manages the account,
    or a signing middleware is installed on it. Gas and nonce are filled in by
    web3 as well.
    """

    def __init__(self, web3: AsyncWeb3, from_address: Optional[str] = None):
        self._web3 = web3
        self._from_address = AsyncWeb3.to_checksum_address(from_address) if from_address else None

    async def send_transaction(self, tx: Dict[str, Any]) -> PendingTransaction:
        tx = dict(tx)
        if self._from_address is not None:
            tx.setdefault('from', self._from_address)
        tx_hash = await self._web3.eth.send_transaction(tx)
        logger.debug('Submitted transaction {} to {}', tx_hash, tx.get('to'))
        return PendingTransaction(self._web3, tx_hash)
