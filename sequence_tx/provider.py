"""
web3.py-backed chain provider and EOA deployer.
"""
import logging
import os
from typing import Any, Optional, Tuple

from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.exceptions import TimeExhausted

from .exceptions import ReceiptTimeoutError
from .models import TxReceipt
from .sdk import WaitReceipt

logger = logging.getLogger(__name__)

DEPLOY_GAS_LIMIT = 3_000_000


class Web3ChainProvider:
    """
    Read-only chain access over JSON-RPC.

    Errors from the node are raised unchanged; callers decide how to tag them.
    """

    def __init__(self, node_url: str, timeout: Optional[int] = None, w3: Optional[Web3] = None):
        """
        Args:
            node_url: JSON-RPC endpoint, access key already appended
            timeout: HTTP timeout in seconds (default: SEQUENCE_RPC_TIMEOUT or 30)
            w3: Pre-built Web3 instance to use instead of an HTTP provider
        """
        self.node_url = node_url
        self.timeout = timeout or int(os.environ.get("SEQUENCE_RPC_TIMEOUT", "30"))
        self.w3 = w3 or Web3(Web3.HTTPProvider(node_url, request_kwargs={"timeout": self.timeout}))

    def balance_at(self, address: str) -> int:
        return self.w3.eth.get_balance(Web3.to_checksum_address(address))

    def call_contract(self, to: str, data: bytes) -> bytes:
        result = self.w3.eth.call({
            "to": Web3.to_checksum_address(to),
            "data": Web3.to_hex(data),
        })
        return bytes(result)

    def chain_id(self) -> int:
        return self.w3.eth.chain_id


class EOADeployer:
    """Sends plain transactions signed directly by the wallet's signing key"""

    def __init__(self, account: LocalAccount, w3: Web3, poll_interval: float = 1.0):
        self.account = account
        self.w3 = w3
        self.poll_interval = poll_interval

    @property
    def address(self) -> str:
        return self.account.address

    def new_transaction(self, to: str, data: bytes, gas_limit: int = DEPLOY_GAS_LIMIT) -> dict:
        """
        Build a transaction request with nonce and gas price filled in.

        Args:
            to: Destination address
            data: Call data
            gas_limit: Gas limit to use

        Returns:
            Unsigned transaction dictionary
        """
        nonce = self.w3.eth.get_transaction_count(self.account.address, "pending")
        tx = {
            "to": Web3.to_checksum_address(to),
            "data": Web3.to_hex(data),
            "value": 0,
            "gas": gas_limit,
            "nonce": nonce,
            "gasPrice": self.w3.eth.gas_price,
        }
        logger.debug(f"Prepared transaction to {tx['to']} with nonce {nonce}")
        return tx

    def sign_tx(self, tx: dict, chain_id: int) -> Any:
        return self.account.sign_transaction(dict(tx, chainId=chain_id))

    def send_transaction(self, signed_tx: Any) -> Tuple[str, WaitReceipt]:
        """
        Broadcast a signed transaction.

        Returns:
            The transaction hash and a function waiting for its receipt
        """
        tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
        tx_hash_hex = Web3.to_hex(tx_hash)
        logger.info(f"Transaction sent: {tx_hash_hex}")

        def wait(timeout: float) -> TxReceipt:
            try:
                receipt = self.w3.eth.wait_for_transaction_receipt(
                    tx_hash, timeout=timeout, poll_latency=self.poll_interval
                )
            except TimeExhausted as e:
                raise ReceiptTimeoutError(f"receipt for {tx_hash_hex} not found after {timeout}s", cause=e) from e
            return TxReceipt.from_web3(receipt)

        return tx_hash_hex, wait
