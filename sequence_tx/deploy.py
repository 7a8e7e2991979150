"""
Ensures the smart wallet exists on-chain before batches are relayed.
"""
import logging
from typing import Callable

from .exceptions import DeploymentError, EncodingError, NetworkError, SequenceTxError
from .models import TxReceipt
from .provider import DEPLOY_GAS_LIMIT
from .receipts import wait_for_receipt
from .sdk import ChainProvider, Deployer, SmartWallet, WaitReceipt

logger = logging.getLogger(__name__)

RECEIPT_STATUS_SUCCESSFUL = 1


def ensure_wallet_deployed(
    wallet: SmartWallet,
    provider: ChainProvider,
    deployer: Deployer,
    wait: Callable[[WaitReceipt], TxReceipt] = wait_for_receipt,
) -> bool:
    """
    Deploy the wallet from the signer EOA if it is not deployed yet.

    Args:
        wallet: Smart wallet to check
        provider: Chain provider used for the chain id
        deployer: EOA signing and sending the deployment transaction
        wait: Receipt waiter

    Returns:
        True if a deployment transaction was sent, False if already deployed

    Raises:
        NetworkError: If a status check, signing or submission fails
        EncodingError: If the deployment payload can't be built
        ReceiptTimeoutError: If the deployment receipt doesn't arrive in time
        DeploymentError: If the deployment reverted or had no effect
    """
    if _is_deployed(wallet, "check deployment"):
        print("Wallet already deployed on-chain.")
        return False

    print("Wallet is not deployed. Deploying from signer EOA...")

    try:
        factory_address, deploy_data = wallet.encode_deployment()
    except SequenceTxError:
        raise
    except Exception as e:
        raise EncodingError(f"encode deployment: {e}", cause=e) from e

    try:
        chain_id = provider.chain_id()
    except Exception as e:
        raise NetworkError(f"fetch chain id: {e}", cause=e) from e

    try:
        raw_tx = deployer.new_transaction(factory_address, deploy_data, DEPLOY_GAS_LIMIT)
    except Exception as e:
        raise NetworkError(f"prepare deployment tx: {e}", cause=e) from e

    try:
        signed_tx = deployer.sign_tx(raw_tx, chain_id)
    except Exception as e:
        raise NetworkError(f"sign deployment tx: {e}", cause=e) from e

    try:
        tx_hash, wait_deploy = deployer.send_transaction(signed_tx)
    except Exception as e:
        raise NetworkError(f"send deployment tx: {e}", cause=e) from e

    print(f"Deployment Sent! Tx Hash: {tx_hash}")
    print("Waiting for deployment confirmation...")

    try:
        receipt = wait(wait_deploy)
    except SequenceTxError as e:
        raise type(e)(f"deployment confirmation: {e}", cause=e) from e

    if receipt.status != RECEIPT_STATUS_SUCCESSFUL:
        raise DeploymentError(f"deployment tx failed with status {receipt.status}")

    if not _is_deployed(wallet, "post-deploy check"):
        raise DeploymentError("wallet still not deployed after deployment tx")

    print(f"Wallet deployed at {wallet.address}")
    logger.info(f"Wallet deployed at {wallet.address} in tx {receipt.tx_hash}")
    return True


def _is_deployed(wallet: SmartWallet, step: str) -> bool:
    try:
        return wallet.is_deployed()
    except Exception as e:
        raise NetworkError(f"{step}: {e}", cause=e) from e
