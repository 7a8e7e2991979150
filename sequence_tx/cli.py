"""
Command-line entry point.

Loads the config, makes sure the smart wallet is deployed, then relays a single
mint transaction (with relayer fee payment when required) and waits for it to
be confirmed.
"""
import argparse
import logging
import sys
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional

from eth_account import Account

from .abi import load_abis
from .assembler import TransactionAssembler
from .backends import load_wallet_factory
from .config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from .deploy import ensure_wallet_deployed
from .directory import publish_wallet_config
from .exceptions import DirectoryError, ErrorKind
from .fees import FeeSelector
from .models import TxReceipt
from .provider import EOADeployer, Web3ChainProvider
from .receipts import wait_for_receipt
from .sdk import ChainProvider, Deployer, WaitReceipt, WalletFactory
from .sender import send_transactions_with_fees
from .version import __version__

logger = logging.getLogger(__name__)


class StepError(Exception):
    """A failed step of the run, carrying the underlying error."""

    def __init__(self, step: str, error: Exception):
        self.step = step
        self.error = error
        super().__init__(f"{step}: {error}")

    @property
    def kind(self) -> Optional[ErrorKind]:
        return getattr(self.error, "kind", None)


@contextmanager
def step(name: str) -> Iterator[None]:
    try:
        yield
    except StepError:
        raise
    except Exception as e:
        raise StepError(name, e) from e


def run(
    cfg: AppConfig,
    wallet_factory: Optional[WalletFactory] = None,
    provider: Optional[ChainProvider] = None,
    deployer: Optional[Deployer] = None,
    wait: Callable[[WaitReceipt], TxReceipt] = wait_for_receipt,
) -> TxReceipt:
    """
    Relay one mint transaction through the configured smart wallet.

    Args:
        cfg: Validated configuration
        wallet_factory: Wallet SDK factory (default: resolved from the config)
        provider: Chain provider (default: web3 provider on the node URL)
        deployer: EOA sending the deployment (default: the signer on the provider's web3)
        wait: Receipt waiter

    Returns:
        Receipt of the relayed transaction

    Raises:
        StepError: If any fatal step fails
    """
    with step("load ABIs"):
        abis = load_abis()

    print("--- Sequence V3 Transaction Example ---")
    print(f"Chain ID: {cfg.chain_id}")

    with step("init signer"):
        signer = Account.from_key(cfg.normalized_private_key)

    with step("init provider"):
        if provider is None:
            provider = Web3ChainProvider(cfg.provider_url)

    with step("init wallet"):
        if wallet_factory is None:
            wallet_factory = load_wallet_factory(cfg.resolved_wallet_factory)
        wallet = wallet_factory(signer, provider, cfg)

    print(f"Signer Address (EOA): {signer.address}")
    print(f"Smart Wallet Address: {wallet.address}")
    print(f"Target Address:       {cfg.target_address}")

    try:
        publish_wallet_config(wallet, cfg)
    except DirectoryError as e:
        logger.debug(f"Directory publication failed: {e!r}")
        print(f"Note: Could not publish config (might already exist). Continuing... ({e})")
    else:
        print("Wallet configuration published to directory.")

    print("Checking wallet deployment status...")
    with step("deploy wallet"):
        if deployer is None:
            deployer = EOADeployer(signer, provider.w3)
        ensure_wallet_deployed(wallet, provider, deployer, wait=wait)

    assembler = TransactionAssembler(abis)
    with step("encode mint calldata"):
        tx = assembler.mint_transaction(cfg.target_address, wallet.address)

    print("Preparing transaction...")
    print("Relaying transaction...")
    with step("relay transaction"):
        selector = FeeSelector(provider, abis)
        meta_txn_id, _, wait_receipt = send_transactions_with_fees(wallet, selector, assembler, [tx])

    print(f"Transaction Sent! OpHash: {meta_txn_id}")
    print("Waiting for confirmation...")

    with step("wait for confirmation"):
        receipt = wait(wait_receipt)

    explorer_base = cfg.explorer_url.rstrip("/")
    print("\n✅ Transaction Confirmed!")
    print(f"Tx Hash:  {receipt.tx_hash}")
    print(f"Explorer: {explorer_base}/tx/{receipt.tx_hash}")
    return receipt


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="sequence-tx",
        description="Relay a mint transaction through a Sequence smart wallet.",
    )
    parser.add_argument(
        "-config", "--config",
        dest="config",
        default=DEFAULT_CONFIG_PATH,
        help="path to the config file",
    )
    parser.add_argument(
        "-debug", "--debug",
        action="store_true",
        help="Enable debug output",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(message)s",
    )

    try:
        with step("load config"):
            cfg = load_config(args.config)
        run(cfg)
    except StepError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
