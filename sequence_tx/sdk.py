"""
Interfaces of the external collaborators.

The smart-wallet SDK (wallet construction, signature schemes, relayer protocol)
and the chain provider are supplied from outside this package. These protocols
describe the calls the orchestration relies on.
"""
from typing import Any, Callable, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from eth_account.signers.local import LocalAccount

from .models import FeeOption, FeeQuote, Transaction, TxReceipt

# Blocks until the receipt is available or the given number of seconds elapses
WaitReceipt = Callable[[float], TxReceipt]


class ChainProvider(Protocol):
    """Read-only chain access"""

    def balance_at(self, address: str) -> int:
        """Native balance of ``address`` at the latest block, in wei."""
        ...

    def call_contract(self, to: str, data: bytes) -> bytes:
        """Execute a read-only call and return the raw result."""
        ...

    def chain_id(self) -> int:
        ...


class Deployer(Protocol):
    """Externally owned account able to send plain transactions"""
    address: str

    def new_transaction(self, to: str, data: bytes, gas_limit: int) -> dict:
        """Fill nonce and fee fields for a transaction request."""
        ...

    def sign_tx(self, tx: dict, chain_id: int) -> Any:
        ...

    def send_transaction(self, signed_tx: Any) -> Tuple[str, WaitReceipt]:
        """Broadcast a signed transaction, returning its hash and a wait handle."""
        ...


@runtime_checkable
class Sessions(Protocol):
    """Directory service a wallet publishes its configuration to"""

    def save_config(self, version: int, config: dict) -> None:
        ...

    def save_wallet(self, version: int, deploy_config: dict) -> None:
        ...


class SmartWallet(Protocol):
    """Contract wallet driven by a single signing key"""
    address: str

    def is_deployed(self) -> bool:
        ...

    def encode_deployment(self) -> Tuple[str, bytes]:
        """Return the factory address and calldata that deploy this wallet."""
        ...

    def fee_options(self, txs: Sequence[Transaction]) -> Tuple[List[FeeOption], Optional[FeeQuote]]:
        ...

    def sign_transactions(self, txs: Sequence[Transaction]) -> Any:
        ...

    def send_transactions(
        self, signed: Any, quote: Optional[FeeQuote] = None
    ) -> Tuple[str, Any, WaitReceipt]:
        """Submit signed transactions through the relayer.

        Returns the meta-transaction id, the native transaction (if known)
        and a handle that waits for the receipt.
        """
        ...

    def set_sessions(self, sessions: Sessions) -> None:
        ...

    def update_sessions_wallet(self) -> None:
        ...


class WalletFactory(Protocol):
    """Builds a connected smart wallet for the given signer and config"""

    def __call__(self, signer: LocalAccount, provider: ChainProvider, cfg: Any) -> SmartWallet:
        ...
