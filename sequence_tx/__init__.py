"""
sequence-tx - relay a transaction batch through a smart-contract wallet.
"""
from .abi import ContractAbi, ContractAbis, load_abis
from .assembler import TransactionAssembler
from .config import AppConfig, load_config
from .deploy import ensure_wallet_deployed
from .exceptions import (
    AffordabilityError,
    ConfigError,
    DeploymentError,
    DirectoryError,
    EncodingError,
    ErrorKind,
    NetworkError,
    ReceiptTimeoutError,
    SequenceTxError,
    ValidationFailedError,
)
from .fees import FeeSelector
from .models import FeeOption, FeeToken, FeeTokenType, Transaction, TxReceipt
from .receipts import wait_for_receipt
from .sender import send_transactions_with_fees
from .version import __version__

__all__ = [
    "AppConfig",
    "load_config",
    "ContractAbi",
    "ContractAbis",
    "load_abis",
    "TransactionAssembler",
    "FeeSelector",
    "ensure_wallet_deployed",
    "wait_for_receipt",
    "send_transactions_with_fees",
    "Transaction",
    "FeeOption",
    "FeeToken",
    "FeeTokenType",
    "TxReceipt",
    "ErrorKind",
    "SequenceTxError",
    "ConfigError",
    "ValidationFailedError",
    "NetworkError",
    "EncodingError",
    "AffordabilityError",
    "ReceiptTimeoutError",
    "DeploymentError",
    "DirectoryError",
    "__version__",
]
