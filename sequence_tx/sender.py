"""
Fee attachment, signing and submission of transaction batches.
"""
import logging
from typing import Any, List, Optional, Sequence, Tuple

from .assembler import TransactionAssembler
from .exceptions import NetworkError, SequenceTxError
from .fees import FeeSelector
from .models import FeeQuote, Transaction
from .sdk import SmartWallet, WaitReceipt

logger = logging.getLogger(__name__)


def maybe_attach_fee_payment(
    wallet: SmartWallet,
    selector: FeeSelector,
    assembler: TransactionAssembler,
    txs: Sequence[Transaction],
) -> Tuple[List[Transaction], Optional[FeeQuote]]:
    """
    Ask the relayer for fee options and prepend a payment if one is required.

    Returns:
        The batch to sign and the fee quote to pass back on submission. When
        the relayer offers no options the batch is returned unchanged.

    Raises:
        NetworkError: If fee options or balances can't be fetched
        AffordabilityError: If no option is affordable
        EncodingError: If the fee payment can't be encoded
    """
    try:
        fee_options, fee_quote = wallet.fee_options(txs)
    except SequenceTxError:
        raise
    except Exception as e:
        raise NetworkError(f"fetch fee options: {e}", cause=e) from e

    if not fee_options:
        logger.debug("Relayer offered no fee options, sending without fee payment")
        return list(txs), fee_quote

    option = selector.select(wallet.address, fee_options)
    updated = assembler.attach_fee(option, txs)

    print(f"Including relayer fee payment of {option.required_amount} {option.token.symbol}")
    return updated, fee_quote


def send_transactions_with_fees(
    wallet: SmartWallet,
    selector: FeeSelector,
    assembler: TransactionAssembler,
    txs: Sequence[Transaction],
) -> Tuple[str, Any, WaitReceipt]:
    """
    Attach the relayer fee, sign the batch and submit it once.

    Returns:
        Meta-transaction id, native transaction (if the SDK reports one) and
        a function waiting for the receipt
    """
    txs_with_fee, fee_quote = maybe_attach_fee_payment(wallet, selector, assembler, txs)

    try:
        signed = wallet.sign_transactions(txs_with_fee)
    except SequenceTxError:
        raise
    except Exception as e:
        raise NetworkError(f"sign transaction: {e}", cause=e) from e

    try:
        if fee_quote is not None:
            return wallet.send_transactions(signed, fee_quote)
        return wallet.send_transactions(signed)
    except SequenceTxError:
        raise
    except Exception as e:
        raise NetworkError(f"send transaction: {e}", cause=e) from e
