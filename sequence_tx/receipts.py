"""
Deadline-bounded waiting for transaction receipts.
"""
import logging
import queue
import threading
from typing import Optional, Tuple

from .exceptions import NetworkError, ReceiptTimeoutError, SequenceTxError
from .models import TxReceipt
from .sdk import WaitReceipt

logger = logging.getLogger(__name__)

WAIT_TIMEOUT = 5 * 60  # seconds


def wait_for_receipt(wait_receipt: WaitReceipt, timeout: float = WAIT_TIMEOUT) -> TxReceipt:
    """
    Run a blocking receipt wait in a worker thread and race it against a deadline.

    The wait has no cancellation hook. When the deadline wins, the worker is
    abandoned; it is a daemon thread and is handed the same timeout, so it
    neither blocks interpreter exit nor runs unbounded.

    Args:
        wait_receipt: Blocking function returning the receipt
        timeout: Seconds to wait before giving up

    Returns:
        The receipt produced by ``wait_receipt``

    Raises:
        ReceiptTimeoutError: If the deadline elapses first
        SequenceTxError: Whatever tagged error the wait raised
        NetworkError: If the wait raised any other exception
    """
    results: "queue.Queue[Tuple[Optional[TxReceipt], Optional[Exception]]]" = queue.Queue(maxsize=1)

    def _run() -> None:
        try:
            results.put((wait_receipt(timeout), None))
        except Exception as e:
            results.put((None, e))

    worker = threading.Thread(target=_run, name="receipt-wait", daemon=True)
    worker.start()

    try:
        receipt, error = results.get(timeout=timeout)
    except queue.Empty:
        logger.debug(f"Abandoning receipt wait after {timeout}s")
        raise ReceiptTimeoutError(f"timed out after {timeout}s waiting for receipt") from None

    if error is not None:
        if isinstance(error, SequenceTxError):
            raise error
        raise NetworkError(f"wait for receipt: {error}", cause=error) from error
    return receipt
