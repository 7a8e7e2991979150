"""
Directory publication for sequence-tx.

Registering the wallet configuration with the directory service is best
effort: failures are reported as ``DirectoryError`` and the caller continues.
"""
import logging

from ..exceptions import DirectoryError, SequenceTxError
from ..sdk import SmartWallet
from .client import DirectoryClient

__all__ = ['DirectoryClient', 'publish_wallet_config']

logger = logging.getLogger(__name__)


def publish_wallet_config(wallet: SmartWallet, cfg) -> None:
    """
    Publish the wallet's current configuration to the directory.

    Args:
        wallet: Connected smart wallet
        cfg: AppConfig with access key and optional directory URL

    On success the wallet keeps the client for later session updates. On
    failure the client's session is closed.

    Raises:
        DirectoryError: If the wallet configuration could not be published
    """
    try:
        client = DirectoryClient(cfg.resolved_directory_url, cfg.project_access_key)
    except DirectoryError:
        raise
    except Exception as e:
        raise DirectoryError(f"init directory client: {e}", cause=e) from e

    try:
        _publish(wallet, client)
    except DirectoryError:
        client.close()
        raise

    logger.debug(f"Published wallet {wallet.address} to {client.directory_url}")


def _publish(wallet: SmartWallet, client: DirectoryClient) -> None:
    try:
        wallet.set_sessions(client)
    except Exception as e:
        raise DirectoryError(f"set sessions: {e}", cause=e) from e

    try:
        wallet.update_sessions_wallet()
    except DirectoryError:
        raise
    except SequenceTxError as e:
        raise DirectoryError(str(e), cause=e) from e
    except Exception as e:
        raise DirectoryError(f"update sessions wallet: {e}", cause=e) from e
