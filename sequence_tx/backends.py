"""
Resolution of the smart-wallet SDK backend.

The wallet SDK lives outside this package. It is named by a
``package.module:callable`` reference in the config (``walletFactory``) or the
``SEQUENCE_WALLET_FACTORY`` environment variable.
"""
import importlib
import logging
from typing import Optional

from .exceptions import ConfigError
from .sdk import WalletFactory

logger = logging.getLogger(__name__)


def load_wallet_factory(reference: Optional[str]) -> WalletFactory:
    """
    Import the wallet factory named by ``reference``.

    Args:
        reference: ``package.module:callable`` string

    Returns:
        The factory callable

    Raises:
        ConfigError: If the reference is missing, malformed or can't be imported
    """
    if not reference:
        raise ConfigError(
            "no smart-wallet backend configured: set 'walletFactory' in the config "
            "or SEQUENCE_WALLET_FACTORY to a 'package.module:callable' reference"
        )

    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise ConfigError(f"invalid wallet factory reference '{reference}', expected 'package.module:callable'")

    try:
        target = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"import wallet backend '{module_name}': {e}", cause=e) from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            raise ConfigError(f"wallet backend '{module_name}' has no attribute '{attr_path}'", cause=e) from e

    if not callable(target):
        raise ConfigError(f"wallet factory '{reference}' is not callable")

    logger.debug(f"Using wallet backend {reference}")
    return target
