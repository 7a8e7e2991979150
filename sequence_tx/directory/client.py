"""
Directory service client.

The directory ("key machine") stores wallet configurations so other systems can
resolve a counterfactual wallet address to its signers.
"""
import logging
import os
import urllib.parse
from typing import Any, Dict, Optional

import requests

from ..exceptions import DirectoryError

logger = logging.getLogger(__name__)


class DirectoryClient:
    """
    JSON-over-HTTP client for the directory's Sessions service.

    Calls are single attempts; the caller treats any failure as non-fatal.
    """

    SERVICE_PATH = "/rpc/Sessions"

    def __init__(
        self,
        directory_url: str,
        access_key: str,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the directory client.

        Args:
            directory_url: Base URL of the directory service
            access_key: Project access key sent with every request
            timeout: Request timeout in seconds
            session: Optional pre-configured requests session

        Raises:
            DirectoryError: If directory_url is invalid or uses insecure HTTP
        """
        self._validate_directory_url(directory_url)
        self.directory_url = directory_url.rstrip("/")
        self.access_key = access_key

        # Get timeout from env var or parameter (default: 10 seconds)
        self.timeout = timeout or self._timeout_from_env()

        self.session = session or requests.Session()
        self.session.headers.update({
            "X-Access-Key": access_key,
            "Content-Type": "application/json",
        })
        logger.debug(f"Initialized directory client for {self.directory_url}")

    @staticmethod
    def _timeout_from_env() -> int:
        raw = os.environ.get("SEQUENCE_DIRECTORY_TIMEOUT", "10")
        try:
            return int(raw)
        except ValueError:
            raise DirectoryError(f"invalid SEQUENCE_DIRECTORY_TIMEOUT '{raw}'") from None

    def _validate_directory_url(self, url: str) -> None:
        """
        Validate the directory URL is secure.

        Raises:
            DirectoryError: If URL is invalid or uses insecure HTTP
        """
        parsed = urllib.parse.urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise DirectoryError(f"Invalid directory URL '{url}'")

        # Treat loopback IPv6 address as local as well
        host = parsed.hostname or ""
        is_local = host in ("localhost", "127.0.0.1", "::1")

        if parsed.scheme != "https" and not is_local:
            if os.environ.get("SEQUENCE_INSECURE_DIRECTORY") != "1":
                raise DirectoryError(
                    f"Directory URL must use HTTPS (got: {parsed.scheme}://). "
                    "Set SEQUENCE_INSECURE_DIRECTORY=1 to allow HTTP for development."
                )

    def _call(self, method: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.directory_url}{self.SERVICE_PATH}/{method}"
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Directory request {method} failed: {e}")
            raise DirectoryError(f"{method}: {e}", cause=e) from e

        if response.status_code >= 400:
            raise DirectoryError(f"{method}: {self._error_message(response)}")

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise DirectoryError(f"{method}: invalid JSON response: {e}", cause=e) from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return f"HTTP {response.status_code}: {response.text}"
        if isinstance(body, dict):
            msg = body.get("msg") or body.get("error") or body.get("message")
            if msg:
                return f"HTTP {response.status_code}: {msg}"
        return f"HTTP {response.status_code}: {body}"

    def save_config(self, version: int, config: Dict[str, Any]) -> None:
        """Store a wallet configuration keyed by its image hash."""
        self._call("SaveConfig", {"version": version, "config": config})

    def save_wallet(self, version: int, deploy_config: Dict[str, Any]) -> None:
        """Store the configuration a wallet address was derived from."""
        self._call("SaveWallet", {"version": version, "deployConfig": deploy_config})

    def close(self) -> None:
        self.session.close()
