"""HTTP plumbing shared by clients of a transmission relay server.

Requests that cannot reach the relay (refused connections, timeouts) are
retried a fixed number of times. Any reply that does arrive is final: a
non-2xx status is turned into an exception quoting the relay's own reply
text, which the renderer shows in its error panel.
"""

import logging
from abc import ABC, abstractmethod
from time import sleep
from typing import Any

import httpx

from transmission_relay.exceptions import APIError, NetworkFailure, NotFoundError

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS = (httpx.ConnectError, httpx.TimeoutException)


class Client(ABC):
    """Base class for relay clients, configured from a plain dict.

    Config keys:
        base_url (required): Relay server root, e.g. http://localhost:8080
        timeout: Seconds before a request is abandoned (default: 30)
        retry_attempts: Tries per request while the relay is unreachable (default: 3)
        retry_delay: Seconds to wait between tries (default: 1)
        headers: Extra headers sent with every request

    The underlying httpx.Client is opened on first use and closed by
    close() or by leaving a ``with`` block.
    """

    def __init__(self, config: dict):
        if "base_url" not in config:
            raise ValueError("config must include 'base_url'")

        self.base_url = str(config["base_url"])
        self.timeout = float(config.get("timeout", 30))
        self.retry_attempts = int(config.get("retry_attempts", 3))
        self.retry_delay = float(config.get("retry_delay", 1))
        self.headers: dict[str, str] = dict(config.get("headers", {}))
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
            )
        return self._client

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        """Return a 2xx response, raise for anything else.

        Raises:
            NotFoundError: The relay has nothing at this path (404)
            APIError: Any other non-2xx status
        """
        if response.is_success:
            return response

        status = response.status_code
        message = f"HTTP error! Status: {status} - {response.text or 'Server Error'}"
        if status == 404:
            raise NotFoundError(message)
        raise APIError(message, status_code=status)

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Send one request, retrying while the relay cannot be reached.

        Args:
            method: HTTP verb
            path: Path relative to base_url
            **kwargs: Passed through to httpx (params, files, ...)

        Raises:
            NetworkFailure: Every attempt failed to reach the relay
            APIError: The relay answered with a non-2xx status
        """
        attempts = self.retry_attempts
        failure: Exception | None = None

        for attempt in range(1, attempts + 1):
            try:
                response = self.client.request(method, path, **kwargs)
            except TRANSIENT_ERRORS as e:
                failure = e
                logger.warning(f"Relay unreachable, {method} {path} ({attempt}/{attempts}): {e}")
                if attempt < attempts:
                    sleep(self.retry_delay)
                continue
            return self._handle_response(response)

        raise NetworkFailure(f"Connection failed after {attempts} attempts") from failure

    def get(self, path: str, **kwargs) -> httpx.Response:
        return self._request("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> httpx.Response:
        return self._request("POST", path, **kwargs)

    @abstractmethod
    def fetch(self, *args, **kwargs) -> Any:
        """Fetch the resource this client exists for."""
        pass
