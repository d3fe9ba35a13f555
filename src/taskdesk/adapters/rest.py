"""Shared HTTP plumbing for the REST adapters."""

import logging

import requests

from taskdesk.errors import ApiError

logger = logging.getLogger(__name__)


def server_message(resp: requests.Response) -> str | None:
    """Pull the human-readable `message` out of an error response, if any."""
    try:
        data = resp.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    message = data.get("message")
    if isinstance(message, list):
        return "; ".join(str(m) for m in message) or None
    return message or None


class RestClient:
    """
    Thin wrapper around requests.Session for one API base URL.

    Raises ApiError for non-2xx responses and transport failures. No retries.
    """

    def __init__(self, base_url: str, timeout: float = 10.0, session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        return {}

    def _request(self, method: str, endpoint: str, json: dict | None = None) -> requests.Response:
        """Make an API request and return the 2xx response."""
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"{method} {url}")
        try:
            resp = self._session.request(
                method,
                url,
                json=json,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise ApiError() from e

        if not resp.ok:
            logger.warning(f"{method} {url} returned {resp.status_code}")
            raise ApiError(server_message(resp), status=resp.status_code)
        return resp

    def _json(self, method: str, endpoint: str, json: dict | None = None) -> dict | list:
        """Make an API request and decode the JSON body."""
        resp = self._request(method, endpoint, json=json)
        try:
            return resp.json()
        except ValueError as e:
            logger.warning(f"{method} {endpoint} returned a non-JSON body")
            raise ApiError(status=resp.status_code) from e
