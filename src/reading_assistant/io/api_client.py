"""HTTP adapter for the reading-assistant backend."""

import logging
from typing import Any, Callable, Dict, Optional

import requests

from reading_assistant.core import AuthExpiredError, TransportError

logger = logging.getLogger(__name__)


class ApiClient:
    """Thin JSON-over-HTTP client bound to one backend base URL.

    The underlying ``requests.Session`` keeps the backend's session cookie,
    so every call after login is implicitly authenticated.

    Status handling:
    - 401 on an authenticated call raises AuthExpiredError.
    - Any other non-2xx status raises TransportError, unless the caller
      accepts the backend's JSON error body (login/signup style endpoints).
    - Connection errors, timeouts and undecodable bodies raise TransportError.
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        if not base_url:
            raise ValueError("Backend base URL must not be empty")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session_factory = session_factory
        if session is None:
            self._session = self._new_session()
        else:
            self._session = session
            self._session.headers.update({"Content-Type": "application/json"})

    def _new_session(self) -> requests.Session:
        session = self._session_factory()
        session.headers.update({"Content-Type": "application/json"})
        return session

    def url_for(self, path: str) -> str:
        """Join a relative endpoint path (e.g. ``/login/``) onto the base URL."""
        return f"{self.base_url}/{path.lstrip('/')}"

    def get(self, path: str, **kwargs) -> Dict[str, Any]:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, payload: Optional[Dict[str, Any]] = None, **kwargs) -> Dict[str, Any]:
        return self.request("POST", path, payload, **kwargs)

    def put(self, path: str, payload: Optional[Dict[str, Any]] = None, **kwargs) -> Dict[str, Any]:
        return self.request("PUT", path, payload, **kwargs)

    def request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        *,
        auth_required: bool = True,
        accept_error_body: bool = False,
    ) -> Dict[str, Any]:
        """Perform one request and return the decoded JSON object.

        Args:
            method: HTTP method.
            path: Endpoint path relative to the base URL.
            payload: JSON body, or None for no body.
            auth_required: Treat 401 as an expired session.
            accept_error_body: Return a JSON object body even for non-2xx
                statuses so the backend's own message can be shown.

        Raises:
            AuthExpiredError: 401 on an authenticated call.
            TransportError: Network failure, bad status or bad body.
        """
        url = self.url_for(path)
        logger.debug("%s %s", method, url)

        try:
            response = self._session.request(method, url, json=payload, timeout=self.timeout)
        except requests.Timeout as e:
            raise TransportError(f"Request to {path} timed out") from e
        except requests.RequestException as e:
            raise TransportError(f"Could not reach the server: {e}") from e

        status = response.status_code
        if status == 401 and auth_required:
            logger.info("%s %s rejected: session expired", method, path)
            raise AuthExpiredError()

        if not 200 <= status < 300:
            if accept_error_body:
                body = self._decode(response, path, strict=False)
                if body is not None:
                    return body
            logger.warning("%s %s failed with status %s", method, path, status)
            raise TransportError(f"Server returned status {status} for {path}", status_code=status)

        return self._decode(response, path)

    @staticmethod
    def _decode(response: requests.Response, path: str, strict: bool = True) -> Optional[Dict[str, Any]]:
        try:
            body = response.json()
        except ValueError as e:
            if not strict:
                return None
            raise TransportError(f"Invalid JSON in response from {path}", status_code=response.status_code) from e

        if not isinstance(body, dict):
            if not strict:
                return None
            raise TransportError(f"Unexpected response shape from {path}", status_code=response.status_code)
        return body

    def detach(self) -> "ApiClient":
        """Hand the current session over to a new client and start an empty one.

        Requests made through the returned client, and any cookies their
        responses set, never touch the session this client uses afterwards.
        """
        detached = ApiClient(self.base_url, self.timeout, session=self._session, session_factory=self._session_factory)
        self._session = self._new_session()
        return detached

    def close(self) -> None:
        self._session.close()
