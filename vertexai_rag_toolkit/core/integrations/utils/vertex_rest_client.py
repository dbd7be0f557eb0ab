"""
Vertex AI REST API client.

Thin transport over requests: attaches the bearer token, serializes JSON
bodies and enforces the client-wide timeout. It never retries and never
interprets status codes; callers decide what a status means.
"""
import json
import logging
from dataclasses import dataclass
from typing import Dict, Any, Optional

import requests

from ....exceptions import DecodingError, RequestConstructionError, TransportError
from ...settings import EXTERNAL_CALL_TIMEOUT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawResponse:
    """Status line and undecoded body of an HTTP response."""
    status_code: int
    reason: str
    body: str

    def json(self) -> Dict[str, Any]:
        """Decode the body as a JSON object."""
        if not self.body:
            return {}
        try:
            data = json.loads(self.body)
        except ValueError as e:
            raise DecodingError(f"Error parsing response: {e}")
        if not isinstance(data, dict):
            raise DecodingError(f"Expected a JSON object, got {type(data).__name__}")
        return data


class VertexRESTClient:
    """
    Vertex AI REST client using a caller-supplied OAuth2 access token.

    Token acquisition and refresh belong to whoever supplies the token.
    """

    def __init__(self, access_token: str, timeout: int = EXTERNAL_CALL_TIMEOUT):
        self._access_token = access_token
        self._timeout = timeout

        # Session for connection pooling
        self._session = requests.Session()

    def _build_headers(self, has_body: bool) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {self._access_token}"}
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    def request(
        self,
        method: str,
        url: str,
        json_body: Dict[str, Any] = None,
        params: Dict[str, str] = None
    ) -> RawResponse:
        """
        Make an authenticated request to the Vertex AI REST API.

        Returns the raw status and body for every HTTP status, raising only
        when the request cannot be built or never completes.
        """
        data = None
        if json_body is not None:
            try:
                data = json.dumps(json_body)
            except (TypeError, ValueError) as e:
                raise RequestConstructionError(f"Error creating request payload: {e}")

        try:
            response = self._session.request(
                method=method,
                url=url,
                params=params,
                data=data,
                headers=self._build_headers(data is not None),
                timeout=self._timeout
            )
        except requests.RequestException as e:
            raise TransportError(f"Error sending {method} {url}: {e}")

        logger.debug(f"{method} {url} -> {response.status_code}")
        return RawResponse(
            status_code=response.status_code,
            reason=response.reason or "",
            body=response.text or ""
        )

    def get(self, url: str, params: Dict[str, str] = None) -> RawResponse:
        return self.request("GET", url, params=params)

    def post(self, url: str, json_body: Optional[Dict[str, Any]] = None) -> RawResponse:
        return self.request("POST", url, json_body=json_body)

    def patch(self, url: str, json_body: Dict[str, Any], params: Dict[str, str] = None) -> RawResponse:
        return self.request("PATCH", url, json_body=json_body, params=params)

    def delete(self, url: str) -> RawResponse:
        return self.request("DELETE", url)

    def close(self):
        """Close the HTTP session."""
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
