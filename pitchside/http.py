"""
HTTP utilities shared by provider clients.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

import requests
from requests import Response
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .exceptions import APIClientError, APINotFoundError, APIRateLimitError


class HTTPClient:
    """
    Thin wrapper around requests.Session with retries and error mapping.

    The provider authenticates with a ``token`` query parameter rather than a
    header, so the token is merged into every request's params.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_token: Optional[str] = None,
        timeout: int = 30,
        max_retries: int = 3,
        backoff_factor: float = 0.5,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.api_token = api_token
        self.session = requests.Session()
        retry = Retry(
            total=max_retries,
            read=max_retries,
            connect=max_retries,
            backoff_factor=backoff_factor,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=("GET",),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        self.session.headers.update({"Accept": "application/json"})

    def get(self, path: str, *, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Perform a GET request and return decoded JSON.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        query: Dict[str, Any] = dict(params or {})
        if self.api_token:
            query["token"] = self.api_token
        try:
            response = self.session.request(
                method="GET",
                url=url,
                params=query or None,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise APIClientError(str(exc)) from exc

        self._raise_for_status(response)
        if not response.content:
            return None
        content_type = response.headers.get("Content-Type", "").lower()
        if "application/json" not in content_type:
            raise APIClientError(
                f"Unexpected content type '{content_type or 'unknown'}' from API response."
            )
        try:
            return response.json()
        except ValueError as exc:
            raise APIClientError("Failed to parse JSON response from API.") from exc

    def _raise_for_status(self, response: Response) -> None:
        """
        Map HTTP errors to custom exceptions, keeping the provider's message.
        """
        if 200 <= response.status_code < 300:
            return
        status = response.status_code
        message = f"API request failed: {status} {response.reason or ''}".rstrip()
        detail = _error_detail(response)
        if detail:
            message = f"{message}. {detail}"
        if status == 404:
            raise APINotFoundError(message, status_code=status)
        if status == 429:
            raise APIRateLimitError(message, status_code=status)
        raise APIClientError(message, status_code=status)


def _error_detail(response: Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return ""
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str):
            return message.strip()
    return ""
