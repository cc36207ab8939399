"""API wrapper for the GitHub gist REST API.

This module wraps a requests session and provides error translation from
HTTP failures to our typed exception hierarchy. It integrates with the
retry logic for handling rate limits.
"""

import logging
import re
from typing import Any, Dict, Optional

import requests
from requests.exceptions import Timeout, ConnectionError

from .errors import (
    APIAccessError,
    APIUnreachableError,
    GistNotFoundError,
    InvalidCredentialsError,
)
from .retry_logic import retry_on_rate_limit

logger = logging.getLogger(__name__)

DEFAULT_API_URL = 'https://api.github.com'
DEFAULT_TIMEOUT = 30
API_VERSION = '2022-11-28'


class GistAPIWrapper:
    """Thin wrapper around the gist endpoints used for backups.

    This class:
    1. Sends the bearer token and GitHub API headers on every request
    2. Checks each response against the status the endpoint must return
    3. Translates HTTP errors to typed exceptions
    4. Retries 429 rate limits with exponential backoff

    Example:
        >>> api = GistAPIWrapper()
        >>> gist = api.get_gist(token, "aa5a315d61ae9438b18d")
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: int = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        """Initialize the API wrapper.

        Args:
            api_url: Base URL of the GitHub REST API
            timeout: Per-request timeout in seconds
            session: Optional requests session (created lazily when omitted)
        """
        self.api_url = api_url.rstrip('/')
        self.timeout = timeout
        self._session = session

    def _get_session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    @staticmethod
    def _headers(token: str) -> Dict[str, str]:
        return {
            'Authorization': f'Bearer {token}',
            'Accept': 'application/vnd.github+json',
            'X-GitHub-Api-Version': API_VERSION,
            'Content-Type': 'application/json',
        }

    @staticmethod
    def _validate_gist_id(gist_id: str) -> str:
        """Validate that a gist id is a plain hexadecimal string.

        Raises:
            ValueError: If gist_id is empty or contains other characters
        """
        if not gist_id or not str(gist_id).strip():
            raise ValueError("gist_id cannot be empty")

        gist_id = str(gist_id).strip()
        if not re.match(r'^[0-9a-fA-F]+$', gist_id):
            raise ValueError(
                f"Invalid gist_id format: '{gist_id}'. "
                f"Gist ids must contain only hexadecimal characters."
            )
        return gist_id

    @staticmethod
    def _sanitize_credentials(text: str) -> str:
        """Mask bearer tokens and GitHub token patterns in error text.

        Example:
            >>> GistAPIWrapper._sanitize_credentials("Bearer ghp_abc123 rejected")
            'Bearer ***REDACTED*** rejected'
        """
        if not text:
            return text

        sanitized = re.sub(
            r'Authorization:\s*[^\n\r]+',
            'Authorization: ***REDACTED***',
            text,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'Bearer\s+[^\s\n\r]+',
            'Bearer ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'\b(ghp|gho|ghu|ghs|ghr|github_pat)_[A-Za-z0-9_]+\b',
            '***REDACTED***',
            sanitized
        )
        return sanitized

    def _translate_error(self, exception: Exception, operation: str) -> Exception:
        """Translate transport exceptions to typed gist exceptions.

        Args:
            exception: The original exception
            operation: Description of the operation that failed (for logging)

        Returns:
            Exception: Translated exception (one of our typed exceptions)
        """
        if isinstance(exception, (Timeout, ConnectionError)):
            return APIUnreachableError(endpoint=self.api_url)

        safe_error_msg = self._sanitize_credentials(str(exception))
        logger.error(f"API operation failed: {operation} - {safe_error_msg}")
        return APIAccessError(f"Gist API failure during {operation}")

    def _check_response(
        self,
        response: requests.Response,
        expected_status: int,
        operation: str,
        gist_id: Optional[str] = None
    ) -> requests.Response:
        """Raise a typed error unless the response has the expected status."""
        status = response.status_code
        if status == expected_status:
            return response

        if status == 429:
            # Re-raised as HTTPError so retry_on_rate_limit backs off
            raise requests.HTTPError(f"429 Too Many Requests during {operation}", response=response)
        if status in (401, 403):
            raise InvalidCredentialsError(endpoint=self.api_url)
        if status == 404:
            raise GistNotFoundError(gist_id=gist_id or "unknown")

        logger.error(
            f"API operation failed: {operation} - expected {expected_status}, got {status}"
        )
        raise APIAccessError(f"{operation} failed ({status})")

    def _request(
        self,
        method: str,
        url: str,
        token: str,
        expected_status: int,
        operation: str,
        gist_id: Optional[str] = None,
        json_body: Optional[Dict[str, Any]] = None
    ) -> requests.Response:
        def _send():
            try:
                response = self._get_session().request(
                    method,
                    url,
                    headers=self._headers(token),
                    json=json_body,
                    timeout=self.timeout,
                )
            except requests.RequestException as e:
                raise self._translate_error(e, operation) from e
            return self._check_response(response, expected_status, operation, gist_id)

        return retry_on_rate_limit(_send)

    def create_gist(
        self,
        token: str,
        files: Dict[str, str],
        description: str = "",
        public: bool = False
    ) -> Dict[str, Any]:
        """Create a new gist.

        Args:
            token: Bearer token
            files: Mapping of file name to file content
            description: Gist description
            public: Whether the gist is public

        Returns:
            Dict containing the created gist (including 'id')

        Raises:
            InvalidCredentialsError: If the token is rejected
            APIUnreachableError: If the API is unreachable
            APIAccessError: If creation does not answer 201
        """
        payload = {
            'description': description,
            'public': public,
            'files': {name: {'content': content} for name, content in files.items()},
        }
        logger.info("Gist API: POST /gists")
        response = self._request(
            'POST', f"{self.api_url}/gists", token, 201, "Create gist",
            json_body=payload
        )
        return self._json(response, "Create gist")

    def update_gist(self, token: str, gist_id: str, files: Dict[str, str]) -> Dict[str, Any]:
        """Overwrite files of an existing gist.

        Raises:
            InvalidCredentialsError: If the token is rejected
            GistNotFoundError: If the gist does not exist
            APIUnreachableError: If the API is unreachable
            APIAccessError: If the update does not answer 200
        """
        gist_id = self._validate_gist_id(gist_id)
        payload = {
            'files': {name: {'content': content} for name, content in files.items()},
        }
        logger.info(f"Gist API: PATCH /gists/{gist_id}")
        response = self._request(
            'PATCH', f"{self.api_url}/gists/{gist_id}", token, 200, "Update gist",
            gist_id=gist_id, json_body=payload
        )
        return self._json(response, "Update gist")

    def get_gist(self, token: str, gist_id: str) -> Dict[str, Any]:
        """Fetch a gist with its file map.

        Raises:
            InvalidCredentialsError: If the token is rejected
            GistNotFoundError: If the gist does not exist
            APIUnreachableError: If the API is unreachable
            APIAccessError: If the fetch does not answer 200
        """
        gist_id = self._validate_gist_id(gist_id)
        logger.info(f"Gist API: GET /gists/{gist_id}")
        response = self._request(
            'GET', f"{self.api_url}/gists/{gist_id}", token, 200, "Fetch gist",
            gist_id=gist_id
        )
        return self._json(response, "Fetch gist")

    def get_raw_content(self, token: str, raw_url: str) -> Optional[str]:
        """Download a file through its raw URL.

        Used when the gist response truncates file content.

        Returns:
            File text, or None when the download does not answer 200
        """
        logger.info("Gist API: GET raw file content")
        try:
            response = self._request('GET', raw_url, token, 200, "Fetch raw content")
        except (APIAccessError, GistNotFoundError) as e:
            logger.warning(f"Raw content download failed: {e}")
            return None
        return response.text

    @staticmethod
    def _json(response: requests.Response, operation: str) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError as e:
            raise APIAccessError(f"{operation} returned invalid JSON") from e
        if not isinstance(body, dict):
            raise APIAccessError(f"{operation} returned unexpected payload")
        return body
