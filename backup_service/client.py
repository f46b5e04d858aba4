"""
Backup Service Client

Thin synchronous client for the backupRuns collection of the Cloud SQL Admin
API. Each call authenticates immediately before it is sent, decodes the JSON
body into the backup resource models and maps failures onto the service
exception hierarchy. Nothing is retried here.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from backup_resource.models.entities import BackupOperation, BackupRun
from .auth import BaseAuthenticator
from .service_exceptions import BackupRunNotFoundError, DecodeError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://sqladmin.googleapis.com/v1"

# Characters of an error body kept on TransportError.
_BODY_EXCERPT = 500


class BackupServiceClient:
    """
    Client for listing, fetching and creating Cloud SQL backup runs.

    The authenticator is injected so credentials never pass through global
    state. The client owns its ``requests.Session`` and can be used as a
    context manager to close it.

    Example:
        ```python
        auth = ServiceAccountAuthenticator(private_key)
        with BackupServiceClient(auth) as client:
            runs = client.list_backup_runs("my-project", "orders-db")
            run = client.get_backup_run("my-project", "orders-db", runs[-1].id)
            operation = client.create_backup_run("my-project", "orders-db")
        ```
    """

    def __init__(
        self,
        authenticator: BaseAuthenticator,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60.0,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the client.

        Args:
            authenticator: Source of bearer tokens, consulted once per request
            base_url: API root, without a trailing slash
            timeout: Per-request timeout in seconds
            session: Optional pre-built session (mainly for tests)
        """
        self._authenticator = authenticator
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def __enter__(self) -> "BackupServiceClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self._session.close()

    def _backup_runs_url(self, project: str, instance: str) -> str:
        return f"{self._base_url}/projects/{project}/instances/{instance}/backupRuns"

    def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        not_found_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Send one authenticated request and decode the JSON object it returns.

        Args:
            method: HTTP method
            url: Absolute URL
            params: Query string parameters
            not_found_id: When set, a 404 raises BackupRunNotFoundError for
                          this id instead of TransportError

        Returns:
            Decoded JSON object

        Raises:
            CredentialError: If no token can be obtained
            TransportError: On network failure or a non-success status
            BackupRunNotFoundError: On 404 when ``not_found_id`` is set
            DecodeError: If the body is not a JSON object
        """
        headers = {
            "Authorization": self._authenticator.authorization_header(),
            "Accept": "application/json",
        }

        logger.debug(f"{method} {url}")
        try:
            response = self._session.request(
                method, url, headers=headers, params=params, timeout=self._timeout
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}", url=url) from e

        if response.status_code == 404 and not_found_id is not None:
            raise BackupRunNotFoundError(
                f"Backup run {not_found_id} not found", backup_id=not_found_id
            )

        if not 200 <= response.status_code < 300:
            body = (response.text or "")[:_BODY_EXCERPT]
            raise TransportError(
                f"{method} {url} returned HTTP {response.status_code}: {body}",
                url=url,
                status_code=response.status_code,
                body=body
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(str(e), url=url) from e

        if not isinstance(payload, dict):
            raise DecodeError(
                f"expected a JSON object, got {type(payload).__name__}", url=url
            )
        return payload

    def list_backup_runs(self, project: str, instance: str) -> List[BackupRun]:
        """
        List every backup run of an instance, following pagination.

        Runs are returned in the order the service reports them.
        """
        url = self._backup_runs_url(project, instance)
        runs: List[BackupRun] = []
        page_token: Optional[str] = None

        while True:
            params = {"pageToken": page_token} if page_token else None
            payload = self._request("GET", url, params=params)
            runs.extend(self._decode_run(item, url) for item in payload.get("items") or [])

            page_token = payload.get("nextPageToken")
            if not page_token:
                break

        logger.debug(f"Listed {len(runs)} backup runs for {project}/{instance}")
        return runs

    def get_backup_run(self, project: str, instance: str, backup_id: str) -> BackupRun:
        """Fetch one backup run by id."""
        url = f"{self._backup_runs_url(project, instance)}/{backup_id}"
        payload = self._request("GET", url, not_found_id=backup_id)
        return self._decode_run(payload, url)

    def create_backup_run(self, project: str, instance: str) -> BackupOperation:
        """Request an on-demand backup run and return the operation."""
        url = self._backup_runs_url(project, instance)
        payload = self._request("POST", url)
        try:
            return BackupOperation.model_validate(payload)
        except ValueError as e:
            raise DecodeError(str(e), url=url) from e

    @staticmethod
    def _decode_run(payload: Any, url: str) -> BackupRun:
        if not isinstance(payload, dict):
            raise DecodeError(f"expected a backup run object, got {type(payload).__name__}", url=url)
        try:
            return BackupRun.from_api(payload)
        except ValueError as e:
            raise DecodeError(str(e), url=url) from e
