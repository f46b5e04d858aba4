"""
Authenticators

Turn a service account private key into the ``Authorization`` header value
expected by the Cloud SQL Admin API.

The key is handed to the authenticator in memory. Writing it to a well-known
file and pointing ``GOOGLE_APPLICATION_CREDENTIALS`` at it is still possible
through ``DefaultCredentialsAuthenticator`` together with
``backup_resource.utils.credentials.write_credential_file``.
"""

import json
import logging
from typing import Any, Dict, Optional, Sequence, Union

import google.auth
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from resource_exceptions import CredentialError
from .service_exceptions import AuthenticationError

logger = logging.getLogger(__name__)

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"
DEFAULT_SCOPES = (CLOUD_PLATFORM_SCOPE,)


def parse_private_key(private_key: Union[str, Dict[str, Any]]) -> Dict[str, Any]:
    """
    Parse a service account key into its JSON object form.

    Args:
        private_key: Key file contents as a JSON string, or an already
                     decoded mapping

    Returns:
        Service account info dictionary

    Raises:
        CredentialError: If the key is empty or not a JSON object
    """
    if isinstance(private_key, dict):
        info = private_key
    else:
        if not private_key or not private_key.strip():
            raise CredentialError("private_key is empty")
        try:
            info = json.loads(private_key)
        except ValueError as e:
            raise CredentialError(f"private_key is not valid JSON: {e}") from e

    if not isinstance(info, dict):
        raise CredentialError("private_key must decode to a JSON object")
    return info


class BaseAuthenticator:
    """
    Produces bearer tokens for the backup service client.

    By default a new token is derived on every call. Short-lived verb
    invocations pay one token exchange per RPC and never hold a stale
    token. With ``reuse_tokens`` enabled the credentials are refreshed only
    when their token is missing or expired.
    """

    def __init__(self, scopes: Sequence[str] = DEFAULT_SCOPES, reuse_tokens: bool = False):
        self._scopes = list(scopes)
        self._reuse_tokens = reuse_tokens
        self._credentials = None

    def _load_credentials(self):
        raise NotImplementedError

    def get_token(self) -> str:
        """
        Obtain an access token.

        Returns:
            Raw access token string

        Raises:
            CredentialError: If the credentials cannot be built
            AuthenticationError: If the token exchange fails
        """
        if not self._reuse_tokens or self._credentials is None:
            self._credentials = self._load_credentials()

        credentials = self._credentials
        if self._reuse_tokens and credentials.valid:
            return credentials.token

        try:
            credentials.refresh(Request())
        except GoogleAuthError as e:
            raise AuthenticationError(f"Failed to obtain access token: {e}") from e

        logger.debug("Obtained new access token")
        return credentials.token

    def authorization_header(self) -> str:
        """Return the ``Authorization`` header value for one request."""
        return f"Bearer {self.get_token()}"


class ServiceAccountAuthenticator(BaseAuthenticator):
    """
    Authenticator built from a service account key held in memory.

    Example:
        ```python
        auth = ServiceAccountAuthenticator(source.private_key)
        headers = {"Authorization": auth.authorization_header()}
        ```
    """

    def __init__(
        self,
        private_key: Union[str, Dict[str, Any]],
        scopes: Sequence[str] = DEFAULT_SCOPES,
        reuse_tokens: bool = False
    ):
        super().__init__(scopes, reuse_tokens)
        self._info = parse_private_key(private_key)
        self.service_account_email: Optional[str] = self._info.get("client_email")

    def _load_credentials(self):
        try:
            return service_account.Credentials.from_service_account_info(
                self._info, scopes=self._scopes
            )
        except (ValueError, KeyError) as e:
            raise CredentialError(f"Invalid service account key: {e}") from e


class DefaultCredentialsAuthenticator(BaseAuthenticator):
    """Authenticator backed by Application Default Credentials."""

    def _load_credentials(self):
        try:
            credentials, _ = google.auth.default(scopes=self._scopes)
        except GoogleAuthError as e:
            raise CredentialError(f"Application Default Credentials unavailable: {e}") from e
        return credentials
