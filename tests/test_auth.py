"""
Tests for the authenticators.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
from google.auth.exceptions import DefaultCredentialsError, RefreshError

from backup_service import (
    AuthenticationError,
    DefaultCredentialsAuthenticator,
    ServiceAccountAuthenticator,
    parse_private_key
)
from backup_service.auth import CLOUD_PLATFORM_SCOPE
from resource_exceptions import CredentialError

KEY = {
    "type": "service_account",
    "project_id": "my-project",
    "client_email": "deployer@my-project.iam.gserviceaccount.com",
}


def fake_credentials(tokens, valid=False):
    credentials = MagicMock()
    credentials.valid = valid
    token_iter = iter(tokens)

    def refresh(request):
        credentials.token = next(token_iter)

    credentials.refresh.side_effect = refresh
    return credentials


class TestParsePrivateKey:
    """Tests for parse_private_key."""

    def test_json_string(self):
        assert parse_private_key(json.dumps(KEY)) == KEY

    def test_mapping(self):
        assert parse_private_key(KEY) is KEY

    @pytest.mark.parametrize("key", ["", "   ", "not json", "[1, 2]"])
    def test_invalid(self, key):
        with pytest.raises(CredentialError):
            parse_private_key(key)


class TestServiceAccountAuthenticator:
    """Tests for ServiceAccountAuthenticator."""

    @patch("backup_service.auth.service_account.Credentials.from_service_account_info")
    def test_new_token_per_call(self, from_info):
        from_info.side_effect = [fake_credentials(["t1"]), fake_credentials(["t2"])]
        auth = ServiceAccountAuthenticator(json.dumps(KEY))

        assert auth.authorization_header() == "Bearer t1"
        assert auth.authorization_header() == "Bearer t2"
        assert from_info.call_count == 2
        from_info.assert_called_with(KEY, scopes=[CLOUD_PLATFORM_SCOPE])

    @patch("backup_service.auth.service_account.Credentials.from_service_account_info")
    def test_reuse_tokens_refreshes_only_when_invalid(self, from_info):
        credentials = fake_credentials(["t1", "t2"])
        from_info.return_value = credentials
        auth = ServiceAccountAuthenticator(KEY, reuse_tokens=True)

        assert auth.get_token() == "t1"
        credentials.valid = True
        assert auth.get_token() == "t1"
        credentials.valid = False
        assert auth.get_token() == "t2"
        assert from_info.call_count == 1
        assert credentials.refresh.call_count == 2

    @patch("backup_service.auth.service_account.Credentials.from_service_account_info")
    def test_refresh_failure(self, from_info):
        credentials = MagicMock()
        credentials.refresh.side_effect = RefreshError("invalid_grant")
        from_info.return_value = credentials
        auth = ServiceAccountAuthenticator(KEY)

        with pytest.raises(AuthenticationError):
            auth.get_token()

    @patch("backup_service.auth.service_account.Credentials.from_service_account_info")
    def test_malformed_key(self, from_info):
        from_info.side_effect = ValueError("missing fields private_key")
        auth = ServiceAccountAuthenticator(KEY)

        with pytest.raises(CredentialError):
            auth.get_token()

    def test_empty_key_fails_fast(self):
        with pytest.raises(CredentialError):
            ServiceAccountAuthenticator("")

    def test_service_account_email(self):
        assert ServiceAccountAuthenticator(KEY).service_account_email == KEY["client_email"]


class TestDefaultCredentialsAuthenticator:
    """Tests for DefaultCredentialsAuthenticator."""

    @patch("backup_service.auth.google.auth.default")
    def test_uses_application_default_credentials(self, default):
        default.return_value = (fake_credentials(["adc"]), "my-project")
        auth = DefaultCredentialsAuthenticator()

        assert auth.authorization_header() == "Bearer adc"
        default.assert_called_once_with(scopes=[CLOUD_PLATFORM_SCOPE])

    @patch("backup_service.auth.google.auth.default")
    def test_missing_credentials(self, default):
        default.side_effect = DefaultCredentialsError("no credentials")

        with pytest.raises(CredentialError):
            DefaultCredentialsAuthenticator().get_token()
