"""
Credential file side channel.

Writes the service account key to a fixed path and exports
``GOOGLE_APPLICATION_CREDENTIALS`` so Application Default Credentials pick it
up. Only used when ``credentials.write_credential_file`` is enabled; the
default is to hand the key to ``ServiceAccountAuthenticator`` in memory.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Union

from resource_exceptions import CredentialError

logger = logging.getLogger(__name__)

CREDENTIALS_ENV = "GOOGLE_APPLICATION_CREDENTIALS"


def write_credential_file(private_key: Union[str, Dict[str, Any]], path: Union[str, Path]) -> Path:
    """
    Write ``private_key`` to ``path`` and point ``GOOGLE_APPLICATION_CREDENTIALS`` at it.

    Raises:
        CredentialError: If the key is empty or the file cannot be written
    """
    if isinstance(private_key, dict):
        contents = json.dumps(private_key)
    else:
        contents = private_key
    if not contents:
        raise CredentialError("private_key is empty")

    path = Path(path)
    try:
        # Owner-only from creation on.
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(contents)
    except OSError as e:
        raise CredentialError(f"Failed to write credential file {path}: {e}") from e

    os.environ[CREDENTIALS_ENV] = str(path)
    logger.info(f"Wrote service account key to {path}")
    return path
