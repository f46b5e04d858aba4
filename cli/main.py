"""
Command line entry points for the check, in and out verbs.

Each entry point reads the JSON request from stdin, runs the verb and
prints the JSON response on stdout. Logs go to stderr. Any backup resource
error is logged and turned into exit status 1.
"""

import argparse
import json
import logging
import sys
import time
from typing import Any, Callable, Dict, List, Optional, TextIO

from pydantic import ValidationError

from backup_resource import (
    BackupResource,
    BackupResourceConfig,
    CheckRequest,
    InRequest,
    OutRequest,
    SourceConfig
)
from backup_resource.utils.credentials import write_credential_file
from backup_service import (
    BackupServiceClient,
    DefaultCredentialsAuthenticator,
    ServiceAccountAuthenticator
)
from config import LoggingSettings, ResourceSettings, load_settings
from resource_exceptions import BackupResourceOpsError, ConfigurationError, InvalidRequestError

logger = logging.getLogger(__name__)

VERBS = ("check", "in", "out")

ClientFactory = Callable[[SourceConfig, ResourceSettings], Any]


def configure_logging(settings: Optional[ResourceSettings] = None) -> None:
    """Send log records to stderr; stdout is reserved for the verb payload."""
    log_settings = settings.logging if settings is not None else LoggingSettings()
    logging.basicConfig(
        level=getattr(logging, log_settings.log_level.upper(), logging.INFO),
        format=log_settings.log_format,
        stream=sys.stderr,
        force=True
    )


def build_client(source: SourceConfig, settings: ResourceSettings) -> BackupServiceClient:
    """
    Create an authenticated backup service client for ``source``.

    The key is injected in memory unless the credential file side channel
    is enabled in the settings.
    """
    api = settings.api
    if settings.credentials.write_credential_file:
        write_credential_file(source.private_key, settings.credentials.credential_file_path)
        authenticator = DefaultCredentialsAuthenticator(api.scopes, reuse_tokens=api.reuse_tokens)
    else:
        authenticator = ServiceAccountAuthenticator(
            source.private_key, api.scopes, reuse_tokens=api.reuse_tokens
        )
    return BackupServiceClient(authenticator, base_url=api.base_url, timeout=api.request_timeout)


def read_payload(stdin: TextIO) -> Dict[str, Any]:
    try:
        payload = json.load(stdin)
    except ValueError as e:
        raise InvalidRequestError(f"Request is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise InvalidRequestError("Request must be a JSON object")
    return payload


def _parse(model, payload: Dict[str, Any]):
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise InvalidRequestError(f"Invalid {model.__name__}: {e}") from e


def execute(
    verb: str,
    payload: Dict[str, Any],
    destination: Optional[str],
    settings: ResourceSettings,
    client_factory: ClientFactory = build_client,
    sleep: Callable[[float], None] = time.sleep
) -> Any:
    """
    Run one verb and return its JSON-serializable result.

    Raises:
        BackupResourceOpsError: On any failure
    """
    model = {"check": CheckRequest, "in": InRequest, "out": OutRequest}[verb]
    request = _parse(model, payload)

    try:
        config = BackupResourceConfig.from_settings(settings)
    except ValueError as e:
        raise InvalidRequestError(f"Invalid configuration: {e}") from e

    client = client_factory(request.source, settings)
    try:
        resource = BackupResource(client, config, sleep=sleep)
        if verb == "check":
            return [ref.model_dump() for ref in resource.check(request)]
        if verb == "in":
            if not destination:
                raise InvalidRequestError("in requires a destination directory")
            return resource.in_(request, destination).to_dict()
        return resource.out(request).to_dict()
    finally:
        close = getattr(client, "close", None)
        if close is not None:
            close()


def run(
    verb: str,
    argv: Optional[List[str]] = None,
    stdin: TextIO = None,
    stdout: TextIO = None,
    settings: Optional[ResourceSettings] = None,
    client_factory: ClientFactory = build_client,
    sleep: Callable[[float], None] = time.sleep
) -> int:
    """
    Entry point shared by the three verbs.

    Args:
        verb: ``check``, ``in`` or ``out``
        argv: Arguments after the program name; ``in`` and ``out`` take the
              build directory as their only positional argument
        stdin: Request stream (defaults to ``sys.stdin``)
        stdout: Response stream (defaults to ``sys.stdout``)
        settings: Preloaded settings (loaded from file/environment if None)
        client_factory: Builds the backup service client for a source
        sleep: Wait function used between polls

    Returns:
        Process exit status
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    parser = argparse.ArgumentParser(
        prog=f"cloudsql-backup-{verb}",
        description=f"Cloud SQL backup resource: {verb}"
    )
    if verb in ("in", "out"):
        parser.add_argument(
            "destination",
            nargs="?" if verb == "out" else None,
            help="Build directory handed over by the pipeline"
        )
    args = parser.parse_args(argv)

    try:
        settings = settings or load_settings()
    except ConfigurationError as e:
        configure_logging()
        logger.error(f"{verb} failed: {e}")
        return 1
    configure_logging(settings)

    try:
        payload = read_payload(stdin)
        result = execute(
            verb,
            payload,
            getattr(args, "destination", None),
            settings,
            client_factory=client_factory,
            sleep=sleep
        )
    except BackupResourceOpsError as e:
        logger.error(f"{verb} failed: {e}")
        return 1

    json.dump(result, stdout, indent=2)
    stdout.write("\n")
    stdout.flush()
    return 0


def check_main(argv: Optional[List[str]] = None) -> int:
    return run("check", sys.argv[1:] if argv is None else argv)


def in_main(argv: Optional[List[str]] = None) -> int:
    return run("in", sys.argv[1:] if argv is None else argv)


def out_main(argv: Optional[List[str]] = None) -> int:
    return run("out", sys.argv[1:] if argv is None else argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Dispatch ``<verb> [destination]`` for use as ``python -m cli``."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv or argv[0] not in VERBS:
        sys.stderr.write(f"usage: cloudsql-backup {{{','.join(VERBS)}}} [destination]\n")
        return 2
    return run(argv[0], argv[1:])


if __name__ == "__main__":
    sys.exit(main())
