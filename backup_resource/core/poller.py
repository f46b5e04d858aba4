"""
Backup Run Poller

Polling state machine that waits for a backup run to reach a terminal
state. Statuses fall into three classes:

- Transient (ENQUEUED, RUNNING, PENDING): sleep a fixed interval, poll again
- Success (SUCCESSFUL): stop and return the run
- Anything else: stop and fail, the run will not succeed on its own

The loop is driven by tenacity: a result predicate decides whether to poll
again, ``wait_fixed`` spaces the polls and an optional stop condition bounds
the total wait. Errors raised while fetching the run are never retried.
"""

import logging
import time
from enum import Enum
from typing import Callable, Optional

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_result,
    stop_after_attempt,
    stop_after_delay,
    stop_never,
    wait_fixed
)

from ..config import BackupResourceConfig
from ..exceptions import FatalBackupStatusError, PollTimeoutError
from ..models.entities import BackupRun, BackupRunStatus

logger = logging.getLogger(__name__)

TRANSIENT_STATUSES = frozenset({
    BackupRunStatus.ENQUEUED.value,
    BackupRunStatus.RUNNING.value,
    BackupRunStatus.PENDING.value,
})
SUCCESS_STATUSES = frozenset({
    BackupRunStatus.SUCCESSFUL.value,
})


class StatusClass(str, Enum):
    """Classification of a backup run status for the polling loop."""
    TRANSIENT = "TRANSIENT"
    SUCCESS = "SUCCESS"
    FATAL = "FATAL"


def classify_status(status: str) -> StatusClass:
    """
    Classify a raw status string.

    Unknown and empty statuses are fatal.
    """
    if status in TRANSIENT_STATUSES:
        return StatusClass.TRANSIENT
    if status in SUCCESS_STATUSES:
        return StatusClass.SUCCESS
    return StatusClass.FATAL


class BackupRunPoller:
    """
    Waits for one backup run to reach a terminal status.

    Each poll performs exactly one ``get_backup_run`` call. Transient
    observations are logged and followed by a fixed sleep. When the
    configuration sets ``max_poll_attempts`` or ``max_wait_seconds`` a run
    that is still in flight at the bound raises ``PollTimeoutError``;
    otherwise polling continues until a terminal status is seen.

    Example:
        ```python
        poller = BackupRunPoller(client, BackupResourceConfig())
        run = poller.wait_for_completion("my-project", "orders-db", "1700000000000")
        ```
    """

    def __init__(
        self,
        client,
        config: Optional[BackupResourceConfig] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Initialize the poller.

        Args:
            client: Backup service client providing ``get_backup_run``
            config: Polling configuration (uses defaults if None)
            sleep: Function used to wait between polls
        """
        self._client = client
        self._config = config or BackupResourceConfig()
        self._sleep = sleep
        self.polls = 0

    def _stop_condition(self):
        stop = stop_never
        if self._config.max_poll_attempts is not None:
            stop = stop_after_attempt(self._config.max_poll_attempts)
        if self._config.max_wait_seconds is not None:
            by_time = stop_after_delay(self._config.max_wait_seconds)
            stop = by_time if stop is stop_never else stop | by_time
        return stop

    def _poll_once(self, project: str, instance: str, backup_id: str) -> BackupRun:
        run = self._client.get_backup_run(project, instance, backup_id)
        self.polls += 1
        if classify_status(run.status) is StatusClass.TRANSIENT:
            logger.info(f"Backup state: {run.status}")
        return run

    def wait_for_completion(self, project: str, instance: str, backup_id: str) -> BackupRun:
        """
        Poll a backup run until it succeeds.

        Args:
            project: Google Cloud project id
            instance: Cloud SQL instance name
            backup_id: Backup run to wait for

        Returns:
            The run as observed in its SUCCESSFUL state

        Raises:
            FatalBackupStatusError: If the run reaches any non-transient,
                                    non-successful status
            PollTimeoutError: If a configured bound is reached first
            BackupServiceError: If fetching the run fails
            CredentialError: If no token can be obtained
        """
        self.polls = 0

        def on_timeout(retry_state: RetryCallState):
            last = retry_state.outcome.result()
            raise PollTimeoutError(
                f"Backup still {last.status} after {retry_state.attempt_number} polls",
                backup_id=backup_id,
                instance=instance,
                attempts=retry_state.attempt_number,
                elapsed=retry_state.seconds_since_start or 0.0,
                last_status=last.status
            )

        retrying = Retrying(
            retry=retry_if_result(lambda run: classify_status(run.status) is StatusClass.TRANSIENT),
            wait=wait_fixed(self._config.poll_interval_seconds),
            stop=self._stop_condition(),
            sleep=self._sleep,
            retry_error_callback=on_timeout
        )
        run = retrying(self._poll_once, project, instance, backup_id)

        if classify_status(run.status) is StatusClass.FATAL:
            logger.error(f"Backup state: {run.status}")
            raise FatalBackupStatusError(run.status, backup_id=backup_id, instance=instance)

        logger.info("Backup successful!")
        return run
