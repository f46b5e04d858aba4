"""
Version Ordering

Ranks backup runs by recency for the resource protocol, whose convention is
that the last element of a version list is the newest version.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

from backup_service.service_exceptions import BackupRunNotFoundError
from ..models.entities import BackupRun, VersionRef

logger = logging.getLogger(__name__)

_UNFINISHED = datetime.min.replace(tzinfo=timezone.utc)


def recency_key(run: BackupRun) -> Tuple[bool, datetime]:
    """
    Sort key placing unfinished runs first, then finished runs by end time.

    A run without an end time must never be mistaken for the newest
    version, so it ranks below every finished run.
    """
    if run.end_time is None:
        return (False, _UNFINISHED)
    return (True, run.end_time)


def sort_by_recency(runs: Iterable[BackupRun]) -> List[BackupRun]:
    """
    Order backup runs oldest first by ``end_time``.

    The sort is stable: runs with equal end times (including all unfinished
    runs) keep their relative input order.
    """
    return sorted(runs, key=recency_key)


def select_by_id(runs: Iterable[BackupRun], backup_id: str) -> BackupRun:
    """
    Return the run whose id is exactly ``backup_id``.

    Raises:
        BackupRunNotFoundError: If no run has that id
    """
    for run in runs:
        if run.id == backup_id:
            return run
    raise BackupRunNotFoundError(f"Backup run {backup_id} not found", backup_id=backup_id)


def versions_since(ordered: Sequence[BackupRun], backup_id: Optional[str]) -> List[BackupRun]:
    """
    Return the run with ``backup_id`` and every run after it in ``ordered``.

    Args:
        ordered: Runs already sorted by ``sort_by_recency``
        backup_id: Last version seen by the caller, or None

    Returns:
        The matching run and its successors. If ``backup_id`` is None or is
        no longer listed, only the newest run (empty when there are none).
    """
    ordered = list(ordered)
    if backup_id is not None:
        try:
            anchor = select_by_id(ordered, backup_id)
        except BackupRunNotFoundError:
            logger.info(f"Version {backup_id} is no longer listed; returning the newest version only")
        else:
            return ordered[ordered.index(anchor):]

    return ordered[-1:]


def to_version_refs(runs: Iterable[BackupRun]) -> List[VersionRef]:
    """Map runs to their version references, preserving order."""
    return [VersionRef(backup_id=run.id) for run in runs]
