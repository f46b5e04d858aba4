"""
Persistence of fetched backup run records.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from ..exceptions import OutputWriteError

logger = logging.getLogger(__name__)


def write_record(record: Dict[str, Any], destination: Union[str, Path], filename: str) -> Path:
    """
    Write ``record`` as indented JSON to ``destination/filename``.

    The destination directory is created if needed. The file is written to
    a temporary sibling first and renamed into place, so a failed write
    never leaves a truncated record behind.

    Returns:
        Path of the written file

    Raises:
        OutputWriteError: If the directory or file cannot be written
    """
    directory = Path(destination)
    path = directory / filename
    tmp_path = directory / f".{filename}.tmp"

    try:
        directory.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(record, f, indent=2)
        tmp_path.replace(path)
    except OSError as e:
        raise OutputWriteError(
            f"Failed to write backup record: {e}",
            path=str(path),
            backup_id=str(record.get("id", "")) or None
        ) from e

    logger.debug(f"Wrote backup record to {path}")
    return path
