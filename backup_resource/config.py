"""
Backup Resource Configuration

Centralized configuration for the resource verbs, providing a single source
of truth for polling, reporting and version discovery parameters.

The global ``ResourceSettings`` (environment / YAML) is mapped onto this
dataclass with ``from_settings`` so the core never reads the environment
itself.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional
import logging

from .models.entities import CheckMode

logger = logging.getLogger(__name__)


@dataclass
class BackupResourceConfig:
    """
    Configuration for the check/in/out verbs.

    Polling Settings:
        poll_interval_seconds: Fixed wait between polls of an in-flight run (default: 30)
        max_poll_attempts: Stop after N polls (default: unbounded)
        max_wait_seconds: Stop after N seconds of polling (default: unbounded)

    Reporting Settings:
        reporting_timezone: Zone used for end-time and insert-time (default: Asia/Taipei)
        output_filename: File written by ``in`` in its destination (default: output.json)

    Discovery Settings:
        check_mode: ALL returns every version, SINCE only the given one and newer

    Example:
        ```python
        config = BackupResourceConfig(
            poll_interval_seconds=10,
            max_wait_seconds=3600,
            reporting_timezone="UTC"
        )
        resource = BackupResource(client, config=config)
        ```
    """

    # Polling Settings
    poll_interval_seconds: float = 30.0
    max_poll_attempts: Optional[int] = None
    max_wait_seconds: Optional[float] = None

    # Reporting Settings
    reporting_timezone: str = "Asia/Taipei"
    output_filename: str = "output.json"

    # Discovery Settings
    check_mode: CheckMode = CheckMode.ALL

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.check_mode, str) and not isinstance(self.check_mode, CheckMode):
            self.check_mode = CheckMode(self.check_mode)
        self.validate()

    def validate(self) -> None:
        """
        Validate configuration parameters.

        Raises:
            ValueError: If any configuration parameter is invalid
        """
        if self.poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be positive")
        if self.max_poll_attempts is not None and self.max_poll_attempts <= 0:
            raise ValueError("max_poll_attempts must be positive when set")
        if self.max_wait_seconds is not None and self.max_wait_seconds <= 0:
            raise ValueError("max_wait_seconds must be positive when set")
        if not self.reporting_timezone:
            raise ValueError("reporting_timezone must be set")
        if not self.output_filename or "/" in self.output_filename:
            raise ValueError("output_filename must be a plain file name")

        if self.max_wait_seconds is not None and self.max_wait_seconds < self.poll_interval_seconds:
            logger.warning(
                f"max_wait_seconds ({self.max_wait_seconds}) is shorter than "
                f"poll_interval_seconds ({self.poll_interval_seconds}); "
                f"a run will be polled at most twice"
            )

    @property
    def is_bounded(self) -> bool:
        """Check if polling has an attempt or time limit."""
        return self.max_poll_attempts is not None or self.max_wait_seconds is not None

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'BackupResourceConfig':
        """Create configuration from a dictionary."""
        return cls(**config_dict)

    @classmethod
    def from_settings(cls, settings) -> 'BackupResourceConfig':
        """
        Build the configuration from ``ResourceSettings``.

        Args:
            settings: Loaded ``config.ResourceSettings`` instance

        Returns:
            BackupResourceConfig instance
        """
        return cls(
            poll_interval_seconds=settings.polling.interval_seconds,
            max_poll_attempts=settings.polling.max_attempts,
            max_wait_seconds=settings.polling.max_wait_seconds,
            reporting_timezone=settings.reporting.timezone,
            output_filename=settings.reporting.output_filename,
            check_mode=settings.reporting.check_mode
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a dictionary with enum values as strings."""
        result = asdict(self)
        result['check_mode'] = self.check_mode.value
        return result

    def __repr__(self) -> str:
        bound = "unbounded"
        if self.is_bounded:
            bound = f"attempts={self.max_poll_attempts}, wait={self.max_wait_seconds}s"
        return (
            f"BackupResourceConfig("
            f"interval={self.poll_interval_seconds}s, {bound}, "
            f"timezone={self.reporting_timezone}, "
            f"check_mode={self.check_mode.value}"
            f")"
        )
