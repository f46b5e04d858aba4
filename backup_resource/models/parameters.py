"""
Backup Resource Parameters

Defines the request payloads the pipeline tool sends to each verb on stdin,
providing type-safe access to the source configuration, the requested
version and the (currently empty) ``out`` parameters.
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, field_validator

from .entities import CheckMode, VersionRef


class SourceConfig(BaseModel):
    """
    Resource source configuration shared by all verbs.

    Attributes:
        project: Google Cloud project id
        instance: Cloud SQL instance name
        private_key: Service account key, as a JSON string or object
        check_mode: Overrides the configured ``check`` mode for this resource

    Example:
        ```python
        source = SourceConfig(
            project="my-project",
            instance="orders-db",
            private_key=open("key.json").read()
        )
        ```
    """
    project: str = Field(..., min_length=1, description="Google Cloud project id")
    instance: str = Field(..., min_length=1, description="Cloud SQL instance name")
    private_key: Union[str, Dict[str, Any]] = Field(
        default="",
        description="Service account key used to authenticate API calls"
    )
    check_mode: Optional[CheckMode] = Field(
        default=None,
        description="Version discovery mode for check (all or since)"
    )

    @field_validator("project", "instance")
    @classmethod
    def strip_names(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    def __repr__(self) -> str:
        # Never print the key.
        return f"SourceConfig(project={self.project!r}, instance={self.instance!r})"

    __str__ = __repr__


class OutParams(BaseModel):
    """
    Parameters for the ``out`` verb.

    No parameters are recognised yet. Unknown keys are accepted and ignored
    so pipelines can be written ahead of future options.
    """

    class Config:
        extra = "ignore"


class CheckRequest(BaseModel):
    """Payload for ``check``: the source and the last seen version, if any."""
    source: SourceConfig
    version: Optional[VersionRef] = None

    @field_validator("version", mode="before")
    @classmethod
    def empty_version_is_none(cls, v):
        if v is None or v == {}:
            return None
        if isinstance(v, dict) and not v.get("backup_id"):
            return None
        return v


class InRequest(BaseModel):
    """Payload for ``in``: the source and the version to materialize."""
    source: SourceConfig
    version: VersionRef
    params: Dict[str, Any] = Field(default_factory=dict)


class OutRequest(BaseModel):
    """Payload for ``out``: the source and the put parameters."""
    source: SourceConfig
    params: OutParams = Field(default_factory=OutParams)

    @field_validator("params", mode="before")
    @classmethod
    def null_params_are_empty(cls, v):
        return {} if v is None else v
