"""Domain models used in business logic."""
from datetime import datetime
from enum import StrEnum
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field, PlainSerializer, field_validator

from src.shared.database.identifiers import is_object_id_hex
from src.shared.timestamps import format_timestamp, normalize_timestamp


def _validate_object_id_hex(value: str) -> str:
    if not is_object_id_hex(value):
        raise ValueError(f"'{value}' is not a 24-character hex identifier")
    return value.lower()


ObjectIdHex = Annotated[str, AfterValidator(_validate_object_id_hex)]

# Timezone-aware UTC, whole seconds; serialized as e.g. "2024-01-02T09:00:00Z"
UtcTimestamp = Annotated[
    datetime,
    AfterValidator(normalize_timestamp),
    PlainSerializer(format_timestamp, return_type=str),
]


class EntityKind(StrEnum):
    """Kinds of record the decoder can materialize."""
    CLIENT = "client"
    PROJECT = "project"
    TASK = "task"
    TASK_SUMMARY = "task_summary"
    PROJECT_SUMMARY = "project_summary"


# =============================================================================
# Persisted entities
# =============================================================================

class Client(BaseModel):
    """Domain model for Client used in business logic."""
    id: ObjectIdHex = Field(..., description="Unique client ID")
    name: str
    created_at: UtcTimestamp
    updated_at: UtcTimestamp


class Project(BaseModel):
    """Domain model for Project used in business logic."""
    id: ObjectIdHex = Field(..., description="Unique project ID")
    name: str
    color: str
    estimate: str = Field(..., description="Free text estimate")
    status: str = Field(..., description="Free text status")
    client: ObjectIdHex = Field(..., description="ID of the client who owns this project")
    created_at: UtcTimestamp
    updated_at: UtcTimestamp


class Task(BaseModel):
    """Domain model for Task used in business logic."""
    id: ObjectIdHex = Field(..., description="Unique task ID")
    name: str
    initial_time: UtcTimestamp = Field(..., description="Start of the tracked interval")
    end_time: UtcTimestamp = Field(..., description="End of the tracked interval")
    project: ObjectIdHex | None = Field(default=None, description="ID of the owning project")
    created_at: UtcTimestamp
    updated_at: UtcTimestamp

    @property
    def duration_seconds(self) -> int:
        """Signed duration; reversed intervals yield a negative value."""
        return int((self.end_time - self.initial_time).total_seconds())


# =============================================================================
# Grouped views (derived, never persisted)
# =============================================================================

class TaskSummary(BaseModel):
    """
    A task flattened with the names resolved through its project and client.

    project_name, project_color and client_name are None when the reference
    chain from the task to its project or client does not resolve.
    """
    id: ObjectIdHex
    name: str
    initial_time: UtcTimestamp
    end_time: UtcTimestamp
    project_name: str | None = None
    project_color: str | None = None
    client_name: str | None = None

    @property
    def duration_seconds(self) -> int:
        return int((self.end_time - self.initial_time).total_seconds())


class GroupedTasksByDate(BaseModel):
    """Tasks that started on the same UTC calendar day."""
    date: str = Field(..., description="UTC calendar date, YYYY-MM-DD")
    tasks: list[TaskSummary] = Field(default_factory=list)
    total_duration: int = Field(default=0, description="Signed sum of task durations in seconds")


class ProjectSummary(BaseModel):
    """A project flattened with the name of its client."""
    id: ObjectIdHex
    name: str
    color: str
    estimate: str
    status: str
    client_name: str | None = None
    updated_at: UtcTimestamp


class ClientProjectGroup(BaseModel):
    """
    Projects grouped under a client name.

    The group key is the client's display name, not its identifier, so
    distinct clients sharing a name end up in the same group. The group with
    client_name None collects projects whose client does not resolve.
    """
    client_name: str | None
    projects: list[ProjectSummary] = Field(default_factory=list)

    @property
    def is_unresolved(self) -> bool:
        return self.client_name is None


class DecodeWarning(BaseModel):
    """A document left out of a grouped view because it could not be decoded."""
    document_id: str | None
    kind: str
    field: str
    message: str

    model_config = {"frozen": True}


# =============================================================================
# Write requests
# =============================================================================

class _NamedRequest(BaseModel):
    name: str = Field(..., min_length=1, description="Name cannot be blank")

    @field_validator("name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure name is not just whitespace."""
        if not v or not v.strip():
            raise ValueError("Field cannot be blank or only whitespace")
        return v.strip()


class ClientRequest(_NamedRequest):
    """Request for creating a client."""


class ProjectRequest(_NamedRequest):
    """Request for creating a project. The client id is checked by the service."""
    color: str
    estimate: str = ""
    status: str = ""
    client: str


class TaskRequest(_NamedRequest):
    """Request for creating or editing a task. Accepts ISO-8601 strings for the interval."""
    initial_time: UtcTimestamp
    end_time: UtcTimestamp
    project: str | None = None
