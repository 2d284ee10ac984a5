from datetime import UTC, datetime

import pytest
from bson import ObjectId
from pydantic import ValidationError

from src.app.core.domain.models import (
    ClientProjectGroup,
    ClientRequest,
    Project,
    ProjectRequest,
    TaskRequest,
)


def test_task_request_parses_iso_strings_to_utc():
    request = TaskRequest(
        name="Review",
        initial_time="2024-01-02T11:00:00+02:00",
        end_time="2024-01-02T09:30:00.750Z",
    )

    assert request.initial_time == datetime(2024, 1, 2, 9, 0, tzinfo=UTC)
    assert request.end_time == datetime(2024, 1, 2, 9, 30, tzinfo=UTC)
    assert request.project is None


def test_blank_names_are_rejected():
    with pytest.raises(ValidationError):
        ClientRequest(name="   ")


def test_names_are_stripped():
    assert ClientRequest(name="  Acme  ").name == "Acme"


def test_project_request_defaults_free_text_fields():
    request = ProjectRequest(name="Website", color="#61e294ff", client=str(ObjectId()))

    assert request.estimate == ""
    assert request.status == ""


def test_entity_ids_must_be_hex():
    with pytest.raises(ValidationError):
        Project(
            id="not-a-hex-id",
            name="Website",
            color="#fff",
            estimate="",
            status="",
            client=str(ObjectId()),
            created_at=datetime.now(UTC),
            updated_at=datetime.now(UTC),
        )


def test_unresolved_group():
    assert ClientProjectGroup(client_name=None).is_unresolved
    assert not ClientProjectGroup(client_name="Acme Corp").is_unresolved
