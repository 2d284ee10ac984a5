"""
Grouping of joined documents into the day and client views.

Documents are consumed one at a time as the store streams them; only the
decoded summaries are kept. A document that cannot be decoded is left out of
the view and recorded as a DecodeWarning, while a store failure propagates
and aborts the whole grouping so that no partial view is ever returned.
"""
import logging
from collections.abc import AsyncIterable, Mapping
from typing import Any

from src.app.core.domain.models import (
    ClientProjectGroup,
    DecodeWarning,
    EntityKind,
    GroupedTasksByDate,
    ProjectSummary,
    TaskSummary,
)
from src.shared.database.decoder import DocumentDecoder
from src.shared.exceptions import DecodeFailed
from src.shared.timestamps import utc_date_key

logger = logging.getLogger(__name__)


class _DecodingAccumulator:
    kind: EntityKind

    def __init__(self, decoder: DocumentDecoder):
        self._decoder = decoder
        self.warnings: list[DecodeWarning] = []
        self.accepted = 0

    def _decode(self, document: Mapping[str, Any]) -> Any | None:
        try:
            model = self._decoder.decode(document, self.kind)
        except DecodeFailed as e:
            document_id = document.get("_id")
            warning = DecodeWarning(
                document_id=str(document_id) if document_id is not None else None,
                kind=e.kind,
                field=e.field,
                message=str(e),
            )
            self.warnings.append(warning)
            logger.warning("Skipping document %s: %s", warning.document_id, e)
            return None
        self.accepted += 1
        return model


class TasksByDateAccumulator(_DecodingAccumulator):
    """
    Buckets task summaries by the UTC calendar date of their start time.

    Totals are the signed sum of whole-second durations, so a task whose end
    precedes its start lowers its day's total instead of being clamped.
    """

    kind = EntityKind.TASK_SUMMARY

    def __init__(self, decoder: DocumentDecoder):
        super().__init__(decoder)
        self._tasks: dict[str, list[TaskSummary]] = {}
        self._totals: dict[str, int] = {}

    def add(self, document: Mapping[str, Any]) -> None:
        summary: TaskSummary | None = self._decode(document)
        if summary is None:
            return
        date = utc_date_key(summary.initial_time)
        self._tasks.setdefault(date, []).append(summary)
        self._totals[date] = self._totals.get(date, 0) + summary.duration_seconds

    def result(self) -> list[GroupedTasksByDate]:
        """Groups with the most recent day first; tasks keep their arrival order."""
        return [
            GroupedTasksByDate(
                date=date,
                tasks=list(self._tasks[date]),
                total_duration=self._totals[date],
            )
            for date in sorted(self._tasks, reverse=True)
        ]


class ProjectsByClientAccumulator(_DecodingAccumulator):
    """Buckets project summaries by client name, with unresolved clients under None."""

    kind = EntityKind.PROJECT_SUMMARY

    def __init__(self, decoder: DocumentDecoder):
        super().__init__(decoder)
        self._projects: dict[str | None, list[ProjectSummary]] = {}

    def add(self, document: Mapping[str, Any]) -> None:
        summary: ProjectSummary | None = self._decode(document)
        if summary is None:
            return
        self._projects.setdefault(summary.client_name, []).append(summary)

    def result(self) -> list[ClientProjectGroup]:
        """
        Named groups in ascending client name order, then the unresolved group.

        Within a group projects are ordered most recently updated first; ties
        keep their arrival order.
        """
        names = sorted(name for name in self._projects if name is not None)
        if None in self._projects:
            names.append(None)
        return [
            ClientProjectGroup(
                client_name=name,
                projects=sorted(self._projects[name], key=lambda p: p.updated_at, reverse=True),
            )
            for name in names
        ]


class GroupingEngine:
    """Builds the grouped views from a stream of joined documents."""

    def __init__(self, decoder: DocumentDecoder):
        self.decoder = decoder

    async def group_tasks_by_date(
        self, documents: AsyncIterable[Mapping[str, Any]]
    ) -> list[GroupedTasksByDate]:
        accumulator = TasksByDateAccumulator(self.decoder)
        async for document in documents:
            accumulator.add(document)
        groups = accumulator.result()
        logger.info(
            "Grouped %d tasks into %d days (%d skipped)",
            accumulator.accepted, len(groups), len(accumulator.warnings),
        )
        return groups

    async def group_projects_by_client(
        self, documents: AsyncIterable[Mapping[str, Any]]
    ) -> list[ClientProjectGroup]:
        accumulator = ProjectsByClientAccumulator(self.decoder)
        async for document in documents:
            accumulator.add(document)
        groups = accumulator.result()
        logger.info(
            "Grouped %d projects into %d clients (%d skipped)",
            accumulator.accepted, len(groups), len(accumulator.warnings),
        )
        return groups
