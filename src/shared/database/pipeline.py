"""
Named aggregation stage descriptors and a validating builder for join pipelines.

A JoinSpec describes a left-outer relational join executed by the store in a
single aggregation pipeline:

    source collection
      -> LookupStage (local field -> foreign collection.foreign field, as alias)
      -> ... further lookups, which may read fields of earlier aliases
      -> optional SortStage
      -> ProjectStage flattening each alias to its first match

Unmatched lookups produce an empty array, so a FirstMatch over them evaluates
to nothing and the projected field is simply absent from the output document.
"""
from collections.abc import Iterable
from typing import Any, Union

from pydantic import BaseModel, Field, field_validator


class LookupStage(BaseModel):
    """One foreign-key join step."""

    local_field: str = Field(..., min_length=1)
    from_collection: str = Field(..., min_length=1)
    foreign_field: str = Field(default="_id", min_length=1)
    alias: str = Field(..., min_length=1)

    model_config = {"frozen": True}

    def to_stage(self) -> dict[str, Any]:
        return {
            "$lookup": {
                "from": self.from_collection,
                "localField": self.local_field,
                "foreignField": self.foreign_field,
                "as": self.alias,
            }
        }


class FirstMatch(BaseModel):
    """Projection expression picking a field of the first document joined under an alias."""

    alias: str = Field(..., min_length=1)
    field: str = Field(..., min_length=1)

    model_config = {"frozen": True}

    def to_expression(self) -> dict[str, Any]:
        return {"$arrayElemAt": [f"${self.alias}.{self.field}", 0]}


ProjectionSource = Union[str, FirstMatch]


class ProjectStage(BaseModel):
    """Flattening projection: output field name -> source field path or FirstMatch."""

    fields: dict[str, ProjectionSource]

    model_config = {"frozen": True}

    @field_validator("fields")
    @classmethod
    def validate_not_empty(cls, v: dict[str, ProjectionSource]) -> dict[str, ProjectionSource]:
        if not v:
            raise ValueError("Projection must select at least one field")
        for name, source in v.items():
            if not name or (isinstance(source, str) and not source):
                raise ValueError("Projection field names and sources cannot be blank")
        return v

    def to_stage(self) -> dict[str, Any]:
        projection: dict[str, Any] = {}
        for name, source in self.fields.items():
            if isinstance(source, FirstMatch):
                projection[name] = source.to_expression()
            else:
                projection[name] = f"${source}"
        return {"$project": projection}


class SortStage(BaseModel):
    """Sort on one or more fields; 1 ascending, -1 descending."""

    keys: tuple[tuple[str, int], ...]

    model_config = {"frozen": True}

    @field_validator("keys")
    @classmethod
    def validate_keys(cls, v: tuple[tuple[str, int], ...]) -> tuple[tuple[str, int], ...]:
        if not v:
            raise ValueError("Sort requires at least one key")
        for field, direction in v:
            if not field:
                raise ValueError("Sort field cannot be blank")
            if direction not in (1, -1):
                raise ValueError(f"Sort direction for '{field}' must be 1 or -1")
        return v

    def to_stage(self) -> dict[str, Any]:
        return {"$sort": {field: direction for field, direction in self.keys}}


Stage = Union[LookupStage, SortStage, ProjectStage]


class JoinSpec(BaseModel):
    """A validated, ready-to-run join over a source collection."""

    source: str
    stages: tuple[Stage, ...]

    model_config = {"frozen": True}

    @property
    def lookups(self) -> list[LookupStage]:
        return [stage for stage in self.stages if isinstance(stage, LookupStage)]

    def to_pipeline(self) -> list[dict[str, Any]]:
        return [stage.to_stage() for stage in self.stages]


class PipelineBuilder:
    """
    Fluent builder for JoinSpec.

    Validation happens while the spec is assembled so that a malformed join
    fails at construction instead of when the store executes it.

    Example:
        spec = (
            PipelineBuilder("projects", known_collections=["clients", "projects"])
            .join("client", "clients", alias="client_docs")
            .sort(("updated_at", -1))
            .project(_id="_id", client_name=FirstMatch(alias="client_docs", field="name"))
            .build()
        )
    """

    def __init__(self, source: str, known_collections: Iterable[str] | None = None):
        self._known_collections = set(known_collections) if known_collections is not None else None
        self._check_collection(source)
        self._source = source
        self._stages: list[Stage] = []
        self._aliases: set[str] = set()
        self._projected = False

    def _check_collection(self, name: str) -> None:
        if not name:
            raise ValueError("Collection name cannot be blank")
        if self._known_collections is not None and name not in self._known_collections:
            raise ValueError(f"Unknown collection: {name}")

    def join(
        self,
        local_field: str,
        from_collection: str,
        alias: str,
        foreign_field: str = "_id",
    ) -> "PipelineBuilder":
        if self._projected:
            raise ValueError("Cannot add a join after the projection")
        self._check_collection(from_collection)
        if alias in self._aliases:
            raise ValueError(f"Join alias '{alias}' is already used")
        if alias == "_id":
            raise ValueError("Join alias cannot shadow '_id'")
        self._stages.append(
            LookupStage(
                local_field=local_field,
                from_collection=from_collection,
                foreign_field=foreign_field,
                alias=alias,
            )
        )
        self._aliases.add(alias)
        return self

    def sort(self, *keys: tuple[str, int]) -> "PipelineBuilder":
        self._stages.append(SortStage(keys=tuple(keys)))
        return self

    def project(self, **fields: ProjectionSource) -> "PipelineBuilder":
        if self._projected:
            raise ValueError("Projection is already defined")
        for name, source in fields.items():
            if isinstance(source, FirstMatch) and source.alias not in self._aliases:
                raise ValueError(f"Projection '{name}' references undeclared join alias '{source.alias}'")
        self._stages.append(ProjectStage(fields=fields))
        self._projected = True
        return self

    def build(self) -> JoinSpec:
        if not self._aliases:
            raise ValueError("A join spec needs at least one join step")
        return JoinSpec(source=self._source, stages=tuple(self._stages))
