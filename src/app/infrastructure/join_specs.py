"""
The joins behind the grouped views.

Both joins are left-outer: a task without a resolvable project (or a project
without a resolvable client) still comes through, with the names taken from
the missing side absent from the flattened document. When a lookup matches
more than one document, which would be a data integrity problem, the first
match is used.
"""
from src.shared.database.pipeline import FirstMatch, JoinSpec, PipelineBuilder
from src.app.infrastructure.collection_names import ALL_COLLECTIONS, CLIENTS, PROJECTS, TASKS


def tasks_with_project_and_client() -> JoinSpec:
    """tasks -> projects -> clients, flattened to one document per task."""
    return (
        PipelineBuilder(TASKS, known_collections=ALL_COLLECTIONS)
        .join("project", PROJECTS, alias="project_docs")
        .join("project_docs.client", CLIENTS, alias="client_docs")
        .project(
            _id="_id",
            name="name",
            initial_time="initial_time",
            end_time="end_time",
            project="project",
            project_name=FirstMatch(alias="project_docs", field="name"),
            project_color=FirstMatch(alias="project_docs", field="color"),
            client_name=FirstMatch(alias="client_docs", field="name"),
        )
        .build()
    )


def projects_with_client() -> JoinSpec:
    """projects -> clients, most recently updated first."""
    return (
        PipelineBuilder(PROJECTS, known_collections=ALL_COLLECTIONS)
        .join("client", CLIENTS, alias="client_docs")
        .sort(("updated_at", -1), ("_id", 1))
        .project(
            _id="_id",
            name="name",
            color="color",
            estimate="estimate",
            status="status",
            client="client",
            client_name=FirstMatch(alias="client_docs", field="name"),
            updated_at="updated_at",
        )
        .build()
    )
