import pytest

from src.shared.database.pipeline import FirstMatch, LookupStage, PipelineBuilder, SortStage

COLLECTIONS = ["clients", "projects", "tasks"]


def builder(source: str = "tasks") -> PipelineBuilder:
    return PipelineBuilder(source, known_collections=COLLECTIONS)


class TestPipelineBuilder:
    def test_builds_stages_in_declaration_order(self):
        spec = (
            builder()
            .join("project", "projects", alias="project_docs")
            .join("project_docs.client", "clients", alias="client_docs")
            .project(_id="_id", client_name=FirstMatch(alias="client_docs", field="name"))
            .build()
        )

        pipeline = spec.to_pipeline()

        assert spec.source == "tasks"
        assert [next(iter(stage)) for stage in pipeline] == ["$lookup", "$lookup", "$project"]
        assert pipeline[0]["$lookup"] == {
            "from": "projects",
            "localField": "project",
            "foreignField": "_id",
            "as": "project_docs",
        }
        assert pipeline[1]["$lookup"]["localField"] == "project_docs.client"
        assert pipeline[2]["$project"] == {
            "_id": "$_id",
            "client_name": {"$arrayElemAt": ["$client_docs.name", 0]},
        }
        assert [lookup.alias for lookup in spec.lookups] == ["project_docs", "client_docs"]

    def test_sort_stage_keeps_key_order(self):
        spec = (
            builder("projects")
            .join("client", "clients", alias="client_docs")
            .sort(("updated_at", -1), ("_id", 1))
            .build()
        )

        assert spec.to_pipeline()[1] == {"$sort": {"updated_at": -1, "_id": 1}}
        assert list(spec.to_pipeline()[1]["$sort"]) == ["updated_at", "_id"]

    def test_custom_foreign_field(self):
        spec = builder().join("owner_email", "clients", alias="owner", foreign_field="email").build()

        assert spec.to_pipeline()[0]["$lookup"]["foreignField"] == "email"

    def test_unknown_source_collection_is_rejected(self):
        with pytest.raises(ValueError, match="Unknown collection: invoices"):
            builder("invoices")

    def test_unknown_foreign_collection_is_rejected(self):
        with pytest.raises(ValueError, match="Unknown collection: invoices"):
            builder().join("invoice", "invoices", alias="invoice_docs")

    def test_any_collection_is_allowed_without_a_known_list(self):
        spec = PipelineBuilder("tasks").join("invoice", "invoices", alias="invoice_docs").build()

        assert spec.lookups[0].from_collection == "invoices"

    def test_duplicate_alias_is_rejected(self):
        with pytest.raises(ValueError, match="already used"):
            builder().join("project", "projects", alias="docs").join("client", "clients", alias="docs")

    def test_alias_cannot_shadow_id(self):
        with pytest.raises(ValueError, match="shadow"):
            builder().join("project", "projects", alias="_id")

    def test_blank_local_field_is_rejected(self):
        with pytest.raises(ValueError):
            builder().join("", "projects", alias="project_docs")

    def test_projection_must_reference_declared_alias(self):
        with pytest.raises(ValueError, match="undeclared join alias 'client_docs'"):
            (
                builder()
                .join("project", "projects", alias="project_docs")
                .project(client_name=FirstMatch(alias="client_docs", field="name"))
            )

    def test_projection_cannot_be_empty(self):
        with pytest.raises(ValueError):
            builder().join("project", "projects", alias="project_docs").project()

    def test_only_one_projection(self):
        partial = builder().join("project", "projects", alias="project_docs").project(name="name")

        with pytest.raises(ValueError, match="already defined"):
            partial.project(name="name")

    def test_no_join_after_projection(self):
        partial = builder().join("project", "projects", alias="project_docs").project(name="name")

        with pytest.raises(ValueError, match="after the projection"):
            partial.join("project_docs.client", "clients", alias="client_docs")

    def test_spec_needs_a_join(self):
        with pytest.raises(ValueError, match="at least one join"):
            builder().project(name="name").build()

    @pytest.mark.parametrize("keys", [(), (("updated_at", 0),), (("", 1),)])
    def test_invalid_sort_is_rejected(self, keys):
        with pytest.raises(ValueError):
            builder().sort(*keys)


def test_stage_descriptors_are_immutable():
    stage = LookupStage(local_field="project", from_collection="projects", alias="project_docs")

    with pytest.raises(ValueError):
        stage.alias = "other"


def test_sort_stage_to_stage():
    assert SortStage(keys=(("name", 1),)).to_stage() == {"$sort": {"name": 1}}
