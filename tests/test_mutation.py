from cfncompose.models.resource import Resource, SQSQueue
from cfncompose.mutation import add_dependency, set_metadata


class TestAddDependency:
    def test_initializes_then_appends(self):
        r = Resource(properties=SQSQueue())
        assert r.depends_on is None
        add_dependency(r, "Role")
        assert r.depends_on == ["Role"]

    def test_duplicates_kept(self):
        r = Resource(properties=SQSQueue())
        add_dependency(r, "Role")
        add_dependency(r, "Role")
        assert r.depends_on == ["Role", "Role"]

    def test_existing_list_mutated_in_place(self):
        deps = ["Table"]
        r = Resource(properties=SQSQueue(), depends_on=deps)
        add_dependency(r, "Role")
        assert r.depends_on is deps
        assert deps == ["Table", "Role"]

    def test_serialized(self):
        r = Resource(properties=SQSQueue())
        add_dependency(r, "Role")
        assert r.to_dict()["DependsOn"] == ["Role"]


class TestSetMetadata:
    def test_initializes_then_sets(self):
        r = Resource(properties=SQSQueue())
        assert r.metadata is None
        set_metadata(r, "Owner", "team-a")
        assert r.metadata == {"Owner": "team-a"}

    def test_overwrites(self):
        r = Resource(properties=SQSQueue())
        set_metadata(r, "Owner", "team-a")
        set_metadata(r, "Owner", "team-b")
        assert r.metadata["Owner"] == "team-b"

    def test_existing_dict_mutated_in_place(self):
        meta = {"a": 1}
        r = Resource(properties=SQSQueue(), metadata=meta)
        set_metadata(r, "b", 2)
        assert r.metadata is meta
        assert meta == {"a": 1, "b": 2}
