"""
Template merge tests — union on disjoint names, exhaustive collision reports.
"""
import logging

import pytest

from cfncompose.models.errors import Collision, TemplateCollision
from cfncompose.models.resource import Resource, S3Bucket, SNSTopic, SQSQueue
from cfncompose.models.template import Template


def _api() -> Template:
    return Template(
        resources={"Queue": Resource(properties=SQSQueue())},
        mappings={"RegionMap": {"us-east-1": {"Ami": "ami-1"}}},
        outputs={"QueueUrl": {"Value": {"Ref": "Queue"}}},
    )


def _worker() -> Template:
    return Template(
        resources={"Topic": Resource(properties=SNSTopic())},
        mappings={"StageMap": {"prod": {"Shards": 4}}},
        outputs={"TopicArn": {"Value": {"Ref": "Topic"}}},
    )


class TestDisjointMerge:
    def setup_method(self):
        from cfncompose import merge
        self.merge = merge

    def test_union_of_all_collections(self):
        src, dst = _worker(), _api()
        self.merge.merge_templates(src, dst)
        assert set(dst.resources) == {"Queue", "Topic"}
        assert set(dst.mappings) == {"RegionMap", "StageMap"}
        assert set(dst.outputs) == {"QueueUrl", "TopicArn"}

    def test_direction_does_not_change_content(self):
        a_into_b = _api()
        self.merge.merge_templates(_worker(), a_into_b)
        b_into_a = _worker()
        self.merge.merge_templates(_api(), b_into_a)

        assert set(a_into_b.resources) == set(b_into_a.resources)
        assert a_into_b.mappings == b_into_a.mappings
        assert a_into_b.outputs == b_into_a.outputs

    def test_entries_are_moved_not_copied(self):
        src, dst = _worker(), _api()
        self.merge.merge_templates(src, dst)
        assert dst.resources["Topic"] is src.resources["Topic"]

    def test_source_is_untouched(self):
        src, dst = _worker(), _api()
        self.merge.merge_templates(src, dst)
        assert set(src.resources) == {"Topic"}

    def test_empty_source(self):
        dst = _api()
        self.merge.merge_templates(Template(), dst)
        assert set(dst.resources) == {"Queue"}


class TestMergeCollisions:
    def setup_method(self):
        from cfncompose import merge
        self.merge = merge

    def test_resource_collision_reported(self):
        src = Template(resources={
            "A": Resource(properties=SQSQueue()),
            "B": Resource(properties=S3Bucket()),
        })
        original = Resource(properties=SNSTopic())
        dst = Template(resources={"A": original})

        with pytest.raises(TemplateCollision) as excinfo:
            self.merge.merge_templates(src, dst)

        assert excinfo.value.collisions == [Collision("Resources", "A")]
        assert "A" in str(excinfo.value)
        # not overwritten
        assert dst.resources["A"] is original
        # partial merge is kept
        assert "B" in dst.resources

    def test_all_collisions_reported(self):
        src = _api()
        src.outputs["TopicArn"] = {"Value": "x"}
        src.resources["Topic"] = Resource(properties=SNSTopic())
        dst = _worker()

        with pytest.raises(TemplateCollision) as excinfo:
            self.merge.merge_templates(src, dst)

        assert excinfo.value.collisions == [
            Collision("Resources", "Topic"),
            Collision("Outputs", "TopicArn"),
        ]
        # non-colliding entries from every collection were still merged
        assert "Queue" in dst.resources
        assert "RegionMap" in dst.mappings
        assert "QueueUrl" in dst.outputs

    def test_mapping_collision(self):
        src = Template(mappings={"RegionMap": {}})
        dst = Template(mappings={"RegionMap": {"keep": True}})
        with pytest.raises(TemplateCollision) as excinfo:
            self.merge.merge_templates(src, dst)
        assert excinfo.value.names == ["RegionMap"]
        assert dst.mappings["RegionMap"] == {"keep": True}

    def test_collision_messages(self):
        src, dst = _api(), _api()
        with pytest.raises(TemplateCollision) as excinfo:
            self.merge.merge_templates(src, dst)
        text = str(excinfo.value)
        assert "Duplicate CloudFormation resource name: Queue" in text
        assert "Duplicate CloudFormation Mapping name: RegionMap" in text
        assert "Duplicate CloudFormation output key name: QueueUrl" in text

    def test_collisions_logged(self, caplog):
        src, dst = _api(), _api()
        with caplog.at_level(logging.ERROR, logger="cfncompose"):
            with pytest.raises(TemplateCollision):
                self.merge.merge_templates(src, dst)

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        # summary line + one per collision
        assert len(errors) == 4
        assert {getattr(r, "logical_name", None) for r in errors[1:]} == {
            "Queue", "RegionMap", "QueueUrl",
        }
