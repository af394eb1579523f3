import logging
from dataclasses import dataclass
from typing import ClassVar

import pytest

from cfncompose.models.errors import UnsupportedResourceKind
from cfncompose.models.resource import (
    CustomResourceProperties,
    GenericResourceProperties,
    ResourceProperties,
    SQSQueue,
)


class TestNewResourceProperties:
    def setup_method(self):
        from cfncompose import registry
        self.registry = registry

    def test_dedicated_class(self):
        props = self.registry.new_resource_properties("AWS::SQS::Queue", {"QueueName": "q"})
        assert isinstance(props, SQSQueue)
        assert props.queue_name == "q"
        assert props.cfn_resource_type() == "AWS::SQS::Queue"

    def test_properties_are_copied(self):
        raw = {"QueueName": "q"}
        props = self.registry.new_resource_properties("AWS::SQS::Queue", raw)
        props.properties["QueueName"] = "other"
        assert raw == {"QueueName": "q"}

    def test_generic_kind(self):
        props = self.registry.new_resource_properties("AWS::EC2::VPC")
        assert isinstance(props, GenericResourceProperties)
        assert props.cfn_resource_type() == "AWS::EC2::VPC"

    def test_custom_resource(self):
        props = self.registry.new_resource_properties(
            "Custom::Seeder", {"ServiceToken": "arn:aws:lambda:..."}
        )
        assert isinstance(props, CustomResourceProperties)
        assert props.cfn_resource_type() == "Custom::Seeder"
        assert props.service_token == "arn:aws:lambda:..."

    def test_unsupported_kind(self, caplog):
        with caplog.at_level(logging.CRITICAL, logger="cfncompose"):
            with pytest.raises(UnsupportedResourceKind) as excinfo:
                self.registry.new_resource_properties("AWS::Made")
        assert excinfo.value.resource_type == "AWS::Made"
        assert caplog.records[-1].levelno == logging.CRITICAL
        assert caplog.records[-1].resource_type == "AWS::Made"

    @pytest.mark.parametrize("type_name", [
        "AWS::ECR::Repository",
        "AWS::Lambda::Url",
        "AWS::ApiGateway::Authorizer",
        "Alexa::ASK::Skill",
    ])
    def test_catalog_kinds_accepted(self, type_name):
        props = self.registry.new_resource_properties(type_name)
        assert isinstance(props, GenericResourceProperties)
        assert props.cfn_resource_type() == type_name

    @pytest.mark.parametrize("type_name", [
        "",
        "SQSQueue",
        "AWS::SQS",
        "aws::sqs::queue",
        "AWS::SQS::Queue::Extra",
        "AWS::SQS::",
        "Custom::",
        "Acme::Widget::Thing",
    ])
    def test_malformed_names_rejected(self, type_name):
        with pytest.raises(UnsupportedResourceKind):
            self.registry.new_resource_properties(type_name)

    def test_supported_types_listed(self):
        names = self.registry.supported_resource_types()
        assert "AWS::SQS::Queue" in names
        assert "AWS::CloudFormation::CustomResource" in names
        assert names == sorted(names)


class TestRegisterResourceType:
    def setup_method(self):
        from cfncompose import registry
        self.registry = registry

    def teardown_method(self):
        self.registry.unregister_resource_type("AWS::Test::Widget")

    def test_register_resource_type(self):
        @self.registry.register_resource_type
        @dataclass
        class Widget(ResourceProperties):
            resource_type: ClassVar[str] = "AWS::Test::Widget"

        props = self.registry.new_resource_properties("AWS::Test::Widget")
        assert isinstance(props, Widget)
        assert "AWS::Test::Widget" in self.registry.supported_resource_types()

    def test_unregister_falls_back_to_generic(self):
        @self.registry.register_resource_type
        @dataclass
        class Widget(ResourceProperties):
            resource_type: ClassVar[str] = "AWS::Test::Widget"

        self.registry.unregister_resource_type("AWS::Test::Widget")
        props = self.registry.new_resource_properties("AWS::Test::Widget")
        assert isinstance(props, GenericResourceProperties)
        assert "AWS::Test::Widget" not in self.registry.supported_resource_types()

    def test_register_requires_type_name(self):
        @dataclass
        class Nameless(ResourceProperties):
            pass

        with pytest.raises(ValueError):
            self.registry.register_resource_type(Nameless)
