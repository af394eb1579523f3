from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional


@dataclass
class ResourceProperties:
    """
    Typed view over the ``Properties`` block of one CloudFormation resource.

    Subclasses pin ``resource_type`` to a canonical CloudFormation type name
    and expose accessors for the fields the rest of the package cares about.
    The raw property dict is kept verbatim so templates round-trip unchanged.
    """

    resource_type: ClassVar[str] = ""

    properties: Dict[str, Any] = field(default_factory=dict)

    def cfn_resource_type(self) -> str:
        return self.resource_type

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.properties)


@dataclass
class IAMRole(ResourceProperties):
    resource_type: ClassVar[str] = "AWS::IAM::Role"

    @property
    def assume_role_policy_document(self) -> Optional[Dict[str, Any]]:
        return self.properties.get("AssumeRolePolicyDocument")


@dataclass
class DynamoDBTable(ResourceProperties):
    resource_type: ClassVar[str] = "AWS::DynamoDB::Table"

    @property
    def stream_specification(self) -> Optional[Dict[str, Any]]:
        return self.properties.get("StreamSpecification")


@dataclass
class KinesisStream(ResourceProperties):
    resource_type: ClassVar[str] = "AWS::Kinesis::Stream"

    @property
    def shard_count(self) -> Optional[int]:
        return self.properties.get("ShardCount")


@dataclass
class Route53RecordSet(ResourceProperties):
    resource_type: ClassVar[str] = "AWS::Route53::RecordSet"

    @property
    def record_name(self) -> Optional[str]:
        return self.properties.get("Name")


@dataclass
class S3Bucket(ResourceProperties):
    resource_type: ClassVar[str] = "AWS::S3::Bucket"

    @property
    def bucket_name(self) -> Optional[str]:
        return self.properties.get("BucketName")


@dataclass
class SNSTopic(ResourceProperties):
    resource_type: ClassVar[str] = "AWS::SNS::Topic"

    @property
    def topic_name(self) -> Optional[str]:
        return self.properties.get("TopicName")


@dataclass
class SQSQueue(ResourceProperties):
    resource_type: ClassVar[str] = "AWS::SQS::Queue"

    @property
    def queue_name(self) -> Optional[str]:
        return self.properties.get("QueueName")


@dataclass
class LambdaFunction(ResourceProperties):
    resource_type: ClassVar[str] = "AWS::Lambda::Function"

    @property
    def role(self) -> Any:
        return self.properties.get("Role")


@dataclass
class GenericResourceProperties(ResourceProperties):
    """Known AWS kind with no dedicated class; the type name travels with the instance."""

    type_name: str = ""

    def cfn_resource_type(self) -> str:
        return self.type_name


@dataclass
class CustomResourceProperties(ResourceProperties):
    type_name: str = "AWS::CloudFormation::CustomResource"

    def cfn_resource_type(self) -> str:
        return self.type_name

    @property
    def service_token(self) -> Any:
        return self.properties.get("ServiceToken")


@dataclass
class Resource:
    properties: ResourceProperties
    # None until the first dependency / metadata key is added (see cfncompose.mutation)
    depends_on: Optional[List[str]] = None
    metadata: Optional[Dict[str, Any]] = None
    condition: Optional[str] = None
    deletion_policy: Optional[str] = None
    update_replace_policy: Optional[str] = None
    creation_policy: Optional[Dict[str, Any]] = None
    update_policy: Optional[Dict[str, Any]] = None
    # any other resource-level keys, written back unchanged
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def resource_type(self) -> str:
        return self.properties.cfn_resource_type()

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"Type": self.resource_type}
        props = self.properties.to_dict()
        if props:
            out["Properties"] = props
        if self.depends_on:
            out["DependsOn"] = list(self.depends_on)
        if self.metadata:
            out["Metadata"] = dict(self.metadata)
        if self.condition:
            out["Condition"] = self.condition
        if self.deletion_policy:
            out["DeletionPolicy"] = self.deletion_policy
        if self.update_replace_policy:
            out["UpdateReplacePolicy"] = self.update_replace_policy
        if self.creation_policy:
            out["CreationPolicy"] = dict(self.creation_policy)
        if self.update_policy:
            out["UpdatePolicy"] = dict(self.update_policy)
        out.update(self.extra)
        return out
