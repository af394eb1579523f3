"""
Output attribute resolution: which Fn::GetAtt attributes a resource kind exposes.
"""
import logging
from typing import Callable, Dict, List

from cfncompose.models.resource import (
    DynamoDBTable,
    IAMRole,
    KinesisStream,
    ResourceProperties,
    Route53RecordSet,
    S3Bucket,
    SNSTopic,
    SQSQueue,
)

logger = logging.getLogger(__name__)

OutputResolver = Callable[[ResourceProperties], List[str]]


def _static(*attrs: str) -> OutputResolver:
    return lambda _props: list(attrs)


def _dynamodb_outputs(props: ResourceProperties) -> List[str]:
    if getattr(props, "stream_specification", None) is not None:
        return ["StreamArn"]
    return []


_BUILTIN_RESOLVERS: Dict[str, OutputResolver] = {
    IAMRole.resource_type:          _static(),
    DynamoDBTable.resource_type:    _dynamodb_outputs,
    KinesisStream.resource_type:    _static("Arn"),
    # known gap, nothing exposed for record sets yet
    Route53RecordSet.resource_type: _static(),
    S3Bucket.resource_type:         _static("DomainName", "WebsiteURL"),
    SNSTopic.resource_type:         _static("TopicName"),
    SQSQueue.resource_type:         _static("Arn", "QueueName"),
}

_RESOLVERS: Dict[str, OutputResolver] = dict(_BUILTIN_RESOLVERS)


def register_output_resolver(resource_type: str, resolver: OutputResolver) -> None:
    """
    Add output resolution for a kind not covered by the built-in table.
    Built-in kinds keep their fixed attribute lists.
    """
    if resource_type in _BUILTIN_RESOLVERS:
        raise ValueError(f"outputs for {resource_type} are built in and cannot be replaced")
    _RESOLVERS[resource_type] = resolver


def register_static_outputs(resource_type: str, attrs: List[str]) -> None:
    register_output_resolver(resource_type, _static(*attrs))


def unregister_output_resolver(resource_type: str) -> None:
    if resource_type in _BUILTIN_RESOLVERS:
        raise ValueError(f"outputs for {resource_type} are built in and cannot be removed")
    _RESOLVERS.pop(resource_type, None)


def is_builtin(resource_type: str) -> bool:
    return resource_type in _BUILTIN_RESOLVERS


def resolve_outputs(props: ResourceProperties) -> List[str]:
    """
    Return the attribute names ``props`` exposes through Fn::GetAtt.
    Unknown kinds resolve to an empty list and log a warning; this never raises.
    """
    resource_type = props.cfn_resource_type()
    resolver = _RESOLVERS.get(resource_type)
    if resolver is None:
        logger.warning(
            "Discovery information for dependency not yet implemented: %s (%s)",
            resource_type,
            type(props).__name__,
            extra={"resource_type": resource_type},
        )
        return []
    return resolver(props)
