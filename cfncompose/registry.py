"""
Resource-type registry: builds typed property objects from CloudFormation type names.
"""
import logging
import re
from typing import Any, Dict, List, Optional, Type

from cfncompose.models.errors import UnsupportedResourceKind
from cfncompose.models.resource import (
    CustomResourceProperties,
    DynamoDBTable,
    GenericResourceProperties,
    IAMRole,
    KinesisStream,
    LambdaFunction,
    ResourceProperties,
    Route53RecordSet,
    S3Bucket,
    SNSTopic,
    SQSQueue,
)

logger = logging.getLogger(__name__)

_RESOURCE_CLASSES: Dict[str, Type[ResourceProperties]] = {
    cls.resource_type: cls
    for cls in (
        IAMRole,
        DynamoDBTable,
        KinesisStream,
        Route53RecordSet,
        S3Bucket,
        SNSTopic,
        SQSQueue,
        LambdaFunction,
    )
}

# Any well-formed catalog name without a dedicated class, e.g. AWS::ECR::Repository
_TYPE_NAME_RE = re.compile(r"^(AWS|Alexa)::[A-Za-z0-9]+::[A-Za-z0-9]+$")

_CUSTOM_RE = re.compile(r"^Custom::[A-Za-z0-9_@-]{1,60}$")
_CUSTOM_RESOURCE_TYPE = "AWS::CloudFormation::CustomResource"


def register_resource_type(cls: Type[ResourceProperties]) -> Type[ResourceProperties]:
    """Register a dedicated property class. Usable as a class decorator."""
    if not cls.resource_type:
        raise ValueError(f"{cls.__name__} does not define resource_type")
    _RESOURCE_CLASSES[cls.resource_type] = cls
    return cls


def unregister_resource_type(resource_type: str) -> None:
    _RESOURCE_CLASSES.pop(resource_type, None)


def supported_resource_types() -> List[str]:
    """Types with a dedicated class; every other well-formed name is accepted generically."""
    return sorted(set(_RESOURCE_CLASSES) | {_CUSTOM_RESOURCE_TYPE})


def new_resource_properties(
    resource_type: str, properties: Optional[Dict[str, Any]] = None
) -> ResourceProperties:
    """
    Return a fresh property object for ``resource_type``.
    Raises UnsupportedResourceKind when the type name is malformed.
    """
    props = dict(properties or {})

    cls = _RESOURCE_CLASSES.get(resource_type)
    if cls is not None:
        return cls(properties=props)
    if _CUSTOM_RE.match(resource_type) or resource_type == _CUSTOM_RESOURCE_TYPE:
        return CustomResourceProperties(properties=props, type_name=resource_type)
    if _TYPE_NAME_RE.match(resource_type):
        return GenericResourceProperties(properties=props, type_name=resource_type)

    logger.critical(
        "Failed to create CloudFormation resource of type %s",
        resource_type,
        extra={"resource_type": resource_type},
    )
    raise UnsupportedResourceKind(resource_type)
