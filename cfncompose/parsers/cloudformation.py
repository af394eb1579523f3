import datetime
import json
import logging
import os
from typing import Any, Dict, List, Optional

import yaml

from cfncompose.detect import detect_format
from cfncompose.models.errors import TemplateParseError
from cfncompose.models.resource import Resource
from cfncompose.models.template import Template
from cfncompose.registry import new_resource_properties

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------ CFN YAML loader
# yaml.safe_load can't handle CloudFormation short-form tags (!Ref, !Sub, !If, etc.).
# Multi-constructors rewrite them into the long-form intrinsic dicts so a loaded
# YAML template looks exactly like the equivalent JSON one.

class _CfnLoader(yaml.SafeLoader):
    pass


# Unquoted dates (AWSTemplateFormatVersion: 2010-09-09, policy Version: 2012-10-17)
# stay strings; a datetime.date is not JSON serializable.
_CfnLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _intrinsic_name(tag_suffix: str) -> str:
    if tag_suffix in ("Ref", "Condition"):
        return tag_suffix
    return f"Fn::{tag_suffix}"


def _cfn_tag_constructor(loader: yaml.SafeLoader, tag_suffix: str, node: yaml.Node) -> Any:
    key = _intrinsic_name(tag_suffix)
    if isinstance(node, yaml.ScalarNode):
        value = loader.construct_scalar(node)
        # !GetAtt Resource.Attribute
        if tag_suffix == "GetAtt" and isinstance(value, str) and "." in value:
            return {key: value.split(".", 1)}
        return {key: value}
    if isinstance(node, yaml.SequenceNode):
        return {key: loader.construct_sequence(node, deep=True)}
    if isinstance(node, yaml.MappingNode):
        return {key: loader.construct_mapping(node, deep=True)}
    return {key: None}


_CfnLoader.add_multi_constructor("!", _cfn_tag_constructor)


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def _load(filepath: str) -> Any:
    _, ext = os.path.splitext(filepath.lower())
    try:
        with open(filepath) as fh:
            if ext in (".json", ".template"):
                return json.load(fh)
            return yaml.load(fh, Loader=_CfnLoader)
    except OSError as exc:
        raise TemplateParseError(filepath, exc.strerror or str(exc)) from exc
    except (ValueError, yaml.YAMLError) as exc:
        raise TemplateParseError(filepath, str(exc)) from exc


def _section(template: Dict[str, Any], name: str, filepath: str) -> Dict[str, Any]:
    value = template.get(name) or {}
    if not isinstance(value, dict):
        raise TemplateParseError(filepath, f"{name} must be a mapping")
    return value


_TEMPLATE_KEYS = {
    "AWSTemplateFormatVersion", "Description", "Transform", "Metadata", "Parameters",
    "Rules", "Mappings", "Conditions", "Resources", "Outputs",
}

_RESOURCE_KEYS = {
    "Type", "Properties", "DependsOn", "Metadata", "Condition", "DeletionPolicy",
    "UpdateReplacePolicy", "CreationPolicy", "UpdatePolicy",
}


def _format_version(value: Any) -> Optional[str]:
    # yaml.safe_load turns an unquoted 2010-09-09 into a date
    if value is None:
        return None
    if isinstance(value, datetime.date):
        return value.isoformat()
    return str(value)


def from_dict(template: Dict[str, Any], filepath: str = "") -> Template:
    """Build a Template from an already-loaded CloudFormation document."""
    if not isinstance(template, dict):
        raise TemplateParseError(filepath, "template is not a mapping")

    result = Template(
        mappings=dict(_section(template, "Mappings", filepath)),
        outputs=dict(_section(template, "Outputs", filepath)),
        format_version=_format_version(template.get("AWSTemplateFormatVersion")),
        description=template.get("Description"),
        transform=template.get("Transform"),
        metadata=dict(_section(template, "Metadata", filepath)),
        parameters=dict(_section(template, "Parameters", filepath)),
        rules=dict(_section(template, "Rules", filepath)),
        conditions=dict(_section(template, "Conditions", filepath)),
        extra={k: v for k, v in template.items() if k not in _TEMPLATE_KEYS},
        source_file=filepath,
    )

    for logical_name, definition in _section(template, "Resources", filepath).items():
        if not isinstance(definition, dict):
            raise TemplateParseError(filepath, f"resource {logical_name} is not a mapping")
        resource_type = definition.get("Type")
        if not resource_type or not isinstance(resource_type, str):
            raise TemplateParseError(filepath, f"resource {logical_name} has no valid Type")

        props = new_resource_properties(resource_type, definition.get("Properties") or {})
        depends_on = definition.get("DependsOn")
        metadata = definition.get("Metadata")
        result.resources[logical_name] = Resource(
            properties=props,
            depends_on=_as_list(depends_on) if depends_on is not None else None,
            metadata=dict(metadata) if metadata is not None else None,
            condition=definition.get("Condition"),
            deletion_policy=definition.get("DeletionPolicy"),
            update_replace_policy=definition.get("UpdateReplacePolicy"),
            creation_policy=definition.get("CreationPolicy"),
            update_policy=definition.get("UpdatePolicy"),
            extra={k: v for k, v in definition.items() if k not in _RESOURCE_KEYS},
        )

    logger.debug(
        "Loaded %d resources from %s", len(result.resources), filepath or "<dict>"
    )
    return result


def parse_file(filepath: str) -> Template:
    return from_dict(_load(filepath), filepath)


def parse_directory(path: str) -> List[Template]:
    templates: List[Template] = []

    if os.path.isfile(path):
        if detect_format(path) == "cloudformation":
            templates.append(parse_file(path))
        return templates

    for root, _, files in os.walk(path):
        for fname in sorted(files):
            fpath = os.path.join(root, fname)
            if detect_format(fpath) == "cloudformation":
                templates.append(parse_file(fpath))

    return templates
