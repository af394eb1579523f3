"""
Helpers for the optional DependsOn / Metadata collections of a Resource.

Both collections start out as None and are created on first write. Once
created they are only ever mutated in place, so other holders of the same
list or dict see every later change.
"""
from typing import Any

from cfncompose.models.resource import Resource


def add_dependency(resource: Resource, dependency_name: str) -> None:
    # duplicates are kept
    if resource.depends_on is None:
        resource.depends_on = []
    resource.depends_on.append(dependency_name)


def set_metadata(resource: Resource, key: str, value: Any) -> None:
    if resource.metadata is None:
        resource.metadata = {}
    resource.metadata[key] = value
