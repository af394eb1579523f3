from dataclasses import dataclass
from typing import List, Optional


class CfnComposeError(Exception):
    """Base class for every error raised by cfncompose."""


class UnsupportedResourceKind(CfnComposeError):
    def __init__(self, resource_type: str):
        self.resource_type = resource_type
        super().__init__(f"Unsupported CustomResourceType: {resource_type}")


@dataclass
class Collision:
    collection: str   # "Resources", "Mappings", "Outputs"
    name: str         # logical name present in both templates

    @property
    def message(self) -> str:
        label = _COLLISION_LABELS.get(self.collection, self.collection)
        return f"Duplicate CloudFormation {label}: {self.name}"


_COLLISION_LABELS = {
    "Resources": "resource name",
    "Mappings": "Mapping name",
    "Outputs": "output key name",
}


class TemplateCollision(CfnComposeError):
    """
    One or more logical names exist in both templates of a merge.
    Every collision found is listed, not just the first one.
    """

    def __init__(self, collisions: List[Collision]):
        self.collisions = list(collisions)
        lines = ["Template merge failed"]
        lines.extend(f"  {c.message}" for c in self.collisions)
        super().__init__("\n".join(lines))

    @property
    def names(self) -> List[str]:
        return [c.name for c in self.collisions]


class RenderingFailure(CfnComposeError):
    pass


class TemplateParseError(CfnComposeError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"failed to parse {path}: {reason}")


class ConfigError(CfnComposeError):
    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)
