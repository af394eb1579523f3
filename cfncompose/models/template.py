from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from cfncompose.models.resource import Resource


@dataclass
class Template:
    resources: Dict[str, Resource] = field(default_factory=dict)
    mappings: Dict[str, Any] = field(default_factory=dict)
    outputs: Dict[str, Any] = field(default_factory=dict)
    # Carried through from loaded files so a template can be written back out
    format_version: Optional[str] = None
    description: Optional[str] = None
    transform: Any = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    parameters: Dict[str, Any] = field(default_factory=dict)
    rules: Dict[str, Any] = field(default_factory=dict)
    conditions: Dict[str, Any] = field(default_factory=dict)
    # any other top-level sections, written back unchanged
    extra: Dict[str, Any] = field(default_factory=dict)
    source_file: str = ""

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.format_version:
            out["AWSTemplateFormatVersion"] = self.format_version
        if self.description:
            out["Description"] = self.description
        if self.transform:
            out["Transform"] = self.transform
        if self.metadata:
            out["Metadata"] = dict(self.metadata)
        if self.parameters:
            out["Parameters"] = dict(self.parameters)
        if self.rules:
            out["Rules"] = dict(self.rules)
        if self.mappings:
            out["Mappings"] = dict(self.mappings)
        if self.conditions:
            out["Conditions"] = dict(self.conditions)
        out["Resources"] = {name: r.to_dict() for name, r in self.resources.items()}
        if self.outputs:
            out["Outputs"] = dict(self.outputs)
        out.update(self.extra)
        return out
