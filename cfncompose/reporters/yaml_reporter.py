"""
YAML template writer. Intrinsics are written in their long form (Ref, Fn::GetAtt, ...).
"""
import yaml

from cfncompose.models.template import Template


def build_report(template: Template) -> str:
    return yaml.safe_dump(template.to_dict(), sort_keys=False, default_flow_style=False)
