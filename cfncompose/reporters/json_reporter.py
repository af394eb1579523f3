"""
JSON template writer.
"""
import json

from cfncompose.models.template import Template


def build_report(template: Template) -> str:
    return json.dumps(template.to_dict(), indent=2)
