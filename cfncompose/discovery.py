"""
Discovery documents: a small descriptor that lets a dependent component refer
to another resource's realized attributes.
"""
from typing import List, Optional

from jinja2 import Environment, StrictUndefined, TemplateError

from cfncompose.models.errors import RenderingFailure
from cfncompose.models.template import Template
from cfncompose.outputs import resolve_outputs

# << >> delimiters keep this pattern clear of any {{ }} pass run over the result.
DISCOVERY_PATTERN = "\n".join([
    "",
    "\t{",
    '\t\t"ResourceID" : "<< resource_id >>",',
    '\t\t"ResourceRef" : "{"Ref":"<< resource_id >>"}",',
    '\t\t"ResourceType" : "<< resource_type >>",',
    '\t\t"Properties" : {',
    "\t\t\t<< resource_properties >>",
    "\t\t}",
    "\t}",
    "",
])

_ENV = Environment(
    variable_start_string="<<",
    variable_end_string=">>",
    block_start_string="<%",
    block_end_string="%>",
    comment_start_string="<#",
    comment_end_string="#>",
    autoescape=False,
    keep_trailing_newline=True,
    undefined=StrictUndefined,
)


def _get_att_entry(logical_name: str, attr: str) -> str:
    return f'"{attr}" :"{{ "Fn::GetAtt" : [ "{logical_name}", "{attr}" ] }}"'


def format_properties(logical_name: str, attrs: List[str]) -> str:
    return ",".join(_get_att_entry(logical_name, a) for a in attrs)


def render_discovery(
    template: Template, logical_name: str, pattern: str = DISCOVERY_PATTERN
) -> Optional[bytes]:
    """
    Render the discovery document for ``logical_name``.

    Returns None when the template declares no such resource. Raises
    RenderingFailure if the document pattern cannot be compiled or rendered;
    no partial output is returned in that case.
    """
    resource = template.resources.get(logical_name)
    if resource is None:
        return None

    attrs = resolve_outputs(resource.properties)

    try:
        compiled = _ENV.from_string(pattern)
        rendered = compiled.render(
            resource_id=logical_name,
            resource_type=resource.resource_type,
            resource_properties=format_properties(logical_name, attrs),
        )
    except TemplateError as exc:
        raise RenderingFailure(
            f"failed to render discovery document for {logical_name}: {exc}"
        ) from exc

    return rendered.encode("utf-8")
