import json
import os

import yaml

# Loader that tolerates CloudFormation-specific YAML tags (!Ref, !Sub, etc.)
# without raising an error, so detect_format can read CFN templates.
class _TagTolerantLoader(yaml.SafeLoader):
    pass

_TagTolerantLoader.add_multi_constructor(
    "!",
    lambda loader, suffix, node: loader.construct_yaml_str(node)
    if isinstance(node, yaml.ScalarNode) else None,
)

_TYPE_PREFIXES = ("AWS::", "Custom::")


def _looks_like_cfn(doc) -> bool:
    if not isinstance(doc, dict):
        return False
    if "AWSTemplateFormatVersion" in doc:
        return True
    resources = doc.get("Resources")
    if isinstance(resources, dict):
        return any(
            isinstance(v, dict) and str(v.get("Type", "")).startswith(_TYPE_PREFIXES)
            for v in resources.values()
        )
    return False


def detect_format(filepath: str) -> str:
    """
    Return 'cloudformation' or 'unknown'.
    """
    _, ext = os.path.splitext(filepath.lower())

    if ext in (".json", ".template"):
        try:
            with open(filepath) as fh:
                data = json.load(fh)
        except (OSError, ValueError):
            return "unknown"
        return "cloudformation" if _looks_like_cfn(data) else "unknown"

    if ext in (".yaml", ".yml"):
        try:
            with open(filepath) as fh:
                docs = list(yaml.load_all(fh, Loader=_TagTolerantLoader))
        except (OSError, yaml.YAMLError):
            return "unknown"

        for doc in docs:
            if _looks_like_cfn(doc):
                return "cloudformation"

    return "unknown"
