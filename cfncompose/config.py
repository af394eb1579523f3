"""
Optional ``cfncompose.yaml`` configuration.

    log_level: INFO
    outputs:
      AWS::Lambda::Function: [Arn]
      AWS::KMS::Key: [Arn, KeyId]
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import yaml

from cfncompose.models.errors import ConfigError
from cfncompose.outputs import is_builtin, register_static_outputs

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "cfncompose.yaml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    log_level: str = "WARNING"
    outputs: Dict[str, List[str]] = field(default_factory=dict)


def _parse(data: dict, path: str) -> Config:
    log_level = str(data.get("log_level", "WARNING")).upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigError(f"unknown log_level {log_level!r}", path)

    raw_outputs = data.get("outputs") or {}
    if not isinstance(raw_outputs, dict):
        raise ConfigError("outputs must be a mapping of resource type to attribute list", path)

    outputs: Dict[str, List[str]] = {}
    for resource_type, attrs in raw_outputs.items():
        if isinstance(attrs, str):
            attrs = [attrs]
        if not isinstance(attrs, list) or not all(isinstance(a, str) for a in attrs):
            raise ConfigError(f"outputs for {resource_type} must be a list of names", path)
        outputs[str(resource_type)] = attrs

    return Config(log_level=log_level, outputs=outputs)


def load_config(path: Optional[str] = None) -> Config:
    """
    Load configuration from ``path``, or from ./cfncompose.yaml when no path
    is given. A missing default file means defaults; a missing explicit file
    is an error.
    """
    explicit = path is not None
    path = path or DEFAULT_CONFIG_FILE
    if not os.path.exists(path):
        if explicit:
            raise ConfigError("config file not found", path)
        return Config()

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(str(exc), path) from exc

    if not isinstance(data, dict):
        raise ConfigError("top level must be a mapping", path)
    return _parse(data, path)


def apply_config(config: Config) -> None:
    for resource_type, attrs in config.outputs.items():
        if is_builtin(resource_type):
            logger.warning(
                "Ignoring configured outputs for built-in type %s",
                resource_type,
                extra={"resource_type": resource_type},
            )
            continue
        register_static_outputs(resource_type, attrs)
