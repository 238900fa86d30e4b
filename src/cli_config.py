"""Invocation configuration.

Builds a single ResolverConfig from, in order of precedence, CLI
arguments, an optional YAML/JSON config file and built-in defaults.
Required fields are checked once, when the record is constructed.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import yaml

from constants import Constants, FailurePolicy
from errors import ConfigError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("group_id", "artifact_id", "version_range")


@dataclass(frozen=True)
class ResolverConfig:
    """Everything one invocation needs to know."""
    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version_range: Optional[str] = None
    include_snapshots: bool = False
    targets: List[str] = field(default_factory=lambda: list(Constants.DEFAULT_TARGETS))
    print_targets: List[str] = field(default_factory=list)
    property_names: Dict[str, str] = field(default_factory=lambda: dict(Constants.DEFAULT_PROPERTY_NAMES))
    variants: Dict[str, Optional[str]] = field(default_factory=lambda: dict(Constants.TARGET_VARIANTS))
    pom_file: str = Constants.POM_XML_FILE
    new_pom_file: Optional[str] = None
    repositories: List[str] = field(default_factory=lambda: [Constants.REPOSITORY_URL_MAVEN_CENTRAL])
    fail_on: FailurePolicy = FailurePolicy.ANY
    parallel: bool = False
    skip: bool = False
    output: Optional[str] = None

    def __post_init__(self):
        if self.skip:
            return
        missing = [name for name in REQUIRED_FIELDS if not (getattr(self, name) or "").strip()]
        if missing:
            raise ConfigError(f"Missing required configuration: {', '.join(missing)}")
        if not self.targets:
            raise ConfigError("At least one target is required")
        unknown_print = [t for t in self.print_targets if t not in self.targets]
        if unknown_print:
            raise ConfigError(f"Cannot print targets that are not resolved: {', '.join(unknown_print)}")
        if not self.repositories:
            raise ConfigError("At least one repository is required")

    @property
    def new_pom_path(self) -> Optional[str]:
        """Path of the POM to create, relative to the source POM's directory."""
        if not self.new_pom_file:
            return None
        return os.path.join(os.path.dirname(os.path.abspath(self.pom_file)), self.new_pom_file)


def load_config_file(path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML (or .json) config file into a dict.

    Raises:
        ConfigError: when the file is missing, unreadable or not a mapping.
    """
    if not path:
        return {}
    if not os.path.isfile(path):
        raise ConfigError(f"Config file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as fh:
            if path.lower().endswith(".json"):
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    # Accept either a flat mapping or one nested under "resolve".
    return data.get("resolve", data)


def parse_property_pairs(pairs: Optional[List[str]]) -> Dict[str, str]:
    """Parse TARGET=NAME items."""
    result: Dict[str, str] = {}
    for pair in pairs or []:
        target, sep, name = pair.partition("=")
        if not sep or not target.strip() or not name.strip():
            raise ConfigError(f"Invalid --property value '{pair}', expected TARGET=NAME")
        result[target.strip()] = name.strip()
    return result


def _as_list(value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


_TRUE_STRINGS = ("true", "yes", "on", "1")
_FALSE_STRINGS = ("false", "no", "off", "0")


def _as_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ConfigError(f"Invalid {key} value '{value}', expected true or false")


def _as_mapping(value: Any, key: str) -> Optional[Dict[str, Any]]:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ConfigError(f"'{key}' must be a mapping")
    return dict(value)


def build_config(args, file_values: Optional[Mapping[str, Any]] = None) -> ResolverConfig:
    """Merge CLI arguments over config-file values into a ResolverConfig.

    Raises:
        ConfigError: on missing required fields or invalid values.
    """
    file_values = dict(file_values or {})
    values: Dict[str, Any] = {}

    def pick(arg_name: str, key: str):
        cli_value = getattr(args, arg_name, None)
        if cli_value is not None:
            values[key] = cli_value
        elif file_values.get(key) is not None:
            values[key] = file_values[key]

    pick("GROUP_ID", "group_id")
    pick("ARTIFACT_ID", "artifact_id")
    pick("VERSION_RANGE", "version_range")
    pick("INCLUDE_SNAPSHOTS", "include_snapshots")
    pick("POM_FILE", "pom_file")
    pick("NEW_POM_FILE", "new_pom_file")
    pick("PARALLEL", "parallel")
    pick("SKIP", "skip")
    pick("OUTPUT", "output")
    pick("FAIL_ON", "fail_on")
    pick("TARGETS", "targets")
    pick("PRINT_TARGETS", "print_targets")
    pick("REPOSITORIES", "repositories")

    for key in ("targets", "print_targets", "repositories"):
        if key in values:
            values[key] = _as_list(values[key])
    for key in ("include_snapshots", "parallel", "skip"):
        if key in values:
            values[key] = _as_bool(values[key], key)
    for key in ("group_id", "artifact_id", "version_range"):
        if key in values:
            values[key] = str(values[key])

    if "fail_on" in values:
        try:
            values["fail_on"] = FailurePolicy(str(values["fail_on"]).lower())
        except ValueError as e:
            raise ConfigError(f"Invalid fail_on value '{values['fail_on']}'") from e

    property_names = dict(Constants.DEFAULT_PROPERTY_NAMES)
    property_names.update(_as_mapping(file_values.get("property_names"), "property_names") or {})
    property_names.update(parse_property_pairs(getattr(args, "PROPERTIES", None)))
    values["property_names"] = property_names

    variants = dict(Constants.TARGET_VARIANTS)
    variants.update(_as_mapping(file_values.get("variants"), "variants") or {})
    values["variants"] = variants

    config = ResolverConfig(**values)
    logger.debug("Configuration: %s", config)
    return config
