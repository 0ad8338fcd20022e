"""
Lint configuration loading.

Configuration is a YAML file merged over built-in defaults with OmegaConf.
The schema is the LintConfig dataclass, so unknown keys and wrongly typed
values are rejected at load time.

Example postlint.yaml:

    required_keys: [layout, title]
    allowed_layouts: [post]
    languages: [php, ruby, sql, bash]
    disabled_rules: [FN003]
    severity_overrides:
      CB002: error
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

load_dotenv()


class Severity(str, Enum):
    """How serious a finding is. Errors fail a lint run; warnings only fail it in strict mode."""

    ERROR = "error"
    WARNING = "warning"


class ConfigError(ValueError):
    """Raised when a lint configuration file is missing, malformed, or refers to unknown rules."""

    pass


@dataclass
class LintConfig:
    """
    Settings for a lint run.

    Attributes:
        required_keys: Front-matter keys every post must define with a non-empty value
        known_keys: Front-matter keys allowed in posts (empty list disables the check)
        allowed_layouts: Values accepted for "layout" (empty list disables the check)
        languages: Code block languages accepted (empty list disables the check)
        allow_string_lists: Accept "tags: a b c" as a whitespace-separated list
        disabled_rules: Rule ids that are not run
        severity_overrides: Rule id -> severity replacing the rule's default
    """

    required_keys: List[str] = field(default_factory=lambda: ["layout", "title"])
    known_keys: List[str] = field(default_factory=list)
    allowed_layouts: List[str] = field(default_factory=list)
    languages: List[str] = field(default_factory=list)
    allow_string_lists: bool = False
    disabled_rules: List[str] = field(default_factory=list)
    severity_overrides: Dict[str, str] = field(default_factory=dict)

    def is_enabled(self, rule_id: str) -> bool:
        return rule_id not in self.disabled_rules

    def severity_for(self, rule_id: str, default: Severity) -> Severity:
        value = self.severity_overrides.get(rule_id)
        if value is None:
            return default
        if isinstance(value, Severity):
            return value
        return Severity(value.lower())


def _default_config_path() -> Optional[Path]:
    value = os.getenv("POSTLINT_CONFIG")
    return Path(value) if value else None


def load_lint_config(config_path: Optional[Path] = None) -> LintConfig:
    """
    Load a lint configuration, merged over the defaults.

    Args:
        config_path: YAML file to load (defaults to POSTLINT_CONFIG env variable;
            if neither is set, the built-in defaults are returned)

    Returns:
        LintConfig instance

    Raises:
        ConfigError: If the file is missing or invalid, or names unknown rule ids
    """
    if config_path is None:
        config_path = _default_config_path()

    schema = OmegaConf.structured(LintConfig)
    if config_path is None:
        return OmegaConf.to_object(schema)

    config_path = Path(config_path)
    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        loaded = OmegaConf.load(config_path)
        merged = OmegaConf.merge(schema, loaded)
        config = OmegaConf.to_object(merged)
    except (OmegaConfBaseException, yaml.YAMLError, ValueError) as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e

    validate_rule_ids(config)
    validate_severities(config)
    return config


def validate_rule_ids(config: LintConfig) -> None:
    """
    Check that every rule id the config mentions exists.

    Raises:
        ConfigError: Listing the unknown ids
    """
    from postlint.contexts.linting.rules import RULES

    mentioned = list(config.disabled_rules) + list(config.severity_overrides)
    unknown = sorted({rule_id for rule_id in mentioned if rule_id not in RULES})
    if unknown:
        available = ", ".join(sorted(RULES))
        raise ConfigError(f"Unknown rule id(s): {', '.join(unknown)}. Available rules: {available}")


def validate_severities(config: LintConfig) -> None:
    """
    Check that every severity override is "error" or "warning".

    Raises:
        ConfigError: Naming the first bad override
    """
    allowed = [severity.value for severity in Severity]
    for rule_id, value in config.severity_overrides.items():
        if not isinstance(value, str) or value.lower() not in allowed:
            raise ConfigError(
                f"Invalid severity '{value}' for {rule_id}. Expected one of: {', '.join(allowed)}"
            )
