"""
bootstrap/config.py - phaseflow configuration

Configuration loading from JSON files, environment variables, and
defaults. Only template loading and logging are configurable; the
validation functions read no configuration.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from pathlib import Path
import os
import json
import logging

from phaseflow.catalog.registry import TemplateRegistry, build_registry
from .logging_setup import DEFAULT_FORMAT, setup_logging

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = DEFAULT_FORMAT
    log_file: Optional[str] = None
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("PHASEFLOW_LOG_LEVEL", "INFO"),
            format=os.getenv("PHASEFLOW_LOG_FORMAT", DEFAULT_FORMAT),
            log_file=os.getenv("PHASEFLOW_LOG_FILE"),
            json_logs=_env_flag("PHASEFLOW_JSON_LOGS", "false"),
        )

    def apply(self) -> logging.Logger:
        return setup_logging(self.level, self.log_file, self.json_logs, self.format)


@dataclass
class PhaseflowConfig:
    """Root configuration."""

    template_paths: List[str] = field(default_factory=list)
    include_builtin_templates: bool = True
    strict_template_references: bool = False

    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "PhaseflowConfig":
        """Create configuration from environment variables."""
        paths = os.getenv("PHASEFLOW_TEMPLATE_PATHS", "")
        return cls(
            template_paths=[p for p in paths.split(os.pathsep) if p.strip()],
            include_builtin_templates=_env_flag("PHASEFLOW_INCLUDE_BUILTINS", "true"),
            strict_template_references=_env_flag("PHASEFLOW_STRICT_REFERENCES", "false"),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_file(cls, filepath: str) -> "PhaseflowConfig":
        """Load configuration from JSON file, over environment defaults."""
        path = Path(filepath)
        if not path.exists():
            logger.warning(f"Config file not found: {filepath}, using defaults")
            return cls.from_env()

        with open(path) as f:
            data = json.load(f)

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "PhaseflowConfig":
        config = cls.from_env()

        if "template_paths" in data:
            config.template_paths = list(data["template_paths"])
        if "include_builtin_templates" in data:
            config.include_builtin_templates = bool(data["include_builtin_templates"])
        if "strict_template_references" in data:
            config.strict_template_references = bool(data["strict_template_references"])

        if "logging" in data:
            for key, value in data["logging"].items():
                if hasattr(config.logging, key):
                    setattr(config.logging, key, value)

        return config

    def to_dict(self) -> Dict[str, Any]:
        return {
            "template_paths": list(self.template_paths),
            "include_builtin_templates": self.include_builtin_templates,
            "strict_template_references": self.strict_template_references,
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
                "json_logs": self.logging.json_logs,
            },
        }

    def create_registry(self) -> TemplateRegistry:
        """Registry holding the configured templates."""
        return build_registry(
            template_paths=self.template_paths,
            include_builtins=self.include_builtin_templates,
            strict_references=self.strict_template_references,
        )


# Global config instance
_config: Optional[PhaseflowConfig] = None


def load_config(filepath: Optional[str] = None) -> PhaseflowConfig:
    """
    Load configuration from file or environment.

    Args:
        filepath: Optional path to JSON config file; ``./phaseflow.json``
            is tried when omitted

    Returns:
        PhaseflowConfig instance
    """
    global _config

    if filepath:
        _config = PhaseflowConfig.from_file(filepath)
    elif Path("./phaseflow.json").exists():
        logger.info("Loading config from: ./phaseflow.json")
        _config = PhaseflowConfig.from_file("./phaseflow.json")
    else:
        _config = PhaseflowConfig.from_env()

    logger.info(
        f"Configuration loaded: {len(_config.template_paths)} template path(s), "
        f"builtins={_config.include_builtin_templates}"
    )
    return _config


def get_config() -> PhaseflowConfig:
    """Get current configuration, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    global _config
    _config = None
