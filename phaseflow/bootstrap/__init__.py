"""
bootstrap/ - configuration and logging setup.
"""

from .config import (
    LoggingConfig,
    PhaseflowConfig,
    get_config,
    load_config,
    reset_config,
)
from .logging_setup import (
    JSONFormatter,
    setup_logging,
)

__all__ = [
    "LoggingConfig",
    "PhaseflowConfig",
    "get_config",
    "load_config",
    "reset_config",
    "JSONFormatter",
    "setup_logging",
]
