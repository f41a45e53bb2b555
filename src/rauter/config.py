"""
=============================================================================
ROUTER CONFIGURATION
=============================================================================

Centralized configuration for the router.

The router has very few knobs, but they still live in one typed, validated
place rather than being scattered across constructor arguments:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION SOURCES                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   1. Explicit arguments                                              │
    │      └── Router("nothing here")                                      │
    │                                                                      │
    │   2. A RouterConfig instance                                         │
    │      └── Router(config=RouterConfig(freeze_on_first_dispatch=True)) │
    │                                                                      │
    │   3. Environment variables (opt-in only)                             │
    │      └── Router(config=RouterConfig.from_env())                      │
    │                                                                      │
    │   4. Default values (in this dataclass)                              │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The router itself never reads the environment. Applications that want
12-factor style configuration call RouterConfig.from_env() explicitly.

=============================================================================
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_TRUTHY = ("1", "true", "yes", "on")


@dataclass
class RouterConfig:
    """
    Configuration for a Router.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    FALLBACK
    - not_found_message

    LIFECYCLE
    - freeze_on_first_dispatch

    LOGGING
    - log_level

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # FALLBACK
    # ─────────────────────────────────────────────────────────────────────

    not_found_message: str = "not found"
    """
    Body written by the fallback handler together with status 404.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LIFECYCLE
    # ─────────────────────────────────────────────────────────────────────

    freeze_on_first_dispatch: bool = False
    """
    Freeze the router the first time it dispatches a request.
    Any registration after that raises RouterFrozenError.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "WARNING"
    """
    Level applied by setup_logging(config) (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    DEBUG shows every registration and every dispatch decision.
    """

    @classmethod
    def from_env(cls) -> "RouterConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        RAUTER_NOT_FOUND_MESSAGE          404 body (default: not found)
        RAUTER_LOG_LEVEL                  Logging level (default: WARNING)
        RAUTER_FREEZE_ON_FIRST_DISPATCH   1/true/yes/on to enable

        =====================================================================
        """
        return cls(
            not_found_message=os.getenv("RAUTER_NOT_FOUND_MESSAGE", "not found"),
            log_level=os.getenv("RAUTER_LOG_LEVEL", "WARNING"),
            freeze_on_first_dispatch=(
                os.getenv("RAUTER_FREEZE_ON_FIRST_DISPATCH", "").strip().lower() in _TRUTHY
            ),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Called by Router.__init__ so a bad configuration fails at startup,
        not on the first unmatched request.
        """
        if not isinstance(self.not_found_message, str):
            raise ConfigurationError(
                f"not_found_message must be a string, got {type(self.not_found_message).__name__}"
            )

        if not isinstance(self.log_level, str) or self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log_level: {self.log_level!r}. Must be one of {', '.join(_LOG_LEVELS)}."
            )


def setup_logging(config: Optional[RouterConfig] = None) -> None:
    """
    Configure logging for applications that have not done so themselves.

    Libraries should not configure the root logger on import, so this is
    an explicit call. It installs a basic handler and sets the level of
    the "rauter" logger namespace to config.log_level.

    Args:
        config: Configuration to read log_level from (default: RouterConfig())
    """
    config = config or RouterConfig()
    config.validate()

    numeric_level = getattr(logging, config.log_level.upper())

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logging.getLogger("rauter").setLevel(numeric_level)
