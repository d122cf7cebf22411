"""
Configuration settings for the combat log reader.

Settings come from environment variables and can be overlaid with a YAML
file through :mod:`combatlog.config.loader`.
"""

import codecs
import os
import logging
from dataclasses import dataclass

from rich.logging import RichHandler

VALID_ERROR_HANDLERS = ("strict", "ignore", "replace", "backslashreplace", "surrogateescape")
VALID_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass
class ReaderSettings:
    """Combat log reader configuration."""

    # Line format
    time_separator: str = "  "
    part_separator: str = ","

    # File decoding
    encoding: str = "utf-8-sig"
    errors: str = "strict"

    # Reading behaviour
    offset: int = 0
    strict: bool = False

    log_level: str = "info"

    @classmethod
    def from_env(cls) -> "ReaderSettings":
        """Load reader settings from environment variables."""
        return cls(
            time_separator=os.getenv("COMBATLOG_TIME_SEPARATOR", "  "),
            part_separator=os.getenv("COMBATLOG_PART_SEPARATOR", ","),
            encoding=os.getenv("COMBATLOG_ENCODING", "utf-8-sig"),
            errors=os.getenv("COMBATLOG_ERRORS", "strict"),
            offset=int(os.getenv("COMBATLOG_OFFSET", "0")),
            strict=os.getenv("COMBATLOG_STRICT", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "info").lower(),
        )

    def validate(self):
        """Validate configuration settings."""
        errors = []

        if not self.time_separator:
            errors.append("Timestamp separator must not be empty")
        if len(self.part_separator) != 1:
            errors.append(f"Parameter separator must be a single character: {self.part_separator!r}")
        if self.offset < 0:
            errors.append(f"Offset must be non-negative: {self.offset}")
        if self.errors not in VALID_ERROR_HANDLERS:
            errors.append(f"Unknown decoding error handler: {self.errors}")
        if self.log_level.lower() not in VALID_LOG_LEVELS:
            errors.append(f"Unknown log level: {self.log_level}")

        try:
            codecs.lookup(self.encoding)
        except LookupError:
            errors.append(f"Unknown encoding: {self.encoding}")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    def setup_logging(self, console=None):
        """Configure logging based on settings."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=console, rich_tracebacks=True)],
        )

    def log_configuration(self):
        """Log current configuration."""
        logger = logging.getLogger(__name__)

        logger.info("=== Reader Configuration ===")
        logger.info(f"Timestamp separator: {self.time_separator!r}")
        logger.info(f"Parameter separator: {self.part_separator!r}")
        logger.info(f"Encoding: {self.encoding} (errors={self.errors})")
        logger.info(f"Offset: {self.offset}")
        logger.info(f"Strict: {self.strict}")
        logger.info("=== End Configuration ===")


# Global settings instance
settings = ReaderSettings.from_env()


def get_settings() -> ReaderSettings:
    """Get the global settings instance."""
    return settings


def reload_settings() -> ReaderSettings:
    """Reload settings from environment variables."""
    global settings
    settings = ReaderSettings.from_env()
    return settings
