"""Configuration management for todolist."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .core.calendar import first_weekday, parse_weekday
from .core.store import DEFAULT_CATEGORIES

logger = logging.getLogger(__name__)

TODO_HOME = Path(os.environ.get("TODO_HOME", Path.home() / ".todolist"))
CONFIG_FILE = TODO_HOME / "config" / "todo.conf"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class Config:
    """todolist configuration."""

    locale: str = "en_US"
    week_start: str = ""
    default_categories: list[str] = field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    log_level: str = "WARNING"

    def first_weekday(self) -> int:
        """0=Monday..6=Sunday; week_start wins over the locale when valid."""
        if self.week_start:
            try:
                return parse_weekday(self.week_start)
            except ValueError:
                logger.warning(f"Invalid WEEK_START '{self.week_start}', using locale {self.locale}")
        return first_weekday(self.locale)


def _unquote(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from todo.conf."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            logger.warning(f"Ignoring malformed config line: {line}")
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "locale":
                config.locale = value
            case "week_start":
                config.week_start = value
            case "default_categories":
                config.default_categories = [c.strip() for c in value.split(",") if c.strip()]
            case "log_level":
                config.log_level = value.upper()

    return config


def configure_logging(config: Config, debug: bool = False) -> None:
    """Route log records to stderr at the configured level."""
    level = logging.DEBUG if debug else getattr(logging, config.log_level, None)
    if not isinstance(level, int):
        logger.warning(f"Invalid LOG_LEVEL '{config.log_level}', using WARNING")
        level = logging.WARNING
    logging.basicConfig(format=LOG_FORMAT, level=level)
