"""
Jute Configuration
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import List, Optional, Tuple

from jute.constants import (
    DEFAULT_PLOT_DIR,
    DEFAULT_LAYOUT,
    DEFAULT_EDGE_COLOR,
    DEFAULT_FIGSIZE,
    ORDER_SEPARATOR,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOG_FORMAT,
)

logger = logging.getLogger(__name__)


@dataclass
class GraphConfig:
    """Graph store configuration."""
    # Walk the live parent index under the lock instead of copying a
    # snapshot per query. Results are identical.
    incremental_index: bool = True


@dataclass
class ExportConfig:
    """Diagram export configuration."""
    output_dir: str = DEFAULT_PLOT_DIR
    layout: str = DEFAULT_LAYOUT
    edge_color: str = DEFAULT_EDGE_COLOR
    figsize: Tuple[int, int] = DEFAULT_FIGSIZE
    separator: str = ORDER_SEPARATOR

    def __post_init__(self):
        # JSON round-trips tuples as lists
        self.figsize = tuple(self.figsize)


@dataclass
class LogConfig:
    """Logging configuration."""
    level: str = DEFAULT_LOG_LEVEL
    file: Optional[str] = None
    format: str = DEFAULT_LOG_FORMAT
    max_size_mb: int = 100
    backup_count: int = 5


@dataclass
class JuteConfig:
    """
    Complete configuration.

    Groups the graph, export and logging settings so the demo CLI can load
    them from a single JSON file.
    """
    graph: GraphConfig = field(default_factory=GraphConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    log: LogConfig = field(default_factory=LogConfig)

    @property
    def output_path(self) -> Path:
        """Get export directory path."""
        return Path(self.export.output_dir)

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not self.export.output_dir:
            errors.append("output_dir cannot be empty")

        if not self.export.separator:
            errors.append("separator cannot be empty")

        if len(self.export.figsize) != 2 or min(self.export.figsize) <= 0:
            errors.append(f"Invalid figsize: {self.export.figsize}")

        if not isinstance(getattr(logging, self.log.level.upper(), None), int):
            errors.append(f"Invalid log level: {self.log.level}")

        if self.log.max_size_mb < 1:
            errors.append("max_size_mb must be at least 1")

        return errors

    def save(self, path: str) -> None:
        """Save configuration to file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info(f"Configuration saved to {path}")

    @classmethod
    def load(cls, path: str) -> "JuteConfig":
        """Load configuration from file."""
        with open(path, 'r') as f:
            data = json.load(f)

        config = cls()

        if "graph" in data:
            config.graph = GraphConfig(**data["graph"])

        if "export" in data:
            config.export = ExportConfig(**data["export"])

        if "log" in data:
            config.log = LogConfig(**data["log"])

        logger.info(f"Configuration loaded from {path}")
        return config

    def to_dict(self) -> dict:
        """Export configuration as dictionary."""
        return {
            "graph": asdict(self.graph),
            "export": asdict(self.export),
            "log": asdict(self.log),
        }


def setup_logging(config: LogConfig) -> None:
    """Configure logging based on config."""
    level = getattr(logging, config.level.upper(), logging.INFO)

    handlers = [logging.StreamHandler()]

    if config.file:
        from logging.handlers import RotatingFileHandler
        file_handler = RotatingFileHandler(
            config.file,
            maxBytes=config.max_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format=config.format,
        handlers=handlers,
    )
