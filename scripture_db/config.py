# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load all configuration from environment variables / .env file.
#   Provides typed config objects to all other modules.
#
# CLASSES:
# --------
# - SourceConfig (dataclass)
#     source_dir: str            (default ".")
#     catechism_file: str        (default "ccc.json")
#     excluded_files: tuple      (default ("package.json", "package-lock.json"))
#
# - OutputConfig (dataclass)
#     output_dir: str            (default "databases")
#     batch_size: int            (default 1000)
#
# - AppConfig (dataclass)
#     source: SourceConfig
#     output: OutputConfig
#     log_level: str             (default "INFO")
#
# FUNCTIONS:
# ----------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Drop the singleton so the next get_config() reloads.
#
# USAGE:
# ------
#   from scripture_db.config import get_config
#   config = get_config()
#   print(config.output.output_dir)
#   print(config.output.batch_size)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv


DEFAULT_EXCLUDED_FILES = ("package.json", "package-lock.json")


@dataclass
class SourceConfig:
    """Where the JSON corpora are discovered."""
    source_dir: str = "."
    catechism_file: str = "ccc.json"
    excluded_files: tuple[str, ...] = field(default_factory=lambda: DEFAULT_EXCLUDED_FILES)


@dataclass
class OutputConfig:
    """Where the SQLite stores are written and how they are loaded."""
    output_dir: str = "databases"
    batch_size: int = 1000


@dataclass
class AppConfig:
    """Main application configuration."""
    source: SourceConfig
    output: OutputConfig
    log_level: str = "INFO"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _split_names(raw: str) -> tuple[str, ...]:
    return tuple(name.strip() for name in raw.split(",") if name.strip())


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration

    Raises:
        ValueError: If BATCH_SIZE is not a positive integer.
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    source_config = SourceConfig(
        source_dir=os.getenv("SOURCE_DIR", "."),
        catechism_file=os.getenv("CATECHISM_FILE", "ccc.json"),
        excluded_files=_split_names(
            os.getenv("EXCLUDED_FILES", ",".join(DEFAULT_EXCLUDED_FILES))
        ),
    )

    batch_size = int(os.getenv("BATCH_SIZE", "1000"))
    if batch_size < 1:
        raise ValueError(f"BATCH_SIZE must be a positive integer, got {batch_size}")

    output_config = OutputConfig(
        output_dir=os.getenv("OUTPUT_DIR", "databases"),
        batch_size=batch_size,
    )

    _config_instance = AppConfig(
        source=source_config,
        output=output_config,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )

    return _config_instance


def reset_config() -> None:
    """Forget the cached configuration (used by tests and the CLI)."""
    global _config_instance
    _config_instance = None
