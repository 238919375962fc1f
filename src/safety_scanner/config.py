"""
SafetyScanner Configuration
===========================

Settings for the scan service, read once at import.

Resolution order for each value:
    environment variable  >  YAML file  >  model default

The YAML file is the one named by SAFETY_SCAN_CONFIG, otherwise the
first config.yaml / config.yml found in the working directory or the
project root.

Environment Variables:
    SAFETY_SCAN_CONFIG          path to the YAML file
    SAFETY_SCAN_ACCELERATED     scanner.accelerated_enabled (1/true/yes/on)
    SAFETY_SCAN_INIT_TIMEOUT    scanner.init_timeout_seconds
    PORT                        server.port (set by container platforms)
    SAFETY_SCAN_PORT            server.port when PORT is unset
    SAFETY_SCAN_LOG_LEVEL       logging.level
    SAFETY_SCAN_LOG_FORMAT      logging.format

Scoring and extraction constants are not configurable: every deployment
scores the same frame the same way.

Example:
    from safety_scanner.config import settings

    if settings.scanner.accelerated_enabled:
        ...
"""

import os
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

import yaml
from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class ServiceConfig(BaseModel):
    """Service identification configuration."""

    name: str = Field(default="safety-scanner", description="Service name")
    version: str = Field(default="v0.1.0", description="Service version")


class ScannerConfig(BaseModel):
    """Scan pipeline configuration."""

    accelerated_enabled: bool = Field(
        default=True,
        description="Attempt to initialize the OpenCV-accelerated strategy",
    )
    init_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Give up on accelerated backend initialization after this long",
    )


class ServerConfig(BaseModel):
    """HTTP bind address for the FastAPI service."""

    host: str = Field(default="0.0.0.0", description="Interface to listen on")
    port: int = Field(default=8002, ge=1, le=65535, description="Bind port")


class LoggingConfig(BaseModel):
    """Root logger settings applied by setup_logging()."""

    level: str = Field(default="INFO", description="Root log level name")
    format: str = Field(default="json", description="json (one object per line) or text")


class Settings(BaseModel):
    """Top-level settings tree, one section per concern."""

    service: ServiceConfig = Field(default_factory=ServiceConfig)
    scanner: ScannerConfig = Field(default_factory=ScannerConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Loading
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

_SEARCH_PATHS: Tuple[Path, ...] = (
    Path("config.yaml"),
    Path("config.yml"),
    _PROJECT_ROOT / "config.yaml",
)

_TRUTHY = {"1", "true", "yes", "on"}


def _as_bool(raw: str) -> bool:
    return raw.strip().lower() in _TRUTHY


# (variable, section, key, parser); PORT is listed before SAFETY_SCAN_PORT
# and the first one set wins
_ENV_OVERRIDES: Tuple[Tuple[str, str, str, Callable[[str], Any]], ...] = (
    ("SAFETY_SCAN_ACCELERATED", "scanner", "accelerated_enabled", _as_bool),
    ("SAFETY_SCAN_INIT_TIMEOUT", "scanner", "init_timeout_seconds", float),
    ("PORT", "server", "port", int),
    ("SAFETY_SCAN_PORT", "server", "port", int),
    ("SAFETY_SCAN_LOG_LEVEL", "logging", "level", str),
    ("SAFETY_SCAN_LOG_FORMAT", "logging", "format", str),
)


def _find_config_file() -> Optional[Path]:
    explicit = os.environ.get("SAFETY_SCAN_CONFIG")
    if explicit:
        return Path(explicit)
    return next((path for path in _SEARCH_PATHS if path.exists()), None)


def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Build Settings from the YAML file and the environment.

    Args:
        config_path: Explicit YAML path; None triggers the lookup described
            in the module docstring. A path that does not exist is
            treated as an empty file.

    Returns:
        Validated Settings

    Raises:
        pydantic.ValidationError: If a value is out of range
    """
    path = Path(config_path) if config_path else _find_config_file()

    config_data: Dict[str, Any] = {}
    if path is not None and path.exists():
        logger.info(f"Loading config from: {path}")
        config_data = yaml.safe_load(path.read_text()) or {}
    else:
        logger.warning("No config file found, using defaults and environment variables")

    _apply_env_overrides(config_data)
    return Settings.model_validate(config_data)


def _apply_env_overrides(config_data: Dict[str, Any]) -> None:
    """Merge set environment variables into the raw config mapping."""
    applied = set()
    for variable, section, key, parse in _ENV_OVERRIDES:
        raw = os.environ.get(variable)
        if not raw or (section, key) in applied:
            continue
        config_data.setdefault(section, {})[key] = parse(raw)
        applied.add((section, key))


_LOG_FORMATS = {
    "json": '{"time": "%(asctime)s", "level": "%(levelname)s", '
            '"module": "%(name)s", "message": "%(message)s"}',
    "text": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


def setup_logging(settings: Settings) -> None:
    """
    Configure the root logger from settings.logging.

    Unknown levels fall back to INFO and unknown formats to text.
    Called by entry points, never on import.
    """
    logging.basicConfig(
        level=getattr(logging, settings.logging.level.upper(), logging.INFO),
        format=_LOG_FORMATS.get(settings.logging.format, _LOG_FORMATS["text"]),
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


settings = load_config()
