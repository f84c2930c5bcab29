"""Settings discovery and loading for dotseed.yml."""
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from dotseed.core.logger import get_logger
from dotseed.models.config import ConfigValidationError, Settings

logger = get_logger(__name__)

# Default settings search paths (ordered by proximity to current run)
CONFIG_PATHS = [
    "./dotseed.yml",
    str(Path.home() / ".config" / "dotseed" / "dotseed.yml"),
]


def find_config(config_path: Optional[str] = None) -> Optional[str]:
    """Locate the active settings file, or None when only defaults apply."""
    if config_path:
        return config_path

    if env_config := os.environ.get("DOTSEED_CONFIG"):
        return env_config

    for path in CONFIG_PATHS:
        if Path(path).exists():
            return path

    return None


def load_settings(config_path: Optional[str] = None) -> Settings:
    """Load and validate settings.

    An explicitly requested file (argument or DOTSEED_CONFIG) must exist;
    discovered locations are optional.

    Raises:
        ConfigValidationError: file missing, not YAML, or invalid values
    """
    path_str = find_config(config_path)
    if path_str is None:
        logger.debug("No dotseed.yml found, using defaults")
        return Settings()

    path = Path(path_str)
    if not path.exists():
        raise ConfigValidationError(f"Config file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in {path}: {e}") from e

    # Handle empty config file
    if not raw:
        return Settings()

    if not isinstance(raw, dict):
        raise ConfigValidationError(f"{path} must contain a mapping at the top level")

    try:
        settings = Settings(**raw)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid settings in {path}: {e}") from e

    logger.debug(f"Loaded settings from {path}")
    return settings


def is_mock() -> bool:
    """Return True when collaborators should run in mock mode."""
    return os.environ.get("DOTSEED_MOCK", "").lower() in ("1", "true")
