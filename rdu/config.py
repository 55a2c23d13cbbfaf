
import logging
import os
import sys
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, StrictBool, ValidationError, conint

from .errors import ConfigError

logger = logging.getLogger(__name__)


class RduConfig(BaseModel):
    """Defaults for every tunable command-line option."""

    model_config = ConfigDict(extra="forbid")

    top: conint(strict=True, ge=0) = 50
    sort: Literal["size", "name", "type"] = "size"
    depth: Literal[0, 1] = 1
    follow_symlinks: StrictBool = False
    smart_ignore: StrictBool = True
    head: conint(strict=True, ge=0) = 400
    ext_order: Literal["key", "size"] = "key"
    workers: Optional[conint(strict=True, ge=1)] = None
    progress: StrictBool = True


def default_config_path() -> Path:
    r"""
    Returns the platform-appropriate default config path.

    Returns:
        Path: Default config path for the current platform
            - Linux/macOS/WSL: $XDG_CONFIG_HOME/rdu/config.yml or ~/.config/rdu/config.yml
            - Windows: %APPDATA%\rdu\config.yml
    """
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if not appdata:
            return Path.home() / "AppData" / "Roaming" / "rdu" / "config.yml"
        return Path(appdata) / "rdu" / "config.yml"
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "rdu" / "config.yml"
    return Path.home() / ".config" / "rdu" / "config.yml"


def load_config(config_path: Optional[Path] = None) -> RduConfig:
    """
    Load defaults from a YAML file.

    Args:
        config_path: Explicit file. If None, the default path is used and a
            missing file simply means built-in defaults.

    Returns:
        RduConfig: parsed defaults

    Raises:
        ConfigError: explicit file missing, unreadable, invalid YAML or invalid values
    """
    explicit = config_path is not None
    path = Path(config_path) if explicit else default_config_path()

    if not path.exists():
        if explicit:
            raise ConfigError(f"Configuration file not found at: {path}")
        return RduConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML file at {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {path}: {e.strerror or e}") from e

    if data is None:
        return RduConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid configuration in {path}: expected a mapping at the top level")

    try:
        config = RduConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.debug("Loaded config from %s", path)
    return config
