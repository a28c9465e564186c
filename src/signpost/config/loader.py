from __future__ import annotations

import logging
import os
from importlib.resources import files as resource_files
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from ..exceptions import ConfigError
from .models import UIConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SIGNPOST_CONFIG"


def load_ui_config(path: Optional[Union[str, Path]] = None) -> UIConfig:
    """Load UI configuration from YAML.

    Resolution order: explicit ``path``, then the ``SIGNPOST_CONFIG`` environment
    variable, then the embedded default resource at signpost/config/ui.yaml.
    Keys missing from the file fall back to model defaults.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            path = env_path
            logger.debug("Using UI config from %s=%s", CONFIG_ENV_VAR, env_path)

    if path is None:
        data = resource_files("signpost.config").joinpath("ui.yaml").read_text(encoding="utf-8")
        logger.debug("Loaded embedded UI config resource")
    else:
        p = Path(path)
        if not p.exists():
            raise ConfigError(f"UI config file not found: {p}")
        data = p.read_text(encoding="utf-8")
        logger.debug("Loaded UI config from path: %s", p)

    try:
        raw = yaml.safe_load(data) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"UI config is not valid YAML: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError("UI config root must be a mapping")

    try:
        cfg = UIConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid UI config: {exc}") from exc
    logger.info(
        "UI config loaded: overlay_auto_hide=%dms region_bands=%s",
        cfg.overlay.auto_hide_ms,
        [b.name for b in cfg.region.bands],
    )
    return cfg
