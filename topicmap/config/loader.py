"""YAML and env loader with fail-fast validation."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from topicmap.exceptions import SettingsError
from topicmap.models import PipelineSettings

DEFAULT_SETTINGS_PATH = "config/settings.yaml"
SETTINGS_ENV_VAR = "TOPICMAP_SETTINGS"


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as file_obj:
        try:
            loaded = yaml.safe_load(file_obj) or {}
        except yaml.YAMLError as exc:
            raise SettingsError(f"Could not parse YAML file {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise SettingsError(f"Expected object at root of YAML file: {path}")
    return loaded


def load_settings(path: Optional[str] = None) -> PipelineSettings:
    """Load pipeline settings.

    The path is ``path`` if given, else ``$TOPICMAP_SETTINGS``, else
    ``config/settings.yaml``. Only an explicitly named file must exist; a
    missing default file yields the built-in defaults.

    Raises:
        FileNotFoundError: explicitly named file does not exist
        SettingsError: file is not a YAML mapping or fails validation
    """
    load_dotenv()
    explicit = path or os.getenv(SETTINGS_ENV_VAR)
    resolved = Path(explicit or DEFAULT_SETTINGS_PATH)
    if explicit is None and not resolved.exists():
        return PipelineSettings()

    raw = _read_yaml(resolved)
    try:
        return PipelineSettings.model_validate(raw)
    except ValidationError as exc:
        raise SettingsError(f"Invalid settings in {resolved}: {exc}") from exc
