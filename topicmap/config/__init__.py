from .loader import DEFAULT_SETTINGS_PATH, SETTINGS_ENV_VAR, load_settings

__all__ = ["DEFAULT_SETTINGS_PATH", "SETTINGS_ENV_VAR", "load_settings"]
