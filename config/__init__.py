import os

SETTINGS_MODULES = {
    "development": "config.development",
    "dev": "config.development",
    "production": "config.production",
    "prod": "config.production",
    "testing": "config.testing",
    "test": "config.testing",
}


def get_settings_module() -> str:
    """Settings module named by APP_ENV; unset means development."""
    env = (os.getenv("APP_ENV") or "development").strip().lower()
    try:
        return SETTINGS_MODULES[env]
    except KeyError:
        known = ", ".join(sorted(set(SETTINGS_MODULES)))
        raise ValueError(f"Unknown APP_ENV {env!r}; expected one of: {known}") from None
