import os


def get_settings_module() -> str:
    """Map APP_ENV onto a settings module; anything unrecognised means development."""
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"
