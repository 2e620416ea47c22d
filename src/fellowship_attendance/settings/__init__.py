import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module, default is 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "fellowship_attendance.settings.production"

    if env in {"test", "testing"}:
        return "fellowship_attendance.settings.testing"

    return "fellowship_attendance.settings.development"


def public_base_url_from_env() -> str:
    # RENDER_EXTERNAL_URL is what the hosting platform injects.
    return os.getenv("PUBLIC_BASE_URL") or os.getenv("RENDER_EXTERNAL_URL") or ""
