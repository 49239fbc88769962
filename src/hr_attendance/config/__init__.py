import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module; defaults to development.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "hr_attendance.config.production"

    if env in {"test", "testing"}:
        return "hr_attendance.config.testing"

    return "hr_attendance.config.development"
