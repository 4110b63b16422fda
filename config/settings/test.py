# config/settings/test.py
from .base import *  # noqa

SECRET_KEY = "test-secret-key"
DEBUG = False

# SQLite keeps the suite self-contained; set DB_ENGINE=postgresql to exercise
# real row locks (the concurrent code-generation test needs it).
if os.getenv("DB_ENGINE", "sqlite").lower() != "postgresql":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "test.sqlite3",
        }
    }

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

LOGGING["loggers"]["sc_core"]["level"] = "WARNING"
