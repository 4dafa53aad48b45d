"""
Django settings for the gmao project.

Development defaults; values are read from the environment so the same module
serves local runs, tests and the celery workers. Production overrides live in
settings_production.py.
"""

import os
from decimal import Decimal
from pathlib import Path

from celery.schedules import crontab

BASE_DIR = Path(__file__).resolve().parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-only-insecure-key")

DEBUG = bool(int(os.getenv("DEBUG", "1")))

ALLOWED_HOSTS = [*os.environ.get("ALLOWED_HOSTS", "localhost").split(","), "testserver"]

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "rest_framework",
    "core.common",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "config.urls"

# Database
# https://docs.djangoproject.com/en/5.0/ref/settings/#databases
DATABASES = {
    "default": {
        "ENGINE": os.environ.get("DB_ENGINE", "django.db.backends.sqlite3"),
        "NAME": os.environ.get("DB_NAME", str(BASE_DIR / "gmao.sqlite3")),
        "USER": os.environ.get("DB_USER", ""),
        "PASSWORD": os.environ.get("DB_PASSWORD", ""),
        "HOST": os.environ.get("DB_HOST", ""),
        "PORT": os.environ.get("DB_PORT", ""),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.environ.get("TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True

# Cache, also used as the overlap lock for the preventive generation batch
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "gmao",
    }
}

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
}

# Logging configuration
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {process:d} {thread:d} {message}",
            "style": "{",
        },
        "simple": {
            "format": "{levelname} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "level": "DEBUG" if DEBUG else "INFO",
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": True,
        },
        "gmao": {
            "handlers": ["console"],
            "level": os.environ.get("GMAO_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}

# Celery settings
CELERY_BROKER_URL = os.environ.get("CELERY_BROKER_URL", "redis://127.0.0.1:6379/0")
CELERY_RESULT_BACKEND = os.environ.get("CELERY_RESULT_BACKEND", "redis://127.0.0.1:6379/0")
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_TIMEZONE = TIME_ZONE
CELERY_TASK_ALWAYS_EAGER = bool(int(os.getenv("CELERY_TASK_ALWAYS_EAGER", "0")))

CELERY_BEAT_SCHEDULE = {
    "generate-preventive-work-orders": {
        "task": "spawn_generate_preventive_work_orders",
        "schedule": crontab(hour=6, minute=0),
    },
    "send-maintenance-reminders": {
        "task": "spawn_send_maintenance_reminders",
        "schedule": crontab(hour=8, minute=0),
    },
}

# Maintenance engine
MAINTENANCE_HOURLY_RATE = Decimal(os.environ.get("MAINTENANCE_HOURLY_RATE", "500.00"))
MAINTENANCE_DEFAULT_ADVANCE_DAYS = int(os.environ.get("MAINTENANCE_DEFAULT_ADVANCE_DAYS", "7"))
MAINTENANCE_DEFAULT_ADVANCE_MILEAGE = int(
    os.environ.get("MAINTENANCE_DEFAULT_ADVANCE_MILEAGE", "500")
)
# Upper bound for one site's batch; the lock expires by itself if a worker dies
MAINTENANCE_GENERATION_LOCK_TIMEOUT = int(
    os.environ.get("MAINTENANCE_GENERATION_LOCK_TIMEOUT", "1800")
)
MAINTENANCE_LONG_RUNNING_DAYS = int(os.environ.get("MAINTENANCE_LONG_RUNNING_DAYS", "7"))
