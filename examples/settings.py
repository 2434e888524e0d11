"""Django settings for the example development server.

Persistent SQLite database and DEBUG mode on top of the test settings
layout. Secrets and API credentials are read from ``examples/.env``.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent
load_dotenv(BASE_DIR / ".env")

SECRET_KEY = os.environ.get("SECRET_KEY", "example-dev-key-not-for-production")
SALT_KEY = os.environ.get("SALT_KEY", "example-salt-key-not-for-production")
DEBUG = True
ALLOWED_HOSTS = ["*"]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.messages",
    "django.contrib.sessions",
    "django.contrib.staticfiles",
    "django_confdesk.conference",
    "django_confdesk.tickets",
    "django_confdesk.sponsors",
    "django_confdesk.proposals",
    "django_confdesk.manage",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

ROOT_URLCONF = "urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
USE_TZ = True
TIME_ZONE = "Europe/Oslo"

STATIC_URL = "static/"

LOGIN_URL = "/accounts/login/"
LOGIN_REDIRECT_URL = "/admin/"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"console": {"class": "logging.StreamHandler"}},
    "loggers": {"django_confdesk": {"handlers": ["console"], "level": "INFO"}},
}

DJANGO_CONFDESK = {
    "slack": {
        "bot_token": os.environ.get("SLACK_BOT_TOKEN") or None,
        "development_mode": os.environ.get("SLACK_DEVELOPMENT_MODE", "true").lower() == "true",
    },
    "checkin": {
        "api_key": os.environ.get("CHECKIN_API_KEY") or None,
        "api_secret": os.environ.get("CHECKIN_API_SECRET") or None,
    },
    "sales_update": {
        "cron_secret": os.environ.get("CRON_SECRET") or None,
    },
}
