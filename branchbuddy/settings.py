import os
from pathlib import Path

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

IS_PRODUCTION = os.getenv("RAILWAY_ENVIRONMENT_NAME") is not None
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "fallback-secret-key")
DEBUG = os.getenv("DEBUG", "false").lower() == "true"

ALLOWED_HOSTS = [
    "localhost",
    "127.0.0.1",
]
if extra_hosts := os.getenv("ALLOWED_HOSTS"):
    ALLOWED_HOSTS += [host.strip() for host in extra_hosts.split(",") if host.strip()]

INSTALLED_APPS = [
    "branchbuddy",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "branchbuddy.urls"

WSGI_APPLICATION = "branchbuddy.wsgi.application"

# parsed games aren't persisted
DATABASES = {}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

SECURE_SSL_REDIRECT = IS_PRODUCTION  # Redirect HTTP to HTTPS in production
CSRF_COOKIE_SECURE = IS_PRODUCTION  # Send CSRF cookie only over HTTPS

# If behind a proxy like Railway/Heroku,
if IS_PRODUCTION:  # ensure Django correctly detects HTTPS requests
    SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

# Set the maximum size for uploaded files (in bytes); a PGN is small
DATA_UPLOAD_MAX_MEMORY_SIZE = 5 * 1024 * 1024  # 5 MB
FILE_UPLOAD_MAX_MEMORY_SIZE = 5 * 1024 * 1024

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "{levelname} {name} {message}", "style": "{"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "branchbuddy": {
            "handlers": ["console"],
            "level": os.getenv("BRANCHBUDDY_LOG_LEVEL", "INFO").upper(),
        },
    },
}

# PGN parser; untrusted uploads can nest variations as deep as they like,
# anything past this is skipped
BRANCHBUDDY_MAX_VARIATION_DEPTH = int(
    os.getenv("BRANCHBUDDY_MAX_VARIATION_DEPTH", "64")
)
# Reject SAN that python-chess would write differently (e.g. Nge2 when
# Ne2 is enough) instead of guessing
BRANCHBUDDY_STRICT_SAN = os.getenv("BRANCHBUDDY_STRICT_SAN", "true").lower() == "true"
# Lets callers ask for an unvalidated move list when strict parsing fails
BRANCHBUDDY_ALLOW_FALLBACK = (
    os.getenv("BRANCHBUDDY_ALLOW_FALLBACK", "false").lower() == "true"
)
BRANCHBUDDY_DISPLAY_NAME_MOVES = int(os.getenv("BRANCHBUDDY_DISPLAY_NAME_MOVES", "3"))
BRANCHBUDDY_DEFAULT_DECK_NAME = "Untitled Deck"
