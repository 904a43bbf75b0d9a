"""
Django settings for garagecrm.

Uses django-environ for 12-factor configuration via .env file.
"""

from pathlib import Path

import environ

BASE_DIR = Path(__file__).resolve().parent.parent

env = environ.Env(
    DEBUG=(bool, False),
    ALLOWED_HOSTS=(list, ["localhost", "127.0.0.1"]),
)

# Read .env file if it exists (dev convenience)
environ.Env.read_env(BASE_DIR / ".env")

SECRET_KEY = env("SECRET_KEY")
DEBUG = env("DEBUG")
ALLOWED_HOSTS = env("ALLOWED_HOSTS")

INSTALLED_APPS = [
    # django-unfold must come before django.contrib.admin
    "unfold",
    "unfold.contrib.filters",
    "unfold.contrib.forms",
    # Django built-ins
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Local apps
    "core",
    "customers",
    "technicians",
    "inventory",
    "jobs",
    "payments",
    "invoices",
    "appointments",
    "notifications",
    "dashboard",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
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

WSGI_APPLICATION = "config.wsgi.application"

# Database: PostgreSQL required for concurrent writes + SELECT FOR UPDATE
DATABASES = {
    "default": env.db("DATABASE_URL", default="postgres://garagecrm:devpassword@db:5432/garagecrm")
}

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# Internationalisation (Indian locale)
LANGUAGE_CODE = "en-in"
TIME_ZONE = "Asia/Kolkata"
USE_I18N = True
USE_TZ = True

# Static files
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Login / logout (single admin account, no roles)
LOGIN_URL = "/admin/login/"
LOGIN_REDIRECT_URL = "/api/dashboard/"

# Logging: module loggers propagate to the console handler
LOG_LEVEL = env("LOG_LEVEL", default="INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {"format": "%(asctime)s %(levelname)s %(name)s — %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "verbose"},
    },
    "root": {"handlers": ["console"], "level": LOG_LEVEL},
    "loggers": {
        "django": {"handlers": ["console"], "level": "WARNING", "propagate": False},
    },
}

# WhatsApp via Twilio; leave blank to disable outbound messages
TWILIO_ACCOUNT_SID = env("TWILIO_ACCOUNT_SID", default="")
TWILIO_AUTH_TOKEN = env("TWILIO_AUTH_TOKEN", default="")
TWILIO_WHATSAPP_FROM = env("TWILIO_WHATSAPP_FROM", default="")
WHATSAPP_DEFAULT_COUNTRY_CODE = env("WHATSAPP_DEFAULT_COUNTRY_CODE", default="+91")

# Billing
GARAGE_DEFAULT_TAX_RATE = env.float("GARAGE_DEFAULT_TAX_RATE", default=18)
# Optional override of the built-in PPF / other-services price tables
# (same shape as jobs.pricing.DEFAULT_PPF_PRICES / DEFAULT_OTHER_SERVICE_PRICES)
GARAGE_PRICE_BOOK = None

# Email (from .env, all optional; console backend for local dev)
EMAIL_BACKEND = env("EMAIL_BACKEND", default="django.core.mail.backends.console.EmailBackend")
EMAIL_HOST = env("EMAIL_HOST", default="")
EMAIL_PORT = env.int("EMAIL_PORT", default=587)
EMAIL_HOST_USER = env("EMAIL_HOST_USER", default="")
EMAIL_HOST_PASSWORD = env("EMAIL_HOST_PASSWORD", default="")
EMAIL_USE_TLS = env.bool("EMAIL_USE_TLS", default=True)
DEFAULT_FROM_EMAIL = env("DEFAULT_FROM_EMAIL", default="noreply@garage.local")


# django-unfold Admin customisation
UNFOLD = {
    "SITE_TITLE": "Garage CRM",
    "SITE_HEADER": "Garage CRM",
    "SITE_SYMBOL": "directions_car",
    "SHOW_HISTORY": True,
    "SHOW_VIEW_ON_SITE": False,
    "SIDEBAR": {
        "show_search": True,
        "navigation": [
            {
                "title": "Workshop",
                "items": [
                    {"title": "Customers", "link": "/admin/customers/customer/"},
                    {"title": "Jobs", "link": "/admin/jobs/job/"},
                    {"title": "Appointments", "link": "/admin/appointments/appointment/"},
                    {"title": "Technicians", "link": "/admin/technicians/technician/"},
                ],
            },
            {
                "title": "Stock",
                "items": [
                    {"title": "Inventory", "link": "/admin/inventory/inventoryitem/"},
                ],
            },
            {
                "title": "Billing",
                "items": [
                    {"title": "Invoices", "link": "/admin/invoices/invoice/"},
                    {"title": "Payments", "link": "/admin/payments/payment/"},
                ],
            },
            {
                "title": "System",
                "items": [
                    {"title": "WhatsApp templates", "link": "/admin/notifications/whatsapptemplate/"},
                    {"title": "Settings", "link": "/admin/invoices/setting/"},
                ],
            },
        ],
    },
}

if DEBUG:
    INSTALLED_APPS += ["debug_toolbar"]
    MIDDLEWARE.insert(0, "debug_toolbar.middleware.DebugToolbarMiddleware")
    INTERNAL_IPS = ["127.0.0.1"]
