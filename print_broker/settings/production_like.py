from .base import *  # noqa: F403
from .local import STATIC_ROOT as LOCAL_STATIC_ROOT
from .local import MEDIA_ROOT as LOCAL_MEDIA_ROOT

DEBUG = False

ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "").split(",")  # noqa: F405
ALLOWED_HOSTS = [host.strip() for host in ALLOWED_HOSTS if host.strip()]

STATIC_URL = "/static/"
STATIC_ROOT = os.getenv("STATIC_ROOT", LOCAL_STATIC_ROOT)  # noqa: F405

MEDIA_URL = "/media/"
MEDIA_ROOT = os.getenv("MEDIA_ROOT", LOCAL_MEDIA_ROOT)  # noqa: F405

# Security configs
SESSION_COOKIE_SECURE = True
SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True

# Trust the proxy headers to determine HTTPS status
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
USE_X_FORWARDED_HOST = True

# CSRF configs
CSRF_COOKIE_SECURE = True

# CORS Configuration - Load from environment variables
cors_origins_env = os.getenv("CORS_ALLOWED_ORIGINS", "")  # noqa: F405
if cors_origins_env:
    CORS_ALLOWED_ORIGINS = [
        origin.strip() for origin in cors_origins_env.split(",") if origin.strip()
    ]
else:
    # No fallback in production - must be explicitly set in .env
    CORS_ALLOWED_ORIGINS = []

CSRF_TRUSTED_ORIGINS = CORS_ALLOWED_ORIGINS

CORS_ALLOW_CREDENTIALS = os.getenv("CORS_ALLOW_CREDENTIALS", "True").lower() == "true"  # noqa: F405

# Notification and vendor e-mail
EMAIL_BACKEND = "django.core.mail.backends.smtp.EmailBackend"
EMAIL_HOST = os.getenv("EMAIL_HOST", "smtp.sendgrid.net")  # noqa: F405
EMAIL_PORT = int(os.getenv("EMAIL_PORT", 587))  # noqa: F405
EMAIL_USE_TLS = os.getenv("EMAIL_USE_TLS", "True") == "True"  # noqa: F405
EMAIL_HOST_USER = os.getenv("EMAIL_HOST_USER")  # noqa: F405
EMAIL_HOST_PASSWORD = os.getenv("EMAIL_HOST_PASSWORD", "")  # noqa: F405

# Admin email notifications for errors
ADMINS = [
    (name, email)
    for name_email in os.getenv("DJANGO_ADMINS", "").split(",")  # noqa: F405
    if (parts := name_email.strip().split(":")) and len(parts) == 2
    for name, email in [parts]
]

validate_required_settings()  # noqa: F405
