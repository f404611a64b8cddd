"""Production settings for Rentshare.

This module extends the base settings with production specific
configuration. Sensitive values must be provided via environment
variables; missing ones stop the process at startup.
"""

from django.core.exceptions import ImproperlyConfigured  # type: ignore

from .base import *  # noqa: F401,F403

# Never run with debug enabled in production
DEBUG = False

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', '')
if not SECRET_KEY:
    raise ImproperlyConfigured('DJANGO_SECRET_KEY must be set in production')

# Allowed hosts should be defined explicitly via environment variable
ALLOWED_HOSTS = [host for host in os.environ.get('DJANGO_ALLOWED_HOSTS', '').split(',') if host]
if not ALLOWED_HOSTS:
    raise ImproperlyConfigured('DJANGO_ALLOWED_HOSTS must be set in production')

# Configure secure proxies and cookies
CSRF_COOKIE_SECURE = True
SESSION_COOKIE_SECURE = True
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')

# The SMS gateway is built per request; check its credentials at startup
TWILIO_ENV = {
    'ACCOUNT_SID': 'TWILIO_ACCOUNT_SID',
    'AUTH_TOKEN': 'TWILIO_AUTH_TOKEN',
    'SERVICE_SID': 'TWILIO_VERIFY_SERVICE_SID',
}
if PHONE_VERIFICATION['BACKEND'].endswith('.TwilioVerifyService'):  # noqa: F405
    missing = [env for key, env in TWILIO_ENV.items() if not PHONE_VERIFICATION.get(key)]  # noqa: F405
    if missing:
        raise ImproperlyConfigured(f"{', '.join(missing)} must be set in production")
