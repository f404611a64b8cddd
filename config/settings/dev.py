"""Development settings for Rentshare.

This module extends the base settings with development specific
configuration: debug on, any CORS origin, console logs and the static
OTP code backend. Do not use these settings in production!
"""

from .base import *  # noqa: F401,F403

# Enable debug mode for development
DEBUG = True

# Allow all hosts in development
ALLOWED_HOSTS = ['*']

CORS_ALLOW_ALL_ORIGINS = True

# OTP codes are accepted without an SMS gateway
PHONE_VERIFICATION = {
    'BACKEND': os.environ.get('PHONE_VERIFICATION', 'apps.users.verification.StaticCodeVerificationService'),
}

LOGGING['handlers']['console']['formatter'] = 'console'  # noqa: F405
