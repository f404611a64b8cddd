"""Settings used by the test suite."""

from .base import *  # noqa: F401,F403

SECRET_KEY = 'test-secret-key'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'test.sqlite3',
        'OPTIONS': dict(SQLITE_OPTIONS),  # noqa: F405
        # file-backed so threads in the race tests share one database
        'TEST': {'NAME': BASE_DIR / 'test.sqlite3'},
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

PHONE_VERIFICATION = {
    'BACKEND': 'apps.users.verification.StaticCodeVerificationService',
    'CODE': '123456',
}

LOGGING['handlers']['console']['level'] = 'WARNING'  # noqa: F405
