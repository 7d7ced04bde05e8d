"""
Settings for the pytest run.

pytest-django loads settings before any conftest.py is imported, so the
test environment is seeded here and then handed to the regular settings
module. Values already present in the environment win.
"""

import os

TEST_ENV = {
    "SECRET_KEY": "test-secret-key-not-for-production",
    "DEBUG": "False",
    "ALLOWED_HOSTS": "testserver,localhost",
    "DATABASE_URL": "sqlite://:memory:",
    "CACHE_URL": "locmemcache://",
    "CELERY_TASK_ALWAYS_EAGER": "True",
    "CELERY_BROKER_URL": "memory://",
    "CELERY_RESULT_BACKEND": "cache+memory://",
    "API_THROTTLING": "False",
    "SECURE_SSL_REDIRECT": "False",
    "STATICFILES_BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    "EMAIL_BACKEND": "django.core.mail.backends.locmem.EmailBackend",
    "INBOUND_WEBHOOK_SECRET": "test-inbound-secret",
    "EXTERNAL_POSTS_API_URL": "https://external.test",
    "LOG_FILE_NAME": "test.log",
    "ENV_FILE": "/nonexistent/.env.test",
}

for key, value in TEST_ENV.items():
    os.environ.setdefault(key, value)

from config.settings import *  # noqa: E402, F401, F403

# Fast password hashing; PBKDF2 dominates test time otherwise
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]
