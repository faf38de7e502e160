"""
Root pytest configuration for the Django project.

Sets the environment the settings module requires before Django is
configured. App-specific fixtures are defined in each app's tests/conftest.py.
"""

import os

import pytest

# Ensure Django settings are configured before any tests run
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("STRIPE_PUBLISHABLE_KEY", "pk_test_donations")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_donations")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_donations")
# Never pick up a developer's .env file during tests
os.environ["ENV_FILE"] = ""


@pytest.fixture(scope="session")
def django_db_setup():
    """The service has no database; skip test database creation."""
    pass
