import os


def pytest_configure():
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "verifymeta.settings")
    os.environ.setdefault("DJANGO_SECRET_KEY", "test-secret")
