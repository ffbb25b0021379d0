"""Settings: tests for URL rewriting and registered key resolution."""

from fever_api.config import Settings
from fever_api.core.authenticate import derive_api_key


def test_postgres_url_rewritten_for_asyncpg():
    settings = Settings(database_url="postgresql://u:p@db:5432/fever")
    assert settings.database_url == "postgresql+asyncpg://u:p@db:5432/fever"


def test_explicit_key_wins():
    settings = Settings(
        fever_api_key="explicit", fever_email="a@b.c", fever_password="pw",
    )
    assert settings.registered_api_key() == "explicit"


def test_key_derived_from_credentials():
    settings = Settings(fever_api_key=None, fever_email="a@b.c", fever_password="pw")
    assert settings.registered_api_key() == derive_api_key("a@b.c", "pw")


def test_no_key_without_credentials():
    settings = Settings(fever_api_key=None, fever_email=None, fever_password=None)
    assert settings.registered_api_key() is None


def test_protocol_version_defaults_to_3():
    assert Settings().fever_api_version == 3
