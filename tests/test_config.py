import pytest

from nora_core.config import DEFAULT_TIMEOUT_SECONDS, Settings
from nora_core.errors import ConfigError

BASE_ENV = {
    "ODOO_URL": "https://odoo.example.com/",
    "ODOO_DB": "prod",
    "ODOO_USERNAME": "admin@example.com",
    "ODOO_PASSWORD": "s3cret",
}


def test_reads_required_settings():
    settings = Settings.from_env(BASE_ENV)

    assert settings.url == "https://odoo.example.com"
    assert settings.database == "prod"
    assert settings.username == "admin@example.com"
    assert settings.password == "s3cret"
    assert settings.timeout_seconds == DEFAULT_TIMEOUT_SECONDS
    assert settings.log_level == "INFO"


def test_api_key_is_used_when_no_password():
    env = {**BASE_ENV, "ODOO_API_KEY": "key-123"}
    del env["ODOO_PASSWORD"]

    assert Settings.from_env(env).password == "key-123"


def test_password_wins_over_api_key():
    env = {**BASE_ENV, "ODOO_API_KEY": "key-123"}

    assert Settings.from_env(env).password == "s3cret"


def test_missing_variables_are_all_named():
    with pytest.raises(ConfigError) as excinfo:
        Settings.from_env({"ODOO_URL": "https://odoo.example.com", "ODOO_DB": "  "})

    message = str(excinfo.value)
    assert "ODOO_DB" in message
    assert "ODOO_USERNAME" in message
    assert "ODOO_PASSWORD or ODOO_API_KEY" in message
    assert "ODOO_URL" not in message


def test_optional_settings():
    env = {**BASE_ENV, "ODOO_TIMEOUT_SECONDS": "12.5", "NORA_LOG_LEVEL": "debug"}

    settings = Settings.from_env(env)

    assert settings.timeout_seconds == 12.5
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_bad_timeout_is_config_error(raw):
    with pytest.raises(ConfigError, match="ODOO_TIMEOUT_SECONDS"):
        Settings.from_env({**BASE_ENV, "ODOO_TIMEOUT_SECONDS": raw})


def test_bad_log_level_is_config_error():
    with pytest.raises(ConfigError, match="NORA_LOG_LEVEL"):
        Settings.from_env({**BASE_ENV, "NORA_LOG_LEVEL": "chatty"})


def test_repr_hides_credential():
    assert "s3cret" not in repr(Settings.from_env(BASE_ENV))
