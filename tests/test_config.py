import pytest

from config import DEFAULT_BASE_URL, ConfigError, load_config


def test_defaults():
    config = load_config({"EXCHANGE_RATE_API_ACCESS_KEY": "abc"})
    assert config.base_url == DEFAULT_BASE_URL
    assert config.access_key == "abc"
    assert config.timeout == 10.0


def test_reads_overrides():
    config = load_config(
        {
            "EXCHANGE_RATE_API_ACCESS_KEY": "abc",
            "EXCHANGE_RATE_API_BASE_URL": "http://localhost:9000/live/",
            "EXCHANGE_RATE_API_TIMEOUT": "2.5",
        }
    )
    assert config.base_url == "http://localhost:9000/live"
    assert config.timeout == 2.5


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("EXCHANGE_RATE_API_ACCESS_KEY", "from-env")
    assert load_config().access_key == "from-env"


@pytest.mark.parametrize("env", [{}, {"EXCHANGE_RATE_API_ACCESS_KEY": "  "}])
def test_access_key_required(env):
    with pytest.raises(ConfigError):
        load_config(env)


@pytest.mark.parametrize("timeout", ["soon", "0", "-1"])
def test_rejects_bad_timeout(timeout):
    with pytest.raises(ConfigError):
        load_config({"EXCHANGE_RATE_API_ACCESS_KEY": "abc", "EXCHANGE_RATE_API_TIMEOUT": timeout})
