import pytest

from clickhouse_query.config import Config, coerce_env_value, load_config
from clickhouse_query.errors import ConfigError

ENV_VARS = (
    "CLICKHOUSE_URL",
    "CLICKHOUSE_TIMEOUT",
    "CLICKHOUSE_LENIENT_TRANSPORT",
    "CLICKHOUSE_STRICT_ROWS",
    "LOG_LEVEL",
    "LOG_JSON",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        # set then delete so monkeypatch restores the original state afterwards
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def write_config(tmp_path):
    def factory(text):
        path = tmp_path / "config.yaml"
        path.write_text(text)
        return str(path)
    return factory


def test_packaged_config_loads():
    config = Config()
    assert config.endpoint_url == "http://localhost:8123"
    assert config.clickhouse["strict_rows"] is False
    assert config.logging["level"] == "INFO"


def test_get_nested_and_default(write_config):
    config = Config(write_config("clickhouse:\n  url: http://a:1\n"))
    assert config.get("clickhouse", "url") == "http://a:1"
    assert config.get("clickhouse", "missing", default=7) == 7
    assert config.get("nope", "url") is None
    assert config.logging == {}


def test_endpoint_url_trailing_slashes_removed(write_config):
    config = Config(write_config("clickhouse:\n  url: http://a:8123/?database=zabbix//\n"))
    assert config.endpoint_url == "http://a:8123/?database=zabbix"


def test_endpoint_url_missing(write_config):
    config = Config(write_config("clickhouse:\n  timeout: 5\n"))
    with pytest.raises(ConfigError):
        config.endpoint_url


def test_empty_file_is_empty_config(write_config):
    config = Config(write_config(""))
    assert config.clickhouse == {}


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config(str(tmp_path / "absent.yaml"))


def test_invalid_yaml(write_config):
    with pytest.raises(ValueError):
        Config(write_config("clickhouse: [unclosed\n"))


def test_env_overrides_and_coercion(write_config, monkeypatch):
    monkeypatch.setenv("CLICKHOUSE_URL", "http://override:8123/")
    monkeypatch.setenv("CLICKHOUSE_TIMEOUT", "2.5")
    monkeypatch.setenv("CLICKHOUSE_LENIENT_TRANSPORT", "TRUE")
    monkeypatch.setenv("CLICKHOUSE_STRICT_ROWS", "false")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    config = Config(write_config("clickhouse:\n  url: http://yaml:8123\n  timeout: 10\n"))

    assert config.endpoint_url == "http://override:8123"
    assert config.clickhouse["timeout"] == 2.5
    assert config.clickhouse["lenient_transport"] is True
    assert config.clickhouse["strict_rows"] is False
    assert config.logging["level"] == "DEBUG"


def test_env_integer_coercion(write_config, monkeypatch):
    monkeypatch.setenv("CLICKHOUSE_TIMEOUT", "30")
    config = Config(write_config("{}\n"))
    assert config.clickhouse["timeout"] == 30


def test_load_config_reads_dotenv(tmp_path, write_config):
    env_file = tmp_path / ".env"
    env_file.write_text("CLICKHOUSE_URL=http://from-dotenv:8123/\n")

    config = load_config(write_config("clickhouse:\n  url: http://yaml:8123\n"), dotenv_path=str(env_file))

    assert config.endpoint_url == "http://from-dotenv:8123"


def test_load_config_does_not_override_environment(tmp_path, write_config, monkeypatch):
    monkeypatch.setenv("CLICKHOUSE_URL", "http://from-env:8123")
    env_file = tmp_path / ".env"
    env_file.write_text("CLICKHOUSE_URL=http://from-dotenv:8123\n")

    config = load_config(write_config("{}\n"), dotenv_path=str(env_file))

    assert config.endpoint_url == "http://from-env:8123"


def test_coerce_env_value():
    assert coerce_env_value("True") is True
    assert coerce_env_value(" false ") is False
    assert coerce_env_value("8123") == 8123
    assert coerce_env_value("0.5") == 0.5
    assert coerce_env_value("http://a:8123") == "http://a:8123"


def test_top_level_must_be_mapping(write_config):
    with pytest.raises(ValueError):
        Config(write_config("- just\n- a list\n"))


def test_env_override_replaces_non_mapping_section(write_config, monkeypatch):
    monkeypatch.setenv("CLICKHOUSE_URL", "http://env:8123")
    config = Config(write_config("clickhouse: disabled\n"))
    assert config.endpoint_url == "http://env:8123"
