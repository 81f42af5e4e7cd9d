import threading

import pytest

from tagged_config import (
    ConfigBuilder,
    ConfigLockedError,
    ConfigStore,
    Configuration,
    ConverterRegistry,
    KeyNotFoundError,
    MappingSource,
    TypeConversionError,
)


@pytest.fixture
def config():
    return (
        ConfigBuilder()
        .create_properties_store("app")
        .add_text(
            "\n".join(
                [
                    "name=demo",
                    "port=8080",
                    "ratio=0.25",
                    "debug=false",
                    "hosts=[a.example.com, b.example.com]",
                    "limits={cpu: 2, memory: 512}",
                    "url=http://${name}:${port}",
                    "@prod.debug=no",
                    "@prod.port=443",
                    "@dev.debug=yes",
                    "api_token=s3cret",
                ]
            )
        )
        .done()
        .add_current_tag("prod")
        .get_configuration()
    )


def test_evaluate_to_string_returns_tagged_value(config):
    assert config.evaluate_to_string("port") == "443"
    assert config.evaluate_to_string("url") == "http://demo:443"


def test_evaluate_to_string_missing_key_raises(config):
    with pytest.raises(KeyNotFoundError) as exc_info:
        config.evaluate_to_string("nope")
    assert exc_info.value.tags == ("prod",)
    assert "nope" in str(exc_info.value)


def test_evaluate_to_converts_to_type_of_default(config):
    assert config.evaluate_to("port", 0) == 443
    assert config.evaluate_to("ratio", 1.0) == 0.25
    assert config.evaluate_to("debug", True) is False
    assert config.evaluate_to("name", "fallback") == "demo"


def test_evaluate_to_missing_key_returns_default_unconverted(config):
    assert config.evaluate_to("missing", 5) == 5
    assert config.evaluate_to("missing", "5") == "5"
    assert config.evaluate_to("missing", None) is None


def test_evaluate_to_none_default_returns_string(config):
    assert config.evaluate_to("port", None) == "443"


def test_evaluate_to_bad_value_raises_type_conversion_error(config):
    with pytest.raises(TypeConversionError) as exc_info:
        config.evaluate_to("name", 0)
    assert exc_info.value.key == "name"
    assert exc_info.value.value == "demo"


def test_evaluate_as(config):
    assert config.evaluate_as(int, "port") == 443
    assert config.evaluate_as(bool, "debug") is False
    assert config.evaluate_as(str, "url") == "http://demo:443"
    with pytest.raises(KeyNotFoundError):
        config.evaluate_as(int, "missing")
    with pytest.raises(TypeConversionError):
        config.evaluate_as(int, "name")


def test_evaluate_to_list_and_map(config):
    assert config.evaluate_to_list("hosts") == ["a.example.com", "b.example.com"]
    assert config.evaluate_to_map("limits") == {"cpu": "2", "memory": "512"}


def test_mapping_style_access(config):
    assert config["name"] == "demo"
    assert "name" in config
    assert "missing" not in config
    assert 42 not in config
    assert config.has_value("debug")
    with pytest.raises(KeyNotFoundError):
        config["missing"]


def test_iteration_and_as_dict(config):
    keys = list(config)
    assert keys == sorted(keys)
    assert "port" in keys
    assert len(config) == len(keys)
    snapshot = config.as_dict()
    assert snapshot["port"] == "443"
    assert snapshot["url"] == "http://demo:443"


def test_configuration_is_read_only(config):
    with pytest.raises(ConfigLockedError):
        config.tags = ("dev",)
    with pytest.raises(ConfigLockedError):
        config.anything = 1
    assert config.tags == ("prod",)


def test_configuration_requires_finalized_stores():
    store = ConfigStore("open").add_source(MappingSource({"k": "v"}))
    with pytest.raises(ValueError):
        Configuration([store])


def test_configuration_direct_construction_dedupes_tags():
    store = ConfigStore().add_source(MappingSource({"k": "v"})).done()
    config = Configuration([store], ["a", "b", "a"])
    assert config.tags == ("a", "b")
    assert config.stores == (store,)


def test_configuration_uses_supplied_converter_registry():
    registry = ConverterRegistry()
    registry.register(int, lambda v: int(v) * 10)
    store = ConfigStore().add_source(MappingSource({"n": "3"})).done()
    config = Configuration([store], converters=registry)
    assert config.evaluate_as(int, "n") == 30
    with pytest.raises(TypeConversionError):
        config.evaluate_as(float, "n")


def test_secret_values_are_redacted_in_logs(config, caplog):
    caplog.set_level("DEBUG", logger="tagged_config.config")
    assert config.evaluate_to_string("api_token") == "s3cret"
    assert "s3cret" not in caplog.text


def test_failed_conversion_of_secret_is_redacted(config, caplog):
    caplog.set_level("DEBUG", logger="tagged_config")
    with pytest.raises(TypeConversionError) as exc_info:
        config.evaluate_as(int, "api_token")
    assert exc_info.value.value == "s3cret"
    assert "s3cret" not in str(exc_info.value)
    assert "***" in str(exc_info.value)
    assert "s3cret" not in caplog.text
    assert "ValueError" in caplog.text


def test_failed_conversion_of_plain_key_keeps_reason(config):
    with pytest.raises(TypeConversionError) as exc_info:
        config.evaluate_as(int, "name")
    assert "'demo'" in str(exc_info.value)
    assert "invalid literal" in exc_info.value.reason


def test_concurrent_evaluation_is_consistent(config):
    errors = []
    results = []

    def worker():
        try:
            for _ in range(200):
                results.append(config.evaluate_to_string("url"))
        except Exception as exc:  # pragma: no cover - surfaced via errors list
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert not errors
    assert set(results) == {"http://demo:443"}


def test_repr_mentions_stores_and_tags(config):
    text = repr(config)
    assert "app" in text
    assert "prod" in text
