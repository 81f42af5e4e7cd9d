import pytest

from tagged_config import (
    CircularReferenceError,
    ConfigBuilder,
    Interpolator,
    KeyNotFoundError,
    UnresolvedReferenceError,
)


@pytest.fixture
def references(resources):
    def _build(*tags):
        return (
            ConfigBuilder()
            .create_properties_store()
            .add_resource(resources / "references.properties")
            .done()
            .add_current_tags(*tags)
            .get_configuration()
        )

    return _build


def test_interpolator_leaves_plain_values_untouched():
    assert Interpolator().expand("no references here", lambda k: None) == "no references here"


def test_interpolator_expands_left_to_right():
    values = {"a": "1", "b": "2"}
    assert Interpolator().expand("${a}-${b}-${a}", values.get) == "1-2-1"


def test_interpolator_trims_names_and_keeps_unterminated_placeholder():
    values = {"a": "1"}
    assert Interpolator().expand("${ a } and ${b", values.get) == "1 and ${b"


def test_interpolator_escaped_placeholder_is_literal():
    assert Interpolator().expand("$${a}", lambda k: "never") == "${a}"


def test_interpolator_lookup_called_once_per_reference():
    calls = []

    def lookup(key):
        calls.append(key)
        return {"a": "${b}", "b": "x"}.get(key)

    assert Interpolator().expand("${a}", lookup) == "x"
    assert calls == ["a", "b"]


def test_lookup_key_containing_references(references):
    config = references()
    assert config.evaluate_to_string("base-url") == "http://localhost:8080"
    assert config.evaluate_to_string("service-url") == "http://localhost:8080/service"


def test_tagged_lookup_key_containing_references(references):
    config = references("production")
    assert config.evaluate_to_string("greeting") == "Hello from prod.example.com"
    assert config.evaluate_to_string("base-url") == "http://prod.example.com:8080"


def test_multi_tagged_lookup_key_containing_references():
    config = (
        ConfigBuilder()
        .create_mapping_store({"url": "http://${host}/${path}", "host": "default", "path": "p"})
        .create_mapping_store({"host": "staging-host"}, tag="staging")
        .create_mapping_store({"host": "qa-host", "path": "qa"}, tag="qa")
        .add_current_tags("staging", "qa")
        .get_configuration()
    )
    assert config.evaluate_to_string("url") == "http://staging-host/qa"


def test_direct_circular_reference_raises(references):
    config = references()
    with pytest.raises(CircularReferenceError) as exc_info:
        config.evaluate_to_string("self-ref")
    assert exc_info.value.key == "self-ref"
    assert exc_info.value.path == ("self-ref", "self-ref")


def test_transitive_circular_reference_reports_cycle(references):
    config = references()
    with pytest.raises(CircularReferenceError) as exc_info:
        config.evaluate_to_string("cycle-a")
    assert exc_info.value.key == "cycle-a"
    assert exc_info.value.path == ("cycle-a", "cycle-b", "cycle-c", "cycle-a")
    assert "cycle-a -> cycle-b -> cycle-c -> cycle-a" in str(exc_info.value)


def test_cycle_entered_from_outside_reports_only_the_loop():
    config = (
        ConfigBuilder()
        .create_mapping_store({"entry": "${x}", "x": "${y}", "y": "${x}"})
        .get_configuration()
    )
    with pytest.raises(CircularReferenceError) as exc_info:
        config.evaluate_to_string("entry")
    assert exc_info.value.path == ("x", "y", "x")


def test_reference_to_missing_key_raises(references):
    config = references()
    with pytest.raises(UnresolvedReferenceError) as exc_info:
        config.evaluate_to_string("dangling")
    assert exc_info.value.key == "does-not-exist"
    assert exc_info.value.referenced_by == "dangling"
    assert not isinstance(exc_info.value, KeyNotFoundError)


def test_unresolved_reference_is_not_swallowed_by_default_form(references):
    config = references()
    with pytest.raises(UnresolvedReferenceError):
        config.evaluate_to("dangling", "fallback")


def test_escaped_reference_is_kept_literal(references):
    config = references()
    assert config.evaluate_to_string("literal") == "${host} is not expanded"


def test_repeated_reference_to_same_key_is_not_a_cycle():
    config = (
        ConfigBuilder()
        .create_mapping_store({"a": "${b}${b}", "b": "${c}", "c": "z"})
        .get_configuration()
    )
    assert config.evaluate_to_string("a") == "zz"
