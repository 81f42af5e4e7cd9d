# python
from pathlib import Path

import pytest

from tagged_config import ConfigBuilder
from tagged_config.converters import reset_converters

RESOURCES = Path(__file__).parent / "resources"


@pytest.fixture(autouse=True)
def builtin_converters():
    reset_converters()
    yield
    reset_converters()


@pytest.fixture
def resources() -> Path:
    return RESOURCES


@pytest.fixture
def prepare(monkeypatch):
    """Build the provider-test configuration with the given current tags."""
    monkeypatch.delenv("key1", raising=False)

    def _prepare(*tags, properties=None):
        builder = ConfigBuilder()
        (
            builder.create_properties_store()
            .add_resource(RESOURCES / "provider-test.properties")
            .add_resource(RESOURCES / "provider-test-overloaded.properties")
            .done()
            .create_system_properties_store(properties)
        )
        for tag in tags:
            builder.add_current_tag(tag)
        return builder.get_configuration()

    return _prepare
