import importlib.util

import pytest

from posemesh import NodeConfig, RestrictedConfig

if importlib.util.find_spec("nacl") is None:
    raise pytest.UsageError(
        "PyNaCl is required for the test suite. Install dependencies with 'pip install -e .[test]'."
    )


@pytest.fixture
def node_config() -> NodeConfig:
    """A default-constructed full configuration."""
    return NodeConfig()


@pytest.fixture
def restricted_config() -> RestrictedConfig:
    return RestrictedConfig()


@pytest.fixture
def app_support_dir(tmp_path):
    """Return a resolver pointing at a temporary app support directory."""
    directory = tmp_path / "Application Support"

    def resolver() -> str:
        return str(directory)

    return resolver
