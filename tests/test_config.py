import copy
import logging

import pytest

from posemesh import Config, NodeConfig, RestrictedConfig, platform_utils
from posemesh.peer_list import DuplicateEntry


def test_defaults(node_config):
    assert node_config.get_serve_as_bootstrap() is False
    assert node_config.get_serve_as_relay() is False
    assert node_config.get_bootstraps() == []
    assert node_config.get_relays() == []
    assert node_config.get_private_key() == b""
    assert node_config.get_private_key_path() == ""


def test_config_matches_build_target():
    expected = RestrictedConfig if platform_utils.IS_RESTRICTED else NodeConfig
    assert Config is expected


@pytest.mark.parametrize("setter,getter", [
    ("set_bootstraps", "get_bootstraps"),
    ("set_relays", "get_relays"),
])
def test_set_valid_list_preserves_order(node_config, setter, getter):
    peers = ["/ip4/10.0.0.2/tcp/18800", "/ip4/10.0.0.1/tcp/18800", "/dns4/relay.example/tcp/443"]
    assert getattr(node_config, setter)(peers) is True
    assert getattr(node_config, getter)() == peers


def test_illegal_character_keeps_previous_list(node_config, caplog):
    assert node_config.set_bootstraps(["p"])
    with caplog.at_level(logging.ERROR, logger="posemesh.config"):
        assert node_config.set_bootstraps(["a;b"]) is False
    assert node_config.get_bootstraps() == ["p"]
    assert "Config.set_bootstraps(): bootstrap at index 0 contains an illegal ';' character" in caplog.text


def test_duplicate_keeps_previous_list(node_config, caplog):
    assert node_config.set_relays(["r"])
    with caplog.at_level(logging.ERROR, logger="posemesh.config"):
        assert node_config.set_relays(["x", "y", "x"]) is False
    assert node_config.get_relays() == ["r"]
    assert "Config.set_relays(): relay at index 2 is the same as relay at index 0" in caplog.text


def test_lists_are_independent(node_config):
    assert node_config.set_bootstraps(["a"])
    assert node_config.set_relays(["a"])
    assert node_config.set_relays(["b", "b"]) is False
    assert node_config.get_bootstraps() == ["a"]
    assert node_config.get_relays() == ["a"]


def test_empty_list_clears(node_config):
    assert node_config.set_bootstraps(["a", "b"])
    assert node_config.set_bootstraps([]) is True
    assert node_config.get_bootstraps() == []


def test_set_accepts_any_iterable(node_config):
    assert node_config.set_bootstraps(iter(["a", "b"]))
    assert node_config.bootstraps == ["a", "b"]


def test_no_aliasing_with_caller_list(node_config):
    peers = ["a", "b"]
    node_config.set_bootstraps(peers)
    peers.append("c")
    returned = node_config.get_bootstraps()
    returned.append("d")
    assert node_config.get_bootstraps() == ["a", "b"]


def test_role_flags(node_config):
    node_config.set_serve_as_bootstrap(True)
    node_config.serve_as_relay = True
    assert node_config.serve_as_bootstrap is True
    assert node_config.get_serve_as_relay() is True


def test_private_key_and_path(node_config):
    node_config.set_private_key(bytearray(b"\x01\x02"))
    assert node_config.get_private_key() == b"\x01\x02"
    assert isinstance(node_config.private_key, bytes)
    node_config.private_key_path = "/var/lib/posemesh/key.dat"
    assert node_config.get_private_key_path() == "/var/lib/posemesh/key.dat"


def test_default_configs_are_equal():
    a, b = NodeConfig(), NodeConfig()
    assert a == b
    a.set_bootstraps(["p"])
    assert a != b


def test_equality_is_order_sensitive():
    a, b = NodeConfig(), NodeConfig()
    a.set_bootstraps(["p", "q"])
    b.set_bootstraps(["q", "p"])
    assert a != b


def test_equality_compares_relays():
    a, b = NodeConfig(), NodeConfig()
    a.set_relays(["r"])
    assert a != b


def test_equality_compares_role_flags():
    a, b = NodeConfig(), NodeConfig()
    b.set_serve_as_relay(True)
    assert a != b
    a.set_serve_as_relay(True)
    assert a == b


def test_equality_ignores_key_material():
    a, b = NodeConfig(), NodeConfig()
    a.set_private_key(b"secret")
    a.set_private_key_path("/tmp/key.dat")
    assert a == b


def test_identity_and_foreign_types(node_config):
    assert node_config == node_config
    assert node_config != object()
    assert node_config != RestrictedConfig()


def test_config_is_unhashable(node_config):
    with pytest.raises(TypeError):
        hash(node_config)


@pytest.mark.parametrize("clone", [lambda c: c.copy(), copy.copy, copy.deepcopy])
def test_copy_equals_original_until_mutated(node_config, clone):
    node_config.set_serve_as_bootstrap(True)
    node_config.set_bootstraps(["a", "b"])
    node_config.set_relays(["r"])
    node_config.set_private_key(b"k")
    node_config.set_private_key_path("/tmp/k")
    other = clone(node_config)
    assert other is not node_config
    assert other == node_config
    assert other.get_private_key() == b"k"
    assert other.get_private_key_path() == "/tmp/k"
    other.set_bootstraps(["a"])
    assert other != node_config
    assert node_config.get_bootstraps() == ["a", "b"]


def test_restricted_shape_has_no_node_fields(restricted_config):
    for name in ("serve_as_bootstrap", "serve_as_relay", "private_key_path", "get_private_key_path"):
        assert not hasattr(restricted_config, name)
    with pytest.raises(AttributeError):
        restricted_config.serve_as_relay = True


def test_restricted_peer_lists_and_equality(restricted_config):
    assert restricted_config.set_bootstraps(["a"])
    assert restricted_config.set_relays(["a;"]) is False
    other = restricted_config.copy()
    assert other == restricted_config
    other.set_private_key(b"k")
    assert other == restricted_config
    other.set_relays(["r"])
    assert other != restricted_config


def test_repr_hides_key_material(node_config):
    node_config.set_private_key(b"secret")
    text = repr(node_config)
    assert "secret" not in text
    assert "<6 bytes>" in text
    assert text.startswith("NodeConfig(")


@pytest.mark.parametrize("value", ["/ip4/1.2.3.4/tcp/1", "ab", b"ab"])
def test_bare_string_is_rejected(node_config, value):
    node_config.set_bootstraps(["p"])
    with pytest.raises(TypeError):
        node_config.set_bootstraps(value)
    with pytest.raises(TypeError):
        node_config.set_relays(value)
    assert node_config.get_bootstraps() == ["p"]
    assert node_config.get_relays() == []


@pytest.mark.parametrize("value", [4, None, "key"])
def test_private_key_must_be_bytes_like(node_config, value):
    node_config.set_private_key(b"k")
    with pytest.raises(TypeError):
        node_config.set_private_key(value)
    assert node_config.get_private_key() == b"k"


def test_private_key_accepts_memoryview(node_config):
    node_config.set_private_key(memoryview(b"\x00\x01"))
    assert node_config.get_private_key() == b"\x00\x01"
