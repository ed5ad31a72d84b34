"""Node configuration for the posemesh networking SDK.

Two shapes exist.  :class:`NodeConfig` carries every field.
:class:`RestrictedConfig` is used on restricted targets (browser/WASM hosts)
where a node can never act as network infrastructure or persist its key, so
the role flags and the key path are absent there rather than always empty.
:data:`Config` is bound to the shape matching the running target.
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Iterable, Optional

from . import platform_utils
from .peer_list import check_peer_list

logger = logging.getLogger(__name__)

# File name of the persisted node key inside the app support directory.
PRIVATE_KEY_FILENAME = "posemesh_private_key.dat"

_PLATFORM_RESOLVER = object()


class _PeerConfig:
    """Fields and behaviour shared by both configuration shapes."""

    __slots__ = ("_bootstraps", "_relays", "_private_key")

    def __init__(self) -> None:
        self._bootstraps: list[str] = []
        self._relays: list[str] = []
        self._private_key = b""

    @classmethod
    def create_default(cls, resolver=_PLATFORM_RESOLVER):
        """Return a config with the SDK defaults applied."""
        config = cls()
        # TODO: set bootstraps to the well-known bootstrap peers
        # TODO: set relays to the well-known relay peers
        return config

    # value semantics -----------------------------------------------------
    def copy(self):
        clone = type(self).__new__(type(self))
        clone._copy_from(self)
        return clone

    def _copy_from(self, other: "_PeerConfig") -> None:
        self._bootstraps = list(other._bootstraps)
        self._relays = list(other._relays)
        self._private_key = other._private_key

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return self._bootstraps == other._bootstraps and self._relays == other._relays

    __hash__ = None

    def _repr_fields(self) -> list[str]:
        return [
            f"bootstraps={self._bootstraps!r}",
            f"relays={self._relays!r}",
            f"private_key=<{len(self._private_key)} bytes>",
        ]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(self._repr_fields())})"

    # peer lists ----------------------------------------------------------
    def _checked_peer_list(self, entries: Iterable[str], operation: str, label: str) -> Optional[list[str]]:
        if isinstance(entries, (str, bytes)):
            raise TypeError(f"{operation} expects a sequence of strings, not {type(entries).__name__}")
        items = list(entries)
        error = check_peer_list(items)
        if error is not None:
            logger.error(error.describe(operation, label))
            return None
        return items

    def get_bootstraps(self) -> list[str]:
        return list(self._bootstraps)

    def set_bootstraps(self, bootstraps: Iterable[str]) -> bool:
        """Replace the bootstrap list.

        Returns ``False`` and keeps the current list when an entry contains
        ``;`` or repeats an earlier entry.
        """
        items = self._checked_peer_list(bootstraps, "Config.set_bootstraps()", "bootstrap")
        if items is None:
            return False
        self._bootstraps = items
        return True

    def get_relays(self) -> list[str]:
        return list(self._relays)

    def set_relays(self, relays: Iterable[str]) -> bool:
        """Replace the relay list, with the same rules as :meth:`set_bootstraps`."""
        items = self._checked_peer_list(relays, "Config.set_relays()", "relay")
        if items is None:
            return False
        self._relays = items
        return True

    @property
    def bootstraps(self) -> list[str]:
        return self.get_bootstraps()

    @property
    def relays(self) -> list[str]:
        return self.get_relays()

    # key material --------------------------------------------------------
    def get_private_key(self) -> bytes:
        return self._private_key

    def set_private_key(self, private_key: bytes) -> None:
        if not isinstance(private_key, (bytes, bytearray, memoryview)):
            raise TypeError(f"private key must be bytes-like, not {type(private_key).__name__}")
        self._private_key = bytes(private_key)

    private_key = property(get_private_key, set_private_key)


class RestrictedConfig(_PeerConfig):
    """Configuration for restricted targets: no role flags, no key path."""

    __slots__ = ()


class NodeConfig(_PeerConfig):
    """Configuration for nodes that may serve as bootstrap or relay."""

    __slots__ = ("_serve_as_bootstrap", "_serve_as_relay", "_private_key_path")

    def __init__(self) -> None:
        super().__init__()
        self._serve_as_bootstrap = False
        self._serve_as_relay = False
        self._private_key_path = ""

    @classmethod
    def create_default(cls, resolver=_PLATFORM_RESOLVER) -> "NodeConfig":
        """Return a config with the SDK defaults applied.

        ``resolver`` returns the application support directory, or an empty
        string when it is unavailable.  It defaults to the platform resolver;
        pass ``None`` to leave the key path unset.
        """
        config = super().create_default()
        if resolver is _PLATFORM_RESOLVER:
            resolver = platform_utils.app_support_directory_resolver()
        if resolver is not None:
            config._private_key_path = default_private_key_path(resolver)
        return config

    def _copy_from(self, other: "NodeConfig") -> None:
        super()._copy_from(other)
        self._serve_as_bootstrap = other._serve_as_bootstrap
        self._serve_as_relay = other._serve_as_relay
        self._private_key_path = other._private_key_path

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        if self._serve_as_bootstrap != other._serve_as_bootstrap:
            return False
        if self._serve_as_relay != other._serve_as_relay:
            return False
        return super().__eq__(other)

    def _repr_fields(self) -> list[str]:
        return [
            f"serve_as_bootstrap={self._serve_as_bootstrap!r}",
            f"serve_as_relay={self._serve_as_relay!r}",
            *super()._repr_fields(),
            f"private_key_path={self._private_key_path!r}",
        ]

    # role flags ----------------------------------------------------------
    def get_serve_as_bootstrap(self) -> bool:
        return self._serve_as_bootstrap

    def set_serve_as_bootstrap(self, serve_as_bootstrap: bool) -> None:
        self._serve_as_bootstrap = serve_as_bootstrap

    def get_serve_as_relay(self) -> bool:
        return self._serve_as_relay

    def set_serve_as_relay(self, serve_as_relay: bool) -> None:
        self._serve_as_relay = serve_as_relay

    serve_as_bootstrap = property(get_serve_as_bootstrap, set_serve_as_bootstrap)
    serve_as_relay = property(get_serve_as_relay, set_serve_as_relay)

    # key path ------------------------------------------------------------
    def get_private_key_path(self) -> str:
        return self._private_key_path

    def set_private_key_path(self, private_key_path: str) -> None:
        self._private_key_path = private_key_path

    private_key_path = property(get_private_key_path, set_private_key_path)


def default_private_key_path(resolver: Callable[[], str]) -> str:
    """Return ``<app support dir>/posemesh_private_key.dat`` or ``""``."""
    directory = resolver()
    if not directory:
        return ""
    if not directory.endswith(("/", os.sep)):
        directory += os.sep
    return directory + PRIVATE_KEY_FILENAME


Config = RestrictedConfig if platform_utils.IS_RESTRICTED else NodeConfig


__all__ = [
    "Config",
    "NodeConfig",
    "RestrictedConfig",
    "PRIVATE_KEY_FILENAME",
    "default_private_key_path",
]
