from .config import Config, NodeConfig, RestrictedConfig, PRIVATE_KEY_FILENAME
from .peer_list import (
    DuplicateEntry,
    IllegalCharacter,
    PeerListError,
    PeerListValidationError,
    check_peer_list,
)

__all__ = [
    "Config",
    "NodeConfig",
    "RestrictedConfig",
    "PRIVATE_KEY_FILENAME",
    "PeerListError",
    "IllegalCharacter",
    "DuplicateEntry",
    "PeerListValidationError",
    "check_peer_list",
]
