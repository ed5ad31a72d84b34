"""Ed25519 node key storage driven by a :class:`~posemesh.config.Config`."""

from __future__ import annotations

import base64
import logging
import os
from pathlib import Path
from typing import Optional

from nacl import signing
from nacl.exceptions import CryptoError

from .config import NodeConfig

logger = logging.getLogger(__name__)


def _signing_key_from_seed(seed: bytes) -> Optional[signing.SigningKey]:
    try:
        return signing.SigningKey(bytes(seed))
    except (ValueError, TypeError, CryptoError):
        return None


def load_signing_key(path: str | os.PathLike) -> Optional[signing.SigningKey]:
    """Return the key whose seed is stored at ``path``.

    ``None`` is returned when the file does not exist or does not hold a
    valid 32 byte seed.
    """
    path = Path(path)
    if not path.exists():
        return None
    return _signing_key_from_seed(path.read_bytes())


def save_signing_key(path: str | os.PathLike, key: signing.SigningKey) -> None:
    """Write the raw seed of ``key`` to ``path``, creating parent directories.

    The seed goes to an owner-only temporary file that then replaces ``path``.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    tmp.unlink(missing_ok=True)
    fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(key.encode())
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def load_or_create_signing_key(config) -> signing.SigningKey:
    """Return the node key described by ``config``.

    The inline ``private_key`` wins when it is a valid seed.  Otherwise the
    key stored at ``private_key_path`` is used, and a fresh key is written
    there when none is stored yet.  Without a path the key is ephemeral.
    """
    key = _signing_key_from_seed(config.get_private_key())
    if key is not None:
        return key
    if config.get_private_key():
        logger.warning("private key is not a valid Ed25519 seed, ignoring it")

    path = config.get_private_key_path() if isinstance(config, NodeConfig) else ""
    if not path:
        logger.debug("no private key path configured, generating ephemeral key")
        return signing.SigningKey.generate()

    key = load_signing_key(path)
    if key is not None:
        logger.debug("loaded private key from %s", path)
        return key

    key = signing.SigningKey.generate()
    try:
        save_signing_key(path, key)
        logger.info("generated new private key at %s", path)
    except OSError as exc:
        logger.error("failed to write private key to %s: %s", path, exc)
    return key


def encode_public_key(key: signing.SigningKey) -> str:
    """Return the base64 encoded verify key of ``key``."""
    return base64.b64encode(key.verify_key.encode()).decode("ascii")


__all__ = [
    "load_signing_key",
    "save_signing_key",
    "load_or_create_signing_key",
    "encode_public_key",
]
