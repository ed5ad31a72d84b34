"""Build target detection and platform helpers for posemesh."""

from __future__ import annotations

import os
import sys
from typing import Callable, Optional

import appdirs

# Build target detection. Evaluated once; config classes are chosen from it.
IS_APPLE = sys.platform == "darwin"
IS_RESTRICTED = (
    sys.platform in ("emscripten", "wasi")
    or os.environ.get("POSEMESH_TARGET", "").lower() == "restricted"
)


def get_app_support_directory_path() -> str:
    """Return the per-user application support directory.

    On Apple platforms this is ``~/Library/Application Support``.  An empty
    string means the directory could not be resolved.
    """
    return appdirs.user_data_dir() or ""


def app_support_directory_resolver() -> Optional[Callable[[], str]]:
    """Return the resolver available on this platform, if any."""
    if IS_APPLE and not IS_RESTRICTED:
        return get_app_support_directory_path
    return None


def get_platform_info() -> dict:
    return {
        "platform": sys.platform,
        "is_apple": IS_APPLE,
        "is_restricted": IS_RESTRICTED,
    }


__all__ = [
    "IS_APPLE",
    "IS_RESTRICTED",
    "get_app_support_directory_path",
    "app_support_directory_resolver",
    "get_platform_info",
]
