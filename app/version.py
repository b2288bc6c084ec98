"""
Version information for the Poynt orders client.

Single source of truth: pyproject.toml
Runtime access via importlib.metadata with fallback.
"""

from __future__ import annotations

import sys

# Fallback version if package metadata unavailable (dev mode)
_FALLBACK_VERSION = "0.1.0"

_DISTRIBUTION_NAME = "poynt-orders-client"


def get_version() -> str:
    """Get the package version from metadata or fallback."""
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version(_DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return _FALLBACK_VERSION


VERSION = get_version()


def version_string() -> str:
    """
    Get formatted version string for display.

    Returns:
        Formatted version string like "poynt-orders-client v0.1.0 (Python 3.12)"
    """
    python_version = f"{sys.version_info.major}.{sys.version_info.minor}"
    return f"{_DISTRIBUTION_NAME} v{VERSION} (Python {python_version})"
