"""Path utilities: containment checks, ancestor walks and app data locations."""

import os
import platform
from collections.abc import Iterator
from pathlib import Path

from p4edit.core.constant import (
    DEFAULT_CONFIG_FILENAME,
    P4_PROGRAM_DEFAULT,
    P4_PROGRAM_WINDOWS,
    P4CONFIG_ENV,
    P4CONFIG_FALLBACK_FILENAMES,
)


def get_app_data_dir() -> Path:
    """Get the application data directory based on OS.

    Returns:
        Path to the application data directory.
        - Linux/macOS: ~/.p4edit
        - Windows: %APPDATA%/p4edit
    """
    system = platform.system()

    if system == "Windows":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "p4edit"
        else:
            return Path.home() / "AppData" / "Roaming" / "p4edit"
    else:
        return Path.home() / ".p4edit"


def get_config_path() -> Path:
    """Get the default settings file path."""
    return get_app_data_dir() / DEFAULT_CONFIG_FILENAME


def default_program() -> str:
    """Get the p4 executable name for the current platform."""
    if platform.system() == "Windows":
        return P4_PROGRAM_WINDOWS
    return P4_PROGRAM_DEFAULT


def default_config_filenames() -> list[str]:
    """Get candidate P4CONFIG file names, environment override first.

    Returns:
        De-duplicated list of file names to search for.
    """
    names: list[str] = []
    override = os.environ.get(P4CONFIG_ENV)
    if override:
        names.append(override)
    for name in P4CONFIG_FALLBACK_FILENAMES:
        if name not in names:
            names.append(name)
    return names


def normalize_path(path: str | Path) -> Path:
    """Make a path absolute and normalized without touching the filesystem.

    Args:
        path: Path to normalize.

    Returns:
        Absolute, normalized Path.
    """
    return Path(os.path.abspath(os.fspath(path)))


def is_same_or_relative_to(candidate: str | Path, base: str | Path) -> bool:
    """Check whether candidate equals base or lies inside it.

    Args:
        candidate: Path being tested.
        base: Directory that may contain candidate.

    Returns:
        True if the relative path from base to candidate is empty, or is not
        absolute and does not climb out of base.
    """
    candidate_str = os.path.normcase(os.fspath(normalize_path(candidate)))
    base_str = os.path.normcase(os.fspath(normalize_path(base)))

    try:
        relative = os.path.relpath(candidate_str, base_str)
    except ValueError:
        # Different drives on Windows
        return False

    if relative in ("", os.curdir):
        return True
    if os.path.isabs(relative):
        return False
    return Path(relative).parts[0] != os.pardir


def iter_ancestors(path: str | Path) -> Iterator[Path]:
    """Yield path and each of its parents up to the filesystem root.

    Args:
        path: Starting directory.

    Yields:
        The directory itself, then each parent, deepest first.
    """
    current = normalize_path(path)
    yield current
    yield from current.parents
