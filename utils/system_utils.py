"""System helpers for environment checks."""

import os
import platform
import shutil


def current_os() -> str:
    return platform.system().lower()


def is_macos() -> bool:
    return current_os() == "darwin"


def is_windows() -> bool:
    return current_os().startswith("windows")


def has_command(name: str) -> bool:
    """Return True when an executable is available on PATH."""
    return shutil.which(name) is not None


def default_shell() -> str:
    """POSIX shell used for script execution."""
    return os.getenv("RING_SHELL", "/bin/sh")
