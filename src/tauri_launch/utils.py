"""Configuration and helpers for the tauri launcher."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

# Configuration Constants
DEFAULT_COMMAND = "tauri"
COMMAND_ENV = "TAURI_LAUNCH_COMMAND"
LOG_LEVEL_ENV = "TAURI_LAUNCH_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

APPIMAGE_ENV = "APPIMAGE_EXTRACT_AND_RUN"
APPIMAGE_DEFAULT = "1"

# Exit status used by POSIX shells when a command cannot be found
COMMAND_NOT_FOUND = 127

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class LauncherConfig:
    command: str = DEFAULT_COMMAND
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "LauncherConfig":
        """Read launcher settings from *environ*.

        An empty ``TAURI_LAUNCH_COMMAND`` is treated as unset. Unknown log
        level names fall back to ``WARNING``.
        """
        command = environ.get(COMMAND_ENV) or DEFAULT_COMMAND
        level = environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            level = DEFAULT_LOG_LEVEL
        return cls(command=command, log_level=level)


def child_environment(environ: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of *environ* with APPIMAGE_EXTRACT_AND_RUN defaulted to "1".

    An existing value, including the empty string, is kept as is.
    """
    env = dict(environ)
    env.setdefault(APPIMAGE_ENV, APPIMAGE_DEFAULT)
    return env


def shell_command(command: str, args: Sequence[str]) -> str:
    """Build the shell command line that runs *command* with *args* verbatim."""
    if os.name == "nt":
        return subprocess.list2cmdline([command, *args])
    # exec replaces the shell so the child receives signals directly
    return " ".join(["exec", command, *(shlex.quote(a) for a in args)])


def command_on_path(command: str, environ: Mapping[str, str]) -> bool:
    """True if the program named by *command* resolves on the PATH in *environ*."""
    parts = shlex.split(command, posix=os.name != "nt")
    if not parts:
        return False
    return shutil.which(parts[0], path=environ.get("PATH", os.defpath)) is not None


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    root = logging.getLogger()
    if getattr(root, "_tauri_launch_configured", False):
        root.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)
    setattr(root, "_tauri_launch_configured", True)
