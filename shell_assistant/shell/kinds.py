import os

from enum import Enum
from typing import List, Optional


class ShellKind(str, Enum):
    """The command interpreters a session can dispatch to."""

    BASH = "bash"  # POSIX default
    ZSH = "zsh"
    POWERSHELL = "powershell"
    CMD = "cmd"

    def __str__(self) -> str:
        return self.value


_ALIASES = {
    "bash": ShellKind.BASH,
    "sh": ShellKind.BASH,
    "posix": ShellKind.BASH,
    "zsh": ShellKind.ZSH,
    "powershell": ShellKind.POWERSHELL,
    "pwsh": ShellKind.POWERSHELL,
    "cmd": ShellKind.CMD,
}


def detect_shell(os_name: Optional[str] = None) -> ShellKind:
    """Guesses the user's shell from the platform and the SHELL variable."""
    platform_name = os.name if os_name is None else os_name
    if platform_name == "nt":
        return ShellKind.POWERSHELL

    if "zsh" in os.getenv("SHELL", ""):
        return ShellKind.ZSH
    return ShellKind.BASH


def resolve_shell_kind(override: Optional[str] = None) -> ShellKind:
    """
    Returns the shell configured by `override`, or the detected one when no override is
    set. Unknown names fall back to detection as well.
    """
    if override:
        kind = _ALIASES.get(os.path.basename(override.strip()).lower())
        if kind is not None:
            return kind
    return detect_shell()


def shell_command(kind: ShellKind, command: str) -> List[str]:
    """Builds the argv that runs `command` through `kind`."""
    if kind == ShellKind.POWERSHELL:
        return ["powershell", "-Command", command]
    if kind == ShellKind.CMD:
        return ["cmd", "/C", command]
    return ["sh", "-c", command]
