import logging
import os
import subprocess

from typing import List, Optional

from ..errors import HistoryError
from .kinds import ShellKind

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LINES = 20

_HISTORY_FILES = {
    ShellKind.BASH: ".bash_history",
    ShellKind.ZSH: ".zsh_history",
}


class HistoryReader:
    """Reads the tail of the user's shell history."""

    def __init__(self, shell: ShellKind, home: Optional[str] = None):
        self.shell = shell
        self.home = home or os.path.expanduser("~")

    def history_file(self) -> Optional[str]:
        """The history file for file-backed shells, None for command-backed ones."""
        file_name = _HISTORY_FILES.get(self.shell)
        if file_name is None:
            return None
        if self.shell == ShellKind.ZSH and os.getenv("HISTFILE"):
            return os.path.expanduser(os.environ["HISTFILE"])
        return os.path.join(self.home, file_name)

    def history_command(self, lines: int) -> List[str]:
        if self.shell == ShellKind.POWERSHELL:
            return [
                "powershell",
                "-NoProfile",
                "-Command",
                f"Get-Content (Get-PSReadLineOption).HistorySavePath -Tail {lines}",
            ]
        if self.shell == ShellKind.CMD:
            return ["cmd", "/C", "doskey /history"]
        raise HistoryError(f"Unsupported shell type: {self.shell}")

    def get_history(self, lines: int = DEFAULT_HISTORY_LINES) -> str:
        """Returns at most the last `lines` entries of the shell history as text."""
        history_file = self.history_file()
        if history_file is not None:
            return self._read_history_file(history_file, lines)
        return self._run_history_command(lines)

    def _read_history_file(self, path: str, lines: int) -> str:
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                content = f.read()
        except OSError as e:
            raise HistoryError(f"Error reading history file '{path}': {e}") from e

        content = content.rstrip("\n")
        if not content or lines <= 0:
            return ""
        history_lines = content.split("\n")
        return "\n".join(history_lines[-lines:])

    def _run_history_command(self, lines: int) -> str:
        argv = self.history_command(lines)
        logger.debug("Fetching history with %s", argv)
        try:
            result = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                check=True,
            )
        except (OSError, subprocess.CalledProcessError) as e:
            raise HistoryError(f"Error getting {self.shell} history: {e}") from e
        return result.stdout
