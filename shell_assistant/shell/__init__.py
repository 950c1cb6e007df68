"""
Everything that touches the user's shell: picking the interpreter, running commands and
reading history. The interactive loop lives in `session`, and its failure path in
`remediation`.
"""

from .executor import CommandExecutor, ExecutionOutcome, resolve_cd_target
from .history import DEFAULT_HISTORY_LINES, HistoryReader
from .kinds import ShellKind, detect_shell, resolve_shell_kind, shell_command

__all__ = [
    "CommandExecutor",
    "DEFAULT_HISTORY_LINES",
    "ExecutionOutcome",
    "HistoryReader",
    "ShellKind",
    "detect_shell",
    "resolve_cd_target",
    "resolve_shell_kind",
    "shell_command",
]
