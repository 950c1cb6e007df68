import codecs
import locale
import logging
import os
import subprocess
import sys

from dataclasses import dataclass
from typing import IO, Optional

from ..errors import ExecutionError
from .kinds import ShellKind, shell_command

logger = logging.getLogger(__name__)

CD_PREFIX = "cd "
STDERR_CHUNK_SIZE = 4096


@dataclass
class ExecutionOutcome:
    """What happened to a single command, consumed right away by the session."""

    success: bool
    working_directory: str
    error: Optional[ExecutionError] = None


def resolve_cd_target(command: str, working_directory: str) -> Optional[str]:
    """
    Returns the directory a successful `cd <path>` moved to, or None when `command` is
    not a directory change or the target does not exist.
    """
    command = command.strip()
    if not command.startswith(CD_PREFIX):
        return None

    target = command[len(CD_PREFIX):].strip()
    if len(target) >= 2 and target[0] == target[-1] and target[0] in "\"'":
        target = target[1:-1]
    if not target:
        return None

    target = os.path.expanduser(target)
    if not os.path.isabs(target):
        target = os.path.join(working_directory, target)
    target = os.path.normpath(target)

    if os.path.exists(target):
        return target
    return None


def _relay_stderr(stream: IO[bytes]) -> str:
    """
    Copies `stream` to our stderr chunk by chunk until the child closes it, and returns
    everything that went through. Partial lines such as progress bars and prompts show
    up right away.
    """
    decoder = codecs.getincrementaldecoder(locale.getpreferredencoding(False))(errors="replace")
    collected = []

    with stream:
        for data in iter(lambda: stream.read1(STDERR_CHUNK_SIZE), b""):
            text = decoder.decode(data)
            if text:
                sys.stderr.write(text)
                sys.stderr.flush()
                collected.append(text)

    tail = decoder.decode(b"", final=True)
    if tail:
        sys.stderr.write(tail)
        sys.stderr.flush()
        collected.append(tail)
    return "".join(collected)


class CommandExecutor:
    """Runs commands through the OS shell, one subprocess per command."""

    def __init__(self, shell: ShellKind):
        self.shell = shell

    def execute(self, command: str, working_directory: str) -> ExecutionOutcome:
        """
        Runs `command` with `working_directory` as its cwd. stdin and stdout are shared
        with the terminal so interactive programs work. stderr is relayed to the terminal
        as it arrives and also collected for error reporting.
        """
        argv = shell_command(self.shell, command)
        logger.debug("Running %s in %s", argv, working_directory)

        try:
            process = subprocess.Popen(argv, cwd=working_directory, stderr=subprocess.PIPE)
        except OSError as e:
            return ExecutionOutcome(
                success=False,
                working_directory=working_directory,
                error=ExecutionError(command, cause=e),
            )

        try:
            stderr = _relay_stderr(process.stderr)
        except KeyboardInterrupt:
            process.kill()
            process.wait()
            raise
        returncode = process.wait()

        if returncode != 0:
            return ExecutionOutcome(
                success=False,
                working_directory=working_directory,
                error=ExecutionError(command, returncode=returncode, stderr=stderr),
            )

        new_directory = resolve_cd_target(command, working_directory)
        if new_directory is not None:
            logger.debug("Working directory changed to %s", new_directory)
            return ExecutionOutcome(success=True, working_directory=new_directory)

        return ExecutionOutcome(success=True, working_directory=working_directory)
