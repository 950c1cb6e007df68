"""Exceptions raised across the assistant."""

from typing import Optional


class AssistantError(Exception):
    """Base class for every error the assistant reports to the user."""


class ConfigError(AssistantError):
    """Missing or invalid settings. Always fatal."""


class ProviderError(AssistantError):
    """A request to the language model provider failed."""


class ProviderTimeoutError(ProviderError):
    pass


class ProviderAuthError(ProviderError):
    pass


class ProviderEmptyResponseError(ProviderError):
    pass


class ProviderNotImplementedError(ProviderError):
    pass


class HistoryError(AssistantError):
    """The shell history could not be read."""


class SessionError(AssistantError):
    """The interactive session could not read from the terminal."""


class ExecutionError(AssistantError):
    """A user-approved command exited non-zero or could not be started."""

    def __init__(
        self,
        command: str,
        returncode: Optional[int] = None,
        stderr: str = "",
        cause: Optional[BaseException] = None,
    ):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        self.cause = cause
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        if self.returncode is None:
            return f"could not start command: {self.cause}"

        message = f"exit status {self.returncode}"
        detail = self.stderr.strip()
        if detail:
            message += f": {detail}"
        return message
