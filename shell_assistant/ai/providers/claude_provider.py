import anthropic

from .base import ChatCompletionProvider


class ClaudeProvider(ChatCompletionProvider):
    name = "claude"
    aisuite_provider = "anthropic"
    timeout_errors = (anthropic.APITimeoutError, TimeoutError)
    auth_errors = (anthropic.AuthenticationError, anthropic.PermissionDeniedError)
