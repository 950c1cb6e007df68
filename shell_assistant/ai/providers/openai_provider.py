import openai

from .base import ChatCompletionProvider


class OpenAIProvider(ChatCompletionProvider):
    name = "openai"
    aisuite_provider = "openai"
    timeout_errors = (openai.APITimeoutError, TimeoutError)
    auth_errors = (openai.AuthenticationError, openai.PermissionDeniedError)
