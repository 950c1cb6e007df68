import unittest
from unittest.mock import MagicMock, patch

from aisuite.provider import LLMError

from shell_assistant.ai.llm import LLMClient, LLMCompletionResponse


class TestLLMClient(unittest.TestCase):
    """Tests for the aisuite wrapper."""

    @patch("shell_assistant.ai.llm.aisuite.Client")
    def test_completion_returns_message_content(self, MockClient):
        """Verify the request is forwarded and the first choice is unwrapped."""
        # Arrange
        message = MagicMock()
        message.model_dump.return_value = {"role": "assistant", "content": "ls -la"}
        response = MagicMock()
        response.choices = [MagicMock(message=message)]
        MockClient.return_value.chat.completions.create.return_value = response

        client = LLMClient({"openai": {"api_key": "k"}})
        messages = [LLMClient.format_user_message("list files")]

        # Action
        result = client.completion(model="openai:gpt", messages=messages, max_tokens=10)

        # Assert
        MockClient.assert_called_once_with({"openai": {"api_key": "k"}})
        MockClient.return_value.chat.completions.create.assert_called_once_with(
            model="openai:gpt", messages=messages, max_tokens=10
        )
        message.model_dump.assert_called_once_with(exclude_unset=True)
        self.assertEqual(result.content, "ls -la")

    @patch("shell_assistant.ai.llm.aisuite.Client")
    def test_completion_without_choices_has_no_content(self, MockClient):
        response = MagicMock()
        response.choices = []
        MockClient.return_value.chat.completions.create.return_value = response

        result = LLMClient({}).completion(model="openai:gpt", messages=[])

        self.assertIsNone(result.content)

    @patch("shell_assistant.ai.llm.aisuite.Client")
    def test_completion_with_plain_message_object(self, MockClient):
        """Verify messages without pydantic support are read through their attribute."""
        message = MagicMock(spec=["content"])
        message.content = "pwd"
        response = MagicMock()
        response.choices = [MagicMock(message=message)]
        MockClient.return_value.chat.completions.create.return_value = response

        result = LLMClient({}).completion(model="anthropic:claude", messages=[])

        self.assertEqual(result.content, "pwd")

    @patch("shell_assistant.ai.llm.aisuite.Client")
    def test_wrapped_sdk_error_is_unwrapped(self, MockClient):
        """Verify the SDK error hidden inside an aisuite LLMError is the one raised."""
        # Arrange
        sdk_error = TimeoutError("Request timed out.")
        wrapped = LLMError(f"An error occurred: {sdk_error}")
        wrapped.__context__ = sdk_error
        MockClient.return_value.chat.completions.create.side_effect = wrapped

        # Action
        with self.assertRaises(TimeoutError) as cm:
            LLMClient({}).completion(model="openai:gpt", messages=[])

        # Assert
        self.assertIs(cm.exception, sdk_error)

    @patch("shell_assistant.ai.llm.aisuite.Client")
    def test_llm_error_without_cause_is_kept(self, MockClient):
        MockClient.return_value.chat.completions.create.side_effect = LLMError("bad request")

        with self.assertRaises(LLMError):
            LLMClient({}).completion(model="openai:gpt", messages=[])

    def test_message_formatting(self):
        self.assertEqual(
            LLMClient.format_system_message("sys"), {"role": "system", "content": "sys"}
        )
        self.assertEqual(LLMClient.format_user_message("hi"), {"role": "user", "content": "hi"})
        self.assertIsNone(LLMCompletionResponse({}).content)


if __name__ == "__main__":
    unittest.main()
