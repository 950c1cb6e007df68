import unittest
from unittest.mock import MagicMock, patch

from shell_assistant.errors import ExecutionError, HistoryError, ProviderTimeoutError
from shell_assistant.shell.remediation import NO_HISTORY_AVAILABLE, RemediationService


class TestRemediationService(unittest.TestCase):
    """Tests for the help offered after a failed command."""

    def setUp(self):
        self.provider = MagicMock()
        self.provider.handle_error.return_value = "Try `sudo cat secret`."
        self.history = MagicMock()
        self.history.get_history.return_value = "ls\ncat secret"
        self.console = MagicMock()
        self.error = ExecutionError("cat secret", returncode=1, stderr="permission denied")
        self.service = RemediationService(self.provider, self.history, self.console)

    @patch("shell_assistant.shell.remediation.Markdown")
    @patch("builtins.input", return_value="y")
    def test_opt_in_sends_error_and_history_once(self, mock_input, MockMarkdown):
        """Verify the last 20 history lines and the error reach the model exactly once."""
        # Action
        offered = self.service.offer(self.error)

        # Assert
        self.assertTrue(offered)
        self.history.get_history.assert_called_once_with(20)
        self.provider.handle_error.assert_called_once_with(
            "exit status 1: permission denied", "ls\ncat secret"
        )
        MockMarkdown.assert_called_once_with("Try `sudo cat secret`.")
        self.console.print.assert_called_once_with(MockMarkdown.return_value)

    @patch("builtins.input", return_value="")
    def test_declining_does_nothing(self, mock_input):
        offered = self.service.offer(self.error)

        self.assertFalse(offered)
        self.history.get_history.assert_not_called()
        self.provider.handle_error.assert_not_called()

    @patch("builtins.input", side_effect=EOFError())
    def test_eof_counts_as_declining(self, mock_input):
        self.assertFalse(self.service.offer(self.error))
        self.provider.handle_error.assert_not_called()

    @patch("builtins.input", return_value="YES")
    def test_history_failure_uses_placeholder(self, mock_input):
        """Verify a history error is only a warning and remediation still happens."""
        self.history.get_history.side_effect = HistoryError("Error reading history file")

        with self.assertLogs("shell_assistant.shell.remediation", level="WARNING"):
            self.service.offer(self.error)

        self.provider.handle_error.assert_called_once_with(
            "exit status 1: permission denied", NO_HISTORY_AVAILABLE
        )

    @patch("builtins.input", return_value="y")
    def test_provider_failure_is_logged_not_raised(self, mock_input):
        self.provider.handle_error.side_effect = ProviderTimeoutError("timed out")

        with self.assertLogs("shell_assistant.shell.remediation", level="ERROR") as logs:
            self.service.offer(self.error)

        self.assertIn("timed out", logs.output[0])
        self.console.print.assert_not_called()


if __name__ == "__main__":
    unittest.main()
