import os
import subprocess
import tempfile
import unittest
from unittest.mock import MagicMock, patch

from shell_assistant.errors import HistoryError
from shell_assistant.shell import DEFAULT_HISTORY_LINES, HistoryReader, ShellKind


class TestFileHistory(unittest.TestCase):
    """Tests for shells whose history lives in a file."""

    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.home = tmp.name

        env_patcher = patch.dict(os.environ)
        env_patcher.start()
        self.addCleanup(env_patcher.stop)
        os.environ.pop("HISTFILE", None)

    def _write_history(self, name: str, lines):
        with open(os.path.join(self.home, name), "w", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")

    def test_returns_last_n_lines(self):
        """Verify only the tail of a long history is returned, in order."""
        self._write_history(".bash_history", [f"cmd {i}" for i in range(50)])

        history = HistoryReader(ShellKind.BASH, home=self.home).get_history(DEFAULT_HISTORY_LINES)

        lines = history.split("\n")
        self.assertEqual(len(lines), 20)
        self.assertEqual(lines[0], "cmd 30")
        self.assertEqual(lines[-1], "cmd 49")

    def test_short_history_is_returned_whole(self):
        self._write_history(".bash_history", ["ls", "pwd"])

        history = HistoryReader(ShellKind.BASH, home=self.home).get_history(20)

        self.assertEqual(history, "ls\npwd")

    def test_zsh_uses_its_own_file(self):
        self._write_history(".zsh_history", [": 1700000000:0;git status"])

        history = HistoryReader(ShellKind.ZSH, home=self.home).get_history(5)

        self.assertEqual(history, ": 1700000000:0;git status")

    def test_zsh_honours_histfile(self):
        custom = os.path.join(self.home, "custom_history")
        with open(custom, "w") as f:
            f.write("make test\n")
        os.environ["HISTFILE"] = custom

        reader = HistoryReader(ShellKind.ZSH, home=self.home)

        self.assertEqual(reader.history_file(), custom)
        self.assertEqual(reader.get_history(), "make test")

    def test_unreadable_file_raises_history_error(self):
        with self.assertRaises(HistoryError) as cm:
            HistoryReader(ShellKind.BASH, home=self.home).get_history()

        self.assertIn(".bash_history", str(cm.exception))


class TestCommandHistory(unittest.TestCase):
    """Tests for shells whose history comes from a host command."""

    @patch("shell_assistant.shell.history.subprocess.run")
    def test_powershell_output_is_returned_verbatim(self, mock_run):
        mock_run.return_value = MagicMock(stdout="Get-ChildItem\r\ncd ..\r\n")

        history = HistoryReader(ShellKind.POWERSHELL).get_history(20)

        self.assertEqual(history, "Get-ChildItem\r\ncd ..\r\n")
        argv = mock_run.call_args.args[0]
        self.assertEqual(argv[0], "powershell")
        self.assertIn("-Tail 20", argv[-1])
        self.assertTrue(mock_run.call_args.kwargs["check"])

    @patch("shell_assistant.shell.history.subprocess.run")
    def test_cmd_uses_doskey(self, mock_run):
        mock_run.return_value = MagicMock(stdout="dir\n")

        self.assertEqual(HistoryReader(ShellKind.CMD).get_history(), "dir\n")
        mock_run.assert_called_once_with(
            ["cmd", "/C", "doskey /history"],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            check=True,
        )

    @patch(
        "shell_assistant.shell.history.subprocess.run",
        side_effect=subprocess.CalledProcessError(1, ["powershell"]),
    )
    def test_command_failure_raises_history_error(self, mock_run):
        with self.assertRaises(HistoryError):
            HistoryReader(ShellKind.POWERSHELL).get_history()

    @patch("shell_assistant.shell.history.subprocess.run", side_effect=FileNotFoundError("cmd"))
    def test_missing_host_command_raises_history_error(self, mock_run):
        with self.assertRaises(HistoryError):
            HistoryReader(ShellKind.CMD).get_history()


if __name__ == "__main__":
    unittest.main()
