"""Unit tests for the command runner, BuildInvoker and LifecycleController"""

import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from dustcfg.core.build_invoker import BuildInvoker
from dustcfg.core.command_runner import run_command
from dustcfg.core.service_manager import LifecycleController
from dustcfg.models.service import ServiceDescriptor


def completed(cmd, returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)


class TestRunCommand(unittest.TestCase):

    @patch("dustcfg.core.command_runner.subprocess.run")
    def test_success(self, mock_run):
        mock_run.return_value = completed(["true"], stdout="done\n")

        result = run_command(["true"])

        self.assertTrue(result.ok)
        self.assertEqual(result.stdout, "done\n")
        mock_run.assert_called_once_with(["true"], capture_output=True, text=True, timeout=None)

    @patch("dustcfg.core.command_runner.subprocess.run")
    def test_nonzero_exit_is_returned(self, mock_run):
        mock_run.return_value = completed(["false"], returncode=1, stderr="boom\n")

        result = run_command(["false"])

        self.assertFalse(result.ok)
        self.assertEqual(result.returncode, 1)
        self.assertIn("boom", result.describe())

    @patch("dustcfg.core.command_runner.subprocess.run")
    def test_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(["sleep", "9"], 1, output=b"partial")

        result = run_command(["sleep", "9"], timeout=1)

        self.assertTrue(result.timed_out)
        self.assertIsNone(result.returncode)
        self.assertFalse(result.ok)
        self.assertEqual(result.stdout, "partial")

    @patch("dustcfg.core.command_runner.subprocess.run")
    def test_missing_executable_raises(self, mock_run):
        mock_run.side_effect = FileNotFoundError("cargo")
        with self.assertRaises(FileNotFoundError):
            run_command(["cargo", "install"])


class TestBuildInvoker(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.source = Path(self.tmp.name) / "dustserver"
        self.service = ServiceDescriptor("dustserver", self.source, Path(self.tmp.name) / "dustserver.service")

    def tearDown(self):
        self.tmp.cleanup()

    @patch("dustcfg.core.command_runner.subprocess.run")
    def test_appends_source_path(self, mock_run):
        self.source.mkdir()
        mock_run.return_value = completed([])

        result = BuildInvoker().build(self.service)

        self.assertTrue(result.ok)
        self.assertEqual(mock_run.call_args[0][0], ["cargo", "install", "--path", str(self.source)])

    @patch("dustcfg.core.command_runner.subprocess.run")
    def test_failed_build_is_reported_not_raised(self, mock_run):
        self.source.mkdir()
        mock_run.return_value = completed([], returncode=101, stderr="error: could not compile\n")

        result = BuildInvoker(["make", "install", "-C"], timeout=5).build(self.service)

        self.assertEqual(result.returncode, 101)
        self.assertEqual(mock_run.call_args[0][0], ["make", "install", "-C", str(self.source)])
        self.assertEqual(mock_run.call_args[1]["timeout"], 5)

    @patch("dustcfg.core.command_runner.subprocess.run")
    def test_missing_source_directory_is_fatal(self, mock_run):
        with self.assertRaises(FileNotFoundError):
            BuildInvoker().build(self.service)
        mock_run.assert_not_called()


class TestLifecycleController(unittest.TestCase):

    @patch("dustcfg.core.command_runner.subprocess.run")
    def test_commands(self, mock_run):
        mock_run.return_value = completed([])
        controller = LifecycleController()

        controller.reload()
        controller.enable("dustserver")
        controller.start("dustserver")

        self.assertEqual(
            [c[0][0] for c in mock_run.call_args_list],
            [
                ["systemctl", "daemon-reload"],
                ["systemctl", "enable", "dustserver"],
                ["systemctl", "start", "dustserver"],
            ]
        )

    @patch("dustcfg.core.command_runner.subprocess.run")
    def test_user_scope_and_prefix(self, mock_run):
        mock_run.return_value = completed([])

        LifecycleController(["sudo", "systemctl"], user_scope=True).enable("dustchat")

        self.assertEqual(mock_run.call_args[0][0], ["sudo", "systemctl", "--user", "enable", "dustchat"])

    @patch("dustcfg.core.command_runner.subprocess.run")
    def test_failure_is_returned(self, mock_run):
        mock_run.return_value = completed([], returncode=5, stderr="Unit dustchat.service not found.\n")

        result = LifecycleController().start("dustchat")

        self.assertFalse(result.ok)
        self.assertEqual(result.returncode, 5)


if __name__ == "__main__":
    unittest.main()
