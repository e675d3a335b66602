"""Unit tests for the dustcfg command line"""

import io
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import yaml

from dustcfg import __version__
from dustcfg.main import main
from dustcfg.models.service import ProvisionReport, ProvisionState


class TestMain(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        self.config_file = self.root / "config.yaml"
        self.config_file.write_text(yaml.safe_dump({
            "version": "1.0",
            "settings_file": str(self.root / "missing.env"),
            "unit_dir": str(self.root / "system"),
            "services": ["dustserver"],
        }))

    def tearDown(self):
        self.tmp.cleanup()

    def test_missing_settings_exits_non_zero(self):
        self.assertEqual(main(["--config", str(self.config_file), "provision"]), 1)
        self.assertFalse((self.root / "system").exists())

    @patch("dustcfg.main.ProvisionOrchestrator")
    def test_provision_options(self, mock_orchestrator):
        mock_orchestrator.from_config.return_value.provision.return_value = ProvisionReport(ProvisionState.DONE)

        code = main([
            "--config", str(self.config_file), "provision",
            "--settings", str(self.root / "dust.env"), "--strict", "--timeout", "30",
        ])

        self.assertEqual(code, 0)
        config_manager = mock_orchestrator.from_config.call_args[0][0]
        self.assertEqual(config_manager.settings_file, self.root / "dust.env")
        self.assertTrue(config_manager.get_setting("fail_on_command_error"))
        self.assertEqual(config_manager.command_timeout, 30.0)

    def test_bad_config_exits_non_zero(self):
        self.config_file.write_text("services: {")
        self.assertEqual(main(["--config", str(self.config_file), "provision"]), 1)

    def test_endpoints(self):
        code = main(["endpoints", "--output-dir", str(self.root) + "/"])
        self.assertEqual(code, 0)
        self.assertTrue((self.root / "endpoints_v1.json").exists())

    def test_decode_hex(self):
        with patch("builtins.print") as mock_print:
            self.assertEqual(main(["decode-hex", "7A"]), 0)
        mock_print.assert_called_once_with("z")
        self.assertEqual(main(["decode-hex", "testy"]), 1)

    def test_version(self):
        with patch("sys.stdout", new_callable=io.StringIO) as out:
            with self.assertRaises(SystemExit):
                main(["--version"])
        self.assertEqual(out.getvalue().strip(), f"dustcfg {__version__}")


if __name__ == "__main__":
    unittest.main()
