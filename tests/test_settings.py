"""Unit tests for the settings reader and environment transcoder."""

import tempfile
import unittest
from pathlib import Path

from dustcfg.core.settings import read_settings_lines, transcode_line, transcode_settings


class TestTranscodeLine(unittest.TestCase):
    """Test transcode_line"""

    def test_export_line(self):
        self.assertEqual(transcode_line("export PORT=3000"), "Environment=PORT=3000")

    def test_only_first_export_replaced(self):
        self.assertEqual(
            transcode_line("export CMD=export FOO"),
            "Environment=CMD=export FOO"
        )

    def test_export_not_at_start(self):
        """The marker is replaced wherever it first occurs"""
        self.assertEqual(transcode_line("  export A=1"), "  Environment=A=1")

    def test_line_without_marker_unchanged(self):
        for line in ["DUST_PATH=/var/dust", "", "# comment", "exported=1", "EXPORT A=1"]:
            self.assertEqual(transcode_line(line), line)

    def test_no_trimming(self):
        self.assertEqual(transcode_line("export A=1  "), "Environment=A=1  ")


class TestReadSettingsLines(unittest.TestCase):
    """Test read_settings_lines and transcode_settings"""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "dust.env"

    def tearDown(self):
        self.tmp.cleanup()

    def test_lines_in_order_without_terminators(self):
        self.path.write_text("export PORT=3000\nDUST_PATH=/var/dust\nexport B=2")
        self.assertEqual(
            list(read_settings_lines(self.path)),
            ["export PORT=3000", "DUST_PATH=/var/dust", "export B=2"]
        )

    def test_crlf_terminators_stripped(self):
        self.path.write_bytes(b"export A=1\r\nexport B=2\r\n")
        self.assertEqual(list(read_settings_lines(self.path)), ["export A=1", "export B=2"])

    def test_bare_carriage_return_kept_in_line(self):
        self.path.write_bytes(b"export A=x\ry\nexport B=2\r\n")
        self.assertEqual(list(read_settings_lines(self.path)), ["export A=x\ry", "export B=2"])

    def test_restartable(self):
        self.path.write_text("export A=1\n")
        self.assertEqual(list(read_settings_lines(self.path)), list(read_settings_lines(self.path)))

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            list(read_settings_lines(Path(self.tmp.name) / "missing.env"))

    def test_transcode_settings(self):
        self.path.write_text("export PORT=3000\nDUST_PATH=/var/dust\n")
        self.assertEqual(
            list(transcode_settings(self.path)),
            ["Environment=PORT=3000", "DUST_PATH=/var/dust"]
        )


if __name__ == "__main__":
    unittest.main()
