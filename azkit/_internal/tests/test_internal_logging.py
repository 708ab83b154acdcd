import os
import tempfile

# Set cache dir to a temp dir before importing anything from azkit
tmpdir = tempfile.mkdtemp()
os.environ["AZKIT_CACHE_DIR"] = tmpdir
os.environ["AZKIT_ENABLE_INTERNAL_LOG"] = "1"

import unittest
from unittest import mock

from azkit._internal import logging as internal_logging
from azkit._internal.logging import _LOGFILE_BASE


def _logfile_text():
    if not _LOGFILE_BASE.exists():
        return ""
    return _LOGFILE_BASE.read_text()


class TestInternalLog(unittest.TestCase):
    def tearDown(self):
        internal_logging.disable()

    def test_enabled_messages_reach_the_file(self):
        internal_logging.enable()
        internal_logging.enable()
        self.assertTrue(internal_logging.is_enabled())
        internal_logging.log("request headers for vault call")
        self.assertIn("request headers for vault call", _logfile_text())

    def test_messages_after_disable_are_dropped(self):
        internal_logging.enable()
        internal_logging.disable()
        self.assertFalse(internal_logging.is_enabled())
        internal_logging.log("dropped while disabled")
        self.assertNotIn("dropped while disabled", _logfile_text())

    def test_environment_gate(self):
        with mock.patch.dict(os.environ, {"AZKIT_ENABLE_INTERNAL_LOG": "0"}):
            internal_logging.enable()
        self.assertFalse(internal_logging.is_enabled())


if __name__ == "__main__":
    unittest.main()
