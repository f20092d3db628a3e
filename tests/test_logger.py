import json
import logging
import os
import shutil
import tempfile
import unittest

from logging.handlers import RotatingFileHandler

from termwise.logger import CommandLogger, setup_logging


class TestCommandLogger(unittest.TestCase):
    """Test cases for the CommandLogger class."""

    def setUp(self):
        self.log_dir = os.path.join(tempfile.mkdtemp(), "logs")

    def tearDown(self):
        shutil.rmtree(os.path.dirname(self.log_dir), ignore_errors=True)

    def test_log_command_execution(self):
        log_file = CommandLogger(self.log_dir).log_command_execution("folder sizes", "du -sh *", 0)

        self.assertTrue(log_file.startswith(self.log_dir))
        with open(log_file) as f:
            entry = json.load(f)
        self.assertEqual(entry["query"], "folder sizes")
        self.assertEqual(entry["command"], "du -sh *")
        self.assertEqual(entry["return_code"], 0)

    def test_unwritable_log_dir(self):
        blocker = os.path.dirname(self.log_dir) + "/file"
        with open(blocker, "w") as f:
            f.write("")

        self.assertEqual(CommandLogger(os.path.join(blocker, "logs")).log_command_execution("q", "ls", 0), "")


class TestSetupLogging(unittest.TestCase):
    """Test cases for setup_logging."""

    def setUp(self):
        root = logging.getLogger()
        self.saved_handlers = root.handlers[:]
        self.saved_level = root.level
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        root = logging.getLogger()
        for handler in root.handlers[:]:
            if handler not in self.saved_handlers:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(self.saved_level)
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def _added_handlers(self):
        return [h for h in logging.getLogger().handlers if h not in self.saved_handlers]

    def test_without_log_dir_no_file_is_written(self):
        setup_logging(verbose=False)

        self.assertEqual(logging.getLogger().level, logging.WARNING)
        self.assertFalse(any(isinstance(h, RotatingFileHandler) for h in self._added_handlers()))
        self.assertEqual(os.listdir(self.tmpdir), [])

    def test_with_log_dir(self):
        log_dir = os.path.join(self.tmpdir, "logs")

        setup_logging(verbose=True, log_dir=log_dir)

        self.assertEqual(logging.getLogger().level, logging.INFO)
        self.assertTrue(any(isinstance(h, RotatingFileHandler) for h in self._added_handlers()))
        self.assertTrue(os.path.exists(os.path.join(log_dir, "termwise.log")))


if __name__ == "__main__":
    unittest.main()
