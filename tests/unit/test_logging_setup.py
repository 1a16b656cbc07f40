import json
import logging
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))

from bepinex_core.logging_setup import configure_logging, get_logger


class LoggingSetupTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self._reset_handlers()

    def tearDown(self):
        self._reset_handlers()
        self._tmp.cleanup()

    def _reset_handlers(self):
        logger = get_logger()
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    def test_writes_json_lines_with_event(self):
        directory = Path(self._tmp.name)
        logger = configure_logging(keep_files=3, directory=directory)
        logger.info("installed v5.4.22", extra={"event": "deploy_complete"})
        try:
            raise OSError("disk full")
        except OSError:
            logger.exception("install failed", extra={"event": "install_failed"})
        for handler in logger.handlers:
            handler.flush()

        records = [json.loads(line) for line in (directory / "installer.log").read_text(encoding="utf-8").splitlines()]
        self.assertEqual([r["event"] for r in records], ["logging_configured", "deploy_complete", "install_failed"])
        self.assertEqual(records[1]["msg"], "installed v5.4.22")
        self.assertEqual(records[1]["level"], "INFO")
        self.assertEqual(records[1]["logger"], "bepinex_installer")
        self.assertIn("OSError: disk full", records[2]["exc"])

    def test_configure_is_idempotent(self):
        directory = Path(self._tmp.name)
        first = configure_logging(directory=directory, console=True)
        handlers = list(first.handlers)
        second = configure_logging(directory=directory, console=True)
        self.assertIs(first, second)
        self.assertEqual(second.handlers, handlers)
        self.assertTrue(any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler) for h in handlers))


if __name__ == "__main__":
    unittest.main()
