"""
Test logging configuration
"""
import logging
import os
import tempfile
from zos_search.utils.logger import setup_logging


class TestSetupLogging:
    """Test setup_logging"""

    def teardown_method(self):
        for handler in logging.getLogger().handlers:
            handler.close()
        logging.getLogger().handlers = []

    def test_level_and_single_console_handler(self):
        setup_logging('DEBUG')
        setup_logging('WARNING')

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1

    def test_log_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_file = os.path.join(tmp, "logs", "search.log")

            setup_logging('INFO', log_file)
            logging.getLogger("DataSetSearch").info("searching")
            for handler in logging.getLogger().handlers:
                handler.flush()

            with open(log_file) as f:
                contents = f.read()

            self.teardown_method()

        assert "DataSetSearch - INFO - searching" in contents
