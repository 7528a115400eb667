import logging
from logging.handlers import RotatingFileHandler

import pytest

from app.utils.logging_config import (
    PerformanceMonitor, configure_for_environment, get_logger, setup_logging
)


@pytest.fixture
def restore_logging():
    yield
    configure_for_environment()


class TestLoggingConfig:
    """Test cases for logging setup"""

    def test_file_handlers_written_to_log_dir(self, tmp_path, monkeypatch, restore_logging):
        monkeypatch.setenv("LOG_DIR", str(tmp_path))

        setup_logging(level="INFO")
        get_logger("tests").error("disk full")
        for handler in logging.getLogger().handlers:
            handler.flush()

        names = sorted(p.name for p in tmp_path.iterdir())
        assert len(names) == 2
        assert names[0].startswith("hiring_ai_") and not names[0].startswith("hiring_ai_errors_")
        assert names[1].startswith("hiring_ai_errors_")
        assert "disk full" in (tmp_path / names[1]).read_text()

    def test_console_only(self, tmp_path, monkeypatch, restore_logging):
        monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))

        setup_logging(level="WARNING", log_to_file=False)

        assert not (tmp_path / "logs").exists()
        assert not any(isinstance(h, RotatingFileHandler) for h in logging.getLogger().handlers)
        assert logging.getLogger("pdfminer").level == logging.ERROR

    def test_logger_namespace(self):
        assert get_logger("app.services.llm").name == "hiring_ai.app.services.llm"


class TestPerformanceMonitor:

    def test_records_elapsed_time(self):
        with PerformanceMonitor("unit of work", get_logger("tests")) as monitor:
            pass
        assert monitor.elapsed_ms >= 0

    def test_does_not_swallow_errors(self):
        with pytest.raises(ValueError):
            with PerformanceMonitor("unit of work", get_logger("tests")):
                raise ValueError("boom")
