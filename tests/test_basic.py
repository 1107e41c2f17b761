"""Basic unit tests for mapconfig modules."""

import logging
from pathlib import Path


class TestPackage:
    """Test package level imports."""

    def test_public_api(self) -> None:
        """Test the main classes are exported."""
        import mapconfig

        assert mapconfig.__version__
        assert mapconfig.ConfigParser is not None
        assert mapconfig.ValidationList is not None


class TestValidationTypes:
    """Test validation message containers."""

    def test_message_constructors(self) -> None:
        """Test error and warning messages."""
        from mapconfig.config.types import Severity, ValidationMessage

        error = ValidationMessage.error("broken")
        warning = ValidationMessage.warning("odd")
        assert error.severity is Severity.ERROR
        assert error.is_error
        assert not warning.is_error
        assert str(error) == "Error: broken"
        assert str(warning) == "Warning: odd"

    def test_validation_list(self) -> None:
        """Test appending and summarizing messages."""
        from mapconfig.config.types import ValidationList

        validation = ValidationList()
        validation.warning("odd")
        assert not validation.has_errors
        validation.error("broken")
        assert validation.has_errors
        assert [str(m) for m in validation] == ["Warning: odd", "Error: broken"]

        result = validation.result()
        assert not result.is_valid
        assert result.errors == ["broken"]
        assert result.warnings == ["odd"]

    def test_summarize(self) -> None:
        """Test flattening a validation map."""
        from mapconfig.config.types import ValidationList, has_errors, summarize

        day = ValidationList()
        day.warning("odd")
        validation = {"config": ValidationList(), "map:day": day}
        assert not has_errors(validation)

        result = summarize(validation)
        assert result.is_valid
        assert result.warnings == ["[map:day] odd"]


class TestUtilsLogging:
    """Test logging configuration."""

    def test_logging_setup(self) -> None:
        """Test logging setup configures the project logger."""
        from mapconfig.utils.logging_config import setup_logging

        setup_logging()

        logger = logging.getLogger("mapconfig")
        assert logger.level == logging.DEBUG
        assert len(logging.getLogger().handlers) == 1

    def test_file_logging(self, tmp_path: Path) -> None:
        """Test file logging writes CSV lines."""
        from mapconfig.utils.logging_config import LoggingOptions, setup_logging

        log_file = tmp_path / "logs" / "mapconfig.csv"
        setup_logging(LoggingOptions(use_colors=False, log_file=log_file))

        logging.getLogger("mapconfig.test").info('map "day" parsed')
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert '"map ""day"" parsed"' in content
        assert '"mapconfig.test"' in content

    def test_colored_formatter(self) -> None:
        """Test only the level name is colored."""
        from mapconfig.utils.logging_config import ColoredFormatter

        record = logging.LogRecord(
            "mapconfig", logging.ERROR, __file__, 1, "ERROR in map", None, None
        )
        formatted = ColoredFormatter("%(levelname)s %(message)s").format(record)
        assert formatted == "\033[31mERROR\033[0m ERROR in map"
