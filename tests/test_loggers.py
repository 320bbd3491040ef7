import io
from unittest.mock import MagicMock

import pytest

from logtree.levels import INFO, WARNING
from logtree.loggers import StderrStreamLogger

#
# StderrStreamLogger tests
#


class TestStderrStreamLogger:

    def test_init_stores_logger(self):
        """Test __init__ stores the provided logger."""
        mock_logger = MagicMock()
        stream_logger = StderrStreamLogger(mock_logger)
        assert stream_logger.logger is mock_logger

    def test_init_sets_info_level(self):
        """Test __init__ sets level to INFO."""
        stream_logger = StderrStreamLogger(MagicMock())
        assert stream_logger.level == INFO

    def test_init_custom_level_name(self):
        stream_logger = StderrStreamLogger(MagicMock(), 'WARNING')
        assert stream_logger.level == WARNING

    def test_write_logs_single_line(self):
        """Test write logs a single line."""
        mock_logger = MagicMock()
        stream_logger = StderrStreamLogger(mock_logger)
        stream_logger.write('Hello world')
        mock_logger.log.assert_called_once_with(INFO, 'Hello world')

    def test_write_logs_multiple_lines(self):
        """Test write logs each line separately."""
        mock_logger = MagicMock()
        stream_logger = StderrStreamLogger(mock_logger)
        stream_logger.write('Line 1\nLine 2\nLine 3')
        assert mock_logger.log.call_count == 3
        mock_logger.log.assert_any_call(INFO, 'Line 1')
        mock_logger.log.assert_any_call(INFO, 'Line 3')

    def test_write_strips_trailing_whitespace(self):
        """Test write strips trailing whitespace from lines."""
        mock_logger = MagicMock()
        stream_logger = StderrStreamLogger(mock_logger)
        stream_logger.write('Test line   \n')
        mock_logger.log.assert_called_once_with(INFO, 'Test line')

    def test_write_empty_buffer(self):
        mock_logger = MagicMock()
        StderrStreamLogger(mock_logger).write('\n')
        mock_logger.log.assert_not_called()

    def test_isatty_false(self):
        assert StderrStreamLogger(MagicMock()).isatty() is False

    def test_fileno_unsupported(self):
        with pytest.raises(io.UnsupportedOperation):
            StderrStreamLogger(MagicMock()).fileno()

    def test_flush_noop(self):
        StderrStreamLogger(MagicMock()).flush()


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
