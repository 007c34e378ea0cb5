"""Logging formatters and filters for stream routing."""

import logging


class StreamFormatter(logging.Formatter):
    """Logging formatter that prefixes warnings and errors with their level."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with a level prefix for warnings and above.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to format

        Returns
        -------
        str
            Formatted log message with optional level prefix
        """
        msg = super().format(record)

        if record.levelno >= logging.WARNING:
            return f"{record.levelname.lower()}: {msg}"

        return msg


class StreamRoutingFilter(logging.Filter):
    """Route records to stdout or stderr by level.

    Parameters
    ----------
    stream : str
        "stdout" accepts records below WARNING, "stderr" accepts WARNING and above
    """

    def __init__(self, stream: str) -> None:
        super().__init__()
        self.stream = stream

    def filter(self, record: logging.LogRecord) -> bool:
        if self.stream == "stderr":
            return record.levelno >= logging.WARNING

        return record.levelno < logging.WARNING
