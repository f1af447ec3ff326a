"""Logging helpers shared by the accessory CLI and library modules."""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER_NAME = "accessory"
_PREFIX = "accessory: "


def get_logger(name: Optional[str] = None) -> logging.Logger:
	"""Return a logger under the accessory hierarchy."""
	full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
	return logging.getLogger(full_name)


def configure_logging(*, verbose: bool = False) -> logging.Logger:
	"""Send accessory log records to stderr with the command-line prefix."""
	level = logging.DEBUG if verbose else logging.INFO
	logger = logging.getLogger(_LOGGER_NAME)
	logger.setLevel(level)

	# Reset handlers so repeated invocations in one process do not duplicate output.
	for handler in list(logger.handlers):
		logger.removeHandler(handler)

	stream_handler = logging.StreamHandler()
	stream_handler.setLevel(level)
	stream_handler.setFormatter(logging.Formatter(_PREFIX + "%(message)s"))
	logger.addHandler(stream_handler)
	return logger


__all__ = ["configure_logging", "get_logger"]
