from __future__ import annotations


class AccessoryError(RuntimeError):
	"""Base class for every failure raised by the generation pipeline."""


class InvalidDirectoryError(AccessoryError):
	"""Raised when the package directory is missing, unreadable or not a directory."""


class ScanError(AccessoryError):
	"""Raised when Go source or a struct tag cannot be parsed."""


class RenderError(AccessoryError):
	"""Raised when an accessor template fails to render."""


class FormatError(AccessoryError):
	"""Raised when the assembled buffer is not valid Go source.

	The unformatted buffer is kept on ``source`` so callers can inspect or save it.
	"""

	def __init__(self, message: str, source: str) -> None:
		super().__init__(message)
		self.source = source


class PersistError(AccessoryError):
	"""Raised when the generated file cannot be written."""
