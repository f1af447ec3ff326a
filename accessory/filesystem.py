from __future__ import annotations

import os
import tempfile
from typing import Dict, Protocol


class Filesystem(Protocol):
	def write_file(self, path: str, data: bytes, mode: int = 0o644) -> None:
		...


class OsFilesystem:
	"""Writes through a temporary sibling file so the target is replaced whole or not at all."""

	def write_file(self, path: str, data: bytes, mode: int = 0o644) -> None:
		directory = os.path.dirname(os.path.abspath(path))
		fd, tmp_path = tempfile.mkstemp(prefix=".accessory-", suffix=".tmp", dir=directory)
		try:
			with os.fdopen(fd, "wb") as fh:
				fh.write(data)
			os.chmod(tmp_path, mode)
			os.replace(tmp_path, path)
		except BaseException:
			if os.path.exists(tmp_path):
				os.unlink(tmp_path)
			raise


class MemoryFilesystem:
	def __init__(self) -> None:
		self.files: Dict[str, bytes] = {}

	def write_file(self, path: str, data: bytes, mode: int = 0o644) -> None:
		self.files[path] = data

	def read_file(self, path: str) -> bytes:
		return self.files[path]
