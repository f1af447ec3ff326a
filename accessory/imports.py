from __future__ import annotations

import posixpath
from typing import Dict, List, Optional

from .logging import get_logger
from .model import File, Import

logger = get_logger("imports")


def qualifier(declared_type: str) -> Optional[str]:
	"""Return the package qualifier of a field type, e.g. `time` for `*time.Time`."""
	name = declared_type.lstrip("*")
	if "." not in name:
		return None
	return name.split(".", 1)[0]


def render_import(alias: str, path: str) -> str:
	if alias == posixpath.basename(path):
		return f'"{path}"'
	return f'{alias} "{path}"'


class ImportSet:
	"""Imports needed by the accessors of one generation run, keyed by alias."""

	def __init__(self) -> None:
		self._paths: Dict[str, str] = {}

	def __len__(self) -> int:
		return len(self._paths)

	def __contains__(self, alias: object) -> bool:
		return alias in self._paths

	def record(self, declared_type: str, file: File) -> Optional[Import]:
		"""Resolve the type's qualifier against the imports of the file declaring it."""
		name = qualifier(declared_type)
		if name is None:
			return None
		if name in self._paths:
			return Import(alias=name, path=self._paths[name])
		for imp in file.imports:
			if imp.alias == name:
				self._paths[name] = imp.path
				return imp
		logger.debug("no import for qualifier %s in %s; skipping", name, file.path)
		return None

	def imports(self) -> List[Import]:
		return [Import(alias=alias, path=self._paths[alias]) for alias in sorted(self._paths)]

	def render(self) -> List[str]:
		return [render_import(imp.alias, imp.path) for imp in self.imports()]
