from __future__ import annotations

import os
from typing import List

from .errors import InvalidDirectoryError, ScanError
from .go_parse import parse_go_file
from .logging import get_logger
from .model import File, Package

logger = get_logger("fs_scan")

GO_EXTENSION = ".go"


def is_go_source(filename: str) -> bool:
	return filename.endswith(GO_EXTENSION) and not filename.endswith("_test" + GO_EXTENSION)


def list_go_files(directory: str) -> List[str]:
	"""Return the package's non-test Go files in directory-listing order."""
	if not os.path.exists(directory):
		raise InvalidDirectoryError(f"{directory}: no such directory")
	if not os.path.isdir(directory):
		raise InvalidDirectoryError(f"{directory}: not a directory")
	try:
		names = sorted(os.listdir(directory))
	except OSError as exc:
		raise InvalidDirectoryError(f"{directory}: {exc.strerror or exc}") from exc
	return [
		os.path.join(directory, name)
		for name in names
		if is_go_source(name) and os.path.isfile(os.path.join(directory, name))
	]


def scan_package(directory: str, tag_key: str = "accessor") -> Package:
	"""Parse every Go file of the package in directory into a Package model."""
	paths = list_go_files(directory)
	if not paths:
		raise ScanError(f"{directory}: no buildable Go source files")

	package_name = ""
	files: List[File] = []
	for path in paths:
		try:
			with open(path, "r", encoding="utf-8") as fh:
				text = fh.read()
		except (OSError, UnicodeDecodeError) as exc:
			raise ScanError(f"{path}: cannot read source: {exc}") from exc
		name, parsed = parse_go_file(path, text, tag_key)
		if package_name and name != package_name:
			raise ScanError(
				f"{directory}: found packages {package_name} ({os.path.basename(paths[0])}) "
				f"and {name} ({os.path.basename(path)})"
			)
		package_name = name
		logger.debug("scanned %s: %d imports, %d structs", path, len(parsed.imports), len(parsed.structs))
		files.append(parsed)

	return Package(name=package_name, directory=directory, files=files)
