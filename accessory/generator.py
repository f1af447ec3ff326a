"""Turns a scanned Package into the source of a generated accessor file."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .emit import render_accessors, wants_accessors
from .errors import PersistError
from .filesystem import Filesystem
from .gofmt import Formatter, format_source
from .imports import ImportSet
from .logging import get_logger
from .model import Package
from .naming import output_file

logger = get_logger("generator")

HEADER = "// Code generated by accessory; DO NOT EDIT."


@dataclass
class Generation:
	source: str
	accessor_count: int


def collect(package: Package, type_name: str, receiver: str = "") -> Tuple[ImportSet, List[str]]:
	"""Render accessors for every struct named type_name, in file, struct and field order."""
	imports = ImportSet()
	accessors: List[str] = []
	for file in package.files:
		for st in file.structs:
			if st.name != type_name:
				continue
			for field in st.fields:
				if not wants_accessors(field):
					continue
				imports.record(field.declared_type, file)
				accessors.extend(render_accessors(st, field, receiver))
	return imports, accessors


def assemble(package_name: str, imports: ImportSet, accessors: List[str]) -> str:
	parts: List[str] = [HEADER, "", f"package {package_name}", ""]
	lines = imports.render()
	if lines:
		parts.append("import (")
		parts.extend("\t" + line for line in lines)
		parts.append(")")
		parts.append("")
	for accessor in accessors:
		parts.append(accessor.rstrip("\n"))
		parts.append("")
	return "\n".join(parts)


def render_source(
	package: Package,
	type_name: str,
	receiver: str = "",
	formatter: Formatter = "auto",
) -> Generation:
	"""Build and format the generated file without writing it.

	Raises FormatError, carrying the unformatted buffer, when formatting fails.
	"""
	imports, accessors = collect(package, type_name, receiver)
	if not accessors:
		logger.warning("no accessors generated for type %s in package %s", type_name, package.name)
	raw = assemble(package.name, imports, accessors)
	return Generation(source=format_source(raw, formatter), accessor_count=len(accessors))


def persist(fs: Filesystem, path: str, source: str) -> None:
	try:
		fs.write_file(path, source.encode("utf-8"), 0o644)
	except OSError as exc:
		raise PersistError(f"{path}: {exc}") from exc


def generate(
	fs: Filesystem,
	package: Package,
	type_name: str,
	output: str = "",
	receiver: str = "",
	formatter: Formatter = "auto",
) -> str:
	"""Generate accessors for type_name and write them; return the written path."""
	generation = render_source(package, type_name, receiver, formatter)
	path = output_file(output, type_name, package.directory)
	persist(fs, path, generation.source)
	logger.info("wrote %d accessors to %s", generation.accessor_count, path)
	return path
