from __future__ import annotations

import re
import shutil
import subprocess
from typing import List, Literal

from .errors import FormatError, ScanError
from .go_parse import validate_go_source
from .tags import unquote

Formatter = Literal["auto", "gofmt", "builtin"]
FORMATTERS = ("auto", "gofmt", "builtin")

GOFMT = "gofmt"

_IMPORT_PATH_RE = re.compile(r'("(?:[^"\\]|\\.)*"|`[^`]*`)\s*(?://.*)?$')


def gofmt_available() -> bool:
	return shutil.which(GOFMT) is not None


def format_with_gofmt(source: str) -> str:
	try:
		completed = subprocess.run(
			[GOFMT],
			input=source,
			check=True,
			capture_output=True,
			text=True,
		)
	except FileNotFoundError as exc:
		raise FormatError(f"unable to locate {GOFMT} executable", source) from exc
	except subprocess.CalledProcessError as exc:
		message = exc.stderr.strip() or str(exc.returncode)
		raise FormatError(f"{GOFMT}: {message}", source) from exc
	return completed.stdout


def _import_sort_key(spec: str):
	m = _IMPORT_PATH_RE.search(spec)
	path = unquote(m.group(1)) if m else spec.strip()
	return path, spec.strip()


def sort_import_specs(lines: List[str]) -> List[str]:
	"""Order the specs of each `import (...)` block by path, one blank-line run at a time.

	Duplicate spec lines are dropped, as gofmt does.
	"""
	out: List[str] = []
	run: List[str] = []
	in_block = False
	for line in lines:
		stripped = line.strip()
		if not in_block:
			out.append(line)
			in_block = stripped == "import ("
			continue
		if stripped and stripped != ")":
			run.append(line)
			continue
		out.extend(sorted(dict.fromkeys(run), key=_import_sort_key))
		run = []
		out.append(line)
		in_block = stripped != ")"
	out.extend(run)
	return out


def format_builtin(source: str) -> str:
	"""Validate the generated file and lay it out as gofmt would.

	Covers the layout produced by the generator (package clause, import block,
	method declarations): blank lines, trailing space and import order. Field
	types arrive already spaced canonically from the parser. It is not a
	general replacement for gofmt.
	"""
	try:
		validate_go_source(source)
	except ScanError as exc:
		raise FormatError(str(exc), source) from exc

	lines: List[str] = []
	for line in source.replace("\r\n", "\n").split("\n"):
		line = line.rstrip()
		if not line:
			if lines and lines[-1] and not lines[-1].endswith(("{", "(")):
				lines.append("")
			continue
		if line.lstrip().startswith(("}", ")")) and lines and not lines[-1]:
			lines.pop()
		lines.append(line)
	while lines and not lines[-1]:
		lines.pop()
	return "\n".join(sort_import_specs(lines)) + "\n"


def format_source(source: str, formatter: Formatter = "auto") -> str:
	if formatter == "auto":
		formatter = "gofmt" if gofmt_available() else "builtin"
	if formatter == "gofmt":
		return format_with_gofmt(source)
	if formatter == "builtin":
		return format_builtin(source)
	raise ValueError(f"unknown formatter {formatter!r}")
