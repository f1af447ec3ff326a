from __future__ import annotations

import re
from typing import Dict, Optional

from .errors import ScanError
from .model import Absent, Default, Named, Presence, Tag

OPTIONS = ("getter", "setter")

_ESCAPE_RE = re.compile(
	r"\\(?:([abfnrtv\\'\"])|([0-7]{3})|x([0-9a-fA-F]{2})|u([0-9a-fA-F]{4})|U([0-9a-fA-F]{8})|(.))",
	re.DOTALL,
)
_SIMPLE_ESCAPES = {
	"a": b"\a", "b": b"\b", "f": b"\f", "n": b"\n", "r": b"\r",
	"t": b"\t", "v": b"\v", "\\": b"\\", "'": b"'", '"': b'"',
}


def unquote(literal: str) -> str:
	"""Return the value of a Go string literal (raw or interpreted).

	Octal and \\x escapes denote single bytes, so the decoded value is built as
	bytes and read back as UTF-8.
	"""
	if len(literal) >= 2 and literal[0] == literal[-1] == "`":
		return literal[1:-1].replace("\r", "")
	if len(literal) < 2 or literal[0] != '"' or literal[-1] != '"':
		raise ValueError(f"not a string literal: {literal}")

	body = literal[1:-1]
	value = bytearray()
	pos = 0
	for m in _ESCAPE_RE.finditer(body):
		value += body[pos:m.start()].encode("utf-8")
		pos = m.end()
		simple, octal, hex2, hex4, hex8, bad = m.groups()
		if bad is not None:
			raise ValueError(f"unknown escape sequence \\{bad}")
		if simple:
			value += _SIMPLE_ESCAPES[simple]
		elif octal:
			code = int(octal, 8)
			if code > 0xFF:
				raise ValueError(f"octal escape value > 255: \\{octal}")
			value.append(code)
		elif hex2:
			value.append(int(hex2, 16))
		else:
			value += chr(int(hex4 or hex8, 16)).encode("utf-8", "surrogatepass")
	value += body[pos:].encode("utf-8")
	return value.decode("utf-8", "replace")


def lookup(tag: str, key: str) -> Optional[str]:
	"""Find the value stored under key in a conventional `key:"value"` struct tag.

	Mirrors reflect.StructTag.Lookup: scanning stops silently at the first
	malformed pair, so a key that cannot be reached is reported as missing.
	"""
	while tag:
		tag = tag.lstrip(" ")
		if not tag:
			break
		i = 0
		while i < len(tag) and tag[i] > " " and tag[i] not in ':"\x7f':
			i += 1
		if i == 0 or i + 1 >= len(tag) or tag[i] != ":" or tag[i + 1] != '"':
			break
		name = tag[:i]
		tag = tag[i + 1:]

		i = 1
		while i < len(tag) and tag[i] != '"':
			if tag[i] == "\\":
				i += 1
			i += 1
		if i >= len(tag):
			break
		quoted = tag[:i + 1]
		tag = tag[i + 1:]

		if name == key:
			try:
				return unquote(quoted)
			except ValueError:
				break
	return None


def parse_options(value: str) -> Tag:
	"""Parse `getter`, `setter`, `getter:Name` and `setter:Name` options into a Tag."""
	found: Dict[str, Presence] = {}
	for part in value.split(","):
		if not part.strip():
			continue
		option, sep, method = part.partition(":")
		option, method = option.strip(), method.strip()
		if option not in OPTIONS:
			raise ScanError(f"unknown accessor option {option!r}")
		if option in found:
			raise ScanError(f"duplicate accessor option {option!r}")
		if sep and not method:
			raise ScanError(f"empty method name for accessor option {option!r}")
		found[option] = Named(value=method) if sep else Default()
	return Tag(getter=found.get("getter", Absent()), setter=found.get("setter", Absent()))


def parse_tag(tag: str, key: str = "accessor") -> Optional[Tag]:
	"""Return the Tag declared under key, or None when the field has no such key."""
	value = lookup(tag, key)
	if value is None:
		return None
	return parse_options(value)
