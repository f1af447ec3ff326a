"""Go source parsing on top of the tree-sitter Go grammar.

Only the parts of a file the generator needs are read: the package clause,
import specs and struct type declarations with their fields and tags.
Field types are re-rendered from the syntax tree with gofmt token spacing, so
`map[string] int` in a source file is recorded as `map[string]int`.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Tuple

import tree_sitter_go
from tree_sitter import Language, Node, Parser, Tree

from .errors import ScanError
from .logging import get_logger
from .model import Field, File, Import, Struct
from .tags import parse_tag, unquote

logger = get_logger("go_parse")

GO_LANGUAGE = Language(tree_sitter_go.language())

_DECLARATIONS = {
	"import_declaration",
	"type_declaration",
	"function_declaration",
	"method_declaration",
	"var_declaration",
	"const_declaration",
}
_STRING_LITERALS = {"interpreted_string_literal", "raw_string_literal", "rune_literal"}
# node types whose named children are rendered `; `-separated on one line
_MEMBER_LISTS = {"field_declaration_list", "interface_type"}
_NAME_KINDS = {"identifier", "field_identifier"}
_NO_SPACE_AFTER = {"(", "[", ".", "*", "~", "...", "&", "!"}
_NO_SPACE_BEFORE = {",", ")", "]", ".", ";", ":"}

_MAJOR_VERSION_RE = re.compile(r"^v[0-9]+$")
_GOPKG_VERSION_RE = re.compile(r"\.v[0-9]+$")


def implied_package_name(import_path: str) -> str:
	"""Guess the package name an unaliased import is referenced by in source."""
	segments = [s for s in import_path.split("/") if s]
	if not segments:
		return import_path
	name = segments[-1]
	if _MAJOR_VERSION_RE.match(name) and len(segments) > 1:
		name = segments[-2]
	name = _GOPKG_VERSION_RE.sub("", name)
	if name.startswith("go-"):
		name = name[3:]
	return name


def _node_text(node: Node, source: bytes) -> str:
	return source[node.start_byte:node.end_byte].decode("utf-8", "replace")


def _line(node: Node) -> int:
	return node.start_point[0] + 1


def _first_error(node: Node) -> Optional[Node]:
	if node.type == "ERROR" or node.is_missing:
		return node
	for child in node.children:
		if child.has_error or child.is_missing:
			found = _first_error(child)
			if found is not None:
				return found
	return None


def _parse_tree(path: str, source: bytes) -> Tuple[Tree, str]:
	"""Parse source and check it is a file of top-level declarations; return the tree and package name."""
	tree = Parser(GO_LANGUAGE).parse(source)
	root = tree.root_node
	if root.has_error:
		error = _first_error(root) or root
		line, column = error.start_point[0] + 1, error.start_point[1] + 1
		if error.is_missing:
			raise ScanError(f"{path}:{line}:{column}: syntax error: missing {error.type!r}")
		snippet = _node_text(error, source).split("\n", 1)[0][:40]
		raise ScanError(f"{path}:{line}:{column}: syntax error near {snippet!r}")

	decls = [child for child in root.named_children if child.type != "comment"]
	if not decls or decls[0].type != "package_clause":
		line = _line(decls[0]) if decls else 1
		raise ScanError(f"{path}:{line}: expected 'package' clause")
	for node in decls[1:]:
		if node.type not in _DECLARATIONS:
			raise ScanError(f"{path}:{_line(node)}: non-declaration statement outside function body")

	names = [c for c in decls[0].named_children if c.type == "package_identifier"]
	if not names:
		raise ScanError(f"{path}:{_line(decls[0])}: expected package name")
	return tree, _node_text(names[0], source)


def _tokens(node: Node, source: bytes) -> Iterator[Tuple[str, str]]:
	if node.type == "comment":
		return
	if node.child_count == 0 or node.type in _STRING_LITERALS:
		text = _node_text(node, source).strip()
		if text and text != ";":
			yield text, node.type
		return
	members = node.type in _MEMBER_LISTS
	first = True
	for child in node.children:
		if members and child.is_named and child.type != "comment":
			if not first:
				yield ";", ";"
			first = False
		yield from _tokens(child, source)


def _is_word(text: str) -> bool:
	return text[:1].isalnum() or text[:1] in "_\"`'"


def _spaced(before: str, prev: str, prev_kind: str, tok: str) -> bool:
	if tok == "}":
		return prev != "{"
	if prev == "{":
		return True
	if tok in _NO_SPACE_BEFORE:
		return False
	if prev in (",", ";", "|") or tok == "|":
		return True
	if tok == "<-":
		return prev != "chan" and prev not in _NO_SPACE_AFTER
	if prev == "<-":
		return before == "chan"
	if prev in _NO_SPACE_AFTER:
		return False
	if prev in ("chan", ")"):
		return True
	if prev_kind == "field_identifier" and tok == "(":
		return False
	if prev_kind in _NAME_KINDS:
		return True
	return _is_word(prev) and _is_word(tok)


def type_text(node: Node, source: bytes) -> str:
	"""Render a type node on one line with gofmt token spacing."""
	out: List[str] = []
	before = prev = prev_kind = ""
	for tok, kind in _tokens(node, source):
		if out and _spaced(before, prev, prev_kind, tok):
			out.append(" ")
		out.append(tok)
		before, prev, prev_kind = prev, tok, kind
	return "".join(out)


def _import_specs(decl: Node) -> Iterator[Node]:
	for child in decl.named_children:
		if child.type == "import_spec":
			yield child
		elif child.type == "import_spec_list":
			yield from (spec for spec in child.named_children if spec.type == "import_spec")


def _type_params(node: Optional[Node], source: bytes) -> List[str]:
	if node is None:
		return []
	names: List[str] = []
	for decl in node.named_children:
		names.extend(_node_text(name, source) for name in decl.children_by_field_name("name"))
	return names


def _embedded_name(node: Node, source: bytes) -> str:
	if node.type == "qualified_type":
		return _node_text(node.child_by_field_name("name"), source)
	if node.type == "generic_type":
		return _embedded_name(node.child_by_field_name("type"), source)
	return _node_text(node, source)


class _FileReader:
	def __init__(self, path: str, source: bytes, tag_key: str) -> None:
		self.path = path
		self.source = source
		self.tag_key = tag_key

	def text(self, node: Node) -> str:
		return _node_text(node, self.source)

	def read(self, root: Node) -> File:
		imports: List[Import] = []
		structs: List[Struct] = []
		for decl in root.named_children:
			if decl.type == "import_declaration":
				imports.extend(self.read_import(spec) for spec in _import_specs(decl))
			elif decl.type == "type_declaration":
				structs.extend(self.read_type_decl(decl))
		return File(path=self.path, imports=imports, structs=structs)

	def read_import(self, spec: Node) -> Import:
		path_node = spec.child_by_field_name("path")
		try:
			import_path = unquote(self.text(path_node))
		except ValueError as exc:
			raise ScanError(f"{self.path}:{_line(spec)}: invalid import path: {exc}") from exc
		name_node = spec.child_by_field_name("name")
		alias = self.text(name_node) if name_node is not None else implied_package_name(import_path)
		return Import(alias=alias, path=import_path)

	def read_type_decl(self, decl: Node) -> Iterator[Struct]:
		# type_alias nodes (`type A = B`) declare no new struct
		for spec in decl.named_children:
			if spec.type != "type_spec":
				continue
			type_node = spec.child_by_field_name("type")
			if type_node is None or type_node.type != "struct_type":
				continue
			fields: List[Field] = []
			for body in type_node.named_children:
				if body.type != "field_declaration_list":
					continue
				for field_node in body.named_children:
					if field_node.type == "field_declaration":
						fields.extend(self.read_field(field_node))
			yield Struct(
				name=self.text(spec.child_by_field_name("name")),
				type_params=_type_params(spec.child_by_field_name("type_parameters"), self.source),
				fields=fields,
			)

	def read_field(self, node: Node) -> List[Field]:
		names = [self.text(n) for n in node.children_by_field_name("name")]
		embedded = not names
		type_node = node.child_by_field_name("type")
		declared_type = type_text(type_node, self.source)
		if embedded:
			names = [_embedded_name(type_node, self.source)]
			if any(child.type == "*" for child in node.children):
				declared_type = "*" + declared_type

		tag = None
		tag_node = node.child_by_field_name("tag")
		if tag_node is not None:
			try:
				tag = parse_tag(unquote(self.text(tag_node)), self.tag_key)
			except (ScanError, ValueError) as exc:
				raise ScanError(f"{self.path}:{_line(tag_node)}: field {', '.join(names)}: {exc}") from exc

		return [Field(name=n, declared_type=declared_type, tag=tag, embedded=embedded) for n in names]


def parse_go_file(path: str, text: str, tag_key: str = "accessor") -> Tuple[str, File]:
	"""Parse one Go file into its package name and File model."""
	source = text.encode("utf-8")
	tree, package_name = _parse_tree(path, source)
	parsed = _FileReader(path, source, tag_key).read(tree.root_node)
	logger.debug("parsed %s: package %s", path, package_name)
	return package_name, parsed


def validate_go_source(text: str, path: str = "<generated>") -> str:
	"""Check that text is a well-formed Go file; return its package name."""
	source = text.encode("utf-8")
	tree, package_name = _parse_tree(path, source)
	for decl in tree.root_node.named_children:
		if decl.type != "method_declaration":
			continue
		receiver = decl.child_by_field_name("receiver")
		params = [p for p in receiver.named_children if p.type == "parameter_declaration"]
		if len(params) != 1 or len(params[0].children_by_field_name("name")) > 1:
			raise ScanError(f"{path}:{_line(decl)}: method has multiple receivers")
	return package_name
