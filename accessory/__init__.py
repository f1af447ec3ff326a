"""Generate getter and setter methods for tagged Go struct fields.

Modules:
- fs_scan.py: Package directory listing and scanning.
- go_parse.py: Go declaration reader over the tree-sitter syntax tree.
- logging.py: Logger hierarchy and CLI log setup.
- tags.py: Struct tag lookup and accessor option parsing.
- model.py: Data structures for packages, structs, fields and tags.
- naming.py: Receiver, method and output file names.
- imports.py: Import set for the generated file.
- emit.py: Getter and setter templates.
- gofmt.py: Formatting of the assembled file.
- generator.py: Assembly and persistence of the generated file.
"""

__version__ = "0.1.0"

__all__ = [
	"config",
	"emit",
	"errors",
	"filesystem",
	"fs_scan",
	"generator",
	"go_parse",
	"gofmt",
	"imports",
	"logging",
	"model",
	"naming",
	"tags",
]
