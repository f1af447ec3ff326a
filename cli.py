from __future__ import annotations

import argparse
import sys
from typing import List, Optional

import uvicorn
from pydantic import ValidationError

from accessory import __version__
from accessory.config import GenerateOptions
from accessory.errors import AccessoryError, FormatError
from accessory.filesystem import OsFilesystem
from accessory.fs_scan import scan_package
from accessory.generator import generate
from accessory.gofmt import FORMATTERS
from accessory.logging import configure_logging, get_logger

logger = get_logger("cli")


def cmd_generate(args: argparse.Namespace) -> int:
	try:
		options = GenerateOptions(
			type_name=args.type,
			receiver=args.receiver,
			output=args.output,
			formatter=args.formatter,
			tag_key=args.tag_key,
		)
	except ValidationError as exc:
		args.parser.print_usage(sys.stderr)
		logger.error("invalid arguments: %s", exc)
		return 1

	try:
		pkg = scan_package(args.directory, options.tag_key)
		generate(
			OsFilesystem(),
			pkg,
			options.type_name,
			options.output,
			options.receiver,
			options.formatter,
		)
	except FormatError as exc:
		logger.error("%s", exc)
		logger.debug("unformatted source:\n%s", exc.source)
		return 1
	except AccessoryError as exc:
		logger.error("%s", exc)
		return 1
	return 0


def cmd_serve(args: argparse.Namespace) -> int:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)
	return 0


def _add_verbose_option(parser: argparse.ArgumentParser, *, suppress_default: bool = False) -> None:
	parser.add_argument(
		"-v",
		"--verbose",
		action="store_true",
		default=argparse.SUPPRESS if suppress_default else False,
		help="Log debug output",
	)


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="accessory", description="Generate accessors for tagged Go struct fields.")
	parser.add_argument("--version", action="version", version=f"accessory version: {__version__}")
	_add_verbose_option(parser)
	sub = parser.add_subparsers(dest="cmd", required=True)

	pg = sub.add_parser("generate", help="Generate an accessor file for a struct type")
	pg.add_argument("directory", nargs="?", default=".", help="Package directory (default: current directory)")
	pg.add_argument("--type", required=True, help="type name; must be set")
	pg.add_argument("--receiver", default="", help="receiver name; default first letter of type name")
	pg.add_argument("--output", default="", help="output file name; default <type_name>_accessor.go")
	pg.add_argument("--formatter", choices=FORMATTERS, default="auto", help="source formatter (default: gofmt when installed)")
	pg.add_argument("--tag-key", default="accessor", help="struct tag key holding accessor options")
	_add_verbose_option(pg, suppress_default=True)
	pg.set_defaults(func=cmd_generate, parser=pg)

	ps = sub.add_parser("serve", help="Run the FastAPI preview server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	_add_verbose_option(ps, suppress_default=True)
	ps.set_defaults(func=cmd_serve)

	return parser


def main(argv: Optional[List[str]] = None) -> int:
	args = build_parser().parse_args(argv)
	configure_logging(verbose=bool(args.verbose))
	return args.func(args)


if __name__ == "__main__":
	sys.exit(main())
