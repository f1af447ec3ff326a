from __future__ import annotations

import os
import re

from .model import Default, Field, Named

OUTPUT_SUFFIX = "_accessor"
SOURCE_EXTENSION = ".go"

# HTTPServer -> HTTP_Server
_FIRST_CAP_RE = re.compile(r"(.)([A-Z][a-z]+)")
# UserProfile -> User_Profile
_ALL_CAP_RE = re.compile(r"([a-z0-9])([A-Z])")


def capitalize(name: str) -> str:
	return name[:1].upper() + name[1:]


def receiver_name(override: str, struct_name: str) -> str:
	if override:
		return override
	return struct_name[:1].lower()


def getter_name(field: Field) -> str:
	if field.tag is None:
		raise ValueError(f"field {field.name} has no accessor tag")
	getter = field.tag.getter
	if isinstance(getter, Named):
		return getter.value
	if isinstance(getter, Default):
		return capitalize(field.name)
	raise ValueError(f"field {field.name} does not request a getter")


def setter_name(field: Field) -> str:
	if field.tag is None:
		raise ValueError(f"field {field.name} has no accessor tag")
	setter = field.tag.setter
	if isinstance(setter, Named):
		return setter.value
	if isinstance(setter, Default):
		return "Set" + capitalize(field.name)
	raise ValueError(f"field {field.name} does not request a setter")


def split_leading_acronym(name: str) -> str:
	return _FIRST_CAP_RE.sub(r"\1_\2", name)


def split_camel_boundaries(name: str) -> str:
	return _ALL_CAP_RE.sub(r"\1_\2", name)


def snake_case(name: str) -> str:
	return split_camel_boundaries(split_leading_acronym(name)).lower()


def output_file(output: str, type_name: str, directory: str) -> str:
	"""Resolve the generated file's path; type UserProfile defaults to user_profile_accessor.go."""
	if not output:
		output = snake_case(type_name) + OUTPUT_SUFFIX + SOURCE_EXTENSION
	return os.path.join(directory, output)
