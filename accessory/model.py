from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field as ModelField


class _Frozen(BaseModel):
	model_config = ConfigDict(frozen=True)


class Absent(_Frozen):
	kind: Literal["absent"] = "absent"


class Default(_Frozen):
	kind: Literal["default"] = "default"


class Named(_Frozen):
	kind: Literal["named"] = "named"
	value: str


# Absent: no accessor. Default: derived method name. Named: method name used verbatim.
Presence = Annotated[Union[Absent, Default, Named], ModelField(discriminator="kind")]


class Tag(_Frozen):
	getter: Presence = Absent()
	setter: Presence = Absent()


class Field(_Frozen):
	name: str
	declared_type: str
	tag: Optional[Tag] = None
	embedded: bool = False


class Struct(_Frozen):
	name: str
	type_params: List[str] = []
	fields: List[Field] = []


class Import(_Frozen):
	alias: str
	path: str


class File(_Frozen):
	path: str
	imports: List[Import] = []
	structs: List[Struct] = []


class Package(_Frozen):
	name: str
	directory: str
	files: List[File] = []
