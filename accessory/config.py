from __future__ import annotations

from pydantic import BaseModel, field_validator

from .gofmt import Formatter


class GenerateOptions(BaseModel):
	type_name: str
	receiver: str = ""
	output: str = ""
	formatter: Formatter = "auto"
	tag_key: str = "accessor"

	@field_validator("type_name", "tag_key")
	@classmethod
	def _not_blank(cls, value: str) -> str:
		value = value.strip()
		if not value:
			raise ValueError("must not be empty")
		return value

	@field_validator("receiver", "output")
	@classmethod
	def _strip(cls, value: str) -> str:
		return value.strip()
