from __future__ import annotations

from typing import List

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateError

from .errors import RenderError
from .model import Absent, Field, Struct
from .naming import getter_name, receiver_name, setter_name

GETTER_TEMPLATE = """\
func ({{ receiver }} *{{ struct }}) {{ method }}() {{ type }} {
	return {{ receiver }}.{{ field }}
}
"""

SETTER_TEMPLATE = """\
func ({{ receiver }} *{{ struct }}) {{ method }}(val {{ type }}) {
	{{ receiver }}.{{ field }} = val
}
"""

_env = Environment(
	loader=DictLoader({"getter.go": GETTER_TEMPLATE, "setter.go": SETTER_TEMPLATE}),
	undefined=StrictUndefined,
	autoescape=False,
	keep_trailing_newline=True,
)


def receiver_type(st: Struct) -> str:
	if st.type_params:
		return f"{st.name}[{', '.join(st.type_params)}]"
	return st.name


def wants_accessors(field: Field) -> bool:
	tag = field.tag
	return tag is not None and not (isinstance(tag.getter, Absent) and isinstance(tag.setter, Absent))


def _render(template_name: str, receiver: str, st: Struct, field: Field, method: str) -> str:
	try:
		return _env.get_template(template_name).render(
			receiver=receiver,
			struct=receiver_type(st),
			method=method,
			field=field.name,
			type=field.declared_type,
		)
	except TemplateError as exc:
		raise RenderError(f"{template_name} accessor for {st.name}.{field.name}: {exc}") from exc


def render_getter(receiver: str, st: Struct, field: Field) -> str:
	return _render("getter.go", receiver, st, field, getter_name(field))


def render_setter(receiver: str, st: Struct, field: Field) -> str:
	return _render("setter.go", receiver, st, field, setter_name(field))


def render_accessors(st: Struct, field: Field, receiver_override: str = "") -> List[str]:
	"""Render the getter then the setter requested by the field's tag."""
	if field.tag is None:
		return []
	receiver = receiver_name(receiver_override, st.name)
	if not receiver or not field.name:
		raise RenderError(f"cannot render accessors for {st.name}.{field.name}: empty identifier")
	accessors: List[str] = []
	if not isinstance(field.tag.getter, Absent):
		accessors.append(render_getter(receiver, st, field))
	if not isinstance(field.tag.setter, Absent):
		accessors.append(render_setter(receiver, st, field))
	return accessors
