import os
from textwrap import dedent

import pytest

from accessory.errors import FormatError, PersistError
from accessory.filesystem import MemoryFilesystem, OsFilesystem
from accessory.fs_scan import scan_package
from accessory.generator import generate, render_source
from accessory.model import Default, Field, File, Import, Named, Package, Struct, Tag


def _package(*files, name="models", directory="pkg"):
	return Package(name=name, directory=directory, files=list(files))


def _user_package():
	user = Struct(
		name="User",
		fields=[
			Field(name="Name", declared_type="string", tag=Tag(getter=Default())),
			Field(name="Age", declared_type="int", tag=Tag(getter=Default(), setter=Default())),
			Field(name="secret", declared_type="string"),
		],
	)
	return _package(File(path="pkg/user.go", structs=[user]))


def test_generate_user_scenario():
	fs = MemoryFilesystem()
	path = generate(fs, _user_package(), "User", formatter="builtin")
	assert path == os.path.join("pkg", "user_accessor.go")
	assert fs.read_file(path).decode("utf-8") == dedent(
		"""\
		// Code generated by accessory; DO NOT EDIT.

		package models

		func (u *User) Name() string {
			return u.Name
		}

		func (u *User) Age() int {
			return u.Age
		}

		func (u *User) SetAge(val int) {
			u.Age = val
		}
		"""
	)


def test_generate_is_idempotent():
	first, second = MemoryFilesystem(), MemoryFilesystem()
	generate(first, _user_package(), "User", formatter="builtin")
	generate(second, _user_package(), "User", formatter="builtin")
	assert first.files == second.files


def test_overrides():
	fs = MemoryFilesystem()
	path = generate(fs, _user_package(), "User", output="user_gen.go", receiver="self", formatter="builtin")
	assert path == os.path.join("pkg", "user_gen.go")
	assert "func (self *User) SetAge(val int) {" in fs.read_file(path).decode("utf-8")


def test_imports_only_for_emitted_accessors():
	first = File(
		path="pkg/a.go",
		imports=[
			Import(alias="time", path="time"),
			Import(alias="pb", path="example.com/proto/v1"),
			Import(alias="sql", path="database/sql"),
		],
		structs=[
			Struct(
				name="Job",
				fields=[
					Field(name="at", declared_type="*time.Time", tag=Tag(getter=Default())),
					Field(name="msg", declared_type="pb.Message", tag=Tag(setter=Named(value="Load"))),
					Field(name="db", declared_type="*sql.DB"),
					Field(name="opt", declared_type="sql.NullString", tag=Tag()),
				],
			),
			Struct(
				name="Other",
				fields=[Field(name="conn", declared_type="sql.Conn", tag=Tag(getter=Default()))],
			),
		],
	)
	generation = render_source(_package(first), "Job", formatter="builtin")
	assert generation.accessor_count == 2
	assert generation.source.startswith(
		"// Code generated by accessory; DO NOT EDIT.\n\npackage models\n\nimport (\n"
		'\tpb "example.com/proto/v1"\n'
		'\t"time"\n'
		")\n\n"
	)
	assert "func (j *Job) At() *time.Time {" in generation.source
	assert "func (j *Job) Load(val pb.Message) {" in generation.source
	assert "sql" not in generation.source


def test_structs_across_files_keep_order_and_file_scoped_imports():
	a = File(
		path="pkg/a.go",
		imports=[Import(alias="db", path="example.com/sql/db")],
		structs=[Struct(name="Repo", fields=[Field(name="conn", declared_type="db.Conn", tag=Tag(getter=Default()))])],
	)
	b = File(
		path="pkg/b.go",
		imports=[Import(alias="db", path="example.com/nosql/db")],
		structs=[Struct(name="Repo", fields=[Field(name="store", declared_type="*db.Store", tag=Tag(getter=Default()))])],
	)
	source = render_source(_package(a, b), "Repo", formatter="builtin").source
	assert '"example.com/sql/db"' in source
	assert "nosql" not in source
	assert source.index("Conn()") < source.index("Store()")


def test_unknown_type_writes_scaffold(caplog):
	fs = MemoryFilesystem()
	with caplog.at_level("WARNING"):
		path = generate(fs, _user_package(), "Missing", formatter="builtin")
	assert fs.read_file(path).decode("utf-8") == (
		"// Code generated by accessory; DO NOT EDIT.\n\npackage models\n"
	)
	assert "no accessors generated for type Missing" in caplog.text


def test_format_error_carries_raw_source_and_writes_nothing():
	user = Struct(
		name="User",
		fields=[Field(name="name", declared_type="string", tag=Tag(getter=Named(value="Get Name")))],
	)
	fs = MemoryFilesystem()
	with pytest.raises(FormatError) as exc_info:
		generate(fs, _package(File(path="pkg/user.go", structs=[user])), "User", formatter="builtin")
	assert "func (u *User) Get Name() string {" in exc_info.value.source
	assert fs.files == {}


def test_persist_error(tmp_path):
	pkg = _package(File(path="x.go"), directory=str(tmp_path / "missing"))
	with pytest.raises(PersistError):
		generate(OsFilesystem(), pkg, "User", formatter="builtin")


def test_end_to_end_from_directory(tmp_path):
	(tmp_path / "widget.go").write_text(
		dedent(
			"""
			package shop

			import (
				"time"
				money "github.com/acme/currency"
			)

			type Widget struct {
				name    string         `accessor:"getter"`
				price   *money.Amount  `json:"price" accessor:"getter:Cost,setter"`
				updated time.Time
			}
			"""
		)
	)
	pkg = scan_package(str(tmp_path))
	path = generate(OsFilesystem(), pkg, "Widget", formatter="builtin")
	assert path == str(tmp_path / "widget_accessor.go")
	assert (tmp_path / "widget_accessor.go").read_text() == dedent(
		"""\
		// Code generated by accessory; DO NOT EDIT.

		package shop

		import (
			money "github.com/acme/currency"
		)

		func (w *Widget) Name() string {
			return w.name
		}

		func (w *Widget) Cost() *money.Amount {
			return w.price
		}

		func (w *Widget) SetPrice(val *money.Amount) {
			w.price = val
		}
		"""
	)
	assert sorted(os.listdir(tmp_path)) == ["widget.go", "widget_accessor.go"]
