from textwrap import dedent

import pytest

from accessory.errors import InvalidDirectoryError, ScanError
from accessory.fs_scan import list_go_files, scan_package


def _write(path, text):
	path.write_text(dedent(text))
	return path


def test_scan_package_preserves_file_order(tmp_path):
	_write(
		tmp_path / "b.go",
		"""
		package store

		type B struct {
			v int `accessor:"getter"`
		}
		""",
	)
	_write(
		tmp_path / "a.go",
		"""
		package store

		import "time"

		type A struct {
			at time.Time `accessor:"setter"`
		}
		""",
	)
	_write(tmp_path / "a_test.go", "package store_test\n")
	(tmp_path / "README.md").write_text("not go")
	(tmp_path / "sub.go").mkdir()

	pkg = scan_package(str(tmp_path))
	assert pkg.name == "store"
	assert pkg.directory == str(tmp_path)
	assert [f.path for f in pkg.files] == [str(tmp_path / "a.go"), str(tmp_path / "b.go")]
	assert [s.name for s in pkg.files[0].structs] == ["A"]
	assert pkg.files[0].imports[0].path == "time"
	assert pkg.files[1].imports == []


def test_list_go_files_missing_directory(tmp_path):
	with pytest.raises(InvalidDirectoryError):
		list_go_files(str(tmp_path / "missing"))


def test_list_go_files_not_a_directory(tmp_path):
	f = _write(tmp_path / "x.go", "package x\n")
	with pytest.raises(InvalidDirectoryError):
		list_go_files(str(f))


def test_scan_package_without_go_files(tmp_path):
	(tmp_path / "notes.txt").write_text("hello")
	with pytest.raises(ScanError, match="no buildable Go source files"):
		scan_package(str(tmp_path))


def test_scan_package_mixed_package_names(tmp_path):
	_write(tmp_path / "a.go", "package a\n")
	_write(tmp_path / "b.go", "package b\n")
	with pytest.raises(ScanError, match="found packages a"):
		scan_package(str(tmp_path))


def test_scan_package_invalid_tag_aborts(tmp_path):
	_write(tmp_path / "a.go", "package a\n\ntype A struct {\n\tx int `accessor:\"getter\"`\n}\n")
	_write(tmp_path / "b.go", "package a\n\ntype B struct {\n\ty int `accessor:\"nope\"`\n}\n")
	with pytest.raises(ScanError, match="unknown accessor option 'nope'"):
		scan_package(str(tmp_path))


def test_scan_package_custom_tag_key(tmp_path):
	_write(tmp_path / "a.go", "package a\n\ntype A struct {\n\tx int `gen:\"getter\"`\n}\n")
	pkg = scan_package(str(tmp_path), tag_key="gen")
	assert pkg.files[0].structs[0].fields[0].tag is not None
	pkg = scan_package(str(tmp_path))
	assert pkg.files[0].structs[0].fields[0].tag is None
