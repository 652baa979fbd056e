import pytest

from mockweaver.gotypes import SourcePackage
from mockweaver.interface import CommentGroup, Comments
from mockweaver.method_scope import ReplaceType
from mockweaver.parse import SourceInterface, is_auto_generated
from mockweaver.stackerr import StackError, get_stack


def _write(tmp_path, text, name="file.go"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_generated_header_detected(tmp_path):
    path = _write(tmp_path, "// Code generated by mockery; DO NOT EDIT.\n\npackage test\n")
    assert is_auto_generated(path) is True


def test_generated_header_without_period_and_trailing_spaces(tmp_path):
    path = _write(tmp_path, "// Code generated by tool v1; DO NOT EDIT   \npackage test\n")
    assert is_auto_generated(str(path)) is True


def test_generated_header_with_crlf(tmp_path):
    path = tmp_path / "crlf.go"
    path.write_bytes(b"// Code generated by x; DO NOT EDIT.\r\npackage test\r\n")
    assert is_auto_generated(path) is True


def test_plain_file_not_generated(tmp_path):
    path = _write(
        tmp_path,
        "package test\n\ntype VariadicWithNoReturns interface {\n\tFoo(one string, two ...string)\n}\n",
    )
    assert is_auto_generated(path) is False


def test_marker_after_package_clause_ignored(tmp_path):
    path = _write(tmp_path, "package test\n// Code generated by mockery; DO NOT EDIT.\n")
    assert is_auto_generated(path) is False


def test_marker_must_fill_the_line(tmp_path):
    path = _write(tmp_path, "// Code generated by mockery; DO NOT EDIT. extra\npackage test\n")
    assert is_auto_generated(path) is False


def test_missing_file_raises_stack_error(tmp_path):
    with pytest.raises(StackError) as info:
        is_auto_generated(tmp_path / "absent.go")
    assert isinstance(info.value.cause, FileNotFoundError)
    assert get_stack(info.value)


def test_source_interface_holds_configuration():
    pkg = SourcePackage("test", "example.com/test")
    replacement = ReplaceType("example.com/other", "Thing")
    comments = Comments(gen_decl_doc=CommentGroup.from_comments(["// Foo defines Bar"]))
    iface = SourceInterface(
        name="Foo",
        pkg=pkg,
        file_name="foo.go",
        struct_name="MockFoo",
        template_data={"unroll-variadic": True},
        replacements={("example.com/test", "Thing"): replacement},
        comments=comments,
    )
    assert iface.pkg.path == "example.com/test"
    assert iface.replacements[("example.com/test", "Thing")] is replacement
    assert iface.comments.gen_decl_doc.lines == ["// Foo defines Bar"]


def test_source_interface_defaults_are_independent():
    pkg = SourcePackage("test", "example.com/test")
    first = SourceInterface("A", pkg)
    second = SourceInterface("B", pkg)
    first.template_data["k"] = "v"
    first.replacements[("p", "T")] = ReplaceType("p", "T")
    assert second.template_data == {}
    assert second.replacements == {}
    assert first.comments is not second.comments