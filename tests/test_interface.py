from mockweaver.gotypes import ANY, Slice
from mockweaver.interface import CommentGroup, Comments, Interface, Interfaces
from mockweaver.method import Method
from mockweaver.param import TypeParam
from mockweaver.var import Var


def _tparam(name, typ):
    return TypeParam(Var(name=name, typ=typ))


def test_comment_group_none_is_empty():
    group = CommentGroup.from_comments(None)
    assert group.lines == []
    assert group.text == ""


def test_comment_group_line_comment():
    group = CommentGroup.from_comments(["// Foo defines Bar"])
    assert group.lines == ["// Foo defines Bar"]
    assert group.text == "Foo defines Bar\n"


def test_comment_group_block_comment():
    group = CommentGroup.from_comments(["/* hello */"])
    assert group.text == " hello\n"


def test_comment_group_skips_directives():
    group = CommentGroup.from_comments(["// Foo defines Bar", "//go:generate mockery"])
    assert "go:generate" not in group.text
    assert group.text == CommentGroup.from_comments(["// Foo defines Bar"]).text
    assert len(group.lines) == 2


def test_comment_group_collapses_blank_lines():
    group = CommentGroup.from_comments(["//", "// Foo defines Bar", "//", "//", "// more"])
    assert not group.text.startswith("\n")
    assert "\n\n\n" not in group.text
    assert group.text.endswith("more\n")


def test_comments_default_empty():
    comments = Comments()
    assert comments.gen_decl_doc.text == ""
    assert comments.type_spec_doc.lines == []


def test_type_constraint_from_template_case():
    iface = Interface(type_params=[_tparam("t", Slice(None))])
    assert iface.type_constraint_test() == "[t []<nil>]"
    assert iface.type_constraint() == iface.type_constraint_test()


def test_type_instantiation():
    iface = Interface(type_params=[_tparam("t", ANY), _tparam("k", ANY)])
    assert iface.type_instantiation() == "[t, k]"
    assert iface.type_constraint().startswith("[t ")


def test_no_type_params_gives_empty_strings():
    iface = Interface(name="Foo")
    assert iface.type_constraint() == ""
    assert iface.type_constraint_test() == ""
    assert iface.type_instantiation() == ""


def test_implements_some_method():
    assert Interfaces().implements_some_method() is False
    assert Interfaces([Interface()]).implements_some_method() is False
    assert Interfaces([Interface(), Interface(methods=[Method()])]).implements_some_method() is True