import pytest

from mockweaver.gotypes import ERROR, INT, STRING, Named, Slice, TypesPackage
from mockweaver.method import Method
from mockweaver.package import Package
from mockweaver.param import Param
from mockweaver.var import Var

BAR = TypesPackage("bar", "bar")
CONTEXT = TypesPackage("context", "context")


def _param(name, typ, variadic=False, imports=None):
    return Param(Var(name=name, typ=typ, imports=dict(imports or {})), variadic)


def _baz_method():
    baz = Named("Baz", BAR)
    return Method(
        "Foo",
        [
            _param("s", STRING),
            _param("n", INT),
            _param("foo", baz, imports={"bar": Package(BAR)}),
        ],
        [_param("s", STRING), _param("err", ERROR)],
    )


def _fixture_method():
    return Method(
        "Foo",
        [_param("one", STRING), _param("two", Slice(STRING), variadic=True)],
        [_param("result", STRING), _param("err", ERROR)],
    )


def test_call_single_param():
    method = Method("Foo", [_param("s", STRING)], [_param("", ERROR)])
    assert method.call() == "Foo(s)"


def test_arg_lists_from_documented_example():
    method = _baz_method()
    assert method.arg_list() == "s string, n int, foo bar.Baz"
    assert method.arg_type_list() == "string, int, bar.Baz"
    assert method.arg_call_list() == "s, n, foo"
    assert method.arg_type_list_ellipsis() == method.arg_type_list()


def test_return_lists():
    method = _baz_method()
    assert method.return_arg_type_list() == "(string, error)"
    assert method.return_arg_name_list() == "s, err"
    assert method.returns_error() is True


def test_return_arg_list_with_names():
    method = Method(
        "Foo",
        [],
        [_param("foo", INT), _param("bar", STRING), _param("err", ERROR)],
    )
    assert method.return_arg_list() == "foo int, bar string, err error"
    assert method.return_arg_list_no_name() == "int, string, error"


def test_single_return_is_not_parenthesised():
    method = Method("Foo", [], [_param("err", ERROR)])
    assert method.return_arg_type_list() == "error"


def test_variadic_call_list():
    method = Method(
        "Foo",
        [_param("s", STRING), _param("n", INT), _param("foos", Slice(STRING), variadic=True)],
    )
    assert method.arg_call_list() == "s, n, foos..."
    assert method.arg_call_list_no_ellipsis() == method.arg_call_list().removesuffix("...")
    assert method.is_variadic() is True


def test_fixture_signature():
    method = _fixture_method()
    assert method.signature() == "(one string, two ...string) (result string, err error)"
    assert method.declaration() == "Foo" + method.signature()
    assert method.signature_no_name() == "(string, ...string) (string, error)"


def test_return_statement():
    assert _fixture_method().return_statement() == "return"
    assert Method("Foo", [_param("s", STRING)]).return_statement() == ""


def test_has_params_and_returns():
    assert Method().has_params() is False
    assert Method().has_returns() is False
    method = _fixture_method()
    assert method.has_params() is True
    assert method.has_returns() is True


def test_accepts_context():
    ctx_type = Named("Context", CONTEXT)
    method = Method(
        "Foo",
        [_param("ctx", ctx_type, imports={"context": Package(CONTEXT)}), _param("s", STRING)],
    )
    assert method.accepts_context() is True
    assert _fixture_method().accepts_context() is False


def test_returns_error_false_without_error():
    method = Method("Foo", [], [_param("s", STRING)])
    assert method.returns_error() is False


def test_arg_call_list_slice():
    method = _baz_method()
    assert method.arg_call_list_slice(0, -1) == method.arg_call_list()
    assert method.arg_call_list_slice(0, 1) == "s"
    assert method.arg_call_list_slice(1, -1).split(", ") == ["n", "foo"]


def test_arg_call_list_slice_no_ellipsis():
    method = _fixture_method()
    assert method.arg_call_list_slice(1, 2) == "two..."
    assert method.arg_call_list_slice_no_ellipsis(1, 2) == "two"


def test_arg_call_list_slice_end_one_on_empty_params():
    assert Method("Foo").arg_call_list_slice(0, 1) == ""


def test_arg_call_list_slice_out_of_range():
    with pytest.raises(IndexError):
        _fixture_method().arg_call_list_slice(0, 5)
    with pytest.raises(IndexError):
        _fixture_method().arg_call_list_slice(2, 1)


def test_not_variadic_without_params():
    assert Method().is_variadic() is False
    assert _baz_method().is_variadic() is False