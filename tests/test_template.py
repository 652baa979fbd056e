import io

import jinja2
import pytest

from mockweaver.data import Data
from mockweaver.gotypes import Slice, TypesPackage
from mockweaver.interface import Interface
from mockweaver.method import Method
from mockweaver.package import Package
from mockweaver.param import TypeParam
from mockweaver.registry import Registry
from mockweaver.template import Template
from mockweaver.var import Var


def _render(source, data, name="test"):
    return Template(source, name).render(data)


def test_import_statement():
    imprt = Package(TypesPackage("xyz", "xyz"))
    imprt.alias = "x"
    registry = Registry(None, "", False)
    registry.add_package_import(imprt.pkg)
    out = _render("{%- for i in imports() %}{{ i.import_statement() }}{%- endfor %}", Data(registry=registry))
    assert out == '"xyz"'


def test_pkg_qualifier():
    registry = Registry(None, "", False)
    registry.add_package_import(TypesPackage("sync", "sync"))
    registry.add_package_import(TypesPackage("module", "github.com/some/module"))
    out = _render('{{ imports().pkg_qualifier("sync") }}', Data(registry=registry))
    assert out == "sync"


def test_pkg_qualifier_conflicting_pkg_names():
    registry = Registry(None, "", False)
    registry.add_import("sync", "sync")
    registry.add_import("sync", "github.com/someother/sync")
    out = _render('{{ imports().pkg_qualifier("github.com/someother/sync") }}', Data(registry=registry))
    assert out == "sync0"


def test_pkg_qualifier_unknown_import():
    registry = Registry(None, "", False)
    with pytest.raises(LookupError):
        _render('{{ imports().pkg_qualifier("sync") }}', Data(registry=registry))


@pytest.mark.parametrize(
    ("value", "want"),
    [("", ""), ("someVar", "SomeVar"), ("sql", "SQL")],
)
def test_exported(value, want):
    out = _render("{{ exported(template_data.var) }}", Data(template_data={"var": value}))
    assert out == want


def test_implements_some_method():
    data = Data(interfaces=[Interface(methods=[Method()])])
    assert _render("{{ interfaces.implements_some_method() }}", data) == "true"


def test_type_constraint():
    data = Data(interfaces=[Interface(type_params=[TypeParam(Var(name="t", typ=Slice(None)))])])
    assert _render("{{ interfaces[0].type_constraint_test() }}", data) == "[t []<nil>]"


def test_read_file(tmp_path):
    path = tmp_path / "readFileTest"
    path.write_text("content")
    out = _render("{{ readFile(template_data.f) }}", Data(template_data={"f": str(path)}))
    assert out == "content"


def test_execute_writes_to_stream():
    stream = io.StringIO()
    Template("package {{ pkg_name }}\n", "pkg").execute(stream, Data(pkg_name="mocks"))
    assert stream.getvalue() == "package mocks\n"


def test_execute_matches_render():
    template = Template("{{ upper(template_data.s) }}", "upper")
    data = Data(template_data={"s": "weaver"})
    stream = io.StringIO()
    template.execute(stream, data)
    assert stream.getvalue() == template.render(data) == "WEAVER"


def test_syntax_error():
    with pytest.raises(jinja2.TemplateSyntaxError):
        Template("{% for %}", "broken")


def test_name_is_kept():
    assert Template("x", "mock_testify").name == "mock_testify"