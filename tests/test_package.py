import pytest

from mockweaver.gotypes import TypesPackage
from mockweaver.package import Package, Packages


def test_import_statement_without_alias():
    assert Package(TypesPackage("xyz", "xyz")).import_statement() == '"xyz"'


def test_import_statement_with_alias():
    pkg = Package(TypesPackage("xyz", "xyz"), alias="x")
    assert pkg.import_statement() == f'{pkg.alias} "{pkg.path()}"'


def test_qualifier_prefers_alias():
    types_pkg = TypesPackage("sync", "github.com/someother/sync")
    assert Package(types_pkg).qualifier() == types_pkg.name
    assert Package(types_pkg, alias="sync0").qualifier() == "sync0"


def test_path():
    types_pkg = TypesPackage("module", "github.com/some/module")
    assert Package(types_pkg).path() == types_pkg.path


def test_pkg_qualifier_finds_import():
    packages = Packages([
        Package(TypesPackage("sync", "sync")),
        Package(TypesPackage("module", "github.com/some/module")),
    ])
    assert packages.pkg_qualifier("sync") == "sync"
    assert packages.pkg_qualifier("github.com/some/module") == "module"


def test_pkg_qualifier_uses_alias():
    packages = Packages([Package(TypesPackage("sync", "github.com/someother/sync"), alias="sync0")])
    assert packages.pkg_qualifier("github.com/someother/sync") == "sync0"


def test_pkg_qualifier_unknown_raises():
    with pytest.raises(LookupError, match="unknown import nowhere"):
        Packages().pkg_qualifier("nowhere")