import pytest

from mockweaver.gotypes import (
    INT,
    STRING,
    UNSAFE_POINTER,
    Interface,
    Map,
    Named,
    SourcePackage,
    TypesPackage,
    Variable,
)
from mockweaver.method_scope import MethodScope, ReplaceType
from mockweaver.registry import Registry
from mockweaver.stackerr import StackError

CONTEXT = TypesPackage("context", "context")
SYNC = TypesPackage("sync", "sync")


def named(name, pkg):
    return Named(name, pkg, Interface())


@pytest.fixture
def registry():
    return Registry(None, "example.com/out", False)


def test_scope_sees_existing_import_qualifiers(registry):
    registry.add_import("sync", "sync")
    scope = MethodScope(registry)
    assert scope.name_exists("sync")
    assert not scope.name_exists("fmt")


def test_suggest_name_free_and_taken(registry):
    scope = registry.method_scope()
    assert scope.suggest_name("x") == "x"
    assert not scope.name_exists("x")
    scope.add_name("x")
    suggestion = scope.suggest_name("x")
    assert suggestion == "x1"
    assert not scope.name_exists(suggestion)


def test_allocate_name_reserves_distinct_names(registry):
    scope = registry.method_scope()
    first = scope.allocate_name("v")
    second = scope.allocate_name("v")
    assert first != second
    assert scope.name_exists(first) and scope.name_exists(second)


def test_add_var_named_param_imports_package(registry):
    scope = registry.method_scope()
    var = scope.add_var(Variable("ctx", named("Context", CONTEXT)), "", None)
    assert var.name == "ctx"
    assert var.type_string() == "context.Context"
    assert [imprt.path() for imprt in registry.imports()] == ["context"]
    assert scope.name_exists("context")
    assert scope.name_exists("context.Context")


def test_add_var_unnamed_string_gets_type_name(registry):
    scope = registry.method_scope()
    var = scope.add_var(Variable("", STRING), "", None)
    assert var.name == "s"
    assert registry.imports() == []


def test_add_var_avoids_import_qualifier(registry):
    scope = registry.method_scope()
    var = scope.add_var(Variable("sync", named("Mutex", SYNC)), "", None)
    assert var.name != "sync"
    assert var.name.startswith("sync")
    scope.resolve_variable_name_collisions()
    assert scope.name_exists(var.name)


def test_resolve_collisions_between_vars(registry):
    scope = registry.method_scope()
    first = scope.add_var(Variable("a", INT), "", None)
    second = scope.add_var(Variable("a", INT), "", None)
    scope.resolve_variable_name_collisions()
    assert first.name == "a"
    assert second.name != first.name
    assert second.name.startswith("a")


def test_map_type_imports_both_packages(registry):
    scope = registry.method_scope()
    key = named("Key", TypesPackage("keys", "example.com/keys"))
    value = named("Value", TypesPackage("values", "example.com/values"))
    var = scope.add_var(Variable("m", Map(key, value)), "", None)
    assert var.type_string() == "map[keys.Key]values.Value"
    assert [imprt.path() for imprt in registry.imports()] == ["example.com/keys", "example.com/values"]


def test_unsafe_pointer_imports_unsafe(registry):
    scope = registry.method_scope()
    var = scope.add_var(Variable("p", UNSAFE_POINTER), "", None)
    assert var.type_string() == "unsafe.Pointer"
    assert [imprt.path() for imprt in registry.imports()] == ["unsafe"]


def test_in_package_types_are_unqualified():
    registry = Registry(None, "example.com/src", True)
    scope = registry.method_scope()
    var = scope.add_var(Variable("f", named("Foo", TypesPackage("src", "example.com/src"))), "", None)
    assert var.type_string() == "Foo"
    assert registry.imports() == []


def test_replacement_uses_replacing_type(registry):
    other = TypesPackage("other", "example.com/other")
    replacing = named("Bar", other)
    loaded = SourcePackage("other", "example.com/other", scope={"Bar": replacing})
    original = Variable("b", named("Orig", TypesPackage("orig", "example.com/orig")))
    scope = registry.method_scope()
    var = scope.add_var(original, "", ReplaceType("example.com/other", "Bar", (loaded,)))
    assert var.typ is replacing
    assert var.type_string() == "other.Bar"
    assert [imprt.path() for imprt in registry.imports()] == ["example.com/other"]


def test_replacement_missing_type_raises(registry):
    loaded = SourcePackage("other", "example.com/other", scope={})
    scope = registry.method_scope()
    with pytest.raises(StackError, match="type does not exist in referenced package"):
        scope.add_var(Variable("b", INT), "", ReplaceType("example.com/other", "Bar", (loaded,)))