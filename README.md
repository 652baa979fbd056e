# mockweaver

mockweaver is a library for generating mock implementations of Go interfaces
from templates. It models the types that appear in interface methods, picks
variable names that never collide with import qualifiers or with each other,
keeps track of the imports the generated file needs, and renders the result
through a Jinja2 template whose input can be checked against a JSON Schema.

## Modules

- `mockweaver.gotypes`: a small model of Go types (`Basic`, `Named`, `Alias`,
  `Pointer`, `Slice`, `Array`, `Map`, `Chan`, `Signature`, `Struct`,
  `Interface`, `Union`, `TypeParamType`, `Variable`), the package types
  `TypesPackage` and `SourcePackage` (with `lookup(name)`), plus
  `type_string(typ, qualifier)` and `is_interface(typ)`.
- `mockweaver.package`: `Package` (an import, with `import_statement()`,
  `qualifier()` and `path()`) and `Packages` with `pkg_qualifier(path)`.
- `mockweaver.var`: `Var`, and the naming helpers `var_name`,
  `var_name_for_type`, `nillable`, `capitalise` and `decapitalise`.
- `mockweaver.param`: `Param` and `TypeParam`.
- `mockweaver.method_scope`: `MethodScope`, which allocates names inside one
  method, and `ReplaceType`, which swaps a parameter's type for a type taken
  from another `SourcePackage`.
- `mockweaver.registry`: `Registry`, which holds the imports of the file being
  generated and aliases packages whose names clash.
- `mockweaver.method`: `Method`, with helpers such as `signature()`,
  `declaration()`, `arg_list()`, `arg_call_list()`, `return_arg_list()` and
  `returns_error()`.
- `mockweaver.interface`: `Interface`, `Interfaces`, `Comments` and
  `CommentGroup`.
- `mockweaver.data`: `Data`, `TemplateData` (with `verify_json_schema`) and
  `TemplateDataSchemaError`.
- `mockweaver.template`: `Template`, with `render(data)` and
  `execute(stream, data)`.
- `mockweaver.funcs`: the helper functions available in templates.
- `mockweaver.remote_template`: `download`, `https_get` and `RemoteTemplate`,
  which fetches a template and its schema from `file://`, `http://` or
  `https://` locations once and caches them.
- `mockweaver.parse`: `SourceInterface` and `is_auto_generated(path)`.
- `mockweaver.generator`: `TemplateGenerator`, `find_pkg_path`,
  `explicit_constraint_type`, `validate_schema` and `Formatter`.
- `mockweaver.logsetup`: `get_logger(level)`, `docs_url`, version helpers and
  the `warn`, `info` and `warn_deprecated` logging shortcuts.
- `mockweaver.stackerr`: `StackError`, `new_stack_err`, `new_stack_errf` and
  `get_stack`.

## Imports without collisions

```python
from mockweaver.registry import Registry

registry = Registry(None, "", False)
registry.add_import("sync", "sync")
registry.add_import("sync", "example.com/other/sync")

print([pkg.qualifier() for pkg in registry.imports()])
# imports are sorted by path: ['sync0', 'sync']
print(registry.imports().pkg_qualifier("example.com/other/sync"))
# sync0
```

When two packages share a name, the later one is given an alias made from the
name and a counter, and its import statement carries that alias. When the
registry is in-package, imports of the destination package are skipped.

## Template helpers

The functions in `mockweaver.funcs` are available as globals in every template
(under names such as `exported`, `camelcase`, `hasPrefix`, `add`, `min`) and
can also be called directly:

```python
from mockweaver import funcs

funcs.exported("sql")            # 'SQL'
funcs.exported("someVar")        # 'SomeVar'
funcs.first_is_lower("Mock")     # False
funcs.camel_case("hello_world")  # 'helloWorld'
funcs.snake_case("HelloWorld")   # 'hello_world'
funcs.add(5, 10)                 # 15
funcs.minimum(2, 4, 6)           # 2
```

String helpers take the subject last, so that it can be the piped value.

## Rendering

```python
from mockweaver.data import Data
from mockweaver.template import Template

template = Template("{{ exported(template_data.var) }}", "example")
print(template.render(Data(template_data={"var": "someVar"})))
# SomeVar
```

A template sees `pkg_name`, `registry`, `src_pkg_qualifier`, `interfaces`,
`template_data`, the callable `imports` and the whole object as `data`.
Values are printed in Go style: `true`/`false`, `<nil>` for `None`, lists as
`[a b c]`.

## Generating a mock file

`TemplateGenerator` takes a `SourcePackage`, the output directory (which must
lie inside a directory tree with a `go.mod` file), a template location and a
formatter. `generate(interfaces)` looks each `SourceInterface` up in the
source package, builds the method data, validates the template data against
the schema when one is available, renders the template and formats the
result. `Formatter.GOFMT` and `Formatter.GOIMPORTS` run the external `gofmt`
and `goimports` tools, which must be on the `PATH`; `Formatter.NOOP` leaves
the text as rendered.

## What the package does not do

- It does not read Go source. `SourcePackage` and the types in it must be
  built by the caller; `mockweaver.parse` only detects generated files.
- It ships no built-in template styles: `generator.STYLE_TEMPLATES` and
  `generator.STYLE_SCHEMAS` start empty, so templates are given as
  `file://`, `http://` or `https://` locations unless those maps are filled.
- It has no command-line program and reads no configuration files.

## Errors

Failures are raised as exceptions: `TemplateDataSchemaError` when template
data does not match its schema, `BadHTTPStatusError` when a remote template
answers with a status other than 200, `GoModNotFoundError` or
`GoModInvalidError` when the output directory is not inside a module, and
`LookupError` for an unknown import, interface or template. Errors made with
`new_stack_err` keep the stack from where they were made, which `get_stack`
returns.