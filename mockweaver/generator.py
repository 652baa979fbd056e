"""Generation of mock source files from interfaces and a template."""

from __future__ import annotations

import enum
import json
import logging
import os
import posixpath
import subprocess
from pathlib import Path
from typing import Any, Iterable, Mapping, MutableMapping, Optional, Sequence, Union as PathLike

from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for

from mockweaver.data import Data, TemplateData, TemplateDataSchemaError
from mockweaver.gotypes import (
    ANY,
    Alias,
    Basic,
    GoType,
    Interface,
    Named,
    Signature,
    SourcePackage,
    TypeParamType,
    Union,
    Variable,
)
from mockweaver.interface import Interface as MockInterface
from mockweaver.interface import Interfaces
from mockweaver.method import Method
from mockweaver.method_scope import ReplaceType
from mockweaver.param import Param, TypeParam
from mockweaver.parse import SourceInterface
from mockweaver.registry import Registry
from mockweaver.remote_template import RemoteTemplate
from mockweaver.stackerr import StackError, new_stack_err
from mockweaver.template import Template

log = logging.getLogger(__name__)

_REMOTE_PROTOCOLS = ("file://", "https://", "http://")
_MAX_PARENT_STEPS = 1000

# Built-in template styles, keyed by style name, and their JSON schemas (as JSON text).
STYLE_TEMPLATES: dict[str, str] = {}
STYLE_SCHEMAS: dict[str, str] = {}

Replacements = Mapping[tuple[str, str], ReplaceType]


class Formatter(str, enum.Enum):
    """How rendered mock source is formatted."""

    GOFMT = "gofmt"
    GOIMPORTS = "goimports"
    NOOP = "noop"


class GoModNotFoundError(StackError):
    """No go.mod file exists in a directory or any of its parents."""

    def __init__(self, directory: PathLike[str, os.PathLike]) -> None:
        super().__init__(FileNotFoundError(f"parsing package path for {directory}: go.mod file not found"))
        self.directory = directory


class GoModInvalidError(StackError):
    """A go.mod file has no module declaration."""

    def __init__(self, path: PathLike[str, os.PathLike]) -> None:
        super().__init__(ValueError(f"invalid go.mod file: {path}"))
        self.path = path


def find_pkg_path(dir_path: PathLike[str, os.PathLike]) -> str:
    """Return the import path of ``dir_path`` according to the enclosing go.mod.

    The directory is created if it does not exist yet.
    """
    directory = Path(dir_path)
    try:
        directory.mkdir(parents=True, exist_ok=True)
        directory = directory.resolve()
    except OSError as exc:
        raise new_stack_err(exc) from exc

    cursor = directory
    for _ in range(_MAX_PARENT_STEPS):
        go_mod = cursor / "go.mod"
        if go_mod.exists():
            break
        parent = cursor.parent
        if parent == cursor:
            raise GoModNotFoundError(directory)
        cursor = parent
    else:
        raise new_stack_err(RuntimeError(f"failed to find go.mod after {_MAX_PARENT_STEPS} iterations"))

    relative = Path(os.path.relpath(directory, go_mod.parent)).as_posix()
    try:
        text = go_mod.read_text(encoding="utf-8")
    except OSError as exc:
        raise new_stack_err(exc) from exc

    for line in text.splitlines():
        if not line.startswith("module"):
            continue
        parts = line.split("module ")
        if len(parts) < 2:
            raise GoModInvalidError(go_mod)
        return posixpath.normpath(posixpath.join(parts[1], relative))
    raise GoModInvalidError(go_mod)


def explicit_constraint_type(type_param: Variable) -> Optional[GoType]:
    """Return the basic type a constraint pins down, or None.

    A constraint that embeds a basic type yields that type; one that embeds a
    union yields the union's first term.
    """
    typ = type_param.type
    if typ is None:
        return None
    under = typ.underlying()
    if not isinstance(under, Interface):
        under = Interface(embeddeds=(typ,), implicit=True)
    for embedded in under.embeddeds:
        if isinstance(embedded, Basic):
            return embedded
        if isinstance(embedded, Union) and embedded.terms:
            return embedded.terms[0][1]
    return None


def validate_schema(data: Data, schema: Any) -> None:
    """Check the file's and every interface's template data against ``schema``."""
    if schema is None:
        raise ValueError("jschema argument can't be nil")
    try:
        data.template_data.verify_json_schema(schema)
    except TemplateDataSchemaError as exc:
        raise TemplateDataSchemaError("validating template-data") from exc
    for intf in data.interfaces:
        try:
            TemplateData(intf.template_data or {}).verify_json_schema(schema)
        except TemplateDataSchemaError as exc:
            raise TemplateDataSchemaError(f"verifying template-data for {intf.name}: {exc}") from exc


def _replacement_key(typ: Optional[GoType]) -> tuple[str, str]:
    if isinstance(typ, (Named, Alias)):
        return (typ.pkg.path if typ.pkg is not None else "", typ.name)
    return ("", "")


def _embedded_schema(name: str) -> Any:
    text = STYLE_SCHEMAS.get(name)
    if text is None:
        raise ValueError(f"generating schema: no schema for template '{name}'")
    try:
        document = json.loads(text)
        cls = validator_for(document)
        cls.check_schema(document)
    except (json.JSONDecodeError, SchemaError) as exc:
        raise ValueError(f"generating schema: {exc}") from exc
    return cls(document)


def _run_tool(command: list[str], src: str, label: str) -> str:
    try:
        result = subprocess.run(command, input=src, capture_output=True, text=True, check=False)
    except OSError as exc:
        raise RuntimeError(f"{label}: {exc}") from exc
    if result.returncode != 0:
        raise RuntimeError(f"{label}: {result.stderr.strip()}")
    return result.stdout


def _absolute(path: Path) -> Path:
    return Path(os.path.normpath(path if path.is_absolute() else Path.cwd() / path))


class TemplateGenerator:
    """Renders the mocks of one output file from a template."""

    def __init__(
        self,
        src_pkg: SourcePackage,
        out_pkg_fs_path: PathLike[str, os.PathLike],
        template_name: str,
        template_schema: str,
        require_schema_exists: bool,
        remote_template_cache: Optional[MutableMapping[str, RemoteTemplate]],
        formatter: PathLike[Formatter, str],
        template_data: Optional[Mapping[str, Any]],
        pkg_name: str,
    ) -> None:
        if not src_pkg.go_files:
            raise ValueError(f"source package {src_pkg.path} has no files")
        src_pkg_fs_path = _absolute(Path(src_pkg.go_files[0]).parent)
        out_path = _absolute(Path(out_pkg_fs_path))
        out_pkg_path = find_pkg_path(out_path)

        self.in_package = pkg_name == src_pkg.name and src_pkg_fs_path == out_path
        if self.in_package:
            log.debug("output package %s is in-package of %s", out_pkg_path, src_pkg.path)
        else:
            log.debug("output package %s is not in-package of %s", out_pkg_path, src_pkg.path)

        self.registry = Registry(src_pkg, out_pkg_path, self.in_package)
        self.template_name = template_name
        self.template_schema = template_schema
        self.require_schema_exists = require_schema_exists
        self.remote_template_cache = remote_template_cache if remote_template_cache is not None else {}
        self.formatter = formatter
        self.template_data = dict(template_data or {})
        self.pkg_name = pkg_name

    def _format(self, src: str) -> str:
        try:
            formatter = Formatter(self.formatter)
        except ValueError:
            raise ValueError(f"unknown formatter type: {self.formatter}") from None
        if formatter is Formatter.GOIMPORTS:
            return _run_tool(["goimports", "-format-only"], src, "goimports")
        if formatter is Formatter.GOFMT:
            return _run_tool(["gofmt"], src, "go/format")
        return src

    def method_data(self, method: Variable, replacements: Optional[Replacements] = None) -> Method:
        """Build the template view of ``method``, applying any type replacements."""
        signature = method.type
        if not isinstance(signature, Signature):
            raise TypeError(f"{method.name} is not a method")
        replacements = replacements or {}
        scope = self.registry.method_scope()

        last = len(signature.params) - 1
        params: list[Param] = []
        for j, variable in enumerate(signature.params):
            log.debug("found parameter %s", variable)
            replacement = replacements.get(_replacement_key(variable.type))
            if replacement is not None:
                log.debug("found replacement %s.%s", replacement.pkg_path, replacement.type_name)
            var = scope.add_var(variable, "", replacement)
            params.append(Param(var, variadic=signature.variadic and j == last))

        returns = [
            Param(scope.add_var(variable, "", replacements.get(_replacement_key(variable.type))), variadic=False)
            for variable in signature.results
        ]
        return Method(name=method.name, params=params, returns=returns, scope=scope)

    def type_params(self, tparams: Optional[Iterable[TypeParamType]]) -> list[TypeParam]:
        """Build the template view of a generic declaration's type parameters."""
        if not tparams:
            return []
        scope = self.registry.method_scope()
        result: list[TypeParam] = []
        for tp in tparams:
            variable = Variable(tp.name, tp.constraint if tp.constraint is not None else ANY)
            var = scope.add_var(variable, "", None)
            result.append(TypeParam(var=var, constraint=explicit_constraint_type(variable)))
        return result

    def _get_template(self) -> tuple[str, Optional[Any]]:
        if self.template_name.startswith(_REMOTE_PROTOCOLS):
            remote = self.remote_template_cache.get(self.template_name)
            if remote is None:
                remote = RemoteTemplate(self.template_name, self.template_schema)
                self.remote_template_cache[self.template_name] = remote
            try:
                template_string = remote.template()
            except Exception:
                log.error("could not download template %s", self.template_name)
                raise
            schema = None
            if self.require_schema_exists:
                try:
                    schema = remote.schema()
                except Exception:
                    log.error("could not get JSON schema %s", self.template_schema)
                    raise
            return template_string, schema

        template_string = STYLE_TEMPLATES.get(self.template_name)
        if template_string is None:
            raise LookupError(f"template '{self.template_name}' does not exist")
        return template_string, _embedded_schema(self.template_name)

    def generate(self, interfaces: Sequence[SourceInterface]) -> str:
        """Render and format the mocks for ``interfaces``."""
        mocks: list[MockInterface] = []
        for source in interfaces:
            log.debug("looking up interface %s in registry", source.name)
            iface, tparams = self.registry.lookup_interface(source.name)
            methods = [self.method_data(method, source.replacements) for method in iface.all_methods()]
            # Names are only final once every variable and import has been seen.
            for method in methods:
                method.scope.resolve_variable_name_collisions()
            mocks.append(
                MockInterface(
                    name=source.name,
                    struct_name=source.struct_name,
                    type_params=self.type_params(tparams),
                    methods=methods,
                    template_data=dict(source.template_data),
                    comments=source.comments,
                )
            )

        data = Data(
            pkg_name=self.pkg_name,
            registry=self.registry,
            interfaces=Interfaces(mocks),
            template_data=TemplateData(self.template_data),
        )
        if not self.in_package:
            data.src_pkg_qualifier = self.registry.src_pkg_name() + "."

        template_string, schema = self._get_template()
        if schema is not None:
            validate_schema(data, schema)

        log.debug("executing template %s", self.template_name)
        rendered = Template(template_string, self.template_name).render(data)

        log.debug("formatting file in-memory")
        try:
            return self._format(rendered)
        except Exception:
            for number, line in enumerate(rendered.splitlines(), start=1):
                print(f"{number}:\t{line}")
            log.error("can't format mock file in-memory")
            raise