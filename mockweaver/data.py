"""The data handed to a mock template."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import jsonschema

from mockweaver.interface import Interfaces
from mockweaver.package import Packages
from mockweaver.registry import Registry

log = logging.getLogger(__name__)


class TemplateDataSchemaError(Exception):
    """Template data does not satisfy the template's JSON schema."""

    def __init__(self, message: str = "unable to verify template-data schema") -> None:
        super().__init__(message)


def _as_validator(schema: Any) -> Any:
    if isinstance(schema, Mapping):
        cls = jsonschema.validators.validator_for(schema)
        cls.check_schema(schema)
        return cls(schema)
    return schema


def _error_context(error: jsonschema.ValidationError) -> str:
    path = ".".join(str(part) for part in error.absolute_path)
    return path or "(root)"


class TemplateData(dict):
    """Schemaless parameters from configuration made available to templates."""

    def verify_json_schema(self, schema: Any) -> None:
        """Check the data against ``schema`` (a schema mapping or a validator).

        Raises TemplateDataSchemaError when the data does not conform.
        """
        validator = _as_validator(schema)
        errors = list(validator.iter_errors(dict(self)))
        if errors:
            log.error("issue with template-data json schema, see messages below:")
            for error in errors:
                log.error("%s: %s", _error_context(error), error.message)
            raise TemplateDataSchemaError()
        log.debug("validated json schema successfully")


@dataclass
class Data:
    """Everything a template sees when rendering a mock file.

    ``src_pkg_qualifier`` is the prefix, such as ``foo.``, used for types of the
    source package when the mocks are written into another package.
    """

    pkg_name: str = ""
    registry: Optional[Registry] = None
    src_pkg_qualifier: str = ""
    interfaces: Interfaces = field(default_factory=Interfaces)
    template_data: TemplateData = field(default_factory=TemplateData)

    def __post_init__(self) -> None:
        if not isinstance(self.interfaces, Interfaces):
            self.interfaces = Interfaces(self.interfaces)
        if not isinstance(self.template_data, TemplateData):
            self.template_data = TemplateData(self.template_data or {})

    def imports(self) -> Packages:
        """Return the packages the rendered file imports, sorted by path."""
        if self.registry is None:
            raise ValueError("template data has no registry")
        return self.registry.imports()