"""Type models, naming scopes, import registries and template rendering for generating interface mocks."""

__version__ = "0.1.0"