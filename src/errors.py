"""Error types raised by the resolver core and its collaborators."""

from __future__ import annotations


class ResolverError(Exception):
    """Base class for every error the resolver raises on purpose."""


class ConfigError(ResolverError, ValueError):
    """Invocation configuration is missing a required field or holds a bad value."""


class InvalidVersionRange(ResolverError, ValueError):
    """A range expression could not be parsed."""

    def __init__(self, expression: str, detail: str):
        super().__init__(f"Invalid version range '{expression}': {detail}")
        self.expression = expression
        self.detail = detail


class UnknownTarget(ResolverError):
    """A named target does not map to a known variant."""

    def __init__(self, name: str):
        super().__init__(f"Unknown resolution target '{name}'")
        self.name = name


class RepositoryError(ResolverError):
    """The repository index could not be reached."""


class DocumentParseError(ResolverError):
    """The descriptor document is not well-formed XML."""


class PropertyNotFound(ResolverError):
    """A property to rewrite does not exist in the descriptor document."""

    def __init__(self, name: str):
        super().__init__(f"Failed to set {name} property.")
        self.name = name


class DocumentWriteFailure(ResolverError):
    """The rewritten descriptor document could not be written."""

    def __init__(self, path: str, cause: OSError):
        super().__init__(f"Failed to write installed pom file {path}: {cause}")
        self.path = path
        self.cause = cause
