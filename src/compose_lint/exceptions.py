"""Custom exceptions for compose-lint.

The rules themselves never raise; these cover the host side (config, manifests, fixes).
"""


class ComposeLintError(Exception):
    """Base class for errors surfaced to the CLI."""


class ConfigError(ComposeLintError):
    """Invalid or unreadable configuration."""


class ManifestError(ComposeLintError):
    """Declaration manifest failed validation."""


class EditConflictError(ComposeLintError):
    """Source text under a suggested edit no longer matches what the edit expects."""


class UnknownIssueError(ComposeLintError):
    """No registered issue with the requested id."""
