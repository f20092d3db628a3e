"""Exception types raised by termwise.

Filesystem failures during an upgrade are reported with Python's builtin
``PermissionError`` and ``OSError`` rather than custom types.
"""


class TermwiseError(Exception):
    """Base class for all termwise errors."""


class ConfigError(TermwiseError):
    """The configuration or credentials could not be located or read."""


class NetworkError(TermwiseError):
    """A remote endpoint could not be reached or answered with a non-success status."""


class MetadataParseError(TermwiseError):
    """The release metadata could not be decoded or lacks a version tag."""


class QueryError(TermwiseError):
    """The language model request failed or returned nothing usable."""
