"""Centralised exception hierarchy for sendcov."""

from __future__ import annotations


class SendcovError(Exception):
    """Base class for all custom sendcov exceptions."""


class SourceReadError(SendcovError, OSError):
    """A source file could not be opened or fully read as UTF-8 text."""


class EncodingError(SendcovError):
    """An assembled report could not be encoded into the wire format."""


class TransportError(SendcovError):
    """The HTTP transport failed before a response was received."""


class ConfigError(SendcovError):
    """Configuration values are present but unusable."""


class CoverageXMLError(SendcovError):
    """Base class for errors related to coverage XML handling."""


class InvalidCoverageXMLError(CoverageXMLError):
    """Coverage XML file was found but does not contain a valid report."""


__all__ = [
    "ConfigError",
    "CoverageXMLError",
    "EncodingError",
    "InvalidCoverageXMLError",
    "SendcovError",
    "SourceReadError",
    "TransportError",
]
