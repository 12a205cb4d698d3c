"""Exceptions raised while resolving OAuth client credentials."""

from __future__ import annotations


class CredentialsError(Exception):
    """Base class for all credential resolution failures."""


class InvalidJSONError(CredentialsError):
    """A present credential source held text that is not valid JSON."""

    def __init__(self, source: str, detail: str) -> None:
        super().__init__(f"Invalid JSON in {source}: {detail}")
        self.source = source
        self.detail = detail


class InvalidEncodingError(CredentialsError):
    """The base64 environment variable could not be decoded."""

    def __init__(self, variable: str, detail: str) -> None:
        super().__init__(f"Invalid base64 in {variable}: {detail}")
        self.variable = variable
        self.detail = detail


class InvalidFormatError(CredentialsError):
    """Decoded JSON matched none of the accepted credential shapes."""


class MissingClientIDError(CredentialsError):
    """Resolved credentials have no usable client id."""


class ResolutionFailedError(CredentialsError):
    """Every credential source was exhausted without a usable result.

    Attributes:
        remediation: Generated help text listing where credentials are looked up.
        original_error: Error text from the primary credentials file attempt.
    """

    def __init__(self, remediation: str, original_error: str) -> None:
        super().__init__(f"{remediation}\n\nOriginal error: {original_error}")
        self.remediation = remediation
        self.original_error = original_error


class CredentialsLoadError(CredentialsError):
    """Wraps a resolution failure with the name of the operation that failed.

    The underlying error is available as ``cause`` and is also chained as
    ``__cause__``.
    """

    def __init__(self, context: str, cause: CredentialsError) -> None:
        super().__init__(f"{context}: {cause}")
        self.context = context
        self.cause = cause
