"""Readers for each place OAuth client credentials can come from.

Every reader takes the environment lookup function and returns a
``SourceResult`` instead of raising, so the resolver decides which failures
stop resolution and which move on to the next source.
"""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from gdrive_oauth.credentials import (
    OAuthCredentials,
    parse_credentials_content,
    parse_credentials_object,
)
from gdrive_oauth.errors import CredentialsError, InvalidEncodingError, InvalidFormatError
from gdrive_oauth.paths import (
    CREDENTIALS_BASE64_ENVS,
    CREDENTIALS_JSON_ENV,
    EnvReader,
    get_keys_file_path,
    get_legacy_keys_file_path,
)


class CredentialSource(str, Enum):
    """Credential sources in priority order."""

    ENV_JSON = "env_json"
    ENV_BASE64 = "env_base64"
    FILE = "file"
    LEGACY_FILE = "legacy_file"


class Outcome(Enum):
    RESOLVED = "resolved"
    UNAVAILABLE = "unavailable"
    FAILED = "failed"


@dataclass
class SourceResult:
    """Result of reading one source.

    ``UNAVAILABLE`` means the source is not configured or not present.
    ``FAILED`` means it is present but unusable, with the error attached.
    """

    outcome: Outcome
    credentials: OAuthCredentials | None = None
    error: CredentialsError | None = None
    detail: str = ""

    @classmethod
    def resolved(cls, credentials: OAuthCredentials) -> SourceResult:
        return cls(Outcome.RESOLVED, credentials=credentials)

    @classmethod
    def unavailable(cls, detail: str) -> SourceResult:
        return cls(Outcome.UNAVAILABLE, detail=detail)

    @classmethod
    def failed(cls, error: CredentialsError) -> SourceResult:
        return cls(Outcome.FAILED, error=error, detail=str(error))


def _first_set(getenv: EnvReader, names: tuple[str, ...]) -> tuple[str, str] | None:
    """Return ``(name, value)`` for the first non-empty variable in ``names``."""
    for name in names:
        value = getenv(name)
        if value:
            return name, value
    return None


def read_env_json(getenv: EnvReader) -> SourceResult:
    """Read credentials from inline JSON in an environment variable."""
    value = getenv(CREDENTIALS_JSON_ENV)
    if not value:
        return SourceResult.unavailable(f"{CREDENTIALS_JSON_ENV} is not set")
    try:
        return SourceResult.resolved(parse_credentials_content(value, CREDENTIALS_JSON_ENV))
    except CredentialsError as e:
        return SourceResult.failed(e)


def decode_base64_json(name: str, value: str) -> str:
    """Decode standard base64 into UTF-8 text, ignoring whitespace.

    Raises:
        InvalidEncodingError: If ``value`` is not valid base64 or not UTF-8.
    """
    try:
        # Line-wrapped output of `base64` is accepted
        return base64.b64decode("".join(value.split()), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise InvalidEncodingError(name, str(e)) from e


def read_env_base64(getenv: EnvReader) -> SourceResult:
    """Read credentials from base64-encoded JSON in an environment variable."""
    found = _first_set(getenv, CREDENTIALS_BASE64_ENVS)
    if found is None:
        return SourceResult.unavailable(f"{' / '.join(CREDENTIALS_BASE64_ENVS)} not set")
    name, value = found
    try:
        decoded = decode_base64_json(name, value)
        return SourceResult.resolved(parse_credentials_content(decoded, name))
    except CredentialsError as e:
        return SourceResult.failed(e)


def read_keys_file(getenv: EnvReader) -> SourceResult:
    """Read credentials from the primary credentials file."""
    path = get_keys_file_path(getenv)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return SourceResult.unavailable(str(e))
    try:
        return SourceResult.resolved(parse_credentials_content(content, str(path)))
    except CredentialsError as e:
        return SourceResult.failed(e)


def read_legacy_file(getenv: EnvReader) -> SourceResult:
    """Read credentials from the deprecated client_secret.json file.

    Only the ``installed`` and ``web`` layouts are accepted here. Anything
    wrong with the file makes the source unavailable.
    """
    path = get_legacy_keys_file_path(getenv)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        return SourceResult.unavailable(str(e))

    if not isinstance(data, dict) or not ("installed" in data or "web" in data):
        return SourceResult.unavailable("Invalid legacy credentials format")
    try:
        credentials = parse_credentials_object(data)
    except InvalidFormatError as e:
        return SourceResult.unavailable(str(e))

    logger.warning(
        "Using legacy {}. Please migrate to {}",
        path,
        get_keys_file_path(getenv),
    )
    return SourceResult.resolved(credentials)
