"""Credential resolution pipeline and its public entry points.

Sources are tried in priority order::

    inline JSON env > base64 env > primary file > legacy file

A source that is not configured is skipped. A source that is configured but
broken stops resolution with that error, except for the two file sources:
a broken primary file falls through to the legacy file, and only when that
also fails is ``ResolutionFailedError`` raised.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from loguru import logger

from gdrive_oauth.client import ClientSecrets, OAuthClientConfig
from gdrive_oauth.credentials import OAuthCredentials
from gdrive_oauth.errors import (
    CredentialsError,
    CredentialsLoadError,
    MissingClientIDError,
    ResolutionFailedError,
)
from gdrive_oauth.paths import EnvReader, generate_credentials_error_message
from gdrive_oauth.sources import (
    CredentialSource,
    Outcome,
    SourceResult,
    read_env_base64,
    read_env_json,
    read_keys_file,
    read_legacy_file,
)


@dataclass(frozen=True)
class Stage:
    """One step of the pipeline.

    Attributes:
        source: Which source this stage reads.
        read: Reader returning a ``SourceResult``.
        falls_back: If True, a broken source moves on to the next stage
            instead of stopping resolution.
    """

    source: CredentialSource
    read: Callable[[EnvReader], SourceResult]
    falls_back: bool = False


STAGES: tuple[Stage, ...] = (
    Stage(CredentialSource.ENV_JSON, read_env_json),
    Stage(CredentialSource.ENV_BASE64, read_env_base64),
    Stage(CredentialSource.FILE, read_keys_file, falls_back=True),
    Stage(CredentialSource.LEGACY_FILE, read_legacy_file, falls_back=True),
)


@dataclass
class ResolvedCredentials:
    credentials: OAuthCredentials
    source: CredentialSource


@dataclass
class ResolvedClient:
    """Credentials plus the client configuration built from them."""

    credentials: OAuthCredentials
    config: OAuthClientConfig
    source: CredentialSource


class CredentialResolver:
    """Resolves OAuth client credentials from the environment and filesystem.

    Nothing is cached: every ``resolve()`` call reads the sources again.

    Args:
        getenv: Environment lookup, ``os.environ.get`` by default. Tests pass
            ``dict.get`` for a synthetic environment.
        stages: Pipeline stages, ``STAGES`` by default.
    """

    def __init__(
        self,
        getenv: EnvReader | None = None,
        stages: Sequence[Stage] = STAGES,
    ) -> None:
        self._getenv = getenv or os.environ.get
        self._stages = tuple(stages)

    def resolve(self) -> ResolvedCredentials:
        """Run the pipeline once.

        Raises:
            InvalidJSONError: Environment source holds invalid JSON.
            InvalidEncodingError: Base64 environment source cannot be decoded.
            InvalidFormatError: Environment source JSON has an unknown shape.
            ResolutionFailedError: No file source produced credentials.
        """
        original_error: str | None = None

        for stage in self._stages:
            result = stage.read(self._getenv)

            if result.outcome is Outcome.RESOLVED:
                logger.info("OAuth credentials loaded from {}", stage.source.value)
                return ResolvedCredentials(result.credentials, stage.source)

            if result.outcome is Outcome.FAILED and not stage.falls_back:
                raise result.error

            logger.debug("Skipping {}: {}", stage.source.value, result.detail)
            if stage.falls_back and original_error is None:
                original_error = result.detail

        raise ResolutionFailedError(
            generate_credentials_error_message(self._getenv),
            original_error or "no credential source available",
        )


def resolve_client(resolver: CredentialResolver | None = None) -> ResolvedClient:
    """Resolve credentials and build a ready-to-use client configuration.

    Raises:
        CredentialsLoadError: Wrapping the underlying ``CredentialsError``.
    """
    resolver = resolver or CredentialResolver()
    try:
        resolved = resolver.resolve()
    except CredentialsError as e:
        raise CredentialsLoadError("Error loading OAuth keys", e) from e

    return ResolvedClient(
        credentials=resolved.credentials,
        config=OAuthClientConfig.from_credentials(resolved.credentials),
        source=resolved.source,
    )


def resolve_minimal(resolver: CredentialResolver | None = None) -> ClientSecrets:
    """Resolve only the client id and secret.

    Raises:
        CredentialsLoadError: Wrapping the underlying ``CredentialsError``,
            including ``MissingClientIDError`` for an empty client id.
    """
    resolver = resolver or CredentialResolver()
    try:
        credentials = resolver.resolve().credentials
        if not credentials.client_id:
            raise MissingClientIDError("Client ID missing in credentials.")
    except CredentialsError as e:
        raise CredentialsLoadError("Error loading credentials", e) from e

    return ClientSecrets(
        client_id=credentials.client_id,
        client_secret=credentials.client_secret,
    )
