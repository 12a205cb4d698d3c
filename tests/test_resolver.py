"""Tests for the resolution pipeline and the public entry points."""

from pathlib import Path
from typing import Any

import pytest

from gdrive_oauth.credentials import OAuthCredentials
from gdrive_oauth.errors import (
    CredentialsLoadError,
    InvalidEncodingError,
    InvalidFormatError,
    InvalidJSONError,
    MissingClientIDError,
    ResolutionFailedError,
)
from gdrive_oauth.resolver import (
    CredentialResolver,
    Stage,
    resolve_client,
    resolve_minimal,
)
from gdrive_oauth.sources import CredentialSource, SourceResult
from tests.helpers import b64_json, warnings_in, write_json


class TestSourcePriority:
    """Tests for which source wins."""

    def test_inline_json_beats_everything(
        self, env: dict[str, str], keys_path: Path, legacy_path: Path
    ) -> None:
        env["GOOGLE_DRIVE_OAUTH_CREDENTIALS_JSON"] = '{"client_id": "inline"}'
        env["GOOGLE_DRIVE_OAUTH_CREDENTIALS_JSON_BASE64"] = b64_json({"client_id": "b64"})
        write_json(keys_path, {"client_id": "file"})
        write_json(legacy_path, {"installed": {"client_id": "legacy"}})

        resolved = CredentialResolver(env.get).resolve()
        assert resolved.credentials.client_id == "inline"
        assert resolved.source is CredentialSource.ENV_JSON

    def test_base64_bypasses_file(self, env: dict[str, str], keys_path: Path) -> None:
        """With inline JSON unset, base64 wins over an existing file."""
        env["GOOGLE_DRIVE_OAUTH_CREDENTIALS_JSON_BASE64"] = b64_json({"client_id": "x"})
        write_json(keys_path, {"client_id": "file"})

        resolved = CredentialResolver(env.get).resolve()
        assert resolved.credentials.client_id == "x"
        assert resolved.source is CredentialSource.ENV_BASE64

    def test_file_beats_legacy(
        self, env: dict[str, str], keys_path: Path, legacy_path: Path, log_records: list[Any]
    ) -> None:
        write_json(keys_path, {"web": {"client_id": "file"}})
        write_json(legacy_path, {"installed": {"client_id": "legacy"}})

        resolved = CredentialResolver(env.get).resolve()
        assert resolved.credentials.client_id == "file"
        assert resolved.source is CredentialSource.FILE
        assert warnings_in(log_records) == []

    def test_legacy_used_when_file_absent(
        self, env: dict[str, str], legacy_path: Path, log_records: list[Any]
    ) -> None:
        """Legacy file resolves and warns exactly once."""
        write_json(
            legacy_path,
            {"installed": {"client_id": "old", "client_secret": "s", "redirect_uris": ["r"]}},
        )

        resolved = CredentialResolver(env.get).resolve()
        assert resolved.credentials == OAuthCredentials("old", "s", ["r"])
        assert resolved.source is CredentialSource.LEGACY_FILE
        assert len(warnings_in(log_records)) == 1


class TestFailureHandling:
    """Tests for the fallback rules on broken sources."""

    def test_inline_invalid_json_does_not_fall_through(
        self, env: dict[str, str], keys_path: Path
    ) -> None:
        """Bad inline JSON is fatal even if a valid file exists."""
        env["GOOGLE_DRIVE_OAUTH_CREDENTIALS_JSON"] = "{not json"
        write_json(keys_path, {"client_id": "file"})

        with pytest.raises(InvalidJSONError) as exc_info:
            CredentialResolver(env.get).resolve()
        assert "GOOGLE_DRIVE_OAUTH_CREDENTIALS_JSON" in str(exc_info.value)

    def test_inline_unknown_shape_is_fatal(self, env: dict[str, str], keys_path: Path) -> None:
        env["GOOGLE_DRIVE_OAUTH_CREDENTIALS_JSON"] = '{"type": "service_account"}'
        write_json(keys_path, {"client_id": "file"})

        with pytest.raises(InvalidFormatError):
            CredentialResolver(env.get).resolve()

    def test_invalid_base64_is_fatal(self, env: dict[str, str], keys_path: Path) -> None:
        env["GOOGLE_DRIVE_OAUTH_CREDENTIALS_BASE64"] = "@@@"
        write_json(keys_path, {"client_id": "file"})

        with pytest.raises(InvalidEncodingError):
            CredentialResolver(env.get).resolve()

    def test_malformed_file_falls_back_to_legacy(
        self, env: dict[str, str], keys_path: Path, legacy_path: Path
    ) -> None:
        keys_path.write_text("{broken")
        write_json(legacy_path, {"web": {"client_id": "legacy"}})

        resolved = CredentialResolver(env.get).resolve()
        assert resolved.source is CredentialSource.LEGACY_FILE

    def test_nothing_available(self, env: dict[str, str], keys_path: Path) -> None:
        """Exhausting all sources reports remediation and the file error."""
        with pytest.raises(ResolutionFailedError) as exc_info:
            CredentialResolver(env.get).resolve()

        error = exc_info.value
        assert "GOOGLE_DRIVE_OAUTH_CREDENTIALS_JSON" in error.remediation
        assert "GOOGLE_DRIVE_OAUTH_CREDENTIALS_BASE64" in error.remediation
        assert str(keys_path) in error.remediation
        assert "No such file or directory" in error.original_error
        assert "Original error: " in str(error)

    def test_original_error_is_from_primary_file(
        self, env: dict[str, str], keys_path: Path, legacy_path: Path
    ) -> None:
        """The legacy failure is not what gets reported."""
        keys_path.write_text("{broken")
        write_json(legacy_path, {"client_id": "direct-not-allowed"})

        with pytest.raises(ResolutionFailedError) as exc_info:
            CredentialResolver(env.get).resolve()
        assert exc_info.value.original_error.startswith(f"Invalid JSON in {keys_path}")

    def test_each_call_reads_sources_again(self, env: dict[str, str], keys_path: Path) -> None:
        """No caching between calls."""
        resolver = CredentialResolver(env.get)
        write_json(keys_path, {"client_id": "one"})
        first = resolver.resolve().credentials
        write_json(keys_path, {"client_id": "two"})
        second = resolver.resolve().credentials

        assert first.client_id == "one"
        assert second.client_id == "two"
        assert first is not second


class TestCustomStages:
    """Tests for running the pipeline over injected stages."""

    def test_stops_on_first_resolved(self) -> None:
        calls: list[str] = []

        def reader(name: str, result: SourceResult):
            def read(_getenv):
                calls.append(name)
                return result

            return read

        stages = [
            Stage(CredentialSource.ENV_JSON, reader("a", SourceResult.unavailable("unset"))),
            Stage(CredentialSource.FILE, reader("b", SourceResult.resolved(OAuthCredentials("b")))),
            Stage(CredentialSource.LEGACY_FILE, reader("c", SourceResult.unavailable("unused"))),
        ]
        resolved = CredentialResolver({}.get, stages=stages).resolve()
        assert resolved.credentials.client_id == "b"
        assert calls == ["a", "b"]

    def test_falls_back_only_where_configured(self) -> None:
        error = InvalidFormatError("bad")
        stages = [
            Stage(CredentialSource.FILE, lambda _g: SourceResult.failed(error), falls_back=True),
            Stage(CredentialSource.ENV_JSON, lambda _g: SourceResult.failed(error)),
        ]
        with pytest.raises(InvalidFormatError):
            CredentialResolver({}.get, stages=stages).resolve()


class TestResolveClient:
    """Tests for resolve_client."""

    def test_builds_client_config(self, env: dict[str, str], keys_path: Path) -> None:
        write_json(
            keys_path,
            {"installed": {"client_id": "c", "client_secret": "s", "redirect_uris": ["a", "b"]}},
        )
        resolved = resolve_client(CredentialResolver(env.get))

        assert resolved.credentials.redirect_uris == ["a", "b"]
        assert resolved.config.client_id == "c"
        assert resolved.config.client_secret == "s"
        assert resolved.config.redirect_uri == "a"
        assert resolved.source is CredentialSource.FILE

    def test_missing_redirect_uris_and_secret(self, env: dict[str, str], legacy_path: Path) -> None:
        """Legacy sections without redirect URIs still get the default one."""
        write_json(legacy_path, {"installed": {"client_id": "c", "client_secret": ""}})
        config = resolve_client(CredentialResolver(env.get)).config

        assert config.client_secret is None
        assert config.redirect_uri == "http://localhost:3000/oauth2callback"

    def test_wraps_errors(self, env: dict[str, str]) -> None:
        env["GOOGLE_DRIVE_OAUTH_CREDENTIALS_JSON"] = "nope"
        with pytest.raises(CredentialsLoadError) as exc_info:
            resolve_client(CredentialResolver(env.get))

        error = exc_info.value
        assert str(error).startswith("Error loading OAuth keys: Invalid JSON in ")
        assert isinstance(error.cause, InvalidJSONError)
        assert error.__cause__ is error.cause

    def test_wraps_resolution_failure(self, env: dict[str, str]) -> None:
        with pytest.raises(CredentialsLoadError) as exc_info:
            resolve_client(CredentialResolver(env.get))
        assert isinstance(exc_info.value.cause, ResolutionFailedError)

    def test_reads_process_environment_by_default(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GOOGLE_DRIVE_OAUTH_CREDENTIALS_JSON", '{"client_id": "from-os"}')
        assert resolve_client().config.client_id == "from-os"


class TestResolveMinimal:
    """Tests for resolve_minimal."""

    def test_returns_id_and_secret(self, env: dict[str, str]) -> None:
        env["GOOGLE_DRIVE_OAUTH_CREDENTIALS_JSON"] = '{"client_id": "c", "client_secret": "s"}'
        secrets = resolve_minimal(CredentialResolver(env.get))
        assert secrets.to_dict() == {"client_id": "c", "client_secret": "s"}

    def test_secret_optional(self, env: dict[str, str]) -> None:
        env["GOOGLE_DRIVE_OAUTH_CREDENTIALS_JSON"] = '{"client_id": "c"}'
        assert resolve_minimal(CredentialResolver(env.get)).client_secret is None

    def test_empty_client_id(self, env: dict[str, str]) -> None:
        """A direct document with an empty client_id is rejected."""
        env["GOOGLE_DRIVE_OAUTH_CREDENTIALS_JSON"] = '{"client_id": ""}'
        with pytest.raises(CredentialsLoadError) as exc_info:
            resolve_minimal(CredentialResolver(env.get))

        assert isinstance(exc_info.value.cause, MissingClientIDError)
        assert str(exc_info.value) == (
            "Error loading credentials: Client ID missing in credentials."
        )

    def test_legacy_section_without_client_id(
        self, env: dict[str, str], legacy_path: Path
    ) -> None:
        write_json(legacy_path, {"web": {"client_secret": "s"}})
        with pytest.raises(CredentialsLoadError) as exc_info:
            resolve_minimal(CredentialResolver(env.get))
        assert isinstance(exc_info.value.cause, MissingClientIDError)
