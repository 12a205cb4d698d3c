"""Where credential files are looked up, and the help text shown when none is found."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

EnvReader = Callable[[str], str | None]

CREDENTIALS_JSON_ENV = "GOOGLE_DRIVE_OAUTH_CREDENTIALS_JSON"
CREDENTIALS_BASE64_ENVS = (
    "GOOGLE_DRIVE_OAUTH_CREDENTIALS_JSON_BASE64",
    "GOOGLE_DRIVE_OAUTH_CREDENTIALS_BASE64",
)
CREDENTIALS_PATH_ENV = "GOOGLE_DRIVE_OAUTH_CREDENTIALS"
LEGACY_PATH_ENV = "GOOGLE_CLIENT_SECRET_PATH"

DEFAULT_KEYS_PATH = Path.home() / ".config" / "google-drive-mcp" / "gcp-oauth.keys.json"
DEFAULT_LEGACY_PATH = Path("client_secret.json")


def get_keys_file_path(getenv: EnvReader) -> Path:
    """Return the primary credentials file path (env override, else the config dir)."""
    override = getenv(CREDENTIALS_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return DEFAULT_KEYS_PATH


def get_legacy_keys_file_path(getenv: EnvReader) -> Path:
    """Return the legacy client_secret.json path."""
    override = getenv(LEGACY_PATH_ENV)
    if override:
        return Path(override).expanduser()
    return DEFAULT_LEGACY_PATH


def generate_credentials_error_message(getenv: EnvReader) -> str:
    """Build the remediation text listing every place credentials are looked up."""
    keys_path = get_keys_file_path(getenv)
    legacy_path = get_legacy_keys_file_path(getenv)
    base64_vars = " or ".join(CREDENTIALS_BASE64_ENVS)

    lines = [
        "OAuth credentials not found. Provide them in one of these ways (highest priority first):",
        "",
        f"  1. Set {CREDENTIALS_JSON_ENV} to the JSON contents of your OAuth client file",
        f"  2. Set {base64_vars} to the base64-encoded JSON",
        f"  3. Save the file to {keys_path}",
        f"     (set {CREDENTIALS_PATH_ENV} to use a different location)",
        f"  4. Deprecated: {legacy_path} (override with {LEGACY_PATH_ENV})",
        "",
        "Accepted JSON formats:",
        '  {"installed": {"client_id": ..., "client_secret": ..., "redirect_uris": [...]}}',
        '  {"web": {"client_id": ..., "client_secret": ..., "redirect_uris": [...]}}',
        '  {"client_id": ..., "client_secret": ..., "redirect_uris": [...]}',
        "",
        "To create credentials, open the Google Cloud Console, go to",
        "APIs & Services > Credentials, and create an OAuth client ID (Desktop app).",
    ]
    return "\n".join(lines)
