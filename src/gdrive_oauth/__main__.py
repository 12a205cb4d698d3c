"""CLI entry point for gdrive_oauth.

Usage:
    python -m gdrive_oauth check       # Resolve credentials and report where they came from
    python -m gdrive_oauth locations   # List every source in priority order
"""

import argparse
import json
import os
import sys

from gdrive_oauth.config import get_settings
from gdrive_oauth.errors import CredentialsError
from gdrive_oauth.logging import configure_logging
from gdrive_oauth.paths import (
    CREDENTIALS_BASE64_ENVS,
    CREDENTIALS_JSON_ENV,
    CREDENTIALS_PATH_ENV,
    LEGACY_PATH_ENV,
    EnvReader,
    get_keys_file_path,
    get_legacy_keys_file_path,
)
from gdrive_oauth.resolver import CredentialResolver, resolve_client


def cmd_check(args: argparse.Namespace, getenv: EnvReader) -> int:
    """Resolve credentials and print a summary without the secret."""
    try:
        resolved = resolve_client(CredentialResolver(getenv))
    except CredentialsError as e:
        print(str(e), file=sys.stderr)
        return 1

    summary = {
        "source": resolved.source.value,
        "client_id": resolved.config.client_id,
        "has_client_secret": resolved.config.client_secret is not None,
        "redirect_uri": resolved.config.redirect_uri,
        "redirect_uri_count": len(resolved.credentials.redirect_uris or []),
    }
    if args.json:
        print(json.dumps(summary, indent=2))
    else:
        print(f"Credentials loaded from: {summary['source']}")
        print(f"Client ID: {summary['client_id']}")
        print(f"Client secret: {'present' if summary['has_client_secret'] else 'absent'}")
        print(f"Redirect URI: {summary['redirect_uri']}")
    return 0


def cmd_locations(_args: argparse.Namespace, getenv: EnvReader) -> int:
    """Print each credential source in the order it is tried."""
    keys_path = get_keys_file_path(getenv)
    legacy_path = get_legacy_keys_file_path(getenv)

    def _env_state(name: str) -> str:
        return "set" if getenv(name) else "not set"

    def _file_state(path: os.PathLike) -> str:
        return "exists" if os.path.isfile(path) else "missing"

    print(f"1. {CREDENTIALS_JSON_ENV} ({_env_state(CREDENTIALS_JSON_ENV)})")
    base64_states = ", ".join(f"{n} ({_env_state(n)})" for n in CREDENTIALS_BASE64_ENVS)
    print(f"2. {base64_states}")
    print(f"3. {keys_path} ({_file_state(keys_path)}; override with {CREDENTIALS_PATH_ENV})")
    print(
        f"4. {legacy_path} ({_file_state(legacy_path)}; deprecated, "
        f"override with {LEGACY_PATH_ENV})"
    )
    return 0


def main(argv: list[str] | None = None, getenv: EnvReader | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="gdrive-oauth",
        description="Inspect OAuth client credentials for the Google Drive MCP server",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Resolve credentials and show which source was used",
    )
    check_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the summary as JSON",
    )
    check_parser.set_defaults(func=cmd_check)

    locations_parser = subparsers.add_parser(
        "locations",
        help="List credential sources in priority order",
    )
    locations_parser.set_defaults(func=cmd_locations)

    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(json_logs=settings.use_json_logs, log_level=settings.log_level)

    return args.func(args, getenv or os.environ.get)


if __name__ == "__main__":
    sys.exit(main())
