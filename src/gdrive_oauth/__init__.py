"""OAuth client credential resolution for the Google Drive MCP server.

Credentials are looked up, highest priority first, in
``GOOGLE_DRIVE_OAUTH_CREDENTIALS_JSON``, a base64 variant of it, the file at
``GOOGLE_DRIVE_OAUTH_CREDENTIALS`` and finally a legacy ``client_secret.json``.

Example:
    from gdrive_oauth import resolve_client

    resolved = resolve_client()
    flow = resolved.config.create_flow()
"""

from gdrive_oauth.client import ClientSecrets, OAuthClientConfig
from gdrive_oauth.credentials import (
    DEFAULT_REDIRECT_URI,
    OAuthCredentials,
    parse_credentials_content,
    parse_credentials_object,
)
from gdrive_oauth.errors import (
    CredentialsError,
    CredentialsLoadError,
    InvalidEncodingError,
    InvalidFormatError,
    InvalidJSONError,
    MissingClientIDError,
    ResolutionFailedError,
)
from gdrive_oauth.resolver import (
    CredentialResolver,
    ResolvedClient,
    ResolvedCredentials,
    resolve_client,
    resolve_minimal,
)
from gdrive_oauth.sources import CredentialSource

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_REDIRECT_URI",
    "ClientSecrets",
    "CredentialResolver",
    "CredentialSource",
    "CredentialsError",
    "CredentialsLoadError",
    "InvalidEncodingError",
    "InvalidFormatError",
    "InvalidJSONError",
    "MissingClientIDError",
    "OAuthClientConfig",
    "OAuthCredentials",
    "ResolutionFailedError",
    "ResolvedClient",
    "ResolvedCredentials",
    "parse_credentials_content",
    "parse_credentials_object",
    "resolve_client",
    "resolve_minimal",
]
