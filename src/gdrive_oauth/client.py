"""OAuth client configuration handed to consumers of resolved credentials."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from google_auth_oauthlib.flow import Flow

from gdrive_oauth.credentials import OAuthCredentials

GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"

DRIVE_SCOPES = [
    "https://www.googleapis.com/auth/drive",
]


@dataclass
class ClientSecrets:
    client_id: str
    client_secret: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"client_id": self.client_id, "client_secret": self.client_secret}


@dataclass
class OAuthClientConfig:
    """Client id, optional secret and the single redirect URI used for auth.

    Attributes:
        client_id: OAuth client id.
        client_secret: OAuth client secret, None for public clients.
        redirect_uri: Redirect URI registered for this client.
    """

    client_id: str
    client_secret: str | None
    redirect_uri: str

    @classmethod
    def from_credentials(cls, credentials: OAuthCredentials) -> OAuthClientConfig:
        """Use the first redirect URI, and drop an empty secret."""
        return cls(
            client_id=credentials.client_id,
            client_secret=credentials.client_secret or None,
            redirect_uri=credentials.default_redirect_uri,
        )

    def to_client_config(self) -> dict[str, Any]:
        """Render as a Google client-secrets dictionary (``installed`` layout)."""
        section: dict[str, Any] = {
            "client_id": self.client_id,
            "auth_uri": GOOGLE_AUTH_URI,
            "token_uri": GOOGLE_TOKEN_URI,
            "redirect_uris": [self.redirect_uri],
        }
        if self.client_secret:
            section["client_secret"] = self.client_secret
        return {"installed": section}

    def create_flow(self, scopes: list[str] | None = None) -> Flow:
        """Create an OAuth flow for this client. No request is made."""
        return Flow.from_client_config(
            self.to_client_config(),
            scopes=scopes or DRIVE_SCOPES,
            redirect_uri=self.redirect_uri,
        )
