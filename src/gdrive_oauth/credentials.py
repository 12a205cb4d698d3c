"""OAuth client credential record and the JSON shape normalizer.

Google issues OAuth client files in two wrapped layouts, ``{"installed": {...}}``
for desktop apps and ``{"web": {...}}`` for web apps. A flat layout with
``client_id`` at the top level is also accepted for hand-written configuration.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from gdrive_oauth.errors import InvalidFormatError, InvalidJSONError

DEFAULT_REDIRECT_URI = "http://localhost:3000/oauth2callback"

_WRAPPED_SHAPES = ("installed", "web")


@dataclass
class OAuthCredentials:
    """OAuth client credentials.

    Attributes:
        client_id: OAuth client id.
        client_secret: OAuth client secret, absent for some public clients.
        redirect_uris: Registered redirect URIs; the first one is the default.
    """

    client_id: str
    client_secret: str | None = None
    redirect_uris: list[str] | None = field(default_factory=lambda: [DEFAULT_REDIRECT_URI])

    @property
    def default_redirect_uri(self) -> str:
        """Return the first redirect URI, or the default when none are set."""
        if self.redirect_uris:
            return self.redirect_uris[0]
        return DEFAULT_REDIRECT_URI

    @classmethod
    def from_client_section(cls, section: Mapping[str, Any]) -> OAuthCredentials:
        """Create credentials from an ``installed`` or ``web`` section, as-is."""
        return cls(
            client_id=section.get("client_id", ""),
            client_secret=section.get("client_secret"),
            redirect_uris=section.get("redirect_uris"),
        )


def parse_credentials_object(data: Any) -> OAuthCredentials:
    """Normalize a decoded credentials document.

    Shapes are checked in order: ``installed``, ``web``, then a top-level
    ``client_id``. Only the flat shape gets the default redirect URI.

    Raises:
        InvalidFormatError: If the document matches none of the shapes.
    """
    if not isinstance(data, Mapping):
        raise InvalidFormatError(
            f"Invalid credentials format. Expected a JSON object, got {type(data).__name__}."
        )

    for key in _WRAPPED_SHAPES:
        section = data.get(key)
        if section is not None:
            if not isinstance(section, Mapping):
                raise InvalidFormatError(
                    f'Invalid credentials format. "{key}" must be a JSON object.'
                )
            return OAuthCredentials.from_client_section(section)

    if "client_id" in data:
        return OAuthCredentials(
            client_id=data["client_id"],
            client_secret=data.get("client_secret"),
            redirect_uris=(
                data["redirect_uris"]
                if data.get("redirect_uris") is not None
                else [DEFAULT_REDIRECT_URI]
            ),
        )

    raise InvalidFormatError(
        'Invalid credentials file format. Expected either "installed", "web" object '
        "or direct client_id field."
    )


def parse_credentials_content(content: str, source: str) -> OAuthCredentials:
    """Decode JSON text from ``source`` and normalize it.

    Raises:
        InvalidJSONError: If ``content`` is not valid JSON.
        InvalidFormatError: If the JSON matches none of the accepted shapes.
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise InvalidJSONError(source, str(e)) from e
    return parse_credentials_object(data)
