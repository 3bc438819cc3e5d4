"""Resolve an employee email address to a profile picture URL."""

from __future__ import annotations

import hashlib
import os
from urllib.parse import quote


class ImageRetriever:
    """Format a photo URL from a template.

    The template may contain ``{email}`` (URL-quoted address) and/or
    ``{email_hash}`` (MD5 of the normalized address, Gravatar style).
    """

    def __init__(self, url_template: str | None = None):
        self.url_template = url_template

    @classmethod
    def from_env(cls) -> ImageRetriever:
        return cls(os.environ.get("ORG_GRAPH_PHOTO_URL_TEMPLATE") or None)

    def get_image_url(self, email: str | None) -> str | None:
        if not self.url_template or not email or not email.strip():
            return None
        normalized = email.strip().lower()
        email_hash = hashlib.md5(normalized.encode("utf-8")).hexdigest()
        return self.url_template.format(
            email=quote(email.strip(), safe="@"),
            email_hash=email_hash,
        )
