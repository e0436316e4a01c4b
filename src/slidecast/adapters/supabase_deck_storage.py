"""Supabase Storage bucket for published deck pages."""

import asyncio
from dataclasses import dataclass

from supabase import Client

from slidecast.services.decks import DeckStorage

PNG_CONTENT_TYPE = "image/png"


@dataclass
class SupabaseDeckStorage(DeckStorage):
    """Upload page images to a public Supabase Storage bucket."""

    client: Client
    bucket: str = "images"

    async def upload_png(self, path: str, data: bytes) -> None:
        """Upload a PNG with upsert so re-ingesting a deck overwrites pages."""
        await asyncio.to_thread(self._upload_sync, path, data)

    def public_url(self, path: str) -> str:
        """Return the public URL for an object in the bucket."""
        return self.client.storage.from_(self.bucket).get_public_url(path)

    def _upload_sync(self, path: str, data: bytes) -> None:
        self.client.storage.from_(self.bucket).upload(
            path=path,
            file=data,
            file_options={"content-type": PNG_CONTENT_TYPE, "upsert": "true"},
        )
