"""
Photo references attached to a summary, and their resolution for export.

A PhotoRef keeps the full content loader for its file (never just the name),
so both export adapters can embed the image later in the session.
"""
import asyncio
import io
import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable, Iterable, List, Optional

from PIL import Image, UnidentifiedImageError

from engagement.errors import PhotoReadError

logger = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[bytes]]


def _guess_type(name: str) -> str:
    return mimetypes.guess_type(name)[0] or "application/octet-stream"


@dataclass(frozen=True, eq=False)
class PhotoRef:
    """Opaque handle to a user-supplied image file"""
    name: str
    content_type: str = "application/octet-stream"
    _loader: Optional[Loader] = field(default=None, repr=False)

    @classmethod
    def from_bytes(cls, name: str, data: bytes, content_type: Optional[str] = None) -> "PhotoRef":
        """Wrap content that was already read (e.g. an upload, before its temp file closes)."""
        async def _load() -> bytes:
            return data

        return cls(name=name, content_type=content_type or _guess_type(name), _loader=_load)

    @classmethod
    def from_path(cls, path, name: Optional[str] = None) -> "PhotoRef":
        """Reference a file on disk; it is read lazily, off the event loop."""
        path = Path(path)

        async def _load() -> bytes:
            return await asyncio.to_thread(path.read_bytes)

        return cls(name=name or path.name, content_type=_guess_type(path.name), _loader=_load)

    async def read(self) -> bytes:
        if self._loader is None:
            raise PhotoReadError(self.name, "no content attached")
        try:
            return await self._loader()
        except OSError as e:
            raise PhotoReadError(self.name, str(e)) from e


@dataclass(frozen=True)
class PhotoPage:
    """A resolved photo, ready to be placed on its own export page"""
    caption: str
    data: bytes
    source: str  # "general" or "recommendation-<n>"


def _ensure_decodable(name: str, data: bytes) -> None:
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        raise PhotoReadError(name, "not a readable image") from e


async def _resolve(photo: PhotoRef, source: str) -> PhotoPage:
    data = await photo.read()
    _ensure_decodable(photo.name, data)
    return PhotoPage(caption=photo.name, data=data, source=source)


async def collect_photo_pages(general_photos: Iterable[PhotoRef], recommendations: Iterable) -> List[PhotoPage]:
    """
    Resolve every photo in export order: general photos first, then each
    recommendation's photos in recommendation order. Reads are awaited one at
    a time; the first failure aborts the whole export.
    """
    pages: List[PhotoPage] = []
    for photo in general_photos:
        pages.append(await _resolve(photo, "general"))
    for index, rec in enumerate(recommendations, start=1):
        for photo in rec.photos:
            pages.append(await _resolve(photo, f"recommendation-{index}"))
    logger.info(f"Resolved {len(pages)} photo(s) for export")
    return pages
