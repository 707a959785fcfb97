"""Equipment photo storage and background loading.

Each photo is a separate file named ``<uuid><ext>`` inside a private
directory. Equipment records hold that filename only, never a path.
"""

import asyncio
import itertools
import logging
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Callable
from uuid import uuid4

from PIL import Image, ImageOps

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp"}

JPEG_QUALITY = 80
THUMBNAIL_MAX_SIZE = (200, 200)


def _to_rgb(img: Image.Image) -> Image.Image:
    """Flatten transparency onto white so the image can be stored as JPEG."""
    if img.mode in ("RGBA", "LA", "P"):
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        background = Image.new("RGB", img.size, (255, 255, 255))
        background.paste(img, mask=img.split()[-1])
        return background
    if img.mode != "RGB":
        return img.convert("RGB")
    return img


class ImageStore:
    """File-per-image storage area."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def path(self, name: str) -> Path:
        """Resolve an image name to its file path.

        Raises:
            ValueError: If ``name`` is not a bare filename
        """
        if not name or name in (".", "..") or Path(name).name != name:
            raise ValueError(f"Invalid image name: {name!r}")
        return self.root / name

    def exists(self, name: str) -> bool:
        try:
            return self.path(name).is_file()
        except ValueError:
            return False

    def save(self, data: bytes, extension: str = ".jpg") -> str:
        """Write raw image bytes under a fresh name and return the name."""
        extension = extension.lower()
        if not extension.startswith("."):
            extension = "." + extension
        if extension not in IMAGE_EXTENSIONS:
            raise ValueError(f"Unsupported image extension: {extension}")

        self.root.mkdir(parents=True, exist_ok=True)
        name = f"{uuid4().hex}{extension}"
        self.path(name).write_bytes(data)
        logger.debug("Saved image %s (%d bytes)", name, len(data))
        return name

    def save_image(self, img: Image.Image, quality: int = JPEG_QUALITY) -> str:
        """Encode a Pillow image as JPEG and store it."""
        buffer = BytesIO()
        _to_rgb(img).save(buffer, format="JPEG", quality=quality, optimize=True)
        return self.save(buffer.getvalue(), ".jpg")

    def import_file(self, source: Path | BinaryIO) -> str:
        """Copy an image into the store, re-encoded as JPEG.

        Args:
            source: Path or binary file object of any format Pillow reads

        Raises:
            ValueError: If the source is not a readable image
        """
        try:
            with Image.open(source) as img:
                img = ImageOps.exif_transpose(img)
                return self.save_image(img)
        except OSError as e:
            raise ValueError(f"Not a readable image: {source}") from e

    def import_bytes(self, data: bytes) -> str:
        """Store encoded image bytes, re-encoded as JPEG."""
        return self.import_file(BytesIO(data))

    def read(self, name: str) -> bytes | None:
        """Raw bytes of an image, or None when missing."""
        path = self.path(name)
        if not path.is_file():
            return None
        return path.read_bytes()

    def delete(self, name: str) -> bool:
        """Remove an image file. Returns whether a file was removed."""
        path = self.path(name)
        if not path.is_file():
            return False
        path.unlink()
        logger.debug("Deleted image %s", name)
        return True

    def decode(
        self, name: str, max_size: tuple[int, int] | None = None
    ) -> Image.Image | None:
        """Decode an image into memory.

        Returns None when the file is missing or cannot be decoded; callers
        show a placeholder in that case.
        """
        try:
            path = self.path(name)
        except ValueError:
            logger.warning("Refusing to load image with invalid name %r", name)
            return None

        if not path.is_file():
            logger.warning("Image file does not exist: %s", name)
            return None

        try:
            with Image.open(path) as img:
                img.load()
                img = ImageOps.exif_transpose(img)
                if max_size:
                    img.thumbnail(max_size, Image.Resampling.LANCZOS)
                return img.copy()
        except OSError as e:
            logger.warning("Could not decode image %s: %s", name, e)
            return None


class ImageLoader:
    """Decode equipment photos off the event loop.

    Loads are keyed by equipment id. A result is cached only if it answers
    the most recent request for that id and the equipment still exists.
    A superseded load still returns its image to the caller; it just does
    not replace what the cache shows.
    """

    def __init__(
        self,
        store: ImageStore,
        is_live: Callable[[str], bool] | None = None,
        max_size: tuple[int, int] | None = THUMBNAIL_MAX_SIZE,
    ):
        self.store = store
        self.is_live = is_live or (lambda equipment_id: True)
        self.max_size = max_size
        self.images: dict[str, Image.Image | None] = {}
        self._pending: dict[str, int] = {}
        self._tokens = itertools.count(1)

    def get(self, equipment_id: str) -> Image.Image | None:
        """Last applied image for an equipment, or None for a placeholder."""
        return self.images.get(equipment_id)

    def is_loading(self, equipment_id: str) -> bool:
        return equipment_id in self._pending

    def forget(self, equipment_id: str) -> None:
        """Drop any state for an equipment; in-flight results are not cached."""
        self._pending.pop(equipment_id, None)
        self.images.pop(equipment_id, None)

    async def load(self, equipment_id: str, image_name: str | None) -> Image.Image | None:
        """Load the photo for an equipment.

        Returns the decoded image, or None if there is no image, decoding
        failed, or the equipment was removed while loading.
        """
        token = next(self._tokens)
        self._pending[equipment_id] = token

        image = None
        if image_name:
            image = await asyncio.to_thread(self.store.decode, image_name, self.max_size)

        latest = self._pending.get(equipment_id) == token
        if latest:
            del self._pending[equipment_id]

        if not self.is_live(equipment_id):
            logger.debug("Discarding image load for removed equipment %s", equipment_id)
            self.images.pop(equipment_id, None)
            return None

        if not latest:
            logger.debug("Not caching superseded image load for %s", equipment_id)
            return image

        self.images[equipment_id] = image
        return image
