"""Tests for equipment photo storage and loading."""

import asyncio
from io import BytesIO

import pytest
from PIL import Image

from gymbook.storage.images import ImageLoader, ImageStore


def _png_bytes(size=(400, 300), mode="RGBA") -> bytes:
    buffer = BytesIO()
    Image.new(mode, size, (255, 0, 0, 128) if mode == "RGBA" else (255, 0, 0)).save(
        buffer, format="PNG"
    )
    return buffer.getvalue()


class TestImageStore:
    """Tests for ImageStore."""

    def test_import_bytes_stores_jpeg(self, image_store):
        name = image_store.import_bytes(_png_bytes())
        assert name.endswith(".jpg")
        assert image_store.exists(name)
        with Image.open(image_store.path(name)) as img:
            assert img.format == "JPEG"
            assert img.mode == "RGB"

    def test_names_are_unique(self, image_store):
        data = _png_bytes(mode="RGB")
        assert image_store.import_bytes(data) != image_store.import_bytes(data)

    def test_import_file(self, image_store, tmp_path):
        source = tmp_path / "photo.png"
        source.write_bytes(_png_bytes(mode="RGB"))
        name = image_store.import_file(source)
        assert image_store.read(name)

    def test_import_rejects_non_image(self, image_store):
        with pytest.raises(ValueError):
            image_store.import_bytes(b"definitely not an image")

    @pytest.mark.parametrize("name", ["", "..", "../secret.jpg", "sub/dir.jpg"])
    def test_path_rejects_non_filenames(self, image_store, name):
        with pytest.raises(ValueError):
            image_store.path(name)

    def test_unsupported_extension(self, image_store):
        with pytest.raises(ValueError):
            image_store.save(b"data", ".exe")

    def test_delete(self, image_store):
        name = image_store.import_bytes(_png_bytes())
        assert image_store.delete(name)
        assert not image_store.exists(name)
        assert not image_store.delete(name)

    def test_decode_thumbnail(self, image_store):
        name = image_store.import_bytes(_png_bytes(size=(800, 400)))
        img = image_store.decode(name, max_size=(200, 200))
        assert img.size == (200, 100)

    def test_decode_missing_returns_none(self, image_store):
        assert image_store.decode("missing.jpg") is None
        assert image_store.decode("../escape.jpg") is None

    def test_decode_corrupt_returns_none(self, image_store):
        name = image_store.save(b"garbage", ".jpg")
        assert image_store.decode(name) is None


class TestImageLoader:
    """Tests for ImageLoader."""

    @pytest.mark.asyncio
    async def test_load(self, image_store):
        name = image_store.import_bytes(_png_bytes())
        loader = ImageLoader(image_store)

        img = await loader.load("e1", name)
        assert img is not None
        assert loader.get("e1") is img
        assert not loader.is_loading("e1")

    @pytest.mark.asyncio
    async def test_no_image_gives_placeholder(self, image_store):
        loader = ImageLoader(image_store)
        assert await loader.load("e1", None) is None
        assert loader.get("e1") is None

    @pytest.mark.asyncio
    async def test_removed_equipment_result_discarded(self, image_store):
        name = image_store.import_bytes(_png_bytes())
        loader = ImageLoader(image_store, is_live=lambda equipment_id: False)

        assert await loader.load("e1", name) is None
        assert "e1" not in loader.images

    @pytest.mark.asyncio
    async def test_superseded_load_returns_image_but_is_not_cached(self, image_store):
        first = image_store.import_bytes(_png_bytes(size=(50, 50)))
        second = image_store.import_bytes(_png_bytes(size=(60, 60)))
        loader = ImageLoader(image_store, max_size=None)

        stale, fresh = await asyncio.gather(loader.load("e1", first), loader.load("e1", second))
        assert stale.size == (50, 50)
        assert fresh.size == (60, 60)
        assert loader.get("e1") is fresh

    @pytest.mark.asyncio
    async def test_overlapping_loads_of_same_photo_both_return_it(self, image_store):
        name = image_store.import_bytes(_png_bytes())
        loader = ImageLoader(image_store)

        results = await asyncio.gather(loader.load("e1", name), loader.load("e1", name))
        assert all(img is not None for img in results)
        assert loader.get("e1") is results[1]

    @pytest.mark.asyncio
    async def test_forget_keeps_in_flight_load_out_of_cache(self, image_store):
        name = image_store.import_bytes(_png_bytes())
        loader = ImageLoader(image_store)

        task = asyncio.create_task(loader.load("e1", name))
        await asyncio.sleep(0)
        assert loader.is_loading("e1")
        loader.forget("e1")

        assert await task is not None
        assert loader.get("e1") is None

    @pytest.mark.asyncio
    async def test_equipment_removed_while_loading(self, image_store):
        name = image_store.import_bytes(_png_bytes())
        live = {"e1"}
        loader = ImageLoader(image_store, is_live=lambda equipment_id: equipment_id in live)

        task = asyncio.create_task(loader.load("e1", name))
        await asyncio.sleep(0)
        live.discard("e1")
        loader.forget("e1")

        assert await task is None
        assert "e1" not in loader.images
