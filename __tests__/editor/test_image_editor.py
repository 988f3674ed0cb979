"""Tests for image upload validation, decoding and the image block editor."""
import asyncio
import re
import pytest
from memoryboard.block import create_block
from memoryboard.config import EditorSettings
from memoryboard.editor import (
    FileValidationError,
    ImageEditor,
    ImageFile,
    ImageProcessingError,
    process_file_to_image,
    validate_image_file,
)


PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24
JPEG = b"\xff\xd8\xff\xe0" + b"\x00" * 24
GIF = b"GIF89a" + b"\x00" * 24
WEBP = b"RIFF\x00\x00\x00\x00WEBPVP8 " + b"\x00" * 16


def image_block(*names):
    images = [
        {"id": f"img_{i}", "url": "data:image/png;base64,AAAA", "name": name, "alt": "", "caption": ""}
        for i, name in enumerate(names)
    ]
    return create_block("image").with_props(images=images)


class TestValidateImageFile:
    """Tests for per-file upload checks."""

    def test_valid_file(self):
        result = validate_image_file(ImageFile("cat.png", "image/png", PNG))
        assert result.valid
        assert result.errors == []

    def test_disallowed_type(self):
        result = validate_image_file(ImageFile("doc.pdf", "application/pdf", b"%PDF"))
        assert result.errors == ["File type application/pdf is not allowed. Use JPG, PNG, WebP, or GIF."]

    def test_too_large(self):
        result = validate_image_file(ImageFile("big.png", "image/png", PNG, size=2 * 1024 * 1024))
        assert result.errors == ["File size (2048KB) exceeds limit (1024KB)"]

    def test_extension_mismatch(self):
        result = validate_image_file(ImageFile("photo.jpg", "image/png", PNG))
        assert result.errors == ["File extension .jpg doesn't match file type"]

    def test_jpeg_accepts_both_extensions(self):
        assert validate_image_file(ImageFile("a.jpg", "image/jpeg", JPEG)).valid
        assert validate_image_file(ImageFile("a.JPEG", "image/jpeg", JPEG)).valid

    def test_long_filename(self):
        result = validate_image_file(ImageFile("a" * 300 + ".png", "image/png", PNG))
        assert result.errors == ["Filename is too long"]

    @pytest.mark.parametrize("name", ["shell.php.png", "javascript.png", "my-script.gif"])
    def test_suspicious_filename(self, name):
        mime = "image/gif" if name.endswith(".gif") else "image/png"
        result = validate_image_file(ImageFile(name, mime, PNG))
        assert "Filename contains suspicious content" in result.errors

    def test_all_failures_reported(self):
        result = validate_image_file(ImageFile("x.exe.jpg", "image/png", PNG, size=5 * 1024 * 1024))
        assert len(result.errors) == 3

    def test_size_limit_from_settings(self, monkeypatch):
        from memoryboard import config
        monkeypatch.setenv("MEMORYBOARD_MAX_IMAGE_SIZE", "10")
        config.reset_settings()
        result = validate_image_file(ImageFile("cat.png", "image/png", PNG))
        assert result.errors == ["File size (0KB) exceeds limit (0KB)"]

    def test_error_message_format(self):
        error = FileValidationError(1, "notes.bin", ["first", "second"])
        assert str(error) == "File 2 (notes.bin): first, second"


class TestProcessFile:
    """Tests for decoding files into image descriptors."""

    @pytest.mark.asyncio
    async def test_descriptor(self):
        image = await process_file_to_image(ImageFile("cat.png", "image/png", PNG))
        assert re.fullmatch(r"img_\d+_[a-z0-9]{9}", image.id)
        assert image.url.startswith("data:image/png;base64,")
        assert image.name == "cat.png"
        assert image.size == len(PNG)
        assert image.type == "image/png"
        assert image.alt == "" and image.caption == ""
        assert image.uploaded_at.endswith("Z")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name,mime,data", [
        ("a.jpg", "image/jpeg", JPEG),
        ("a.gif", "image/gif", GIF),
        ("a.webp", "image/webp", WEBP),
    ])
    async def test_signatures(self, name, mime, data):
        image = await process_file_to_image(ImageFile(name, mime, data))
        assert image.url.startswith(f"data:{mime};base64,")

    @pytest.mark.asyncio
    async def test_bad_bytes(self):
        with pytest.raises(ImageProcessingError, match="Invalid image data"):
            await process_file_to_image(ImageFile("fake.png", "image/png", b"not a png"))

    @pytest.mark.asyncio
    async def test_empty_file(self):
        with pytest.raises(ImageProcessingError, match="Failed to read file"):
            await process_file_to_image(ImageFile("empty.png", "image/png", b""))

    def test_from_path(self, tmp_path):
        path = tmp_path / "cat.png"
        path.write_bytes(PNG)
        file = ImageFile.from_path(path)
        assert file.type == "image/png"
        assert file.size == len(PNG)


class TestImageEditorUpload:
    """Tests for batch uploads into an image block."""

    @pytest.mark.asyncio
    async def test_batch_with_one_rejected_file(self):
        changes = []
        editor = ImageEditor(create_block("image"), on_change=changes.append)
        result = await editor.add_files([
            ImageFile("a.png", "image/png", PNG),
            ImageFile("notes.bin", "application/octet-stream", b"\x00\x01"),
            ImageFile("b.gif", "image/gif", GIF),
        ])
        assert len(result.images) == 2
        assert len(result.errors) == 1
        assert result.errors[0].startswith("File 2 (notes.bin): File type application/octet-stream is not allowed")
        assert len(changes) == 1
        stored = changes[0].props["images"]
        assert [img["name"] for img in stored] == ["a.png", "b.gif"]
        assert editor.upload_errors == result.errors
        assert editor.uploading is False

    @pytest.mark.asyncio
    async def test_undecodable_file(self):
        changes = []
        editor = ImageEditor(create_block("image"), on_change=changes.append)
        result = await editor.add_files([ImageFile("fake.png", "image/png", b"not a png")])
        assert result.images == []
        assert result.errors == ["Failed to process fake.png: Invalid image data"]
        assert changes == []

    @pytest.mark.asyncio
    async def test_images_per_block_cap(self):
        changes = []
        settings = EditorSettings(max_images_per_block=2)
        editor = ImageEditor(create_block("image"), on_change=changes.append, settings=settings)
        result = await editor.add_files([
            ImageFile("a.png", "image/png", PNG),
            ImageFile("b.png", "image/png", PNG),
            ImageFile("c.png", "image/png", PNG),
        ])
        assert len(result.images) == 2
        assert result.errors == ["File 3 (c.png): Image limit of 2 reached"]
        assert editor.remaining_slots == 0

    @pytest.mark.asyncio
    async def test_appends_to_existing_images(self):
        changes = []
        editor = ImageEditor(image_block("old.png"), on_change=changes.append)
        await editor.add_files([ImageFile("new.png", "image/png", PNG)])
        assert [img["name"] for img in changes[-1].props["images"]] == ["old.png", "new.png"]

    @pytest.mark.asyncio
    async def test_disabled_editor_ignores_files(self):
        changes = []
        editor = ImageEditor(create_block("image"), on_change=changes.append, disabled=True)
        result = await editor.add_files([ImageFile("a.png", "image/png", PNG)])
        assert result.images == [] and result.errors == []
        assert changes == []

    def test_remove_image(self):
        changes = []
        editor = ImageEditor(image_block("a.png", "b.png"), on_change=changes.append)
        editor.remove_image("img_0")
        assert [img["id"] for img in changes[-1].props["images"]] == ["img_1"]

    def test_dismiss_errors(self):
        editor = ImageEditor(create_block("image"))
        editor.upload_errors = ["oops"]
        editor.dismiss_errors()
        assert editor.upload_errors == []


class TestImageMetadata:
    """Tests for alt and caption edits."""

    def test_without_event_loop_updates_immediately(self):
        changes = []
        editor = ImageEditor(image_block("a.png"), on_change=changes.append)
        editor.update_metadata("img_0", "caption", "  Sunset  ")
        assert len(changes) == 1
        assert changes[0].props["images"][0]["caption"] == "Sunset"

    def test_unknown_field(self):
        editor = ImageEditor(image_block("a.png"))
        with pytest.raises(ValueError):
            editor.update_metadata("img_0", "url", "x")

    @pytest.mark.asyncio
    async def test_edits_are_debounced(self):
        changes = []
        settings = EditorSettings(debounce_ms=50)
        editor = ImageEditor(image_block("a.png"), on_change=changes.append, settings=settings)
        for text in ["S", "Su", "Sunset"]:
            editor.update_metadata("img_0", "alt", text)
        assert changes == []
        await asyncio.sleep(0.2)
        assert len(changes) == 1
        assert changes[0].props["images"][0]["alt"] == "Sunset"

    @pytest.mark.asyncio
    async def test_flush(self):
        changes = []
        settings = EditorSettings(debounce_ms=1000)
        editor = ImageEditor(image_block("a.png"), on_change=changes.append, settings=settings)
        editor.update_metadata("img_0", "caption", "Beach")
        editor.flush()
        assert len(changes) == 1
        assert changes[0].props["images"][0]["caption"] == "Beach"
        await asyncio.sleep(0)
        assert len(changes) == 1
