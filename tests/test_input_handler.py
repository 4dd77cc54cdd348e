import io

import pytest
from PIL import Image

from cardbook.input_handler import ImagePayload, InputHandler
from cardbook.utils.exceptions import InvalidInputError, TooManyInputsError


def png_bytes(size=(8, 4), color="white"):
    buffer = io.BytesIO()
    Image.new("L", size, color=color).save(buffer, format="PNG")
    return buffer.getvalue()


def test_select_keeps_order_and_mime_types():
    payloads = InputHandler(max_images=5).select(["front.jpg", "back.png", "logo.webp"])

    assert [p.name for p in payloads] == ["front.jpg", "back.png", "logo.webp"]
    assert [p.mime_type for p in payloads] == ["image/jpeg", "image/png", "image/webp"]
    assert all(p.is_image for p in payloads)


def test_empty_selection_is_not_an_error():
    assert InputHandler(max_images=5).select([]) == []


def test_non_image_rejected_with_user_message():
    with pytest.raises(InvalidInputError) as excinfo:
        InputHandler(max_images=5).select(["card.png", "scan.pdf"])

    assert excinfo.value.details["invalid"] == ["scan.pdf"]
    assert excinfo.value.user_message == "Please select only image files (JPG, PNG, WebP)"


def test_unknown_extension_is_not_an_image():
    payload = ImagePayload.from_path("README")
    assert payload.mime_type == "application/octet-stream"
    assert not payload.is_image


def test_limit_comes_from_configuration():
    handler = InputHandler()
    assert handler.max_images == 5

    with pytest.raises(TooManyInputsError):
        handler.select([f"card{i}.png" for i in range(6)])


def test_zero_limit_is_not_replaced_by_configuration():
    handler = InputHandler(max_images=0)
    assert handler.max_images == 0

    with pytest.raises(TooManyInputsError):
        handler.select(["card.png"])


def test_invalid_type_reported_before_count():
    names = [f"card{i}.png" for i in range(6)] + ["notes.txt"]
    with pytest.raises(InvalidInputError):
        InputHandler(max_images=5).select(names)


def test_open_image_from_path(tmp_path):
    path = tmp_path / "card.png"
    path.write_bytes(png_bytes())

    payload = ImagePayload.from_path(path)

    assert payload.reference == str(path)
    assert payload.open_image().size == (8, 4)


def test_open_image_from_bytes():
    payload = ImagePayload.from_bytes("upload.png", png_bytes(size=(3, 3)))

    assert payload.mime_type == "image/png"
    assert payload.reference == "upload.png"
    assert payload.open_image().size == (3, 3)


def test_open_image_without_content_fails():
    with pytest.raises(ValueError):
        ImagePayload(name="ghost.png", mime_type="image/png").open_image()
