import base64
import io
import json
import os
import tempfile
import unittest
from unittest import mock

from PIL import Image

from skin_fixtures import make_skin, set_alpha

from skin_loader import SkinLoader


def _png_bytes(size=(64, 64), color=(200, 100, 50, 255), mode="RGBA") -> bytes:
    buf = io.BytesIO()
    Image.new(mode, size, color[:len(mode)]).save(buf, format="PNG")
    return buf.getvalue()


def _response(content=b"", payload=None):
    resp = mock.Mock()
    resp.content = content
    resp.json.return_value = payload
    resp.raise_for_status.return_value = None
    return resp


class TestLoadSkin(unittest.TestCase):
    def test_load_from_file_converts_to_rgba(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "steve.png")
            with open(path, "wb") as f:
                f.write(_png_bytes((64, 32), mode="RGB"))
            img = SkinLoader.load_skin(path)
        self.assertEqual((img.width, img.height), (64, 32))
        self.assertEqual(tuple(img.pixels[0, 0]), (200, 100, 50, 255))

    def test_odd_dimensions_are_not_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "odd.png")
            with open(path, "wb") as f:
                f.write(_png_bytes((90, 70)))
            img = SkinLoader.load_skin(path)
        self.assertEqual((img.width, img.height), (90, 70))

    def test_corrupt_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "broken.png")
            with open(path, "wb") as f:
                f.write(b"not a png")
            with self.assertRaises(ValueError) as ctx:
                SkinLoader.load_skin(path)
        self.assertIn("from file", str(ctx.exception))

    def test_invalid_source(self) -> None:
        with self.assertRaises(ValueError) as ctx:
            SkinLoader.load_skin("definitely not a skin!")
        self.assertIn("Invalid skin source", str(ctx.exception))

    def test_load_from_url(self) -> None:
        with mock.patch("skin_loader.requests.get", return_value=_response(_png_bytes())) as get:
            img = SkinLoader.load_skin("https://example.com/skin.png")
        get.assert_called_once_with("https://example.com/skin.png", timeout=10)
        self.assertEqual((img.width, img.height), (64, 64))

    def test_url_failure(self) -> None:
        with mock.patch("skin_loader.requests.get", side_effect=OSError("offline")):
            with self.assertRaises(ValueError) as ctx:
                SkinLoader.load_skin("https://example.com/skin.png")
        self.assertIn("offline", str(ctx.exception))

    def test_load_from_username(self) -> None:
        textures = {"textures": {"SKIN": {"url": "https://textures.example/abc"}}}
        encoded = base64.b64encode(json.dumps(textures).encode("utf-8")).decode("ascii")
        responses = [
            _response(payload={"id": "uuid-123", "name": "Steve"}),
            _response(payload={"properties": [{"name": "textures", "value": encoded}]}),
            _response(content=_png_bytes((128, 128))),
        ]
        with mock.patch("skin_loader.requests.get", side_effect=responses) as get:
            img = SkinLoader.load_skin("Steve")
        self.assertEqual(get.call_count, 3)
        self.assertEqual(get.call_args_list[2].args[0], "https://textures.example/abc")
        self.assertEqual((img.width, img.height), (128, 128))

    def test_unknown_username(self) -> None:
        with mock.patch("skin_loader.requests.get", return_value=_response(payload={})):
            with self.assertRaises(ValueError) as ctx:
                SkinLoader.load_skin("Nobody_123")
        self.assertIn("Nobody_123", str(ctx.exception))


class TestDetectModel(unittest.TestCase):
    def test_transparent_probe_pixel_means_slim(self) -> None:
        img = make_skin(64, 64, alpha=255)
        set_alpha(img, 54, 20, 0)
        self.assertEqual(SkinLoader.detect_model(img), "slim")

    def test_opaque_probe_pixel_means_classic(self) -> None:
        self.assertEqual(SkinLoader.detect_model(make_skin(64, 64, alpha=255)), "classic")

    def test_probe_is_scaled(self) -> None:
        img = make_skin(128, 128, alpha=255)
        set_alpha(img, 108, 40, 0)
        self.assertEqual(SkinLoader.detect_model(img), "slim")

    def test_legacy_is_always_classic(self) -> None:
        self.assertEqual(SkinLoader.detect_model(make_skin(64, 32, alpha=0)), "classic")

    def test_tiny_image_is_classic(self) -> None:
        self.assertEqual(SkinLoader.detect_model(make_skin(0, 0)), "classic")


if __name__ == "__main__":
    unittest.main()
