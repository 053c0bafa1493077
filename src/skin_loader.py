import os
import io
import re
import json
import base64
import requests
from PIL import Image

from skinmesh.classifier import classify
from skinmesh.primitives import PixelImage


class SkinLoader:
    """
    Decodes skins into RGBA PixelImages. Sources are tried in order:
    an existing file, an http(s) URL, then a Minecraft username via the Mojang API.
    """
    MOJANG_PROFILE_URL = "https://api.mojang.com/users/profiles/minecraft/{}"
    MOJANG_SESSION_URL = "https://sessionserver.mojang.com/session/minecraft/profile/{}"
    USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]{3,16}$")
    TIMEOUT = 10

    # Reference pixel on the right arm's back face; transparent on slim (Alex) skins
    SLIM_PROBE = (54, 20)

    @staticmethod
    def load_skin(source: str) -> PixelImage:
        """
        Returns the decoded RGBA pixels; dimensions are not checked here.
        """
        if os.path.exists(source):
            kind, read = "file", lambda: SkinLoader._read_file(source)
        elif source.startswith(("http://", "https://")):
            kind, read = "URL", lambda: SkinLoader._fetch(source)
        elif SkinLoader.USERNAME_PATTERN.match(source):
            return SkinLoader._load_from_username(source)
        else:
            raise ValueError(f"Invalid skin source: {source}")

        try:
            return SkinLoader._decode(read())
        except Exception as e:
            raise ValueError(f"Failed to load skin from {kind}: {e}")

    @staticmethod
    def _read_file(path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    @staticmethod
    def _fetch(url: str) -> bytes:
        response = requests.get(url, timeout=SkinLoader.TIMEOUT)
        response.raise_for_status()
        return response.content

    @staticmethod
    def _get_json(url: str) -> dict:
        response = requests.get(url, timeout=SkinLoader.TIMEOUT)
        response.raise_for_status()
        return response.json() or {}

    @staticmethod
    def skin_url_for(username: str) -> str:
        """
        username -> UUID -> session profile -> base64 "textures" property -> SKIN url.
        """
        uuid = SkinLoader._get_json(SkinLoader.MOJANG_PROFILE_URL.format(username)).get("id")
        if not uuid:
            raise ValueError("User not found")

        profile = SkinLoader._get_json(SkinLoader.MOJANG_SESSION_URL.format(uuid))
        properties = {p.get("name"): p.get("value") for p in profile.get("properties", [])}
        if not properties.get("textures"):
            raise ValueError("No texture data found")

        textures = json.loads(base64.b64decode(properties["textures"]).decode("utf-8"))
        skin_url = textures.get("textures", {}).get("SKIN", {}).get("url")
        if not skin_url:
            raise ValueError("No skin URL found in texture data")
        return skin_url

    @staticmethod
    def _load_from_username(username: str) -> PixelImage:
        try:
            return SkinLoader._decode(SkinLoader._fetch(SkinLoader.skin_url_for(username)))
        except Exception as e:
            raise ValueError(f"Failed to fetch skin for user '{username}': {e}")

    @staticmethod
    def _decode(data: bytes) -> PixelImage:
        # Palette and RGB PNGs become RGBA; legacy 64x32 is kept as-is, the mesh builder handles it
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return PixelImage.from_pil(img)

    @staticmethod
    def detect_model(image: PixelImage) -> str:
        """
        Detects if skin is Classic (Steve) or Slim (Alex).
        Must run before base alpha sanitization, which makes the probe pixel opaque.
        """
        profile = classify(image.width, image.height)
        # Slim arms need the 64x64 layout
        if not profile.supports_secondary_limbs:
            return "classic"

        x, y = SkinLoader.SLIM_PROBE[0] * profile.scale, SkinLoader.SLIM_PROBE[1] * profile.scale
        if x >= image.width or y >= image.height:
            return "classic"
        if image.pixels[y, x, 3] == 0:
            return "slim"
        return "classic"
