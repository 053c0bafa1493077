from dataclasses import dataclass, replace
from typing import List

import numpy as np

from .primitives import PixelImage

REFERENCE_SIZE = 64

STATUS_OK = "Skin loaded."
STATUS_NON_STANDARD = "Loaded image, but dimensions are not typical for Minecraft skins."
STATUS_EMPTY = "No skin loaded."


@dataclass(frozen=True)
class TextureProfile:
    width: int
    height: int
    scale: int = 1
    is_legacy: bool = False
    supports_secondary_limbs: bool = False
    is_conforming: bool = False
    has_translucent_pixel: bool = False
    advisory: str = STATUS_EMPTY
    # Base-layer pixels whose alpha the sanitizer raised to 255
    base_alpha_fixed: int = 0

    def with_alpha_scan(self, image: PixelImage) -> "TextureProfile":
        """
        Returns a copy with has_translucent_pixel filled in.
        Must run after sanitization, otherwise stray base-layer alpha counts too.
        """
        translucent = bool(image.pixels.size) and bool(np.any(image.alpha != 255))
        return replace(self, has_translucent_pixel=translucent)

    def describe(self) -> List[str]:
        if not self.width or not self.height:
            return [self.advisory]
        return [
            self.advisory,
            f"Size: {self.width}x{self.height}",
            f"Scale: {self.scale} ({REFERENCE_SIZE}px reference)",
            "Format: " + ("Legacy 64x32" if self.is_legacy else "Modern (64x64+) / Scaled"),
            "Alpha: " + ("present" if self.has_translucent_pixel else "opaque/none detected"),
        ]


def classify(width: int, height: int) -> TextureProfile:
    """
    Derives scale and layout flags from texture dimensions.
    Total over all inputs: odd sizes fall back to scale 1 with a non-standard advisory.
    """
    if width <= 0 or height <= 0:
        return TextureProfile(width=max(width, 0), height=max(height, 0))

    is_legacy = (width == REFERENCE_SIZE and height == REFERENCE_SIZE // 2)

    # 64x64 -> 1, 128x128 -> 2, ... anything else is rendered best-effort at 1
    if width == height and width % REFERENCE_SIZE == 0:
        scale = width // REFERENCE_SIZE
    else:
        scale = 1

    supports_secondary_limbs = (not is_legacy) and height >= REFERENCE_SIZE * scale

    is_conforming = (
        (width == REFERENCE_SIZE and height in (REFERENCE_SIZE // 2, REFERENCE_SIZE))
        or (width == height and width % REFERENCE_SIZE == 0)
    )

    return TextureProfile(
        width=width,
        height=height,
        scale=scale,
        is_legacy=is_legacy,
        supports_secondary_limbs=supports_secondary_limbs,
        is_conforming=is_conforming,
        advisory=STATUS_OK if is_conforming else STATUS_NON_STANDARD,
    )
