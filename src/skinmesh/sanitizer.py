from typing import List

from .classifier import TextureProfile
from .primitives import PixelImage, PixelRect

# Base-layer regions in reference pixels. Each covers the part's full 16-wide
# unwrap (both texture rows), which is why they are wider than the box faces.
HEAD_BASE = PixelRect(0, 0, 32, 16)
TORSO_BASE = PixelRect(16, 16, 24, 16)
RIGHT_ARM_BASE = PixelRect(40, 16, 16, 16)
RIGHT_LEG_BASE = PixelRect(0, 16, 16, 16)
LEFT_ARM_BASE = PixelRect(32, 48, 16, 16)
LEFT_LEG_BASE = PixelRect(16, 48, 16, 16)


def base_regions(profile: TextureProfile) -> List[PixelRect]:
    """Scaled base-layer rectangles that must render opaque for this texture."""
    regions = [HEAD_BASE, TORSO_BASE, RIGHT_ARM_BASE, RIGHT_LEG_BASE]
    if profile.supports_secondary_limbs:
        regions += [LEFT_ARM_BASE, LEFT_LEG_BASE]
    return [r.scaled(profile.scale) for r in regions]


def force_rect_opaque(image: PixelImage, rect: PixelRect) -> int:
    """
    Sets alpha to 255 inside rect, clipped to the image.
    Returns the number of pixels whose alpha actually changed.
    """
    x0, y0 = max(0, rect.x), max(0, rect.y)
    x1 = min(image.width, rect.x + rect.w)
    y1 = min(image.height, rect.y + rect.h)
    if x1 <= x0 or y1 <= y0:
        return 0

    region = image.alpha[y0:y1, x0:x1]
    changed = int((region != 255).sum())
    region[...] = 255
    return changed


def sanitize_base_alpha(image: PixelImage, profile: TextureProfile) -> int:
    """
    Makes the base layer (head, torso, arms, legs) fully opaque, in place.

    Editors often leave stray zero-alpha pixels on the base layer, which would
    show up as holes in the model. Overlay regions are left alone since their
    transparency is meaningful. Safe to call again on an already sanitized image.
    """
    if image.width == 0 or image.height == 0:
        return 0
    return sum(force_rect_opaque(image, rect) for rect in base_regions(profile))
