import numpy as np

from .primitives import BoxFaceSet, PixelImage, PixelRect


def any_non_transparent(image: PixelImage, rect: PixelRect) -> bool:
    # Clip to bounds; a rect entirely outside counts as empty
    x0, y0 = max(0, rect.x), max(0, rect.y)
    x1 = min(image.width, rect.x + rect.w)
    y1 = min(image.height, rect.y + rect.h)
    if x1 <= x0 or y1 <= y0:
        return False
    return bool(np.any(image.alpha[y0:y1, x0:x1] != 0))


def is_present(image: PixelImage, face_set: BoxFaceSet) -> bool:
    """
    True if any of the six (already scaled) face rectangles holds a pixel with non-zero alpha.
    Only meaningful for overlay parts; base parts are opaque after sanitization.
    """
    if image.width == 0 or image.height == 0:
        return False
    return any(any_non_transparent(image, rect) for rect in face_set)
