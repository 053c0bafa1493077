from dataclasses import dataclass, field
from typing import Iterator, List, NamedTuple, Tuple

import numpy as np
from PIL import Image


class PixelImage:
    """
    Decoded RGBA8 texture.
    pixels: (height, width, 4) uint8 array, row-major, no padding.
    The array is owned by the caller; the sanitizer writes its alpha channel in place.
    """

    def __init__(self, pixels: np.ndarray):
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Expected (height, width, 4) RGBA array, got shape {pixels.shape}")
        # No implicit conversion: a copy would hide in-place sanitization from the caller
        if pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 RGBA array, got dtype {pixels.dtype}")
        self.pixels = pixels

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def alpha(self) -> np.ndarray:
        # Writable view
        return self.pixels[:, :, 3]

    @staticmethod
    def from_bytes(width: int, height: int, data) -> "PixelImage":
        expected = width * height * 4
        if len(data) != expected:
            raise ValueError(f"RGBA buffer for {width}x{height} must be {expected} bytes, got {len(data)}")
        arr = np.frombuffer(bytes(data), dtype=np.uint8).reshape((height, width, 4)).copy()
        return PixelImage(arr)

    @staticmethod
    def from_pil(img: Image.Image) -> "PixelImage":
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        # np.array copies, so the result is writable
        return PixelImage(np.array(img, dtype=np.uint8))

    @staticmethod
    def empty() -> "PixelImage":
        return PixelImage(np.zeros((0, 0, 4), dtype=np.uint8))

    def to_pil(self) -> Image.Image:
        return Image.fromarray(self.pixels)

    def __repr__(self) -> str:
        return f"PixelImage({self.width}x{self.height})"


@dataclass(frozen=True)
class PixelRect:
    # Reference (64-unit) or scaled texture pixels, depending on context
    x: int
    y: int
    w: int
    h: int

    def scaled(self, scale: int) -> "PixelRect":
        return PixelRect(self.x * scale, self.y * scale, self.w * scale, self.h * scale)


FACE_NAMES = ("top", "bottom", "right", "front", "left", "back")


@dataclass(frozen=True)
class BoxFaceSet:
    top: PixelRect
    bottom: PixelRect
    right: PixelRect
    front: PixelRect
    left: PixelRect
    back: PixelRect

    def __iter__(self) -> Iterator[PixelRect]:
        for name in FACE_NAMES:
            yield getattr(self, name)

    def scaled(self, scale: int) -> "BoxFaceSet":
        return BoxFaceSet(*(rect.scaled(scale) for rect in self))

    @staticmethod
    def from_rows(rows) -> "BoxFaceSet":
        # rows: six (x, y, w, h) tuples in FACE_NAMES order
        return BoxFaceSet(*(PixelRect(*row) for row in rows))


Vec3 = Tuple[float, float, float]
Vec2 = Tuple[float, float]


class Vertex(NamedTuple):
    position: Vec3
    normal: Vec3
    uv: Vec2


VERTICES_PER_BOX = 24
INDICES_PER_BOX = 36


@dataclass
class BuiltMesh:
    """
    Un-welded triangle mesh split into two draw ranges sharing one vertex list.
    Base range is drawn opaque, overlay range alpha-blended, both with the same texture.
    parts: body parts in emission order, one box (VERTICES_PER_BOX vertices) each.
    """
    vertices: List[Vertex] = field(default_factory=list)
    base_indices: List[int] = field(default_factory=list)
    overlay_indices: List[int] = field(default_factory=list)
    parts: list = field(default_factory=list)

    def vertex_slice(self, part) -> slice:
        # Raises ValueError if the part was not emitted
        start = self.parts.index(part) * VERTICES_PER_BOX
        return slice(start, start + VERTICES_PER_BOX)

    def has_part(self, part) -> bool:
        return part in self.parts

    @property
    def is_empty(self) -> bool:
        return not self.vertices

    @property
    def overlay_offset(self) -> int:
        # Start of the overlay range inside index_buffer()
        return len(self.base_indices)

    @property
    def base_vertex_count(self) -> int:
        # Base boxes are emitted first, so their vertices are a prefix of the list
        return VERTICES_PER_BOX * sum(1 for p in self.parts if not p.is_overlay)

    @property
    def index_count(self) -> int:
        return len(self.base_indices) + len(self.overlay_indices)

    def index_buffer(self) -> List[int]:
        return self.base_indices + self.overlay_indices

    def vertex_array(self) -> np.ndarray:
        """
        Interleaved (N, 8) float32 array: px, py, pz, nx, ny, nz, u, v.
        """
        if not self.vertices:
            return np.zeros((0, 8), dtype=np.float32)
        return np.array(
            [(*v.position, *v.normal, *v.uv) for v in self.vertices],
            dtype=np.float32,
        )
