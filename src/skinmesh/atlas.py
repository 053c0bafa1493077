from enum import Enum
from typing import Dict, Optional, Tuple

from .primitives import BoxFaceSet

# Skin atlas layout at 64x64 reference resolution.
# Face order: top, bottom, right, front, left, back. Each entry is (x, y, w, h).
# These offsets are an external convention; do not "fix" them.
_CLASSIC: Dict[str, Tuple[Tuple[int, int, int, int], ...]] = {
    "head": (
        (8, 0, 8, 8), (16, 0, 8, 8),
        (0, 8, 8, 8), (8, 8, 8, 8), (16, 8, 8, 8), (24, 8, 8, 8),
    ),
    "hat": (
        (40, 0, 8, 8), (48, 0, 8, 8),
        (32, 8, 8, 8), (40, 8, 8, 8), (48, 8, 8, 8), (56, 8, 8, 8),
    ),
    "torso": (
        (20, 16, 8, 4), (28, 16, 8, 4),
        (16, 20, 4, 12), (20, 20, 8, 12), (28, 20, 4, 12), (32, 20, 8, 12),
    ),
    "jacket": (
        (20, 32, 8, 4), (28, 32, 8, 4),
        (16, 36, 4, 12), (20, 36, 8, 12), (28, 36, 4, 12), (32, 36, 8, 12),
    ),
    "right_leg": (
        (4, 16, 4, 4), (8, 16, 4, 4),
        (0, 20, 4, 12), (4, 20, 4, 12), (8, 20, 4, 12), (12, 20, 4, 12),
    ),
    "right_pants": (
        (4, 32, 4, 4), (8, 32, 4, 4),
        (0, 36, 4, 12), (4, 36, 4, 12), (8, 36, 4, 12), (12, 36, 4, 12),
    ),
    "right_arm": (
        (44, 16, 4, 4), (48, 16, 4, 4),
        (40, 20, 4, 12), (44, 20, 4, 12), (48, 20, 4, 12), (52, 20, 4, 12),
    ),
    "right_sleeve": (
        (44, 32, 4, 4), (48, 32, 4, 4),
        (40, 36, 4, 12), (44, 36, 4, 12), (48, 36, 4, 12), (52, 36, 4, 12),
    ),
    "left_leg": (
        (20, 48, 4, 4), (24, 48, 4, 4),
        (16, 52, 4, 12), (20, 52, 4, 12), (24, 52, 4, 12), (28, 52, 4, 12),
    ),
    "left_pants": (
        (4, 48, 4, 4), (8, 48, 4, 4),
        (0, 52, 4, 12), (4, 52, 4, 12), (8, 52, 4, 12), (12, 52, 4, 12),
    ),
    "left_arm": (
        (36, 48, 4, 4), (40, 48, 4, 4),
        (32, 52, 4, 12), (36, 52, 4, 12), (40, 52, 4, 12), (44, 52, 4, 12),
    ),
    "left_sleeve": (
        (52, 48, 4, 4), (56, 48, 4, 4),
        (48, 52, 4, 12), (52, 52, 4, 12), (56, 52, 4, 12), (60, 52, 4, 12),
    ),
}

# Slim (Alex) arms: 3px wide front/back/top/bottom, side faces stay 4px deep.
_SLIM: Dict[str, Tuple[Tuple[int, int, int, int], ...]] = {
    "right_arm": (
        (44, 16, 3, 4), (47, 16, 3, 4),
        (40, 20, 4, 12), (44, 20, 3, 12), (47, 20, 4, 12), (51, 20, 3, 12),
    ),
    "right_sleeve": (
        (44, 32, 3, 4), (47, 32, 3, 4),
        (40, 36, 4, 12), (44, 36, 3, 12), (47, 36, 4, 12), (51, 36, 3, 12),
    ),
    "left_arm": (
        (36, 48, 3, 4), (39, 48, 3, 4),
        (32, 52, 4, 12), (36, 52, 3, 12), (39, 52, 4, 12), (43, 52, 3, 12),
    ),
    "left_sleeve": (
        (52, 48, 3, 4), (55, 48, 3, 4),
        (48, 52, 4, 12), (52, 52, 3, 12), (55, 52, 4, 12), (59, 52, 3, 12),
    ),
}


class Role(Enum):
    BASE = "base"
    OVERLAY = "overlay"


class BodyPart(Enum):
    # value: (atlas key, role, base part key for overlays)
    HEAD = ("head", Role.BASE, None)
    HAT = ("hat", Role.OVERLAY, "head")
    TORSO = ("torso", Role.BASE, None)
    JACKET = ("jacket", Role.OVERLAY, "torso")
    RIGHT_ARM = ("right_arm", Role.BASE, None)
    RIGHT_SLEEVE = ("right_sleeve", Role.OVERLAY, "right_arm")
    LEFT_ARM = ("left_arm", Role.BASE, None)
    LEFT_SLEEVE = ("left_sleeve", Role.OVERLAY, "left_arm")
    RIGHT_LEG = ("right_leg", Role.BASE, None)
    RIGHT_PANTS = ("right_pants", Role.OVERLAY, "right_leg")
    LEFT_LEG = ("left_leg", Role.BASE, None)
    LEFT_PANTS = ("left_pants", Role.OVERLAY, "left_leg")

    @property
    def key(self) -> str:
        return self.value[0]

    @property
    def role(self) -> Role:
        return self.value[1]

    @property
    def is_overlay(self) -> bool:
        return self.role is Role.OVERLAY

    @property
    def base(self) -> Optional["BodyPart"]:
        """The base part an overlay shells; None for base parts."""
        base_key = self.value[2]
        if base_key is None:
            return None
        return BodyPart.from_key(base_key)

    @property
    def has_slim_variant(self) -> bool:
        return self.key in _SLIM

    @staticmethod
    def from_key(key: str) -> "BodyPart":
        for part in BodyPart:
            if part.key == key:
                return part
        raise KeyError(key)


_TABLE: Dict[Tuple[BodyPart, bool], BoxFaceSet] = {}
for _part in BodyPart:
    _TABLE[(_part, False)] = BoxFaceSet.from_rows(_CLASSIC[_part.key])
    _TABLE[(_part, True)] = BoxFaceSet.from_rows(_SLIM.get(_part.key, _CLASSIC[_part.key]))


def face_set_for(part: BodyPart, slim_arms: bool = False) -> BoxFaceSet:
    """Reference-resolution (64-unit) face rectangles for a body part."""
    return _TABLE[(part, bool(slim_arms))]


def scale_face_set(face_set: BoxFaceSet, scale: int) -> BoxFaceSet:
    return face_set.scaled(scale)
