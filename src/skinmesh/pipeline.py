from dataclasses import dataclass, replace
from typing import Optional

from .builder import MeshBuilder
from .classifier import TextureProfile, classify
from .primitives import BuiltMesh, PixelImage
from .sanitizer import sanitize_base_alpha


@dataclass(frozen=True)
class SkinPreview:
    profile: TextureProfile
    mesh: BuiltMesh
    slim_arms: bool = False

    def rebuild(self, image: PixelImage, slim_arms: bool) -> "SkinPreview":
        """
        New preview for a changed slim-arms toggle. The image is already sanitized,
        so only the mesh is recomputed; the old preview is left untouched.
        """
        return build_preview(image, slim_arms=slim_arms, profile=self.profile)


def prepare_skin(image: PixelImage) -> TextureProfile:
    """
    Phase 1: classify, force the base layer opaque (in place), then scan alpha.
    Call once per decoded image; everything after this only reads the pixels.
    """
    profile = classify(image.width, image.height)
    fixed = sanitize_base_alpha(image, profile)
    return replace(profile.with_alpha_scan(image), base_alpha_fixed=fixed)


def build_preview(image: PixelImage, slim_arms: bool = False,
                  profile: Optional[TextureProfile] = None) -> SkinPreview:
    """
    Phase 2: read-only mesh build. Pass the profile from prepare_skin() to skip
    re-sanitizing; without one the image is prepared first.
    """
    if profile is None:
        profile = prepare_skin(image)
    mesh = MeshBuilder.build(image, profile, slim_arms)
    return SkinPreview(profile=profile, mesh=mesh, slim_arms=slim_arms)
