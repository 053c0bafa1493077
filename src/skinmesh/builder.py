from typing import List, Tuple

from .atlas import BodyPart, face_set_for, scale_face_set
from .classifier import TextureProfile
from .primitives import BoxFaceSet, BuiltMesh, PixelImage, PixelRect, Vec3, Vertex
from .probe import is_present


class MeshBuilder:
    """
    Builds the player box-mesh for a sanitized skin.
    Model space is in reference pixel units (1 unit = 1 skin pixel at 64x64):
    Y: Up, feet at 0, top of head at 32
    X: Right arm on -X, left arm on +X
    Z: +Z is the player front
    Left-handed, like the renderer that consumes it; faces wind counter-clockwise seen from outside.
    """

    OVERLAY_INFLATE = 0.5

    HEAD_SIZE: Vec3 = (8.0, 8.0, 8.0)
    TORSO_SIZE: Vec3 = (8.0, 12.0, 4.0)
    LEG_SIZE: Vec3 = (4.0, 12.0, 4.0)

    HEAD_CENTER: Vec3 = (0.0, 12.0 + 12.0 + 4.0, 0.0)
    TORSO_CENTER: Vec3 = (0.0, 12.0 + 6.0, 0.0)
    RIGHT_LEG_CENTER: Vec3 = (-2.0, 6.0, 0.0)
    LEFT_LEG_CENTER: Vec3 = (2.0, 6.0, 0.0)

    @staticmethod
    def arm_width(profile: TextureProfile, slim_arms: bool) -> float:
        # Slim arms need the 64x64 layout; legacy skins only have the classic arm
        return 3.0 if (slim_arms and profile.supports_secondary_limbs) else 4.0

    @staticmethod
    def placements(profile: TextureProfile, slim_arms: bool = False) -> List[Tuple[BodyPart, Vec3, Vec3]]:
        """
        Base boxes in emission order: (part, center, size).
        """
        arm_w = MeshBuilder.arm_width(profile, slim_arms)
        arm_size = (arm_w, 12.0, 4.0)
        # Torso half-width + arm half-width
        arm_x = 4.0 + arm_w * 0.5

        return [
            (BodyPart.HEAD, MeshBuilder.HEAD_CENTER, MeshBuilder.HEAD_SIZE),
            (BodyPart.TORSO, MeshBuilder.TORSO_CENTER, MeshBuilder.TORSO_SIZE),
            (BodyPart.RIGHT_ARM, (-arm_x, 18.0, 0.0), arm_size),
            (BodyPart.RIGHT_LEG, MeshBuilder.RIGHT_LEG_CENTER, MeshBuilder.LEG_SIZE),
            (BodyPart.LEFT_ARM, (arm_x, 18.0, 0.0), arm_size),
            (BodyPart.LEFT_LEG, MeshBuilder.LEFT_LEG_CENTER, MeshBuilder.LEG_SIZE),
        ]

    @staticmethod
    def uv_source(part: BodyPart, profile: TextureProfile) -> BodyPart:
        # 64x32 skins have no left limb regions; the left side reuses the right one
        if not profile.supports_secondary_limbs:
            if part is BodyPart.LEFT_ARM:
                return BodyPart.RIGHT_ARM
            if part is BodyPart.LEFT_LEG:
                return BodyPart.RIGHT_LEG
        return part

    @staticmethod
    def build(image: PixelImage, profile: TextureProfile, slim_arms: bool = False) -> BuiltMesh:
        mesh = BuiltMesh()
        if image.width == 0 or image.height == 0:
            return mesh

        tex_w, tex_h = image.width, image.height
        slim = MeshBuilder.arm_width(profile, slim_arms) == 3.0

        def faces(part: BodyPart) -> BoxFaceSet:
            return scale_face_set(face_set_for(part, slim), profile.scale)

        placements = MeshBuilder.placements(profile, slim_arms)

        # --- BASE LAYER ---
        for part, center, size in placements:
            src = MeshBuilder.uv_source(part, profile)
            MeshBuilder.add_box(mesh, mesh.base_indices, center, size, faces(src), tex_w, tex_h)
            mesh.parts.append(part)

        # --- OVERLAY LAYER ---
        # Same center as the base part, grown on every axis so it sits outside it.
        base_boxes = {part: (center, size) for part, center, size in placements}
        overlays = [BodyPart.HAT, BodyPart.JACKET, BodyPart.RIGHT_SLEEVE, BodyPart.RIGHT_PANTS]
        if profile.supports_secondary_limbs:
            overlays += [BodyPart.LEFT_SLEEVE, BodyPart.LEFT_PANTS]

        for part in overlays:
            face_set = faces(part)
            if not is_present(image, face_set):
                continue
            center, size = base_boxes[part.base]
            grown = tuple(s + MeshBuilder.OVERLAY_INFLATE for s in size)
            MeshBuilder.add_box(mesh, mesh.overlay_indices, center, grown, face_set, tex_w, tex_h)
            mesh.parts.append(part)

        return mesh

    @staticmethod
    def add_box(mesh: BuiltMesh, indices: List[int], center: Vec3, size: Vec3,
                uv: BoxFaceSet, tex_w: int, tex_h: int):
        hx, hy, hz = size[0] * 0.5, size[1] * 0.5, size[2] * 0.5
        cx, cy, cz = center

        # Corner naming: (L)eft/(R)ight x, (B)ottom/(T)op y, (F)ront/(B)ack z.
        # "F" is the -Z side here; the player front face is +Z.
        lbf = (cx - hx, cy - hy, cz - hz)
        rbf = (cx + hx, cy - hy, cz - hz)
        rtf = (cx + hx, cy + hy, cz - hz)
        ltf = (cx - hx, cy + hy, cz - hz)

        lbb = (cx - hx, cy - hy, cz + hz)
        rbb = (cx + hx, cy - hy, cz + hz)
        rtb = (cx + hx, cy + hy, cz + hz)
        ltb = (cx - hx, cy + hy, cz + hz)

        add = MeshBuilder._add_face
        add(mesh, indices, (ltf, rtf, rtb, ltb), (0.0, 1.0, 0.0), uv.top, tex_w, tex_h)
        add(mesh, indices, (lbb, rbb, rbf, lbf), (0.0, -1.0, 0.0), uv.bottom, tex_w, tex_h)
        add(mesh, indices, (ltb, rtb, rbb, lbb), (0.0, 0.0, 1.0), uv.front, tex_w, tex_h)
        add(mesh, indices, (rtf, ltf, lbf, rbf), (0.0, 0.0, -1.0), uv.back, tex_w, tex_h)
        add(mesh, indices, (rtb, rtf, rbf, rbb), (1.0, 0.0, 0.0), uv.right, tex_w, tex_h)
        add(mesh, indices, (ltf, ltb, lbb, lbf), (-1.0, 0.0, 0.0), uv.left, tex_w, tex_h)

    @staticmethod
    def _add_face(mesh: BuiltMesh, indices: List[int], corners, normal: Vec3,
                  rect: PixelRect, tex_w: int, tex_h: int):
        # UVs are normalized by the actual texture size, so any scale maps the same
        u0, v0 = rect.x / tex_w, rect.y / tex_h
        u1, v1 = (rect.x + rect.w) / tex_w, (rect.y + rect.h) / tex_h
        uvs = ((u0, v0), (u1, v0), (u1, v1), (u0, v1))

        base = len(mesh.vertices)
        for pos, uv in zip(corners, uvs):
            mesh.vertices.append(Vertex(pos, normal, uv))

        indices.extend((base, base + 1, base + 2, base, base + 2, base + 3))


def build_mesh(image: PixelImage, profile: TextureProfile, slim_arms: bool = False) -> BuiltMesh:
    return MeshBuilder.build(image, profile, slim_arms)
