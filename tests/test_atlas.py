import unittest

from skin_fixtures import make_skin  # noqa: F401  (puts src/ on sys.path)

from skinmesh.atlas import BodyPart, Role, face_set_for, scale_face_set
from skinmesh.primitives import BoxFaceSet, PixelRect


class TestAtlasTable(unittest.TestCase):
    def test_head_layout(self) -> None:
        head = face_set_for(BodyPart.HEAD)
        self.assertEqual(head.top, PixelRect(8, 0, 8, 8))
        self.assertEqual(head.bottom, PixelRect(16, 0, 8, 8))
        self.assertEqual(head.right, PixelRect(0, 8, 8, 8))
        self.assertEqual(head.front, PixelRect(8, 8, 8, 8))
        self.assertEqual(head.left, PixelRect(16, 8, 8, 8))
        self.assertEqual(head.back, PixelRect(24, 8, 8, 8))

    def test_torso_and_jacket_layout(self) -> None:
        self.assertEqual(
            list(face_set_for(BodyPart.TORSO)),
            [PixelRect(20, 16, 8, 4), PixelRect(28, 16, 8, 4), PixelRect(16, 20, 4, 12),
             PixelRect(20, 20, 8, 12), PixelRect(28, 20, 4, 12), PixelRect(32, 20, 8, 12)],
        )
        self.assertEqual(face_set_for(BodyPart.JACKET).front, PixelRect(20, 36, 8, 12))

    def test_limb_layouts(self) -> None:
        self.assertEqual(face_set_for(BodyPart.RIGHT_LEG).top, PixelRect(4, 16, 4, 4))
        self.assertEqual(face_set_for(BodyPart.RIGHT_PANTS).back, PixelRect(12, 36, 4, 12))
        self.assertEqual(face_set_for(BodyPart.RIGHT_ARM).front, PixelRect(44, 20, 4, 12))
        self.assertEqual(face_set_for(BodyPart.RIGHT_SLEEVE).top, PixelRect(44, 32, 4, 4))
        self.assertEqual(face_set_for(BodyPart.LEFT_LEG).right, PixelRect(16, 52, 4, 12))
        self.assertEqual(face_set_for(BodyPart.LEFT_PANTS).top, PixelRect(4, 48, 4, 4))
        self.assertEqual(face_set_for(BodyPart.LEFT_ARM).back, PixelRect(44, 52, 4, 12))
        self.assertEqual(face_set_for(BodyPart.LEFT_SLEEVE).back, PixelRect(60, 52, 4, 12))

    def test_slim_arm_layouts(self) -> None:
        self.assertEqual(
            list(face_set_for(BodyPart.RIGHT_ARM, slim_arms=True)),
            [PixelRect(44, 16, 3, 4), PixelRect(47, 16, 3, 4), PixelRect(40, 20, 4, 12),
             PixelRect(44, 20, 3, 12), PixelRect(47, 20, 4, 12), PixelRect(51, 20, 3, 12)],
        )
        self.assertEqual(face_set_for(BodyPart.RIGHT_SLEEVE, True).back, PixelRect(51, 36, 3, 12))
        self.assertEqual(face_set_for(BodyPart.LEFT_ARM, True).left, PixelRect(39, 52, 4, 12))
        self.assertEqual(face_set_for(BodyPart.LEFT_SLEEVE, True).bottom, PixelRect(55, 48, 3, 4))

    def test_slim_flag_only_affects_arms(self) -> None:
        for part in BodyPart:
            with self.subTest(part=part):
                same = face_set_for(part, False) == face_set_for(part, True)
                self.assertEqual(same, not part.has_slim_variant)
        self.assertEqual(
            {p for p in BodyPart if p.has_slim_variant},
            {BodyPart.RIGHT_ARM, BodyPart.RIGHT_SLEEVE, BodyPart.LEFT_ARM, BodyPart.LEFT_SLEEVE},
        )

    def test_all_rects_fit_reference_texture(self) -> None:
        for part in BodyPart:
            for slim in (False, True):
                for rect in face_set_for(part, slim):
                    self.assertGreater(rect.w, 0)
                    self.assertGreater(rect.h, 0)
                    self.assertGreaterEqual(rect.x, 0)
                    self.assertGreaterEqual(rect.y, 0)
                    self.assertLessEqual(rect.x + rect.w, 64)
                    self.assertLessEqual(rect.y + rect.h, 64)


class TestBodyPart(unittest.TestCase):
    def test_roles(self) -> None:
        base = {p for p in BodyPart if p.role is Role.BASE}
        self.assertEqual(base, {BodyPart.HEAD, BodyPart.TORSO, BodyPart.RIGHT_ARM,
                                BodyPart.LEFT_ARM, BodyPart.RIGHT_LEG, BodyPart.LEFT_LEG})
        self.assertTrue(BodyPart.HAT.is_overlay)
        self.assertFalse(BodyPart.HEAD.is_overlay)

    def test_overlay_base_parts(self) -> None:
        self.assertIs(BodyPart.HAT.base, BodyPart.HEAD)
        self.assertIs(BodyPart.JACKET.base, BodyPart.TORSO)
        self.assertIs(BodyPart.RIGHT_SLEEVE.base, BodyPart.RIGHT_ARM)
        self.assertIs(BodyPart.LEFT_SLEEVE.base, BodyPart.LEFT_ARM)
        self.assertIs(BodyPart.RIGHT_PANTS.base, BodyPart.RIGHT_LEG)
        self.assertIs(BodyPart.LEFT_PANTS.base, BodyPart.LEFT_LEG)
        self.assertIsNone(BodyPart.HEAD.base)

    def test_from_key(self) -> None:
        self.assertIs(BodyPart.from_key("left_pants"), BodyPart.LEFT_PANTS)
        with self.assertRaises(KeyError):
            BodyPart.from_key("cape")


class TestScaling(unittest.TestCase):
    def test_scale_multiplies_every_field(self) -> None:
        hat = face_set_for(BodyPart.HAT)
        scaled = scale_face_set(hat, 4)
        self.assertIsInstance(scaled, BoxFaceSet)
        self.assertEqual(scaled.top, PixelRect(160, 0, 32, 32))
        self.assertEqual(scaled.back, PixelRect(224, 32, 32, 32))

    def test_scale_one_is_identity(self) -> None:
        for part in BodyPart:
            self.assertEqual(scale_face_set(face_set_for(part), 1), face_set_for(part))


if __name__ == "__main__":
    unittest.main()
