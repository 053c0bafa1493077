from .primitives import PixelImage, PixelRect, BoxFaceSet, Vertex, BuiltMesh
from .classifier import TextureProfile, classify
from .atlas import BodyPart, Role, face_set_for, scale_face_set
from .sanitizer import sanitize_base_alpha
from .probe import is_present
from .builder import MeshBuilder, build_mesh
from .pipeline import SkinPreview, prepare_skin, build_preview
