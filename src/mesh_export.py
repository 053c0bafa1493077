import json
import os
from dataclasses import asdict
from typing import Dict, List

from skinmesh.pipeline import SkinPreview
from skinmesh.primitives import PixelImage


class MeshExporter:
    """
    Writes a built skin preview as Wavefront OBJ + MTL, the sanitized texture as PNG
    and a JSON summary next to it.
    The base and overlay draw ranges become separate OBJ groups with their own material,
    so viewers can render the overlay alpha-blended.
    """

    def __init__(self, name: str = "Skin"):
        self.name = name

    def save(self, preview: SkinPreview, image: PixelImage, out_base: str, include_overlay: bool = True) -> List[str]:
        """
        out_base: output path without extension.
        Returns the list of files written.
        """
        out_dir = os.path.dirname(out_base)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)

        obj_path = out_base + ".obj"
        mtl_path = out_base + ".mtl"
        png_path = out_base + ".png"
        json_path = out_base + ".json"

        written = []
        if not preview.mesh.is_empty:
            self._write_obj(preview, obj_path, mtl_path, include_overlay)
            self._write_mtl(mtl_path, os.path.basename(png_path))
            image.to_pil().save(png_path)
            written += [obj_path, mtl_path, png_path]

        with open(json_path, 'w') as f:
            json.dump(self.summary(preview, include_overlay), f, indent=2)
        written.append(json_path)

        print(f"Saved {self.name} to {out_base}.*")
        return written

    def summary(self, preview: SkinPreview, include_overlay: bool = True) -> Dict:
        mesh = preview.mesh
        overlay_parts = [p.key for p in mesh.parts if p.is_overlay]
        return {
            "name": self.name,
            "profile": asdict(preview.profile),
            "slim_arms": preview.slim_arms,
            "vertex_count": len(mesh.vertices) if include_overlay else mesh.base_vertex_count,
            "base_index_count": len(mesh.base_indices),
            "overlay_index_count": len(mesh.overlay_indices) if include_overlay else 0,
            "overlay_offset": mesh.overlay_offset,
            "parts": [p.key for p in mesh.parts if include_overlay or not p.is_overlay],
            "overlay_parts": overlay_parts if include_overlay else [],
        }

    def _write_obj(self, preview: SkinPreview, obj_path: str, mtl_path: str, include_overlay: bool):
        mesh = preview.mesh
        with open(obj_path, 'w', encoding="utf-8", newline="\n") as f:
            f.write(f"# {self.name}: {preview.profile.width}x{preview.profile.height} skin\n")
            f.write(f"mtllib {os.path.basename(mtl_path)}\n")

            # OBJ is right-handed: mirror Z so winding and texture orientation survive.
            # Texture v is flipped to OBJ's bottom-left origin.
            # Without the overlay only the base prefix of the vertex list is referenced
            vertices = mesh.vertices if include_overlay else mesh.vertices[:mesh.base_vertex_count]
            for v in vertices:
                x, y, z = v.position
                f.write(f"v {x:g} {y:g} {0.0 - z:g}\n")
            for v in vertices:
                f.write(f"vt {v.uv[0]:.6f} {1.0 - v.uv[1]:.6f}\n")
            for v in vertices:
                nx, ny, nz = v.normal
                f.write(f"vn {nx:g} {ny:g} {0.0 - nz:g}\n")

            groups = [("base", mesh.base_indices)]
            if include_overlay and mesh.overlay_indices:
                groups.append(("overlay", mesh.overlay_indices))

            for group, indices in groups:
                f.write(f"g {group}\n")
                f.write(f"usemtl {self.name}_{group}\n")
                for i in range(0, len(indices), 3):
                    a, b, c = (idx + 1 for idx in indices[i:i + 3])
                    f.write(f"f {a}/{a}/{a} {b}/{b}/{b} {c}/{c}/{c}\n")

    def _write_mtl(self, mtl_path: str, tex_name: str):
        with open(mtl_path, 'w', encoding="utf-8", newline="\n") as f:
            for group in ("base", "overlay"):
                f.write(f"newmtl {self.name}_{group}\n")
                f.write("Ka 1.000 1.000 1.000\n")
                f.write("Kd 1.000 1.000 1.000\n")
                f.write(f"map_Kd {tex_name}\n")
                if group == "overlay":
                    f.write(f"map_d {tex_name}\n")
                f.write("\n")
