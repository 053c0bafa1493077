import argparse
import sys
import os
import glob
import multiprocessing
from typing import List, Optional, Tuple

from skin_loader import SkinLoader
from mesh_export import MeshExporter

from skinmesh.pipeline import prepare_skin, build_preview

MODELS = ["auto", "classic", "slim"]


def process_skin_wrapper(args: Tuple) -> bool:
    """
    Wrapper for multiprocessing.
    args: (input_path, output_path, model, overlay, info_only, verbose)
    Each worker runs the whole load -> sanitize -> build -> export chain for one skin.
    """
    return process_skin(*args)


def resolve_output_base(input_path: str, output_path: Optional[str]) -> str:
    base_name = os.path.basename(input_path.rstrip("/")).rsplit('.', 1)[0] or "skin"
    if not output_path:
        return os.path.join(f"{base_name} output", base_name)
    if os.path.isdir(output_path) or output_path.endswith(os.sep):
        return os.path.join(output_path, base_name)
    # Explicit file path: drop any extension, the exporter adds its own
    return output_path.rsplit('.', 1)[0] if output_path.lower().endswith(".obj") else output_path


def process_skin(input_path: str, output_path: Optional[str], model: str = "auto",
                 overlay: bool = True, info_only: bool = False, verbose: bool = False) -> bool:
    """
    Process a single skin. Returns success.
    """
    try:
        try:
            image = SkinLoader.load_skin(input_path)
        except Exception as e:
            print(f"Error loading skin {os.path.basename(input_path)}: {e}")
            return False

        # Model detection reads the arm pixel, so it has to see the alpha before sanitizing
        detected_model = model
        if detected_model == "auto":
            detected_model = SkinLoader.detect_model(image)

        profile = prepare_skin(image)
        preview = build_preview(image, slim_arms=(detected_model == "slim"), profile=profile)

        for line in profile.describe():
            print(f"  {line}")
        print(f"  Model: {detected_model}")
        if verbose:
            print(f"  Base alpha fixed: {profile.base_alpha_fixed} pixels")
        if not profile.is_conforming and profile.width and profile.height:
            print(f"Warning: {os.path.basename(input_path)} is {profile.width}x{profile.height}; rendering best-effort at scale 1")

        mesh = preview.mesh
        overlay_names = [p.key for p in mesh.parts if p.is_overlay]
        print(f"  Mesh: {len(mesh.vertices)} vertices, {len(mesh.base_indices) // 3} base / {len(mesh.overlay_indices) // 3} overlay triangles")
        print(f"  Overlay: {', '.join(overlay_names) if overlay_names else 'none'}")

        if info_only:
            return True

        out_base = resolve_output_base(input_path, output_path)
        name = os.path.basename(out_base)
        MeshExporter(name=name).save(preview, image, out_base, include_overlay=overlay)
        return True

    except Exception as e:
        print(f"Error processing {input_path}: {e}")
        import traceback
        traceback.print_exc()
        return False


def select_skins(files: List[str], choice: str) -> List[str]:
    """
    Wizard selection: empty or "a" picks every file, a 1-based number picks one.
    """
    choice = choice.strip().lower()
    if choice in ("", "a", "all"):
        return list(files)
    if choice.isdigit() and 1 <= int(choice) <= len(files):
        return [files[int(choice) - 1]]
    return []


def interactive_mode():
    files = sorted(glob.glob("*.png"))
    if not files:
        print("No .png skins in the current directory. Use -i to point at one.")
        return

    for i, f in enumerate(files, start=1):
        print(f"{i:>3}. {f}")
    selected = select_skins(files, input("Skin number, or Enter for all: "))
    if not selected:
        print("Invalid selection.")
        return

    model = input(f"Arm model {MODELS} [auto]: ").strip().lower() or "auto"
    if model not in MODELS:
        print(f"Unknown model '{model}', using auto.")
        model = "auto"

    success_count = 0
    for idx, fpath in enumerate(selected):
        print(f"[{idx+1}/{len(selected)}] processing: {fpath}...")
        if process_skin(fpath, None, model):
            success_count += 1

    print(f"Done! {success_count}/{len(selected)} successful.")


def main():
    parser = argparse.ArgumentParser(description="Build textured 3D preview meshes from Minecraft skins.")
    parser.add_argument("-i", "--input", help="Skin file, directory of skins, URL or Minecraft username")
    parser.add_argument("-o", "--output", help="Output directory or file")
    parser.add_argument("-m", "--model", default="auto", choices=MODELS, help="Arm model")
    parser.add_argument("--no-overlay", action="store_true", help="Leave hat/jacket/sleeves/pants out of the export")
    parser.add_argument("--info", action="store_true", help="Only print the texture profile, write nothing")
    parser.add_argument("-v", "--verbose", action="store_true", help="Also report how many base-layer pixels were made opaque")

    if len(sys.argv) == 1:
        interactive_mode()
        return

    args = parser.parse_args()

    input_path = args.input
    if not input_path:
        print("Error: Input path required (use -i or interactive mode).")
        return

    files_to_process = []
    if os.path.isdir(input_path):
        files_to_process = [os.path.join(input_path, f) for f in sorted(os.listdir(input_path)) if f.lower().endswith('.png')]
        print(f"Found {len(files_to_process)} skins in directory.")
    else:
        # File, URL or username; SkinLoader sorts it out
        files_to_process.append(input_path)

    if not files_to_process:
        print("No valid input files found.")
        return

    overlay = not args.no_overlay

    # Multiprocessing
    cpu_count = multiprocessing.cpu_count()
    workers = max(1, min(cpu_count - 1, 8)) # Use up to 8 cores, leave 1 free

    if len(files_to_process) > 1:
        print(f"Batch processing {len(files_to_process)} skins using {workers} workers...")

        # Several skins never share one output path: -o is always a directory here
        output = args.output
        if output and not args.info:
            os.makedirs(output, exist_ok=True)
            output = os.path.join(output, "")

        tasks = [
            (f, output, args.model, overlay, args.info, args.verbose)
            for f in files_to_process
        ]

        if workers > 1:
            with multiprocessing.Pool(processes=workers) as pool:
                results = pool.map(process_skin_wrapper, tasks)
        else:
            # Serial fallback
            results = [process_skin_wrapper(task) for task in tasks]

        success_count = sum(1 for ok in results if ok)
    else:
        # Single skin
        print(f"Processing {files_to_process[0]}...")
        success = process_skin(files_to_process[0], args.output, args.model, overlay, args.info, args.verbose)
        success_count = 1 if success else 0

    print(f"\nBatch Complete. {success_count}/{len(files_to_process)} successful.")


if __name__ == "__main__":
    multiprocessing.freeze_support() # Windows support
    main()
