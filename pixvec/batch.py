"""Batch conversion of an image folder."""
import logging
from collections import Counter
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple, Union

from pixvec.types import ConversionConfig, VectorizationError
from pixvec.pipeline import PixelArtPipeline

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = {'.png', '.gif', '.bmp', '.webp', '.tiff', '.ico'}

BatchResult = Tuple[Path, Path, bool, str]


def get_image_files(folder: Union[str, Path], extensions: Optional[Set[str]] = None) -> List[Path]:
    """Get all image files from a folder."""
    if extensions is None:
        extensions = DEFAULT_EXTENSIONS

    folder = Path(folder)
    if not folder.exists():
        raise FileNotFoundError(f"Input folder not found: {folder}")

    images = []
    for ext in extensions:
        images.extend(folder.glob(f"*{ext}"))
        images.extend(folder.glob(f"*{ext.upper()}"))

    return sorted(set(images))


def output_paths(images: List[Path], output_folder: Path) -> Dict[Path, Path]:
    """
    Map each image to output_folder/<stem>.svg.

    Images sharing a stem (a.png, a.gif) get the extension folded into
    the name instead (a_png.svg, a_gif.svg) so none overwrites another.
    """
    stems = Counter(path.stem.lower() for path in images)
    paths = {}
    for path in images:
        if stems[path.stem.lower()] > 1:
            name = f"{path.stem}_{path.suffix.lstrip('.').lower()}.svg"
        else:
            name = f"{path.stem}.svg"
        paths[path] = output_folder / name
    return paths


def convert_one(
    input_path: Path,
    output_path: Path,
    config: Optional[ConversionConfig] = None
) -> BatchResult:
    """
    Convert a single image to output_path.

    Module-level so it can be sent to worker processes.

    Returns:
        Tuple of (input_path, output_path, success, message)
    """
    try:
        PixelArtPipeline(config).process(input_path, output_path)
    except (FileNotFoundError, VectorizationError) as e:
        return input_path, output_path, False, f"Error: {e}"
    return input_path, output_path, True, "Success"


def convert_folder(
    input_folder: Union[str, Path],
    output_folder: Union[str, Path],
    config: Optional[ConversionConfig] = None,
    workers: Optional[int] = None
) -> List[BatchResult]:
    """
    Convert every image in a folder to SVG.

    Images are independent, so they are spread over worker processes.
    One failing image does not stop the others.

    Args:
        input_folder: Folder with source images
        output_folder: Folder for SVG output (created if missing)
        config: Conversion configuration
        workers: Worker process count (None = CPU count, 1 = in-process)

    Returns:
        Results in input file order
    """
    images = get_image_files(input_folder)
    output_folder = Path(output_folder)
    output_folder.mkdir(parents=True, exist_ok=True)

    if not images:
        logger.warning(f"No images found in {input_folder}")
        return []

    logger.info(f"Converting {len(images)} images")
    targets = output_paths(images, output_folder)

    if workers == 1:
        results = [convert_one(path, targets[path], config) for path in images]
    else:
        results = []
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(convert_one, path, targets[path], config)
                for path in images
            ]
            for future in as_completed(futures):
                results.append(future.result())
        order = {path: i for i, path in enumerate(images)}
        results.sort(key=lambda result: order[result[0]])

    failed = [r for r in results if not r[2]]
    for input_path, _, _, message in failed:
        logger.warning(f"{input_path.name}: {message}")
    logger.info(f"Batch complete: {len(results) - len(failed)} ok, {len(failed)} failed")

    return results
