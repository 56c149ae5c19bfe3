"""
Icon rendering and atlas compositing.

Standalone icons (tooltip, controller, action resource states) are resized,
optionally recolored and saved as DDS on a thread pool. Atlas cells are
drawn into the shared atlas image on the calling thread.
"""

import logging
from concurrent.futures import Executor, Future
from pathlib import Path
from typing import Iterable, List, Optional

from PIL import Image

from ..constants import DDS_EXTENSION
from .atlas_geometry import GridPoint
from .dds_writing import save_dds_image
from .icon_variants import ImageTransform

logger = logging.getLogger(__name__)


def resize_square(image: Image.Image, side_length: int) -> Image.Image:
    """Resized copy of ``image`` at side_length x side_length."""
    return image.resize((side_length, side_length), Image.Resampling.LANCZOS)


def render_icon(
    image: Image.Image,
    side_length: int,
    output_dir: Path,
    image_name: str,
    transform: Optional[ImageTransform] = None,
) -> Path:
    """Resize, recolor and save one icon as ``output_dir/image_name.DDS``.

    Args:
        image: Source image (not modified)
        side_length: Target width and height in pixels
        output_dir: Folder for the icon, created if missing
        image_name: File name without extension
        transform: Optional recolor applied after resizing

    Returns:
        Path of the saved icon
    """
    target_path = Path(output_dir) / (image_name + DDS_EXTENSION)
    icon = resize_square(image, side_length)
    if transform is not None:
        icon = transform(icon)
    save_dds_image(icon, target_path)
    logger.info("Saved %dx%d icon to: %s", side_length, side_length, target_path)
    return target_path


def generate_icon(
    executor: Executor,
    image: Image.Image,
    side_length: int,
    output_dir: Path,
    image_name: str,
    transform: Optional[ImageTransform] = None,
) -> Future:
    """Schedule :func:`render_icon` on ``executor`` without waiting for it.

    The image is copied before submitting so the caller may keep using or
    closing its own image.
    """
    clone = image.copy()
    return executor.submit(render_icon, clone, side_length, Path(output_dir), image_name, transform)


def composite_into_atlas(atlas: Image.Image, image: Image.Image, cell_size: int, point: GridPoint):
    """Draw a cell_size copy of ``image`` over the atlas cell at ``point``.

    Not thread safe: call from the thread that owns ``atlas``.
    """
    cell = resize_square(image.convert('RGBA'), cell_size)
    atlas.alpha_composite(cell, dest=(point.column * cell_size, point.row * cell_size))


def wait_for_all(futures: Iterable[Future]) -> List[Path]:
    """Block until every render finished; re-raises the first failure."""
    return [future.result() for future in futures]
