"""
Source image loading utilities.

Loads png/gif/jpg/bmp/webp sprites using imageio and converts them to RGBA
images for the resize, transform and atlas compositing steps.
"""

import logging
from pathlib import Path
from typing import Union

import numpy as np
import imageio.v3 as iio
from PIL import Image

logger = logging.getLogger(__name__)


def to_rgba_array(img_data: np.ndarray) -> np.ndarray:
    """Expand a decoded grayscale/RGB/RGBA array to (h, w, 4) uint8."""
    if len(img_data.shape) == 2:
        # Grayscale
        h, w = img_data.shape
        rgba = np.zeros((h, w, 4), dtype=np.uint8)
        rgba[:, :, 0] = img_data
        rgba[:, :, 1] = img_data
        rgba[:, :, 2] = img_data
        rgba[:, :, 3] = 255
        return rgba
    elif img_data.shape[2] == 3:
        # RGB
        h, w = img_data.shape[:2]
        rgba = np.zeros((h, w, 4), dtype=np.uint8)
        rgba[:, :, :3] = img_data
        rgba[:, :, 3] = 255
        return rgba
    elif img_data.shape[2] == 4:
        return img_data.astype(np.uint8, copy=False)
    raise ValueError(f"Unsupported image shape: {img_data.shape}")


def load_source_image(image_path: Union[str, Path]) -> Image.Image:
    """Load an image file as an RGBA PIL image.

    Only the first frame of animated formats is used.

    Args:
        image_path: Path to the source image

    Returns:
        RGBA image

    Raises:
        OSError: If the file is missing or cannot be decoded
    """
    img_data = iio.imread(image_path, index=0, mode='RGBA')
    rgba = to_rgba_array(np.asarray(img_data))
    logger.debug("Loaded %s (%dx%d)", image_path, rgba.shape[1], rgba.shape[0])
    return Image.fromarray(rgba)
