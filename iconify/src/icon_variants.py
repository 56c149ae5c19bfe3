"""
Icon state variants.

Action resource icons come in Standard, Highlight, Missing and Used states.
An artist can supply a state explicitly by placing ``<stem>_<State><ext>``
next to the source image (``Logo.png`` -> ``Logo_Missing.png``). When that
file is absent the source image is recolored instead:

    Missing   -> (46, 44, 42)    near black
    Used      -> (120, 118, 116) mid grey
    Highlight -> (209, 207, 205) near white

Each fill replaces RGB and keeps the pixel's alpha, so the silhouette of the
icon survives.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, NamedTuple, Optional, Tuple

import numpy as np
from PIL import Image

from ..constants import HIGHLIGHT_FILL_RGB, MISSING_FILL_RGB, USED_FILL_RGB

logger = logging.getLogger(__name__)

ImageTransform = Callable[[Image.Image], Image.Image]


class IconType(Enum):
    Standard = 'Standard'
    Highlight = 'Highlight'
    Missing = 'Missing'
    Used = 'Used'


# ============================================================================
# FALLBACK FILLS
# ============================================================================

def fill_rgb_keep_alpha(img_array: np.ndarray, rgb: Tuple[int, int, int]) -> np.ndarray:
    """Solid ``rgb`` image with the source alpha."""
    h, w = img_array.shape[:2]
    if len(img_array.shape) == 3 and img_array.shape[2] == 4:
        alpha = img_array[:, :, 3]
    else:
        alpha = np.full((h, w), 255, dtype=np.uint8)

    result = np.zeros((h, w, 4), dtype=np.uint8)
    result[:, :, 0] = rgb[0]
    result[:, :, 1] = rgb[1]
    result[:, :, 2] = rgb[2]
    result[:, :, 3] = alpha
    return result


def _fill_transform(rgb: Tuple[int, int, int]) -> ImageTransform:
    def transform(image: Image.Image) -> Image.Image:
        filled = fill_rgb_keep_alpha(np.array(image.convert('RGBA')), rgb)
        return Image.fromarray(filled)
    transform.__name__ = f"fill_{rgb[0]}_{rgb[1]}_{rgb[2]}"
    return transform


ICON_TRANSFORMS: Dict[IconType, ImageTransform] = {
    IconType.Missing: _fill_transform(MISSING_FILL_RGB),
    IconType.Used: _fill_transform(USED_FILL_RGB),
    IconType.Highlight: _fill_transform(HIGHLIGHT_FILL_RGB),
}


def get_icon_transform(icon_type: IconType) -> Optional[ImageTransform]:
    """Fallback recolor for a state; None (identity) for Standard."""
    return ICON_TRANSFORMS.get(icon_type)


# ============================================================================
# RESOLUTION
# ============================================================================

class VariantSource(NamedTuple):
    """Image to render for a variant and the transform to apply to it."""
    image_path: Path
    transform: Optional[ImageTransform]


def get_override_path(source_path: Path, icon_type: IconType) -> Path:
    """``dir/Logo.png`` -> ``dir/Logo_Missing.png``."""
    source_path = Path(source_path)
    return source_path.with_name(f"{source_path.stem}_{icon_type.value}{source_path.suffix}")


def resolve_variant(source_path: Path, icon_type: IconType) -> VariantSource:
    """Decide which image and transform produce an icon state.

    Args:
        source_path: The standard icon image
        icon_type: Requested state

    Returns:
        VariantSource with either the override image and no transform, or the
        source image and the state's fallback fill
    """
    source_path = Path(source_path)
    if icon_type is IconType.Standard:
        return VariantSource(source_path, None)

    override_path = get_override_path(source_path, icon_type)
    if override_path.is_file():
        logger.debug("Using %s override: %s", icon_type.value, override_path)
        return VariantSource(override_path, None)

    logger.debug("No %s override for %s, using fallback fill", icon_type.value, source_path.name)
    return VariantSource(source_path, get_icon_transform(icon_type))
