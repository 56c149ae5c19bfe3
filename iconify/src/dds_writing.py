"""
DDS texture writing.

Encodes RGBA images to BC7 with etcpak and stores them in a DDS container
with the DX10 extension header, which is what the BG3 GUI expects for icons.
"""

import logging
import struct
from pathlib import Path
from typing import List, Union

import etcpak
from PIL import Image

from ..constants import BC7_BEST_UBER_LEVEL

logger = logging.getLogger(__name__)

DDS_MAGIC = b"DDS "
DXGI_FORMAT_BC7_UNORM = 98
D3D10_RESOURCE_DIMENSION_TEXTURE2D = 3
BC7_BLOCK_BYTES = 16


def bc7_size(width: int, height: int) -> int:
    """Byte size of one BC7 compressed level."""
    return max(1, (width + 3) // 4) * max(1, (height + 3) // 4) * BC7_BLOCK_BYTES


def build_dds_header_bc7(width: int, height: int, mip_count: int = 1) -> bytes:
    """DDS magic + DDS_HEADER + DDS_HEADER_DXT10 for a BC7 texture."""
    dds_header_size = 124
    dds_pf_size = 32

    ddsd_caps = 0x1
    ddsd_height = 0x2
    ddsd_width = 0x4
    ddsd_pixel_format = 0x1000
    ddsd_mipmap_count = 0x20000
    ddsd_linear_size = 0x80000

    ddpf_fourcc = 0x4
    ddscaps_complex = 0x8
    ddscaps_texture = 0x1000
    ddscaps_mipmap = 0x400000

    flags = ddsd_caps | ddsd_height | ddsd_width | ddsd_pixel_format | ddsd_linear_size
    caps = ddscaps_texture
    if mip_count > 1:
        flags |= ddsd_mipmap_count
        caps |= ddscaps_complex | ddscaps_mipmap

    header = struct.pack("<I", dds_header_size)
    header += struct.pack("<I", flags)
    header += struct.pack("<I", height)
    header += struct.pack("<I", width)
    header += struct.pack("<I", bc7_size(width, height))
    header += struct.pack("<I", 0)          # depth
    header += struct.pack("<I", mip_count)
    header += struct.pack("<11I", *([0] * 11))

    pf = struct.pack("<I", dds_pf_size)
    pf += struct.pack("<I", ddpf_fourcc)
    pf += b"DX10"
    pf += struct.pack("<5I", 0, 0, 0, 0, 0)
    header += pf

    header += struct.pack("<I", caps)
    header += struct.pack("<4I", 0, 0, 0, 0)

    dx10 = struct.pack("<5I", DXGI_FORMAT_BC7_UNORM, D3D10_RESOURCE_DIMENSION_TEXTURE2D, 0, 1, 0)
    return DDS_MAGIC + header + dx10


def _bc7_params():
    params = etcpak.BC7CompressBlockParams()
    params.m_uber_level = BC7_BEST_UBER_LEVEL
    return params


def encode_bc7(image: Image.Image) -> bytes:
    """Compress one RGBA level to BC7 blocks."""
    width, height = image.size
    rgba = image.convert('RGBA').tobytes()
    return etcpak.compress_bc7(rgba, width, height, _bc7_params())


def build_mip_chain(image: Image.Image, max_mip_levels: int = -1) -> List[Image.Image]:
    """Top level plus halved levels while they stay 4-pixel aligned.

    If ``max_mip_levels`` is less than 2 only the top level is returned.
    """
    levels = [image]
    while len(levels) < max_mip_levels:
        width, height = levels[-1].size
        next_size = (width // 2, height // 2)
        if next_size[0] < 4 or next_size[1] < 4 or next_size[0] % 4 or next_size[1] % 4:
            break
        levels.append(levels[-1].resize(next_size, Image.Resampling.LANCZOS))
    return levels


def save_dds_image(image: Image.Image, target_path: Union[str, Path], max_mip_levels: int = -1) -> Path:
    """Save an image as a BC7 (best quality) DDS texture.

    Args:
        image: Image to save, converted to RGBA if needed
        target_path: Destination .DDS file; parent folders are created and an
            existing file is replaced
        max_mip_levels: Number of mip levels to store. Less than 2 stores only
            the full size level

    Returns:
        The written path

    Raises:
        ValueError: If the image side lengths are not multiples of 4
    """
    width, height = image.size
    if width % 4 or height % 4:
        raise ValueError(f"BC7 textures need sides that are multiples of 4, got {width}x{height}")

    target_path = Path(target_path)
    target_path.parent.mkdir(parents=True, exist_ok=True)
    if target_path.exists():
        target_path.unlink()

    levels = build_mip_chain(image.convert('RGBA'), max_mip_levels)
    with open(target_path, 'wb') as f:
        f.write(build_dds_header_bc7(width, height, len(levels)))
        for level in levels:
            f.write(encode_bc7(level))

    logger.debug("Wrote %dx%d BC7 DDS (%d mips): %s", width, height, len(levels), target_path)
    return target_path
