"""
Skill icon atlas baking.

Packs every sprite in a folder into one BC7 atlas for a BG3 mod, following
https://bg3.wiki/wiki/Modding:Creating_Item_Icons:

    Public/Game/GUI/Assets/ControllerUIIcons/skills_png/<icon>.DDS   144x144
    Public/Game/GUI/Assets/Tooltips/Icons/<icon>.DDS                 380x380
    Public/<mod>/Assets/Textures/Icons/<Mod>_Icons.DDS               atlas, 64x64 cells
    Public/<mod>/GUI/Icons_Skills.lsx                                UV table
    Public/Game/Content/UI/[PAK]_UI/<atlas id>.lsf.lsx               texture bank

The UV table and the texture bank share a freshly generated atlas id.
"""

import logging
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from PIL import Image

from ..constants import ATLAS_CELL_SIZE, CONTROLLER_ICON_SIZE, TEXTURE_BANK_TEMPLATE, TOOLTIP_ICON_SIZE
from .atlas_geometry import AtlasLayout, GridPoint, get_uvs, iter_grid_points
from .dds_writing import save_dds_image
from .icon_rendering import composite_into_atlas, generate_icon, wait_for_all
from .image_loading import load_source_image
from .lsx_writing import LsxWriter
from .mod_support import ModLayout, gather_image_files, preclean

logger = logging.getLogger(__name__)


class NoImagesFoundError(ValueError):
    """The atlas input folder holds no supported images."""


@dataclass
class AtlasBuildResult:
    atlas_id: str
    layout: AtlasLayout
    atlas_path: Path
    uv_table_path: Path
    texture_bank_path: Path
    image_map: Dict[str, GridPoint] = field(default_factory=dict)
    icon_paths: List[Path] = field(default_factory=list)


# ============================================================================
# DESCRIPTORS
# ============================================================================

def write_uv_table(
    image_map: Dict[str, GridPoint],
    atlas_id: str,
    layout: AtlasLayout,
    atlas_partial_path: str,
    uv_table_path: Path,
) -> Path:
    """Write Icons_Skills.lsx: the UV of every icon plus atlas info."""
    writer = LsxWriter()
    with writer.region('IconUVList'):
        with writer.node('root'):
            with writer.children():
                for name, point in image_map.items():
                    upper_left, lower_right = get_uvs(point, layout.axis_length)
                    with writer.node('IconUV'):
                        writer.fixed_string('MapKey', name)
                        writer.float32('U1', upper_left.u)
                        writer.float32('U2', lower_right.u)
                        writer.float32('V1', upper_left.v)
                        writer.float32('V2', lower_right.v)

    with writer.region('TextureAtlasInfo'):
        with writer.node('root'):
            with writer.children():
                with writer.node('TextureAtlasIconSize'):
                    writer.int32('Height', layout.cell_size)
                    writer.int32('Width', layout.cell_size)
                with writer.node('TextureAtlasPath'):
                    writer.string('Path', atlas_partial_path.replace('\\', '/'))
                    writer.fixed_string('UUID', atlas_id)
                with writer.node('TextureAtlasTextureSize'):
                    writer.int32('Height', layout.texture_size)
                    writer.int32('Width', layout.texture_size)

    return writer.save(uv_table_path)


def write_texture_bank(atlas_id: str, atlas_partial_path: str, bank_path: Path, swap_tag: bool = True) -> Path:
    """Write the TextureBank resource registering the atlas with the UI."""
    writer = LsxWriter(swap_tag=swap_tag)
    with writer.region('TextureBank'):
        with writer.node('TextureBank'):
            with writer.children():
                with writer.node('Resource'):
                    writer.fixed_string('ID', atlas_id)
                    writer.boolean('Localized', False)
                    writer.ls_string('Name', Path(atlas_partial_path).stem)
                    writer.boolean('SRGB', True)
                    writer.ls_string('SourceFile', atlas_partial_path.replace('\\', '/'))
                    writer.boolean('Streaming', True)
                    writer.fixed_string('Template', TEXTURE_BANK_TEMPLATE)
                    writer.int32('Type', 0)

    return writer.save(bank_path)


# ============================================================================
# ATLAS BUILD
# ============================================================================

def create_atlas(
    input_dir: Union[str, Path],
    mod_root: Union[str, Path],
    max_workers: Optional[int] = None,
) -> AtlasBuildResult:
    """Bake the skill icon atlas and per-icon DDS files for a mod.

    Args:
        input_dir: Folder of source sprites (not searched recursively)
        mod_root: Root folder of the mod; its name is the mod name
        max_workers: Thread pool size for standalone icons

    Returns:
        AtlasBuildResult describing the written files

    Raises:
        NoImagesFoundError: If ``input_dir`` holds no supported images. Nothing
            is written or deleted in that case.
    """
    image_files = gather_image_files(input_dir)
    if not image_files:
        raise NoImagesFoundError(f"No images found in {input_dir}!")

    mod = ModLayout(mod_root)
    preclean(*mod.atlas_outputs())

    layout = AtlasLayout.for_image_count(len(image_files), ATLAS_CELL_SIZE)
    logger.info("Packing %d image(s) into a %dx%d atlas (%d px)",
                len(image_files), layout.axis_length, layout.axis_length, layout.texture_size)

    atlas = Image.new('RGBA', (layout.texture_size, layout.texture_size), (0, 0, 0, 0))
    image_map: Dict[str, GridPoint] = {}
    futures: List[Future] = []

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        for image_file, point in zip(image_files, iter_grid_points(len(image_files), layout.axis_length)):
            image_name = image_file.stem
            image = load_source_image(image_file)

            futures.append(generate_icon(executor, image, TOOLTIP_ICON_SIZE, mod.tooltip_icon_dir, image_name))
            futures.append(generate_icon(executor, image, CONTROLLER_ICON_SIZE, mod.controller_icon_dir, image_name))

            composite_into_atlas(atlas, image, layout.cell_size, point)
            image_map[image_name] = point
            image.close()

        atlas_id = str(uuid.uuid4())
        atlas_path = save_dds_image(atlas, mod.atlas_path)
        logger.info("Saved atlas to: %s", atlas_path)
        uv_table_path = write_uv_table(image_map, atlas_id, layout, mod.atlas_partial_path, mod.uv_table_path)
        bank_path = write_texture_bank(atlas_id, mod.ui_registration_path, mod.texture_bank_path(atlas_id))

        icon_paths = wait_for_all(futures)

    return AtlasBuildResult(
        atlas_id=atlas_id,
        layout=layout,
        atlas_path=atlas_path,
        uv_table_path=uv_table_path,
        texture_bank_path=bank_path,
        image_map=image_map,
        icon_paths=icon_paths,
    )
