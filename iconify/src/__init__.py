"""
Iconify - Package.

Modules:
    atlas_geometry    - Atlas axis length, grid cells and UV rectangles
    icon_variants     - Icon states, override lookup and fallback recolors
    image_loading     - Source image loading via imageio
    dds_writing       - BC7 DDS texture writing via etcpak
    icon_rendering    - Threaded icon renders and atlas compositing
    lsx_writing       - Scoped LSX document writer
    mod_support       - Mod output layout, image discovery, pre-clean
    atlas_baking      - Skill icon atlas build
    action_resources  - Action resource icon build
"""

from .atlas_geometry import AtlasLayout, GridPoint, UVCoordinate, UVRect, get_atlas_axis_length, get_uvs, iter_grid_points
from .icon_variants import IconType, VariantSource, get_icon_transform, get_override_path, resolve_variant
from .image_loading import load_source_image
from .dds_writing import save_dds_image
from .icon_rendering import composite_into_atlas, generate_icon, render_icon, wait_for_all
from .lsx_writing import LsxWriter
from .mod_support import ModLayout, gather_image_files, normalize_name, preclean
from .atlas_baking import AtlasBuildResult, NoImagesFoundError, create_atlas
from .action_resources import (
    ACTION_RESOURCE_ICON_SETTINGS,
    ActionResourceBuildResult,
    ActionResourceIconSetting,
    create_action_resource_icons,
)

__all__ = [
    'AtlasLayout', 'GridPoint', 'UVCoordinate', 'UVRect',
    'get_atlas_axis_length', 'get_uvs', 'iter_grid_points',
    'IconType', 'VariantSource', 'get_icon_transform', 'get_override_path', 'resolve_variant',
    'load_source_image',
    'save_dds_image',
    'composite_into_atlas', 'generate_icon', 'render_icon', 'wait_for_all',
    'LsxWriter',
    'ModLayout', 'gather_image_files', 'normalize_name', 'preclean',
    'AtlasBuildResult', 'NoImagesFoundError', 'create_atlas',
    'ACTION_RESOURCE_ICON_SETTINGS', 'ActionResourceBuildResult',
    'ActionResourceIconSetting', 'create_action_resource_icons',
]
