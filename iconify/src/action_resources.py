"""
Action resource icons.

From https://mod.io/g/baldursgate3/r/implementing-custom-action-resources-with-impui
there are 4 kinds of action resource icon, all under Mods/<mod>/GUI:

    Keyboard icon (48x48), with Highlight/Missing/Used states:
        Assets/Shared/Resources[/<State>]/<name>.DDS
    Keyboard CC / level up icon (128x128):
        Assets/CC/icons_resources/<name>.DDS
    Controller front icon (80x80):
        Assets/ActionResources_c/Icons/<name>.DDS
    Controller resource icon (64x64), with OPTIONAL states:
        Assets/ActionResources_c/Icons/Resources[/<State>]/<name>.DDS

The optional controller states are not generated; the game falls back to
its default look for them. Every generated icon is also listed with its size
in GUI/metadata.lsx.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path, PureWindowsPath
from typing import Dict, List, Mapping, Optional, Tuple, Union

from PIL import Image

from ..constants import ICON_MIP_COUNT, METADATA_IMAGE_EXTENSION
from .icon_rendering import generate_icon, wait_for_all
from .icon_variants import IconType, resolve_variant
from .image_loading import load_source_image
from .lsx_writing import LsxWriter
from .mod_support import ModLayout, to_forward_slashes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionResourceIconSetting:
    icon_path: str  # relative to Mods/<mod>/GUI, '{0}' is the resource name
    side_length: int
    icon_type: IconType
    optional: bool = False

    def relative_path(self, resource_name: str) -> PureWindowsPath:
        return PureWindowsPath(self.icon_path.format(resource_name))


ACTION_RESOURCE_ICON_SETTINGS: Tuple[ActionResourceIconSetting, ...] = (
    ActionResourceIconSetting('Assets\\Shared\\Resources\\{0}.DDS', 48, IconType.Standard),
    ActionResourceIconSetting('Assets\\Shared\\Resources\\Highlight\\{0}.DDS', 48, IconType.Highlight),
    ActionResourceIconSetting('Assets\\Shared\\Resources\\Missing\\{0}.DDS', 48, IconType.Missing),
    ActionResourceIconSetting('Assets\\Shared\\Resources\\Used\\{0}.DDS', 48, IconType.Used),
    ActionResourceIconSetting('Assets\\CC\\icons_resources\\{0}.DDS', 128, IconType.Standard),
    ActionResourceIconSetting('Assets\\ActionResources_c\\Icons\\{0}.DDS', 80, IconType.Standard),
    ActionResourceIconSetting('Assets\\ActionResources_c\\Icons\\Resources\\{0}.DDS', 64, IconType.Standard),
    ActionResourceIconSetting('Assets\\ActionResources_c\\Icons\\Resources\\Highlight\\{0}.DDS', 64, IconType.Highlight, optional=True),
    ActionResourceIconSetting('Assets\\ActionResources_c\\Icons\\Resources\\Missing\\{0}.DDS', 64, IconType.Missing, optional=True),
    ActionResourceIconSetting('Assets\\ActionResources_c\\Icons\\Resources\\Used\\{0}.DDS', 64, IconType.Used, optional=True),
)


@dataclass
class ActionResourceBuildResult:
    metadata_path: Path
    image_sizes: Dict[str, int] = field(default_factory=dict)
    icon_paths: List[Path] = field(default_factory=list)


def metadata_key(relative_path: PureWindowsPath) -> str:
    """``Assets\\CC\\icons_resources\\X.DDS`` -> ``Assets/CC/icons_resources/X.png``."""
    return to_forward_slashes(relative_path.with_suffix(METADATA_IMAGE_EXTENSION))


def write_gui_metadata(image_sizes: Mapping[str, int], metadata_path: Path) -> Path:
    """Write GUI/metadata.lsx listing every icon with its size, sorted by path."""
    writer = LsxWriter()
    with writer.region('config'):
        with writer.node('config'):
            with writer.children():
                with writer.node('entries'):
                    with writer.children():
                        for path in sorted(image_sizes):
                            side = image_sizes[path]
                            with writer.node('Object'):
                                writer.fixed_string('MapKey', path)
                                with writer.children():
                                    with writer.node('entries'):
                                        writer.int16('h', side)
                                        writer.int8('mipcount', ICON_MIP_COUNT)
                                        writer.int16('w', side)

    return writer.save(metadata_path)


def _schedule_resource_icons(
    executor: ThreadPoolExecutor,
    mod: ModLayout,
    resource_name: str,
    image_path: Path,
    image_sizes: Dict[str, int],
) -> List[Future]:
    futures = []
    image = load_source_image(image_path)
    try:
        for setting in ACTION_RESOURCE_ICON_SETTINGS:
            if setting.optional:  # Not generated yet
                continue

            variant_image = image
            transform = None
            if setting.icon_type is not IconType.Standard:
                variant = resolve_variant(image_path, setting.icon_type)
                transform = variant.transform
                if variant.image_path != image_path:
                    variant_image = load_source_image(variant.image_path)

            relative_path = setting.relative_path(resource_name)
            output_dir = mod.gui_dir.joinpath(*relative_path.parent.parts)
            futures.append(generate_icon(executor, variant_image, setting.side_length,
                                         output_dir, resource_name, transform))
            image_sizes[metadata_key(relative_path)] = setting.side_length

            if variant_image is not image:
                variant_image.close()
    finally:
        image.close()
    return futures


def create_action_resource_icons(
    mod_root: Union[str, Path],
    resources: Mapping[str, Union[str, Path]],
    max_workers: Optional[int] = None,
) -> ActionResourceBuildResult:
    """Generate every action resource icon and the GUI metadata for a mod.

    Args:
        mod_root: Root folder of the mod; its name is the mod name
        resources: Action resource name (as in ActionResourceDefinitions) to
            source image path
        max_workers: Thread pool size for the icon renders

    Returns:
        ActionResourceBuildResult with the metadata path and size table
    """
    mod = ModLayout(mod_root)
    image_sizes: Dict[str, int] = {}
    futures: List[Future] = []

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        for resource_name, image_path in resources.items():
            logger.info("Generating action resource icons for %s from %s", resource_name, image_path)
            futures.extend(_schedule_resource_icons(executor, mod, resource_name, Path(image_path), image_sizes))

        metadata_path = write_gui_metadata(image_sizes, mod.gui_metadata_path)
        icon_paths = wait_for_all(futures)

    return ActionResourceBuildResult(
        metadata_path=metadata_path,
        image_sizes=dict(sorted(image_sizes.items())),
        icon_paths=icon_paths,
    )
