"""
Mod layout and file discovery.

Resolves where generated icons and descriptors live inside a BG3 mod folder,
finds the source sprites to pack, and clears stale outputs before a build.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import List, Union

from ..constants import (
    ACTION_RESOURCE_GUI_DIR,
    ACTION_RESOURCE_METADATA,
    ATLAS_FILE_SUFFIX,
    ATLAS_ICON_DIR,
    CONTROLLER_ICON_DIR,
    DDS_EXTENSION,
    SKILLS_UV_TABLE,
    SUPPORTED_IMAGE_EXTENSIONS,
    TOOLTIP_ICON_DIR,
    UI_BANK_DIR,
)

logger = logging.getLogger(__name__)


def normalize_name(name: str) -> str:
    """Replace everything except ASCII letters and digits with '_'.

    ``"DnD-Epic6"`` -> ``"DnD_Epic6"``
    """
    return ''.join(c if c.isascii() and c.isalnum() else '_' for c in name)


def to_forward_slashes(path: Union[str, Path]) -> str:
    return str(path).replace('\\', '/')


class ModLayout:
    """Output locations of a mod, rooted at the mod folder."""

    def __init__(self, mod_root: Union[str, Path]):
        self.root = Path(mod_root)
        self.name = self.root.resolve().name
        self.normalized_name = normalize_name(self.name)

    def __repr__(self):
        return f"ModLayout(name={self.name}, root={self.root})"

    # Skill icon atlas --------------------------------------------------

    @property
    def controller_icon_dir(self) -> Path:
        return self.root.joinpath(*CONTROLLER_ICON_DIR)

    @property
    def tooltip_icon_dir(self) -> Path:
        return self.root.joinpath(*TOOLTIP_ICON_DIR)

    @property
    def public_dir(self) -> Path:
        return self.root / 'Public' / self.name

    @property
    def atlas_partial_path(self) -> str:
        """Atlas path relative to Public/<mod>, as referenced by the UV table."""
        return '/'.join(ATLAS_ICON_DIR + (self.normalized_name + ATLAS_FILE_SUFFIX + DDS_EXTENSION,))

    @property
    def ui_registration_path(self) -> str:
        """Atlas path relative to the mod root, as referenced by the texture bank."""
        return f"Public/{self.name}/{self.atlas_partial_path}"

    @property
    def atlas_dir(self) -> Path:
        return self.public_dir.joinpath(*ATLAS_ICON_DIR)

    @property
    def atlas_path(self) -> Path:
        return self.public_dir / self.atlas_partial_path

    @property
    def ui_bank_dir(self) -> Path:
        return self.root.joinpath(*UI_BANK_DIR)

    @property
    def uv_table_path(self) -> Path:
        return self.public_dir.joinpath(*SKILLS_UV_TABLE)

    def texture_bank_path(self, atlas_id: str) -> Path:
        return self.ui_bank_dir / f"{atlas_id}.lsf.lsx"

    def atlas_outputs(self) -> List[Path]:
        """Everything an atlas build regenerates."""
        return [
            self.controller_icon_dir,
            self.tooltip_icon_dir,
            self.atlas_dir,
            self.ui_bank_dir,
            self.uv_table_path,
        ]

    # Action resources --------------------------------------------------

    @property
    def gui_dir(self) -> Path:
        return self.root.joinpath(*(part.format(mod=self.name) for part in ACTION_RESOURCE_GUI_DIR))

    @property
    def gui_metadata_path(self) -> Path:
        return self.gui_dir / ACTION_RESOURCE_METADATA


def gather_image_files(input_dir: Union[str, Path]) -> List[Path]:
    """Supported images directly inside ``input_dir``, in directory order."""
    files = []
    with os.scandir(input_dir) as entries:
        for entry in entries:
            if not entry.is_file():
                continue
            if os.path.splitext(entry.name)[1].lower() in SUPPORTED_IMAGE_EXTENSIONS:
                files.append(Path(entry.path))
    return files


def preclean(*paths: Path):
    """Delete files and folder trees left over from a previous build."""
    for path in paths:
        path = Path(path)
        if path.is_file():
            path.unlink()
            logger.debug("Removed file %s", path)
        elif path.is_dir():
            shutil.rmtree(path)
            logger.debug("Removed folder %s", path)
