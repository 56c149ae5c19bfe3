"""
Iconify - Constants and Configuration

This module contains all constant values used by the generators:
- Atlas and icon sizes
- Supported input formats
- Fallback colors for icon state variants
- LSX document constants
- Mod-relative output locations

Based on: https://bg3.wiki/wiki/Modding:Creating_Item_Icons
"""

# ======================================================================
# ATLAS / ICON SIZES
# ======================================================================

ATLAS_CELL_SIZE = 64        # Side of one icon inside the skills atlas
TOOLTIP_ICON_SIZE = 380     # Public/Game/GUI/Assets/Tooltips/Icons
CONTROLLER_ICON_SIZE = 144  # Public/Game/GUI/Assets/ControllerUIIcons/skills_png

# ======================================================================
# INPUT FORMATS
# ======================================================================

SUPPORTED_IMAGE_EXTENSIONS = ('.png', '.gif', '.jpg', '.bmp', '.webp')

# ======================================================================
# ICON STATE FALLBACK COLORS
# ======================================================================
# RGB fill used when no <stem>_<State> override image exists next to the
# source image. Alpha always comes from the source pixel.

MISSING_FILL_RGB = (46, 44, 42)
USED_FILL_RGB = (120, 118, 116)
HIGHLIGHT_FILL_RGB = (209, 207, 205)

# ======================================================================
# DDS OUTPUT
# ======================================================================

DDS_EXTENSION = '.DDS'
METADATA_IMAGE_EXTENSION = '.png'  # Extension the GUI metadata refers to
BC7_BEST_UBER_LEVEL = 4            # bc7enc: 0 (fastest) .. 4 (best)

# ======================================================================
# LSX DOCUMENTS
# ======================================================================

LSX_VERSION = {'major': '4', 'minor': '0', 'revision': '0', 'build': '49'}
LSX_SWAP_TAG = ('lslib_meta', 'v1,bswap_guids')
TEXTURE_BANK_TEMPLATE = 'Icons_Skills'
ICON_MIP_COUNT = 1

# ======================================================================
# MOD LAYOUT
# ======================================================================
# Fragments are joined onto the mod root. '{mod}' is the mod folder name.

CONTROLLER_ICON_DIR = ('Public', 'Game', 'GUI', 'Assets', 'ControllerUIIcons', 'skills_png')
TOOLTIP_ICON_DIR = ('Public', 'Game', 'GUI', 'Assets', 'Tooltips', 'Icons')
UI_BANK_DIR = ('Public', 'Game', 'Content', 'UI', '[PAK]_UI')
ATLAS_ICON_DIR = ('Assets', 'Textures', 'Icons')           # under Public/{mod}
SKILLS_UV_TABLE = ('GUI', 'Icons_Skills.lsx')              # under Public/{mod}
ATLAS_FILE_SUFFIX = '_Icons'
ACTION_RESOURCE_GUI_DIR = ('Mods', '{mod}', 'GUI')
ACTION_RESOURCE_METADATA = 'metadata.lsx'                  # under Mods/{mod}/GUI
