"""
Iconify - BG3 icon atlas and action resource icon generator.

Packs sprite images into a BC7 DDS texture atlas with matching LSX
descriptors, and derives the sized/state variants of action resource icons.
"""

__version__ = "1.0.0"
