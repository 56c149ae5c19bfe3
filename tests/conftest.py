"""
Shared fixtures for Iconify tests.

Provides solid-color sample sprites, image folders and an empty mod root.
"""
import sys
import os
import pytest
from PIL import Image

# Ensure the project root is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


# ── Sample colors ──────────────────────────────────────────────────────

RED = (200, 10, 10, 255)
BLUE = (10, 20, 220, 255)
GREEN = (20, 180, 40, 255)


def _write_sprite(path, color, size=(100, 100)):
    Image.new('RGBA', size, color).save(path)
    return path


@pytest.fixture
def make_sprite():
    """Factory writing a solid-color RGBA sprite and returning its path"""
    return _write_sprite


@pytest.fixture
def mod_root(tmp_path):
    """Empty mod folder named DnD-Epic6"""
    root = tmp_path / 'DnD-Epic6'
    root.mkdir()
    return root


@pytest.fixture
def two_image_dir(tmp_path):
    """Folder with a red and a blue sprite"""
    folder = tmp_path / 'icons'
    folder.mkdir()
    _write_sprite(folder / 'Fireball.png', RED)
    _write_sprite(folder / 'Frostbolt.png', BLUE)
    return folder


@pytest.fixture
def empty_image_dir(tmp_path):
    """Folder without any supported image"""
    folder = tmp_path / 'empty_icons'
    folder.mkdir()
    (folder / 'notes.txt').write_text('not an image')
    return folder


@pytest.fixture
def resource_image(tmp_path):
    """Half transparent red action resource sprite"""
    folder = tmp_path / 'resources'
    folder.mkdir()
    image = Image.new('RGBA', (96, 96), (0, 0, 0, 0))
    image.paste(Image.new('RGBA', (48, 96), RED), (0, 0))
    path = folder / 'E6_Logo.png'
    image.save(path)
    return path
