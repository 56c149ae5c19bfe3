"""
Tests for action resource icon generation.

Covers:
- The seven required icons per resource, at their sizes
- GUI metadata listing every icon with forward-slash .png keys
- Override images and fallback fills for the state variants
"""
import xml.etree.ElementTree as ET

from PIL import Image

from iconify.src.action_resources import (
    ACTION_RESOURCE_ICON_SETTINGS, create_action_resource_icons, metadata_key, write_gui_metadata,
)
from iconify.src.mod_support import ModLayout

GREEN = (20, 180, 40, 255)

EXPECTED_ICONS = {
    'Assets/Shared/Resources/FeatPoint.png': 48,
    'Assets/Shared/Resources/Highlight/FeatPoint.png': 48,
    'Assets/Shared/Resources/Missing/FeatPoint.png': 48,
    'Assets/Shared/Resources/Used/FeatPoint.png': 48,
    'Assets/CC/icons_resources/FeatPoint.png': 128,
    'Assets/ActionResources_c/Icons/FeatPoint.png': 80,
    'Assets/ActionResources_c/Icons/Resources/FeatPoint.png': 64,
}


def _close(a, b, tolerance=4):
    return all(abs(x - y) <= tolerance for x, y in zip(a, b))


def _metadata_entries(path):
    root = ET.parse(path).getroot()
    objects = root.findall(
        "region[@id='config']/node[@id='config']/children/node[@id='entries']/children/node[@id='Object']")
    entries = []
    for obj in objects:
        key = obj.find("attribute[@id='MapKey']").get('value')
        sizes = {a.get('id'): (a.get('type'), a.get('value'))
                 for a in obj.find("children/node[@id='entries']").findall('attribute')}
        entries.append((key, sizes))
    return entries


def _pixel(path, xy):
    with Image.open(path) as icon:
        return icon.convert('RGBA').getpixel(xy)


class TestSettings:

    def test_optional_entries_are_controller_states(self):
        optional = [s for s in ACTION_RESOURCE_ICON_SETTINGS if s.optional]
        assert len(optional) == 3
        assert all(s.side_length == 64 for s in optional)

    def test_metadata_key(self):
        setting = ACTION_RESOURCE_ICON_SETTINGS[4]
        assert metadata_key(setting.relative_path('X')) == 'Assets/CC/icons_resources/X.png'


class TestCreateActionResourceIcons:

    def test_required_icons_written(self, resource_image, mod_root):
        result = create_action_resource_icons(mod_root, {'FeatPoint': resource_image}, max_workers=3)
        gui_dir = ModLayout(mod_root).gui_dir

        written = sorted(p.relative_to(gui_dir).as_posix() for p in gui_dir.rglob('*.DDS'))
        assert written == sorted(k[:-len('.png')] + '.DDS' for k in EXPECTED_ICONS)
        assert len(result.icon_paths) == 7

        for key, side in EXPECTED_ICONS.items():
            with Image.open(gui_dir / (key[:-len('.png')] + '.DDS')) as icon:
                assert icon.size == (side, side)

    def test_no_optional_controller_states(self, resource_image, mod_root):
        create_action_resource_icons(mod_root, {'FeatPoint': resource_image})
        resources_dir = ModLayout(mod_root).gui_dir / 'Assets' / 'ActionResources_c' / 'Icons' / 'Resources'
        for state in ('Highlight', 'Missing', 'Used'):
            assert not (resources_dir / state).exists()

    def test_metadata(self, resource_image, mod_root):
        result = create_action_resource_icons(mod_root, {'FeatPoint': resource_image})

        assert result.metadata_path == ModLayout(mod_root).gui_metadata_path
        assert result.image_sizes == dict(sorted(EXPECTED_ICONS.items()))
        entries = _metadata_entries(result.metadata_path)
        assert [key for key, _ in entries] == sorted(EXPECTED_ICONS)
        for key, sizes in entries:
            side = str(EXPECTED_ICONS[key])
            assert sizes == {'h': ('int16', side), 'mipcount': ('int8', '1'), 'w': ('int16', side)}

    def test_fallback_fills(self, resource_image, mod_root):
        create_action_resource_icons(mod_root, {'FeatPoint': resource_image})
        shared = ModLayout(mod_root).gui_dir / 'Assets' / 'Shared' / 'Resources'

        assert _close(_pixel(shared / 'FeatPoint.DDS', (10, 24)), (200, 10, 10, 255))
        assert _close(_pixel(shared / 'Missing' / 'FeatPoint.DDS', (10, 24)), (46, 44, 42, 255))
        assert _close(_pixel(shared / 'Used' / 'FeatPoint.DDS', (10, 24)), (120, 118, 116, 255))
        assert _close(_pixel(shared / 'Highlight' / 'FeatPoint.DDS', (10, 24)), (209, 207, 205, 255))
        assert _pixel(shared / 'Missing' / 'FeatPoint.DDS', (40, 24))[3] <= 4

    def test_override_image_used(self, resource_image, mod_root, make_sprite):
        make_sprite(resource_image.with_name('E6_Logo_Missing.png'), GREEN, size=(96, 96))
        create_action_resource_icons(mod_root, {'FeatPoint': resource_image})
        shared = ModLayout(mod_root).gui_dir / 'Assets' / 'Shared' / 'Resources'

        assert _close(_pixel(shared / 'Missing' / 'FeatPoint.DDS', (40, 24)), GREEN)
        assert _close(_pixel(shared / 'Used' / 'FeatPoint.DDS', (10, 24)), (120, 118, 116, 255))

    def test_multiple_resources(self, resource_image, mod_root):
        result = create_action_resource_icons(
            mod_root, {'FeatPoint': resource_image, 'Sorcery': resource_image})
        assert len(result.icon_paths) == 14
        assert len(_metadata_entries(result.metadata_path)) == 14


class TestWriteGuiMetadata:

    def test_sorted_by_path(self, tmp_path):
        path = write_gui_metadata({'b/x.png': 64, 'a/x.png': 48}, tmp_path / 'metadata.lsx')
        assert [key for key, _ in _metadata_entries(path)] == ['a/x.png', 'b/x.png']
