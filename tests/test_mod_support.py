"""
Tests for mod layout, image discovery and pre-clean.
"""
from iconify.src.mod_support import ModLayout, gather_image_files, normalize_name, preclean


class TestNormalizeName:

    def test_dash(self):
        assert normalize_name('DnD-Epic6') == 'DnD_Epic6'

    def test_non_ascii_and_spaces(self):
        assert normalize_name('Mod é 2') == 'Mod___2'

    def test_plain(self):
        assert normalize_name('Epic6') == 'Epic6'


class TestModLayout:

    def test_atlas_paths(self, mod_root):
        mod = ModLayout(mod_root)
        assert mod.name == 'DnD-Epic6'
        assert mod.atlas_partial_path == 'Assets/Textures/Icons/DnD_Epic6_Icons.DDS'
        assert mod.ui_registration_path == 'Public/DnD-Epic6/Assets/Textures/Icons/DnD_Epic6_Icons.DDS'
        assert mod.atlas_path == mod_root / 'Public' / 'DnD-Epic6' / 'Assets' / 'Textures' / 'Icons' / 'DnD_Epic6_Icons.DDS'
        assert mod.uv_table_path == mod_root / 'Public' / 'DnD-Epic6' / 'GUI' / 'Icons_Skills.lsx'
        assert mod.controller_icon_dir == mod_root / 'Public' / 'Game' / 'GUI' / 'Assets' / 'ControllerUIIcons' / 'skills_png'
        assert mod.tooltip_icon_dir == mod_root / 'Public' / 'Game' / 'GUI' / 'Assets' / 'Tooltips' / 'Icons'
        assert mod.texture_bank_path('abc') == mod_root / 'Public' / 'Game' / 'Content' / 'UI' / '[PAK]_UI' / 'abc.lsf.lsx'

    def test_gui_paths(self, mod_root):
        mod = ModLayout(mod_root)
        assert mod.gui_dir == mod_root / 'Mods' / 'DnD-Epic6' / 'GUI'
        assert mod.gui_metadata_path == mod.gui_dir / 'metadata.lsx'


class TestGatherImages:

    def test_filters_extensions_case_insensitive(self, tmp_path):
        for name in ('a.png', 'b.PNG', 'c.bmp', 'readme.txt'):
            (tmp_path / name).write_bytes(b'x')
        (tmp_path / 'sub.png').mkdir()
        nested = tmp_path / 'nested'
        nested.mkdir()
        (nested / 'd.png').write_bytes(b'x')

        names = sorted(p.name for p in gather_image_files(tmp_path))
        assert names == ['a.png', 'b.PNG', 'c.bmp']

    def test_empty(self, empty_image_dir):
        assert gather_image_files(empty_image_dir) == []


class TestPreclean:

    def test_removes_files_and_trees(self, tmp_path):
        folder = tmp_path / 'dir' / 'inner'
        folder.mkdir(parents=True)
        (folder / 'x.DDS').write_bytes(b'x')
        single = tmp_path / 'file.lsx'
        single.write_text('x')

        preclean(tmp_path / 'dir', single, tmp_path / 'does_not_exist')

        assert not (tmp_path / 'dir').exists()
        assert not single.exists()
