"""Iconify - CLI entry point.

Generates BG3 mod icons from plain images.

Usage:
    iconify atlas <input_image_dir> <mod_root>
    iconify actionresource <mod_root> <name>=<image_path> [<name>=<image_path> ...]

Examples:
    iconify atlas D:/GitHub/bg3_mod_epic6/Icons D:/GitHub/bg3_mod_epic6/DnD-Epic6
    iconify actionresource D:/GitHub/bg3_mod_epic6/DnD-Epic6 FeatPoint=Icons/E6_Logo.png
"""

import sys
import argparse
import logging
from typing import Dict, List, Optional

from .src.atlas_baking import NoImagesFoundError, create_atlas
from .src.action_resources import create_action_resource_icons


class UsageError(Exception):
    """Bad command line arguments."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        self.print_usage(sys.stderr)
        raise UsageError(message)


def parse_resource_pairs(pairs: List[str]) -> Dict[str, str]:
    """Split ``name=path`` arguments into an ordered name -> path mapping."""
    resources = {}
    for pair in pairs:
        name, sep, image_path = pair.partition('=')
        name, image_path = name.strip(), image_path.strip()
        if not sep or not name or not image_path:
            raise UsageError(f"Expected <name>=<imagePath>, got: {pair}")
        if name in resources:
            raise UsageError(f"Action resource given more than once: {name}")
        resources[name] = image_path
    return resources


def build_parser() -> argparse.ArgumentParser:
    common = _ArgumentParser(add_help=False)
    common.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging.',
    )
    common.add_argument(
        '-j', '--workers',
        type=int,
        default=None,
        help='Number of icon render threads (default: Python thread pool default).',
    )

    parser = _ArgumentParser(
        prog='iconify',
        description='Generate BG3 icon atlases and action resource icons.',
    )
    operations = parser.add_subparsers(dest='operation', metavar='operation')
    operations.required = True

    atlas = operations.add_parser(
        'atlas', parents=[common],
        help='Pack a folder of images into the skill icon atlas.',
    )
    atlas.add_argument('input_dir', help='Folder of source images (png, gif, jpg, bmp, webp).')
    atlas.add_argument('mod_root', help='Root folder of the mod.')

    action_resource = operations.add_parser(
        'actionresource', parents=[common],
        help='Generate action resource icons.',
    )
    action_resource.add_argument('mod_root', help='Root folder of the mod.')
    action_resource.add_argument(
        'resources', nargs='+', metavar='name=image',
        help='Action resource name (as in ActionResourceDefinitions.lsx) and its image.',
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if argv and not argv[0].startswith('-'):
        argv[0] = argv[0].lower()

    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        if args.workers is not None and args.workers < 1:
            raise UsageError(f"--workers must be at least 1, got {args.workers}")
        resources = parse_resource_pairs(args.resources) if args.operation == 'actionresource' else None
    except UsageError as e:
        print(f"Error: {e}")
        print("The operation type and its arguments are required:")
        print("  atlas <inputImageDir> <modRootPath>")
        print("  actionresource <modRootPath> <name>=<imagePath> [<name>=<imagePath> ...]")
        return -1

    # Logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    if args.operation == 'atlas':
        try:
            result = create_atlas(args.input_dir, args.mod_root, max_workers=args.workers)
        except NoImagesFoundError as e:
            print(e)
            return -1
        print(f"Done. Packed {len(result.image_map)} icon(s) into {result.atlas_path}")
        return 0

    result = create_action_resource_icons(args.mod_root, resources, max_workers=args.workers)
    print(f"Done. Wrote {len(result.icon_paths)} icon(s), metadata: {result.metadata_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
