"""
Atlas geometry.

Square atlas layout math: how many icons go along each side, where each
icon lands, and the UV rectangle the engine uses to look it up.

Example 4x4 atlas (up to 16 icons), filled row-major:
┌─────┬─────┬─────┬─────┐
│ 0,0 │ 1,0 │ 2,0 │ 3,0 │
├─────┼─────┼─────┼─────┤
│ 0,1 │ ... │     │     │
└─────┴─────┴─────┴─────┘
Point (1,2) maps to UVs (0.25, 0.5) - (0.5, 0.75).
"""

from dataclasses import dataclass
from typing import Iterator, NamedTuple

from ..constants import ATLAS_CELL_SIZE


class GridPoint(NamedTuple):
    """Cell of an icon in the atlas grid (column across, row down)."""
    column: int
    row: int


class UVCoordinate(NamedTuple):
    """Texture coordinate as a fraction of the atlas side."""
    u: float
    v: float


class UVRect(NamedTuple):
    upper_left: UVCoordinate
    lower_right: UVCoordinate


def get_atlas_axis_length(image_count: int) -> int:
    """Smallest power of two whose square holds ``image_count`` icons.

    Args:
        image_count: Number of uniform icons to store in the atlas

    Returns:
        Icons per side of the square atlas (1 for an empty set)
    """
    if image_count < 0:
        raise ValueError(f"Image count cannot be negative: {image_count}")

    size = 1
    while image_count > size * size:
        size *= 2
    return size


def get_uvs(point: GridPoint, axis_length: int) -> UVRect:
    """Map a grid cell to its upper left and lower right UV coordinates.

    Args:
        point: Cell of the icon in the atlas grid
        axis_length: Number of icons stored horizontally/vertically

    Returns:
        UVRect spanning exactly 1/axis_length in both directions
    """
    if axis_length <= 0:
        raise ValueError(f"Atlas axis length must be positive: {axis_length}")

    x, y = float(point.column), float(point.row)
    return UVRect(
        UVCoordinate(x / axis_length, y / axis_length),
        UVCoordinate((x + 1) / axis_length, (y + 1) / axis_length),
    )


def iter_grid_points(count: int, axis_length: int) -> Iterator[GridPoint]:
    """Yield ``count`` cells in row-major order starting at (0,0)."""
    if count > axis_length * axis_length:
        raise ValueError(f"{count} icons do not fit in a {axis_length}x{axis_length} atlas")

    current = GridPoint(0, 0)
    for _ in range(count):
        yield current
        current = GridPoint(current.column + 1, current.row)
        if current.column == axis_length:
            current = GridPoint(0, current.row + 1)


@dataclass(frozen=True)
class AtlasLayout:
    """Size of an atlas build, fixed once the icon count is known."""
    axis_length: int
    cell_size: int = ATLAS_CELL_SIZE

    @property
    def texture_size(self) -> int:
        """Pixel side of the whole atlas texture."""
        return self.axis_length * self.cell_size

    @classmethod
    def for_image_count(cls, image_count: int, cell_size: int = ATLAS_CELL_SIZE) -> 'AtlasLayout':
        return cls(get_atlas_axis_length(image_count), cell_size)

    def pixel_offset(self, point: GridPoint) -> tuple:
        """Top-left pixel of a cell inside the atlas texture."""
        return (point.column * self.cell_size, point.row * self.cell_size)
