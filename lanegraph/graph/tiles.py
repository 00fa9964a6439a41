"""Tile rendering - one standalone SVG image per graph row."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from lanegraph.graph.types import GraphRow, Segment

if TYPE_CHECKING:
    from lanegraph.config.settings import Settings

# Control point placement along the vertical span of a curve
FULL_HEIGHT_CP_FACTOR = 0.35
HALF_HEIGHT_CP_FACTOR = 0.5


@dataclass(frozen=True)
class TileStyle:
    """Geometry and colors used to draw tiles."""

    column_width: int = 20
    row_height: int = 24
    dot_radius: float = 5
    line_width: float = 2.5
    shadow_width: float = 5
    shadow_opacity: float = 0.75
    background_color: str = "#1e1e1e"
    dot_outline_width: float = 1.5

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TileStyle":
        return cls(
            column_width=settings.get_column_width(),
            row_height=settings.get_row_height(),
            dot_radius=settings.get_dot_radius(),
            line_width=settings.get_line_width(),
            background_color=settings.get_background_color(),
        )


DEFAULT_STYLE = TileStyle()


def _num(value: float) -> str:
    """Format a coordinate without a trailing .0"""
    return f"{value:g}"


def col_x(col: int, column_width: int = DEFAULT_STYLE.column_width) -> float:
    """Horizontal center of a column."""
    return col * column_width + column_width / 2


def tile_width(cols: int, style: TileStyle = DEFAULT_STYLE) -> int:
    """Width of a tile holding `cols` columns plus one column of padding."""
    return cols * style.column_width + style.column_width


def segment_path(
    x0: float, y0: float, x1: float, y1: float, cp_factor: float = HALF_HEIGHT_CP_FACTOR
) -> str:
    """
    SVG path data for a straight line or a bezier between two points.

    cp_factor sets where both control points sit along the vertical span:
    - 0.5: midpoint, a symmetric S-curve, used for half-height segments
    - 0.35: the bend happens earlier, so a full-height merge curve passes
      close to the commit dot at the row's midline
    """
    if x0 == x1:
        return f"M{_num(x0)},{_num(y0)} L{_num(x1)},{_num(y1)}"
    cp_y = _num(y0 + (y1 - y0) * cp_factor)
    return (
        f"M{_num(x0)},{_num(y0)} "
        f"C{_num(x0)},{cp_y} {_num(x1)},{cp_y} {_num(x1)},{_num(y1)}"
    )


def _segment_d(seg: Segment, row_height: float, column_width: int) -> str:
    x_top = col_x(seg.top_col, column_width)
    x_bot = col_x(seg.bot_col, column_width)
    y0, y1 = seg.span(row_height)
    is_full_height_curve = seg.half is None and not seg.is_straight
    cp_factor = FULL_HEIGHT_CP_FACTOR if is_full_height_curve else HALF_HEIGHT_CP_FACTOR
    return segment_path(x_top, y0, x_bot, y1, cp_factor)


def render_svg(
    row: GraphRow,
    row_height: int | None = None,
    max_cols: int | None = None,
    style: TileStyle = DEFAULT_STYLE,
) -> str:
    """
    Render a single row tile as SVG text.

    Draw order, back to front:
    1. A wide translucent background-colored stroke per segment, so strands that
       cross or run side by side stay visually separated
    2. The colored stroke per segment
    3. The commit dot

    Args:
        row: Layout result for the row
        row_height: Tile height in pixels (defaults to the style's row height)
        max_cols: Column count shared across the visible range (defaults to row.num_cols)
        style: Geometry and colors

    Returns:
        A standalone SVG document
    """
    height = row_height if row_height is not None else style.row_height
    cols = max_cols if max_cols is not None else row.num_cols
    width = tile_width(cols, style)
    mid_y = height / 2

    shadows: list[str] = []
    lines: list[str] = []
    for seg in row.segments:
        d = _segment_d(seg, height, style.column_width)
        shadows.append(
            f'<path d="{d}" fill="none" stroke="{style.background_color}" '
            f'stroke-width="{_num(style.shadow_width)}" '
            f'stroke-opacity="{_num(style.shadow_opacity)}" stroke-linecap="round"/>'
        )
        lines.append(
            f'<path d="{d}" fill="none" stroke="{seg.color}" '
            f'stroke-width="{_num(style.line_width)}" stroke-linecap="round"/>'
        )

    cx = col_x(row.commit_col, style.column_width)
    dot = (
        f'<circle cx="{_num(cx)}" cy="{_num(mid_y)}" r="{_num(style.dot_radius)}" '
        f'fill="{row.commit_color}" stroke="{style.background_color}" '
        f'stroke-width="{_num(style.dot_outline_width)}" '
        f'stroke-opacity="{_num(style.shadow_opacity)}"/>'
    )

    return "\n".join(
        [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
            f'viewBox="0 0 {width} {height}">',
            *shadows,
            *lines,
            dot,
            "</svg>",
        ]
    )
