"""Commit graph layout, tile rendering and tile caching."""

from lanegraph.graph.cache import SvgTileCache
from lanegraph.graph.layout import LayoutState, compute_graph_layout
from lanegraph.graph.tiles import TileStyle, render_svg
from lanegraph.graph.types import BRANCH_COLORS, GraphRow, Segment, SegmentHalf

__all__ = [
    "BRANCH_COLORS",
    "GraphRow",
    "LayoutState",
    "Segment",
    "SegmentHalf",
    "SvgTileCache",
    "TileStyle",
    "compute_graph_layout",
    "render_svg",
]
