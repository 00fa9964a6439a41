"""Types and constants for commit graph layout."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class SegmentHalf(str, Enum):
    """Which half of a row tile a segment occupies.

    A segment without a half spans the full tile height.
    """

    # Commit lane arriving at the dot from above
    TOP = "top"

    # Forks departing from the dot, or a strand that starts at this commit
    BOTTOM = "bottom"


class CommitLike(Protocol):
    """Anything the layout can consume: a hash and its ordered parent hashes."""

    hash: str
    parents: Sequence[str]


@dataclass(frozen=True)
class Segment:
    """A connector passing through a single row tile."""

    top_col: int
    bot_col: int
    color: str
    half: SegmentHalf | None = None

    @property
    def is_straight(self) -> bool:
        return self.top_col == self.bot_col

    @property
    def max_col(self) -> int:
        return max(self.top_col, self.bot_col)

    def span(self, row_height: float) -> tuple[float, float]:
        """Vertical extent (y0, y1) of this segment within a tile of the given height."""
        mid_y = row_height / 2
        if self.half is SegmentHalf.TOP:
            return 0, mid_y
        if self.half is SegmentHalf.BOTTOM:
            return mid_y, row_height
        return 0, row_height


@dataclass(frozen=True)
class LaneEntry:
    """An occupied lane: the hash it is waiting to reach and its strand color."""

    hash: str
    color: str


@dataclass(frozen=True)
class GraphRow:
    """Layout result for one commit."""

    commit_hash: str
    commit_col: int
    commit_color: str
    segments: tuple[Segment, ...]
    num_cols: int


# Strand colors, handed out in order each time a new lane is opened
BRANCH_COLORS = [
    "#F5A623",  # Orange
    "#4FC3F7",  # Light blue
    "#81C784",  # Green
    "#E57373",  # Red
    "#BA68C8",  # Purple
    "#FFD54F",  # Yellow
    "#4DD0E1",  # Cyan
    "#FF8A65",  # Deep orange
    "#A1887F",  # Brown
    "#90A4AE",  # Blue grey
    "#AED581",  # Light green
    "#7986CB",  # Indigo
]


def max_columns(rows: Iterable[GraphRow]) -> int:
    """Column count shared by every tile in a visible range, so tiles have equal width."""
    return max((row.num_cols for row in rows), default=1)
