"""
Lane allocation for the commit graph.

Turns a commit sequence ordered children-before-parents into one GraphRow per
commit: the column and color of its dot, plus the segments that carry strands
through its tile.

COORDINATE SYSTEM NOTE:
Rows run top to bottom in input order, so newer commits sit ABOVE their
parents. A lane is a column slot that holds the hash of the commit its strand
is heading DOWN towards. When that commit's row is reached the strand lands on
its dot.
"""

from collections.abc import Iterable

from lanegraph.graph.types import (
    BRANCH_COLORS,
    CommitLike,
    GraphRow,
    LaneEntry,
    Segment,
    SegmentHalf,
)


class LayoutState:
    """Scratch state for one layout pass.

    `lanes` is an arena of strand slots indexed by column. Freeing a slot
    tombstones it with None so the column can be reused; it is never removed.
    `color_index` counts every lane ever opened and picks the next palette entry.

    Owned by the caller. compute_graph_layout() makes a fresh one per call
    unless one is handed in, which is how color continuity across runs is
    opted into.
    """

    def __init__(self, lanes: list[LaneEntry | None] | None = None, color_index: int = 0) -> None:
        self.lanes: list[LaneEntry | None] = lanes if lanes is not None else []
        self.color_index = color_index

    def next_color(self) -> str:
        """Take the next palette color. Colors are never recycled from freed lanes."""
        color = BRANCH_COLORS[self.color_index % len(BRANCH_COLORS)]
        self.color_index += 1
        return color

    def find_free_lane(self, *exclude: int) -> int:
        """Return the leftmost empty slot not in `exclude`, appending one if none is free."""
        for i, lane in enumerate(self.lanes):
            if lane is None and i not in exclude:
                return i
        self.lanes.append(None)
        return len(self.lanes) - 1

    def find_lane(self, commit_hash: str, exclude: int = -1) -> int:
        """Return the first lane awaiting `commit_hash`, skipping `exclude`, or -1."""
        for i, lane in enumerate(self.lanes):
            if i != exclude and lane is not None and lane.hash == commit_hash:
                return i
        return -1

    def lanes_awaiting(self, commit_hash: str) -> list[tuple[int, LaneEntry]]:
        """Return (column, entry) for every lane awaiting `commit_hash`, lowest column first."""
        return [
            (i, lane)
            for i, lane in enumerate(self.lanes)
            if lane is not None and lane.hash == commit_hash
        ]

    def find_all_lanes(self, commit_hash: str) -> list[int]:
        """Return every lane awaiting `commit_hash`, lowest column first."""
        return [i for i, _ in self.lanes_awaiting(commit_hash)]

    def snapshot(self) -> list[LaneEntry | None]:
        # LaneEntry is frozen, so a shallow copy is enough
        return list(self.lanes)


def layout_row(state: LayoutState, commit: CommitLike) -> GraphRow:
    """Assign a column to one commit and build the segments of its row."""
    matching = state.lanes_awaiting(commit.hash)
    is_new_tip = not matching

    if is_new_tip:
        commit_col = state.find_free_lane()
        commit_color = state.next_color()
        state.lanes[commit_col] = LaneEntry(commit.hash, commit_color)
        converging: list[int] = []
    else:
        # Several tips can share a parent; each ran its own lane down to it.
        # The leftmost one keeps going, the rest end here.
        commit_col, commit_entry = matching[0]
        commit_color = commit_entry.color
        converging = [col for col, _ in matching[1:]]

    top = state.snapshot()

    for col in converging:
        state.lanes[col] = None

    forks: list[tuple[int, str]] = []
    merges: list[tuple[int, str]] = []
    parents = list(commit.parents)

    if not parents:
        state.lanes[commit_col] = None
    else:
        # First parent always continues in the commit's own lane and color.
        # Moving it elsewhere would make independent branches collapse into each other.
        state.lanes[commit_col] = LaneEntry(parents[0], commit_color)

        for parent_hash in parents[1:]:
            existing = state.find_lane(parent_hash, commit_col)
            existing_entry = state.lanes[existing] if existing >= 0 else None
            if existing_entry is not None:
                merges.append((existing, existing_entry.color))
            else:
                new_col = state.find_free_lane(commit_col)
                new_color = state.next_color()
                state.lanes[new_col] = LaneEntry(parent_hash, new_color)
                forks.append((new_col, new_color))

    bottom = state.snapshot()
    segments: list[Segment] = []

    # Pass-throughs: lanes alive both above and below this row
    for col in range(max(len(top), len(bottom))):
        if col == commit_col:
            continue
        above = top[col] if col < len(top) else None
        below = bottom[col] if col < len(bottom) else None
        if above is not None and below is not None:
            segments.append(Segment(col, col, above.color))

    # Convergence: the other lanes that were also heading for this commit
    for col in converging:
        above = top[col]
        segments.append(Segment(col, commit_col, above.color if above else commit_color))

    # Commit lane
    if parents:
        half = SegmentHalf.BOTTOM if is_new_tip else None
        segments.append(Segment(commit_col, commit_col, commit_color, half))
    elif is_new_tip:
        # Lone root: nothing above, nothing below
        segments.append(Segment(commit_col, commit_col, commit_color))
    else:
        segments.append(Segment(commit_col, commit_col, commit_color, SegmentHalf.TOP))

    for col, color in forks:
        segments.append(Segment(commit_col, col, color, SegmentHalf.BOTTOM))

    for col, color in merges:
        segments.append(Segment(col, commit_col, color))

    max_col = max([commit_col, *(seg.max_col for seg in segments)])

    return GraphRow(
        commit_hash=commit.hash,
        commit_col=commit_col,
        commit_color=commit_color,
        segments=tuple(segments),
        num_cols=max_col + 1,
    )


def compute_graph_layout(
    commits: Iterable[CommitLike], state: LayoutState | None = None
) -> list[GraphRow]:
    """Lay out a commit sequence ordered children-before-parents.

    Ordering is a precondition and is not checked. A parent that never shows
    up later in the sequence is treated as outside the visible window: its
    lane just runs off the bottom.

    Args:
        commits: Commits, newest first, every parent after its children
        state: Lane state to continue from. A fresh one is used when omitted.

    Returns:
        One GraphRow per commit, in input order
    """
    if state is None:
        state = LayoutState()
    return [layout_row(state, commit) for commit in commits]
