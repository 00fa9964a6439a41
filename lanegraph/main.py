#!/usr/bin/env python3
"""
lanegraph - lane-based commit graph viewer
"""

import argparse
import html
import shutil
import sys
from pathlib import Path

from lanegraph.config.settings import Settings
from lanegraph.git_backend.commit_types import (
    GIT_LOG_FORMAT,
    CommitRecord,
    checked_out_branch,
    parse_log_output,
)
from lanegraph.git_backend.repository import HistoryRepository
from lanegraph.graph.cache import SvgTileCache
from lanegraph.graph.layout import compute_graph_layout
from lanegraph.graph.tiles import TileStyle, tile_width
from lanegraph.graph.types import GraphRow, max_columns


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="lanegraph",
        description="lanegraph - lane-based commit graph viewer",
        epilog=f"--log expects --format='{GIT_LOG_FORMAT}'",
    )
    parser.add_argument(
        "repo",
        nargs="?",
        default=None,
        help="Repository path (default: search upward from the current directory)",
    )
    parser.add_argument(
        "--max-commits",
        type=int,
        default=None,
        help="Number of newest commits to show (default: from settings)",
    )
    parser.add_argument(
        "--log",
        metavar="FILE",
        default=None,
        help=(
            "Read saved `git log --all --topo-order --format=...` output from FILE "
            "('-' for stdin) instead of opening the repository"
        ),
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings file (default: ~/.config/lanegraph/settings.json)",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--dump",
        action="store_true",
        help="Print lane assignments as text instead of opening a window",
    )
    mode.add_argument(
        "--export",
        type=Path,
        metavar="DIR",
        help="Write tiles and an index.html listing into DIR",
    )
    return parser.parse_args(argv)


def read_log(source: str, max_count: int | None = None) -> list[CommitRecord]:
    """Load commits from saved `git log` output; '-' reads standard input."""
    if source == "-":
        output = sys.stdin.read()
    else:
        output = Path(source).read_text(encoding="utf-8")
    commits = parse_log_output(output)
    if max_count is not None:
        commits = commits[:max_count]
    return commits


def format_lane_table(commits: list[CommitRecord], rows: list[GraphRow]) -> str:
    """Text view of the layout: '*' marks the commit, '|' a lane passing straight through."""
    cols = max_columns(rows)
    lines = []
    for commit, row in zip(commits, rows):
        cells = [" "] * cols
        for seg in row.segments:
            if seg.is_straight and seg.top_col != row.commit_col:
                cells[seg.top_col] = "|"
        cells[row.commit_col] = "*"
        merge = " (merge)" if commit.is_merge else ""
        lines.append(
            f"{''.join(cells)}  col={row.commit_col} {row.commit_color} "
            f"{commit.short_id}{merge} {commit.subject}"
        )
    return "\n".join(lines)


def export_html(
    commits: list[CommitRecord], rows: list[GraphRow], cache: SvgTileCache, out_dir: Path
) -> Path:
    """Copy the tiles for every row into out_dir and write an index.html showing them."""
    tile_dir = out_dir / "tiles"
    tile_dir.mkdir(parents=True, exist_ok=True)

    style = cache.style
    cols = max_columns(rows)
    width = tile_width(cols, style)

    body: list[str] = []
    for commit, row in zip(commits, rows):
        tile_path = cache.get_tile_path(row, style.row_height, cols)
        target = tile_dir / tile_path.name
        if not target.exists():
            shutil.copyfile(tile_path, target)
        body.append(
            f'<div class="row"><img src="tiles/{target.name}" width="{width}" '
            f'height="{style.row_height}"><code>{html.escape(commit.short_id)}</code> '
            f"{html.escape(commit.subject)}</div>"
        )

    index = out_dir / "index.html"
    index.write_text(
        "\n".join(
            [
                "<!DOCTYPE html>",
                '<html><head><meta charset="utf-8"><title>lanegraph</title><style>',
                f"body {{ background: {style.background_color}; color: #d4d4d4; "
                "font-family: monospace; margin: 0; }",
                f".row {{ display: flex; align-items: center; height: {style.row_height}px; "
                "white-space: pre; }",
                "img { display: block; margin-right: 4px; }",
                "</style></head><body>",
                *body,
                "</body></html>",
            ]
        ),
        encoding="utf-8",
    )
    return index


def build_window(
    commits: list[CommitRecord],
    rows: list[GraphRow],
    cache: SvgTileCache,
    current_branch: str | None,
):
    """Main window holding the graph list; clicking a row shows its full hash in the status bar."""
    from PySide6.QtWidgets import QMainWindow

    from lanegraph.ui.graph_view import GraphListView

    window = QMainWindow()
    window.setWindowTitle("lanegraph")
    view = GraphListView(cache)
    view.set_history(commits, rows, current_branch)
    window.setCentralWidget(view)

    subjects = {c.hash: c.subject for c in commits}

    def on_commit_clicked(commit_hash: str) -> None:
        window.statusBar().showMessage(f"{commit_hash}  {subjects.get(commit_hash, '')}")

    view.commit_clicked.connect(on_commit_clicked)
    window.resize(1000, 700)
    return window


def run_window(
    commits: list[CommitRecord],
    rows: list[GraphRow],
    cache: SvgTileCache,
    current_branch: str | None,
) -> int:
    from PySide6.QtWidgets import QApplication

    app = QApplication(sys.argv)
    app.setApplicationName("lanegraph")

    window = build_window(commits, rows, cache, current_branch)
    window.show()
    return app.exec()


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    settings = Settings(args.config)
    max_count = args.max_commits if args.max_commits is not None else settings.get_max_commits()

    if args.log is not None:
        try:
            commits = read_log(args.log, max_count)
        except OSError as e:
            print(f"lanegraph: cannot read log: {e}", file=sys.stderr)
            sys.exit(1)
        current_branch = checked_out_branch(commits)
    else:
        try:
            repo = HistoryRepository(args.repo)
        except ValueError as e:
            print(f"lanegraph: {e}", file=sys.stderr)
            sys.exit(1)
        commits = repo.load_commits(max_count)
        current_branch = repo.get_checked_out_branch()

    rows = compute_graph_layout(commits)

    if args.dump:
        print(format_lane_table(commits, rows))
        return

    cache = SvgTileCache(settings.get_cache_dir(), TileStyle.from_settings(settings))
    # Stale tiles from an earlier run may have been drawn with other code or parameters
    cache.clear()

    if args.export:
        index = export_html(commits, rows, cache, args.export)
        print(f"Wrote {len(rows)} rows ({len(cache)} distinct tiles) to {index}")
        return

    sys.exit(run_window(commits, rows, cache, current_branch))


if __name__ == "__main__":
    main()
