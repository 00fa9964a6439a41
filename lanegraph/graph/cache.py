"""
Content-addressed cache of rendered row tiles.

Tiles are keyed by what they look like, not by which commit they belong to,
so visually identical rows anywhere in the history share one SVG file.
"""

import hashlib
import threading
from dataclasses import dataclass
from pathlib import Path

from lanegraph.graph.tiles import DEFAULT_STYLE, TileStyle, render_svg
from lanegraph.graph.types import GraphRow, SegmentHalf

TILE_SUBDIR = "svg-tiles"

_HALF_CODES = {SegmentHalf.TOP: "T", SegmentHalf.BOTTOM: "B", None: "F"}


def style_key(style: TileStyle) -> str:
    """Every drawing parameter of a style, so differently styled tiles never share a file."""
    return (
        f"s{style.column_width}:{style.dot_radius:g}:{style.line_width:g}:"
        f"{style.shadow_width:g}:{style.shadow_opacity:g}:{style.dot_outline_width:g}:"
        f"{style.background_color.lstrip('#')}"
    )


def key_string(
    row: GraphRow, row_height: int, max_cols: int, style: TileStyle = DEFAULT_STYLE
) -> str:
    """Canonical description of everything that affects a tile's pixels."""
    parts = [
        f"c{row.commit_col}:{row.commit_color.lstrip('#')}:h{row_height}:w{max_cols}",
        style_key(style),
    ]
    for seg in row.segments:
        parts.append(
            f"{_HALF_CODES[seg.half]}{seg.top_col}-{seg.bot_col}:{seg.color.lstrip('#')}"
        )
    return "_".join(parts)


def build_key(
    row: GraphRow, row_height: int, max_cols: int, style: TileStyle = DEFAULT_STYLE
) -> str:
    """Digest of key_string(), used as the tile's file name."""
    digest = hashlib.md5(key_string(row, row_height, max_cols, style).encode()).hexdigest()
    return f"tile_{digest}"


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0


class SvgTileCache:
    """Renders row tiles on demand and persists them under their content key.

    Safe to share between threads. The existence check and the write for a key
    happen under that key's lock, so a tile is rendered at most once. clear()
    waits for in-flight lookups to finish and blocks new ones until every old
    tile is gone.

    The cache never evicts; call clear() at the start of a session so changed
    rendering code or parameters take effect.
    """

    def __init__(self, storage_dir: Path | str, style: TileStyle = DEFAULT_STYLE) -> None:
        self.cache_dir = Path(storage_dir) / TILE_SUBDIR
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.style = style
        self.stats = CacheStats()

        self._tiles: dict[str, Path] = {}
        self._key_locks: dict[str, threading.Lock] = {}
        self._cond = threading.Condition()
        self._active_lookups = 0
        self._clearing = False

    def get_tile_path(
        self, row: GraphRow, row_height: int | None = None, max_cols: int | None = None
    ) -> Path:
        """Return the path of the tile for `row`, rendering it on first request."""
        height = row_height if row_height is not None else self.style.row_height
        cols = max_cols if max_cols is not None else row.num_cols
        key = build_key(row, height, cols, self.style)

        with self._cond:
            while self._clearing:
                self._cond.wait()
            self._active_lookups += 1
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        hit = False
        try:
            with key_lock:
                cached = self._tiles.get(key)
                if cached is not None:
                    hit = True
                    return cached

                svg = render_svg(row, height, cols, self.style)
                file_path = self.cache_dir / f"{key}.svg"
                try:
                    file_path.write_text(svg, encoding="utf-8")
                except OSError as e:
                    print(f"[Tile Cache] Failed to write {file_path}: {e}")
                    raise
                self._tiles[key] = file_path
                return file_path
        finally:
            with self._cond:
                if hit:
                    self.stats.hits += 1
                else:
                    self.stats.misses += 1
                self._active_lookups -= 1
                self._cond.notify_all()

    def clear(self) -> None:
        """Forget every tile and delete the files from disk."""
        with self._cond:
            while self._clearing:
                self._cond.wait()
            self._clearing = True
            try:
                while self._active_lookups:
                    self._cond.wait()
                self._tiles.clear()
                self._key_locks.clear()
                removed = 0
                if self.cache_dir.exists():
                    for tile_file in self.cache_dir.iterdir():
                        if tile_file.is_file():
                            tile_file.unlink()
                            removed += 1
                else:
                    self.cache_dir.mkdir(parents=True, exist_ok=True)
                if removed:
                    print(f"[Tile Cache] Cleared {removed} tile(s) from {self.cache_dir}")
            finally:
                self._clearing = False
                self._cond.notify_all()

    def __len__(self) -> int:
        return len(self._tiles)
