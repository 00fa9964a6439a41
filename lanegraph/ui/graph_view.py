"""Commit list with graph tiles - one row per commit, tile on the left."""

from PySide6.QtCore import QSize, Qt, Signal
from PySide6.QtGui import QBrush, QColor, QFont, QIcon
from PySide6.QtWidgets import QAbstractItemView, QListWidget, QListWidgetItem, QWidget

from lanegraph.git_backend.commit_types import CommitRecord, RefType
from lanegraph.graph.cache import SvgTileCache
from lanegraph.graph.tiles import tile_width
from lanegraph.graph.types import GraphRow, max_columns


def format_refs(commit: CommitRecord) -> str:
    """Decoration label in `git log` style, e.g. "(HEAD -> main, tag: v1.0)"."""
    labels: list[str] = []
    refs = list(commit.refs)
    i = 0
    while i < len(refs):
        ref = refs[i]
        nxt = refs[i + 1] if i + 1 < len(refs) else None
        if ref.type is RefType.HEAD and nxt is not None and nxt.type is RefType.BRANCH:
            labels.append(f"HEAD -> {nxt.name}")
            i += 2
            continue
        labels.append(f"tag: {ref.name}" if ref.type is RefType.TAG else ref.name)
        i += 1
    return f"({', '.join(labels)})" if labels else ""


class GraphListView(QListWidget):
    """List of commits, each row prefixed by its graph tile."""

    commit_clicked = Signal(str)  # commit hash

    def __init__(self, cache: SvgTileCache, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.cache = cache
        self.commits: list[CommitRecord] = []
        self.rows: list[GraphRow] = []

        self.setUniformItemSizes(True)
        self.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.setStyleSheet(f"""
            QListWidget {{
                background: {cache.style.background_color};
                color: #d4d4d4;
                border: none;
                font-family: monospace;
            }}
            QListWidget::item {{
                padding: 0px;
                margin: 0px;
            }}
            QListWidget::item:selected {{
                background: #264F78;
            }}
        """)
        self.itemClicked.connect(self._on_item_clicked)

    def set_history(
        self,
        commits: list[CommitRecord],
        rows: list[GraphRow],
        current_branch: str | None = None,
    ) -> None:
        """Show commits with their layout rows. Both lists are in the same order."""
        self.clear()
        self.commits = commits
        self.rows = rows

        # Same column count for every tile so the text column does not shift per row
        cols = max_columns(rows)
        row_height = self.cache.style.row_height
        self.setIconSize(QSize(tile_width(cols, self.cache.style), row_height))

        for commit, row in zip(commits, rows):
            tile_path = self.cache.get_tile_path(row, row_height, cols)

            refs = format_refs(commit)
            text = f"{commit.short_id}  {refs + '  ' if refs else ''}{commit.subject}"

            item = QListWidgetItem(QIcon(str(tile_path)), text)
            item.setData(Qt.ItemDataRole.UserRole, commit.hash)
            item.setToolTip(f"{commit.hash}\n{commit.author} <{commit.email}>")
            item.setSizeHint(QSize(0, row_height))

            on_current = current_branch is not None and any(
                r.type is RefType.BRANCH and r.name == current_branch for r in commit.refs
            )
            if on_current:
                font = QFont(item.font())
                font.setBold(True)
                item.setFont(font)
                item.setForeground(QBrush(QColor(row.commit_color)))

            self.addItem(item)

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        commit_hash = item.data(Qt.ItemDataRole.UserRole)
        if commit_hash:
            self.commit_clicked.emit(commit_hash)
