"""Qt presentation of the commit graph."""

from lanegraph.ui.graph_view import GraphListView

__all__ = ["GraphListView"]
