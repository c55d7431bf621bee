"""Grapheme cluster index for the line under the cursor.

Cursor columns count user-perceived characters (grapheme clusters), while
buffer mutations are addressed in UTF-8 bytes and the terminal positions
text in display cells. ``GraphemeIndex`` translates between the three for a
single line.
"""

from __future__ import annotations

import bisect

import grapheme
import wcwidth

from .buffer import ENCODING


def split_graphemes(text: str) -> list[str]:
    """Return the grapheme clusters of ``text``."""
    return list(grapheme.graphemes(text))


def cluster_width(cluster: str) -> int:
    """Return the terminal cell width of one grapheme cluster.

    Non-printable clusters are given width 1 so the cursor stays visible.
    """
    width = wcwidth.wcswidth(cluster)
    return width if width > 0 else 1


class GraphemeIndex:
    """Grapheme decomposition of one line, keyed on its row and text."""

    def __init__(self, row: int = 0, text: str = ""):
        self.row = row
        self.text = text
        self.clusters = split_graphemes(text)
        self._byte_offsets = [0]
        for cluster in self.clusters:
            self._byte_offsets.append(self._byte_offsets[-1] + len(cluster.encode(ENCODING)))

    def matches(self, row: int, text: str) -> bool:
        return self.row == row and self.text == text

    @property
    def count(self) -> int:
        return len(self.clusters)

    @property
    def last_col(self) -> int:
        """Last addressable column for rightward movement (0 on an empty line)."""
        return self.count - 1 if self.clusters else 0

    def byte_offset(self, col: int) -> int:
        """Byte offset of cluster ``col``; ``col == count`` gives the line length."""
        return self._byte_offsets[col]

    def grapheme_byte_len(self, col: int) -> int:
        return self._byte_offsets[col + 1] - self._byte_offsets[col]

    def col_for_byte_offset(self, byte_offset: int) -> int:
        """Column of the cluster that starts at, or spans, ``byte_offset``."""
        return min(self.count, max(0, bisect.bisect_right(self._byte_offsets, byte_offset) - 1))

    def cluster(self, col: int) -> str:
        return self.clusters[col] if col < self.count else ""

    def display_offset(self, col: int) -> int:
        """Terminal cell column at which cluster ``col`` starts."""
        return sum(cluster_width(c) for c in self.clusters[:col])
