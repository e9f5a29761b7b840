"""
SimHash-based similarity search between component patterns.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from simhash import Simhash

from ..models import Widget
from .structure import structure_tokens


class BKTree:
    """
    BK-tree (Burkhard-Keller tree) for similarity search with Hamming distance.

    Items are stored with their SimHash value; any object can be attached.
    """

    def __init__(self):
        self.root: Optional[BKTreeNode] = None

    def insert(self, simhash_value: int, item: Any) -> None:
        """Insert a new item into the BK-tree."""
        if self.root is None:
            self.root = BKTreeNode(simhash_value, item)
            return

        self._insert_recursive(self.root, simhash_value, item)

    def _insert_recursive(self, node: 'BKTreeNode', simhash_value: int, item: Any) -> None:
        distance = self._hamming_distance(node.simhash, simhash_value)

        if distance in node.children:
            self._insert_recursive(node.children[distance], simhash_value, item)
        else:
            node.children[distance] = BKTreeNode(simhash_value, item)

    def search(self, simhash_value: int, max_distance: int) -> List[Tuple[Any, int]]:
        """Search for items within max_distance of the given simhash."""
        if self.root is None:
            return []

        results: List[Tuple[Any, int]] = []
        self._search_recursive(self.root, simhash_value, max_distance, results)
        return results

    def _search_recursive(self, node: 'BKTreeNode', simhash_value: int, max_distance: int,
                          results: List[Tuple[Any, int]]) -> None:
        distance = self._hamming_distance(node.simhash, simhash_value)

        if distance <= max_distance:
            results.append((node.item, distance))

        # Triangle inequality bounds which subtrees can hold matches
        for child_distance, child in node.children.items():
            if abs(child_distance - distance) <= max_distance:
                self._search_recursive(child, simhash_value, max_distance, results)

    @staticmethod
    def _hamming_distance(hash1: int, hash2: int) -> int:
        return bin(hash1 ^ hash2).count('1')


class BKTreeNode:
    """Node in the BK-tree structure."""

    def __init__(self, simhash: int, item: Any):
        self.simhash = simhash
        self.item = item
        self.children: Dict[int, 'BKTreeNode'] = {}


def structure_simhash(widget: Widget) -> int:
    """SimHash of a widget's structure tokens."""
    return Simhash(structure_tokens(widget)).value


@dataclass
class RelatedPatterns:
    """Two structurally close but not identical patterns."""
    first: str
    second: str
    distance: int

    def to_dict(self) -> Dict[str, Any]:
        return {"first": self.first, "second": self.second, "distance": self.distance}
