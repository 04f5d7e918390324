"""
Branching history of committed game states.

Nodes live in a flat arena keyed by id, linked by parent id and ordered child
id lists, so adding a node only touches its parent.
"""

import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Tuple

from .errors import UnknownNodeError

if TYPE_CHECKING:
    from .game import GameState


ROOT_ID = "root"


@dataclass
class HistoryNode:
    """A committed state and the ids of the states reached from it."""
    node_id: str
    state: "GameState"
    parent_id: Optional[str] = None
    children: List[str] = field(default_factory=list)


class GameHistoryTree:
    """
    Append-only tree of visited states with a movable current pointer.

    Appending a state equal to an existing child of the current node reuses
    that child (refreshing its stored state) instead of adding a sibling.
    Navigation never deletes nodes.
    """

    def __init__(self, root_state: "GameState"):
        self.nodes: Dict[str, HistoryNode] = {ROOT_ID: HistoryNode(ROOT_ID, root_state)}
        self.current_id = ROOT_ID

    @property
    def root(self) -> HistoryNode:
        return self.nodes[ROOT_ID]

    @property
    def current_node(self) -> HistoryNode:
        return self.nodes[self.current_id]

    @property
    def current_state(self) -> "GameState":
        return self.current_node.state

    def node(self, node_id: str) -> HistoryNode:
        try:
            return self.nodes[node_id]
        except KeyError:
            raise UnknownNodeError(f"Unknown history node: {node_id}") from None

    def children(self, node_id: str) -> List[HistoryNode]:
        return [self.nodes[child_id] for child_id in self.node(node_id).children]

    def append(self, state: "GameState") -> str:
        """
        Attach ``state`` under the current node and move the pointer to it.

        Returns:
            Id of the new or reused node
        """
        parent = self.current_node
        for child_id in parent.children:
            child = self.nodes[child_id]
            if child.state == state:
                child.state = state
                self.current_id = child_id
                return child_id

        node_id = uuid.uuid4().hex
        self.nodes[node_id] = HistoryNode(node_id, state, parent_id=parent.node_id)
        parent.children.append(node_id)
        self.current_id = node_id
        return node_id

    def navigate(self, node_id: str) -> "GameState":
        """Move the pointer to ``node_id`` and return its state."""
        node = self.node(node_id)
        self.current_id = node_id
        return node.state

    def path_to(self, node_id: str) -> List[str]:
        """Node ids from the root down to ``node_id``."""
        path = []
        node: Optional[HistoryNode] = self.node(node_id)
        while node is not None:
            path.append(node.node_id)
            node = self.nodes[node.parent_id] if node.parent_id else None
        return list(reversed(path))

    def walk(self) -> Iterator[Tuple[int, HistoryNode]]:
        """Depth-first (depth, node) pairs starting at the root."""
        stack = [(0, ROOT_ID)]
        while stack:
            depth, node_id = stack.pop()
            node = self.nodes[node_id]
            yield depth, node
            for child_id in reversed(node.children):
                stack.append((depth + 1, child_id))

    def __len__(self) -> int:
        return len(self.nodes)
