"""
Board Graph - Static yut board and step traversal.

Layout:
- Outer ring: O0 (HOME entry) through O20 (terminal)
- Diagonal A: O5 -> A1 -> A2 -> C -> A3 -> A4 -> O15
- Diagonal B: O10 -> B1 -> B2 -> C -> B3 -> B4 -> O20

Branch nodes are O5, O10 and the center C. A branch choice only applies
to the first step of a move. A move that passes through C continues straight
along the diagonal it arrived on.

Finishing follows the overshoot rule: landing exactly on O20 does not
finish, any step taken from O20 does.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .errors import InvalidInputError, InvalidReferenceError


NodeId = str

HOME_NODE: NodeId = "O0"
TERMINAL_NODE: NodeId = "O20"
CENTER_NODE: NodeId = "C"
FINISHED = "FINISHED"


class BranchOption(str, Enum):
    """Named directions out of a branch node."""
    OUTER = "OUTER"
    DIAGONAL_A = "DIAGONAL_A"
    DIAGONAL_B = "DIAGONAL_B"
    TO_O15 = "TO_O15"
    TO_O20 = "TO_O20"


class SpecialNodeType(str, Enum):
    """Landing effect assigned to a node."""
    NORMAL = "NORMAL"
    STICK = "STICK"
    REFRESH = "REFRESH"


@dataclass(frozen=True)
class BoardNode:
    """A single board position and its successors."""
    id: NodeId
    is_branch_node: bool = False
    next: tuple[NodeId, ...] = ()


# Successor per branch option, in display order
BRANCH_TABLE: dict[NodeId, dict[BranchOption, NodeId]] = {
    "O5": {BranchOption.OUTER: "O6", BranchOption.DIAGONAL_A: "A1"},
    "O10": {BranchOption.OUTER: "O11", BranchOption.DIAGONAL_B: "B1"},
    CENTER_NODE: {BranchOption.TO_O15: "A3", BranchOption.TO_O20: "B3"},
}

# Direction taken when a move passes through the center without stopping
CENTER_PASS_THROUGH: dict[NodeId, BranchOption] = {
    "A2": BranchOption.TO_O15,
    "B2": BranchOption.TO_O20,
}


def _build_nodes() -> dict[NodeId, BoardNode]:
    nodes: dict[NodeId, BoardNode] = {}

    for i in range(20):
        node_id = f"O{i}"
        if node_id in BRANCH_TABLE:
            continue
        nodes[node_id] = BoardNode(id=node_id, next=(f"O{i + 1}",))
    nodes[TERMINAL_NODE] = BoardNode(id=TERMINAL_NODE)

    for branch_id, options in BRANCH_TABLE.items():
        nodes[branch_id] = BoardNode(
            id=branch_id,
            is_branch_node=True,
            next=tuple(options.values()),
        )

    chains = {
        "A1": "A2", "A2": CENTER_NODE, "A3": "A4", "A4": "O15",
        "B1": "B2", "B2": CENTER_NODE, "B3": "B4", "B4": TERMINAL_NODE,
    }
    for node_id, successor in chains.items():
        nodes[node_id] = BoardNode(id=node_id, next=(successor,))

    order = [f"O{i}" for i in range(21)] + ["A1", "A2", CENTER_NODE, "A3", "A4", "B1", "B2", "B3", "B4"]
    return {node_id: nodes[node_id] for node_id in order}


@dataclass
class BoardGraph:
    """
    Directed board graph with branch metadata.

    Traversal is an O(steps) walk: each hop is resolved individually so
    branch selection and overshoot can be checked per step.
    """
    nodes: dict[NodeId, BoardNode] = field(default_factory=_build_nodes)

    def get_node(self, node_id: NodeId) -> BoardNode:
        node = self.nodes.get(node_id)
        if node is None:
            raise InvalidReferenceError(f"Unknown node: {node_id}")
        return node

    def has_node(self, node_id: NodeId) -> bool:
        return node_id in self.nodes

    def node_ids(self) -> list[NodeId]:
        """All node ids in board order."""
        return list(self.nodes)

    def is_branch_node(self, node_id: NodeId) -> bool:
        return self.get_node(node_id).is_branch_node

    def get_branch_options(self, node_id: NodeId) -> list[BranchOption]:
        """Both directions for a branch node, empty for any other node."""
        if not self.is_branch_node(node_id):
            return []
        return list(BRANCH_TABLE[node_id])

    def get_next_node(
        self,
        node_id: NodeId,
        branch_choice: BranchOption | str | None = None,
    ) -> NodeId | None:
        """
        Successor of a node.

        Non-branch nodes ignore the choice. O5 and O10 default to OUTER;
        the center requires an explicit choice. Returns None only for the
        terminal node.
        """
        node = self.get_node(node_id)
        if not node.next:
            return None
        if not node.is_branch_node:
            return node.next[0]

        options = BRANCH_TABLE[node_id]
        if branch_choice is None:
            if node_id == CENTER_NODE:
                raise InvalidInputError("Branch choice required at C")
            return options[BranchOption.OUTER]

        option = self._parse_branch(branch_choice)
        if option not in options:
            raise InvalidInputError(
                f"Invalid branch choice {option.value} at {node_id}"
            )
        return options[option]

    def traverse_steps(
        self,
        start: NodeId,
        steps: int,
        branch_choice: BranchOption | str | None = None,
    ) -> NodeId:
        """
        Advance exactly `steps` hops from `start`.

        Returns the landing node, or FINISHED when a step is taken from the
        terminal node.
        """
        if steps < 0:
            raise InvalidInputError(f"Steps must be non-negative, got {steps}")
        self.get_node(start)

        current = start
        previous: NodeId | None = None
        for step in range(steps):
            if current == TERMINAL_NODE:
                return FINISHED
            if step == 0:
                successor = self.get_next_node(current, branch_choice)
            elif current == CENTER_NODE:
                successor = self.get_next_node(current, CENTER_PASS_THROUGH[previous])
            else:
                successor = self.get_next_node(current)
            previous, current = current, successor
        return current

    @staticmethod
    def _parse_branch(branch_choice: BranchOption | str) -> BranchOption:
        return parse_branch_option(branch_choice)


def parse_branch_option(branch_choice: BranchOption | str) -> BranchOption:
    try:
        return BranchOption(branch_choice)
    except ValueError:
        raise InvalidInputError(f"Unknown branch option: {branch_choice}") from None


BOARD = BoardGraph()
BRANCH_NODES: tuple[NodeId, ...] = tuple(BRANCH_TABLE)

# Nodes that never carry a landing effect
DEFAULT_EXCLUDED_NODES: tuple[NodeId, ...] = (HOME_NODE, "O5", "O10", CENTER_NODE, TERMINAL_NODE)


def get_branch_options(node_id: NodeId) -> list[BranchOption]:
    return BOARD.get_branch_options(node_id)


def get_next_node(node_id: NodeId, branch_choice: BranchOption | str | None = None) -> NodeId | None:
    return BOARD.get_next_node(node_id, branch_choice)


def traverse_steps(start: NodeId, steps: int, branch_choice: BranchOption | str | None = None) -> NodeId:
    return BOARD.traverse_steps(start, steps, branch_choice)


def is_branch_node(node_id: NodeId) -> bool:
    return BOARD.is_branch_node(node_id)
