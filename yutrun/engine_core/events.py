"""
Node Events - Special node placement and landing effects.

STICK nodes offer a random stick from the pool. REFRESH nodes reshuffle
the special node placement, keeping the same STICK and REFRESH counts.

Events fire only when a move ends on the node. Passing through never
fires, and a piece already standing on a node that a REFRESH turns
special does not fire either.
"""

from __future__ import annotations
from typing import Sequence

from loguru import logger

from .board import BOARD, DEFAULT_EXCLUDED_NODES, NodeId, SpecialNodeType
from .errors import InvalidInputError
from .rng import DrawFn
from .state import GameState, offer_stick, update_special_nodes
from ..content.sticks import draw_random_stick


def shuffle(items: Sequence, draw: DrawFn) -> list:
    """Fisher-Yates shuffle driven by the given draw source."""
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = int(draw() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result


def create_special_nodes(
    stick_count: int,
    refresh_count: int,
    draw: DrawFn,
    excluded: Sequence[NodeId] = DEFAULT_EXCLUDED_NODES,
) -> dict[NodeId, SpecialNodeType]:
    """
    Build a full node -> type mapping.

    Eligible nodes are shuffled; the first stick_count become STICK, the next
    refresh_count become REFRESH, and every other node is NORMAL.
    """
    if stick_count < 0 or refresh_count < 0:
        raise InvalidInputError("Special node counts must be non-negative")

    eligible = [node_id for node_id in BOARD.node_ids() if node_id not in excluded]
    if stick_count + refresh_count > len(eligible):
        raise InvalidInputError(
            f"Not enough eligible nodes: need {stick_count + refresh_count}, "
            f"have {len(eligible)}"
        )

    mapping = {node_id: SpecialNodeType.NORMAL for node_id in BOARD.node_ids()}
    shuffled = shuffle(eligible, draw)
    for node_id in shuffled[:stick_count]:
        mapping[node_id] = SpecialNodeType.STICK
    for node_id in shuffled[stick_count:stick_count + refresh_count]:
        mapping[node_id] = SpecialNodeType.REFRESH
    return mapping


def count_special_nodes(special_nodes: dict[NodeId, SpecialNodeType]) -> tuple[int, int]:
    """(STICK count, REFRESH count)"""
    types = list(special_nodes.values())
    return types.count(SpecialNodeType.STICK), types.count(SpecialNodeType.REFRESH)


def get_special_node_type(state: GameState, node_id: NodeId) -> SpecialNodeType:
    return state.special_nodes.get(node_id, SpecialNodeType.NORMAL)


def has_special_node_event(state: GameState, node_id: NodeId) -> bool:
    return get_special_node_type(state, node_id) in (SpecialNodeType.STICK, SpecialNodeType.REFRESH)


def should_trigger_node_event(node_id: NodeId, is_landing: bool) -> bool:
    """Only the final landing node of a move triggers."""
    return is_landing


def handle_stick_node_event(state: GameState, draw: DrawFn) -> GameState:
    stick = draw_random_stick(draw)
    return offer_stick(state, stick)


def handle_refresh_node_event(state: GameState, draw: DrawFn) -> GameState:
    stick_count, refresh_count = count_special_nodes(state.special_nodes)
    mapping = create_special_nodes(stick_count, refresh_count, draw)
    logger.debug(f"Refreshed special nodes ({stick_count} STICK, {refresh_count} REFRESH)")
    return update_special_nodes(state, mapping)


def handle_node_event(state: GameState, node_id: NodeId, draw: DrawFn) -> GameState:
    """Resolve whatever the landing node does. NORMAL nodes return the state unchanged."""
    node_type = get_special_node_type(state, node_id)
    if node_type == SpecialNodeType.STICK:
        logger.debug(f"Landed on STICK node {node_id}")
        return handle_stick_node_event(state, draw)
    if node_type == SpecialNodeType.REFRESH:
        logger.debug(f"Landed on REFRESH node {node_id}")
        return handle_refresh_node_event(state, draw)
    return state
