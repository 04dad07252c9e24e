"""Full/half sibling disambiguation.

A path of shape ``parent > child`` does not by itself say whether ego and
alter share every parent. This compares their complete parent sets, which may
hold more than two users when step-parents are recorded.
"""
from __future__ import annotations

from .graph import AdjacencyList
from .models import EdgeType, Path, path_shape

SIBLING_LABEL = "Sibling"
HALF_SIBLING_LABEL = "Half-sibling"

SIBLING_SHAPE = (EdgeType.PARENT, EdgeType.CHILD)


def disambiguate_siblings(graph: AdjacencyList, path: Path) -> str | None:
    """Classify a two-hop ``parent > child`` path.

    Returns:
        "Sibling" when the parent sets are equal, "Half-sibling" when they
        overlap, or None when the path should go through the regular
        translation (other shape, a user without parents, or no overlap)
    """
    if path_shape(path) != SIBLING_SHAPE:
        return None

    ego_parents = graph.parents_of(path[0].user_id)
    alter_parents = graph.parents_of(path[-1].user_id)

    if not ego_parents or not alter_parents:
        return None
    if ego_parents == alter_parents:
        return SIBLING_LABEL
    if ego_parents & alter_parents:
        return HALF_SIBLING_LABEL
    return None
