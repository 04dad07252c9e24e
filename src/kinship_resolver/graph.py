"""Adjacency list construction for the family graph.

Converts stored relation rows and member parent/child overrides into a
bidirectional adjacency list keyed by user id. Every parent edge has a
matching child edge in the opposite direction and every spouse/partner edge
is mirrored.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType

from .logging import get_logger
from .models import Edge, EdgeType, Member, RawRelation, UserId

logger = get_logger(__name__)

_SYMMETRIC = (EdgeType.SPOUSE, EdgeType.PARTNER)


class AdjacencyList:
    """Immutable mapping from user id to its ordered outgoing edges.

    Built once per group snapshot and safe to share across any number of
    resolutions.
    """

    __slots__ = ("_edges",)

    def __init__(self, edges: Mapping[UserId, Sequence[Edge]]) -> None:
        self._edges = MappingProxyType({uid: tuple(out) for uid, out in edges.items()})

    def neighbors(self, user_id: UserId) -> tuple[Edge, ...]:
        """Outgoing edges of a user in insertion order."""
        return self._edges.get(user_id, ())

    def parents_of(self, user_id: UserId) -> frozenset[UserId]:
        """All users reachable over a parent edge."""
        return frozenset(
            e.to_user_id for e in self.neighbors(user_id) if e.edge_type is EdgeType.PARENT
        )

    def children_of(self, user_id: UserId) -> frozenset[UserId]:
        return frozenset(
            e.to_user_id for e in self.neighbors(user_id) if e.edge_type is EdgeType.CHILD
        )

    @property
    def user_ids(self) -> frozenset[UserId]:
        return frozenset(self._edges)

    @property
    def edge_count(self) -> int:
        return sum(len(out) for out in self._edges.values())

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._edges

    def __iter__(self) -> Iterator[UserId]:
        return iter(self._edges)

    def __len__(self) -> int:
        return len(self._edges)

    def __repr__(self) -> str:
        return f"AdjacencyList(users={len(self)}, edges={self.edge_count})"


class _Builder:
    def __init__(self) -> None:
        self.edges: dict[UserId, list[Edge]] = {}

    def add(self, from_id: UserId, to_id: UserId, edge_type: EdgeType) -> None:
        self.edges.setdefault(from_id, []).append(Edge(from_id, to_id, edge_type))

    def add_parent_child(self, parent_id: UserId, child_id: UserId) -> None:
        self.add(child_id, parent_id, EdgeType.PARENT)
        self.add(parent_id, child_id, EdgeType.CHILD)


def build_adjacency_list(
    relations: Iterable[RawRelation],
    members: Iterable[Member] = (),
) -> AdjacencyList:
    """Build the bidirectional family graph.

    Member override edges are emitted first, then stored relations. Duplicate
    edges are kept; they only add redundant exploration to the search.

    Args:
        relations: Stored relation rows for the group
        members: Group members, possibly carrying parent/child overrides

    Returns:
        AdjacencyList for the group
    """
    builder = _Builder()

    for member in members:
        for parent_id in member.parents:
            builder.add_parent_child(parent_id, member.user_id)
        for child_id in member.children:
            builder.add_parent_child(member.user_id, child_id)

    skipped = 0
    for rel in relations:
        try:
            code = EdgeType(rel.relation_type_code)
        except ValueError:
            skipped += 1
            logger.debug(
                "graph.relation_skipped",
                user1=rel.user1_id,
                user2=rel.user2_id,
                code=rel.relation_type_code,
            )
            continue

        if code in _SYMMETRIC:
            builder.add(rel.user1_id, rel.user2_id, code)
            builder.add(rel.user2_id, rel.user1_id, code)
        elif code is EdgeType.PARENT:
            builder.add_parent_child(rel.user1_id, rel.user2_id)
        else:
            builder.add_parent_child(rel.user2_id, rel.user1_id)

    graph = AdjacencyList(builder.edges)
    logger.debug("graph.built", users=len(graph), edges=graph.edge_count, skipped=skipped)
    return graph
