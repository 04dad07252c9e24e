"""Kinship resolution between members of a group.

Combines the graph builder, path search, sibling check, rule catalog and
gendering into the single ``resolve`` operation, and provides a
:class:`GroupResolver` that reuses one graph for many resolutions.
"""
from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from .config import CONFIG, KinshipConfig
from .gender import gender_label
from .graph import AdjacencyList, build_adjacency_list
from .logging import get_logger
from .models import Gender, Member, Path, PathStep, RawRelation, RelationshipResult, User, UserId
from .rules import CATALOG, RuleCatalog, translate_path
from .siblings import disambiguate_siblings
from .traversal import find_path, shortest_paths

if TYPE_CHECKING:
    from .snapshot import GroupSnapshot

logger = get_logger(__name__)


def _gender_of(users: Mapping[UserId, Any], user_id: UserId) -> Gender | str | None:
    user = users.get(user_id)
    return getattr(user, "gender", None) if user is not None else None


def label_path(
    graph: AdjacencyList,
    path: Path,
    users: Mapping[UserId, Any],
    apply_gender: bool = True,
    catalog: RuleCatalog = CATALOG,
) -> str:
    """Label a path found in ``graph``.

    Sibling paths are classified by parent sets; everything else goes
    through the rule catalog. Gendering uses the user at the rule's gendered
    step, which for siblings is alter.
    """
    sibling = disambiguate_siblings(graph, path)
    if sibling is not None:
        return gender_label(sibling, _gender_of(users, path[-1].user_id), apply_gender)

    label, rule = translate_path(path, catalog)
    if rule is None or rule.gendered_at_step is None:
        return label
    return gender_label(label, _gender_of(users, path[rule.gendered_at_step].user_id), apply_gender)


def _result(
    graph: AdjacencyList,
    path: Path | None,
    users: Mapping[UserId, Any],
    apply_gender: bool,
    catalog: RuleCatalog,
) -> RelationshipResult:
    if path is None:
        return RelationshipResult.not_found()
    return RelationshipResult(
        relationship=label_path(graph, path, users, apply_gender, catalog),
        path=path,
        steps=len(path) - 1,
    )


def resolve_in_graph(
    graph: AdjacencyList,
    ego_id: UserId,
    alter_id: UserId,
    users: Mapping[UserId, Any],
    apply_gender: bool = True,
    *,
    config: KinshipConfig | None = None,
    catalog: RuleCatalog = CATALOG,
) -> RelationshipResult:
    """Resolve alter's relationship to ego in an already built graph."""
    config = config or CONFIG
    if ego_id == alter_id:
        return RelationshipResult(config.self_label, (PathStep(ego_id, None),), 0)

    result = _result(graph, find_path(graph, ego_id, alter_id), users, apply_gender, catalog)
    if result.found:
        logger.debug(
            "kinship.resolved",
            ego=ego_id,
            alter=alter_id,
            steps=result.steps,
            relationship=result.relationship,
        )
    else:
        logger.debug("kinship.no_path", ego=ego_id, alter=alter_id)
    return result


def resolve(
    ego_id: UserId,
    alter_id: UserId,
    relations: Iterable[RawRelation],
    members: Iterable[Member],
    users: Mapping[UserId, Any],
    apply_gender: bool = True,
) -> RelationshipResult:
    """Find how alter is related to ego.

    Args:
        ego_id: User from whose perspective the label is given
        alter_id: User being labelled
        relations: Stored relation rows for the group
        members: Group members, possibly with parent/child overrides
        users: Mapping of user id -> object with a ``gender`` attribute
        apply_gender: Use gendered labels ("Mother") instead of neutral ones

    Returns:
        RelationshipResult; relationship and path are None when the users
        are not connected
    """
    graph = build_adjacency_list(relations, members)
    return resolve_in_graph(graph, ego_id, alter_id, users, apply_gender)


class GroupResolver:
    """Resolves many relationships against one group snapshot.

    The graph is built once and shared; :meth:`relationship_map` labels
    every member with a single search from ego.

    Example:
        >>> resolver = GroupResolver.from_snapshot(snapshot)
        >>> for user_id in resolver.sort_by_closeness(me):
        ...     print(user_id, resolver.resolve(me, user_id).relationship)
    """

    def __init__(
        self,
        graph: AdjacencyList,
        users: Mapping[UserId, Any] | None = None,
        *,
        member_ids: Iterable[UserId] | None = None,
        config: KinshipConfig | None = None,
        catalog: RuleCatalog = CATALOG,
    ) -> None:
        self.graph = graph
        self.users: Mapping[UserId, Any] = users or {}
        self.config = config or CONFIG
        self.catalog = catalog
        if member_ids is None:
            member_ids = self.users or graph
        self.member_ids: tuple[UserId, ...] = tuple(dict.fromkeys(member_ids))

    @classmethod
    def from_records(
        cls,
        relations: Iterable[RawRelation],
        members: Iterable[Member] = (),
        users: Iterable[User] = (),
        *,
        config: KinshipConfig | None = None,
    ) -> GroupResolver:
        members = list(members)
        users_by_id = {user.id: user for user in users}
        member_ids = [m.user_id for m in members] or list(users_by_id) or None
        return cls(
            build_adjacency_list(relations, members),
            users_by_id,
            member_ids=member_ids,
            config=config,
        )

    @classmethod
    def from_snapshot(
        cls,
        snapshot: GroupSnapshot,
        *,
        config: KinshipConfig | None = None,
    ) -> GroupResolver:
        return cls.from_records(
            snapshot.relations, snapshot.members, snapshot.users, config=config
        )

    def _apply_gender(self, apply_gender: bool | None) -> bool:
        return self.config.apply_gender if apply_gender is None else apply_gender

    def resolve(
        self,
        ego_id: UserId,
        alter_id: UserId,
        apply_gender: bool | None = None,
    ) -> RelationshipResult:
        return resolve_in_graph(
            self.graph,
            ego_id,
            alter_id,
            self.users,
            self._apply_gender(apply_gender),
            config=self.config,
            catalog=self.catalog,
        )

    def relationship_map(
        self,
        ego_id: UserId,
        member_ids: Iterable[UserId] | None = None,
        apply_gender: bool | None = None,
    ) -> dict[UserId, RelationshipResult]:
        """Relationship of every other member to ego.

        Ego is left out. Members not connected to ego map to a result with
        no relationship and no path.
        """
        apply = self._apply_gender(apply_gender)
        paths = shortest_paths(self.graph, ego_id)
        results: dict[UserId, RelationshipResult] = {}

        for user_id in self.member_ids if member_ids is None else member_ids:
            if user_id == ego_id:
                continue
            results[user_id] = _result(self.graph, paths.get(user_id), self.users, apply, self.catalog)

        logger.debug(
            "kinship.map_built",
            ego=ego_id,
            members=len(results),
            connected=sum(1 for r in results.values() if r.found),
        )
        return results

    def sort_by_closeness(
        self,
        ego_id: UserId,
        member_ids: Iterable[UserId] | None = None,
        descending: bool = False,
        tie_key: Callable[[UserId], Any] | None = None,
    ) -> list[UserId]:
        """Order members by number of steps from ego; see :func:`sort_results`."""
        results = self.relationship_map(ego_id, member_ids, apply_gender=False)
        return sort_results(results, descending, tie_key)


def sort_results(
    results: Mapping[UserId, RelationshipResult],
    descending: bool = False,
    tie_key: Callable[[UserId], Any] | None = None,
) -> list[UserId]:
    """Order already resolved members by number of steps.

    Unconnected members count as infinitely far: last when ascending,
    first when descending. Ties are broken by ``tie_key`` (defaults to the
    user id), ascending in both directions.
    """
    tie_key = tie_key or (lambda user_id: user_id)
    sign = -1 if descending else 1

    def key(user_id: UserId) -> tuple[float, Any]:
        result = results[user_id]
        steps = result.steps if result.found else math.inf
        return sign * steps, tie_key(user_id)

    return sorted(results, key=key)
