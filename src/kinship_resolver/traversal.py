"""Shortest kinship path search.

Breadth-first search over an :class:`AdjacencyList`. Visited users are marked
when enqueued, so every returned path is simple and of minimum edge count.
When several minimal paths exist the one found first in edge enumeration
order wins; callers should not depend on which.
"""
from __future__ import annotations

from collections import deque

from .graph import AdjacencyList
from .models import Path, PathStep, UserId


def find_path(graph: AdjacencyList, ego_id: UserId, alter_id: UserId) -> Path | None:
    """Find the shortest path from ego to alter.

    Args:
        graph: Family graph to search
        ego_id: User the path starts from
        alter_id: User the path should reach

    Returns:
        Path starting with ``PathStep(ego_id, None)``, or None if disconnected
    """
    visited: set[UserId] = {ego_id}
    queue: deque[tuple[UserId, Path]] = deque()
    queue.append((ego_id, (PathStep(ego_id, None),)))

    while queue:
        current_id, path = queue.popleft()

        if current_id == alter_id:
            return path

        for edge in graph.neighbors(current_id):
            if edge.to_user_id in visited:
                continue
            visited.add(edge.to_user_id)
            queue.append((edge.to_user_id, path + (PathStep(edge.to_user_id, edge.edge_type),)))

    return None


def shortest_paths(graph: AdjacencyList, ego_id: UserId) -> dict[UserId, Path]:
    """Shortest path from ego to every reachable user.

    Runs the same search as :func:`find_path` to exhaustion. Since a user's
    path is fixed when it is first enqueued, the path for each user is the one
    :func:`find_path` would return for it.

    Returns:
        Dict mapping user id -> path, including ego itself
    """
    paths: dict[UserId, Path] = {ego_id: (PathStep(ego_id, None),)}
    queue: deque[UserId] = deque([ego_id])

    while queue:
        current_id = queue.popleft()
        path = paths[current_id]

        for edge in graph.neighbors(current_id):
            if edge.to_user_id in paths:
                continue
            paths[edge.to_user_id] = path + (PathStep(edge.to_user_id, edge.edge_type),)
            queue.append(edge.to_user_id)

    return paths
