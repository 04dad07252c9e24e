"""Group snapshot loading.

A snapshot is the caller-supplied state of one group: user profiles, stored
relation rows and memberships, in the camelCase shape of the persistence
rows::

    {
      "users": [{"id": "u1", "gender": "female"}],
      "relations": [{"user1Id": "u1", "user2Id": "u2", "relationTypeCode": "parent"}],
      "members": [{"userId": "u2", "parents": [], "children": []}]
    }
"""
from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import SnapshotError
from .graph import AdjacencyList, build_adjacency_list
from .logging import get_logger
from .models import Member, RawRelation, User, UserId

logger = get_logger(__name__)


class GroupSnapshot(BaseModel):
    """Users, relations and members of a group at one point in time."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    users: list[User] = Field(default_factory=list)
    relations: list[RawRelation] = Field(default_factory=list)
    members: list[Member] = Field(default_factory=list)

    @classmethod
    def load(cls, path: str | Path) -> GroupSnapshot:
        """Read a snapshot from a JSON file.

        Raises:
            SnapshotError: file missing, unreadable or not a valid snapshot
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise SnapshotError(path=path, reason=f"cannot read file ({e.strerror or e})") from e

        try:
            snapshot = cls.model_validate_json(text)
        except ValidationError as e:
            raise SnapshotError(path=path, reason=f"invalid snapshot ({e.error_count()} errors)") from e

        logger.info(
            "snapshot.loaded",
            path=str(path),
            users=len(snapshot.users),
            relations=len(snapshot.relations),
            members=len(snapshot.members),
        )
        return snapshot

    def users_by_id(self) -> dict[UserId, User]:
        return {user.id: user for user in self.users}

    def member_ids(self) -> list[UserId]:
        """Member user ids, or all user ids when no memberships are recorded."""
        if self.members:
            return [m.user_id for m in self.members]
        return [u.id for u in self.users]

    def build_graph(self) -> AdjacencyList:
        return build_adjacency_list(self.relations, self.members)
