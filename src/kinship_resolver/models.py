"""Data models for kinship resolution.

Input records (users, raw relations, group members) are pydantic models that
accept the camelCase shape of the persistence rows as well as snake_case.
Derived structures (edges, path steps, results) are lightweight frozen
dataclasses built fresh for each resolution.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

UserId = str


class EdgeType(str, Enum):
    """Types of edges in the family graph.

    The type describes the target of an edge relative to its source: an edge
    ``A -> B`` of type ``PARENT`` means B is a parent of A.
    """
    PARENT = "parent"
    CHILD = "child"
    SPOUSE = "spouse"
    PARTNER = "partner"


class Gender(str, Enum):
    """Recorded gender of a user."""
    MALE = "male"
    FEMALE = "female"
    NON_BINARY = "non_binary"


class User(BaseModel):
    """User profile fields relevant to labelling."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: UserId
    gender: Gender | None = None

    @field_validator("gender", mode="before")
    @classmethod
    def _blank_gender(cls, value: Any) -> Any:
        # Unrecognised values are treated as unset rather than rejected.
        if isinstance(value, str):
            value = value.strip().lower()
            return value if value in {g.value for g in Gender} else None
        return value


class RawRelation(BaseModel):
    """A stored user-to-user relation row.

    ``parent`` means user1 is the parent of user2; ``child`` means user1 is
    the child of user2. Codes outside :class:`EdgeType` come from other
    relation categories and are skipped by the graph builder.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    user1_id: UserId = Field(alias="user1Id")
    user2_id: UserId = Field(alias="user2Id")
    relation_type_code: str = Field(alias="relationTypeCode")


class Member(BaseModel):
    """Group membership with optional explicit parent/child overrides."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    user_id: UserId = Field(alias="userId")
    parents: tuple[UserId, ...] = ()
    children: tuple[UserId, ...] = ()

    @field_validator("parents", "children", mode="before")
    @classmethod
    def _member_ids(cls, value: Any) -> Any:
        # Overrides may be given as nested member records instead of ids.
        if value is None:
            return ()
        ids = []
        for item in value:
            if isinstance(item, dict):
                item = item.get("userId") or item.get("user_id")
            elif isinstance(item, Member):
                item = item.user_id
            if item is not None:
                ids.append(item)
        return tuple(ids)


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed, typed edge in the adjacency list."""
    from_user_id: UserId
    to_user_id: UserId
    edge_type: EdgeType


@dataclass(frozen=True, slots=True)
class PathStep:
    """One node on a kinship path and the edge type used to reach it."""
    user_id: UserId
    edge_type: EdgeType | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "userId": self.user_id,
            "relationshipType": self.edge_type.value if self.edge_type else None,
        }


Path = tuple[PathStep, ...]
PathShape = tuple[EdgeType, ...]


def path_shape(path: Path) -> PathShape:
    """Edge types along a path, excluding the ego step."""
    return tuple(step.edge_type for step in path[1:] if step.edge_type is not None)


@dataclass(frozen=True)
class RelationshipResult:
    """Outcome of resolving the relationship between ego and alter."""
    relationship: str | None
    path: Path | None
    steps: int = 0

    @classmethod
    def not_found(cls) -> RelationshipResult:
        return cls(relationship=None, path=None, steps=0)

    @property
    def found(self) -> bool:
        """Whether a connecting path exists."""
        return self.path is not None

    @property
    def shape(self) -> PathShape:
        return path_shape(self.path) if self.path else ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "relationship": self.relationship,
            "path": [step.to_dict() for step in self.path] if self.path else None,
            "steps": self.steps,
        }
