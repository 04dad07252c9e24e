"""Pytest fixtures for kinship tests."""
from __future__ import annotations

import pytest

from kinship_resolver import GroupResolver, RawRelation, User, build_adjacency_list


def _rel(user1: str, user2: str, code: str) -> RawRelation:
    """Relation row; for "parent", user1 is the parent of user2."""
    return RawRelation(user1_id=user1, user2_id=user2, relation_type_code=code)


# Four generations around "ego":
#
#   ggpa = ggma
#        |
#   gpa = gma
#     |      \
#   dad = mom  uncle
#    |     |       \
#   ego   sib      cousin
#          |
#        nibling
FAMILY_RELATIONS = [
    _rel("ggpa", "gpa", "parent"),
    _rel("ggma", "gpa", "parent"),
    _rel("gpa", "dad", "parent"),
    _rel("gma", "dad", "parent"),
    _rel("gpa", "uncle", "parent"),
    _rel("gma", "uncle", "parent"),
    _rel("uncle", "cousin", "parent"),
    _rel("dad", "ego", "parent"),
    _rel("mom", "ego", "parent"),
    _rel("dad", "sib", "parent"),
    _rel("mom", "sib", "parent"),
    _rel("sib", "nibling", "parent"),
    _rel("ggpa", "ggma", "spouse"),
    _rel("gpa", "gma", "spouse"),
    _rel("dad", "mom", "spouse"),
]

FAMILY_GENDERS = {
    "ggpa": "male",
    "ggma": "female",
    "gpa": "male",
    "gma": "female",
    "dad": "male",
    "mom": "female",
    "uncle": "male",
    "cousin": "female",
    "ego": "non_binary",
    "sib": "female",
    "nibling": "male",
}


@pytest.fixture
def rel():
    """Factory for relation rows."""
    return _rel


@pytest.fixture
def relations() -> list[RawRelation]:
    return list(FAMILY_RELATIONS)


@pytest.fixture
def users() -> dict[str, User]:
    return {uid: User(id=uid, gender=gender) for uid, gender in FAMILY_GENDERS.items()}


@pytest.fixture
def graph(relations):
    return build_adjacency_list(relations)


@pytest.fixture
def resolver(relations, users) -> GroupResolver:
    return GroupResolver.from_records(relations, users=users.values())


@pytest.fixture
def snapshot_data() -> dict:
    """Snapshot in the camelCase row shape."""
    return {
        "users": [{"id": uid, "gender": gender} for uid, gender in FAMILY_GENDERS.items()],
        "relations": [
            {"user1Id": r.user1_id, "user2Id": r.user2_id, "relationTypeCode": r.relation_type_code}
            for r in FAMILY_RELATIONS
        ],
        "members": [{"userId": uid} for uid in FAMILY_GENDERS],
    }
