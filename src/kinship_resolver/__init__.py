"""Kinship relationship resolver.

Computes the kinship label ("Grandmother", "Step-sibling-in-law",
"2nd cousin", ...) between two members of a family group, together with the
shortest connecting path:

- Graph building from stored relations and member parent/child overrides
- Shortest path search over the family graph
- Full/half sibling disambiguation by parent sets
- Path-shape rule catalog with in-law, step and co- variants
- Gendered label substitution
"""
from .exceptions import RuleCatalogError, SnapshotError
from .gender import GenderTable, gender_label, neutral_label
from .graph import AdjacencyList, build_adjacency_list
from .models import (
    Edge,
    EdgeType,
    Gender,
    Member,
    Path,
    PathStep,
    RawRelation,
    RelationshipResult,
    User,
    path_shape,
)
from .resolver import GroupResolver, label_path, resolve, resolve_in_graph, sort_results
from .rules import (
    CATALOG,
    FALLBACK_LABEL,
    KinshipRule,
    RuleCatalog,
    RuleFamily,
    lookup_rule,
    parse_shape,
    shape_key,
    translate_path,
)
from .siblings import HALF_SIBLING_LABEL, SIBLING_LABEL, disambiguate_siblings
from .snapshot import GroupSnapshot
from .traversal import find_path, shortest_paths

__version__ = "0.1.0"

__all__ = [
    # Models
    "User",
    "RawRelation",
    "Member",
    "Edge",
    "EdgeType",
    "Gender",
    "Path",
    "PathStep",
    "RelationshipResult",
    "path_shape",
    # Graph and search
    "AdjacencyList",
    "build_adjacency_list",
    "find_path",
    "shortest_paths",
    # Labelling
    "disambiguate_siblings",
    "SIBLING_LABEL",
    "HALF_SIBLING_LABEL",
    "KinshipRule",
    "RuleCatalog",
    "RuleFamily",
    "CATALOG",
    "FALLBACK_LABEL",
    "lookup_rule",
    "parse_shape",
    "shape_key",
    "translate_path",
    "GenderTable",
    "gender_label",
    "neutral_label",
    # Resolution
    "resolve",
    "resolve_in_graph",
    "label_path",
    "GroupResolver",
    "sort_results",
    "GroupSnapshot",
    # Errors
    "RuleCatalogError",
    "SnapshotError",
]
