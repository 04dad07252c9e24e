"""Path-shape rule catalog for kinship labels.

A path shape is the sequence of edge types along a kinship path, e.g.
``parent > parent > child`` for a pibling (aunt/uncle). Labels are found by
exact match of the shape against an ordered catalog; unmatched shapes get
the generic label "Relative".

The catalog is data: a short table of blood-relation base rules, plus
variant families derived from it by inserting one spouse or partner hop at a
fixed position:

- in-law: ego's spouse's relative (prefix) or a relative's spouse (suffix)
- step: a parent's spouse's relatives, a spouse's descendants, a sibling's
  spouse's descendants, or a relative's spouse's child
- co: the same insertions with an unmarried partner instead of a spouse
- step-in-law and double in-law: a second spouse hop around a variant

Variant shapes are limited to seven hops.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from .exceptions import RuleCatalogError
from .gender import gendered_forms
from .models import EdgeType, Path, PathShape, path_shape
from .siblings import HALF_SIBLING_LABEL, SIBLING_LABEL

FALLBACK_LABEL = "Relative"
SHAPE_SEPARATOR = " > "
MAX_VARIANT_HOPS = 7

P, C, S, X = EdgeType.PARENT, EdgeType.CHILD, EdgeType.SPOUSE, EdgeType.PARTNER


class RuleFamily(str, Enum):
    """Where a catalog rule comes from."""
    BLOOD = "blood"
    UNION = "union"
    IN_LAW = "in_law"
    STEP = "step"
    CO = "co"
    STEP_IN_LAW = "step_in_law"


def shape_key(shape: Iterable[EdgeType]) -> str:
    """Display form of a shape, e.g. ``"parent > spouse"``."""
    return SHAPE_SEPARATOR.join(hop.value for hop in shape)


def parse_shape(text: str) -> PathShape:
    """Parse the display form back into a shape."""
    return tuple(EdgeType(part.strip()) for part in text.split(">") if part.strip())


@dataclass(frozen=True)
class KinshipRule:
    """Maps one exact path shape to a label.

    ``gendered_at_step`` is the index into the path of the user whose gender
    selects the gendered label, or None when the label has no gendered form.
    """
    shape: PathShape
    label: str
    gendered_at_step: int | None = None
    family: RuleFamily = RuleFamily.BLOOD

    @property
    def key(self) -> str:
        return shape_key(self.shape)

    @property
    def hops(self) -> int:
        return len(self.shape)


@dataclass(frozen=True)
class BaseRule:
    shape: str
    label: str
    listed: bool = True  # False: only used to derive variants


BASE_RULES: tuple[BaseRule, ...] = (
    # Direct lineage
    BaseRule("parent", "Parent"),
    BaseRule("child", "Child"),
    BaseRule("parent > parent", "Grandparent"),
    BaseRule("child > child", "Grandchild"),
    BaseRule("parent > parent > parent", "Great-grandparent"),
    BaseRule("child > child > child", "Great-grandchild"),
    BaseRule("parent > parent > parent > parent", "Great-great-grandparent"),
    BaseRule("child > child > child > child", "Great-great-grandchild"),
    # Siblings are labelled by parent-set comparison, see siblings.py
    BaseRule("parent > child", SIBLING_LABEL, listed=False),
    # Collateral lines
    BaseRule("parent > child > child", "Nibling"),
    BaseRule("parent > parent > child", "Pibling"),
    BaseRule("parent > child > child > child", "Great-nibling"),
    BaseRule("parent > parent > parent > child", "Great-pibling"),
    BaseRule("parent > child > child > child > child", "Great-great-nibling"),
    BaseRule("parent > parent > parent > parent > child", "Great-great-pibling"),
    # Cousins
    BaseRule("parent > parent > child > child", "Cousin"),
    BaseRule("parent > parent > child > child > child", "1st cousin-once-removed"),
    BaseRule("parent > parent > parent > child > child", "1st cousin-once-removed"),
    BaseRule("parent > parent > child > child > child > child", "1st cousin-twice-removed"),
    BaseRule("parent > parent > parent > parent > child > child", "1st cousin-twice-removed"),
    BaseRule("parent > parent > parent > child > child > child", "2nd cousin"),
    BaseRule("parent > parent > parent > child > child > child > child", "2nd cousin-once-removed"),
    BaseRule("parent > parent > parent > parent > child > child > child", "2nd cousin-once-removed"),
    BaseRule("parent > parent > parent > parent > child > child > child > child", "3rd cousin"),
)

UNION_RULES: tuple[BaseRule, ...] = (
    BaseRule("spouse", "Spouse"),
    BaseRule("partner", "Partner"),
)


def _lower_first(label: str) -> str:
    return label[:1].lower() + label[1:]


def in_law_label(label: str) -> str:
    return f"{label}-in-law"


def step_label(label: str) -> str:
    return f"Step-{_lower_first(label)}"


def co_label(label: str) -> str:
    return f"Co-{_lower_first(label)}"


@dataclass(frozen=True)
class _Insertion:
    name: str
    applies: Callable[[PathShape], bool]
    insert: Callable[[PathShape, EdgeType], PathShape]
    family: RuleFamily


def _starts_up(shape: PathShape) -> bool:
    return shape[0] is P


def _ends_down(shape: PathShape) -> bool:
    return shape[-1] is C


def _all_down(shape: PathShape) -> bool:
    return all(hop is C for hop in shape)


def _descends(shape: PathShape) -> bool:
    return len(shape) >= 2 and shape[-1] is C


def _nibling_line(shape: PathShape) -> bool:
    return len(shape) >= 3 and shape[:2] == (P, C) and _all_down(shape[1:])


INSERTIONS: tuple[_Insertion, ...] = (
    _Insertion("ego's spouse's relative", _starts_up, lambda s, h: (h, *s), RuleFamily.IN_LAW),
    _Insertion("relative's spouse", _ends_down, lambda s, h: (*s, h), RuleFamily.IN_LAW),
    _Insertion("parent's spouse's relative", _starts_up, lambda s, h: (s[0], h, *s[1:]), RuleFamily.STEP),
    _Insertion("spouse's descendant", _all_down, lambda s, h: (h, *s), RuleFamily.STEP),
    _Insertion("relative's spouse's child", _descends, lambda s, h: (*s[:-1], h, s[-1]), RuleFamily.STEP),
    _Insertion("sibling's spouse's descendant", _nibling_line, lambda s, h: (*s[:2], h, *s[2:]), RuleFamily.STEP),
)

_SPOUSE_LABELS: dict[RuleFamily, Callable[[str], str]] = {
    RuleFamily.IN_LAW: in_law_label,
    RuleFamily.STEP: step_label,
}


def _rule(shape: PathShape, label: str, family: RuleFamily) -> KinshipRule:
    # The gendered user is always the terminal one.
    step = len(shape) if gendered_forms(label) else None
    return KinshipRule(shape=shape, label=label, gendered_at_step=step, family=family)


def _variants(
    bases: list[tuple[PathShape, str]],
    hop: EdgeType,
    families: tuple[RuleFamily, ...],
    label_for: Callable[[RuleFamily, str], str],
    family_for: Callable[[RuleFamily], RuleFamily],
) -> Iterator[KinshipRule]:
    for insertion in INSERTIONS:
        if insertion.family not in families:
            continue
        for shape, label in bases:
            if not insertion.applies(shape):
                continue
            new_shape = insertion.insert(shape, hop)
            if len(new_shape) > MAX_VARIANT_HOPS:
                continue
            yield _rule(new_shape, label_for(insertion.family, label), family_for(insertion.family))


def generate_rules() -> Iterator[KinshipRule]:
    """Yield every catalog rule in order, including identical re-derivations."""
    bases = [(parse_shape(b.shape), b.label) for b in BASE_RULES]

    for base, (shape, label) in zip(BASE_RULES, bases):
        if base.listed:
            yield _rule(shape, label, RuleFamily.BLOOD)
    for base in UNION_RULES:
        yield _rule(parse_shape(base.shape), base.label, RuleFamily.UNION)

    in_law = list(_variants(
        bases, S, (RuleFamily.IN_LAW,),
        lambda fam, label: _SPOUSE_LABELS[fam](label), lambda fam: fam,
    ))
    step = list(_variants(
        bases, S, (RuleFamily.STEP,),
        lambda fam, label: _SPOUSE_LABELS[fam](label), lambda fam: fam,
    ))
    yield from in_law
    yield from step
    yield from _variants(
        bases, X, (RuleFamily.IN_LAW, RuleFamily.STEP),
        lambda fam, label: co_label(label), lambda fam: RuleFamily.CO,
    )

    # Step relatives by marriage: an in-law hop around a spouse step shape
    step_bases = [(rule.shape, rule.label) for rule in step]
    yield from _variants(
        step_bases, S, (RuleFamily.IN_LAW,),
        lambda fam, label: in_law_label(label), lambda fam: RuleFamily.STEP_IN_LAW,
    )

    # Double in-law: ego's spouse's relative's spouse keeps the in-law label
    for rule in in_law:
        if rule.shape[0] is P and len(rule.shape) < MAX_VARIANT_HOPS:
            yield _rule((S, *rule.shape), rule.label, RuleFamily.IN_LAW)


class RuleCatalog:
    """Ordered exact-match rule table keyed by path shape."""

    def __init__(self, rules: Iterable[KinshipRule] = ()) -> None:
        self._rules: dict[PathShape, KinshipRule] = {}
        for rule in rules:
            self.add(rule)

    def add(self, rule: KinshipRule) -> bool:
        """Add a rule; returns False if an identical label was already present.

        Raises:
            RuleCatalogError: the shape is already mapped to a different label
        """
        existing = self._rules.get(rule.shape)
        if existing is None:
            self._rules[rule.shape] = rule
            return True
        if existing.label != rule.label:
            raise RuleCatalogError(shape=rule.key, labels=(existing.label, rule.label))
        return False

    def lookup(self, shape: PathShape) -> KinshipRule | None:
        return self._rules.get(tuple(shape))

    def by_family(self, family: RuleFamily) -> list[KinshipRule]:
        return [rule for rule in self if rule.family is family]

    def labels(self) -> list[str]:
        """Distinct labels in catalog order."""
        return list(dict.fromkeys(rule.label for rule in self))

    def __contains__(self, shape: object) -> bool:
        return shape in self._rules

    def __iter__(self) -> Iterator[KinshipRule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)


CATALOG = RuleCatalog(generate_rules())


def all_labels(catalog: RuleCatalog = CATALOG) -> list[str]:
    """Every label the resolver can produce, before gendering."""
    extra = [b.label for b in BASE_RULES if not b.listed] + [HALF_SIBLING_LABEL]
    return list(dict.fromkeys([*catalog.labels(), *extra]))


def lookup_rule(shape: PathShape | str, catalog: RuleCatalog = CATALOG) -> KinshipRule | None:
    """Exact-match rule lookup by shape or by its display form."""
    if isinstance(shape, str):
        shape = parse_shape(shape)
    return catalog.lookup(shape)


def translate_path(path: Path, catalog: RuleCatalog = CATALOG) -> tuple[str, KinshipRule | None]:
    """Translate a path into a neutral label.

    Returns:
        (label, matched rule); the rule is None when the fallback label is used
    """
    rule = lookup_rule(path_shape(path), catalog)
    if rule is None:
        return FALLBACK_LABEL, None
    return rule.label, rule
