"""Tests for the path-shape rule catalog."""
from __future__ import annotations

from collections import defaultdict

import pytest

from kinship_resolver import (
    CATALOG,
    FALLBACK_LABEL,
    EdgeType,
    KinshipRule,
    PathStep,
    RuleCatalog,
    RuleCatalogError,
    RuleFamily,
    lookup_rule,
    parse_shape,
    shape_key,
    translate_path,
)
from kinship_resolver.gender import default_table
from kinship_resolver.rules import MAX_VARIANT_HOPS, all_labels, generate_rules


# Complete label table the generated catalog must cover.
EXPECTED_LABELS = [
    ("child", "Child"),
    ("parent", "Parent"),
    ("spouse", "Spouse"),
    ("child > child", "Grandchild"),
    ("parent > parent", "Grandparent"),
    ("child > child > child", "Great-grandchild"),
    ("parent > parent > parent", "Great-grandparent"),
    ("parent > child > child", "Nibling"),
    ("parent > parent > child", "Pibling"),
    ("parent > parent > child > child", "Cousin"),
    ("child > child > child > child", "Great-great-grandchild"),
    ("parent > parent > parent > parent", "Great-great-grandparent"),
    ("parent > child > child > child", "Great-nibling"),
    ("parent > parent > parent > child", "Great-pibling"),
    ("parent > parent > child > child > child", "1st cousin-once-removed"),
    ("parent > parent > parent > child > child", "1st cousin-once-removed"),
    ("parent > child > child > child > child", "Great-great-nibling"),
    ("parent > parent > parent > parent > child", "Great-great-pibling"),
    ("parent > parent > parent > child > child > child", "2nd cousin"),
    ("child > spouse", "Child-in-law"),
    ("spouse > parent", "Parent-in-law"),
    ("spouse > parent > parent", "Grandparent-in-law"),
    ("spouse > parent > child", "Sibling-in-law"),
    ("parent > child > spouse", "Sibling-in-law"),
    ("spouse > parent > parent > parent", "Great-grandparent-in-law"),
    ("spouse > parent > child > child", "Nibling-in-law"),
    ("parent > parent > child > spouse", "Pibling-in-law"),
    ("spouse > parent > parent > child", "Pibling-in-law"),
    ("spouse > parent > parent > child > child", "Cousin-in-law"),
    ("parent > parent > child > child > spouse", "Cousin-in-law"),
    ("spouse > parent > parent > parent > parent", "Great-great-grandparent-in-law"),
    ("spouse > parent > child > child > child", "Great-nibling-in-law"),
    ("parent > parent > parent > child > spouse", "Great-pibling-in-law"),
    ("spouse > parent > parent > child > spouse", "Pibling-in-law"),
    ("spouse > parent > parent > child > child > child", "1st cousin-once-removed-in-law"),
    ("spouse > parent > parent > parent > child > child", "1st cousin-once-removed-in-law"),
    ("parent > parent > parent > child > child > spouse", "1st cousin-once-removed-in-law"),
    ("spouse > parent > child > child > child > child", "Great-great-nibling-in-law"),
    ("parent > parent > parent > parent > child > spouse", "Great-great-pibling-in-law"),
    ("spouse > parent > parent > parent > child > child > spouse", "1st cousin-once-removed-in-law"),
    ("spouse > parent > parent > parent > child > child > child", "2nd cousin-in-law"),
    ("spouse > child", "Step-child"),
    ("parent > spouse", "Step-parent"),
    ("spouse > child > child", "Step-grandchild"),
    ("parent > spouse > parent", "Step-grandparent"),
    ("parent > spouse > child", "Step-sibling"),
    ("spouse > child > child > child", "Step-great-grandchild"),
    ("parent > spouse > parent > parent", "Step-great-grandparent"),
    ("parent > child > spouse > child", "Step-nibling"),
    ("parent > spouse > parent > child", "Step-pibling"),
    ("spouse > child > child > child > child", "Step-great-great-grandchild"),
    ("parent > spouse > parent > parent > parent", "Step-great-great-grandparent"),
    ("parent > child > spouse > child > child", "Step-great-nibling"),
    ("parent > spouse > parent > parent > child", "Step-great-pibling"),
    ("parent > spouse > parent > child > child > child", "Step-1st cousin-once-removed"),
    ("parent > spouse > parent > parent > child > child", "Step-1st cousin-once-removed"),
    ("parent > parent > parent > child > spouse > child", "Step-1st cousin-once-removed"),
    ("parent > spouse > parent > child > child", "Step-cousin"),
    ("parent > child > spouse > child > child > child", "Step-great-great-nibling"),
    ("parent > spouse > parent > parent > parent > child", "Step-great-great-pibling"),
    ("parent > spouse > parent > parent > child > child > child", "Step-2nd cousin"),
    ("parent > parent > parent > child > child > spouse > child", "Step-2nd cousin"),
    ("partner", "Partner"),
    ("partner > child", "Co-child"),
    ("parent > partner", "Co-parent"),
    ("partner > parent", "Co-parent"),
    ("partner > child > child", "Co-grandchild"),
    ("parent > partner > parent", "Co-grandparent"),
    ("partner > parent > parent", "Co-grandparent"),
    ("parent > partner > child", "Co-sibling"),
    ("partner > parent > child", "Co-sibling"),
    ("parent > child > partner", "Co-sibling"),
    ("partner > child > child > child", "Co-great-grandchild"),
    ("parent > partner > parent > parent", "Co-great-grandparent"),
    ("partner > parent > parent > parent", "Co-great-grandparent"),
    ("partner > parent > child > child", "Co-nibling"),
    ("parent > child > partner > child", "Co-nibling"),
    ("parent > partner > parent > child", "Co-pibling"),
    ("partner > parent > parent > child", "Co-pibling"),
    ("partner > parent > parent > child > child", "Co-cousin"),
    ("parent > parent > child > child > partner", "Co-cousin"),
    ("partner > child > child > child > child", "Co-great-great-grandchild"),
    ("partner > parent > child > child > child", "Co-great-nibling"),
    ("parent > child > child > partner > child", "Co-great-nibling"),
    ("parent > partner > parent > parent > child", "Co-great-pibling"),
    ("partner > parent > parent > parent > child", "Co-great-pibling"),
    ("partner > parent > parent > child > child > child", "Co-1st cousin-once-removed"),
    ("partner > parent > parent > parent > child > child", "Co-1st cousin-once-removed"),
    ("parent > parent > parent > child > child > partner", "Co-1st cousin-once-removed"),
    ("parent > parent > child > child > partner > child", "Co-1st cousin-once-removed"),
    ("partner > parent > parent > parent > child > child > child", "Co-2nd cousin"),
    ("parent > parent > parent > child > child > child > partner", "Co-2nd cousin"),
]


def _path(*hops: EdgeType):
    steps = [PathStep("u0", None)]
    steps += [PathStep(f"u{i}", hop) for i, hop in enumerate(hops, start=1)]
    return tuple(steps)


class TestCatalogLabels:
    """Tests for labels of individual path shapes."""

    @pytest.mark.parametrize("shape,label", [
        ("parent", "Parent"),
        ("child > child", "Grandchild"),
        ("parent > parent > parent > parent", "Great-great-grandparent"),
        ("parent > parent > child", "Pibling"),
        ("parent > child > child > child", "Great-nibling"),
        ("parent > parent > child > child", "Cousin"),
        ("parent > parent > parent > child > child", "1st cousin-once-removed"),
        ("parent > parent > child > child > child", "1st cousin-once-removed"),
        ("parent > parent > parent > child > child > child", "2nd cousin"),
        ("parent > parent > parent > parent > child > child > child > child", "3rd cousin"),
        ("spouse", "Spouse"),
        ("partner", "Partner"),
        ("spouse > parent", "Parent-in-law"),
        ("child > spouse", "Child-in-law"),
        ("spouse > parent > child", "Sibling-in-law"),
        ("parent > child > spouse", "Sibling-in-law"),
        ("spouse > parent > parent > child > spouse", "Pibling-in-law"),
        ("spouse > parent > parent > parent > child > child > child", "2nd cousin-in-law"),
        ("parent > spouse", "Step-parent"),
        ("spouse > child", "Step-child"),
        ("spouse > child > child > child > child", "Step-great-great-grandchild"),
        ("parent > spouse > child", "Step-sibling"),
        ("parent > spouse > parent", "Step-grandparent"),
        ("parent > child > spouse > child", "Step-nibling"),
        ("parent > spouse > parent > child > child", "Step-cousin"),
        ("parent > parent > parent > child > spouse > child", "Step-1st cousin-once-removed"),
        ("parent > parent > parent > child > child > spouse > child", "Step-2nd cousin"),
        ("parent > spouse > child > spouse", "Step-sibling-in-law"),
        ("spouse > parent > spouse > child", "Step-sibling-in-law"),
        ("partner > child", "Co-child"),
        ("parent > partner", "Co-parent"),
        ("partner > parent", "Co-parent"),
        ("partner > parent > child", "Co-sibling"),
        ("parent > partner > child", "Co-sibling"),
        ("parent > child > partner", "Co-sibling"),
    ])
    def test_shape_label(self, shape, label):
        rule = lookup_rule(shape)

        assert rule is not None
        assert rule.label == label

    @pytest.mark.parametrize("shape,label", EXPECTED_LABELS)
    def test_label_table_is_covered(self, shape, label):
        rule = lookup_rule(shape)

        assert rule is not None, f"no rule for {shape!r}"
        assert rule.label == label

    def test_sibling_spouse_descendants_are_step_niblings(self):
        assert lookup_rule("parent > child > spouse > child > child").label == "Step-great-nibling"
        assert lookup_rule("parent > child > spouse > child > child > child").label == "Step-great-great-nibling"
        assert lookup_rule("parent > child > child > spouse > child").label == "Step-great-nibling"

    def test_nibling_partner_is_co_nibling(self):
        assert lookup_rule("parent > child > child > partner").label == "Co-nibling"

    def test_plain_sibling_shape_is_not_listed(self):
        assert CATALOG.lookup((EdgeType.PARENT, EdgeType.CHILD)) is None

    def test_families(self):
        assert CATALOG.lookup(parse_shape("spouse > parent")).family is RuleFamily.IN_LAW
        assert CATALOG.lookup(parse_shape("parent > spouse")).family is RuleFamily.STEP
        assert CATALOG.lookup(parse_shape("parent > partner")).family is RuleFamily.CO
        assert CATALOG.lookup(parse_shape("spouse > parent > spouse > child")).family is RuleFamily.STEP_IN_LAW
        assert CATALOG.lookup(parse_shape("spouse")).family is RuleFamily.UNION


class TestGeneratedCatalog:
    """Tests for the catalog as a whole."""

    def test_no_shape_has_two_labels(self):
        labels = defaultdict(set)
        for rule in generate_rules():
            labels[rule.shape].add(rule.label)

        assert all(len(found) == 1 for found in labels.values())
        assert len(CATALOG) == len(labels)

    def test_variant_length_is_capped(self):
        for rule in CATALOG:
            if rule.family is not RuleFamily.BLOOD:
                assert rule.hops <= MAX_VARIANT_HOPS

    def test_every_gendered_rule_has_table_entry(self):
        table = default_table()
        for rule in CATALOG:
            if rule.gendered_at_step is not None:
                assert rule.gendered_at_step == rule.hops
                assert rule.label in table.forms

    def test_cousins_have_no_gendered_step(self):
        assert CATALOG.lookup(parse_shape("parent > parent > child > child")).gendered_at_step is None

    def test_all_labels_includes_sibling_labels(self):
        labels = all_labels()

        assert "Sibling" in labels
        assert "Half-sibling" in labels
        assert len(labels) == len(set(labels))

    def test_by_family(self):
        unions = CATALOG.by_family(RuleFamily.UNION)

        assert [rule.label for rule in unions] == ["Spouse", "Partner"]


class TestRuleCatalog:
    """Tests for RuleCatalog."""

    def test_identical_rule_is_collapsed(self):
        rule = KinshipRule(shape=(EdgeType.PARENT,), label="Parent")
        catalog = RuleCatalog([rule])

        assert catalog.add(KinshipRule(shape=(EdgeType.PARENT,), label="Parent")) is False
        assert len(catalog) == 1

    def test_conflicting_label_raises(self):
        catalog = RuleCatalog([KinshipRule(shape=(EdgeType.PARENT,), label="Parent")])

        with pytest.raises(RuleCatalogError) as exc_info:
            catalog.add(KinshipRule(shape=(EdgeType.PARENT,), label="Ancestor"))

        assert exc_info.value.shape == "parent"
        assert exc_info.value.labels == ("Parent", "Ancestor")

    def test_contains_and_order(self):
        catalog = RuleCatalog([
            KinshipRule(shape=(EdgeType.CHILD,), label="Child"),
            KinshipRule(shape=(EdgeType.PARENT,), label="Parent"),
        ])

        assert (EdgeType.CHILD,) in catalog
        assert (EdgeType.SPOUSE,) not in catalog
        assert catalog.labels() == ["Child", "Parent"]


class TestShapes:
    """Tests for shape parsing and display."""

    def test_parse_and_format(self):
        shape = parse_shape("parent > spouse>child")

        assert shape == (EdgeType.PARENT, EdgeType.SPOUSE, EdgeType.CHILD)
        assert shape_key(shape) == "parent > spouse > child"

    def test_unknown_hop_raises(self):
        with pytest.raises(ValueError):
            parse_shape("parent > cousin")


class TestTranslatePath:
    """Tests for translate_path."""

    def test_matched_path(self):
        label, rule = translate_path(_path(EdgeType.PARENT, EdgeType.PARENT))

        assert label == "Grandparent"
        assert rule.gendered_at_step == 2

    def test_unmatched_path_gets_fallback(self):
        label, rule = translate_path(_path(EdgeType.CHILD, EdgeType.PARENT))

        assert label == FALLBACK_LABEL == "Relative"
        assert rule is None

    def test_overlong_path_gets_fallback(self):
        label, _ = translate_path(_path(*[EdgeType.PARENT] * 5))

        assert label == "Relative"
