"""
Tests for component pattern detection.
"""

import pytest

from widgetlens.components import BKTree, ComponentDetector, structure_hash
from widgetlens.exceptions import ConfigurationError
from widgetlens.models import Widget, WidgetType

BUTTONS = """
Column(children: [
  ElevatedButton(color: Colors.blue, child: Text('A')),
  ElevatedButton(color: Colors.blue, child: Text('B')),
  ElevatedButton(color: Colors.red, child: Text('C')),
])
"""

CARDS = "Card(child: Text('Hi'))\nCard(child: Text('Hi'))\nCard(child: Text('Hi'))"


class TestStructureHash:
    """Test structural grouping keys."""

    def test_styling_does_not_change_hash(self, extract):
        """Test stylistic variants share a structure hash."""
        widgets = extract(BUTTONS).widgets[0].children
        assert len({structure_hash(w) for w in widgets}) == 1

    def test_child_shape_changes_hash(self, extract):
        """Test different child structures hash differently."""
        first, second = extract("Card(child: Text('a'))\nCard(child: Column(children: [Text('a')]))").widgets
        assert structure_hash(first) != structure_hash(second)


class TestComponentDetector:
    """Test detect_components."""

    def test_color_variants(self, extract, detector):
        """Test blue, blue, red buttons form one pattern with two variants."""
        result = detector.detect_components(extract(BUTTONS).widgets)

        assert result.unique_patterns == 1
        pattern = result.patterns[0]
        assert pattern.type == WidgetType.BUTTON
        assert pattern.name == "ButtonColor"
        assert [w.id for w in pattern.instances] == ["widget_2", "widget_4", "widget_6"]
        assert [(v.name, v.usage_count) for v in pattern.variants] == [("Default", 2), ("RedColor", 1)]
        assert pattern.confidence == pytest.approx(0.905)

        red = pattern.variants[1]
        assert [(d.path, d.base_value, d.variant_value) for d in red.property_differences] == [
            ("color", "Colors.blue", "Colors.red"),
        ]
        assert [(d.property, d.category) for d in red.styling_differences] == [
            ("styling.colors.color", "color"),
        ]

        assert result.total_instances == 3
        assert result.component_coverage == pytest.approx(300 / 7)

    def test_identical_widgets_single_variant(self, extract, detector):
        """Test identical widgets produce one Default variant."""
        result = detector.detect_components(extract(CARDS).widgets)

        pattern = result.patterns[0]
        assert pattern.name == "Card"
        assert len(pattern.variants) == 1
        assert pattern.variants[0].name == "Default"
        assert pattern.variants[0].usage_count == 3
        assert pattern.confidence == pytest.approx(0.85)
        assert result.component_coverage == pytest.approx(50.0)

    def test_usage_counts_sum_to_instances(self, extract):
        """Test truncated variants drop their instances too."""
        detector = ComponentDetector(max_variants=1)
        result = detector.detect_components(extract(BUTTONS).widgets)

        pattern = result.patterns[0]
        assert [v.name for v in pattern.variants] == ["Default"]
        assert sum(v.usage_count for v in pattern.variants) == len(pattern.instances) == 2
        assert result.total_instances == 2
        assert pattern.confidence == pytest.approx(0.84)

    def test_truncation_respects_min_instances(self, extract):
        """Test groups left below the instance floor after truncation are dropped."""
        widgets = extract(
            "ElevatedButton(color: Colors.blue, child: Text('A'))\n"
            "ElevatedButton(color: Colors.red, child: Text('B'))"
        ).widgets

        result = ComponentDetector(max_variants=1).detect_components(widgets)
        assert result.patterns == []
        assert result.total_instances == 0

        result = ComponentDetector(max_variants=1, min_instances=3).detect_components(
            extract(BUTTONS).widgets)
        assert result.patterns == []

    def test_simple_leaves_ignored(self, extract, detector):
        """Test bare Text widgets never form patterns."""
        result = detector.detect_components(extract("Text('a')\nText('a')\nText('a')").widgets)
        assert result.patterns == []
        assert result.component_coverage == 0.0

    def test_min_instances(self, extract):
        """Test groups below the instance floor are dropped."""
        result = ComponentDetector(min_instances=4).detect_components(extract(BUTTONS).widgets)
        assert result.patterns == []

    def test_min_confidence(self, extract):
        """Test groups below the confidence floor are dropped."""
        result = ComponentDetector(min_confidence=0.95).detect_components(extract(BUTTONS).widgets)
        assert result.patterns == []

    def test_ignored_properties(self, extract, detector):
        """Test key and id differences do not create variants."""
        widgets = extract(
            "Card(key: 'a', child: Text('x'))\nCard(key: 'b', child: Text('x'))\nCard(id: 3, child: Text('x'))"
        ).widgets

        pattern = detector.detect_components(widgets).patterns[0]
        assert len(pattern.variants) == 1

    def test_structural_only(self, extract):
        """Test structural_only ignores property and styling differences."""
        detector = ComponentDetector(structural_only=True)
        pattern = detector.detect_components(extract(BUTTONS).widgets).patterns[0]

        assert len(pattern.variants) == 1
        assert pattern.variants[0].usage_count == 3

    def test_custom_widgets(self, extract):
        """Test custom widgets are named after their constructor and can be excluded."""
        widgets = extract("MyTile(title: 'x', child: Text('a'))\nMyTile(title: 'x', child: Text('b'))").widgets

        result = ComponentDetector().detect_components(widgets)
        assert [p.name for p in result.patterns] == ["MyTile"]

        excluded = ComponentDetector(include_custom_widgets=False).detect_components(widgets)
        assert excluded.patterns == []

    def test_reusable_widgets(self, extract, detector):
        """Test reusable widget definitions mirror the patterns."""
        result = detector.detect_components(extract(BUTTONS).widgets)

        reusable = result.reusable_widgets[0]
        assert reusable.name == "ButtonColor"
        assert reusable.usage_count == 3
        assert [v.name for v in reusable.variants] == ["Default", "RedColor"]
        data = reusable.to_dict()
        assert data["id"] == "widget_2"
        assert data["usageCount"] == 3

    def test_result_to_dict(self, extract, detector):
        """Test serialized detection results."""
        data = detector.detect_components(extract(CARDS).widgets).to_dict()

        assert data["uniquePatterns"] == 1
        assert data["totalInstances"] == 3
        assert data["componentCoverage"] == 50.0
        assert data["patterns"][0]["instances"] == ["widget_1", "widget_3", "widget_5"]


class TestDetectorScoring:
    """Test differences and scores."""

    def test_child_count_difference(self, detector):
        """Test child count differences are reported."""
        base = Widget(id="a", type=WidgetType.ROW, children=[Widget(id="b", type=WidgetType.TEXT)])
        other = Widget(id="c", type=WidgetType.ROW)

        differences = detector.find_differences(base, other)
        assert [(d.path, d.base_value, d.variant_value, d.type) for d in differences] == [
            ("children.length", 1, 0, "children"),
        ]

    def test_complexity_score(self, detector):
        """Test complexity contributions are capped."""
        assert detector.complexity_score(Widget(id="a", type=WidgetType.TEXT)) == pytest.approx(0.2)
        busy = Widget(
            id="b", type=WidgetType.CONTAINER,
            properties={str(i): i for i in range(10)},
            children=[Widget(id=str(i), type=WidgetType.TEXT) for i in range(5)],
        )
        assert detector.complexity_score(busy) == pytest.approx(0.8)

    def test_variant_score(self, extract, detector):
        """Test a single variant scores the maximum."""
        pattern = detector.detect_components(extract(CARDS).widgets).patterns[0]
        assert detector.variant_score(pattern.variants) == 1.0
        assert detector.variant_score([]) == 0.0


class TestDetectorConfig:
    """Test configuration updates."""

    def test_update_config(self, detector):
        """Test settings can be replaced."""
        detector.update_config(min_instances=3)
        assert detector.get_config().min_instances == 3

    def test_get_config_returns_copy(self, detector):
        """Test get_config does not expose internal state."""
        config = detector.get_config()
        config.min_instances = 9
        assert detector.get_config().min_instances == 2

    def test_unknown_setting(self, detector):
        """Test unknown settings raise."""
        with pytest.raises(ConfigurationError):
            detector.update_config(colour=True)

    def test_invalid_value(self, detector):
        """Test invalid values raise and leave the config untouched."""
        with pytest.raises(ConfigurationError):
            detector.update_config(min_confidence=2.0)
        assert detector.get_config().min_confidence == 0.7


class TestRelatedPatterns:
    """Test SimHash based near-duplicate search."""

    SOURCE = "\n".join(
        ["Card(child: Text('Hi'))"] * 3
        + ["Card(child: Column(children: [Text('a'), Text('b')]))"] * 3
    )

    def test_pairs_within_distance(self, extract, detector):
        """Test every pair is found with a distance bound covering all bits."""
        patterns = detector.detect_components(extract(self.SOURCE).widgets).patterns
        assert len(patterns) == 3

        related = detector.find_related_patterns(patterns, max_distance=64)
        assert len(related) == 3
        ids = {p.id for p in patterns}
        for pair in related:
            assert pair.first in ids and pair.second in ids
            assert pair.first != pair.second
            assert 0 <= pair.distance <= 64

    def test_default_distance(self, extract, detector):
        """Test the configured bound limits the results."""
        patterns = detector.detect_components(extract(self.SOURCE).widgets).patterns
        related = detector.find_related_patterns(patterns)
        assert all(pair.distance <= detector.get_config().related_max_distance for pair in related)


class TestBKTree:
    """Test the BK-tree index."""

    def test_search(self):
        """Test search returns items within the distance bound."""
        tree = BKTree()
        tree.insert(0b0000, "zero")
        tree.insert(0b0001, "one")
        tree.insert(0b1111, "four")

        found = dict(tree.search(0b0000, 1))
        assert found == {"zero": 0, "one": 1}
        assert tree.search(0b0000, 4)
        assert len(tree.search(0b0000, 4)) == 3

    def test_empty_tree(self):
        """Test searching an empty tree."""
        assert BKTree().search(0, 64) == []

    def test_colliding_distances_descend(self):
        """Test items at the same distance from the root are still found."""
        tree = BKTree()
        tree.insert(0b0000, "root")
        tree.insert(0b0001, "a")
        tree.insert(0b0010, "b")

        assert dict(tree.search(0b0010, 0)) == {"b": 0}
        assert sorted(item for item, _ in tree.search(0b0000, 1)) == ["a", "b", "root"]
