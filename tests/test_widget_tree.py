"""
Tests for widget tree hierarchy queries.
"""

import pytest

from widgetlens.models import Widget, WidgetType

SOURCE = "Column(children: [Row(children: [Text('a'), Text('b')]), Text('c')])"


class TestWidgetTreeBuilder:
    """Test hierarchy building and lookups."""

    @pytest.fixture
    def widgets(self, extract):
        return extract(SOURCE).widgets

    def test_build_trees(self, tree_builder, widgets):
        """Test depth, node count, containers and leaves."""
        analysis = tree_builder.build_trees(widgets)

        assert analysis.total_nodes == 5
        assert analysis.max_depth == 2
        assert [w.id for w in analysis.container_widgets] == ["widget_1", "widget_2"]
        assert [w.id for w in analysis.leaf_widgets] == ["widget_3", "widget_4", "widget_5"]

    def test_hierarchy_entries(self, tree_builder, widgets):
        """Test parent ids, type paths and siblings."""
        hierarchy = tree_builder.build_trees(widgets).hierarchies["widget_3"]

        assert hierarchy.parent_id == "widget_2"
        assert hierarchy.depth == 2
        assert hierarchy.path == ["Column", "Row", "Text"]
        assert hierarchy.sibling_ids == ["widget_4"]
        assert hierarchy.index == 0

    def test_calculate_depth(self, tree_builder, widgets):
        """Test depth counts edges to the deepest leaf."""
        assert tree_builder.calculate_depth(widgets[0]) == 2
        assert tree_builder.calculate_depth(widgets[0].children[1]) == 0

    def test_paths_and_ancestry(self, tree_builder, widgets):
        """Test id paths, ancestors and index paths."""
        assert tree_builder.get_widget_path(widgets, "widget_4") == ["widget_1", "widget_2", "widget_4"]
        assert tree_builder.get_widget_path(widgets, "missing") is None
        assert [w.id for w in tree_builder.get_ancestors(widgets, "widget_4")] == ["widget_1", "widget_2"]
        assert tree_builder.is_ancestor(widgets, "widget_1", "widget_4")
        assert not tree_builder.is_ancestor(widgets, "widget_5", "widget_4")
        assert tree_builder.get_widget_at_path(widgets, [0, 0, 1]).id == "widget_4"
        assert tree_builder.get_widget_at_path(widgets, [0, 3]) is None

    def test_siblings_and_descendants(self, tree_builder, widgets):
        """Test sibling and descendant lookups."""
        assert [w.id for w in tree_builder.get_siblings(widgets, "widget_2")] == ["widget_5"]
        assert [w.id for w in tree_builder.get_descendants(widgets[0])] == [
            "widget_2", "widget_3", "widget_4", "widget_5",
        ]

    def test_find_widgets(self, tree_builder, widgets):
        """Test lookups by type and property."""
        assert len(tree_builder.find_widgets_by_type(widgets, WidgetType.TEXT)) == 3
        found = tree_builder.find_widgets_by_property(widgets, "text", "b")
        assert [w.id for w in found] == ["widget_4"]
        assert len(tree_builder.find_widgets_by_property(widgets, "text")) == 3

    def test_validate_tree(self, tree_builder, widgets):
        """Test a freshly extracted tree is valid."""
        validation = tree_builder.validate_tree(widgets)
        assert validation.is_valid
        assert validation.errors == []

    def test_validate_detects_shared_widget(self, tree_builder, widgets):
        """Test a widget reachable from two parents is reported."""
        row = widgets[0].children[0]
        widgets[0].children.append(row.children[0])

        validation = tree_builder.validate_tree(widgets)
        assert not validation.is_valid
        assert "Orphaned widget found: widget_3 (Text)" in validation.errors

    def test_validate_detects_cycle(self, tree_builder, widgets):
        """Test cycles are reported."""
        widgets[0].children[0].children.append(widgets[0])

        validation = tree_builder.validate_tree(widgets)
        assert "Circular reference detected in widget tree" in validation.errors

    def test_validate_detects_duplicate_ids(self, tree_builder):
        """Test duplicate ids are reported."""
        root = Widget(id="w", type=WidgetType.COLUMN,
                      children=[Widget(id="w", type=WidgetType.TEXT)])

        validation = tree_builder.validate_tree([root])
        assert validation.errors == ["Duplicate widget ID found: w"]

    def test_clone_tree(self, tree_builder, widgets):
        """Test clones are independent copies."""
        clone = tree_builder.clone_tree(widgets[0])
        clone.children.clear()

        assert len(widgets[0].children) == 2
        assert clone.id == widgets[0].id
