"""
Tests for layout classification.
"""

from widgetlens.layout import LayoutType
from widgetlens.models import Widget, WidgetType


def custom(name, children=0):
    return Widget(id=name, type=WidgetType.CUSTOM, properties={"customType": name},
                  children=[Widget(id=f"{name}_{i}", type=WidgetType.TEXT) for i in range(children)])


class TestLayoutClassification:
    """Test the layout type decision table."""

    def test_linear_row(self, extract, layout_analyzer):
        """Test a Row without flex children is linear."""
        row = extract("Row(children: [Text('a'), Text('b')])").widgets[0]

        analysis = layout_analyzer.analyze_widget(row)
        assert analysis.layout_type == LayoutType.LINEAR
        assert analysis.direction == "horizontal"
        assert analysis.is_auto_layout_candidate
        assert analysis.flex_properties is None

    def test_flex_row(self, extract, layout_analyzer):
        """Test flex children, total flex and fixed siblings."""
        row = extract(
            "Row(children: [Expanded(flex: 2, child: Text('a')), Container(width: 50)])"
        ).widgets[0]

        analysis = layout_analyzer.analyze_widget(row)
        assert analysis.layout_type == LayoutType.FLEX
        flex = analysis.flex_properties
        assert flex.has_flex_children
        assert flex.total_flex == 2
        assert flex.has_fixed_children
        assert flex.flex_children[0].fit == "loose"
        assert layout_analyzer.is_complex_layout(analysis)

    def test_flex_defaults(self, extract, layout_analyzer):
        """Test flex defaults to 1 and tight fit is detected."""
        column = extract(
            "Column(children: [Flexible(fit: FlexFit.tight, child: Text('a')), Expanded(child: Text('b'))])"
        ).widgets[0]

        flex = layout_analyzer.analyze_widget(column).flex_properties
        assert [c.flex for c in flex.flex_children] == [1, 1]
        assert [c.fit for c in flex.flex_children] == ["tight", "loose"]
        assert flex.total_flex == 2
        assert not flex.has_fixed_children

    def test_stack(self, extract, layout_analyzer):
        """Test stacks collect positioned children, fit and clip."""
        stack = extract(
            "Stack(fit: StackFit.expand, clipBehavior: Clip.hardEdge, "
            "children: [Positioned(top: 10, left: 20, child: Text('x')), Text('y')])"
        ).widgets[0]

        analysis = layout_analyzer.analyze_widget(stack)
        assert analysis.layout_type == LayoutType.STACK
        assert not analysis.is_auto_layout_candidate
        stack_properties = analysis.stack_properties
        assert stack_properties.stack_fit == "expand"
        assert stack_properties.clip_behavior == "hardEdge"
        assert len(stack_properties.positioned_children) == 1
        positioned = stack_properties.positioned_children[0]
        assert positioned.top == 10
        assert positioned.left == 20

    def test_stack_defaults(self, extract, layout_analyzer):
        """Test stack fit and clip defaults."""
        stack = extract("Stack(children: [])").widgets[0]

        properties = layout_analyzer.analyze_widget(stack).stack_properties
        assert properties.stack_fit == "loose"
        assert properties.clip_behavior == "none"
        assert not properties.has_positioned_children

    def test_container_child_counts(self, layout_analyzer):
        """Test generic containers by child count."""
        empty = Widget(id="a", type=WidgetType.CONTAINER)
        single = Widget(id="b", type=WidgetType.CONTAINER, children=[Widget(id="c", type=WidgetType.TEXT)])
        many = Widget(id="d", type=WidgetType.CONTAINER,
                      children=[Widget(id="e", type=WidgetType.TEXT), Widget(id="f", type=WidgetType.TEXT)])

        assert layout_analyzer.detect_layout_type(empty) == LayoutType.NONE
        assert layout_analyzer.detect_layout_type(single) == LayoutType.SINGLE
        assert layout_analyzer.detect_layout_type(many) == LayoutType.STACK

    def test_custom_types(self, layout_analyzer):
        """Test custom constructor names are matched by vocabulary."""
        assert layout_analyzer.detect_layout_type(custom("Wrap", 2)) == LayoutType.WRAP
        assert layout_analyzer.detect_layout_type(custom("GridView")) == LayoutType.GRID
        assert layout_analyzer.detect_layout_type(custom("ListView")) == LayoutType.SCROLL
        assert layout_analyzer.detect_layout_type(custom("SingleChildScrollView", 1)) == LayoutType.SCROLL
        assert layout_analyzer.detect_layout_type(custom("Flexible", 1)) == LayoutType.FLEX
        assert layout_analyzer.detect_layout_type(custom("Center", 1)) == LayoutType.SINGLE
        assert layout_analyzer.detect_layout_type(custom("MyBox", 2)) == LayoutType.LINEAR
        assert layout_analyzer.detect_layout_type(custom("MyBox")) == LayoutType.NONE

    def test_auto_layout_candidates(self, layout_analyzer):
        """Test which layout types are Auto Layout candidates."""
        assert layout_analyzer.analyze_widget(custom("Wrap", 0)).is_auto_layout_candidate
        assert layout_analyzer.analyze_widget(custom("Center", 1)).is_auto_layout_candidate
        assert not layout_analyzer.analyze_widget(custom("Center", 0)).is_auto_layout_candidate
        assert not layout_analyzer.analyze_widget(custom("GridView", 2)).is_auto_layout_candidate
        assert not layout_analyzer.analyze_widget(custom("ListView", 2)).is_auto_layout_candidate


class TestLayoutDetails:
    """Test alignment, padding, constraints and summaries."""

    def test_alignment_from_hint(self, extract, layout_analyzer):
        """Test alignment comes from the layout hint."""
        column = extract(
            "Column(mainAxisAlignment: MainAxisAlignment.center, "
            "crossAxisAlignment: CrossAxisAlignment.stretch, children: [])"
        ).widgets[0]

        alignment = layout_analyzer.analyze_widget(column).alignment
        assert alignment.main_axis == "center"
        assert alignment.cross_axis == "stretch"

    def test_alignment_from_properties(self, layout_analyzer):
        """Test unrecognized alignment values default to start."""
        widget = Widget(id="w", type=WidgetType.CUSTOM,
                        properties={"customType": "Flex", "mainAxisAlignment": "MainAxisAlignment.sideways"})

        alignment = layout_analyzer.analyze_widget(widget).alignment
        assert alignment.main_axis == "start"
        assert alignment.cross_axis is None

    def test_padding_and_constraints(self, extract, layout_analyzer):
        """Test padding and size constraints."""
        container = extract(
            "Container(width: 100, height: 40, padding: EdgeInsets.only(left: 8), child: Text('a'))"
        ).widgets[0]

        analysis = layout_analyzer.analyze_widget(container)
        assert analysis.padding.to_dict() == {"top": 0, "right": 0, "bottom": 0, "left": 8}
        assert analysis.constraints.min_width == 100
        assert analysis.constraints.max_width == 100
        assert analysis.constraints.min_height == 40
        assert analysis.constraints.aspect_ratio is None

    def test_analyze_layouts_summary(self, extract, layout_analyzer):
        """Test the summary covers every widget in pre-order."""
        widgets = extract(
            "Column(children: [Row(children: [Expanded(child: Text('a')), Text('b')]), Stack(children: [])])"
        ).widgets

        summary = layout_analyzer.analyze_layouts(widgets)
        assert summary.total_layouts == 6
        assert [a.widget.id for a in summary.analyses][:3] == ["widget_1", "widget_2", "widget_3"]
        assert [a.widget.id for a in summary.layout_types[LayoutType.FLEX]] == ["widget_2"]
        assert [a.widget.id for a in summary.complex_layouts] == ["widget_2", "widget_6"]
        assert "widget_1" in [a.widget.id for a in summary.auto_layout_candidates]

    def test_recommendations(self, extract, layout_analyzer):
        """Test Auto Layout recommendations per layout type."""
        row = extract(
            "Row(mainAxisAlignment: MainAxisAlignment.center, spacing: 12, children: [Text('a')])"
        ).widgets[0]
        assert layout_analyzer.get_auto_layout_recommendations(layout_analyzer.analyze_widget(row)) == [
            "Use horizontal Auto Layout",
            'Set alignment: {"mainAxis": "center"}',
            "Set spacing: 12px",
        ]

        flex_row = extract("Row(children: [Expanded(flex: 2, child: Text('a'))])").widgets[0]
        assert layout_analyzer.get_auto_layout_recommendations(layout_analyzer.analyze_widget(flex_row)) == [
            "Use horizontal Auto Layout with flex properties",
            "Configure 1 flex children",
        ]

        stack = extract("Stack(children: [])").widgets[0]
        assert layout_analyzer.get_auto_layout_recommendations(layout_analyzer.analyze_widget(stack)) == [
            "Widget is not suitable for Auto Layout conversion",
        ]
