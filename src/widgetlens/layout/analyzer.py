"""
Layout analysis: classifies how each widget arranges its children.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any, Optional

from ..models import Widget, WidgetType, Alignment, EdgeInsets, POSITION_FIELDS
from ..tables import map_main_axis, map_cross_axis

logger = logging.getLogger(__name__)


class LayoutType(Enum):
    """Layout strategy of a widget."""
    LINEAR = "linear"
    FLEX = "flex"
    STACK = "stack"
    WRAP = "wrap"
    GRID = "grid"
    SCROLL = "scroll"
    SINGLE = "single"
    NONE = "none"


FLEX_WRAPPERS = ("Expanded", "Flexible")

STACK_FITS = {"StackFit.expand": "expand", "StackFit.passthrough": "passthrough"}

CLIP_BEHAVIORS = {
    "Clip.hardEdge": "hardEdge",
    "Clip.antiAlias": "antiAlias",
    "Clip.antiAliasWithSaveLayer": "antiAliasWithSaveLayer",
}


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class LayoutConstraints:
    min_width: Optional[float] = None
    max_width: Optional[float] = None
    min_height: Optional[float] = None
    max_height: Optional[float] = None
    aspect_ratio: Optional[float] = None

    def is_empty(self) -> bool:
        return all(v is None for v in (self.min_width, self.max_width, self.min_height,
                                       self.max_height, self.aspect_ratio))

    def to_dict(self) -> Dict[str, float]:
        fields = {
            "minWidth": self.min_width,
            "maxWidth": self.max_width,
            "minHeight": self.min_height,
            "maxHeight": self.max_height,
            "aspectRatio": self.aspect_ratio,
        }
        return {k: v for k, v in fields.items() if v is not None}


@dataclass
class FlexChild:
    widget: Widget
    flex: float = 1
    fit: str = "loose"

    def to_dict(self) -> Dict[str, Any]:
        return {"widgetId": self.widget.id, "flex": self.flex, "fit": self.fit}


@dataclass
class FlexProperties:
    flex_children: List[FlexChild] = field(default_factory=list)
    total_flex: float = 0
    has_fixed_children: bool = False

    @property
    def has_flex_children(self) -> bool:
        return len(self.flex_children) > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hasFlexChildren": self.has_flex_children,
            "flexChildren": [c.to_dict() for c in self.flex_children],
            "totalFlex": self.total_flex,
            "hasFixedChildren": self.has_fixed_children,
        }


@dataclass
class PositionedChild:
    widget: Widget
    top: Optional[float] = None
    right: Optional[float] = None
    bottom: Optional[float] = None
    left: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"widgetId": self.widget.id}
        data.update({name: getattr(self, name) for name in POSITION_FIELDS
                     if getattr(self, name) is not None})
        return data


@dataclass
class StackProperties:
    positioned_children: List[PositionedChild] = field(default_factory=list)
    stack_fit: str = "loose"
    clip_behavior: str = "none"

    @property
    def has_positioned_children(self) -> bool:
        return len(self.positioned_children) > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hasPositionedChildren": self.has_positioned_children,
            "positionedChildren": [c.to_dict() for c in self.positioned_children],
            "stackFit": self.stack_fit,
            "clipBehavior": self.clip_behavior,
        }


@dataclass
class LayoutAnalysis:
    """Derived layout view of one widget."""

    widget: Widget
    layout_type: LayoutType
    is_auto_layout_candidate: bool = False
    direction: Optional[str] = None
    alignment: Optional[Alignment] = None
    spacing: Optional[float] = None
    padding: Optional[EdgeInsets] = None
    constraints: Optional[LayoutConstraints] = None
    flex_properties: Optional[FlexProperties] = None
    stack_properties: Optional[StackProperties] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "widgetId": self.widget.id,
            "layoutType": self.layout_type.value,
            "isAutoLayoutCandidate": self.is_auto_layout_candidate,
        }
        if self.direction is not None:
            data["direction"] = self.direction
        if self.alignment is not None:
            data["alignment"] = self.alignment.to_dict()
        if self.spacing is not None:
            data["spacing"] = self.spacing
        if self.padding is not None:
            data["padding"] = self.padding.to_dict()
        if self.constraints is not None:
            data["constraints"] = self.constraints.to_dict()
        if self.flex_properties is not None:
            data["flexProperties"] = self.flex_properties.to_dict()
        if self.stack_properties is not None:
            data["stackProperties"] = self.stack_properties.to_dict()
        return data


@dataclass
class LayoutAnalysisSummary:
    analyses: List[LayoutAnalysis] = field(default_factory=list)
    auto_layout_candidates: List[LayoutAnalysis] = field(default_factory=list)
    layout_types: Dict[LayoutType, List[LayoutAnalysis]] = field(default_factory=dict)
    complex_layouts: List[LayoutAnalysis] = field(default_factory=list)

    @property
    def total_layouts(self) -> int:
        return len(self.analyses)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "analyses": [a.to_dict() for a in self.analyses],
            "autoLayoutCandidates": [a.widget.id for a in self.auto_layout_candidates],
            "layoutTypes": {t.value: [a.widget.id for a in items] for t, items in self.layout_types.items()},
            "complexLayouts": [a.widget.id for a in self.complex_layouts],
            "totalLayouts": self.total_layouts,
        }


class LayoutAnalyzer:
    """Classifies widget layouts and extracts alignment, flex and stack data."""

    def analyze_layouts(self, widgets: List[Widget]) -> LayoutAnalysisSummary:
        """
        Analyze a widget forest, descending into children.

        Args:
            widgets: Root widgets

        Returns:
            LayoutAnalysisSummary in pre-order
        """
        summary = LayoutAnalysisSummary()
        for root in widgets:
            for widget in root.iter_tree():
                analysis = self.analyze_widget(widget)
                summary.analyses.append(analysis)
                if analysis.is_auto_layout_candidate:
                    summary.auto_layout_candidates.append(analysis)
                summary.layout_types.setdefault(analysis.layout_type, []).append(analysis)
                if self.is_complex_layout(analysis):
                    summary.complex_layouts.append(analysis)

        logger.debug(f"Analyzed {summary.total_layouts} layouts, "
                     f"{len(summary.auto_layout_candidates)} auto layout candidates")
        return summary

    def analyze_widget(self, widget: Widget) -> LayoutAnalysis:
        layout_type = self.detect_layout_type(widget)
        constraints = self._extract_constraints(widget)
        return LayoutAnalysis(
            widget=widget,
            layout_type=layout_type,
            is_auto_layout_candidate=self._is_auto_layout_candidate(widget, layout_type),
            direction=self._extract_direction(widget),
            alignment=self._extract_alignment(widget),
            spacing=self._extract_spacing(widget),
            padding=self._extract_padding(widget),
            constraints=None if constraints.is_empty() else constraints,
            flex_properties=self._analyze_flex(widget),
            stack_properties=self._analyze_stack(widget),
        )

    def detect_layout_type(self, widget: Widget) -> LayoutType:
        if widget.type in (WidgetType.ROW, WidgetType.COLUMN):
            return LayoutType.FLEX if self._has_flex_children(widget) else LayoutType.LINEAR
        if widget.type == WidgetType.STACK:
            return LayoutType.STACK
        if widget.type == WidgetType.CONTAINER:
            # Multiple children under a plain container can only overlap
            return self._by_child_count(widget, many=LayoutType.STACK)
        if widget.type == WidgetType.CUSTOM:
            return self._detect_custom_layout_type(widget)
        return self._by_child_count(widget, many=LayoutType.LINEAR)

    def _detect_custom_layout_type(self, widget: Widget) -> LayoutType:
        custom_type = widget.custom_type
        if not custom_type:
            return LayoutType.NONE

        if "Wrap" in custom_type:
            return LayoutType.WRAP
        if "Grid" in custom_type:
            return LayoutType.GRID
        if custom_type.startswith("List") or custom_type.endswith("ScrollView"):
            return LayoutType.SCROLL
        if custom_type.startswith("Flex"):
            return LayoutType.FLEX
        return self._by_child_count(widget, many=LayoutType.LINEAR)

    @staticmethod
    def _by_child_count(widget: Widget, many: LayoutType) -> LayoutType:
        if not widget.children:
            return LayoutType.NONE
        if len(widget.children) == 1:
            return LayoutType.SINGLE
        return many

    def _extract_direction(self, widget: Widget) -> Optional[str]:
        if widget.layout is not None and widget.layout.direction:
            return widget.layout.direction
        if widget.type == WidgetType.ROW:
            return "horizontal"
        if widget.type == WidgetType.COLUMN:
            return "vertical"
        return None

    def _extract_alignment(self, widget: Widget) -> Optional[Alignment]:
        if widget.layout is not None and widget.layout.alignment is not None:
            return widget.layout.alignment

        alignment = Alignment()
        if widget.properties.get("mainAxisAlignment"):
            alignment.main_axis = map_main_axis(widget.properties["mainAxisAlignment"])
        if widget.properties.get("crossAxisAlignment"):
            alignment.cross_axis = map_cross_axis(widget.properties["crossAxisAlignment"])
        if alignment.main_axis is None and alignment.cross_axis is None:
            return None
        return alignment

    def _extract_spacing(self, widget: Widget) -> Optional[float]:
        if widget.layout is not None and widget.layout.spacing is not None:
            return widget.layout.spacing
        spacing = widget.properties.get("spacing")
        return spacing if _is_number(spacing) else None

    def _extract_padding(self, widget: Widget) -> Optional[EdgeInsets]:
        if widget.layout is not None and widget.layout.padding is not None:
            return widget.layout.padding

        padding = widget.properties.get("padding")
        if _is_number(padding):
            return EdgeInsets.uniform(padding)
        if isinstance(padding, dict) and _is_number(padding.get("top")):
            return EdgeInsets(
                top=padding.get("top") or 0,
                right=padding.get("right") or 0,
                bottom=padding.get("bottom") or 0,
                left=padding.get("left") or 0,
            )
        return None

    def _extract_constraints(self, widget: Widget) -> LayoutConstraints:
        constraints = LayoutConstraints()
        width = widget.properties.get("width")
        if _is_number(width):
            constraints.min_width = constraints.max_width = width
        height = widget.properties.get("height")
        if _is_number(height):
            constraints.min_height = constraints.max_height = height
        aspect_ratio = widget.properties.get("aspectRatio")
        if _is_number(aspect_ratio):
            constraints.aspect_ratio = aspect_ratio
        return constraints

    @staticmethod
    def is_flex_child(widget: Widget) -> bool:
        if widget.type == WidgetType.CUSTOM and widget.custom_type in FLEX_WRAPPERS:
            return True
        return "flex" in widget.properties

    def _has_flex_children(self, widget: Widget) -> bool:
        return any(self.is_flex_child(child) for child in widget.children)

    def _analyze_flex(self, widget: Widget) -> Optional[FlexProperties]:
        if widget.type not in (WidgetType.ROW, WidgetType.COLUMN):
            return None

        properties = FlexProperties()
        for child in widget.children:
            if self.is_flex_child(child):
                flex = child.properties.get("flex")
                flex = flex if _is_number(flex) else 1
                fit = "tight" if child.properties.get("fit") == "FlexFit.tight" else "loose"
                properties.flex_children.append(FlexChild(widget=child, flex=flex, fit=fit))
                properties.total_flex += flex
            else:
                properties.has_fixed_children = True

        return properties if properties.has_flex_children else None

    @staticmethod
    def is_positioned_child(widget: Widget) -> bool:
        if widget.type == WidgetType.CUSTOM and widget.custom_type == "Positioned":
            return True
        if widget.position is not None:
            return True
        return any(side in widget.properties for side in ("top", "right", "bottom", "left"))

    def _analyze_stack(self, widget: Widget) -> Optional[StackProperties]:
        if widget.type != WidgetType.STACK:
            return None

        properties = StackProperties(
            stack_fit=STACK_FITS.get(widget.properties.get("fit"), "loose"),
            clip_behavior=CLIP_BEHAVIORS.get(widget.properties.get("clipBehavior"), "none"),
        )
        for child in widget.children:
            if self.is_positioned_child(child):
                positioned = self._positioned_values(child)
                if positioned is not None:
                    properties.positioned_children.append(positioned)
        return properties

    def _positioned_values(self, widget: Widget) -> Optional[PositionedChild]:
        positioned = PositionedChild(widget=widget)
        if widget.position is not None:
            for name in POSITION_FIELDS:
                setattr(positioned, name, getattr(widget.position, name))
        for name in POSITION_FIELDS:
            if name in widget.properties:
                setattr(positioned, name, widget.properties[name])

        if all(getattr(positioned, name) is None for name in POSITION_FIELDS):
            return None
        return positioned

    @staticmethod
    def _is_auto_layout_candidate(widget: Widget, layout_type: LayoutType) -> bool:
        if layout_type in (LayoutType.LINEAR, LayoutType.FLEX):
            return len(widget.children) > 0
        return layout_type in (LayoutType.SINGLE, LayoutType.WRAP)

    @staticmethod
    def is_complex_layout(analysis: LayoutAnalysis) -> bool:
        if analysis.layout_type in (LayoutType.STACK, LayoutType.GRID):
            return True
        flex = analysis.flex_properties
        if flex is not None and flex.has_flex_children and flex.has_fixed_children:
            return True
        stack = analysis.stack_properties
        return stack is not None and stack.has_positioned_children

    def get_auto_layout_recommendations(self, analysis: LayoutAnalysis) -> List[str]:
        """Human-readable hints for converting a layout to a flow box."""
        if not analysis.is_auto_layout_candidate:
            return ["Widget is not suitable for Auto Layout conversion"]

        recommendations = []
        direction = analysis.direction or "horizontal"
        if analysis.layout_type == LayoutType.LINEAR:
            recommendations.append(f"Use {direction} Auto Layout")
            if analysis.alignment is not None:
                recommendations.append(f"Set alignment: {json.dumps(analysis.alignment.to_dict())}")
            if analysis.spacing:
                recommendations.append(f"Set spacing: {analysis.spacing}px")
        elif analysis.layout_type == LayoutType.FLEX:
            recommendations.append(f"Use {direction} Auto Layout with flex properties")
            if analysis.flex_properties is not None:
                recommendations.append(
                    f"Configure {len(analysis.flex_properties.flex_children)} flex children")
        elif analysis.layout_type == LayoutType.SINGLE:
            recommendations.append("Use Auto Layout for padding and sizing")
            if analysis.padding is not None:
                recommendations.append("Apply padding to Auto Layout frame")
        elif analysis.layout_type == LayoutType.WRAP:
            recommendations.append("Use Auto Layout with wrap enabled (if supported)")
        else:
            recommendations.append("Consider manual layout or component structure")
        return recommendations
