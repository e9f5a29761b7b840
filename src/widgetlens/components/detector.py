"""
Component pattern detection over extracted widget trees.

Widgets are grouped by structural hash; each group is split into variants by
diffing members against the group's first member. Confidence is a weighted
sum of instance count, structural complexity and variant distribution.
"""

import dataclasses
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from ..exceptions import ConfigurationError
from ..models import Widget, WidgetType, Styling
from ..services.configuration_service import DetectionConfig, WidgetLensConfig
from .similarity import BKTree, RelatedPatterns, structure_simhash
from .structure import structure_hash, hash_object

logger = logging.getLogger(__name__)

SKIPPED_TYPES = (WidgetType.SCAFFOLD, WidgetType.APP_BAR)

BASE_NAMES = {
    WidgetType.BUTTON: "Button",
    WidgetType.CARD: "Card",
    WidgetType.CONTAINER: "Container",
    WidgetType.ROW: "Row",
    WidgetType.COLUMN: "Column",
}

NAME_CATEGORIES = ("color", "size", "text")


@dataclass
class PropertyDifference:
    path: str
    base_value: Any
    variant_value: Any
    type: str = "property"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "baseValue": self.base_value,
            "variantValue": self.variant_value,
            "type": self.type,
        }


@dataclass
class StylingDifference:
    property: str
    base_value: Any
    variant_value: Any
    category: str = "color"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "property": self.property,
            "baseValue": self.base_value,
            "variantValue": self.variant_value,
            "category": self.category,
        }


@dataclass
class ComponentVariant:
    """Members of a pattern sharing one set of differences from the base."""

    id: str
    name: str
    widget: Widget
    property_differences: List[PropertyDifference] = field(default_factory=list)
    styling_differences: List[StylingDifference] = field(default_factory=list)
    usage_count: int = 1
    instances: List[Widget] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "widgetId": self.widget.id,
            "propertyDifferences": [d.to_dict() for d in self.property_differences],
            "stylingDifferences": [d.to_dict() for d in self.styling_differences],
            "usageCount": self.usage_count,
        }


@dataclass
class ComponentPattern:
    id: str
    type: WidgetType
    structure_hash: str
    instances: List[Widget]
    variants: List[ComponentVariant]
    confidence: float
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "structureHash": self.structure_hash,
            "instances": [w.id for w in self.instances],
            "variants": [v.to_dict() for v in self.variants],
            "confidence": round(self.confidence, 4),
            "name": self.name,
        }


@dataclass
class WidgetVariant:
    name: str
    properties: Dict[str, Any]
    styling: Styling

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "properties": self.properties, "styling": self.styling.to_dict()}


@dataclass
class ReusableWidget:
    """A pattern packaged as a component definition."""

    name: str
    base_widget: Widget
    variants: List[WidgetVariant]
    usage_count: int

    def to_dict(self) -> Dict[str, Any]:
        data = self.base_widget.to_dict()
        data.update({
            "name": self.name,
            "variants": [v.to_dict() for v in self.variants],
            "usageCount": self.usage_count,
        })
        return data


@dataclass
class ComponentDetectionResult:
    patterns: List[ComponentPattern] = field(default_factory=list)
    reusable_widgets: List[ReusableWidget] = field(default_factory=list)
    total_instances: int = 0
    component_coverage: float = 0.0

    @property
    def unique_patterns(self) -> int:
        return len(self.patterns)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "patterns": [p.to_dict() for p in self.patterns],
            "reusableWidgets": [w.to_dict() for w in self.reusable_widgets],
            "totalInstances": self.total_instances,
            "uniquePatterns": self.unique_patterns,
            "componentCoverage": round(self.component_coverage, 2),
        }


def _categorize_styling(path: str) -> str:
    lowered = path.lower()
    if "color" in lowered:
        return "color"
    if "typography" in lowered or "font" in lowered or "text" in lowered:
        return "typography"
    if "padding" in lowered or "margin" in lowered or "spacing" in lowered:
        return "spacing"
    if "border" in lowered:
        return "border"
    if "shadow" in lowered:
        return "shadow"
    return "color"


def _readable_label(value: Any) -> str:
    """``Colors.red`` -> ``Red``; ``#FF0000`` -> ``FF0000``."""
    text = str(value).rsplit(".", 1)[-1].lstrip("#")
    return text[:1].upper() + text[1:] if text else "Custom"


class ComponentDetector:
    """
    Detects repeated widget structures that can become reusable components.

    The detector holds only its configuration; every call works on fresh
    local state.
    """

    def __init__(self, config: Optional[DetectionConfig] = None, **overrides):
        self.config = config or DetectionConfig()
        if overrides:
            self.update_config(**overrides)

    def update_config(self, **kwargs) -> None:
        """
        Replace individual detection settings.

        Raises:
            ConfigurationError: For unknown settings or invalid values
        """
        known = {f.name for f in dataclasses.fields(DetectionConfig)}
        unknown = set(kwargs) - known
        if unknown:
            raise ConfigurationError(f"Unknown detection settings: {sorted(unknown)}")

        updated = dataclasses.replace(self.config, **kwargs)
        WidgetLensConfig(detection=updated)
        self.config = updated

    def get_config(self) -> DetectionConfig:
        return dataclasses.replace(self.config)

    def detect_components(self, widgets: List[Widget]) -> ComponentDetectionResult:
        """
        Find component patterns in a widget forest.

        Args:
            widgets: Root widgets; nested widgets are considered too

        Returns:
            ComponentDetectionResult with patterns above the confidence floor
        """
        all_widgets = [node for root in widgets for node in root.iter_tree()]

        groups: Dict[str, List[Widget]] = {}
        for widget in all_widgets:
            if self._should_consider(widget):
                groups.setdefault(structure_hash(widget), []).append(widget)

        patterns = []
        for group_hash, group in groups.items():
            if len(group) < self.config.min_instances:
                continue
            pattern = self._analyze_group(group_hash, group)
            if len(pattern.instances) < self.config.min_instances:
                logger.debug(f"Dropped {pattern.name} group left with {len(pattern.instances)} "
                             f"instances after variant truncation")
            elif pattern.confidence >= self.config.min_confidence:
                patterns.append(pattern)
            else:
                logger.debug(f"Dropped {pattern.name} group with confidence {pattern.confidence:.3f}")

        total_instances = sum(len(p.instances) for p in patterns)
        coverage = 100.0 * total_instances / len(all_widgets) if all_widgets else 0.0

        logger.info(f"Detected {len(patterns)} component patterns covering "
                    f"{total_instances}/{len(all_widgets)} widgets")
        return ComponentDetectionResult(
            patterns=patterns,
            reusable_widgets=self.create_reusable_widgets(patterns),
            total_instances=total_instances,
            component_coverage=coverage,
        )

    def _should_consider(self, widget: Widget) -> bool:
        if widget.type == WidgetType.CUSTOM and not self.config.include_custom_widgets:
            return False
        if widget.type in SKIPPED_TYPES:
            return False
        return not self._is_simple_leaf(widget)

    @staticmethod
    def _is_simple_leaf(widget: Widget) -> bool:
        return (not widget.children
                and widget.type in (WidgetType.TEXT, WidgetType.IMAGE)
                and len(widget.properties) <= 1)

    def _analyze_group(self, group_hash: str, widgets: List[Widget]) -> ComponentPattern:
        variants = self._analyze_variants(widgets)
        # Truncation drops the members of discarded variants as well
        instances = [w for variant in variants for w in variant.instances]
        base = widgets[0]

        return ComponentPattern(
            id=f"component_{group_hash}",
            type=base.type,
            structure_hash=group_hash,
            instances=instances,
            variants=variants,
            confidence=self.calculate_confidence(instances, variants),
            name=self._component_name(base, variants),
        )

    def _analyze_variants(self, widgets: List[Widget]) -> List[ComponentVariant]:
        base = widgets[0]
        variants: Dict[str, ComponentVariant] = {}

        for widget in widgets:
            differences = self.find_differences(base, widget)
            signature = "|".join(sorted(f"{d.path}:{d.variant_value}" for d in differences))
            variant_hash = hash_object(signature)

            variant = variants.get(variant_hash)
            if variant is not None:
                variant.usage_count += 1
                variant.instances.append(widget)
                continue

            variants[variant_hash] = ComponentVariant(
                id=f"variant_{variant_hash}",
                name=self._variant_name(differences),
                widget=widget,
                property_differences=[d for d in differences if d.type == "property"],
                styling_differences=[
                    StylingDifference(d.path, d.base_value, d.variant_value, _categorize_styling(d.path))
                    for d in differences if d.type == "styling"
                ],
                instances=[widget],
            )

        ordered = list(variants.values())
        if len(ordered) > self.config.max_variants:
            ordered.sort(key=lambda v: v.usage_count, reverse=True)
            ordered = ordered[:self.config.max_variants]
        return ordered

    def find_differences(self, base: Widget, other: Widget) -> List[PropertyDifference]:
        """Property, styling and child-count differences of ``other`` from ``base``."""
        differences: List[PropertyDifference] = []

        if not self.config.structural_only:
            self._compare_properties(base.properties, other.properties, differences)
            self._compare_styling(base.styling, other.styling, differences)

        if len(base.children) != len(other.children):
            differences.append(PropertyDifference(
                "children.length", len(base.children), len(other.children), "children"))
        return differences

    def _compare_properties(self, base: Dict[str, Any], other: Dict[str, Any],
                            differences: List[PropertyDifference]) -> None:
        keys = list(base) + [k for k in other if k not in base]
        for key in keys:
            if key in self.config.ignore_properties:
                continue
            if base.get(key) != other.get(key):
                differences.append(PropertyDifference(key, base.get(key), other.get(key)))

    def _compare_styling(self, base: Styling, other: Styling,
                         differences: List[PropertyDifference]) -> None:
        base_colors = {c.property: c.value for c in base.colors}
        other_colors = {c.property: c.value for c in other.colors}
        for prop in list(base_colors) + [p for p in other_colors if p not in base_colors]:
            if base_colors.get(prop) != other_colors.get(prop):
                differences.append(PropertyDifference(
                    f"styling.colors.{prop}", base_colors.get(prop), other_colors.get(prop), "styling"))

        base_typography = base.typography.to_dict() if base.typography else None
        other_typography = other.typography.to_dict() if other.typography else None
        if base_typography != other_typography:
            differences.append(PropertyDifference(
                "styling.typography", base_typography, other_typography, "styling"))

    def calculate_confidence(self, instances: List[Widget], variants: List[ComponentVariant]) -> float:
        config = self.config
        instance_score = min(len(instances) / config.instance_saturation, config.instance_weight)
        score = (instance_score
                 + self.complexity_score(instances[0]) * config.complexity_weight
                 + self.variant_score(variants) * config.variant_weight)
        return min(score, 1.0)

    @staticmethod
    def complexity_score(widget: Widget) -> float:
        score = 0.2
        score += min(len(widget.children) / 3, 0.3)
        score += min(len(widget.properties) / 5, 0.3)
        if widget.styling.colors:
            score += 0.1
        if widget.styling.typography is not None:
            score += 0.1
        if widget.layout is not None:
            score += 0.1
        return min(score, 1.0)

    def variant_score(self, variants: List[ComponentVariant]) -> float:
        """Rewards few variants with even usage; a single variant scores 1."""
        if not variants:
            return 0.0
        if len(variants) == 1:
            return 1.0

        usages = [v.usage_count for v in variants]
        average_usage = sum(usages) / len(usages)
        count_score = max(0.0, 1 - (len(variants) - 1) / self.config.max_variants)
        usage_score = average_usage / max(usages)
        return (count_score + usage_score) / 2

    def _component_name(self, base: Widget, variants: List[ComponentVariant]) -> str:
        if base.type == WidgetType.CUSTOM:
            name = base.custom_type or "Component"
        else:
            name = BASE_NAMES.get(base.type, "Component")

        categories = Counter()
        for variant in variants:
            paths = [d.path for d in variant.property_differences]
            paths += [d.property for d in variant.styling_differences]
            for path in paths:
                for category in NAME_CATEGORIES:
                    if category in path.lower():
                        categories[category] += 1

        if categories:
            # Counter.most_common keeps first-seen order on ties
            name += categories.most_common(1)[0][0].capitalize()
        return name

    @staticmethod
    def _variant_name(differences: List[PropertyDifference]) -> str:
        if not differences:
            return "Default"

        significant = differences[0]
        path = significant.path.lower()
        if "color" in path:
            return f"{_readable_label(significant.variant_value)}Color"
        if "size" in path:
            return f"{significant.variant_value}Size"
        if "text" in path:
            return "TextVariant"
        return f"Variant{len(differences)}"

    def create_reusable_widgets(self, patterns: List[ComponentPattern]) -> List[ReusableWidget]:
        return [
            ReusableWidget(
                name=pattern.name,
                base_widget=pattern.instances[0],
                variants=[WidgetVariant(v.name, v.widget.properties, v.widget.styling)
                          for v in pattern.variants],
                usage_count=len(pattern.instances),
            )
            for pattern in patterns
        ]

    def find_related_patterns(self, patterns: List[ComponentPattern],
                              max_distance: Optional[int] = None) -> List[RelatedPatterns]:
        """
        Pairs of distinct patterns whose structures are near-duplicates.

        Args:
            patterns: Detected patterns
            max_distance: Hamming distance bound; defaults to the configured value

        Returns:
            Pairs ordered by pattern order, closest first within each pattern
        """
        if max_distance is None:
            max_distance = self.config.related_max_distance

        tree = BKTree()
        hashes = {}
        for pattern in patterns:
            hashes[pattern.id] = structure_simhash(pattern.instances[0])
            tree.insert(hashes[pattern.id], pattern)

        related: List[RelatedPatterns] = []
        seen = set()
        for pattern in patterns:
            matches = sorted(tree.search(hashes[pattern.id], max_distance), key=lambda m: m[1])
            for other, distance in matches:
                pair = tuple(sorted((pattern.id, other.id)))
                if other.id == pattern.id or pair in seen:
                    continue
                seen.add(pair)
                related.append(RelatedPatterns(pattern.id, other.id, distance))

        logger.debug(f"Found {len(related)} related pattern pairs within distance {max_distance}")
        return related
