"""Timeline Visualizer - renders a lane layout as a standalone HTML page.

Responsible for:
- Proportional segment blocks positioned by percentage
- Shaded empty regions
- Ruler marks from the time ledger
- "+N hidden" indicators for children too small to draw
"""

from pathlib import Path
from collections.abc import Mapping
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from about_time.models import LaneLayout, LaneTemplate
from about_time.services.geometry import (
    calculate_segment_position,
    calculate_segment_width,
)
from about_time.services.lane_view import TIME_SLOTS, build_lane_layout
from about_time.utils.time_utils import format_duration, format_duration_human


class TimelineVisualizer:
    """Generates HTML timelines for lanes."""

    # Segment colors by nesting depth
    DEPTH_COLORS = [
        "#4285F4",  # Blue
        "#34A853",  # Green
        "#FBBC04",  # Yellow
        "#EA4335",  # Red
        "#9C27B0",  # Purple
    ]

    GAP_COLOR = "#2a2a40"

    def __init__(self, template_dir: str | Path | None = None):
        """Initialize the visualizer.

        Args:
            template_dir: Directory holding ``lane_timeline.html``
                (default: the package's bundled templates)
        """
        template_dir = Path(template_dir) if template_dir else Path(__file__).parent.parent / "templates"

        self.jinja_env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self.jinja_env.filters["duration"] = format_duration
        self.jinja_env.filters["duration_human"] = format_duration_human

    def render_lane_html(self, lane: LaneTemplate, store: Mapping) -> str:
        """Render ``lane`` as a complete HTML document."""
        layout = build_lane_layout(lane, store)
        template = self.jinja_env.get_template("lane_timeline.html")
        return template.render(**self._prepare_timeline_data(layout))

    def write_timeline(self, lane: LaneTemplate, store: Mapping, output_path: str | Path) -> Path:
        """Render ``lane`` and write it to ``output_path``."""
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render_lane_html(lane, store), encoding="utf-8")
        return path

    def _prepare_timeline_data(self, layout: LaneLayout) -> dict[str, Any]:
        duration = layout.duration
        slot_width = 100 / TIME_SLOTS

        segments = [
            {
                "id": s.template_id,
                "intent": s.template.intent,
                "left": round(s.left_percent, 4),
                "width": round(s.width_percent, 4),
                "duration_ms": s.duration,
                "offset_ms": s.offset,
                "depth": s.nested_depth,
                "color": self._color_for_depth(s.nested_depth),
                "overflows": s.left_percent + s.width_percent > 100,
            }
            for s in layout.visible_segments
        ]

        gaps = [
            {
                "left": round(calculate_segment_position(r.start, duration), 4),
                "width": round(calculate_segment_width(r.duration, duration), 4),
                "start_ms": r.start,
                "end_ms": r.end,
            }
            for r in layout.empty_regions
        ]

        hidden_slots = [
            {
                "left": round(slot.slot_index * slot_width, 4),
                "width": round(slot_width, 4),
                "count": slot.count,
                "intents": [t.intent for t in slot.templates],
            }
            for slot in layout.hidden_slots
        ]

        marks = [
            {"left": round(mark.position * 100, 4), "label": mark.label}
            for mark in layout.ledger.marks
        ]

        return {
            "lane": layout.lane,
            "duration_ms": duration,
            "nested_depth": layout.nested_depth,
            "segments": segments,
            "gaps": gaps,
            "gap_color": self.GAP_COLOR,
            "hidden_slots": hidden_slots,
            "marks": marks,
        }

    def _color_for_depth(self, depth: int) -> str:
        return self.DEPTH_COLORS[depth % len(self.DEPTH_COLORS)]
