"""Tests for the TimelineVisualizer service."""

import pytest

from about_time.models import AtomicTemplate, LaneTemplate, Segment, TemplateStore
from about_time.services.timeline_visualizer import TimelineVisualizer


MINUTE = 60000


@pytest.fixture
def store():
    return TemplateStore([
        AtomicTemplate(id="chop", intent="Chop <veg>", estimated_duration=10 * MINUTE),
        AtomicTemplate(id="stir", intent="Stir", estimated_duration=MINUTE),
        LaneTemplate(
            id="curry",
            intent="Green curry",
            estimated_duration=40 * MINUTE,
            segments=[
                Segment(template_id="chop", offset=0),
                Segment(template_id="stir", offset=20 * MINUTE),
                Segment(template_id="chop", offset=35 * MINUTE),
            ],
        ),
    ])


@pytest.fixture
def visualizer():
    return TimelineVisualizer()


class TestRenderLaneHtml:
    """Tests for HTML rendering."""

    def test_document_structure(self, visualizer, store):
        html = visualizer.render_lane_html(store["curry"], store)
        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Lane: Green curry</title>" in html

    def test_segments_positioned(self, visualizer, store):
        html = visualizer.render_lane_html(store["curry"], store)
        assert "left: 0.0%; width: 25.0%" in html
        assert "left: 87.5%; width: 25.0%" in html

    def test_overflowing_segment_flagged(self, visualizer, store):
        html = visualizer.render_lane_html(store["curry"], store)
        assert 'class="segment overflow"' in html

    def test_hidden_slot_indicator(self, visualizer, store):
        html = visualizer.render_lane_html(store["curry"], store)
        assert "+1" in html

    def test_intents_escaped(self, visualizer, store):
        html = visualizer.render_lane_html(store["curry"], store)
        assert "Chop &lt;veg&gt;" in html
        assert "Chop <veg>" not in html

    def test_write_timeline(self, visualizer, store, tmp_path):
        path = visualizer.write_timeline(store["curry"], store, tmp_path / "out" / "curry.html")
        assert path.exists()
        assert "Green curry" in path.read_text()


class TestPrepareTimelineData:
    """Tests for template data preparation."""

    def test_gaps(self, visualizer, store):
        from about_time.services.lane_view import build_lane_layout

        data = visualizer._prepare_timeline_data(build_lane_layout(store["curry"], store))
        assert [(g["start_ms"], g["end_ms"]) for g in data["gaps"]] == [
            (10 * MINUTE, 20 * MINUTE),
            (21 * MINUTE, 35 * MINUTE),
        ]

    def test_depth_colors(self, visualizer, store):
        from about_time.services.lane_view import build_lane_layout

        data = visualizer._prepare_timeline_data(build_lane_layout(store["curry"], store))
        assert data["nested_depth"] == 1
        assert all(s["color"] == TimelineVisualizer.DEPTH_COLORS[0] for s in data["segments"])
