"""Tests for lane layout composition."""

import pytest

from about_time.models import AtomicTemplate, EmptyRegion, LaneTemplate, Segment, TemplateStore
from about_time.services.lane_view import (
    TIME_SLOTS,
    build_lane_layout,
    compute_segment_visibility,
    select_child_lane,
)


MINUTE = 60000


@pytest.fixture
def store():
    """A 100-minute lane with large, tiny and nested children."""
    return TemplateStore([
        AtomicTemplate(id="prep", intent="Prep", estimated_duration=20 * MINUTE),
        AtomicTemplate(id="stir", intent="Stir", estimated_duration=1 * MINUTE),
        AtomicTemplate(id="taste", intent="Taste", estimated_duration=2 * MINUTE),
        LaneTemplate(
            id="sauce",
            intent="Make sauce",
            estimated_duration=30 * MINUTE,
            segments=[Segment(template_id="stir", offset=0)],
        ),
        LaneTemplate(
            id="dinner",
            intent="Dinner",
            estimated_duration=100 * MINUTE,
            segments=[
                Segment(template_id="sauce", offset=40 * MINUTE),
                Segment(template_id="prep", offset=0),
                Segment(template_id="stir", offset=21 * MINUTE),
                Segment(template_id="taste", offset=24 * MINUTE),
                Segment(template_id="stir", offset=99 * MINUTE),
                Segment(template_id="missing", offset=80 * MINUTE),
            ],
        ),
    ])


class TestSegmentVisibility:
    """Tests for compute_segment_visibility."""

    def test_splits_by_ratio(self, store):
        """Test children under 1/20 of the parent are hidden."""
        lane = store["dinner"]
        visible, hidden = compute_segment_visibility(lane.segments, lane.estimated_duration, store)
        assert [s.template_id for s in visible] == ["sauce", "prep"]
        assert sum(slot.count for slot in hidden) == 3

    def test_hidden_slots_grouped_and_sorted(self, store):
        """Test hidden children are grouped into 5-minute slots of a 100-minute lane."""
        lane = store["dinner"]
        _, hidden = compute_segment_visibility(lane.segments, lane.estimated_duration, store)
        assert [slot.slot_index for slot in hidden] == [4, TIME_SLOTS - 1]
        assert [t.id for t in hidden[0].templates] == ["stir", "taste"]
        assert hidden[1].count == 1

    def test_exact_ratio_is_visible(self):
        """Test a child exactly 1/20 of the parent is drawn."""
        store = TemplateStore([AtomicTemplate(id="a", intent="A", estimated_duration=5)])
        visible, hidden = compute_segment_visibility(
            [Segment(template_id="a", offset=0)], 100, store
        )
        assert len(visible) == 1
        assert hidden == []

    def test_zero_duration_parent(self):
        """Test every resolvable child is visible in a zero-length lane."""
        store = TemplateStore([AtomicTemplate(id="a", intent="A", estimated_duration=0)])
        visible, hidden = compute_segment_visibility(
            [Segment(template_id="a", offset=10), Segment(template_id="b", offset=0)], 0, store
        )
        assert [s.template_id for s in visible] == ["a"]
        assert hidden == []

    def test_offset_past_end_goes_to_last_slot(self):
        store = TemplateStore([AtomicTemplate(id="a", intent="A", estimated_duration=1)])
        _, hidden = compute_segment_visibility([Segment(template_id="a", offset=500)], 100, store)
        assert hidden[0].slot_index == TIME_SLOTS - 1


class TestBuildLaneLayout:
    """Tests for build_lane_layout."""

    def test_positions_visible_segments(self, store):
        layout = build_lane_layout(store["dinner"], store)
        sauce, prep = layout.visible_segments
        assert sauce.left_percent == pytest.approx(40)
        assert sauce.width_percent == pytest.approx(30)
        assert prep.left_percent == 0
        assert prep.width_percent == pytest.approx(20)

    def test_depths(self, store):
        layout = build_lane_layout(store["dinner"], store)
        assert layout.nested_depth == 2
        assert [s.nested_depth for s in layout.visible_segments] == [1, 0]

    def test_empty_regions(self, store):
        """Test gaps use all resolvable segments, hidden ones included."""
        layout = build_lane_layout(store["dinner"], store)
        assert layout.empty_regions == [
            EmptyRegion(start=20 * MINUTE, end=21 * MINUTE),
            EmptyRegion(start=22 * MINUTE, end=24 * MINUTE),
            EmptyRegion(start=26 * MINUTE, end=40 * MINUTE),
            EmptyRegion(start=70 * MINUTE, end=99 * MINUTE),
        ]

    def test_ledger(self, store):
        layout = build_lane_layout(store["dinner"], store)
        assert layout.ledger.interval.ms_value == 5 * MINUTE
        assert layout.duration == 100 * MINUTE

    def test_cyclic_lane(self):
        """Test a self-referencing lane lays out without recursion errors."""
        store = TemplateStore([
            LaneTemplate(
                id="loop",
                intent="Loop",
                estimated_duration=MINUTE,
                segments=[Segment(template_id="loop", offset=0)],
            ),
        ])
        layout = build_lane_layout(store["loop"], store)
        assert layout.nested_depth == 1
        assert layout.empty_regions == []
        assert layout.visible_segments[0].width_percent == 100


class TestSelectChildLane:
    """Tests for select_child_lane."""

    def test_shorter_child_lane(self, store):
        assert select_child_lane("sauce", store["dinner"], store) is store["sauce"]

    def test_none_selected(self, store):
        assert select_child_lane(None, store["dinner"], store) is None

    def test_atomic_not_drillable(self, store):
        assert select_child_lane("prep", store["dinner"], store) is None

    def test_missing_not_drillable(self, store):
        assert select_child_lane("missing", store["dinner"], store) is None

    def test_equal_or_longer_not_drillable(self, store):
        assert select_child_lane("dinner", store["dinner"], store) is None
