"""
End-to-end tests: event bus -> manager -> resolver -> engine -> store.
"""

import pytest

from contour_interpolation.dto import (
    AcceptInterpolationSelector,
    AnnotationCompletedEvent,
    AnnotationModifiedEvent,
)
from contour_interpolation.enums import ChangeTypes, Events
from tests.fixtures.factories import AnnotationFactory, CONTOUR_TOOL, GROUP_SELECTOR

pytestmark = pytest.mark.integration


def draw(store, event_bus, **kwargs):
    """Simulate a user finishing a contour: store it, then announce completion."""
    annotation = AnnotationFactory(**kwargs)
    store.add_annotation(annotation, GROUP_SELECTOR)
    event_bus.dispatch(Events.ANNOTATION_COMPLETED, AnnotationCompletedEvent(annotation=annotation))
    return annotation


def members(store, uid):
    return [a for a in store.get_annotations(CONTOUR_TOOL, GROUP_SELECTOR) if a.interpolation_uid == uid]


def generated_slices(store, uid):
    return sorted(a.metadata.slice_index for a in members(store, uid) if a.auto_generated)


@pytest.mark.usefixtures("wired_manager")
class TestInterpolationFlow:

    def test_two_keyframes_form_one_group(self, store, event_bus):
        """Test two keyframes on one segment share a uid and fill the slices between them."""
        first = draw(store, event_bus, slice_index=2)
        second = draw(store, event_bus, slice_index=6)

        assert first.interpolation_uid == "uid-1"
        assert second.interpolation_uid == "uid-1"
        assert generated_slices(store, "uid-1") == [3, 4, 5]

    def test_recompletion_is_idempotent(self, store, event_bus):
        """Test completing a keyframe again leaves the group unchanged."""
        first = draw(store, event_bus, slice_index=0)
        draw(store, event_bus, slice_index=4)
        before = generated_slices(store, first.interpolation_uid)

        for _ in range(2):
            event_bus.dispatch(Events.ANNOTATION_COMPLETED, AnnotationCompletedEvent(annotation=first))
            assert first.interpolation_uid == "uid-1"
            assert generated_slices(store, "uid-1") == before == [1, 2, 3]

    def test_segments_never_share_a_group(self, store, event_bus):
        """Test keyframes on different segments get separate uids."""
        liver = draw(store, event_bus, slice_index=1, segment_index=1)
        lesion = draw(store, event_bus, slice_index=2, segment_index=2)

        assert liver.interpolation_uid != lesion.interpolation_uid

    def test_second_contour_on_slice_starts_new_group(self, store, event_bus):
        """Test a second contour on an already grouped slice mints a new uid."""
        left = draw(store, event_bus, slice_index=3, center=(-20.0, 0.0))
        right = draw(store, event_bus, slice_index=3, center=(20.0, 0.0))

        assert left.interpolation_uid == "uid-1"
        assert right.interpolation_uid == "uid-2"

    def test_new_contour_joins_nearest_group(self, store, event_bus):
        """Test a new contour joins the group whose center is closest in plane."""
        draw(store, event_bus, slice_index=3, center=(0.0, 0.0))
        draw(store, event_bus, slice_index=3, center=(10.0, 10.0))

        follow_up = draw(store, event_bus, slice_index=8, center=(1.0, 1.0))

        assert follow_up.interpolation_uid == "uid-1"
        assert generated_slices(store, "uid-1") == [4, 5, 6, 7]
        assert generated_slices(store, "uid-2") == []

    def test_deleting_keyframe_removes_only_its_generated(self, store, event_bus):
        """Test removing a keyframe leaves other groups' generated contours alone."""
        liver_low = draw(store, event_bus, slice_index=0, segment_index=1)
        liver_high = draw(store, event_bus, slice_index=4, segment_index=1)
        draw(store, event_bus, slice_index=0, segment_index=2)
        draw(store, event_bus, slice_index=3, segment_index=2)

        store.remove_annotation(liver_high.annotation_uid)

        assert generated_slices(store, liver_low.interpolation_uid) == []
        assert store.get_annotation(liver_low.annotation_uid) is liver_low
        assert generated_slices(store, "uid-2") == [1, 2]

    def test_deleting_outer_keyframe_keeps_inner_span(self, store, event_bus):
        """Test removing the top keyframe of three keeps the span between the remaining two."""
        low = draw(store, event_bus, slice_index=0)
        draw(store, event_bus, slice_index=4)
        high = draw(store, event_bus, slice_index=8)
        assert generated_slices(store, low.interpolation_uid) == [1, 2, 3, 5, 6, 7]

        store.remove_annotation(high.annotation_uid)

        assert generated_slices(store, low.interpolation_uid) == [1, 2, 3]

    def test_deleting_middle_keyframe_clears_both_spans(self, store, event_bus):
        """Test removing the middle keyframe of three removes the generated contours it anchored."""
        low = draw(store, event_bus, slice_index=0)
        middle = draw(store, event_bus, slice_index=4)
        high = draw(store, event_bus, slice_index=8)

        store.remove_annotation(middle.annotation_uid)

        assert generated_slices(store, low.interpolation_uid) == []
        assert store.get_annotation(high.annotation_uid) is high

    def test_deleting_generated_does_not_cascade(self, store, event_bus, engine):
        """Test removing a generated contour does not trigger deletion."""
        draw(store, event_bus, slice_index=0)
        draw(store, event_bus, slice_index=4)
        victim = next(a for a in members(store, "uid-1") if a.auto_generated and a.metadata.slice_index == 2)
        delete_calls = len(engine.delete_calls)

        store.remove_annotation(victim.annotation_uid)

        assert generated_slices(store, "uid-1") == [1, 3]
        assert len(engine.delete_calls) == delete_calls

    def test_editing_generated_promotes_it(self, store, event_bus, engine):
        """Test editing a generated contour turns it into a keyframe."""
        draw(store, event_bus, slice_index=0)
        draw(store, event_bus, slice_index=4)
        edited = next(a for a in members(store, "uid-1") if a.metadata.slice_index == 2)

        event_bus.dispatch(
            Events.ANNOTATION_MODIFIED,
            AnnotationModifiedEvent(annotation=edited, change_type=ChangeTypes.InterpolationUpdated),
        )

        assert edited.auto_generated is False
        assert engine.synthesize_calls[-1].is_interpolation_update is True
        assert generated_slices(store, "uid-1") == [1, 3]

    def test_accept_clears_generated_flag(self, store, event_bus, wired_manager):
        """Test accepting generated contours keeps their group."""
        draw(store, event_bus, slice_index=0, segment_index=3)
        draw(store, event_bus, slice_index=10, segment_index=3)
        draw(store, event_bus, slice_index=0, segment_index=4)
        draw(store, event_bus, slice_index=10, segment_index=4)

        wired_manager.accept_auto_generated(GROUP_SELECTOR, AcceptInterpolationSelector(segment_index=3, slice_index=7))

        accepted = [a for a in store.get_annotations(CONTOUR_TOOL, GROUP_SELECTOR) if a.metadata.slice_index == 7]
        assert {(a.segment_index, a.auto_generated) for a in accepted} == {(3, False), (4, True)}
        assert generated_slices(store, "uid-1") == [1, 2, 3, 4, 5, 6, 8, 9]
