"""Unit tests for discovery feed eligibility."""

from domain.entities.swipe import SwipeDecision, SwipeType
from domain.services.eligibility import candidates_for, decided_ids
from tests.unit.conftest import make_clinic, make_worker


def _swipe(viewer, target, type=SwipeType.PASS):
    return SwipeDecision(from_profile_id=viewer.id, to_profile_id=target.id, type=type)


class TestCandidatesFor:
    def test_incomplete_viewer_gets_nothing(self):
        viewer = make_worker(complete=False)

        assert candidates_for(viewer, [make_clinic()], []) == []

    def test_only_opposite_role_is_shown(self):
        viewer = make_worker()
        clinic = make_clinic()
        other_worker = make_worker()

        result = candidates_for(viewer, [clinic, other_worker], [])

        assert result == [clinic]

    def test_viewer_never_sees_itself(self):
        viewer = make_clinic()

        assert candidates_for(viewer, [viewer], []) == []

    def test_liked_and_passed_profiles_are_excluded(self):
        viewer = make_clinic()
        liked, passed, fresh = make_worker(offset=1), make_worker(offset=2), make_worker(offset=3)
        decisions = [_swipe(viewer, liked, SwipeType.LIKE), _swipe(viewer, passed)]

        result = candidates_for(viewer, [liked, passed, fresh], decisions)

        assert result == [fresh]

    def test_other_viewers_decisions_do_not_filter(self):
        viewer = make_clinic()
        someone_else = make_clinic()
        worker = make_worker()

        result = candidates_for(viewer, [worker], [_swipe(someone_else, worker)])

        assert result == [worker]

    def test_incomplete_candidates_are_hidden(self):
        viewer = make_clinic()
        complete = make_worker()
        incomplete = make_worker(complete=False)

        assert candidates_for(viewer, [incomplete, complete], []) == [complete]

    def test_ordered_by_created_at_and_capped(self):
        viewer = make_worker()
        newest, oldest, middle = (
            make_clinic(offset=30),
            make_clinic(offset=10),
            make_clinic(offset=20),
        )

        result = candidates_for(viewer, [newest, oldest, middle], [], limit=2)

        assert result == [oldest, middle]

    def test_ties_broken_by_id(self):
        viewer = make_worker()
        first, second = make_clinic(offset=5), make_clinic(offset=5)
        expected = sorted([first, second], key=lambda p: str(p.id))

        assert candidates_for(viewer, [second, first], []) == expected

    def test_zero_limit_returns_empty(self):
        viewer = make_worker()

        assert candidates_for(viewer, [make_clinic()], [], limit=0) == []


class TestDecidedIds:
    def test_collects_targets_of_viewer_only(self):
        viewer = make_worker()
        a, b = make_clinic(), make_clinic()
        decisions = [_swipe(viewer, a), _swipe(a, viewer), _swipe(viewer, b, SwipeType.LIKE)]

        assert decided_ids(viewer, decisions) == {a.id, b.id}
