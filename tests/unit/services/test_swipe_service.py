"""Unit tests for SwipeService."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    AppException,
    InvalidSwipeError,
    MatchConflictError,
    ProfileNotFoundError,
)
from domain.entities.match import Match
from domain.entities.swipe import SwipeDecision, SwipeType
from domain.services.swipe_service import SwipeService
from tests.unit.conftest import FakeUnitOfWork, make_clinic, make_worker


def _unique_violation() -> IntegrityError:
    return IntegrityError(
        "INSERT INTO matches",
        {},
        Exception('duplicate key value violates unique constraint "uq_matches_pair"'),
    )


@pytest.fixture
def service(uow: FakeUnitOfWork) -> SwipeService:
    return SwipeService(lambda: uow)


@pytest.fixture
def pair(uow: FakeUnitOfWork):
    """A worker and a clinic that both exist in the store."""
    worker, clinic = make_worker(), make_clinic()
    uow.profiles.lock_many.return_value = {worker.id: worker, clinic.id: clinic}
    uow.matches.get_between.return_value = None

    async def _create(match: Match) -> Match:
        return match

    uow.matches.create.side_effect = _create
    return worker, clinic


def _like(from_profile, to_profile) -> SwipeDecision:
    return SwipeDecision(
        from_profile_id=from_profile.id, to_profile_id=to_profile.id, type=SwipeType.LIKE
    )


class TestValidation:
    async def test_self_swipe_rejected_before_store_access(
        self, service: SwipeService, uow: FakeUnitOfWork
    ):
        profile_id = uuid4()

        with pytest.raises(InvalidSwipeError):
            await service.record_swipe(profile_id, profile_id, SwipeType.LIKE)

        uow.profiles.lock_many.assert_not_called()
        uow.swipes.upsert.assert_not_called()

    async def test_unknown_type_rejected(self, service: SwipeService):
        with pytest.raises(AppException) as exc_info:
            await service.record_swipe(uuid4(), uuid4(), "SUPERLIKE")  # type: ignore[arg-type]

        assert exc_info.value.status_code == 400

    async def test_unknown_target_rejected(self, service: SwipeService, uow: FakeUnitOfWork):
        worker = make_worker()
        uow.profiles.lock_many.return_value = {worker.id: worker}
        missing = uuid4()

        with pytest.raises(ProfileNotFoundError) as exc_info:
            await service.record_swipe(worker.id, missing, SwipeType.LIKE)

        assert exc_info.value.details == {"profile_id": str(missing)}
        uow.swipes.upsert.assert_not_called()


class TestRecordSwipe:
    async def test_pass_never_matches(self, service: SwipeService, uow: FakeUnitOfWork, pair):
        worker, clinic = pair

        outcome = await service.record_swipe(worker.id, clinic.id, SwipeType.PASS)

        assert outcome.match_created is False
        assert outcome.match_id is None
        uow.swipes.upsert.assert_called_once()
        uow.swipes.get.assert_not_called()
        assert uow.committed

    async def test_like_without_reciprocal_does_not_match(
        self, service: SwipeService, uow: FakeUnitOfWork, pair
    ):
        worker, clinic = pair
        uow.swipes.get.return_value = None

        outcome = await service.record_swipe(worker.id, clinic.id, SwipeType.LIKE)

        assert outcome.match_created is False
        uow.swipes.get.assert_called_once_with(clinic.id, worker.id)
        uow.matches.create.assert_not_called()

    async def test_like_answering_pass_does_not_match(
        self, service: SwipeService, uow: FakeUnitOfWork, pair
    ):
        worker, clinic = pair
        uow.swipes.get.return_value = SwipeDecision(
            from_profile_id=clinic.id, to_profile_id=worker.id, type=SwipeType.PASS
        )

        outcome = await service.record_swipe(worker.id, clinic.id, SwipeType.LIKE)

        assert outcome.match_created is False
        uow.matches.create.assert_not_called()

    async def test_mutual_like_creates_match(
        self, service: SwipeService, uow: FakeUnitOfWork, pair
    ):
        worker, clinic = pair
        uow.swipes.get.return_value = _like(clinic, worker)

        outcome = await service.record_swipe(worker.id, clinic.id, SwipeType.LIKE)

        assert outcome.match_created is True
        created = uow.matches.create.call_args.args[0]
        assert outcome.match_id == created.id
        assert set(created.participants) == {worker.id, clinic.id}
        assert uow.committed

    async def test_pair_is_locked_before_upsert(
        self, service: SwipeService, uow: FakeUnitOfWork, pair
    ):
        worker, clinic = pair
        order: list[str] = []
        uow.profiles.lock_many.side_effect = lambda ids: order.append("lock") or {
            worker.id: worker,
            clinic.id: clinic,
        }
        uow.swipes.upsert.side_effect = lambda decision: order.append("upsert")
        uow.swipes.get.return_value = None

        await service.record_swipe(worker.id, clinic.id, SwipeType.LIKE)

        uow.profiles.lock_many.assert_called_once_with([worker.id, clinic.id])
        assert order == ["lock", "upsert"]

    async def test_existing_match_is_reused(
        self, service: SwipeService, uow: FakeUnitOfWork, pair
    ):
        worker, clinic = pair
        existing = Match.between(worker.id, clinic.id)
        existing.close(clinic.id)
        uow.swipes.get.return_value = _like(clinic, worker)
        uow.matches.get_between.return_value = existing

        outcome = await service.record_swipe(worker.id, clinic.id, SwipeType.LIKE)

        assert outcome.match_created is False
        assert outcome.match_id == existing.id
        uow.matches.create.assert_not_called()

    async def test_upsert_carries_decision(self, service: SwipeService, uow: FakeUnitOfWork, pair):
        worker, clinic = pair

        await service.record_swipe(worker.id, clinic.id, "PASS")  # type: ignore[arg-type]

        decision = uow.swipes.upsert.call_args.args[0]
        assert decision.from_profile_id == worker.id
        assert decision.to_profile_id == clinic.id
        assert decision.type is SwipeType.PASS


class TestConcurrentMatch:
    async def test_lost_race_returns_winning_match(
        self, service: SwipeService, uow: FakeUnitOfWork, pair
    ):
        worker, clinic = pair
        winner = Match.between(worker.id, clinic.id)
        uow.swipes.get.return_value = _like(clinic, worker)
        uow.matches.create.side_effect = _unique_violation()
        # Nothing on the first pass; the concurrent writer's row on replay
        uow.matches.get_between.side_effect = [None, winner]

        outcome = await service.record_swipe(worker.id, clinic.id, SwipeType.LIKE)

        assert outcome.match_created is False
        assert outcome.match_id == winner.id
        assert uow.matches.create.call_count == 1

    async def test_unresolvable_race_raises_conflict(
        self, service: SwipeService, uow: FakeUnitOfWork, pair
    ):
        worker, clinic = pair
        uow.swipes.get.return_value = _like(clinic, worker)
        uow.matches.create.side_effect = _unique_violation()

        with pytest.raises(MatchConflictError):
            await service.record_swipe(worker.id, clinic.id, SwipeType.LIKE)

        assert uow.matches.create.call_count == 2

    async def test_other_integrity_errors_propagate(
        self, service: SwipeService, uow: FakeUnitOfWork, pair
    ):
        worker, clinic = pair
        uow.swipes.upsert.side_effect = IntegrityError(
            "INSERT INTO swipes", {}, Exception("violates foreign key constraint")
        )

        with pytest.raises(IntegrityError):
            await service.record_swipe(worker.id, clinic.id, SwipeType.PASS)

        assert uow.swipes.upsert.call_count == 1

    async def test_duplicate_swipe_insert_is_replayed(
        self, service: SwipeService, uow: FakeUnitOfWork, pair
    ):
        """Two identical swipes racing: the loser's replay updates the winner's row."""
        worker, clinic = pair
        uow.swipes.upsert.side_effect = [
            IntegrityError("INSERT INTO swipes", {}, Exception("UNIQUE constraint failed")),
            MagicMock(),
        ]

        outcome = await service.record_swipe(worker.id, clinic.id, SwipeType.PASS)

        assert outcome.match_created is False
        assert uow.swipes.upsert.call_count == 2
