"""
Tests for MealService (session-scoped meal store).

Covers:
- Not-found signalling for missing and foreign meals (identical errors)
- Description validation at the service boundary
- Creation order surviving identical clock readings
- Metrics over the stored meals
"""

import uuid
from datetime import datetime

import pytest
from sqlalchemy.orm import Session

from test_fixtures import session_factory, db_session
from services.meal_service import MealService, MEAL_NOT_FOUND
from app.exceptions import NotFoundError, ServiceValidationError


def test_create_and_get(db_session: Session):
    session_id = uuid.uuid4()

    meal = MealService.create_meal(db_session, session_id, "Lentil soup", True)
    fetched = MealService.get_meal(db_session, session_id, meal.id)

    assert fetched.id == meal.id
    assert fetched.description == "Lentil soup"


def test_foreign_and_missing_meals_raise_identical_errors(db_session: Session):
    owner, intruder = uuid.uuid4(), uuid.uuid4()
    meal = MealService.create_meal(db_session, owner, "Salmon with broccoli", True)

    errors = []
    for target in (meal.id, uuid.uuid4()):
        for call in (
            lambda: MealService.get_meal(db_session, intruder, target),
            lambda: MealService.update_meal(db_session, intruder, target, "x", False),
            lambda: MealService.delete_meal(db_session, intruder, target),
        ):
            with pytest.raises(NotFoundError) as exc_info:
                call()
            errors.append(exc_info.value.to_dict())

    assert all(e == {"code": "NOT_FOUND", "message": MEAL_NOT_FOUND} for e in errors)


def test_update_on_foreign_meal_leaves_record_unchanged(db_session: Session):
    owner = uuid.uuid4()
    meal = MealService.create_meal(db_session, owner, "Double cheeseburger", False)

    with pytest.raises(NotFoundError):
        MealService.update_meal(db_session, uuid.uuid4(), meal.id, "Salad", True)

    db_session.expire_all()
    stored = MealService.get_meal(db_session, owner, meal.id)
    assert stored.description == "Double cheeseburger"
    assert stored.in_diet is False


def test_update_keeps_identity_and_creation_time(db_session: Session):
    owner = uuid.uuid4()
    meal = MealService.create_meal(db_session, owner, "Pizza", False)
    original = (meal.id, meal.session_id, meal.created_at)

    updated = MealService.update_meal(db_session, owner, meal.id, "Veggie pizza", True)

    assert (updated.id, updated.session_id, updated.created_at) == original
    assert updated.description == "Veggie pizza"
    assert updated.in_diet is True


def test_delete_removes_meal(db_session: Session):
    owner = uuid.uuid4()
    meal = MealService.create_meal(db_session, owner, "Chocolate cake slice", False)

    MealService.delete_meal(db_session, owner, meal.id)

    assert MealService.list_meals(db_session, owner) == []
    with pytest.raises(NotFoundError):
        MealService.get_meal(db_session, owner, meal.id)


@pytest.mark.parametrize("description", ["", None])
def test_empty_description_rejected(db_session: Session, description):
    with pytest.raises(ServiceValidationError):
        MealService.create_meal(db_session, uuid.uuid4(), description, True)


def test_empty_description_rejected_on_update(db_session: Session):
    owner = uuid.uuid4()
    meal = MealService.create_meal(db_session, owner, "Oatmeal", True)

    with pytest.raises(ServiceValidationError):
        MealService.update_meal(db_session, owner, meal.id, "", True)

    assert MealService.get_meal(db_session, owner, meal.id).description == "Oatmeal"


def test_whitespace_description_is_kept_verbatim(db_session: Session):
    owner = uuid.uuid4()

    meal = MealService.create_meal(db_session, owner, "   ", True)
    assert MealService.get_meal(db_session, owner, meal.id).description == "   "

    MealService.update_meal(db_session, owner, meal.id, "\t", False)
    assert MealService.get_meal(db_session, owner, meal.id).description == "\t"


def test_insertion_order_survives_frozen_clock(db_session: Session, monkeypatch):
    """Meals created on the same clock tick still list in insertion order"""
    frozen = datetime(2024, 8, 24, 12, 0, 0)
    monkeypatch.setattr("services.meal_service.utcnow", lambda: frozen)
    owner = uuid.uuid4()

    created = [
        MealService.create_meal(db_session, owner, f"Meal {i}", i % 2 == 0)
        for i in range(5)
    ]

    listed = MealService.list_meals(db_session, owner)
    assert [m.id for m in listed] == [m.id for m in created]
    assert len({m.created_at for m in listed}) == 5


def test_list_unknown_session_is_empty(db_session: Session):
    assert MealService.list_meals(db_session, uuid.uuid4()) == []


def test_metrics_over_stored_meals(db_session: Session):
    owner = uuid.uuid4()
    flags = [True, True, False, True, True, True, False]
    created = [
        MealService.create_meal(db_session, owner, f"Meal {i}", flag)
        for i, flag in enumerate(flags)
    ]
    # Another session's meals never count
    MealService.create_meal(db_session, uuid.uuid4(), "Foreign meal", True)

    report = MealService.get_metrics(db_session, owner)

    assert report.total == 7
    assert report.in_diet_count == 5
    assert report.off_diet_count == 2
    assert [m.id for m in report.best_sequence] == [m.id for m in created[3:6]]


def test_metrics_for_empty_session(db_session: Session):
    report = MealService.get_metrics(db_session, uuid.uuid4())

    assert report.total == 0
    assert report.best_sequence == []
