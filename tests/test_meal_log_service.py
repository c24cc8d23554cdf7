"""Tests for meal log service."""

from datetime import date, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from fitness_coach.domain.errors import InvalidMealError, MealLogNotFoundError
from fitness_coach.domain.meal_logs import MealUpdate
from tests.conftest import BASE_TIME, Harness

TODAY = BASE_TIME.date()


def _completed(calories: float) -> MealUpdate:
    return MealUpdate(calories=calories, status="completed")


def test_first_meal_creates_day_with_all_slots(harness: Harness) -> None:
    user_id = uuid4()

    entry = harness.meal_log_service.update_single_meal(
        user_id,
        2,
        BASE_TIME,
        "lunch",
        MealUpdate(
            description="Salad", calories=550, status="completed", total_calories=1800
        ),
    )

    assert set(entry.meals) == {"breakfast", "lunch", "dinner", "snack"}
    assert entry.meals["lunch"].completed_at is not None
    assert entry.meals["breakfast"].status == "pending"
    assert entry.total_calories == 1800
    assert entry.consumed_calories == 550
    assert entry.id is not None


def test_consumed_calories_track_completed_meals(harness: Harness) -> None:
    user_id = uuid4()
    service = harness.meal_log_service
    service.update_single_meal(user_id, 1, BASE_TIME, "breakfast", _completed(400))
    service.update_single_meal(
        user_id,
        1,
        BASE_TIME,
        "dinner",
        MealUpdate(calories=900, status="skipped", skip_reason="Ate out"),
    )

    entry = service.get_day(user_id, 1)
    assert entry is not None
    assert entry.consumed_calories == 400
    assert entry.meals["dinner"].skip_reason == "Ate out"

    entry = service.update_meal_status(user_id, 1, "dinner", "completed")

    assert entry.consumed_calories == 1300
    assert entry.meals["dinner"].skip_reason is None


def test_done_meal_cannot_return_to_pending(harness: Harness) -> None:
    user_id, plan = harness.user_with_plan()
    harness.complete_day(user_id, plan, 1)
    service = harness.meal_log_service

    with pytest.raises(InvalidMealError, match="back to pending"):
        service.update_meal_status(user_id, 1, "lunch", "pending")
    with pytest.raises(InvalidMealError, match="back to pending"):
        service.update_single_meal(
            user_id, 1, BASE_TIME, "dinner", MealUpdate(status="pending")
        )
    with pytest.raises(InvalidMealError):
        service.save_day(
            user_id, 1, BASE_TIME, {"snack": MealUpdate(status="pending")}
        )

    snapshot = harness.progress_service.get_day_progress(user_id, 1)
    assert snapshot.nutrition_progress.meals["lunch"].status == "completed"
    assert snapshot.overall_progress.is_day_complete is True


def test_done_meal_can_switch_between_completed_and_skipped(
    harness: Harness,
) -> None:
    user_id = uuid4()
    service = harness.meal_log_service
    service.update_single_meal(user_id, 1, BASE_TIME, "lunch", _completed(600))

    entry = service.update_meal_status(user_id, 1, "lunch", "skipped", "Too full")

    assert entry.meals["lunch"].status == "skipped"
    assert entry.consumed_calories == 0


def test_negative_calories_are_rejected(harness: Harness) -> None:
    user_id = uuid4()
    service = harness.meal_log_service

    with pytest.raises(InvalidMealError, match="negative"):
        service.update_single_meal(user_id, 1, BASE_TIME, "lunch", _completed(-500))
    with pytest.raises(InvalidMealError, match="negative"):
        service.update_single_meal(
            user_id, 1, BASE_TIME, "lunch", MealUpdate(total_calories=-1)
        )
    with pytest.raises(InvalidMealError, match="negative"):
        service.save_day(user_id, 1, BASE_TIME, {"lunch": _completed(-10)})

    assert service.get_day(user_id, 1) is None


def test_snapshot_and_meal_log_agree_on_consumed_calories(
    harness: Harness,
) -> None:
    user_id, _ = harness.user_with_plan()
    harness.log_meal(user_id, 1, "lunch", "completed")
    harness.log_meal(user_id, 1, "dinner", "skipped")

    snapshot = harness.progress_service.get_day_progress(user_id, 1)
    entry = harness.meal_log_service.get_day(user_id, 1)

    assert entry is not None
    assert snapshot.nutrition_progress.consumed_calories == entry.consumed_calories
    assert snapshot.nutrition_progress.consumed_calories == 600


def test_skip_reason_only_kept_for_skipped(harness: Harness) -> None:
    entry = harness.meal_log_service.update_single_meal(
        uuid4(),
        1,
        BASE_TIME,
        "snack",
        MealUpdate(calories=100, status="completed", skip_reason="not hungry"),
    )

    assert entry.meals["snack"].skip_reason is None


def test_existing_total_calories_kept_when_not_supplied(harness: Harness) -> None:
    user_id = uuid4()
    service = harness.meal_log_service
    service.update_single_meal(
        user_id, 1, BASE_TIME, "lunch", MealUpdate(total_calories=2100)
    )

    entry = service.update_single_meal(
        user_id, 1, BASE_TIME, "dinner", _completed(700)
    )

    assert entry.total_calories == 2100


def test_save_day_merges_into_existing_slots(harness: Harness) -> None:
    user_id = uuid4()
    service = harness.meal_log_service
    service.update_single_meal(
        user_id,
        1,
        BASE_TIME,
        "lunch",
        MealUpdate(description="Soup", calories=450, status="completed"),
    )

    entry = service.save_day(
        user_id,
        1,
        BASE_TIME,
        {
            "lunch": MealUpdate(calories=500),
            "breakfast": MealUpdate(
                description="Oats", calories=350, status="completed"
            ),
        },
        total_calories=2200,
    )

    assert entry.meals["lunch"].description == "Soup"
    assert entry.meals["lunch"].status == "completed"
    assert entry.meals["breakfast"].completed_at is not None
    assert entry.consumed_calories == 850
    assert entry.total_calories == 2200


def test_status_update_requires_existing_day(harness: Harness) -> None:
    with pytest.raises(MealLogNotFoundError):
        harness.meal_log_service.update_meal_status(uuid4(), 1, "lunch", "completed")


@pytest.mark.parametrize(
    ("meal_type", "status"), [("brunch", "completed"), ("lunch", "eaten")]
)
def test_invalid_meal_type_or_status(
    harness: Harness, meal_type: str, status: str
) -> None:
    with pytest.raises(InvalidMealError):
        harness.meal_log_service.update_single_meal(
            uuid4(), 1, BASE_TIME, meal_type, MealUpdate(status=status)
        )


def test_get_day_returns_none_when_missing(harness: Harness) -> None:
    assert harness.meal_log_service.get_day(uuid4(), 3) is None


def _log_days(harness: Harness, user_id: UUID, dates: list[datetime]) -> None:
    for day, logged_at in enumerate(dates, start=1):
        harness.meal_log_service.update_single_meal(
            user_id,
            day,
            logged_at,
            "lunch",
            MealUpdate(calories=500, status="completed", total_calories=2000),
        )


def test_range_and_periods_filter_by_date(harness: Harness) -> None:
    user_id = uuid4()
    _log_days(
        harness,
        user_id,
        [BASE_TIME, BASE_TIME - timedelta(days=5), BASE_TIME - timedelta(days=20)],
    )
    service = harness.meal_log_service

    today = service.get_period(user_id, "today", today=TODAY)
    week = service.get_period(user_id, "week", today=TODAY)
    month = service.get_period(user_id, "month", today=TODAY)

    assert [entry.day for entry in today] == [1]
    assert [entry.day for entry in week] == [2, 1]
    assert [entry.day for entry in month] == [3, 2, 1]
    with pytest.raises(InvalidMealError, match="Invalid period"):
        service.get_period(user_id, "year", today=TODAY)
    with pytest.raises(InvalidMealError, match="before endDate"):
        service.list_range(user_id, BASE_TIME, BASE_TIME - timedelta(days=1))


def test_six_month_period_averages_per_month(harness: Harness) -> None:
    user_id = uuid4()
    _log_days(
        harness,
        user_id,
        [BASE_TIME, BASE_TIME - timedelta(days=20), BASE_TIME - timedelta(days=400)],
    )

    months = harness.meal_log_service.get_period(user_id, "6months", today=TODAY)

    assert [(item.year, item.month) for item in months] == [(2024, 2), (2024, 3)]
    assert months[0].days_count == 1
    assert months[1].average_consumed_calories == 500
    assert months[1].completion_rate == 25


def test_summary_counts_meals_and_calories(harness: Harness) -> None:
    user_id = uuid4()
    _log_days(harness, user_id, [BASE_TIME, BASE_TIME - timedelta(days=1)])
    harness.meal_log_service.update_single_meal(
        user_id,
        1,
        BASE_TIME,
        "dinner",
        MealUpdate(status="skipped", skip_reason="late"),
    )

    summary = harness.meal_log_service.summary(user_id, "week", today=TODAY)

    assert summary.total_days == 2
    assert summary.total_target_calories == 4000
    assert summary.total_consumed_calories == 1000
    assert summary.average_consumed_calories == 500
    assert summary.completion_rate == 25
    assert (summary.meals_completed, summary.meals_skipped) == (2, 1)
    assert summary.meals_pending == 5
    assert [day.day for day in summary.daily_data] == [2, 1]
    assert summary.daily_data[0].completion_percentage == 25
    with pytest.raises(InvalidMealError):
        harness.meal_log_service.summary(user_id, "today", today=TODAY)


def test_month_calendar_marks_logged_dates(harness: Harness) -> None:
    user_id = uuid4()
    _log_days(harness, user_id, [BASE_TIME])

    days = harness.meal_log_service.month_calendar(user_id, 2024, 2)
    march = harness.meal_log_service.month_calendar(user_id, 2024, 3)

    assert len(days) == 29
    assert not any(day.has_data for day in days)
    assert march[0].date == date(2024, 3, 1)
    assert march[0].has_data is True
    assert march[0].consumed_calories == 500
    assert march[1].meals is None


@pytest.mark.parametrize(("year", "month"), [(1999, 1), (2024, 13), (2024, 0)])
def test_month_calendar_rejects_bad_dates(
    harness: Harness, year: int, month: int
) -> None:
    with pytest.raises(InvalidMealError):
        harness.meal_log_service.month_calendar(uuid4(), year, month)
