"""Tests for snapshot derivation functions."""

from datetime import timedelta
from uuid import uuid4

from fitness_coach.domain.meal_logs import (
    MealLogEntry,
    MealSlotLog,
    compute_consumed_calories,
    empty_meals,
)
from fitness_coach.domain.progress import (
    build_exercise_progress,
    build_nutrition_progress,
    build_snapshot,
    fold_snapshots,
    latest_logs_by_exercise,
    percentage,
    round_half_up,
)
from tests.conftest import BASE_TIME, make_log, make_plan_day


def _snapshot(plan_day, logs, meal_log=None):  # type: ignore[no-untyped-def]
    return build_snapshot(
        user_id=uuid4(),
        fitness_plan_id=uuid4(),
        plan_day=plan_day,
        exercise_logs=logs,
        meal_log=meal_log,
        date=BASE_TIME,
        now=BASE_TIME,
    )


def test_round_half_up_rounds_halves_away_from_even() -> None:
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(66.666) == 67
    assert round_half_up(42.4) == 42


def test_percentage_of_empty_whole_is_zero() -> None:
    assert percentage(3, 0) == 0
    assert percentage(3, 7) == 43


def test_mixed_exercise_statuses_match_documented_example() -> None:
    user_id = uuid4()
    plan_day = make_plan_day(2, exercises=3)
    logs = [
        make_log(user_id, 2, 1, "completed"),
        make_log(user_id, 2, 2, "skipped"),
    ]

    snapshot = _snapshot(plan_day, logs)

    progress = snapshot.exercise_progress
    assert (progress.total, progress.completed, progress.skipped) == (3, 1, 1)
    assert progress.pending == 1
    assert progress.completion_percentage == 67
    assert snapshot.overall_progress.is_exercise_complete is False
    assert progress.exercises[1].skip_reason == "sore"
    assert progress.exercises[2].status == "pending"


def test_rest_day_is_exercise_complete_regardless_of_logs() -> None:
    user_id = uuid4()
    plan_day = make_plan_day(3, day_type="rest")

    snapshot = _snapshot(plan_day, [make_log(user_id, 3, 1, "skipped")])

    assert snapshot.day_type == "rest"
    assert snapshot.exercise_progress.total == 0
    assert snapshot.exercise_progress.completion_percentage == 100
    assert snapshot.overall_progress.is_exercise_complete is True
    assert snapshot.overall_progress.completion_percentage == 50


def test_skipping_every_exercise_counts_as_done() -> None:
    user_id = uuid4()
    plan_day = make_plan_day(1, exercises=4)
    logs = [make_log(user_id, 1, number, "skipped") for number in range(1, 5)]

    progress = build_exercise_progress(plan_day, logs)

    assert progress.pending == 0
    assert progress.completion_percentage == 100
    snapshot = _snapshot(plan_day, logs)
    assert snapshot.overall_progress.is_exercise_complete is True


def test_latest_log_wins_per_exercise_number() -> None:
    user_id = uuid4()
    early = make_log(user_id, 1, 1, "skipped")
    late = make_log(user_id, 1, 1, "completed", date=BASE_TIME + timedelta(hours=2))
    same_date_later = make_log(
        user_id, 1, 2, "skipped", created_at=BASE_TIME + timedelta(seconds=5)
    )
    same_date_earlier = make_log(user_id, 1, 2, "completed")

    latest = latest_logs_by_exercise([late, early, same_date_later, same_date_earlier])

    assert latest[1].id == late.id
    assert latest[2].id == same_date_later.id


def test_nutrition_progress_always_has_four_slots() -> None:
    user_id = uuid4()
    plan_day = make_plan_day(1)
    meals = empty_meals()
    meals["lunch"] = MealSlotLog(status="completed", calories=650)
    meals["snack"] = MealSlotLog(status="skipped", skip_reason="busy")
    meal_log = MealLogEntry(
        user_id=user_id,
        day=1,
        date=BASE_TIME,
        total_calories=2000,
        meals=meals,
        consumed_calories=compute_consumed_calories(meals),
    )

    progress = build_nutrition_progress(plan_day, meal_log)

    assert set(progress.meals) == {"breakfast", "lunch", "dinner", "snack"}
    assert progress.completed + progress.skipped + progress.pending == 4
    assert progress.completion_percentage == 50
    assert progress.consumed_calories == 650
    assert progress.target_calories == 2000
    assert progress.calories_percentage == 33
    assert progress.meals["lunch"].target_calories == 600


def test_missing_meal_log_leaves_meals_pending() -> None:
    progress = build_nutrition_progress(make_plan_day(1), None)

    assert progress.pending == 4
    assert progress.consumed_calories == 0
    assert progress.meals["dinner"].target_description == "dinner plate"


def test_consumed_calories_ignore_pending_and_skipped() -> None:
    meals = empty_meals()
    meals["breakfast"] = MealSlotLog(status="completed", calories=300)
    meals["dinner"] = MealSlotLog(status="skipped", calories=800)
    meals["snack"] = MealSlotLog(status="pending", calories=150)

    assert compute_consumed_calories(meals) == 300
    assert compute_consumed_calories(empty_meals()) == 0


def test_stored_negative_calories_never_reduce_consumed() -> None:
    meals = empty_meals()
    meals["lunch"] = MealSlotLog(status="completed", calories=-500)
    meals["dinner"] = MealSlotLog(status="completed", calories=700)
    meal_log = MealLogEntry(
        user_id=uuid4(),
        day=1,
        date=BASE_TIME,
        total_calories=2000,
        meals=meals,
        consumed_calories=-500,
    )

    progress = build_nutrition_progress(make_plan_day(1), meal_log)

    assert progress.consumed_calories == 700
    assert progress.calories_percentage == 35
    assert compute_consumed_calories({"lunch": meals["lunch"]}) == 0


def test_fold_snapshots_uses_done_based_rates() -> None:
    user_id = uuid4()
    workout = _snapshot(
        make_plan_day(1, exercises=2),
        [make_log(user_id, 1, 1, "completed"), make_log(user_id, 1, 2, "skipped")],
    )
    partial = _snapshot(make_plan_day(2, exercises=2), [])

    exercise_stats, nutrition_stats = fold_snapshots([workout, partial])

    assert exercise_stats.total == 4
    assert exercise_stats.done == 2
    assert exercise_stats.completion_rate == 50
    assert nutrition_stats.total_meals == 8
    assert nutrition_stats.pending == 8
    assert nutrition_stats.total_target_calories == 4000
    assert nutrition_stats.avg_daily_calories == 0


def test_fold_of_nothing_is_all_zero() -> None:
    exercise_stats, nutrition_stats = fold_snapshots([])

    assert exercise_stats.completion_rate == 0
    assert nutrition_stats.calorie_completion_rate == 0
