"""Workout create/update: defaults, reference checks, duplicate positions, replace-all."""

import pytest
from sqlalchemy import delete

from fitness_tracker.core.errors import ConflictError, NotFoundError, ValidationError
from fitness_tracker.models import Exercise, Workout, WorkoutExercise, WorkoutLog
from fitness_tracker.schemas.log import WorkoutLogCreate
from fitness_tracker.schemas.workout import WorkoutCreate, WorkoutExerciseIn, WorkoutRead, WorkoutUpdate
from fitness_tracker.services import logs as log_service
from fitness_tracker.services import references
from fitness_tracker.services import workouts as workout_service

pytestmark = pytest.mark.unit


def _entries(*items: dict) -> list[WorkoutExerciseIn]:
    return [WorkoutExerciseIn(**item) for item in items]


def _shape(workout: Workout) -> set[tuple[int, int, int]]:
    return {(e.exercise_id, e.order, e.sets) for e in workout.workout_exercises}


# =============================================================================
# create_workout
# =============================================================================


class TestCreateWorkout:
    async def test_single_exercise(self, session, user_id, exercise_ids):
        squat = exercise_ids[0]
        workout = await workout_service.create_workout(
            session,
            user_id,
            WorkoutCreate(name="Leg Day", exercises=_entries({"exercise_id": squat, "sets": 3, "order": 1})),
        )

        assert workout.user_id == user_id
        assert workout.name == "Leg Day"
        assert len(workout.workout_exercises) == 1
        entry = workout.workout_exercises[0]
        assert entry.sets == 3
        assert entry.order == 1
        assert entry.exercise.id == squat
        assert entry.exercise.name == "Squat"

    async def test_defaults_and_trimming(self, session, user_id, exercise_ids):
        workout = await workout_service.create_workout(
            session,
            user_id,
            WorkoutCreate(
                name="  Push  ",
                description="  heavy day ",
                exercises=_entries({"exercise_id": exercise_ids[1], "repetitions": " 8-10 "}),
            ),
        )

        assert workout.name == "Push"
        assert workout.description == "heavy day"
        entry = workout.workout_exercises[0]
        assert entry.sets == 1
        assert entry.order == 1
        assert entry.repetitions == "8-10"
        assert entry.weight is None

    async def test_description_omitted_stays_none(self, session, user_id, exercise_ids):
        workout = await workout_service.create_workout(
            session, user_id, WorkoutCreate(name="Pull", exercises=_entries({"exercise_id": exercise_ids[2]}))
        )
        assert workout.description is None

    async def test_entries_keep_request_order(self, session, user_id, exercise_ids):
        squat, bench, deadlift = exercise_ids
        workout = await workout_service.create_workout(
            session,
            user_id,
            WorkoutCreate(
                name="Full Body",
                exercises=_entries(
                    {"exercise_id": deadlift, "order": 3},
                    {"exercise_id": squat, "order": 1},
                    {"exercise_id": bench, "order": 2},
                ),
            ),
        )

        assert [e.exercise_id for e in workout.workout_exercises] == [deadlift, squat, bench]
        read = WorkoutRead.from_workout(workout)
        assert [e.order for e in read.workout_exercises] == [1, 2, 3]

    async def test_same_exercise_at_different_positions_is_allowed(self, session, user_id, exercise_ids):
        squat, bench, _ = exercise_ids
        workout = await workout_service.create_workout(
            session,
            user_id,
            WorkoutCreate(
                name="Squat Twice",
                exercises=_entries(
                    {"exercise_id": squat, "order": 1},
                    {"exercise_id": bench, "order": 2},
                    {"exercise_id": squat, "order": 3},
                ),
            ),
        )
        assert len(workout.workout_exercises) == 3

    async def test_missing_exercise_creates_nothing(self, session, user_id, exercise_ids, count_rows):
        with pytest.raises(NotFoundError) as exc_info:
            await workout_service.create_workout(
                session,
                user_id,
                WorkoutCreate(
                    name="Leg Day",
                    exercises=_entries({"exercise_id": exercise_ids[0]}, {"exercise_id": 999}),
                ),
            )

        assert exc_info.value.reason == "exercise_not_found"
        assert await count_rows(Workout) == 0
        assert await count_rows(WorkoutExercise) == 0
        assert await workout_service.list_user_workouts(session, user_id) == []

    async def test_empty_exercise_list_rejected(self, session, user_id):
        with pytest.raises(ValidationError, match="At least one exercise is required"):
            await workout_service.create_workout(session, user_id, WorkoutCreate(name="Leg Day", exercises=[]))

    @pytest.mark.parametrize("name", ["", "   "])
    async def test_blank_name_rejected(self, session, user_id, exercise_ids, name):
        with pytest.raises(ValidationError, match="Workout name is required"):
            await workout_service.create_workout(
                session, user_id, WorkoutCreate(name=name, exercises=_entries({"exercise_id": exercise_ids[0]}))
            )

    async def test_unknown_owner(self, session, exercise_ids, count_rows):
        with pytest.raises(NotFoundError) as exc_info:
            await workout_service.create_workout(
                session, 4242, WorkoutCreate(name="Leg Day", exercises=_entries({"exercise_id": exercise_ids[0]}))
            )
        assert exc_info.value.entity == "User"
        assert await count_rows(Workout) == 0

    async def test_duplicate_exercise_and_order_conflicts(self, session, user_id, exercise_ids, count_rows):
        squat = exercise_ids[0]
        with pytest.raises(ConflictError) as exc_info:
            await workout_service.create_workout(
                session,
                user_id,
                WorkoutCreate(
                    name="Leg Day",
                    # Second entry resolves to order=1 through the default
                    exercises=_entries({"exercise_id": squat, "order": 1}, {"exercise_id": squat}),
                ),
            )

        assert exc_info.value.reason == "duplicate_workout_exercise"
        assert await count_rows(Workout) == 0
        assert await count_rows(WorkoutExercise) == 0

    async def test_exercise_deleted_after_check_creates_nothing(
        self, session, user_id, exercise_ids, monkeypatch, count_rows
    ):
        squat = exercise_ids[0]

        async def check_then_lose_exercise(db, ids):
            await references.ensure_exercises_exist(db, ids)
            await db.execute(delete(Exercise).where(Exercise.id == squat))

        monkeypatch.setattr(workout_service, "ensure_exercises_exist", check_then_lose_exercise)

        with pytest.raises(NotFoundError) as exc_info:
            await workout_service.create_workout(
                session, user_id, WorkoutCreate(name="Leg Day", exercises=_entries({"exercise_id": squat}))
            )

        assert exc_info.value.reason == "exercise_not_found"
        assert exc_info.value.message == "One or more exercises do not exist"
        assert await count_rows(Workout) == 0
        assert await count_rows(Exercise, Exercise.id == squat) == 1


# =============================================================================
# update_workout
# =============================================================================


@pytest.fixture
async def workout_id(session, user_id, exercise_ids) -> int:
    squat, bench, _ = exercise_ids
    workout = await workout_service.create_workout(
        session,
        user_id,
        WorkoutCreate(
            name="Leg Day",
            description="legs",
            exercises=_entries(
                {"exercise_id": squat, "sets": 5, "order": 1},
                {"exercise_id": bench, "sets": 3, "order": 2},
            ),
        ),
    )
    return workout.id


class TestUpdateWorkout:
    async def test_scalar_patch_keeps_entries(self, session, workout_id, exercise_ids):
        squat, bench, _ = exercise_ids
        workout = await workout_service.update_workout(session, workout_id, WorkoutUpdate(name="  Legs  "))

        assert workout.name == "Legs"
        assert workout.description == "legs"
        assert _shape(workout) == {(squat, 1, 5), (bench, 2, 3)}

    async def test_description_can_be_cleared(self, session, workout_id):
        workout = await workout_service.update_workout(session, workout_id, WorkoutUpdate(description=None))
        assert workout.description is None
        assert workout.name == "Leg Day"

    async def test_exercises_replaced_entirely(self, session, workout_id, exercise_ids, count_rows):
        squat, _, deadlift = exercise_ids
        workout = await workout_service.update_workout(
            session,
            workout_id,
            WorkoutUpdate(
                exercises=_entries(
                    {"exercise_id": deadlift, "sets": 1, "order": 1},
                    {"exercise_id": squat, "sets": 2, "order": 2},
                    {"exercise_id": squat, "sets": 4, "order": 3},
                )
            ),
        )

        assert _shape(workout) == {(deadlift, 1, 1), (squat, 2, 2), (squat, 3, 4)}
        assert await count_rows(WorkoutExercise, WorkoutExercise.workout_id == workout_id) == 3
        ids = [e.id for e in workout.workout_exercises]
        assert len(ids) == len(set(ids))

    async def test_replacement_may_reuse_existing_positions(self, session, workout_id, exercise_ids):
        squat, bench, _ = exercise_ids
        workout = await workout_service.update_workout(
            session,
            workout_id,
            WorkoutUpdate(exercises=_entries({"exercise_id": squat, "sets": 8, "order": 1})),
        )
        assert _shape(workout) == {(squat, 1, 8)}

    async def test_replacement_removes_logs_of_old_entries(self, session, user_id, workout_id, count_rows):
        workout = await workout_service.get_workout(session, workout_id)
        entry_id = workout.workout_exercises[0].id
        exercise_id = workout.workout_exercises[1].exercise_id
        await log_service.create_log(
            session, user_id, workout_id, WorkoutLogCreate(workout_exercise_id=entry_id, set_number=1, reps_completed=5)
        )
        assert await count_rows(WorkoutLog) == 1

        await workout_service.update_workout(
            session, workout_id, WorkoutUpdate(exercises=_entries({"exercise_id": exercise_id}))
        )
        assert await count_rows(WorkoutLog) == 0

    async def test_missing_exercise_leaves_entries_untouched(self, session, workout_id, exercise_ids):
        squat, bench, _ = exercise_ids
        with pytest.raises(NotFoundError):
            await workout_service.update_workout(
                session,
                workout_id,
                WorkoutUpdate(name="Renamed", exercises=_entries({"exercise_id": 999})),
            )

        workout = await workout_service.get_workout(session, workout_id)
        assert workout.name == "Leg Day"
        assert _shape(workout) == {(squat, 1, 5), (bench, 2, 3)}

    async def test_duplicate_positions_conflict_and_leave_entries_untouched(self, session, workout_id, exercise_ids):
        squat, bench, _ = exercise_ids
        with pytest.raises(ConflictError):
            await workout_service.update_workout(
                session,
                workout_id,
                WorkoutUpdate(exercises=_entries({"exercise_id": squat, "order": 1}, {"exercise_id": squat, "order": 1})),
            )

        workout = await workout_service.get_workout(session, workout_id)
        assert _shape(workout) == {(squat, 1, 5), (bench, 2, 3)}

    async def test_failure_after_purge_restores_old_entries(
        self, session, workout_id, exercise_ids, monkeypatch, count_rows
    ):
        squat, bench, deadlift = exercise_ids
        real_purge = workout_service.purge_workout_entries

        async def purge_then_lose_exercise(db, target_id):
            await real_purge(db, target_id)
            await db.execute(delete(Exercise).where(Exercise.id == deadlift))

        monkeypatch.setattr(workout_service, "purge_workout_entries", purge_then_lose_exercise)

        with pytest.raises(NotFoundError) as exc_info:
            await workout_service.update_workout(
                session,
                workout_id,
                WorkoutUpdate(name="Renamed", exercises=_entries({"exercise_id": deadlift, "sets": 2})),
            )

        assert exc_info.value.reason == "exercise_not_found"
        assert await count_rows(WorkoutExercise, WorkoutExercise.workout_id == workout_id) == 2
        assert await count_rows(Exercise, Exercise.id == deadlift) == 1
        workout = await workout_service.get_workout(session, workout_id)
        assert workout.name == "Leg Day"
        assert _shape(workout) == {(squat, 1, 5), (bench, 2, 3)}

    async def test_empty_exercise_list_rejected(self, session, workout_id):
        with pytest.raises(ValidationError, match="At least one exercise is required"):
            await workout_service.update_workout(session, workout_id, WorkoutUpdate(exercises=[]))

    async def test_blank_name_rejected(self, session, workout_id):
        with pytest.raises(ValidationError):
            await workout_service.update_workout(session, workout_id, WorkoutUpdate(name="  "))

    async def test_unknown_workout(self, session):
        with pytest.raises(NotFoundError) as exc_info:
            await workout_service.update_workout(session, 777, WorkoutUpdate(name="x"))
        assert exc_info.value.reason == "workout_not_found"


# =============================================================================
# reads
# =============================================================================


class TestReads:
    async def test_get_unknown_workout(self, session):
        with pytest.raises(NotFoundError):
            await workout_service.get_workout(session, 1)

    async def test_list_for_unknown_user(self, session):
        with pytest.raises(NotFoundError) as exc_info:
            await workout_service.list_user_workouts(session, 99)
        assert exc_info.value.entity == "User"

    async def test_list_returns_only_owned_workouts(self, session, user_id, workout_id):
        workouts = await workout_service.list_user_workouts(session, user_id)
        assert [w.id for w in workouts] == [workout_id]
        assert len(workouts[0].workout_exercises) == 2
