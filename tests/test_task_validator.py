"""Tests for TaskValidator rule checks."""

import uuid
from datetime import timedelta, timezone, datetime

import pytest

from task_manager.core.errors import (
    DueDateInPastError,
    DueDateTooSoonError,
    DuplicateTitleError,
    InvalidIdentifierError,
)
from task_manager.models.tasks import Task
from task_manager.persistence.store import InMemoryTaskStore
from task_manager.services.task_validator import TaskValidator


class TestCheckIdValidity:
    """Test identifier parsing."""

    def test_returns_uuid_for_valid_string(self, validator: TaskValidator):
        """A well-formed UUID string parses to the same UUID."""
        task_id = uuid.uuid4()

        assert validator.check_id_validity(str(task_id)) == task_id

    @pytest.mark.parametrize("raw_id", [None, "", "   "])
    def test_rejects_missing_or_blank_id(self, validator: TaskValidator, raw_id):
        """Missing and blank ids are rejected as empty."""
        with pytest.raises(InvalidIdentifierError, match="Task ID must not be empty"):
            validator.check_id_validity(raw_id)

    @pytest.mark.parametrize(
        "raw_id",
        [
            "966534f9.2def.4407.85b2.9fbd0f799e6a",
            "not-a-uuid",
            "12345",
            "966534f92def440785b29fbd0f799e6a",
            "----966534f92def440785b29fbd0f799e6a",
            "{966534f9-2def-4407-85b2-9fbd0f799e6a}",
            "urn:uuid:966534f9-2def-4407-85b2-9fbd0f799e6a",
            " 966534f9-2def-4407-85b2-9fbd0f799e6a",
        ],
    )
    def test_rejects_malformed_id(self, validator: TaskValidator, raw_id: str):
        """Anything other than the hyphenated 8-4-4-4-12 form is rejected."""
        with pytest.raises(InvalidIdentifierError, match="Task ID must be a UUID") as exc_info:
            validator.check_id_validity(raw_id)

        assert exc_info.value.field == "id"

    def test_accepts_uppercase_hex(self, validator: TaskValidator):
        """Hex digits are case-insensitive."""
        raw_id = "966534F9-2DEF-4407-85B2-9FBD0F799E6A"

        assert validator.check_id_validity(raw_id) == uuid.UUID(raw_id)


class TestCheckTitleValidity:
    """Test title uniqueness checks."""

    def _save(self, store: InMemoryTaskStore, title: str) -> Task:
        return store.save(Task(title=title, due_date=datetime(2030, 1, 1, tzinfo=timezone.utc)))

    def test_unused_title_passes(self, validator: TaskValidator):
        """A title nobody uses is accepted for new tasks."""
        validator.check_title_validity("Fresh title", None)

    def test_duplicate_title_rejected_for_new_task(
        self, validator: TaskValidator, memory_store: InMemoryTaskStore
    ):
        """A new task may not reuse an existing title."""
        self._save(memory_store, "Buy milk")

        with pytest.raises(DuplicateTitleError, match="Task title must be unique"):
            validator.check_title_validity("Buy milk", None)

    def test_task_may_keep_its_own_title(
        self, validator: TaskValidator, memory_store: InMemoryTaskStore
    ):
        """Excluding the owner's id lets a task resubmit its current title."""
        task = self._save(memory_store, "Buy milk")

        validator.check_title_validity("Buy milk", task.id)

    def test_duplicate_title_rejected_for_other_task(
        self, validator: TaskValidator, memory_store: InMemoryTaskStore
    ):
        """Another task's title is still taken when updating."""
        self._save(memory_store, "Buy milk")
        other = self._save(memory_store, "Buy bread")

        with pytest.raises(DuplicateTitleError):
            validator.check_title_validity("Buy milk", other.id)

    def test_title_match_is_case_sensitive(
        self, validator: TaskValidator, memory_store: InMemoryTaskStore
    ):
        """Titles differing only in case do not collide."""
        self._save(memory_store, "Buy milk")

        validator.check_title_validity("buy milk", None)


class TestCheckDueDateValidity:
    """Test the minimum due date lead time."""

    def test_exactly_twelve_hours_passes(self, validator: TaskValidator, fixed_now: datetime):
        """A due date exactly twelve hours ahead is accepted."""
        validator.check_due_date_validity(fixed_now + timedelta(hours=12))

    def test_just_under_twelve_hours_fails(self, validator: TaskValidator, fixed_now: datetime):
        """Whole-hour truncation makes 11h59m59s count as eleven hours."""
        with pytest.raises(DueDateTooSoonError, match="at least 12 hours in the future"):
            validator.check_due_date_validity(fixed_now + timedelta(hours=11, minutes=59, seconds=59))

    def test_past_due_date_fails(self, validator: TaskValidator, fixed_now: datetime):
        """Due dates in the past are rejected."""
        with pytest.raises(DueDateTooSoonError):
            validator.check_due_date_validity(fixed_now - timedelta(days=1))

    def test_far_future_passes(self, validator: TaskValidator, fixed_now: datetime):
        """Due dates well beyond the lead time are accepted."""
        validator.check_due_date_validity(fixed_now + timedelta(days=30))

    def test_naive_due_date_treated_as_utc(self, validator: TaskValidator, fixed_now: datetime):
        """Naive datetimes are interpreted as UTC."""
        naive = (fixed_now + timedelta(hours=13)).replace(tzinfo=None)

        validator.check_due_date_validity(naive)

    def test_offset_due_date_compared_in_utc(self, validator: TaskValidator, fixed_now: datetime):
        """An aware datetime in another zone is compared by its instant."""
        plus_two = timezone(timedelta(hours=2))
        # 11 hours ahead in UTC, though the wall clock reads 13 hours ahead
        due = (fixed_now + timedelta(hours=11)).astimezone(plus_two)

        with pytest.raises(DueDateTooSoonError):
            validator.check_due_date_validity(due)

    def test_custom_lead_hours(self, memory_store: InMemoryTaskStore, fixed_now: datetime):
        """The minimum lead is configurable."""
        validator = TaskValidator(memory_store, clock=lambda: fixed_now, min_lead_hours=1)

        validator.check_due_date_validity(fixed_now + timedelta(hours=1))
        with pytest.raises(DueDateTooSoonError, match="at least 1 hours"):
            validator.check_due_date_validity(fixed_now + timedelta(minutes=59))

    def test_zero_lead_truncates_toward_zero(
        self, memory_store: InMemoryTaskStore, fixed_now: datetime
    ):
        """With no lead, a due date under an hour in the past still counts as zero hours."""
        validator = TaskValidator(memory_store, clock=lambda: fixed_now, min_lead_hours=0)

        validator.check_due_date_validity(fixed_now - timedelta(minutes=30))
        validator.check_due_date_validity(fixed_now - timedelta(minutes=59, seconds=59))
        with pytest.raises(DueDateTooSoonError, match="at least 0 hours"):
            validator.check_due_date_validity(fixed_now - timedelta(hours=1, minutes=30))

    def test_partial_seconds_are_floored(
        self, memory_store: InMemoryTaskStore, fixed_now: datetime
    ):
        """Seconds are floored before hours, so 59m59.5s past reaches a full hour."""
        validator = TaskValidator(memory_store, clock=lambda: fixed_now, min_lead_hours=0)

        with pytest.raises(DueDateTooSoonError):
            validator.check_due_date_validity(
                fixed_now - timedelta(minutes=59, seconds=59, milliseconds=500)
            )


class TestCheckDueDateInFuture:
    """Test the not-in-the-past check used on update."""

    def test_future_passes(self, validator: TaskValidator, fixed_now: datetime):
        """One second ahead of the clock is enough."""
        validator.check_due_date_in_future(fixed_now + timedelta(seconds=1))

    @pytest.mark.parametrize("offset", [timedelta(0), timedelta(seconds=-1), timedelta(days=-3)])
    def test_present_or_past_fails(
        self, validator: TaskValidator, fixed_now: datetime, offset: timedelta
    ):
        """The current instant and anything before it are rejected."""
        with pytest.raises(DueDateInPastError, match="must not be in the past or present"):
            validator.check_due_date_in_future(fixed_now + offset)

    def test_uses_injected_clock(self, memory_store: InMemoryTaskStore):
        """The check follows the validator's clock, not the wall clock."""
        clock_now = datetime(2020, 1, 1, tzinfo=timezone.utc)
        validator = TaskValidator(memory_store, clock=lambda: clock_now)

        validator.check_due_date_in_future(datetime(2020, 1, 2, tzinfo=timezone.utc))
        with pytest.raises(DueDateInPastError):
            validator.check_due_date_in_future(datetime(2019, 12, 31, tzinfo=timezone.utc))

    def test_naive_due_date_treated_as_utc(self, validator: TaskValidator, fixed_now: datetime):
        """Naive datetimes are interpreted as UTC."""
        with pytest.raises(DueDateInPastError):
            validator.check_due_date_in_future(fixed_now.replace(tzinfo=None))
