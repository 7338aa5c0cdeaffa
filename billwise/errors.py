class ScheduleError(ValueError):
    """Base class for recurrence and due-date errors."""


class InvalidTimezone(ScheduleError):
    def __init__(self, timezone_id: str) -> None:
        super().__init__(f"Unknown timezone: {timezone_id!r}")
        self.timezone_id = timezone_id


class InvalidDate(ScheduleError):
    field = "date"

    def __init__(self, value: object, reason: str = "") -> None:
        message = f"Invalid {self.field}: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.value = value


class InvalidDueDate(InvalidDate):
    field = "due date"


class InvalidStartDate(InvalidDate):
    field = "start date"


class InvalidEndDate(InvalidDate):
    field = "end date"


class RangeTooLarge(ScheduleError):
    def __init__(self, estimated: int, limit: int) -> None:
        super().__init__(
            f"Requested range spans about {estimated} occurrences (limit {limit}); narrow the date range"
        )
        self.estimated = estimated
        self.limit = limit
