# sleepcircle/core/exceptions.py


class SleepCircleError(Exception):
    """Base class for all Sleep Circle errors"""


class InvalidTimeError(SleepCircleError, ValueError):
    """Raised when a wall-clock time is not a zero-padded 24-hour HH:MM string"""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid clock time {value!r}. Use HH:MM (24-hour, zero-padded)")


class InvalidDateError(SleepCircleError, ValueError):
    """Raised when a calendar date is not a valid YYYY-MM-DD string"""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid date {value!r}. Use YYYY-MM-DD")


class DuplicateRecordDateError(SleepCircleError):
    """Raised when a second record is stored for an already-touched date"""

    def __init__(self, date, existing_id):
        self.date = date
        self.existing_id = existing_id
        super().__init__(f"Date {date} already has record {existing_id}")


class RecordNotFoundError(SleepCircleError, KeyError):
    """Raised when no record exists for the requested date"""

    def __init__(self, date):
        self.date = date
        super().__init__(f"No sleep record for {date}")

    def __str__(self):
        return self.args[0]


class AuthenticationRequiredError(SleepCircleError):
    """Raised when a write is attempted without a signed-in user"""

    def __init__(self, action):
        self.action = action
        super().__init__(f"Sign in required to {action}")
