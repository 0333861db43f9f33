"""Error types raised by the scheduling core and the review service."""


class LexisError(Exception):
    """Base class for all Lexis errors."""


class InvalidQuality(LexisError, ValueError):
    """A grade outside {again, hard, good, easy} reached the quality mapper."""

    def __init__(self, grade: object):
        self.grade = grade
        super().__init__(f"Invalid grade {grade!r}; expected one of again, hard, good, easy")


class NoCardsAvailable(LexisError):
    """No record qualifies for a study session. Callers treat this as 'nothing to study'."""


class RecordNotFound(LexisError, KeyError):
    """The storage collaborator has no record for the requested user and id."""

    def __init__(self, user_id: str, record_id: str):
        self.user_id = user_id
        self.record_id = record_id
        super().__init__(f"No review record {record_id!r} for user {user_id!r}")

    def __str__(self) -> str:
        return self.args[0]
