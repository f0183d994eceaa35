"""
Domain errors raised by the assignment, scheduling and scoring services.

Each error kind carries a stable ``code`` so the route layer can map it to a
status code and callers can show specific guidance. Retrying with the same
input always fails the same way.
"""


class MatchdayError(Exception):
    """Base class for domain/precondition failures"""

    code = "domain_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict:
        return {"code": self.code, "message": self.message}


class InsufficientPool(MatchdayError):
    code = "insufficient_pool"


class InsufficientParticipants(MatchdayError):
    code = "not_enough_players"


class InsufficientTeams(MatchdayError):
    code = "not_enough_teams"


class UnsupportedFormat(MatchdayError):
    code = "unsupported_format"


class InvalidAssignment(MatchdayError):
    code = "invalid_assignment"


class InvalidScore(MatchdayError):
    code = "invalid_score"
