"""
Exception classes raised by the fixture and standings engine.
"""


class FixtureError(ValueError):
    """
    Base exception for invalid input handed to the engine
    """
    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        self.code = code or "FIXTURE_ERROR"

    def to_dict(self):
        """Convert exception to dictionary for JSON responses"""
        return {
            'error': self.code,
            'message': self.message
        }


class InvalidTeamsError(FixtureError):
    """
    Raised when a roster cannot produce a fixture list
    """
    def __init__(self, message: str):
        super().__init__(message, "INVALID_TEAMS")


class InvalidScoreError(FixtureError):
    """
    Raised when a reported score is not a non-negative integer
    """
    def __init__(self, message: str, field: str = None):
        super().__init__(message, "INVALID_SCORE")
        self.field = field

    def to_dict(self):
        result = super().to_dict()
        if self.field:
            result['field'] = self.field
        return result


class ZoneValidationError(FixtureError):
    """
    Raised when standings zones are out of range or overlap
    """
    def __init__(self, message: str):
        super().__init__(message, "ZONE_VALIDATION")


class UnknownTournamentTypeError(FixtureError):
    def __init__(self, tournament_type):
        super().__init__(f"Unknown tournament type: {tournament_type!r}", "UNKNOWN_TYPE")
        self.tournament_type = tournament_type
