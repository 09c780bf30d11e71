"""
Exception classes for the bracket engine.

Every error carries a machine readable ``code`` and can be turned into a
dict for JSON responses. Nothing in the engine catches these; they go
straight back to the caller.
"""
from typing import List, Optional


class BracketError(Exception):
    """Base exception for all bracket engine errors."""

    code = 'BRACKET_ERROR'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """Convert exception to dictionary for JSON responses."""
        return {
            'error': self.code,
            'message': self.message
        }


class ConfigurationError(BracketError):
    """Raised for an unsupported team count or an unusable setup request."""

    code = 'CONFIGURATION_ERROR'


class TopologyInvalidError(ConfigurationError):
    """
    Raised when a topology fails validation.

    ``violations`` lists every broken invariant, not just the first one found.
    """

    code = 'TOPOLOGY_INVALID'

    def __init__(self, violations: List[str]):
        self.violations = list(violations)
        summary = '; '.join(self.violations)
        super().__init__(f"Topology is invalid ({len(self.violations)} violations): {summary}")

    def to_dict(self) -> dict:
        result = super().to_dict()
        result['violations'] = self.violations
        return result


class SeedCountMismatchError(BracketError):
    """Raised when the seed list length does not match the topology size."""

    code = 'SEED_COUNT_MISMATCH'

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Topology needs {expected} teams, got {actual}")
        self.expected = expected
        self.actual = actual

    def to_dict(self) -> dict:
        result = super().to_dict()
        result['expected'] = self.expected
        result['actual'] = self.actual
        return result


class InvalidResultError(BracketError):
    """
    Raised when a result (or an undo) is requested for a match in the wrong state.

    ``reason`` names the violated precondition:
    unknown_match, bye_match, not_ready, participants_mismatch, not_finished.
    """

    code = 'INVALID_RESULT'

    def __init__(self, match_id, reason: str, message: Optional[str] = None):
        super().__init__(message or f"Match {match_id}: {reason.replace('_', ' ')}")
        self.match_id = match_id
        self.reason = reason

    def to_dict(self) -> dict:
        result = super().to_dict()
        result['match_id'] = self.match_id
        result['reason'] = self.reason
        return result


class UnsafeUndoError(BracketError):
    """Raised when undoing a match would retract a team already used by a finished match."""

    code = 'UNSAFE_UNDO'

    def __init__(self, match_id: int, blocking_match_id: int):
        super().__init__(
            f"Cannot undo match {match_id}: match {blocking_match_id} "
            f"has already been played with its outcome"
        )
        self.match_id = match_id
        self.blocking_match_id = blocking_match_id

    def to_dict(self) -> dict:
        result = super().to_dict()
        result['match_id'] = self.match_id
        result['blocking_match_id'] = self.blocking_match_id
        return result
