"""
Engine Errors - Precondition violations raised by the engine.

Every violation is raised at the point of detection. The engine never
clamps, ignores, or guesses intent. Each error carries a stable code
that the reducer envelope and the service layer pass through.
"""


class YutError(Exception):
    """Base class for all engine errors."""

    code = "YUT_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidStateError(YutError):
    """Action invoked in a phase or situation where it is not legal."""

    code = "INVALID_STATE"


class InvalidReferenceError(YutError):
    """Unknown stack id, node id, artifact id, or out-of-range index."""

    code = "INVALID_REFERENCE"


class InvalidInputError(YutError):
    """Malformed input: unmapped back count, bad target kind, bad branch."""

    code = "INVALID_INPUT"


class ResourceExhaustedError(YutError):
    """Requested resource is used up (e.g. no piece left at HOME)."""

    code = "RESOURCE_EXHAUSTED"
