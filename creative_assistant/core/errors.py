"""
Error hierarchy for the Creative Assistant.

Everything except InputValidationError is raised inside the core and is
converted by the session layer into a failed operation state.
"""


class CreativeAssistantError(Exception):
    """Base class for recoverable, per-operation failures."""


class InputValidationError(ValueError):
    """A required form field is missing or malformed.

    Raised at the form boundary, before any AI service call is made.
    """


class EncodingError(CreativeAssistantError):
    """A file could not be read or converted for upload."""


class ServiceCallFailure(CreativeAssistantError):
    """The AI service call failed (transport error or error response)."""


class MalformedPayload(CreativeAssistantError):
    """The response is not parseable as structured data at all."""


class SchemaViolation(CreativeAssistantError):
    """The response parsed but required fields are missing or the key set is wrong."""


class OutOfRangeScore(SchemaViolation):
    """A score parsed correctly but falls outside the 1-10 scale."""
    
    def __init__(self, key: str, value: int):
        self.key = key
        self.value = value
        super().__init__(f"Score for '{key}' is {value}, expected 1-10")
