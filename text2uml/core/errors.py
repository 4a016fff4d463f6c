"""
Exception hierarchy for the text-to-UML pipeline.

Every error is terminal for the current run. Messages name the offending
condition and quote at most EXCERPT_LENGTH characters of upstream text.
"""

from text2uml.config import EXCERPT_LENGTH


def excerpt(text: str, length: int = EXCERPT_LENGTH) -> str:
    """Bounded, single-line preview of untrusted upstream text."""
    if not text:
        return ""
    preview = " ".join(text[:length].split())
    return preview + ("..." if len(text) > length else "")


class DiagramPipelineError(Exception):
    """Base class for all pipeline failures."""


class ExtractError(DiagramPipelineError):
    pass


class NoRecognizedBlockError(ExtractError):
    def __init__(self, raw_text: str, what: str = "PlantUML"):
        self.excerpt = excerpt(raw_text)
        super().__init__(
            f"No recognizable {what} block found in generator output: '{self.excerpt}'"
        )


class ParseError(DiagramPipelineError):
    pass


class MalformedPayloadError(ParseError):
    def __init__(self, reason: str, payload: str = ""):
        self.excerpt = excerpt(payload)
        message = f"Malformed design payload: {reason}"
        if self.excerpt:
            message += f" (payload starts with: '{self.excerpt}')"
        super().__init__(message)


class EmptyCandidatesError(ParseError):
    pass


class MissingRequiredFieldError(ParseError):
    def __init__(self, field: str, location: str):
        self.field = field
        self.location = location
        super().__init__(f"{location} is missing required field '{field}'")


class UnknownRelationshipTypeError(ParseError):
    def __init__(self, value: str, location: str):
        self.value = value
        self.location = location
        super().__init__(f"{location} has unknown relationship type '{excerpt(str(value), 50)}'")


class DuplicateClassNameError(ParseError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Class name '{excerpt(name, 50)}' is declared more than once")


class UpstreamError(DiagramPipelineError):
    """The text-generation collaborator failed or returned nothing."""


class RenderError(DiagramPipelineError):
    """The rendering backend failed."""


class LayoutEngineMissingError(RenderError):
    """The rendering backend lacks its Graphviz layout engine."""
