"""
Exceptions raised inside the recommendation pipeline.

None of these cross the tool boundary: `tool.recommend` turns every one of
them into a structured JSON error payload.
"""


class EquilibriumError(Exception):
    """Base exception for recommendation pipeline errors."""
    pass


class InvalidPromptError(EquilibriumError):
    """Raised when the prompt is missing or blank."""
    pass


class CatalogError(EquilibriumError):
    """Raised when the video catalog cannot be reached or returns garbage."""
    pass
