"""Error taxonomy for recipe suggestions.

- RequestValidationError: the request failed schema checks (raised before any model call)
- InvocationError: the Gemini call itself failed (network, auth, quota, schema rejection)

An empty model result is not an error; it is returned as a response with zero recipes.
"""

from typing import List


class RecipeServiceError(Exception):
    """Base class for errors surfaced to the caller of suggest_recipes()."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RequestValidationError(RecipeServiceError):
    """Raised when a suggestion request violates one or more schema constraints.

    Attributes:
        violations: Every violated constraint as "<field>: <message>", in report order.
    """

    def __init__(self, violations: List[str]) -> None:
        self.violations = list(violations)
        super().__init__(f"Invalid input: {', '.join(self.violations)}")


class InvocationError(RecipeServiceError):
    """Raised when the model collaborator call fails. Never retried."""
