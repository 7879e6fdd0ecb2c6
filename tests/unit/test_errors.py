"""Unit tests for the error taxonomy."""

from pantry_chef.utils.errors import InvocationError, RecipeServiceError, RequestValidationError


class TestRequestValidationError:
    def test_message_joins_all_violations(self):
        error = RequestValidationError(["ingredients: Field required", "dietaryPreferences: Input should be a valid list"])
        assert error.message == (
            "Invalid input: ingredients: Field required, dietaryPreferences: Input should be a valid list"
        )
        assert str(error) == error.message
        assert len(error.violations) == 2

    def test_is_service_error(self):
        assert isinstance(RequestValidationError(["x: y"]), RecipeServiceError)


class TestInvocationError:
    def test_carries_message(self):
        error = InvocationError("Could not reach Gemini: timeout")
        assert error.message == "Could not reach Gemini: timeout"
        assert isinstance(error, RecipeServiceError)
        assert not isinstance(error, RequestValidationError)
