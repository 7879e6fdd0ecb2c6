"""Data models and schemas for the recipe suggestion flow.

Defines Pydantic models for request validation and for the structured output
requested from Gemini. All models use Pydantic v2 and are immutable once built.
Wire names are camelCase (``dietaryPreferences``, ``ingredientsNeeded``); the
snake_case attribute names are accepted on input as well.
"""

from typing import Any, List, Optional, Annotated

from pydantic import BaseModel, ConfigDict, Field, Strict, StrictStr, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


# Preference labels offered to users; free-text labels are accepted as well
DIETARY_OPTIONS = ("Vegetarian", "Vegan", "Gluten-Free", "Dairy-Free")

# Only real lists of real strings; no coercion from bytes, sets or tuples
NonBlankText = Annotated[StrictStr, Field(min_length=1)]
TextList = Annotated[List[NonBlankText], Strict()]


class SuggestRecipesInput(BaseModel):
    """Input schema for a single recipe suggestion request.

    Ingredients must be a non-empty list of non-blank strings; preferences, when
    given, a list of non-blank strings. Case-insensitive duplicates are allowed
    here; callers that want a clean list use ``normalize_ingredients`` first.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    ingredients: Annotated[
        TextList,
        Field(description="A list of ingredients the user has on hand."),
    ]
    dietary_preferences: Annotated[
        Optional[TextList],
        Field(
            None,
            description="Optional list of dietary preferences (e.g., Vegetarian, Gluten-Free) "
            "the user wants the recipes to adhere to.",
        ),
    ]

    @field_validator("ingredients")
    @classmethod
    def require_ingredients(cls, ingredients: List[str]) -> List[str]:
        """Reject an empty ingredient list with a user-facing message."""
        if not ingredients:
            raise PydanticCustomError("ingredients_empty", "Please provide at least one ingredient.")
        return ingredients

    @property
    def has_preferences(self) -> bool:
        return bool(self.dietary_preferences)


class RecipeDetail(BaseModel):
    """A single suggested recipe.

    name, description and instructions are required; everything else is optional
    and omitted from the wire form when absent.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    name: Annotated[str, Field(min_length=1, description="The name of the suggested recipe.")]
    description: Annotated[str, Field(description="A brief description of the recipe.")]
    ingredients_needed: Annotated[
        Optional[List[str]],
        Field(
            None,
            description="List of ingredients required for the recipe (including quantities if possible). "
            "This should include the provided ingredients and any additional ones needed.",
        ),
    ]
    instructions: Annotated[
        List[str],
        Field(min_length=1, description="Step-by-step instructions for preparing the recipe."),
    ]
    prep_time: Annotated[
        Optional[str], Field(None, description='Estimated preparation time (e.g., "15 minutes").')
    ]
    cook_time: Annotated[
        Optional[str], Field(None, description='Estimated cooking time (e.g., "30 minutes").')
    ]
    servings: Annotated[
        Optional[str], Field(None, description='Number of servings the recipe yields (e.g., "4 servings").')
    ]
    dietary_tags: Annotated[
        Optional[List[str]],
        Field(
            None,
            description='Tags indicating dietary suitability (e.g., ["Vegetarian", "Gluten-Free"]). '
            "Only include tags that are explicitly requested or inherently true based on standard ingredients.",
        ),
    ]

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class SuggestRecipesOutput(BaseModel):
    """Structured output of one suggestion request.

    Holds 2-3 recipes in the normal case; an empty list means the model produced
    nothing usable, which is a valid result rather than an error.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    recipes: Annotated[
        List[RecipeDetail],
        Field(
            default_factory=list,
            description="A list of 2-3 suggested recipes including name, description, ingredients needed, "
            "instructions, and optional time/servings/tags, based on the ingredients and dietary "
            "preferences provided. Prioritize diversity.",
        ),
    ]

    @classmethod
    def empty(cls) -> "SuggestRecipesOutput":
        return cls(recipes=[])

    def to_wire(self) -> dict[str, Any]:
        """Serialize as ``{"recipes": [...]}`` with camelCase keys."""
        return {"recipes": [recipe.to_wire() for recipe in self.recipes]}
