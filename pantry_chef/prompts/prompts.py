"""Prompt template for recipe suggestions.

Provides a pure factory that renders the Gemini prompt from a validated request.
The dietary preference section is only emitted when preferences were supplied.
"""

from pantry_chef.models.models import SuggestRecipesInput


PERSONA = (
    "You are an expert chef AI specialized in suggesting creative and practical recipes "
    "based on available ingredients and dietary needs."
)

OUTPUT_INSTRUCTIONS = """For each recipe, provide the following details adhering strictly to the output schema:
1.  **name:** The name of the recipe.
2.  **description:** A short, appealing description.
3.  **ingredientsNeeded:** A list of all ingredients required, including quantities if possible. Clearly indicate which ingredients are from the provided list and which ones are additional.
4.  **instructions:** A list of clear, step-by-step instructions.
5.  **prepTime:** (Optional) Estimated preparation time.
6.  **cookTime:** (Optional) Estimated cooking time.
7.  **servings:** (Optional) Estimated number of servings.
8.  **dietaryTags:** (Optional) List any relevant dietary tags (e.g., "Vegetarian", "Gluten-Free") ONLY IF they were requested in the preferences OR are inherently true for the recipe (e.g., a standard vegetable soup is often inherently vegetarian). Do not guess tags.

Format the output strictly according to the recipe schema within the recipes output schema. Ensure 'instructions' and 'ingredientsNeeded' are arrays of strings."""


def _bullet_list(items: list[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def _get_preferences_section(preferences: list[str]) -> str:
    """Generate the strict-adherence block naming every requested preference.

    Args:
        preferences: Non-empty list of dietary preference labels.

    Returns:
        str: Preference instruction section
    """
    return (
        "Important: Please ensure all suggested recipes strictly adhere to the following "
        f"dietary preferences:\n{_bullet_list(preferences)}"
    )


def get_suggest_recipes_prompt(request: SuggestRecipesInput) -> str:
    """Render the recipe suggestion prompt for a validated request.

    Same request always renders the same text. Ingredients appear one per line
    in the order supplied.

    Args:
        request: Validated suggestion request.

    Returns:
        str: Complete prompt text for the model.
    """
    sections = [
        PERSONA,
        "Given the following list of ingredients, suggest 2 to 3 distinct recipes that the user can make. "
        "Focus on variety (e.g., different cuisines, cooking methods, meal types).",
        f"Ingredients Provided:\n{_bullet_list(request.ingredients)}",
    ]
    if request.has_preferences:
        sections.append(_get_preferences_section(request.dietary_preferences))
    sections.append(OUTPUT_INSTRUCTIONS)

    return "\n\n".join(sections) + "\n"
