#!/usr/bin/env python3
"""Ad hoc query runner for Pantry Chef recipe suggestions.

Run a suggestion request directly from the terminal.

Usage:
    python query.py "chicken breast, rice"
    python query.py --diet Vegan "tofu, broccoli"
    python query.py --diet Vegetarian --diet Gluten-Free "eggs, spinach, potatoes"
    python query.py --debug "chicken breast, rice"  # Show full JSON response

Features:
- Comma-separated ingredients, cleaned and de-duplicated case-insensitively
- Repeatable --diet flag for dietary preferences
- Markdown rendering of recipes with rich
- Debug mode to display the camelCase JSON payload
"""

import sys

from rich.console import Console
from rich.markdown import Markdown

from pantry_chef.agents.suggest_recipes import normalize_ingredients, suggest_recipes_sync
from pantry_chef.models.models import DIETARY_OPTIONS, SuggestRecipesOutput
from pantry_chef.utils.errors import InvocationError, RequestValidationError
from pantry_chef.utils.logger import logger

console = Console()

NO_RECIPES_MESSAGE = "No recipes found matching your ingredients and preferences."

USAGE = 'Usage: python query.py [--debug] [--diet LABEL]... "<ingredient>, <ingredient>, ..."'


def format_recipes_markdown(output: SuggestRecipesOutput) -> str:
    """Render suggested recipes as markdown.

    Args:
        output: Parsed suggestion output.

    Returns:
        Markdown text, or the "no recipes" message when the output is empty.
    """
    if not output.recipes:
        return NO_RECIPES_MESSAGE

    blocks = []
    for index, recipe in enumerate(output.recipes, start=1):
        lines = [f"## {index}. {recipe.name}", "", recipe.description]

        if recipe.dietary_tags:
            lines += ["", " · ".join(f"`{tag}`" for tag in recipe.dietary_tags)]

        facts = [
            f"**{label}:** {value}"
            for label, value in (("Prep", recipe.prep_time), ("Cook", recipe.cook_time), ("Serves", recipe.servings))
            if value
        ]
        if facts:
            lines += ["", " | ".join(facts)]

        if recipe.ingredients_needed:
            lines += ["", "### Ingredients"]
            lines += [f"- {ingredient}" for ingredient in recipe.ingredients_needed]

        lines += ["", "### Instructions"]
        lines += [f"{step_no}. {step}" for step_no, step in enumerate(recipe.instructions, start=1)]
        blocks.append("\n".join(lines))

    return "\n\n".join(blocks)


def parse_args(argv: list[str]) -> tuple[list[str], list[str], bool]:
    """Parse runner flags.

    Returns:
        Tuple of (ingredients, dietary_preferences, debug).

    Raises:
        ValueError: On unknown flags or a --diet without a label.
    """
    debug = False
    preferences: list[str] = []
    position = 0

    while position < len(argv) and argv[position].startswith("--"):
        flag = argv[position]
        if flag == "--debug":
            debug = True
            position += 1
        elif flag == "--diet":
            position += 1
            if position >= len(argv):
                raise ValueError("--diet flag requires a label")
            preferences.append(argv[position])
            position += 1
        else:
            raise ValueError(f"Unknown flag: {flag}")

    ingredients = normalize_ingredients(" ".join(argv[position:]).split(","))
    return ingredients, preferences, debug


def run_query(ingredients: list[str], preferences: list[str], debug: bool = False) -> int:
    """Execute a single suggestion request and print the recipes.

    Returns:
        Process exit code (0 on success, including an empty result).
    """
    unknown = [label for label in preferences if label not in DIETARY_OPTIONS]
    if unknown:
        logger.warning(f"Using free-text dietary preference(s): {', '.join(unknown)}")

    request = {"ingredients": ingredients, "dietaryPreferences": preferences or None}
    try:
        output = suggest_recipes_sync(request)
    except RequestValidationError as e:
        console.print(f"[red]✗ {e.message}[/red]")
        return 1
    except InvocationError as e:
        console.print(f"[red]✗ An error occurred: {e.message}. Check the AI configuration or try refining your input.[/red]")
        return 1

    console.print()
    if debug:
        console.print("[bold cyan]Debug Mode: Full Response[/bold cyan]")
        console.print_json(data=output.to_wire())
        console.print()

    if output.recipes:
        console.print(Markdown(format_recipes_markdown(output)))
    else:
        console.print(f"[yellow]{NO_RECIPES_MESSAGE}[/yellow]")
    return 0


def main(argv: list[str]) -> int:
    if not argv:
        print(USAGE)
        print("")
        print("Examples:")
        print('  python query.py "chicken breast, rice"')
        print('  python query.py --diet Vegan "tofu, broccoli"')
        print(f"Suggested dietary preferences: {', '.join(DIETARY_OPTIONS)}")
        return 1

    try:
        ingredients, preferences, debug = parse_args(argv)
    except ValueError as e:
        print(f"Error: {e}")
        print(USAGE)
        return 1

    try:
        return run_query(ingredients, preferences, debug=debug)
    except KeyboardInterrupt:
        logger.info("Query interrupted by user.")
        return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
