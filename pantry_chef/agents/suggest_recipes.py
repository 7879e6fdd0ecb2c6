"""Recipe suggestion flow: validate → render prompt → call Gemini → parse.

Public entry points:
- validate_suggestion_request(): Schema check, reports every violation at once
- suggest_recipes(): Async flow used by callers (UI, query.py)
- suggest_recipes_sync(): Blocking wrapper around suggest_recipes()

Failure semantics:
- Malformed request: RequestValidationError, raised before any model call
- Gemini call fails (network, auth, quota, rejected schema): InvocationError, no retry
- Gemini answers with nothing usable: empty SuggestRecipesOutput, not an error

Recipes in the model output are validated one by one. A recipe missing a required
field is dropped and the remaining ones are returned; at most MAX_RECIPES are kept.
"""

import asyncio
import json
import re
import time
import uuid
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, Iterable, Optional

import httpx
from google import genai
from google.genai import errors, types
from pydantic import BaseModel, ValidationError

from pantry_chef.models.models import RecipeDetail, SuggestRecipesInput, SuggestRecipesOutput
from pantry_chef.prompts.prompts import get_suggest_recipes_prompt
from pantry_chef.utils.config import config
from pantry_chef.utils.errors import InvocationError, RequestValidationError
from pantry_chef.utils.logger import logger


# Takes the rendered prompt, returns the raw model payload (JSON text, dict, model) or None
ModelCaller = Callable[[str], Awaitable[Optional[Any]]]

_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


# ============================================================================
# Input validation
# ============================================================================


def _format_violation(error: dict) -> str:
    location = ".".join(str(part) for part in error["loc"]) or "request"
    return f"{location}: {error['msg']}"


def validate_suggestion_request(data: Any) -> SuggestRecipesInput:
    """Validate a candidate request against the SuggestRecipesInput schema.

    Accepts a dict (camelCase or snake_case keys), any other mapping, or an
    already-built SuggestRecipesInput. Has no side effects, so validating the
    same object twice yields the same verdict.

    Args:
        data: Candidate request object.

    Returns:
        Validated SuggestRecipesInput.

    Raises:
        RequestValidationError: Listing every violated constraint, not just the first.
    """
    if isinstance(data, Mapping) and not isinstance(data, dict):
        data = dict(data)

    try:
        return SuggestRecipesInput.model_validate(data)
    except ValidationError as e:
        violations = [_format_violation(error) for error in e.errors()]
        raise RequestValidationError(violations) from e


def normalize_ingredients(items: Iterable[str]) -> list[str]:
    """Clean a raw ingredient list for submission.

    Strips whitespace, drops blank entries and case-insensitive duplicates.
    The first spelling of each ingredient wins and order is preserved.

    Example:
        >>> normalize_ingredients(["Rice", " rice ", "", "Chicken Breast"])
        ['Rice', 'Chicken Breast']
    """
    seen: set[str] = set()
    normalized = []
    for item in items:
        ingredient = item.strip()
        key = ingredient.lower()
        if not ingredient or key in seen:
            continue
        seen.add(key)
        normalized.append(ingredient)
    return normalized


# ============================================================================
# Output parsing
# ============================================================================


def _load_json_text(text: str) -> Any:
    """Parse JSON text leniently, tolerating markdown fences and surrounding prose.

    Returns:
        Parsed JSON value, or None when no JSON object can be recovered.
    """
    text = text.strip()
    fenced = _FENCE_PATTERN.match(text)
    if fenced:
        text = fenced.group(1)

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        logger.debug("Direct JSON parse failed, trying object extraction")

    json_match = re.search(r"\{.*\}", text, re.DOTALL)
    if not json_match:
        return None
    try:
        return json.loads(json_match.group())
    except json.JSONDecodeError:
        return None


def parse_model_output(raw: Any) -> SuggestRecipesOutput:
    """Coerce a raw model payload into a SuggestRecipesOutput.

    Args:
        raw: JSON text, a dict with a ``recipes`` list, a bare list of recipes,
            a pydantic model, or None.

    Returns:
        SuggestRecipesOutput holding every recipe that passed validation (at most
        MAX_RECIPES). Empty when the payload is absent or unusable.
    """
    if isinstance(raw, BaseModel):
        raw = raw.model_dump(by_alias=True)
    elif isinstance(raw, (str, bytes)):
        raw = _load_json_text(raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw)

    if isinstance(raw, dict):
        raw = raw.get("recipes")

    if not isinstance(raw, list):
        if raw is not None:
            logger.warning(f"Unexpected model output shape ({type(raw).__name__}), returning no recipes")
        return SuggestRecipesOutput.empty()

    recipes = []
    for index, item in enumerate(raw):
        try:
            recipes.append(RecipeDetail.model_validate(item))
        except ValidationError as e:
            missing = ", ".join(_format_violation(error) for error in e.errors())
            logger.warning(f"Dropping recipe #{index + 1} from model output: {missing}")

    if len(recipes) > config.MAX_RECIPES:
        logger.debug(f"Model returned {len(recipes)} recipes, keeping first {config.MAX_RECIPES}")
        recipes = recipes[: config.MAX_RECIPES]

    return SuggestRecipesOutput(recipes=recipes)


# ============================================================================
# Model collaborator
# ============================================================================


async def call_gemini(prompt: str) -> Optional[str]:
    """Send the rendered prompt to Gemini constrained to the output schema.

    Single attempt, no retries, no timeout beyond the SDK default. The sync
    client runs in a worker thread so the caller's event loop stays free.

    Args:
        prompt: Rendered prompt text.

    Returns:
        Raw JSON text from the model, or None if the model produced no text.

    Raises:
        InvocationError: If Gemini is not configured, unreachable or rejects the request.
    """
    try:
        config.validate()
    except ValueError as e:
        raise InvocationError(f"Gemini is not configured: {e}") from e

    client = genai.Client(api_key=config.GEMINI_API_KEY)
    generation_config = types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=SuggestRecipesOutput,
        temperature=config.TEMPERATURE,
        max_output_tokens=config.MAX_OUTPUT_TOKENS,
    )

    try:
        response = await asyncio.to_thread(
            client.models.generate_content,
            model=config.GEMINI_MODEL,
            contents=prompt,
            config=generation_config,
        )
    except errors.APIError as e:
        raise InvocationError(f"Gemini request failed ({e.code}): {e.message}") from e
    except httpx.HTTPError as e:
        raise InvocationError(f"Could not reach Gemini: {e}") from e
    except ValueError as e:
        # Raised by the SDK before sending, e.g. missing model name or unconvertible schema
        raise InvocationError(f"Gemini rejected the request: {e}") from e

    return response.text


# ============================================================================
# Flow
# ============================================================================


async def suggest_recipes(request: Any, model_caller: Optional[ModelCaller] = None) -> SuggestRecipesOutput:
    """Suggest 2-3 recipes for the given ingredients and dietary preferences.

    Args:
        request: Candidate request ({"ingredients": [...], "dietaryPreferences": [...]})
            or a SuggestRecipesInput.
        model_caller: Optional replacement for the Gemini call (defaults to call_gemini).

    Returns:
        SuggestRecipesOutput, possibly with zero recipes.

    Raises:
        RequestValidationError: Request failed validation; the model is never called.
        InvocationError: The model call failed.
    """
    validated = validate_suggestion_request(request)
    prompt = get_suggest_recipes_prompt(validated)
    caller = model_caller or call_gemini

    log_extra = {"request_id": uuid.uuid4().hex[:8], "model": config.GEMINI_MODEL}
    logger.info(
        f"Suggesting recipes for {len(validated.ingredients)} ingredient(s), "
        f"{len(validated.dietary_preferences or [])} preference(s)",
        extra=log_extra,
    )

    start_time = time.time()
    try:
        raw_output = await caller(prompt)
    except InvocationError as e:
        logger.error(f"Recipe suggestion failed: {e}", extra=log_extra)
        raise

    output = parse_model_output(raw_output)
    elapsed = time.time() - start_time
    if output.recipes:
        logger.info(f"Received recipes in {elapsed:.2f}s", extra={**log_extra, "recipe_count": len(output.recipes)})
    else:
        logger.warning(f"Model returned no usable recipes after {elapsed:.2f}s", extra=log_extra)
    return output


def suggest_recipes_sync(request: Any, model_caller: Optional[ModelCaller] = None) -> SuggestRecipesOutput:
    """Blocking wrapper around suggest_recipes() for callers without an event loop."""
    return asyncio.run(suggest_recipes(request, model_caller=model_caller))
