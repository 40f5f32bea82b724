"""
Search results - Typed result items and display-ready grouping.

The matcher returns a JSON object keyed by category. Each category has its
own item shape:

  template                → name, role, tags, description
  vault, content          → name, generatedContent
  initial-prompt          → name, initialPrompt
  refined-prompt          → name, refinedPrompt

Every item may carry a score in [0, 1]. Per-category behaviour (which field
describes the item, which badges it shows) lives in lookup tables keyed by
category so that adding a category means adding one row, not a branch.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Callable, Optional

from loguru import logger

from promptdeck.search.prefixes import PREFIXES, TEMPLATE


@dataclass(frozen=True)
class ResultItem:
    """Fields shared by every category."""
    name: str
    score: Optional[float] = None


@dataclass(frozen=True)
class TemplateResult(ResultItem):
    role: str = ""
    tags: tuple[str, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class GeneratedContentResult(ResultItem):
    """Vault entries and generated content share one shape."""
    generated_content: str = ""


@dataclass(frozen=True)
class InitialPromptResult(ResultItem):
    initial_prompt: str = ""


@dataclass(frozen=True)
class RefinedPromptResult(ResultItem):
    refined_prompt: str = ""


@dataclass(frozen=True)
class SearchResponse:
    """Categorised matches from one search. Immutable once parsed."""
    categories: dict[str, tuple[ResultItem, ...]] = field(default_factory=dict)

    def items(self, prefix: str) -> tuple[ResultItem, ...]:
        return self.categories.get(prefix, ())


@dataclass(frozen=True)
class Grouping:
    """
    Ordered (category, items) pairs ready for display.

    An empty grouping means a search ran and found nothing; "no search yet"
    is represented by the absence of a response, not by this object.
    """
    groups: tuple[tuple[str, tuple[ResultItem, ...]], ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.groups

    def categories(self) -> list[str]:
        return [prefix for prefix, _ in self.groups]


def _score_from(raw: dict) -> Optional[float]:
    score = raw.get("score")
    # bool is an int subclass but never a score
    if isinstance(score, bool) or not isinstance(score, Real):
        return None
    return float(score)


def _text(raw: dict, key: str) -> str:
    value = raw.get(key)
    return value if isinstance(value, str) else ""


def _template_from(raw: dict) -> TemplateResult:
    tags = raw.get("tags") or ()
    if not isinstance(tags, (list, tuple)):
        tags = ()
    return TemplateResult(
        name=_text(raw, "name"),
        score=_score_from(raw),
        role=_text(raw, "role"),
        tags=tuple(str(tag) for tag in tags),
        description=_text(raw, "description"),
    )


def _generated_content_from(raw: dict) -> GeneratedContentResult:
    return GeneratedContentResult(
        name=_text(raw, "name"),
        score=_score_from(raw),
        generated_content=_text(raw, "generatedContent"),
    )


def _initial_prompt_from(raw: dict) -> InitialPromptResult:
    return InitialPromptResult(
        name=_text(raw, "name"),
        score=_score_from(raw),
        initial_prompt=_text(raw, "initialPrompt"),
    )


def _refined_prompt_from(raw: dict) -> RefinedPromptResult:
    return RefinedPromptResult(
        name=_text(raw, "name"),
        score=_score_from(raw),
        refined_prompt=_text(raw, "refinedPrompt"),
    )


# Category → constructor from the matcher's JSON item
ITEM_PARSERS: dict[str, Callable[[dict], ResultItem]] = {
    "template": _template_from,
    "vault": _generated_content_from,
    "initial-prompt": _initial_prompt_from,
    "refined-prompt": _refined_prompt_from,
    "content": _generated_content_from,
}

# Category → field shown under the item name
DESCRIBERS: dict[str, Callable[[ResultItem], str]] = {
    "template": lambda item: item.description,
    "vault": lambda item: item.generated_content,
    "initial-prompt": lambda item: item.initial_prompt,
    "refined-prompt": lambda item: item.refined_prompt,
    "content": lambda item: item.generated_content,
}


def parse_response(payload: dict) -> SearchResponse:
    """
    Build a SearchResponse from the matcher's decoded JSON body.

    Unknown categories are dropped. Items that are not JSON objects are
    skipped.

    Raises:
        TypeError: If payload is not a mapping
    """
    if not isinstance(payload, dict):
        raise TypeError(f"Expected a JSON object, got {type(payload).__name__}")

    categories = {}
    for key, raw_items in payload.items():
        parser = ITEM_PARSERS.get(key)
        if parser is None:
            logger.debug(f"Dropping unknown result category '{key}'")
            continue
        if not isinstance(raw_items, list):
            logger.warning(f"Category '{key}' is not a list, ignoring it")
            continue

        items = []
        for raw in raw_items:
            if not isinstance(raw, dict):
                logger.warning(f"Skipping malformed '{key}' result: {raw!r}")
                continue
            items.append(parser(raw))
        categories[key] = tuple(items)

    return SearchResponse(categories=categories)


def classify(response: SearchResponse) -> Grouping:
    """Group non-empty categories in vocabulary order."""
    return Grouping(groups=tuple(
        (prefix, response.items(prefix))
        for prefix in PREFIXES
        if response.items(prefix)
    ))


def describe(prefix: str, item: ResultItem) -> str:
    """Return the category-specific description text, or "" if unknown."""
    describer = DESCRIBERS.get(prefix)
    if describer is None:
        return ""
    return describer(item)


def role_badge(prefix: str, item: ResultItem) -> Optional[str]:
    if prefix != TEMPLATE:
        return None
    return item.role


def tag_badges(prefix: str, item: ResultItem) -> list[str]:
    if prefix != TEMPLATE:
        return []
    return list(item.tags)


def format_score(score: float) -> str:
    """
    Render a [0, 1] score as a percentage with three decimals: 0.93521 → "93.521%".

    Rounds the shortest decimal form of the percentage half away from zero,
    so 0.500625 → "50.063%" rather than the binary float's "50.062%".
    """
    percent = Decimal(repr(score * 100)).quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)
    return f"{percent}%"


def score_badge(item: ResultItem) -> Optional[str]:
    if item.score is None:
        return None
    return f"Matching Score: {format_score(item.score)}"
