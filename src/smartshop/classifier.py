"""Turn free text into categorized shopping items.

The remote path asks an OpenAI-compatible chat model to split the text,
expand recipe names into ingredients and assign supermarket categories. When
no API key is configured, or the call fails in any way, the text is split
locally on commas and newlines instead. The two fallbacks are tagged with
different categories ("General" when unconfigured, "Uncategorized" after a
failure) and different outcomes.
"""

import json
import logging
import re
from typing import Any

from openai import AsyncOpenAI
from pydantic import ValidationError

from .config import DEFAULT_MODEL, ClassifierConfig
from .models import (
    GENERAL_CATEGORY,
    UNCATEGORIZED,
    ClassificationOutcome,
    ClassificationResult,
    ClassifiedItem,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a helpful shopping assistant. Analyze the shopping list input you are given.
It might be a raw text list, a recipe name, or a sentence describing what to buy.

Extract the individual items and assign each one a short, standard supermarket category
(e.g. "Produce", "Dairy", "Meat", "Pantry", "Household", "Beverages").
If the input is a recipe or dish name (e.g. "Lasagna"), list the ingredients needed for it.

Respond ONLY with JSON of the form:
{"items": [{"name": "...", "category": "..."}, ...]}"""

USER_PROMPT_TEMPLATE = 'Input: "{text}"'


class ClassifierResponseError(Exception):
    """Raised when the remote model returns something that is not an item list."""


def split_items(text: str, separators: str = ",\n") -> list[str]:
    """Split text on any of the separator characters, trimming and dropping blanks."""
    pattern = "[" + re.escape(separators) + "]"
    return [token.strip() for token in re.split(pattern, text) if token.strip()]


def fallback_items(text: str, category: str) -> list[ClassifiedItem]:
    """Local split on commas and newlines, every item tagged with ``category``."""
    return [ClassifiedItem(name=name, category=category) for name in split_items(text)]


def parse_response(content: str | None) -> list[ClassifiedItem]:
    """Parse the model output into items.

    An empty body means no items. Records missing a name or category are
    dropped.

    Raises:
        ClassifierResponseError: If the body is not JSON or not an item list
    """
    if content is None or not content.strip():
        return []

    text = content.strip()
    # Handle markdown code fences
    if text.startswith("```"):
        text = text.strip("`")
        if text[:4].lower() == "json":
            text = text[4:]

    try:
        payload: Any = json.loads(text)
    except json.JSONDecodeError as e:
        raise ClassifierResponseError(f"Response is not valid JSON: {e}") from e

    if isinstance(payload, dict):
        payload = payload.get("items")
    if not isinstance(payload, list):
        raise ClassifierResponseError("Response does not contain an item list")

    items: list[ClassifiedItem] = []
    for record in payload:
        if not isinstance(record, dict):
            logger.debug("Dropping non-object record: %r", record)
            continue
        name = record.get("name")
        category = record.get("category")
        try:
            items.append(
                ClassifiedItem(
                    name=name.strip() if isinstance(name, str) else name,
                    category=category.strip() if isinstance(category, str) else category,
                )
            )
        except ValidationError:
            logger.debug("Dropping invalid record: %r", record)
    return items


class TextClassifier:
    """Classifies free text into (name, category) pairs."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        base_url: str | None = None,
        timeout: float | None = None,
        client: Any | None = None,
    ):
        """Initialize classifier.

        Args:
            api_key: API key for the remote service. None means unconfigured.
            model: Chat model name
            base_url: Optional OpenAI-compatible endpoint
            timeout: Optional request timeout in seconds
            client: Pre-built async client (takes precedence over api_key)
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self._client = client

    @classmethod
    def from_config(cls, config: ClassifierConfig) -> "TextClassifier":
        return cls(
            api_key=config.api_key,
            model=config.model,
            base_url=config.base_url,
            timeout=config.timeout,
        )

    @property
    def is_configured(self) -> bool:
        """Whether the remote capability is available."""
        return self._client is not None or bool(self.api_key)

    def _get_client(self) -> Any:
        if self._client is None:
            kwargs: dict[str, Any] = {"api_key": self.api_key}
            if self.base_url:
                kwargs["base_url"] = self.base_url
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            self._client = AsyncOpenAI(**kwargs)
        return self._client

    async def classify(self, raw_text: str) -> ClassificationResult:
        """Classify free text. Never raises.

        Returns:
            ClassificationResult whose outcome tells which path was taken
        """
        if not self.is_configured:
            logger.info("No API key configured, splitting input locally")
            return ClassificationResult(
                items=fallback_items(raw_text, GENERAL_CATEGORY),
                outcome=ClassificationOutcome.NOT_CONFIGURED,
            )

        try:
            content = await self._request(raw_text)
            items = parse_response(content)
        except Exception as e:
            logger.error("Remote classification failed, splitting input locally: %s", e)
            return ClassificationResult(
                items=fallback_items(raw_text, UNCATEGORIZED),
                outcome=ClassificationOutcome.REMOTE_FAILED,
            )

        logger.debug("Remote classification produced %d item(s)", len(items))
        return ClassificationResult(items=items, outcome=ClassificationOutcome.REMOTE)

    async def _request(self, raw_text: str) -> str | None:
        client = self._get_client()
        response = await client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": USER_PROMPT_TEMPLATE.format(text=raw_text)},
            ],
            response_format={"type": "json_object"},
            temperature=0.2,
        )
        if not response.choices:
            return None
        return response.choices[0].message.content
