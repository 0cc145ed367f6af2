"""Auto-populate service: LLM-drafted listing and blog copy.

Listing flow: local title checks, LLM title validation, LLM research (free
text), LLM conversion to the listing JSON. Blog flow skips the validation
step. Provider failures are mapped to HTTP-meaningful status codes.
"""

from __future__ import annotations

import json
import logging
import re

import openai
from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError

from src.config import settings
from src.exceptions import BadRequestException, ContentGenerationException
from src.modules.content.constants import (
    BLOG_SLUG_MAX_LENGTH,
    MAX_TOPIC_LENGTH,
    MIN_TITLE_WORDS,
    MIN_TOPIC_WORDS,
    RESEARCH_TEMPERATURE,
    STRUCTURE_TEMPERATURE,
    TITLE_YEAR_PATTERN,
    VALIDATION_TEMPERATURE,
)
from src.modules.content.prompts import (
    AIRCRAFT_RESEARCH_PROMPT,
    AIRCRAFT_STRUCTURE_PROMPT,
    BLOG_RESEARCH_PROMPT,
    BLOG_STRUCTURE_PROMPT,
    TITLE_VALIDATION_PROMPT,
)
from src.modules.content.schemas import (
    AircraftAutoPopulateResponse,
    AircraftDraft,
    BlogAutoPopulateResponse,
    BlogDraft,
    TitleValidation,
    TokenUsage,
)

logger = logging.getLogger(__name__)


def normalize_blog_slug(slug: str) -> str:
    slug = slug.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug[:BLOG_SLUG_MAX_LENGTH].strip("-")


def check_listing_title(title: str) -> None:
    """Cheap checks before spending tokens. Raises BadRequestException."""
    if not TITLE_YEAR_PATTERN.search(title):
        raise BadRequestException("Please include the year of the aircraft in the title")
    if len(title.split()) < MIN_TITLE_WORDS:
        raise BadRequestException(
            "Please provide more details: year, make, model, and condition notes are required"
        )


def check_blog_topic(topic: str) -> None:
    if len(topic.split()) < MIN_TOPIC_WORDS:
        raise BadRequestException("Please provide a more specific topic (at least 2 words)")
    if len(topic) > MAX_TOPIC_LENGTH:
        raise BadRequestException("Topic is too long. Please keep it under 200 characters.")


class ContentGenerationService:
    def __init__(self, client: AsyncOpenAI | None = None) -> None:
        self.client = client or AsyncOpenAI(
            api_key=settings.openai_api_key,
            timeout=settings.openai_timeout_seconds,
            max_retries=0,
        )
        self.model = settings.openai_model

    # ------------------------------------------------------------------
    # Provider call
    # ------------------------------------------------------------------

    async def _complete(
        self, prompt: str, *, json_mode: bool, temperature: float
    ) -> tuple[str, TokenUsage]:
        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                **kwargs,
            )
        except openai.RateLimitError as exc:
            logger.warning("OpenAI rate limited: %s", exc)
            raise ContentGenerationException(
                "Service temporarily unavailable. Please try again in a few minutes.", 429
            ) from exc
        except openai.AuthenticationError as exc:
            logger.error("OpenAI authentication failed: %s", exc)
            raise ContentGenerationException("Authentication error. Please contact support.", 401) from exc
        except openai.APITimeoutError as exc:
            logger.warning("OpenAI request timed out")
            raise ContentGenerationException("Request timed out. Please try again.", 408) from exc
        except openai.APIConnectionError as exc:
            logger.warning("OpenAI connection error: %s", exc)
            raise ContentGenerationException(
                "Network error. Please check your connection and try again.", 503
            ) from exc
        except openai.APIError as exc:
            logger.error("OpenAI request failed: %s", exc)
            raise ContentGenerationException("Failed to generate content", 502) from exc

        content = response.choices[0].message.content or ""
        usage = TokenUsage()
        if response.usage is not None:
            usage = TokenUsage(
                prompt_tokens=response.usage.prompt_tokens,
                completion_tokens=response.usage.completion_tokens,
                total_tokens=response.usage.total_tokens,
            )
        return content, usage

    async def _complete_json(
        self, prompt: str, schema: type[BaseModel], temperature: float
    ) -> tuple[BaseModel, TokenUsage]:
        content, usage = await self._complete(prompt, json_mode=True, temperature=temperature)
        try:
            return schema.model_validate(json.loads(content)), usage
        except (json.JSONDecodeError, ValidationError) as exc:
            logger.warning("Unparseable %s reply: %s", schema.__name__, exc)
            raise ContentGenerationException("Invalid response from AI service", 502) from exc

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    async def validate_title(self, title: str) -> tuple[TitleValidation, TokenUsage]:
        return await self._complete_json(
            TITLE_VALIDATION_PROMPT.format(title=title), TitleValidation, VALIDATION_TEMPERATURE
        )

    async def auto_populate_aircraft(self, title: str) -> AircraftAutoPopulateResponse:
        title = title.strip()
        check_listing_title(title)

        validation, usage = await self.validate_title(title)
        if not validation.valid:
            missing = ", ".join(validation.missing or ["year, make, and model"])
            raise BadRequestException(
                f"Missing required information: {missing}. Please include year, make, model, "
                'and condition details (e.g., "1978 Piper Archer II - Low Time Engine")'
            )
        search_title = validation.enhanced_title or title
        logger.info("Auto-populating listing for %r", search_title)

        research, research_usage = await self._complete(
            AIRCRAFT_RESEARCH_PROMPT.format(title=search_title),
            json_mode=False,
            temperature=RESEARCH_TEMPERATURE,
        )
        draft, structure_usage = await self._complete_json(
            AIRCRAFT_STRUCTURE_PROMPT.format(research=research), AircraftDraft, STRUCTURE_TEMPERATURE
        )
        total = usage.add(research_usage).add(structure_usage)
        logger.info("Listing auto-populate done, %d tokens", total.total_tokens)
        return AircraftAutoPopulateResponse(data=draft, usage=total)

    # ------------------------------------------------------------------
    # Blog
    # ------------------------------------------------------------------

    async def auto_populate_blog(self, topic: str) -> BlogAutoPopulateResponse:
        topic = topic.strip()
        check_blog_topic(topic)

        research, usage = await self._complete(
            BLOG_RESEARCH_PROMPT.format(topic=topic), json_mode=False, temperature=RESEARCH_TEMPERATURE
        )
        draft, structure_usage = await self._complete_json(
            BLOG_STRUCTURE_PROMPT.format(topic=topic, research=research), BlogDraft, STRUCTURE_TEMPERATURE
        )
        if draft.slug:
            draft.slug = normalize_blog_slug(draft.slug)
        total = usage.add(structure_usage)
        logger.info("Blog auto-populate done for %r, %d tokens", topic, total.total_tokens)
        return BlogAutoPopulateResponse(data=draft, usage=total)
