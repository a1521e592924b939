# services/llm_service.py
"""
Large Language Model service implementation
"""
import asyncio
import logging
import time
from typing import Any, Optional, Sequence

from openai import AsyncAzureOpenAI, AsyncOpenAI, OpenAIError

from .interfaces.cache_interface import CacheServiceInterface
from .interfaces.llm_interface import LLMServiceInterface
from .prompts import build_relevance_prompt, build_roadmap_prompt
from .response_interpreter import interpret_relevance
from ..core.config import BaseSettings
from ..core.errors import MissingCredentialError, TransportError
from ..models.subject import Subject, normalize_occupation

logger = logging.getLogger(__name__)


class LLMService(LLMServiceInterface):
    """OpenAI/Azure OpenAI implementation of LLM service"""

    def __init__(
        self,
        settings: BaseSettings,
        cache_service: CacheServiceInterface,
        client: Optional[Any] = None,
    ):
        self.settings = settings
        self.cache_service = cache_service
        self.openai_client = client if client is not None else self._init_openai_client()

        # One request in flight at a time
        self.api_semaphore = asyncio.Semaphore(1)

    def _init_openai_client(self):
        """Initialize OpenAI client, or None without a credential"""
        if not self.settings.has_credentials:
            logger.warning("OpenAI API key not configured; AI features disabled")
            return None

        if self.settings.openai_api_base:
            return AsyncAzureOpenAI(
                api_key=self.settings.openai_api_key,
                api_version=self.settings.openai_api_version,
                azure_endpoint=self.settings.openai_api_base,
            )
        return AsyncOpenAI(api_key=self.settings.openai_api_key)

    def available(self) -> bool:
        return self.openai_client is not None

    async def _complete(self, prompt: str, model: str) -> str:
        if not self.openai_client:
            raise MissingCredentialError()

        messages = [{"role": "user", "content": prompt}]

        try:
            async with self.api_semaphore:
                response = await self.openai_client.chat.completions.create(
                    model=model,
                    messages=messages,
                    temperature=self.settings.temperature,
                    max_tokens=self.settings.max_tokens,
                    stream=False,
                )
        except OpenAIError as e:
            logger.error(f"Error calling {model}: {e}")
            raise TransportError(detail=str(e)) from e

        return response.choices[0].message.content or ""

    async def generate_roadmap_text(
        self, occupation: str, subjects: Sequence[Subject]
    ) -> str:
        """Ask the model for a roadmap and return its raw reply"""
        prompt = build_roadmap_prompt(
            occupation, subjects, institution=self.settings.institution_name
        )

        start_time = time.time()
        text = await self._complete(prompt, self.settings.roadmap_model)
        logger.info(
            f"Generated roadmap text for {occupation!r} "
            f"in {time.time() - start_time:.2f}s"
        )
        return text

    async def assess_relevance_text(
        self, subject: Subject, occupation: Optional[str] = None
    ) -> str:
        """Ask the model to score one subject for one or all occupations"""
        scope = normalize_occupation(occupation) if occupation else "all"

        # Check cache first
        cache_key = f"relevance:{subject.id}:{scope}"
        cached_result = await self.cache_service.get(cache_key)
        if cached_result:
            return cached_result

        occupations = [occupation] if occupation else list(self.settings.occupations)
        prompt = build_relevance_prompt(subject, occupations)
        text = await self._complete(prompt, self.settings.enrichment_model)

        # Only replies that interpret cleanly are cached
        interpret_relevance(text, occupation)
        await self.cache_service.set(cache_key, text)
        return text
