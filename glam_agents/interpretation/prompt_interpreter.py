"""
Prompt interpretation: free-text styling request -> CanonicalLook.

Order of resolution: look cache, language model, keyword classifier.
Component phrases in the prompt ("bold lips") then pin individual intensities.
Model problems of any kind end in the classifier; the only exception that leaves
interpret() is task cancellation.
"""

import asyncio
from typing import Callable, List, Optional

from glam_agents.core.interfaces import IModelClient
from glam_agents.domain.models import CanonicalLook, Filter, LookSource
from glam_agents.exceptions import (
    MakeupPipelineError,
    MalformedModelResponseError,
    ModelTimeoutError,
    ModelUnavailableError,
)
from glam_agents.interpretation.component_requests import apply_component_requests, extract_component_requests
from glam_agents.interpretation.fallback_classifier import LibraryLook, classify
from glam_agents.interpretation.filter_normalizer import normalize
from glam_agents.interpretation.response_parser import parse_look_payload
from glam_agents.persistence.look_cache import LookCache, normalize_prompt_key
from glam_agents.prompts.look_prompts import get_look_messages
from setup_logging_optimized import get_logger

logger = get_logger(__name__)

DEFAULT_MODEL_STYLE = "Custom Look"


class PromptInterpreter:
    """Turns a styling prompt (and optional face frame) into a canonical look."""

    def __init__(
        self,
        model_client: Optional[IModelClient],
        cache: Optional[LookCache] = None,
        timeout: float = 8.0,
        classifier: Callable[[str], LibraryLook] = classify,
    ):
        self.model_client = model_client
        self.cache = cache if cache is not None else LookCache()
        self.timeout = timeout
        self.classifier = classifier

    async def interpret(
        self,
        prompt_text: str,
        image_bytes: Optional[bytes] = None,
        use_cache: bool = True,
    ) -> CanonicalLook:
        key = normalize_prompt_key(prompt_text, image_bytes)

        if use_cache:
            cached = self.cache.get(key)
            if cached is not None:
                logger.info(f"Look cache hit for {key!r}")
                return cached

        try:
            look = await self._interpret_with_model(prompt_text, image_bytes)
        except (ModelUnavailableError, MalformedModelResponseError) as e:
            logger.warning(f"Model interpretation failed, using keyword classifier: {e}")
            look = self._interpret_with_classifier(prompt_text)
        except MakeupPipelineError as e:
            logger.warning(f"Interpretation error, using keyword classifier: {e}")
            look = self._interpret_with_classifier(prompt_text)
        except Exception as e:
            logger.error(f"Unexpected model client error, using keyword classifier: {e}")
            look = self._interpret_with_classifier(prompt_text)

        look = apply_component_requests(look, extract_component_requests(prompt_text))

        if use_cache:
            self.cache.put(key, look)
        return look

    async def _interpret_with_model(self, prompt_text: str, image_bytes: Optional[bytes]) -> CanonicalLook:
        if self.model_client is None:
            raise ModelUnavailableError("No model client configured")

        messages = get_look_messages(prompt_text, has_image=bool(image_bytes))
        try:
            text = await asyncio.wait_for(
                self.model_client.generate_text(messages, image_bytes=image_bytes, timeout=self.timeout),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise ModelTimeoutError(f"Model did not answer within {self.timeout}s", cause=e)

        payload = parse_look_payload(text)
        filters = normalize(payload.filters)
        if not filters:
            raise MalformedModelResponseError(
                "Model suggested no usable filters",
                context={'suggested': len(payload.filters)}
            )

        look = CanonicalLook(
            filters=tuple(filters),
            style=(payload.style or "").strip() or DEFAULT_MODEL_STYLE,
            description=(payload.description or "").strip(),
            source=LookSource.MODEL,
            occasion=(payload.occasion or "").strip() or None,
        )
        logger.info(f"Model look '{look.style}' with {len(filters)} filters")
        return look

    def _interpret_with_classifier(self, prompt_text: str) -> CanonicalLook:
        library_look = self.classifier(prompt_text)
        filters: List[Filter] = normalize(library_look.raw_filters())
        logger.info(f"Fallback look '{library_look.style}' for prompt {prompt_text!r}")
        return CanonicalLook(
            filters=tuple(filters),
            style=library_look.style,
            description=library_look.description,
            source=LookSource.FALLBACK,
            occasion=library_look.occasion,
        )
