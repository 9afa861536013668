import os
import base64
import asyncio
from typing import Any, Dict, List, Optional, Tuple

import openai
from openai import AsyncOpenAI
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from glam_agents.core.interfaces import IModelClient
from glam_agents.exceptions import ModelUnavailableError, ModelTimeoutError
from setup_logging_optimized import get_logger

logger = get_logger(__name__)

# Clients and their configuration
CLIENTS = {
    "openai": {
        "client_class": AsyncOpenAI,
        "api_key_env": ("OPENAI_API_KEY",),
    },
    "gemini": {
        "client_class": genai.Client,
        "api_key_env": ("GOOGLE_API_KEY", "GEMINI_API_KEY"),
    },
}

# Models, their client type, and their model_name
MODELS = {
    "gpt-4o-mini": ("openai", "gpt-4o-mini"),
    "gpt-4.1-mini": ("openai", "gpt-4.1-mini-2025-04-14"),
    "gpt-4.1": ("openai", "gpt-4.1-2025-04-14"),
    "gpt-5-mini": ("openai", "gpt-5-mini"),
    "gpt-5-nano": ("openai", "gpt-5-nano"),
    "gemini-2.5-pro": ("gemini", "gemini-2.5-pro"),
    "gemini-2.5-flash": ("gemini", "gemini-2.5-flash"),
    "gemini-2.5-flash-lite": ("gemini", "gemini-2.5-flash-lite"),
    "gemini-2.0-flash": ("gemini", "gemini-2.0-flash"),
}

# Max token param overrides for specific models
MAX_PARAM = {
    "gpt-5-mini": "max_completion_tokens",
    "gpt-5-nano": "max_completion_tokens",
}


def resolve_model(model_name: str) -> Tuple[str, str]:
    """
    Resolve an alias (key in MODELS) or a provider model name (value in MODELS)
    to (client_type, actual_model_name).
    """
    if model_name in MODELS:
        return MODELS[model_name]
    for client_type, actual_name in MODELS.values():
        if actual_name == model_name:
            return client_type, actual_name
    raise ValueError(f"Model {model_name} not supported")


def _api_key_for(client_type: str) -> Optional[str]:
    for env_name in CLIENTS[client_type]["api_key_env"]:
        value = os.getenv(env_name)
        if value:
            return value
    return None


def get_client(model_name: str, api_key: str = None, timeout: float = None):
    """
    Get an asyncio-capable provider client for a given model.

    Returns (client, actual_model_name). Raises ModelUnavailableError when no
    credentials are configured for the provider.
    """
    client_type, actual_model_name = resolve_model(model_name)
    client_config = CLIENTS[client_type]

    api_key = api_key or _api_key_for(client_type)
    if not api_key:
        env_names = " or ".join(client_config["api_key_env"])
        raise ModelUnavailableError(
            f"{env_names} environment variable is not set",
            context={'model': model_name}
        )

    if client_type == "gemini":
        client_kwargs: Dict[str, Any] = {"api_key": api_key}
        if timeout is not None:
            # HttpOptions takes milliseconds
            client_kwargs["http_options"] = genai_types.HttpOptions(timeout=int(timeout * 1000))
        return client_config["client_class"](**client_kwargs), actual_model_name

    client_kwargs = {"api_key": api_key}
    if timeout is not None:
        client_kwargs["timeout"] = timeout
        client_kwargs["max_retries"] = 0
    return client_config["client_class"](**client_kwargs), actual_model_name


def detect_image_mime(blob: bytes) -> str:
    """Best-effort MIME sniffing for inline image parts."""
    if blob.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if blob[:3] == b"\xff\xd8\xff":
        return "image/jpeg"
    if blob[:6] in (b"GIF87a", b"GIF89a"):
        return "image/gif"
    if blob[:4] == b"RIFF" and blob[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"


def _format_messages_for_gemini(messages: List[Dict[str, str]]) -> str:
    prompt = ""
    for msg in messages:
        if msg["role"] == "system":
            prompt += f"System: {msg['content']}\n\n"
        elif msg["role"] == "user":
            prompt += f"User: {msg['content']}\n\n"
    return prompt


class ModelClient(IModelClient):
    """
    Free-text generation through the provider's asyncio client.

    Every failure surfaces as ModelUnavailableError (or ModelTimeoutError);
    task cancellation propagates untouched and aborts the HTTP request.
    """

    def __init__(
        self,
        model_name: str,
        temperature: float = 0.2,
        max_tokens: int = 1024,
        api_key: Optional[str] = None
    ):
        self.model_name = model_name
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._api_key = api_key
        self.client_type, self.actual_model_name = resolve_model(model_name)
        # Provider clients keep a connection pool; one per timeout setting
        self._clients: Dict[Optional[float], Tuple[Any, str]] = {}

    def _client_for(self, timeout: Optional[float]) -> Tuple[Any, str]:
        cached = self._clients.get(timeout)
        if cached is None:
            cached = get_client(self.model_name, api_key=self._api_key, timeout=timeout)
            self._clients[timeout] = cached
            logger.debug(f"Created {self.client_type} client for {self.model_name} (timeout={timeout})")
        return cached

    async def aclose(self) -> None:
        """Release provider clients created so far."""
        clients, self._clients = self._clients, {}
        for client, _ in clients.values():
            if isinstance(client, AsyncOpenAI):
                await client.close()

    async def generate_text(
        self,
        messages: List[Dict[str, str]],
        image_bytes: Optional[bytes] = None,
        timeout: Optional[float] = None
    ) -> str:
        client, actual_model_name = self._client_for(timeout)

        if self.client_type == "gemini":
            call = self._generate_gemini(client, actual_model_name, messages, image_bytes)
        else:
            call = self._generate_openai(client, actual_model_name, messages, image_bytes, timeout)

        try:
            if timeout is not None:
                text = await asyncio.wait_for(call, timeout=timeout)
            else:
                text = await call
        except asyncio.TimeoutError as e:
            raise ModelTimeoutError(
                f"Model {self.model_name} did not answer within {timeout}s",
                cause=e,
                context={'model': actual_model_name}
            )
        except openai.APITimeoutError as e:
            raise ModelTimeoutError(f"Model {self.model_name} timed out", cause=e, context={'model': actual_model_name})
        except (openai.APIError, genai_errors.APIError) as e:
            raise ModelUnavailableError(f"Model {self.model_name} request failed", cause=e, context={'model': actual_model_name})
        except (ModelUnavailableError, ModelTimeoutError):
            raise
        except Exception as e:
            raise ModelUnavailableError(f"Model {self.model_name} call failed", cause=e, context={'model': actual_model_name})

        if not text:
            raise ModelUnavailableError(f"Empty response from {self.model_name}", context={'model': actual_model_name})
        return text

    async def _generate_gemini(
        self,
        client: Any,
        model_name: str,
        messages: List[Dict[str, str]],
        image_bytes: Optional[bytes]
    ) -> str:
        prompt = _format_messages_for_gemini(messages)
        contents: Any = prompt
        if image_bytes:
            contents = [
                genai_types.Part.from_bytes(data=image_bytes, mime_type=detect_image_mime(image_bytes)),
                prompt
            ]

        response = await client.aio.models.generate_content(
            model=model_name,
            contents=contents,
            config={
                "temperature": self.temperature,
                "max_output_tokens": self.max_tokens
            }
        )
        return response.text if hasattr(response, 'text') else ""

    async def _generate_openai(
        self,
        client: Any,
        model_name: str,
        messages: List[Dict[str, str]],
        image_bytes: Optional[bytes],
        timeout: Optional[float]
    ) -> str:
        payload = [dict(m) for m in messages]
        if image_bytes:
            data_url = f"data:{detect_image_mime(image_bytes)};base64,{base64.b64encode(image_bytes).decode('utf-8')}"
            for msg in reversed(payload):
                if msg["role"] == "user":
                    msg["content"] = [
                        {"type": "text", "text": msg["content"]},
                        {"type": "image_url", "image_url": {"url": data_url}}
                    ]
                    break

        max_param = MAX_PARAM.get(model_name, "max_tokens")
        kwargs: Dict[str, Any] = {
            "model": model_name,
            "messages": payload,
            max_param: self.max_tokens
        }
        # Reasoning-family models reject a custom temperature
        if max_param == "max_tokens":
            kwargs["temperature"] = self.temperature
        if timeout is not None:
            kwargs["timeout"] = timeout

        response = await client.chat.completions.create(**kwargs)
        return response.choices[0].message.content or ""
