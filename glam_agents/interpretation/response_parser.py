"""
Parsing of free-text model answers into a validated look payload.

Models wrap JSON in prose or code fences often enough that the answer is
scanned for the first balanced top-level object instead of being parsed
whole.
"""

import json
from typing import Any, List, Optional

from pydantic import BaseModel, Field, ValidationError

from glam_agents.exceptions import MalformedModelResponseError


class ModelLookPayload(BaseModel):
    """Shape the model is asked to return. Filter entries are checked by the normalizer."""
    filters: List[Any] = Field(..., min_length=1)
    style: Optional[str] = None
    description: Optional[str] = None
    occasion: Optional[str] = None


def extract_json_block(text: str) -> Optional[str]:
    """
    Return the first balanced top-level {...} block in text.

    Braces inside JSON strings (including escaped quotes) are ignored.
    Returns None when no balanced block exists.
    """
    if not text:
        return None

    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for i in range(start, len(text)):
            ch = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return text[start:i + 1]
        # Never closed; retry from the next opening brace
        start = text.find("{", start + 1)
    return None


def parse_look_payload(text: str) -> ModelLookPayload:
    """Extract, decode and validate a look payload (raises MalformedModelResponseError)."""
    block = extract_json_block(text)
    if block is None:
        raise MalformedModelResponseError(
            "No JSON object found in model response",
            context={'response_preview': (text or "")[:200]}
        )

    try:
        data = json.loads(block)
    except json.JSONDecodeError as e:
        raise MalformedModelResponseError("Model response is not valid JSON", cause=e)

    try:
        return ModelLookPayload.model_validate(data)
    except ValidationError as e:
        raise MalformedModelResponseError("Model response does not match the look schema", cause=e)
