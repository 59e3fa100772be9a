from __future__ import annotations

import json
import logging
from typing import Optional, Type, TypeVar

import openai
from openai import AsyncOpenAI
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.config import Settings
from app.core.errors import ModelCallError, SchemaViolationError

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def create_openai_client(settings: Settings) -> Optional[AsyncOpenAI]:
    """Returns an AsyncOpenAI client if an api key is configured."""
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; model calls will fail.")
        return None
    return AsyncOpenAI(
        api_key=settings.openai_api_key,
        timeout=settings.openai_timeout_seconds,
        max_retries=settings.openai_max_retries,
    )


class ModelClient:
    """
    Thin wrapper around the chat completions endpoint that asks for a JSON object
    and validates it against a pydantic schema before handing it back.
    """

    def __init__(self, client: Optional[AsyncOpenAI], model: str, max_output_tokens: int = 2048):
        self.client = client
        self.model = model
        self.max_output_tokens = max_output_tokens

    async def complete_json(self, system_prompt: str, user_prompt: str, schema: Type[SchemaT]) -> SchemaT:
        if self.client is None:
            raise ModelCallError("Model provider credentials are not configured")

        schema_text = json.dumps(schema.model_json_schema(), ensure_ascii=False)
        messages = [
            {
                "role": "system",
                "content": f"{system_prompt}\n\nThe JSON object must conform to this JSON Schema:\n{schema_text}",
            },
            {"role": "user", "content": user_prompt},
        ]
        logger.debug("Calling chat completions: model=%s schema=%s", self.model, schema.__name__)
        try:
            resp = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                response_format={"type": "json_object"},
                max_tokens=self.max_output_tokens,
            )
        except openai.OpenAIError as exc:
            logger.warning("Model call failed (%s): %s", schema.__name__, exc)
            raise ModelCallError(f"Model call failed: {exc}") from exc

        content = resp.choices[0].message.content if resp.choices else None
        if not content:
            raise SchemaViolationError(f"Model returned an empty response for {schema.__name__}")
        return parse_model_output(content, schema)


def parse_model_output(content: str, schema: Type[SchemaT]) -> SchemaT:
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as exc:
        raise SchemaViolationError(
            f"Model response is not valid JSON for {schema.__name__}", {"reason": str(exc)}
        ) from exc
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(item) for item in first.get("loc", []))
        raise SchemaViolationError(
            f"Model response does not match {schema.__name__}",
            {"field": field, "reason": first.get("msg")},
        ) from exc
