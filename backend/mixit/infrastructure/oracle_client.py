"""Oracle Client — asks the Anthropic model what two elements make when mixed.

Invariants:
    - One API call per synthesize(); no caching, no retries (SDK retries disabled)
    - Never raises for oracle problems: returns OracleSuccess | OracleTransportFailure
      | OracleValidationFailure
    - Timeouts (SDK or asyncio.wait_for) are transport failures
    - Answer comes from the forced emit_element tool; "<icon> <name>" text is the fallback

Design Decisions:
    - Error mapping mirrors the SDK hierarchy: rate limit / connection / 5xx / 529 /
      timeout / other client errors, each tagged with an error_type for logs
    - generate_goal_words() raises typed errors instead: it has no coordinator above it
"""

import asyncio
import logging
from typing import Sequence

import anthropic
from anthropic import (
    APIError,
    APIConnectionError,
    APIStatusError,
    RateLimitError,
    APITimeoutError,
    InternalServerError,
)

from mixit.core.errors import OracleTransportError
from mixit.core.goal_matching import parse_goal_words
from mixit.core.oracle_outcome import (
    OracleOutcome, OracleTransportFailure, OracleValidationFailure,
)
from mixit.core.repository_protocols import ElementLike
from mixit.core.validate_oracle_response import (
    parse_text_answer, validate_oracle_payload,
)
from mixit.schemas.oracle import OracleRequest

logger = logging.getLogger(__name__)

# OverloadedError (HTTP 529) isn't re-exported by every SDK version.
_OVERLOADED_STATUS = 529

_EMIT_ELEMENT_TOOL = {
    "name": "emit_element",
    "description": "Report the single element produced by mixing the two inputs.",
    "input_schema": {
        "type": "object",
        "properties": {
            "name": {
                "type": "string",
                "description": "Name of the new element, one or two words.",
            },
            "icon": {
                "type": "string",
                "description": "Exactly one emoji representing the element.",
            },
        },
        "required": ["name", "icon"],
    },
}

_SYNTHESIZE_PROMPT = (
    "We are playing an element-crafting game and you are the engine.\n"
    "You receive two elements; they may be identical or different.\n"
    "Combine them creatively into one new element and report it with the "
    "emit_element tool. No explanations."
)

_GOAL_PROMPT = (
    "Arcade mode. Starter elements: Water, Earth, Fire, Air.\n"
    "Pick a target word reachable from the starter elements in 5-15 minutes of play "
    "(medium difficulty, no proper names or brands).\n"
    "Return ONLY a comma-separated list: <Target>, <Variant1>, <Variant2>, ...\n"
    "Variants are 3-7 true synonyms or inflections of the target. No emojis, no "
    "quotes, no trailing period, one space after each comma.\n"
    "The target must not be any of: {excluded}"
)


def _is_overloaded(e: APIError) -> bool:
    """Check if error is Anthropic 529 Overloaded."""
    return isinstance(e, APIStatusError) and e.status_code == _OVERLOADED_STATUS


class AnthropicOracleClient:
    """Single-attempt oracle calls with timeout and error mapping."""

    def __init__(
        self,
        api_key: str,
        model: str,
        max_tokens: int = 256,
        timeout_seconds: float = 20.0,
        max_name_length: int = 40,
        max_icon_length: int = 16,
    ):
        self.client = anthropic.AsyncAnthropic(
            api_key=api_key,
            timeout=timeout_seconds,
            max_retries=0,
        )
        self.model = model
        self.max_tokens = max_tokens
        self.timeout_seconds = timeout_seconds
        self.max_name_length = max_name_length
        self.max_icon_length = max_icon_length

    async def synthesize(
        self, element_a: ElementLike, element_b: ElementLike,
    ) -> OracleOutcome:
        """Ask the model for the element produced by mixing a and b."""
        request = OracleRequest(
            element_a_name=element_a.name, element_b_name=element_b.name,
        )
        try:
            response = await self._call_api(
                system=_SYNTHESIZE_PROMPT,
                messages=[{
                    "role": "user",
                    "content": f"{request.element_a_name} + {request.element_b_name}",
                }],
                tools=[_EMIT_ELEMENT_TOOL],
                tool_choice={"type": "tool", "name": "emit_element"},
            )
        except OracleTransportError as e:
            return OracleTransportFailure(
                e.message, e.transport_error_type,
                retry_after_ms=e.context.retry_after_ms,
            )
        self._log_success(response)
        return self._parse_element(response)

    async def generate_goal_words(self, excluded: Sequence[str]) -> list[str]:
        """Ask for an arcade target word plus synonyms; target first."""
        response = await self._call_api(
            system=_GOAL_PROMPT.format(excluded=", ".join(excluded) or "-"),
            messages=[{"role": "user", "content": "New target word, please."}],
        )
        self._log_success(response)
        return parse_goal_words(self._first_text(response))

    async def _call_api(self, **kwargs):
        """One Messages API call; every failure mapped to OracleTransportError."""
        try:
            return await asyncio.wait_for(
                self.client.messages.create(
                    model=self.model, max_tokens=self.max_tokens, **kwargs,
                ),
                timeout=self.timeout_seconds,
            )
        except (APITimeoutError, asyncio.TimeoutError):
            raise OracleTransportError("oracle call timed out", "timeout")
        except RateLimitError as e:
            raise OracleTransportError(
                "Rate limit exceeded", "rate_limit",
                retry_after_ms=self._extract_retry_after(e),
            )
        except (APIConnectionError, InternalServerError) as e:
            raise OracleTransportError(str(e), "connection_error")
        except APIError as e:
            if _is_overloaded(e):
                raise OracleTransportError("Anthropic API overloaded (529)", "overloaded")
            raise OracleTransportError(str(e), "client_error")
        except Exception as e:
            logger.error(f"Unexpected oracle error: {e}", exc_info=True)
            raise OracleTransportError(str(e), "unknown")

    def _parse_element(self, response) -> OracleOutcome:
        """Pull {name, icon} out of the tool_use block, else parse the text."""
        for block in getattr(response, "content", None) or []:
            if getattr(block, "type", None) == "tool_use" and block.name == "emit_element":
                return validate_oracle_payload(
                    block.input,
                    max_name_length=self.max_name_length,
                    max_icon_length=self.max_icon_length,
                )
        text = self._first_text(response)
        if text is None:
            return OracleValidationFailure("response has no element", raw=None)
        return parse_text_answer(
            text,
            max_name_length=self.max_name_length,
            max_icon_length=self.max_icon_length,
        )

    @staticmethod
    def _first_text(response) -> str | None:
        for block in getattr(response, "content", None) or []:
            if getattr(block, "type", None) == "text":
                return block.text
        return None

    def _log_success(self, response) -> None:
        usage = getattr(response, "usage", None)
        if usage is None:
            return
        logger.info(
            "Oracle call success",
            extra={
                "input_tokens": usage.input_tokens,
                "output_tokens": usage.output_tokens,
            },
        )

    def _extract_retry_after(self, error: RateLimitError) -> int | None:
        """Extract Retry-After header (returns milliseconds)."""
        try:
            if hasattr(error, "response") and error.response:
                val = error.response.headers.get("retry-after")
                if val:
                    return int(float(val) * 1000)
        except (AttributeError, TypeError, ValueError):
            pass  # nosec B110
        return None
