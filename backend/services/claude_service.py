"""
Claude API service wrapper
"""
from anthropic import AsyncAnthropic
from backend.config import Settings, get_settings
from backend.utils.helpers import strip_code_fence
from typing import Optional, Dict, Any
import json


class ClaudeService:
    """Thin async wrapper around the Anthropic Messages API.

    One instance is built at startup and shared by every agent; it holds the
    only AsyncAnthropic client in the process.
    """

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        api_key = settings.ANTHROPIC_API_KEY or None
        self.model = settings.CLAUDE_MODEL
        self.max_tokens = settings.CLAUDE_MAX_TOKENS
        self._available = bool(api_key)
        if self._available:
            self.client = AsyncAnthropic(api_key=api_key)
        else:
            self.client = None

    @property
    def is_available(self) -> bool:
        return self._available

    async def generate_response(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 1.0,
        max_tokens: Optional[int] = None
    ) -> str:
        """
        Generate a response from Claude
        """
        if not self._available or self.client is None:
            raise RuntimeError("AI service not configured: ANTHROPIC_API_KEY is not set")

        messages = [{"role": "user", "content": prompt}]

        response = await self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens or self.max_tokens,
            temperature=temperature,
            system=system_prompt if system_prompt else "",
            messages=messages
        )

        return response.content[0].text

    async def generate_structured_response(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        response_format: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Generate a structured JSON response from Claude.

        Raises ValueError when the reply is not a JSON object.
        """
        structured_prompt = f"""{prompt}

IMPORTANT: Respond with ONLY a valid JSON object matching this schema:
{json.dumps(response_format, indent=2)}

Do not include any markdown formatting, code blocks, or explanatory text.
Just return the raw JSON."""

        response_text = await self.generate_response(
            prompt=structured_prompt,
            system_prompt=system_prompt
        )
        return self.parse_json_object(response_text)

    @staticmethod
    def parse_json_object(response_text: str) -> Dict[str, Any]:
        response_text = strip_code_fence(response_text)
        try:
            parsed = json.loads(response_text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse Claude response as JSON: {e}\n\nResponse: {response_text}")
        if not isinstance(parsed, dict):
            raise ValueError(f"Expected a JSON object from Claude, got {type(parsed).__name__}")
        return parsed
