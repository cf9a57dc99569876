"""
Base class for all AI agents
"""
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

from backend.services.claude_service import ClaudeService


class BaseAgent(ABC):
    """
    Base class for the document agents. The Claude service is injected so a
    single client is shared across agents and tests can swap it out.
    """

    def __init__(self, name: str, claude: ClaudeService):
        self.name = name
        self.claude = claude

    @abstractmethod
    async def process(self, context: Dict[str, Any]) -> Dict[str, Any]:
        """
        Process the given context and return results
        """
        pass

    async def generate_response(
        self,
        prompt: str,
        system_prompt: Optional[str] = None
    ) -> str:
        """Wrapper for Claude service"""
        return await self.claude.generate_response(prompt, system_prompt)

    async def generate_structured_response(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        response_format: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Wrapper for structured Claude responses"""
        return await self.claude.generate_structured_response(
            prompt, system_prompt, response_format
        )
