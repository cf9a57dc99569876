"""
Document Intelligence Agent
Summarizes documents and proposes search tags
"""
from typing import Dict, Any, List, Optional

from pydantic import BaseModel, ValidationError, field_validator

from backend.agents.base_agent import BaseAgent
from backend.agents.document_intelligence.prompts import (
    SUMMARY_SYSTEM_PROMPT, SUMMARY_PROMPT, TAGS_SYSTEM_PROMPT, TAGS_PROMPT
)
from backend.config import get_settings
from backend.services.claude_service import ClaudeService


class TagSuggestion(BaseModel):
    tags: List[str]

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, v: List[str]) -> List[str]:
        return [t.strip() for t in v if t and t.strip()]


class DocumentIntelligenceAgent(BaseAgent):
    """Produces summaries and tags for uploaded documents"""

    def __init__(self, claude: ClaudeService, text_limit: Optional[int] = None):
        super().__init__(name="DocumentIntelligenceAgent", claude=claude)
        self.text_limit = text_limit or get_settings().AI_TEXT_LIMIT

    async def process(self, context: Dict[str, Any]) -> Dict[str, Any]:
        action = context.get("action", "summarize")
        text = context["text"]
        file_name = context["file_name"]

        if action == "summarize":
            return {"summary": await self.summarize_document(text, file_name)}
        elif action == "tag":
            return {"tags": await self.generate_tags(text, file_name)}

        return {"error": f"Unknown action: {action}"}

    async def summarize_document(self, text: str, file_name: str) -> str:
        """Summarize a document; raises ValueError on an empty reply"""
        prompt = SUMMARY_PROMPT.format(
            file_name=file_name,
            text=text[:self.text_limit],
        )
        summary = await self.generate_response(prompt, SUMMARY_SYSTEM_PROMPT)
        summary = (summary or "").strip()
        if not summary:
            raise ValueError(f"Claude returned an empty summary for '{file_name}'")
        return summary

    async def generate_tags(self, text: str, file_name: str) -> List[str]:
        """Generate category tags; raises ValueError on a malformed reply"""
        prompt = TAGS_PROMPT.format(
            file_name=file_name,
            text=text[:self.text_limit],
        )
        raw = await self.generate_structured_response(
            prompt=prompt,
            system_prompt=TAGS_SYSTEM_PROMPT,
            response_format={"tags": ["tag"]},
        )
        try:
            return TagSuggestion.model_validate(raw).tags
        except ValidationError as e:
            raise ValueError(f"Malformed tag response for '{file_name}': {e}")
