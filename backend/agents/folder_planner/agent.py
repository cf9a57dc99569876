"""
Folder Planner Agent
Suggests an initial folder hierarchy during onboarding
"""
from typing import Dict, Any, List, Optional

from pydantic import BaseModel, Field, ValidationError

from backend.agents.base_agent import BaseAgent
from backend.agents.folder_planner.prompts import SYSTEM_PROMPT, FOLDER_STRUCTURE_PROMPT
from backend.services.claude_service import ClaudeService
from backend.utils.schemas import CamelModel


class FolderSuggestion(CamelModel):
    name: str = Field(min_length=1)
    parent_id: Optional[int] = None  # 1-based position of the parent in the plan
    path: Optional[str] = None


class FolderPlan(BaseModel):
    folders: List[FolderSuggestion] = Field(default_factory=list)


class FolderPlannerAgent(BaseAgent):
    """Builds a folder plan from the onboarding questionnaire"""

    def __init__(self, claude: ClaudeService):
        super().__init__(name="FolderPlannerAgent", claude=claude)

    async def process(self, context: Dict[str, Any]) -> Dict[str, Any]:
        folders = await self.generate_folder_structure(**context)
        return {"folders": [f.model_dump(by_alias=True) for f in folders]}

    async def generate_folder_structure(
        self,
        industry: str,
        business_description: str,
        user_prompt: str,
        document_types: Optional[List[str]] = None,
        organization_method: str = "by-client",
        collaboration_style: str = "individual",
    ) -> List[FolderSuggestion]:
        """Ask Claude for a folder plan; raises ValueError on a malformed reply"""
        prompt = FOLDER_STRUCTURE_PROMPT.format(
            industry=industry,
            business_description=business_description,
            user_prompt=user_prompt,
            document_types=", ".join(document_types or []) or "not specified",
            organization_method=organization_method,
            collaboration_style=collaboration_style,
        )
        raw = await self.generate_structured_response(
            prompt=prompt,
            system_prompt=SYSTEM_PROMPT,
            response_format={
                "folders": [
                    {"name": "Folder Name", "parentId": None, "path": "Folder Name"},
                    {"name": "Subfolder Name", "parentId": 1, "path": "Folder Name/Subfolder Name"},
                ]
            },
        )
        try:
            return FolderPlan.model_validate(raw).folders
        except ValidationError as e:
            raise ValueError(f"Malformed folder structure response: {e}")
