"""
Onboarding API - business profile plus an AI-suggested folder structure
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import Field
from sqlalchemy.ext.asyncio import AsyncSession

from backend.database import get_db
from backend.models.user import User
from backend.api.auth import get_current_user
from backend.api.deps import get_folder_planner
from backend.api.folders import FolderResponse
from backend.agents.folder_planner.agent import FolderPlannerAgent
from backend.services import folder_service
from backend.utils.schemas import CamelModel

logger = logging.getLogger(__name__)

router = APIRouter()


class OnboardingRequest(CamelModel):
    industry: str = Field(min_length=1)
    team_size: str = Field(min_length=1)
    business_description: str = Field(min_length=1)
    folder_structure: str = Field(min_length=1)  # free-text requirements for the folders
    document_types: List[str] = Field(default_factory=list)
    organization_method: str = "by-client"
    collaboration_style: str = "individual"


class OnboardingResponse(CamelModel):
    success: bool
    folder_structure: List[FolderResponse]


@router.post("", response_model=OnboardingResponse)
async def complete_onboarding(
    data: OnboardingRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    planner: FolderPlannerAgent = Depends(get_folder_planner),
):
    """Save the business profile, then create the suggested folders"""
    current_user.industry = data.industry
    current_user.team_size = data.team_size
    current_user.business_description = data.business_description
    await db.commit()

    try:
        plan = await planner.generate_folder_structure(
            industry=data.industry,
            business_description=data.business_description,
            user_prompt=data.folder_structure,
            document_types=data.document_types,
            organization_method=data.organization_method,
            collaboration_style=data.collaboration_style,
        )
    except Exception as e:
        logger.error(f"Error generating folder structure for user {current_user.id}: {e}")
        raise HTTPException(502, "Failed to generate folder structure")

    folders = await folder_service.create_folders_from_plan(db, current_user.id, plan)
    await db.commit()
    logger.info(f"Onboarding created {len(folders)} folders for user {current_user.id}")

    return OnboardingResponse(
        success=True,
        folder_structure=[FolderResponse.model_validate(f) for f in folders],
    )
