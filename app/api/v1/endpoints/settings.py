"""
Settings API Endpoint

Provides endpoints for system configuration, including the LLM provider
used for document extraction.
"""

from fastapi import APIRouter, Depends
from app.api import deps
from app.schemas.settings import LLMSettings, LLMSettingsUpdate
from app.services.llm_client import get_provider_info, set_llm_provider


router = APIRouter()


@router.get("/llm", response_model=LLMSettings)
async def get_llm_settings(current_user=Depends(deps.get_current_user)):
    """
    Get current LLM provider configuration.
    """
    return LLMSettings(**get_provider_info())


@router.post("/llm", response_model=LLMSettings)
async def update_llm_settings(settings_update: LLMSettingsUpdate, current_user=Depends(deps.require_admin)):
    """
    Switch the provider used for remote extraction.
    """
    set_llm_provider(settings_update.provider)
    return LLMSettings(**get_provider_info())
