"""
Settings API Schemas
"""

from pydantic import BaseModel


class LLMSettings(BaseModel):
    """Extraction model settings."""
    provider: str  # openai, groq, deepseek, grok
    model: str
    available_providers: list[str]
    extraction_enabled: bool
    timeout_seconds: float


class LLMSettingsUpdate(BaseModel):
    """Request to switch the extraction provider."""
    provider: str
