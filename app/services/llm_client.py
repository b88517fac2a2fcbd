"""
LLM Client Factory

Provides a unified interface for the chat providers used by document
extraction, using LangChain.
Supports OpenAI, GROQ, DeepSeek, and Grok.
"""

import logging
from typing import Optional, Dict, Any
from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI
from langchain_groq import ChatGroq

from app.core.config import settings
from app.core.errors import ExternalServiceError, ValidationError

logger = logging.getLogger(__name__)

AVAILABLE_PROVIDERS = ["openai", "groq", "deepseek", "grok"]

# Global variable to store current LLM provider
_current_provider = settings.DEFAULT_LLM_PROVIDER


def set_llm_provider(provider: str):
    """Set the global LLM provider."""
    global _current_provider
    if provider.lower() not in AVAILABLE_PROVIDERS:
        raise ValidationError(f"Invalid provider. Must be one of: {AVAILABLE_PROVIDERS}")
    _current_provider = provider.lower()
    logger.info(f"Extraction provider switched to {_current_provider}")


def get_current_provider() -> str:
    """Get the currently configured LLM provider."""
    return _current_provider


def get_model_name(provider: Optional[str] = None) -> str:
    """
    Get the appropriate model name for the provider.

    Args:
        provider: LLM provider name. If None, uses current provider.

    Returns:
        Model name string
    """
    if provider is None:
        provider = _current_provider

    model_mapping = {
        "openai": "gpt-4o-mini",
        "groq": "llama-3.3-70b-versatile",
        "deepseek": "deepseek-chat",
        "grok": "grok-beta"
    }

    return model_mapping.get(provider.lower(), "gpt-4o-mini")


def _api_key(provider: str) -> Optional[str]:
    return {
        "openai": settings.OPENAI_API_KEY,
        "groq": settings.GROQ_API_KEY,
        "deepseek": settings.DEEPSEEK_API_KEY,
        "grok": settings.GROK_API_KEY,
    }.get(provider)


def get_chat_model(
    provider: Optional[str] = None,
    temperature: float = 0.1,
    max_tokens: Optional[int] = None,
    timeout: Optional[float] = None,
) -> BaseChatModel:
    """
    Get a LangChain ChatModel for the specified provider.

    The model is built with no client-side retries; a failed call is
    reported once to the caller.

    Args:
        provider: LLM provider name (openai, groq, deepseek, grok).
                 If None, uses the globally configured provider.
        temperature: Sampling temperature (default 0.1 for consistency)
        max_tokens: Maximum tokens in response (None = provider default)
        timeout: Request timeout in seconds (None = EXTRACTION_TIMEOUT_SECONDS)

    Returns:
        LangChain BaseChatModel instance configured for the provider

    Raises:
        ExternalServiceError: the provider has no API key configured
    """
    if provider is None:
        provider = _current_provider

    provider = provider.lower()
    if provider not in AVAILABLE_PROVIDERS:
        raise ValidationError(f"Unsupported provider: {provider}")

    api_key = _api_key(provider)
    if not api_key:
        raise ExternalServiceError(f"No API key configured for provider '{provider}'")

    common_kwargs = {
        "model": get_model_name(provider),
        "api_key": api_key,
        "temperature": temperature,
        "timeout": timeout or settings.EXTRACTION_TIMEOUT_SECONDS,
        "max_retries": 0,
    }
    if max_tokens:
        common_kwargs["max_tokens"] = max_tokens

    if provider == "groq":
        return ChatGroq(**common_kwargs)

    if provider == "deepseek":
        # DeepSeek uses OpenAI-compatible API
        return ChatOpenAI(base_url="https://api.deepseek.com", **common_kwargs)

    if provider == "grok":
        # Grok (xAI) uses OpenAI-compatible API
        return ChatOpenAI(base_url="https://api.x.ai/v1", **common_kwargs)

    return ChatOpenAI(**common_kwargs)


def get_provider_info() -> Dict[str, Any]:
    """
    Get information about the current provider configuration.

    Returns:
        Dictionary with provider details
    """
    return {
        "provider": _current_provider,
        "model": get_model_name(_current_provider),
        "available_providers": AVAILABLE_PROVIDERS,
        "extraction_enabled": settings.EXTRACTION_LLM_ENABLED,
        "timeout_seconds": settings.EXTRACTION_TIMEOUT_SECONDS,
    }
