"""
Configuration API routes
"""
from fastapi import APIRouter

from ..config import settings
from ..llm import LLMFactory

router = APIRouter()


@router.get("")
def get_config():
    """Current text-generation configuration"""
    model = settings.OPENAI_MODEL if settings.LLM_PROVIDER == "openai" else settings.OLLAMA_MODEL
    return {
        "provider": settings.LLM_PROVIDER,
        "model": model,
        "correction_temperature": settings.CORRECTION_TEMPERATURE,
        "grading_temperature": settings.GRADING_TEMPERATURE,
        "preprocess_width": settings.PREPROCESS_WIDTH,
    }


@router.get("/llm")
def get_llm_info():
    """Provider, model and default temperature of the shared instance"""
    return LLMFactory.get_default().get_info()


@router.get("/llm/check")
def check_llm():
    """Round-trip a tiny prompt through the configured provider"""
    return LLMFactory.get_default().check_connection()
