"""
Text-generation collaborator
"""
from .providers import BaseLLM, LLMFactory, LLMProvider, OllamaLLM, OpenAILLM

__all__ = [
    "BaseLLM",
    "LLMFactory",
    "LLMProvider",
    "OllamaLLM",
    "OpenAILLM",
]
