"""
Text-generation collaborator behind a single ``complete`` call.

OpenAI chat models are the default (GPT-4); a local Ollama model can be
selected with LLM_PROVIDER=ollama.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from enum import Enum

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_ollama import ChatOllama
from langchain_openai import ChatOpenAI

from ..config import settings
from ..core.exceptions import CollaboratorError

logger = logging.getLogger(__name__)


class LLMProvider(str, Enum):
    """Supported LLM providers"""
    OPENAI = "openai"
    OLLAMA = "ollama"


class BaseLLM(ABC):
    """A configured chat model per temperature, plus ``complete``"""

    def __init__(self, model: str, temperature: float = 0.3):
        self.model = model
        self.temperature = temperature
        self._llm_cache: Dict[float, BaseChatModel] = {}

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name"""

    @abstractmethod
    def _create_llm(self, temperature: float) -> BaseChatModel:
        """Create and return the underlying LangChain chat model"""

    def get_llm(self, temperature: Optional[float] = None) -> BaseChatModel:
        """Chat model for a temperature (lazy, cached per temperature)"""
        if temperature is None:
            temperature = self.temperature
        if temperature not in self._llm_cache:
            self._llm_cache[temperature] = self._create_llm(temperature)
        return self._llm_cache[temperature]

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: Optional[float] = None
    ) -> str:
        """
        Send one system + user exchange and return the reply text.

        Raises:
            CollaboratorError: the call failed or returned no text
        """
        messages = [SystemMessage(content=system_prompt), HumanMessage(content=user_prompt)]
        try:
            response = self.get_llm(temperature).invoke(messages)
        except Exception as e:
            logger.error(f"{self.provider_name} completion failed: {e}")
            raise CollaboratorError("text-generation", f"{self.provider_name} request failed") from e

        content = response.content if hasattr(response, "content") else response
        if not isinstance(content, str) or not content.strip():
            raise CollaboratorError("text-generation", f"{self.provider_name} returned no text")
        return content

    def get_info(self) -> Dict[str, Any]:
        return {"provider": self.provider_name, "model": self.model, "temperature": self.temperature}

    def check_connection(self) -> Dict[str, Any]:
        """Send a one-line probe; never raises"""
        info = self.get_info()
        try:
            self.get_llm().invoke("Reply with OK.")
        except Exception as e:
            logger.warning(f"{self.provider_name} probe failed: {e}")
            return {**info, "connected": False, "error": str(e)}
        return {**info, "connected": True}


class OpenAILLM(BaseLLM):
    """
    OpenAI chat completions provider.
    """

    def __init__(
        self,
        model: str = "gpt-4",
        temperature: float = 0.3,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ):
        super().__init__(model=model, temperature=temperature)

        if not api_key:
            raise ValueError("OPENAI_API_KEY is required for the OpenAI provider")

        self.api_key = api_key
        self.base_url = base_url
        logger.info(f"OpenAILLM initialized: model={model}")

    @property
    def provider_name(self) -> str:
        return LLMProvider.OPENAI.value

    def _create_llm(self, temperature: float) -> BaseChatModel:
        """Create ChatOpenAI instance"""
        kwargs = {
            "model": self.model,
            "temperature": temperature,
            "api_key": self.api_key,
            "max_retries": 0,
        }
        if self.base_url:
            kwargs["base_url"] = self.base_url
        return ChatOpenAI(**kwargs)


class OllamaLLM(BaseLLM):
    """
    Ollama LLM provider for local inference.
    """

    def __init__(
        self,
        model: str = "llama3.1:latest",
        temperature: float = 0.3,
        base_url: str = "http://localhost:11434",
        num_ctx: int = 4096,
    ):
        super().__init__(model=model, temperature=temperature)
        self.base_url = base_url
        self.num_ctx = num_ctx
        logger.info(f"OllamaLLM initialized: model={model}, base_url={base_url}")

    @property
    def provider_name(self) -> str:
        return LLMProvider.OLLAMA.value

    def _create_llm(self, temperature: float) -> BaseChatModel:
        """Create ChatOllama instance"""
        return ChatOllama(
            model=self.model,
            temperature=temperature,
            base_url=self.base_url,
            num_ctx=self.num_ctx,
        )


class LLMFactory:
    """
    Factory class for creating LLM instances from settings.
    """

    _instance: Optional[BaseLLM] = None

    @classmethod
    def create(cls, provider: Optional[str] = None, model: Optional[str] = None) -> BaseLLM:
        """
        Create an LLM instance based on provider.

        Args:
            provider: "openai" or "ollama"; defaults to settings.LLM_PROVIDER
            model: Model name; defaults to the provider's configured model

        Returns:
            BaseLLM instance
        """
        provider = (provider or settings.LLM_PROVIDER).lower()
        logger.info(f"Creating LLM: provider={provider}, model={model}")

        if provider == LLMProvider.OPENAI.value:
            return OpenAILLM(
                model=model or settings.OPENAI_MODEL,
                temperature=settings.CORRECTION_TEMPERATURE,
                api_key=settings.OPENAI_API_KEY,
                base_url=settings.OPENAI_BASE_URL,
            )
        elif provider == LLMProvider.OLLAMA.value:
            return OllamaLLM(
                model=model or settings.OLLAMA_MODEL,
                temperature=settings.CORRECTION_TEMPERATURE,
                base_url=settings.OLLAMA_BASE_URL,
            )
        raise ValueError(f"Unknown LLM provider: {provider}. Supported: openai, ollama")

    @classmethod
    def get_default(cls) -> BaseLLM:
        """Shared instance built from settings on first use"""
        if cls._instance is None:
            try:
                cls._instance = cls.create()
            except ValueError as e:
                logger.error(f"Cannot create LLM provider: {e}")
                raise CollaboratorError("text-generation", str(e)) from e
        return cls._instance

    @classmethod
    def reset(cls):
        """Drop the shared instance so the next call rebuilds it"""
        cls._instance = None
        logger.info("LLM provider reset to default from config")
