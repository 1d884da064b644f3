"""
Configuration settings for the Essay Grader backend
"""
from pydantic_settings import BaseSettings
from pathlib import Path
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings using pydantic-settings"""

    # Server settings
    HOST: str = "127.0.0.1"
    PORT: int = 5000
    DEBUG: bool = True

    # CORS settings
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # Project paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"
    ESSAYS_DIR: Optional[Path] = None
    UPLOADS_DIR: Optional[Path] = None

    # Text-generation settings
    LLM_PROVIDER: str = "openai"  # "openai" or "ollama"
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4"
    OPENAI_BASE_URL: Optional[str] = None
    OLLAMA_MODEL: str = "llama3.1:latest"
    OLLAMA_BASE_URL: str = "http://localhost:11434"
    CORRECTION_TEMPERATURE: float = 0.3
    GRADING_TEMPERATURE: float = 0.0

    # Text-recognition settings
    GOOGLE_VISION_KEY_FILE: Optional[Path] = None
    PREPROCESS_WIDTH: int = 1000

    class Config:
        env_file = ".env"
        extra = "allow"

    @property
    def essays_dir(self) -> Path:
        """Root folder holding one sub-folder of essay artifacts per assessment"""
        return self.ESSAYS_DIR or self.DATA_DIR / "essays"

    @property
    def uploads_dir(self) -> Path:
        """Scratch folder for uploads that are not kept"""
        return self.UPLOADS_DIR or self.DATA_DIR / "uploads"

    @property
    def records_dir(self) -> Path:
        return self.DATA_DIR / "records"


settings = Settings()

# Ensure directories exist
settings.DATA_DIR.mkdir(parents=True, exist_ok=True)
settings.LOGS_DIR.mkdir(parents=True, exist_ok=True)
settings.essays_dir.mkdir(parents=True, exist_ok=True)
settings.uploads_dir.mkdir(parents=True, exist_ok=True)
