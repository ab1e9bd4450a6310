import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load .env from the backend directory
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "..", ".env"))

SECRET_KEY: str = os.getenv("SECRET_KEY", "conceptcraft-dev-secret-change-in-prod")
ALGORITHM: str = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))  # 24h

# Database: stored in backend/data/
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.abspath(os.path.join(BASE_DIR, "..", ".."))

DATABASE_PATH: str = os.getenv(
    "DATABASE_PATH",
    os.path.join(BACKEND_DIR, "data", "conceptcraft.db"),
)

# Seeded into an empty admins table on startup
DEFAULT_ADMIN_USERNAME: str = os.getenv("DEFAULT_ADMIN_USERNAME", "admin")
DEFAULT_ADMIN_PASSWORD: str = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

DEFAULT_SYSTEM_PROMPT = (
    "You are an expert web development educator who creates engaging, "
    "easy-to-understand content for developers."
)


@dataclass(frozen=True)
class LLMSettings:
    """Provider configuration handed to the LLM gateway.

    A missing API key disables that provider; the gateway then treats it as
    an immediate failure.
    """

    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    openai_model: str = "gpt-4"
    anthropic_model: str = "claude-3-sonnet-20240229"
    openai_base_url: str = "https://api.openai.com/v1"
    anthropic_base_url: str = "https://api.anthropic.com/v1/messages"
    anthropic_version: str = "2023-06-01"
    max_tokens: int = 1000
    temperature: float = 0.7
    timeout_seconds: float = 60.0
    system_prompt: str = DEFAULT_SYSTEM_PROMPT

    @classmethod
    def from_env(cls) -> "LLMSettings":
        return cls(
            openai_api_key=(os.getenv("OPENAI_API_KEY") or "").strip() or None,
            anthropic_api_key=(os.getenv("ANTHROPIC_API_KEY") or "").strip() or None,
            openai_model=os.getenv("OPENAI_MODEL", cls.openai_model),
            anthropic_model=os.getenv("ANTHROPIC_MODEL", cls.anthropic_model),
            timeout_seconds=float(os.getenv("LLM_TIMEOUT_SECONDS", str(cls.timeout_seconds))),
        )
