import os
from typing import List, Optional
from dotenv import load_dotenv

# Resolve absolute path to backend/.env
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
ENV_PATH = os.path.join(BASE_DIR, ".env")


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    return float(value)


class Config:
    """
    Process-wide settings. Built once at startup and handed to the services;
    nothing else reads the environment.
    """

    def __init__(
        self,
        perplexity_api_key: Optional[str] = None,
        anthropic_api_key: Optional[str] = None,
        perplexity_model: str = "sonar-pro",
        perplexity_base_url: str = "https://api.perplexity.ai",
        anthropic_model: str = "claude-3-haiku-20240307",
        provider_max_tokens: int = 800,
        provider_timeout: Optional[float] = None,
        fetch_timeout: float = 10.0,
        allowed_origins: str = "*",
        log_level: str = "INFO",
    ):
        self.PERPLEXITY_API_KEY = perplexity_api_key
        self.ANTHROPIC_API_KEY = anthropic_api_key
        self.PERPLEXITY_MODEL = perplexity_model
        self.PERPLEXITY_BASE_URL = perplexity_base_url
        self.ANTHROPIC_MODEL = anthropic_model
        self.PROVIDER_MAX_TOKENS = provider_max_tokens
        self.PROVIDER_TIMEOUT = provider_timeout
        self.FETCH_TIMEOUT = fetch_timeout
        self.ALLOWED_ORIGINS = allowed_origins
        self.LOG_LEVEL = log_level

    @property
    def origins(self) -> List[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @classmethod
    def from_env(cls, env_path: str = ENV_PATH) -> "Config":
        # Load .env (absolute path ensures it works from any working directory)
        load_dotenv(env_path)
        return cls(
            perplexity_api_key=os.getenv("PERPLEXITY_API_KEY"),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY"),
            perplexity_model=os.getenv("PERPLEXITY_MODEL", "sonar-pro"),
            perplexity_base_url=os.getenv("PERPLEXITY_BASE_URL", "https://api.perplexity.ai"),
            anthropic_model=os.getenv("ANTHROPIC_MODEL", "claude-3-haiku-20240307"),
            provider_max_tokens=int(os.getenv("PROVIDER_MAX_TOKENS", "800")),
            provider_timeout=_optional_float(os.getenv("PROVIDER_TIMEOUT")),
            fetch_timeout=float(os.getenv("FETCH_TIMEOUT", "10")),
            allowed_origins=os.getenv("ALLOWED_ORIGINS", "*"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
