import json

from pydantic_settings import BaseSettings
from pydantic import field_validator
from pathlib import Path


class Settings(BaseSettings):
    openrouter_api_key: str = ""
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    default_model: str = "deepseek/deepseek-chat-v3-0324"
    fallback_api_key: str = ""
    fallback_base_url: str = "https://openrouter.ai/api/v1"
    fallback_model: str = "meta-llama/llama-3.3-70b-instruct:free"
    ai_scoring_enabled: bool = True
    ai_temperature: float = 0.3
    ai_max_tokens: int = 4096
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    cache_ttl_seconds: int = 300
    eur_to_usd: float = 1.08
    catalog_path: Path = Path(__file__).resolve().parent / "data" / "countries.json"
    log_level: str = "INFO"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            # Accept JSON array or comma-separated string
            v = v.strip()
            if v.startswith("["):
                return json.loads(v)
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @property
    def ai_scoring_available(self) -> bool:
        return self.ai_scoring_enabled and bool(self.openrouter_api_key)

    model_config = {
        "env_file": str(Path(__file__).resolve().parent.parent / ".env"),
        "env_file_encoding": "utf-8",
    }


settings = Settings()
