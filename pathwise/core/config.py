# pathwise/core/config.py
from typing import Optional
from pydantic import AnyUrl
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # App
    NODE_ENV: str = "development"
    # dev mode is only honoured outside production (see is_dev_mode)
    DEV_MODE: bool = True
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: str = "http://localhost:5173"

    # Sessions
    SESSION_SECRET: str = "pathwise-secret"  # override in .env / secrets
    SESSION_COOKIE_NAME: str = "pathwise_session"
    DEV_COOKIE_NAME: str = "dev-access"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    # PBKDF2 work factor for new hashes; stored hashes carry their own count
    PASSWORD_HASH_ITERATIONS: int = 100_000

    # LLM
    # Adapter selection: 'mock' or 'openai'
    LLM_ADAPTER: str = "mock"
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o"
    LLM_TIMEOUT_SEC: int = 30
    # allow fallback to mock adapter when the configured adapter fails
    LLM_ALLOW_FALLBACK: bool = False

    # Magic Loops (premium chat)
    MAGIC_LOOPS_URL: AnyUrl = "https://magicloops.dev/api/loop/b2a3319a-338d-4790-8564-9584a3d019d0/run"
    MAGIC_LOOPS_TIMEOUT_SEC: int = 30

    # Market data
    ALPHA_VANTAGE_API_KEY: Optional[str] = None
    ALPHA_VANTAGE_URL: AnyUrl = "https://www.alphavantage.co/query"
    STOCK_TIMEOUT_SEC: int = 10
    STOCK_CACHE_TTL_SEC: int = 60 * 60 * 24

    # Redis quote cache; disabled when unset
    REDIS_URL: Optional[str] = None

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def is_dev_mode(self) -> bool:
        return self.NODE_ENV != "production" and self.DEV_MODE

    @property
    def is_production(self) -> bool:
        return self.NODE_ENV == "production"

# single shared settings instance
settings = Settings()
