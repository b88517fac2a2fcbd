from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "UniApply Backend"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "uniapply_db"
    DATABASE_URL: Optional[str] = None

    # Uploads
    UPLOAD_DIR: str = "uploads"
    MAX_FILE_SIZE: int = 5 * 1024 * 1024
    ALLOWED_UPLOAD_EXTENSIONS: List[str] = [".pdf", ".jpg", ".jpeg", ".png"]

    # Auth (tokens are issued by the external identity service)
    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRY_HOURS: int = 72

    OPENAI_API_KEY: Optional[str] = None
    GROQ_API_KEY: Optional[str] = None
    DEEPSEEK_API_KEY: Optional[str] = None
    GROK_API_KEY: Optional[str] = None

    # LLM Configuration
    DEFAULT_LLM_PROVIDER: str = "openai"  # Options: openai, groq, deepseek, grok
    EXTRACTION_LLM_ENABLED: bool = True
    EXTRACTION_TIMEOUT_SECONDS: float = 20.0

    # Verification
    AI_STATUS_AGGREGATION: str = "all_documents"  # Options: all_documents, latest_document

    # Payments
    ISSUE_RESOLUTION_FEE: float = 500.0
    PAYMENT_CURRENCY: str = "INR"
    PAYMENT_GATEWAY_KEY: str = "demo_key"
    PAYMENT_GATEWAY_SECRET: str = "change-me-gateway"  # sent by the gateway on payment callbacks

    @property
    def sync_database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}/{self.POSTGRES_DB}"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

settings = Settings()
