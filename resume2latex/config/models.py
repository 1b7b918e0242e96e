from pydantic import BaseModel, Field
from typing import Literal


class LLMSettings(BaseModel):
    provider: Literal["google", "openai", "anthropic", "auto"] = "google"
    model: str = "gemini-2.5-pro"
    api_key_env: str = "GEMINI_API_KEY"
    base_url: str | None = None
    headers: dict[str, str] = Field(default_factory=dict)
    max_tokens: int = Field(default=8192, gt=0)
    temperature: float = Field(default=0.4, ge=0.0, le=2.0)
    top_p: float = Field(default=1.0, gt=0.0, le=1.0)
    timeout: float = Field(default=120.0, gt=0)
    max_retries: int = Field(default=2, ge=0)


class IntakeConfig(BaseModel):
    on_read_error: Literal["abort", "skip"] = "abort"


class AttachmentConfig(BaseModel):
    mode: Literal["binary", "text"] = "binary"


class TemplateConfig(BaseModel):
    path: str | None = None


class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(default=8000, gt=0, lt=65536)
    environment: Literal["production", "development"] = "production"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class Resume2LatexConfig(BaseModel):
    llm: LLMSettings = Field(default_factory=LLMSettings)
    intake: IntakeConfig = Field(default_factory=IntakeConfig)
    attachments: AttachmentConfig = Field(default_factory=AttachmentConfig)
    template: TemplateConfig = Field(default_factory=TemplateConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
