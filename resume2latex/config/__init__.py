from .loader import load_config
from .models import (
    AttachmentConfig,
    IntakeConfig,
    LLMSettings,
    Resume2LatexConfig,
    ServerConfig,
    TemplateConfig,
)

__all__ = [
    "AttachmentConfig",
    "IntakeConfig",
    "LLMSettings",
    "Resume2LatexConfig",
    "ServerConfig",
    "TemplateConfig",
    "load_config",
]
