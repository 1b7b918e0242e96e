"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import Resume2LatexConfig


def load_config(cli_path: str | None = None) -> Resume2LatexConfig:
    """Load the resume2latex config.

    The first of these that exists and is non-empty wins:
    the ``--config`` path, then ``./resume2latex.yaml``, then
    ``~/.resume2latex/config.yaml``. With none of them the built-in
    defaults apply (Gemini, binary attachments, packaged template).
    ``${VAR}`` references are expanded before validation; bad YAML or bad
    values raise ValueError naming the file.
    """
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./resume2latex.yaml"),
        Path.home() / ".resume2latex" / "config.yaml",
    ]

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                raw = _expand_env_vars(raw)
                return Resume2LatexConfig(**raw)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    return Resume2LatexConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `resume2latex config init`
DEFAULT_CONFIG_TEMPLATE = """\
# resume2latex.yaml

# LLM Provider
llm:
  provider: "google"           # google | openai | anthropic | auto
  model: "gemini-2.5-pro"
  api_key_env: "GEMINI_API_KEY"
  max_tokens: 8192
  temperature: 0.4
  top_p: 1.0
  timeout: 120
  max_retries: 2
  # OpenRouter goes through the openai provider:
  # provider: "openai"
  # model: "google/gemini-2.5-pro"
  # api_key_env: "OPENROUTER_API_KEY"
  # base_url: "https://openrouter.ai/api/v1"
  # headers:
  #   HTTP-Referer: "${SITE_URL}"
  #   X-Title: "LaTeX Resume Converter"

# Upload handling
intake:
  on_read_error: "abort"       # abort | skip

# How documents reach the model
attachments:
  mode: "binary"               # binary | text (MarkItDown extraction)

# LaTeX template (defaults to the packaged template)
template:
  path: null                   # e.g. "./my-template.tex"

# HTTP service
server:
  host: "127.0.0.1"
  port: 8000
  environment: "production"    # production | development
  cors_origins: ["*"]

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
