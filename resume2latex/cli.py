"""CLI entry point for resume2latex."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.panel import Panel
from rich.syntax import Syntax

from resume2latex.config import Resume2LatexConfig, load_config
from resume2latex.config.loader import DEFAULT_CONFIG_TEMPLATE
from resume2latex.errors import ConversionFailedError, IntakeError
from resume2latex.intake import LocalUpload
from resume2latex.llm import create_llm_provider
from resume2latex.orchestrator import ResumeConverter

app = typer.Typer(
    name="resume2latex",
    help="Convert PDF/DOCX resumes into LaTeX with a hosted language model.",
)

config_app = typer.Typer(help="Manage resume2latex configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: Resume2LatexConfig | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(cfg: Resume2LatexConfig) -> None:
    handler = logging.StreamHandler()
    if cfg.log_format == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    pkg_logger = logging.getLogger("resume2latex")
    pkg_logger.handlers = [handler]
    pkg_logger.setLevel(_LOG_LEVELS[cfg.log_level])


def _get_config() -> Resume2LatexConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to resume2latex.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    configure_logging(_config)


@app.command()
def convert(
    files: list[Path] = typer.Argument(..., help="Resume files (PDF or DOCX)"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write LaTeX to this file"),
    mode: str | None = typer.Option(
        None, "--mode", help="Attachment mode: binary or text (overrides config)"
    ),
) -> None:
    """Convert one or more resume documents into a single LaTeX resume."""
    cfg = _get_config()
    if mode is not None:
        if mode not in ("binary", "text"):
            rprint(f"[red]Error:[/red] invalid mode {mode!r}; use 'binary' or 'text'")
            raise typer.Exit(1)
        cfg = cfg.model_copy(
            update={"attachments": cfg.attachments.model_copy(update={"mode": mode})}
        )

    missing = [str(f) for f in files if not f.is_file()]
    if missing:
        rprint(f"[red]Error:[/red] file(s) not found: {', '.join(missing)}")
        raise typer.Exit(1)

    try:
        provider = create_llm_provider(cfg.llm)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    converter = ResumeConverter(provider, cfg)
    rprint(
        f"[bold]Converting[/bold] {len(files)} file(s) "
        f"(provider: {provider.config.provider}, model: {provider.config.model})..."
    )

    try:
        result = asyncio.run(converter.convert_uploads([LocalUpload(f) for f in files]))
    except IntakeError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except ConversionFailedError as e:
        rprint(f"[red]Conversion failed:[/red] {e.details}")
        raise typer.Exit(1)

    if output is not None:
        output.write_text(result.latex_source + "\n")
        rprint(f"[green]Wrote[/green] {output} ({len(result.latex_source)} chars)")
    else:
        rprint(
            Panel(
                Syntax(result.latex_source, "latex", word_wrap=True),
                title=f"LaTeX ({result.model or cfg.llm.model})",
                border_style="blue",
            )
        )


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (overrides config)"),
    port: int | None = typer.Option(None, "--port", help="Port (overrides config)"),
) -> None:
    """Run the HTTP service."""
    import uvicorn

    from resume2latex.server import create_app

    cfg = _get_config()
    try:
        api = create_app(cfg)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    uvicorn.run(
        api,
        host=host or cfg.server.host,
        port=port or cfg.server.port,
        log_level=cfg.log_level if cfg.log_level != "warn" else "warning",
    )


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default resume2latex.yaml in current directory."""
    target = Path("resume2latex.yaml")
    if target.exists() and not force:
        rprint("[yellow]resume2latex.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
