"""HTTP boundary: multipart upload in, LaTeX JSON out."""

from __future__ import annotations

import logging
import traceback

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from resume2latex.config import Resume2LatexConfig
from resume2latex.errors import ConversionFailedError, IntakeError
from resume2latex.llm import create_llm_provider
from resume2latex.orchestrator import ResumeConverter

logger = logging.getLogger(__name__)


def _error_body(
    config: Resume2LatexConfig, error: str, exc: Exception, details: str | None
) -> dict[str, str | None]:
    stack = None
    if config.server.environment == "development":
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return {"error": error, "details": details, "stack": stack}


def create_app(
    config: Resume2LatexConfig | None = None,
    converter: ResumeConverter | None = None,
) -> FastAPI:
    """Build the FastAPI app.

    The provider is created once here from ``config``; pass ``converter`` to
    supply a prebuilt one (tests do).
    """
    config = config or Resume2LatexConfig()
    if converter is None:
        converter = ResumeConverter(create_llm_provider(config.llm), config)

    app = FastAPI(title="Resume to LaTeX")
    app.state.config = config
    app.state.converter = converter
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(IntakeError)
    async def _intake_error(request: Request, exc: IntakeError) -> JSONResponse:
        logger.warning("Rejected upload: %s", exc)
        details = str(exc.__cause__) if exc.__cause__ is not None else None
        return JSONResponse(
            {"error": str(exc), "details": details, "stack": None},
            status_code=exc.status_code,
        )

    @app.exception_handler(ConversionFailedError)
    async def _conversion_failed(request: Request, exc: ConversionFailedError) -> JSONResponse:
        return JSONResponse(
            _error_body(config, "Failed to convert resume to LaTeX", exc, exc.details),
            status_code=exc.status_code,
        )

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error in %s", request.url.path)
        return JSONResponse(
            _error_body(config, "Internal server error", exc, str(exc)),
            status_code=500,
        )

    @app.post("/api/convert-to-latex")
    async def convert_to_latex(files: list[UploadFile] | None = File(default=None)):
        result = await app.state.converter.convert_uploads(files)
        logger.info("Returning %d chars of LaTeX", len(result.latex_source))
        return {"latexCode": result.latex_source}

    @app.get("/healthz")
    def health():
        return {"status": "ok"}

    return app
