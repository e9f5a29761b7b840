"""
FastAPI server exposing the widget DSL analysis pipeline.
"""

import logging
from typing import List, Optional, Dict, Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
import uvicorn

from .components import ComponentDetector
from .exceptions import ValidationError, ConfigurationError
from .pipeline import AnalysisPipeline
from .services.configuration_service import get_config_service
from .theme import LIGHT, DARK, SYSTEM

logger = logging.getLogger(__name__)

MODES = (LIGHT, DARK, SYSTEM)


# Pydantic models for API requests/responses
class SourceRequest(BaseModel):
    """Request model carrying DSL source."""
    source: str = Field(..., min_length=1, description="DSL source text")


class ValidateResponse(BaseModel):
    """Response model for syntax validation."""
    is_valid: bool = Field(..., description="True when the source parsed without errors")
    errors: List[Dict[str, Any]] = Field(..., description="Recorded diagnostics")
    warnings: List[str] = Field(default_factory=list, description="Warnings")


class ComponentsRequest(SourceRequest):
    """Request model for component detection."""
    min_instances: Optional[int] = Field(None, ge=1, description="Minimum instances per pattern")
    min_confidence: Optional[float] = Field(None, ge=0.0, le=1.0, description="Confidence floor")
    max_variants: Optional[int] = Field(None, ge=1, description="Maximum variants per pattern")


class ComponentsResponse(BaseModel):
    """Response model for component detection."""
    patterns: List[Dict[str, Any]] = Field(..., description="Detected component patterns")
    reusable_widgets: List[Dict[str, Any]] = Field(..., description="Reusable widget definitions")
    total_instances: int = Field(..., description="Widgets covered by patterns")
    unique_patterns: int = Field(..., description="Number of patterns")
    component_coverage: float = Field(..., description="Percentage of widgets covered")
    related_patterns: List[Dict[str, Any]] = Field(default_factory=list,
                                                   description="Near-duplicate pattern pairs")


class ThemeResolveRequest(SourceRequest):
    """Request model for resolving theme paths."""
    paths: List[str] = Field(..., min_length=1, description="Theme paths such as colorScheme.primary")
    mode: Optional[str] = Field(None, description="light, dark or system; defaults to the declared mode")


class ThemeResolveResponse(BaseModel):
    """Response model for theme path resolution."""
    mode: str = Field(..., description="Mode the values were resolved for")
    available_modes: List[str] = Field(..., description="Modes the source declares")
    values: Dict[str, Optional[str]] = Field(..., description="Resolved value per path")


app = FastAPI(
    title="widgetlens API",
    description="Widget DSL analysis: widgets, themes, layouts and reusable components",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_pipeline() -> AnalysisPipeline:
    """Pipeline built from the current global configuration."""
    return AnalysisPipeline(get_config_service().get_config())


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "message": "widgetlens API is running"}


@app.post("/analyze")
async def analyze(request: SourceRequest) -> Dict[str, Any]:
    """Run every analysis stage over the source."""
    try:
        report = get_pipeline().analyze(request.source)
    except ValidationError as e:
        raise HTTPException(status_code=413, detail=str(e))
    return report.to_dict()


@app.post("/validate", response_model=ValidateResponse)
async def validate(request: SourceRequest):
    """Check the syntax of the source."""
    pipeline = get_pipeline()
    try:
        pipeline.check_source(request.source)
    except ValidationError as e:
        raise HTTPException(status_code=413, detail=str(e))

    result = pipeline.parser.validate_syntax(request.source)
    return ValidateResponse(
        is_valid=result.is_valid,
        errors=[e.to_dict() for e in result.errors],
        warnings=result.warnings,
    )


@app.post("/components", response_model=ComponentsResponse)
async def components(request: ComponentsRequest):
    """Detect component patterns in the source."""
    pipeline = get_pipeline()
    try:
        pipeline.check_source(request.source)
    except ValidationError as e:
        raise HTTPException(status_code=413, detail=str(e))

    overrides = {
        key: value for key, value in (
            ("min_instances", request.min_instances),
            ("min_confidence", request.min_confidence),
            ("max_variants", request.max_variants),
        ) if value is not None
    }
    try:
        detector = ComponentDetector(pipeline.config.detection, **overrides)
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    extraction = pipeline.parser.extract_widgets(request.source)
    result = detector.detect_components(extraction.widgets)
    related = detector.find_related_patterns(result.patterns)

    return ComponentsResponse(
        patterns=[p.to_dict() for p in result.patterns],
        reusable_widgets=[w.to_dict() for w in result.reusable_widgets],
        total_instances=result.total_instances,
        unique_patterns=result.unique_patterns,
        component_coverage=round(result.component_coverage, 2),
        related_patterns=[r.to_dict() for r in related],
    )


@app.post("/themes/resolve", response_model=ThemeResolveResponse)
async def resolve_themes(request: ThemeResolveRequest):
    """Resolve theme paths against the themes declared in the source."""
    if request.mode is not None and request.mode not in MODES:
        raise HTTPException(status_code=422, detail=f"Unknown theme mode: {request.mode}")

    pipeline = get_pipeline()
    try:
        pipeline.check_source(request.source)
    except ValidationError as e:
        raise HTTPException(status_code=413, detail=str(e))

    nodes = pipeline.parser.parse_expressions(request.source)
    extraction = pipeline.theme_analyzer.extract_themes(nodes)
    resolver = pipeline.theme_analyzer.create_multi_mode_theme_resolver(
        extraction.themes, extraction.modes)

    mode = request.mode or resolver.preferred_mode()
    logger.debug(f"Resolving {len(request.paths)} theme paths for mode {mode}")
    return ThemeResolveResponse(
        mode=mode,
        available_modes=resolver.available_modes(),
        values={path: resolver.resolve(path, mode) for path in request.paths},
    )


def run_server(host: str = "127.0.0.1", port: int = 8000, reload: bool = False):
    """Run the FastAPI server."""
    uvicorn.run(
        "widgetlens.api_server:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info"
    )


async def serve(host: str = "127.0.0.1", port: int = 8000):
    """Run the FastAPI server inside an already running event loop."""
    config = uvicorn.Config("widgetlens.api_server:app", host=host, port=port, log_level="info")
    await uvicorn.Server(config).serve()


if __name__ == "__main__":
    server = get_config_service().get_server_config()
    run_server(host=server.host, port=server.port, reload=server.reload)
