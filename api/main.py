# api/main.py
"""
FastAPI backend for StructSynth - exposes the archetype generators as REST API.

Every request builds its model against a fresh InMemoryEngine; nothing is
kept between requests.
"""

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, ValidationError
from typing import Any, Dict, Optional
import sys
import json
import logging
from pathlib import Path

# Add project root to path to import structsynth
sys.path.insert(0, str(Path(__file__).parent.parent))

from structsynth.engine import InMemoryEngine
from structsynth.export import members_csv, model_dict, model_json
from structsynth.generative import generate
from structsynth.kernel.errors import GenerationError
from structsynth.specs import SPEC_TYPES, parse_spec

logger = logging.getLogger(__name__)

app = FastAPI(
    title="StructSynth API",
    description="Parametric structural model synthesis",
    version="0.1.0"
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Response Models
# =============================================================================

class GenerateResponse(BaseModel):
    """Generation summary plus the generated model."""
    success: bool
    archetype: str
    summary: Dict[str, Any]
    model: Optional[Dict[str, Any]] = None


# =============================================================================
# Generation
# =============================================================================

def build_model(archetype: str, data: Dict[str, Any]):
    """Parse, generate on a fresh engine; map failures to HTTP errors."""
    if archetype.lower() not in SPEC_TYPES:
        raise HTTPException(status_code=404, detail=f"Unknown archetype: {archetype}")
    try:
        spec = parse_spec(archetype, data)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=json.loads(e.json()))

    engine = InMemoryEngine()
    try:
        result = generate(engine, spec)
    except GenerationError as e:
        logger.warning("generation of %s failed: %s", archetype, e)
        detail = {"error": str(e), "operation": e.operation}
        if e.partial is not None:
            detail["partial"] = e.partial.to_dict()
        raise HTTPException(status_code=400, detail=detail)
    return engine, result


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "service": "StructSynth API", "archetypes": sorted(SPEC_TYPES)}


@app.post("/api/generate/{archetype}", response_model=GenerateResponse)
async def generate_model(archetype: str, spec: Dict[str, Any] = Body(default={})):
    """Generate a model and return its summary and geometry."""
    engine, result = build_model(archetype, spec)
    return GenerateResponse(
        success=True,
        archetype=result.archetype,
        summary=result.to_dict(),
        model=model_dict(engine, result),
    )


@app.post("/api/export/csv/{archetype}")
async def export_csv(archetype: str, spec: Dict[str, Any] = Body(default={})):
    """Export the member list as CSV."""
    engine, result = build_model(archetype, spec)
    return StreamingResponse(
        iter([members_csv(engine)]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={result.archetype}_members.csv"}
    )


@app.post("/api/export/json/{archetype}")
async def export_json(archetype: str, spec: Dict[str, Any] = Body(default={})):
    """Export the model as JSON."""
    engine, result = build_model(archetype, spec)
    return StreamingResponse(
        iter([model_json(engine, result)]),
        media_type="application/json",
        headers={"Content-Disposition": f"attachment; filename={result.archetype}_model.json"}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
