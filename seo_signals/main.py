"""
SEO Signals: FastAPI Backend

Endpoints:
  POST /analyze         Score a page's meta / OG / Twitter / JSON-LD signals
  POST /analyze/schema  Score structured-data entities only
  GET  /catalog         Supported schema types and their requirements
  GET  /health          Health check
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Any, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Header
from pydantic import BaseModel, HttpUrl

from .analyzers.schema import analyze_entities
from .catalog import DEFAULT_CATALOG
from .context import build_advisor_context
from .engine import analyze_document, issue_summary
from .guidance import schema_guidance
from .parser import extract_json_ld, load_document
from .scorer import schema_score

load_dotenv()

log = logging.getLogger(__name__)

API_SECRET = os.environ.get("API_SECRET_KEY", "")
MAX_HTML_CHARS = int(os.environ.get("MAX_HTML_CHARS", 2_000_000))


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    if DEFAULT_CATALOG.errors:
        log.warning("Schema catalog loaded with %d problem(s)", len(DEFAULT_CATALOG.errors))
    log.info("Schema catalog ready: %d types", len(DEFAULT_CATALOG))
    yield
    # Shutdown


app = FastAPI(
    title="SEO Signals",
    version="1.0.0",
    lifespan=lifespan,
)


class AnalyzeRequest(BaseModel):
    html: str
    url: Optional[HttpUrl] = None
    schemas: Optional[list[Any]] = None
    include_context: bool = False


class SchemaRequest(BaseModel):
    schemas: list[Any]


def _check_key(x_api_key: str) -> None:
    if API_SECRET and x_api_key != API_SECRET:
        raise HTTPException(status_code=401, detail="Invalid API key")


@app.get("/health")
async def health():
    return {"status": "ok", "engine": "seo-signals"}


@app.get("/catalog")
async def catalog(x_api_key: str = Header(default="")):
    _check_key(x_api_key)
    return {
        name: profile.model_dump(by_alias=True)
        for name, profile in DEFAULT_CATALOG.profiles.items()
    }


@app.post("/analyze")
async def analyze(req: AnalyzeRequest, x_api_key: str = Header(default="")):
    _check_key(x_api_key)

    if len(req.html) > MAX_HTML_CHARS:
        raise HTTPException(
            status_code=413,
            detail=f"HTML too large ({len(req.html)} chars, max {MAX_HTML_CHARS})",
        )

    base_url = str(req.url) if req.url else None
    doc = load_document(req.html)
    entities = req.schemas if req.schemas is not None else extract_json_ld(doc)
    analysis = analyze_document(doc, entities, base_url=base_url)
    log.info(
        "Analyzed %s: total=%d meta=%d sns=%d schema=%d",
        base_url or "<inline html>",
        analysis.scores.total_score, analysis.scores.meta,
        analysis.scores.sns, analysis.scores.schema_,
    )

    result = analysis.model_dump(by_alias=True)
    result["issueSummary"] = issue_summary(analysis)
    if req.include_context:
        result["advisorContext"] = build_advisor_context(analysis, entities)
    return result


@app.post("/analyze/schema")
async def analyze_schema(req: SchemaRequest, x_api_key: str = Header(default="")):
    _check_key(x_api_key)

    analyses = analyze_entities(req.schemas, DEFAULT_CATALOG)
    score = schema_score(analyses)
    return {
        "score": score,
        "analyses": [a.model_dump(by_alias=True) for a in analyses],
        "guidance": schema_guidance(score, req.schemas, analyses).model_dump(by_alias=True),
    }


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("seo_signals.main:app", host="0.0.0.0", port=port, reload=True)
