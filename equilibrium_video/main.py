"""FastAPI app: prompt → extractor → planner → catalog → ranker → JSON."""
import json
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from equilibrium_video.exceptions import InvalidPromptError
from equilibrium_video.extractor import extract
from equilibrium_video.logging_config import log_recommend_call, setup_logging
from equilibrium_video.models import ExtractResponse, RecommendRequest
from equilibrium_video.planner import build_search_queries
from equilibrium_video.tool import run_tool

setup_logging()
logger = logging.getLogger(__name__)

ROOT = Path(__file__).resolve().parent.parent

_api_key = (os.getenv("YOUTUBE_API_KEY") or "").strip()
if _api_key:
    logger.info("YOUTUBE_API_KEY loaded (last 4: ...%s)", _api_key[-4:] if len(_api_key) >= 4 else "****")
else:
    logger.warning("YOUTUBE_API_KEY missing → every catalog search returns no videos.")

app = FastAPI(title="Equilibrium Video Recommendation API", version="0.1.0")
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.post("/v1/recommend")
def recommend(req: RecommendRequest) -> dict:
    """prompt → recommendations, insights, suggestions. Errors come back in the payload."""
    call = run_tool(req.prompt)
    try:
        log_recommend_call(call.state, call.options, call.payload)
    except Exception as e:
        logger.exception("Could not write recommend call log: %s", e)
    return call.payload


@app.post("/v1/extract", response_model=ExtractResponse, response_model_by_alias=True)
def extract_only(req: RecommendRequest) -> ExtractResponse:
    """Extraction + query plan only. No catalog calls."""
    try:
        state, options = extract(req.prompt)
    except InvalidPromptError as e:
        raise HTTPException(status_code=400, detail=str(e))
    queries = build_search_queries(state, options.category, options.language)
    return ExtractResponse(user_state=state, options=options, queries=queries)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/v1/test-cases")
def get_test_cases():
    path = ROOT / "data" / "test_cases.json"
    if not path.exists():
        raise HTTPException(status_code=404, detail="test_cases.json not found")
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
