#!/usr/bin/env python3
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from db.song_videos import SongVideoStore
from engine.video_lookup import VideoLookupService
from engine.youtube_search import YouTubeSearchClient, is_placeholder_api_key

APP_NAME = "Chart View Finder API"

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def _setup_logging(log_dir=None, level="INFO"):
    root = logging.getLogger("")
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if not any(isinstance(handler, logging.StreamHandler) for handler in root.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(stream_handler)
    if not log_dir:
        return
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.abspath(os.path.join(log_dir, "chartview.log"))
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler):
            if os.path.abspath(getattr(handler, "baseFilename", "")) == log_path:
                return
    file_handler = logging.FileHandler(log_path)
    file_handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(file_handler)


def build_lookup_service():
    search_client = None
    if is_placeholder_api_key(settings.YOUTUBE_API_KEY):
        logging.warning("YOUTUBE_API_KEY is not configured; live search disabled")
    else:
        search_client = YouTubeSearchClient(
            settings.YOUTUBE_API_KEY,
            max_results=settings.SEARCH_MAX_RESULTS,
            referer=settings.SEARCH_REFERER,
        )
    store = SongVideoStore(settings.DB_PATH) if settings.CACHE_ENABLED else None
    return VideoLookupService(search_client, store)


@asynccontextmanager
async def lifespan(app: FastAPI):
    _setup_logging(settings.LOG_DIR, settings.LOG_LEVEL)
    app.state.lookup = build_lookup_service()
    yield


app = FastAPI(
    title=APP_NAME,
    description="Finds and ranks chart-view videos for a song and difficulty.",
    lifespan=lifespan,
)


@app.middleware("http")
async def cors_headers_middleware(request: Request, call_next):
    response = await call_next(request)
    for key, value in _CORS_HEADERS.items():
        response.headers[key] = value
    return response


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        content = {"error": "Method not allowed"}
    else:
        content = {"error": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.get("/api/health")
async def api_health():
    return {"status": "ok"}


@app.options("/api/youtube-search")
async def api_youtube_search_options():
    return Response(status_code=200)


@app.get("/api/youtube-search")
def api_youtube_search(
    song_title: str | None = Query(None, alias="songTitle"),
    song_difficulty: list[str] | None = Query(None, alias="songDifficulty"),
):
    if not song_title or not song_title.strip():
        return JSONResponse(status_code=400, content={"error": "songTitle parameter is required"})
    # Repeated params keep only the first value.
    difficulty = song_difficulty[0] if song_difficulty else ""

    try:
        videos = app.state.lookup.find_chart_videos(song_title, difficulty)
        payload = [video.as_dict() for video in videos]
    except Exception:
        logging.exception("YouTube search failed song=%s difficulty=%s", song_title, difficulty)
        return JSONResponse(status_code=500, content={"error": "Failed to search YouTube videos"})
    return payload


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=os.environ.get("CHARTVIEW_HOST", "127.0.0.1"), port=int(os.environ.get("CHARTVIEW_PORT", "8000")))
