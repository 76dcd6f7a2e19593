from fastapi import FastAPI, Query, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import time

from .data_models import SearchResponse
from .errors import InvalidVideoLink, YouTubeSearchError
from .settings import logger, DEBUG_LOGGING
from .yt import YouTubeSearch, search_with_retries

app = FastAPI(title="YouTube Search API", version="0.1.0")
yt = YouTubeSearch()

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    logger.info(f"Request: {request.method} {request.url.path}")
    if DEBUG_LOGGING:
        logger.debug(f"Request query: {request.url.query}")

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(f"Response: {request.method} {request.url.path} - Status: {response.status_code} - Time: {process_time:.3f}s")

    return response


def _upstream_error(e: YouTubeSearchError) -> HTTPException:
    return HTTPException(
        status_code=502,
        detail={
            "message": str(e),
            "error_type": type(e).__name__,
        }
    )

@app.get("/healthz")
def health():
    logger.debug("Health check endpoint called")
    return {"ok": True}

@app.get("/search", response_model=SearchResponse)
def search(
    q: str = Query(..., description="Search terms or a YouTube link"),
    continuation: str = Query("", description="Token from a previous page"),
):
    logger.info(f"Searching for: '{q}' (continuation: {bool(continuation)})")

    try:
        start_time = time.time()
        response = search_with_retries(yt, q, continuation)
        search_time = time.time() - start_time
    except InvalidVideoLink as e:
        logger.error(f"Invalid link in search endpoint: {str(e)}")
        raise HTTPException(status_code=400, detail={"message": str(e), "error_type": "InvalidVideoLink"})
    except YouTubeSearchError as e:
        logger.error(f"Error in search endpoint: {str(e)}")
        raise _upstream_error(e)

    logger.info(f"Search returned {len(response.results)} results in {search_time:.3f}s")
    return response

@app.get("/videos/{video_id}", response_model=SearchResponse)
def video(video_id: str):
    logger.info(f"Resolving video: {video_id}")
    return yt.resolve_direct_video(video_id)
