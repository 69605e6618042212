import argparse
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from moodtracker import config, database
from moodtracker.errors import MoodTrackerError, StoreError
from moodtracker.routes.auth_routes import router as auth_router
from moodtracker.routes.mood_routes import router as mood_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if database.SessionLocal is None:
        database.init_db(config.DATABASE_URL)
    yield
    database.close_db()


app = FastAPI(title="Gamified Mood Tracker", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(mood_router)


# --- Error handlers ---
@app.exception_handler(MoodTrackerError)
async def handle_app_error(request: Request, exc: MoodTrackerError):
    if isinstance(exc, StoreError):
        logger.error(f"Store failure on {request.method} {request.url.path}: {exc.message}", exc_info=exc)
        return JSONResponse(status_code=exc.status_code, content={"message": "Server error"})
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError):
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return JSONResponse(status_code=400, content={"message": "; ".join(parts) or "Invalid request"})


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)},
                        headers=getattr(exc, "headers", None))


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Gamified Mood Tracker Backend is running!"


def run(argv=None):
    """Validate configuration, connect to the database and serve the API."""
    import uvicorn

    parser = argparse.ArgumentParser(description="Run the mood tracker API server")
    parser.add_argument("--host", default=config.HOST, help="Bind address")
    parser.add_argument("--port", type=int, default=config.PORT, help="Listening port")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    missing = config.missing_settings()
    if missing:
        logger.error(f"Error: {', '.join(missing)} not defined. Please check your .env file.")
        sys.exit(1)

    try:
        database.init_db(config.DATABASE_URL)
    except StoreError as e:
        logger.error(f"Database connection error: {e.__cause__ or e}")
        sys.exit(1)

    logger.info(f"Server is running on port: {args.port}")
    if args.reload:
        uvicorn.run("moodtracker.main:app", host=args.host, port=args.port, reload=True)
    else:
        uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    run()
