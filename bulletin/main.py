import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bulletin.config import settings
from bulletin.database import create_tables, engine
from bulletin.exceptions import register_exception_handlers
from bulletin.logging_config import setup_logging
from bulletin.middleware import TimingMiddleware
from bulletin.routers import boards, comments, posts, users

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging(settings.LOG_LEVEL)
    if settings.CREATE_TABLES_ON_STARTUP:
        await create_tables()
    logger.info("Bulletin board API started (env=%s)", settings.APP_ENV)
    yield
    # Shutdown
    await engine.dispose()

app = FastAPI(
    title="Bulletin Board API",
    description="Boards, posts and comments with pagination, search and moderation counters",
    version="1.0.0",
    lifespan=lifespan,
)

# Middleware
app.add_middleware(TimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Routers
app.include_router(boards.router)
app.include_router(users.router)
app.include_router(posts.router)
app.include_router(comments.router)

@app.get("/health")
async def health():
    return {"status": "healthy", "version": "1.0.0"}
