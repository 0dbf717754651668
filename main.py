from fastapi import FastAPI
from app.api.v1.endpoints import resumes, analyzer, interviews
from app.core.config import settings
from app.db.database import init_db
from contextlib import asynccontextmanager
import logging

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield

app = FastAPI(title=settings.APP_NAME, version="0.3.0", lifespan=lifespan)
app.include_router(resumes.router, prefix="/api/v1/resumes", tags=["resumes"])
app.include_router(analyzer.router, prefix="/api/v1/analyzer", tags=["analyzer"])
app.include_router(interviews.router, prefix="/api/v1/interviews", tags=["interviews"])

@app.get("/health", tags=["health"])
async def health():
    """Health check endpoint returning service status."""
    return {"status": "ok"}
