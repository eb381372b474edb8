"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from earlbox import __version__
from earlbox.config import settings
from earlbox.database import engine, get_db
from earlbox.exceptions import EarlBoxError, ValidationError
from earlbox.models import Base
from earlbox.schemas.common import ErrorResponse, HealthResponse


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    await engine.dispose()


app = FastAPI(
    title="Earl Box API",
    version=__version__,
    description="Upload a file, get a public link.",
    lifespan=lifespan,
)

# CORS
origins = [o.strip() for o in settings.CORS_ORIGINS.split(",")]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials="*" not in origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(EarlBoxError)
async def service_error_handler(request: Request, exc: EarlBoxError):
    """ValidationError and subclasses are the caller's fault; the rest are ours."""
    status_code = 400 if isinstance(exc, ValidationError) else 500
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=exc.code, detail=str(exc)).model_dump(),
    )


@app.get("/api/healthcheck", response_model=HealthResponse)
async def healthcheck(db: AsyncSession = Depends(get_db)):
    """Verify API and database connectivity."""
    timestamp = datetime.now(timezone.utc)
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        return {"status": "error", "timestamp": timestamp, "database": str(e)}
    return {"status": "ok", "timestamp": timestamp}


# Register routers
from earlbox.routes.files import router as files_router
from earlbox.routes.downloads import router as downloads_router
app.include_router(files_router)
app.include_router(downloads_router)
