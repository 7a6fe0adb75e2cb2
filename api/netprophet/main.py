import logging

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text

from netprophet.config import settings
from netprophet.db_session import get_db
from netprophet.routers import odds, parlay

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
_logger = logging.getLogger(__name__)

app = FastAPI(title=settings.api_title)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def _startup():
    _logger.info(
        "startup: env=%s batch_limit=%s db_configured=%s",
        settings.api_env,
        settings.odds_max_batch_size,
        bool(settings.database_url),
    )


@app.get("/health")
async def health(db: AsyncSession = Depends(get_db)):
    await db.execute(text("SELECT 1"))
    return {"ok": True}

app.include_router(odds.router, prefix="/odds")
app.include_router(parlay.router, prefix="/parlay")
