from pydantic import BaseModel
import os
from pathlib import Path
from typing import List
from dotenv import load_dotenv

# Load .env file from api directory (parent of netprophet package)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings(BaseModel):
    # Raw DATABASE_URL; scheme and sslmode are normalized in db/engine.py
    database_url: str = ""
    api_title: str = ""
    api_env: str = ""
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]
    odds_max_batch_size: int = 10

    def __init__(self):
        origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
        super().__init__(
            database_url=os.getenv("DATABASE_URL") or os.getenv("DATABASE_URL_ASYNC") or "",
            api_title=os.getenv("API_TITLE", "NetProphet Odds"),
            api_env=os.getenv("API_ENV", "dev"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=origins or ["*"],
            odds_max_batch_size=int(os.getenv("ODDS_MAX_BATCH_SIZE", "10")),
        )

settings = Settings()
