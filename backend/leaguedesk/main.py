import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from leaguedesk.database import init_db
from leaguedesk.routes import scheduler, seasons

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="LeagueDesk API")

_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
]
_extra = os.getenv("CORS_ORIGINS", "")
if _extra:
    _cors_origins.extend(o.strip() for o in _extra.split(",") if o.strip())

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(seasons.router, prefix="/api", tags=["seasons"])
app.include_router(scheduler.router, prefix="/api", tags=["scheduler"])


@app.on_event("startup")
def on_startup():
    init_db()
    logger.info(f"LeagueDesk API started ({len(app.routes)} routes)")


@app.get("/api/health")
def health_check():
    return {"app_name": "LeagueDesk API", "status": "healthy"}
