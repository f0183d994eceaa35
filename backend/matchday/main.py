import logging
import os
from typing import List

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from matchday.database import init_db
from matchday.routes import assignment, fixtures, sessions, teams

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

APP_NAME = "Matchday Organizer API"

app = FastAPI(title=APP_NAME)

_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
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

system_router = APIRouter()


@system_router.get("/health")
def health_check():
    return {"app_name": APP_NAME, "status": "healthy"}


ROUTERS = (
    (sessions.router, "sessions"),
    (assignment.router, "assignment"),
    (fixtures.router, "fixtures"),
    (teams.router, "teams"),
    (system_router, "system"),
)

# Include routers
for router, tag in ROUTERS:
    app.include_router(router, prefix="/api", tags=[tag])


def api_routes() -> List[APIRoute]:
    """Endpoints mounted under /api, read from the routers themselves."""
    return [r for router, _ in ROUTERS for r in router.routes if isinstance(r, APIRoute)]


@app.on_event("startup")
def on_startup():
    init_db()

    routes = api_routes()
    for r in routes:
        logger.debug("%-20s /api%s", ", ".join(sorted(r.methods)), r.path)
    logger.info("%s ready: %d routes registered", APP_NAME, len(routes))
