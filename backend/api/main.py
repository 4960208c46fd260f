from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sourcing.catalog_match import __version__

from backend.core.config import settings
from backend.api.routers import (
    ai_router,
    catalogs_router,
    client_requests_router,
    match_router,
)

app = FastAPI(title="Catalog Match", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(catalogs_router)
app.include_router(client_requests_router)
app.include_router(match_router)
app.include_router(ai_router)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "version": __version__}
