from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import uvicorn

from app.core.config import settings
from app.core.log_config import configure_logging
from app.modules.auth.routes import router as auth_router
from app.modules.auth.services import auth_events
from app.modules.tenders.routes import router as tenders_router
from app.modules.favorites.routes import router as favorites_router
from app.modules.filters.routes import router as filters_router
from app.modules.entities.routes import router as entities_router
from app.modules.timeline.routes import router as calendar_router
from app.modules.validator.routes import router as validator_router

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Concursos Públicos API",
    version=settings.VERSION,
    debug=settings.DEBUG
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers with API prefix
api_prefix = settings.API_PREFIX
app.include_router(auth_router, prefix=f"{api_prefix}/auth", tags=["Autenticação"])
app.include_router(tenders_router, prefix=f"{api_prefix}/tenders", tags=["Concursos"])
app.include_router(favorites_router, prefix=f"{api_prefix}/favorites", tags=["Favoritos"])
app.include_router(filters_router, prefix=f"{api_prefix}/filters", tags=["Filtros"])
app.include_router(entities_router, prefix=f"{api_prefix}/entities", tags=["Entidades"])
app.include_router(calendar_router, prefix=f"{api_prefix}/calendar", tags=["Calendário"])
app.include_router(validator_router, prefix=f"{api_prefix}/validator", tags=["VIES"])

def log_session_change(event, context):
    logger.info(f"Session change {event} for {context.email}")

auth_events.subscribe(log_session_change)

@app.get("/")
async def root():
    return {
        "app_name": settings.APP_NAME,
        "version": settings.VERSION,
        "message": "Welcome to the API"
    }

if __name__ == "__main__":
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
