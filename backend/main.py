import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from config import settings
from routers import health, countries, recommendations
from services import country_service

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="VisaCompass", version="0.1.0")

app.state.limiter = recommendations.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(countries.router)
app.include_router(recommendations.router)


@app.get("/")
async def root():
    return {
        "name": "VisaCompass API",
        "version": "0.1.0",
        "endpoints": ["/health", "/countries", "/recommendations"],
    }


@app.on_event("startup")
async def startup():
    # A broken catalog should stop the service before it takes traffic
    country_service.get_all()
    logger.info("VisaCompass API is running (AI scoring %s)",
                "on" if settings.ai_scoring_available else "off")


@app.on_event("shutdown")
async def shutdown():
    from utils.llm_client import close_client
    await close_client()
