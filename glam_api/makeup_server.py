"""
HTTP server for the makeup look pipeline.

Run with: python -m glam_api.makeup_server
"""

import os
import logging
from contextlib import asynccontextmanager

import uvicorn
import sentry_sdk
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from setup_logging_optimized import setup_logging, get_logger
from glam_agents.logging_config import apply_logging_config
from glam_agents.settings import get_config

load_dotenv()

# Configure logging for the entire application
LOG_LEVEL = get_config().logging.level
setup_logging(LOG_LEVEL)
apply_logging_config(level=LOG_LEVEL)

logger = get_logger(__name__)

ENVIRONMENT = (os.getenv("ENV") or "development").lower()

if os.getenv("SENTRY_DSN"):
    sentry_logging = LoggingIntegration(
        level=logging.INFO,        # Capture info and above as breadcrumbs
        event_level=logging.ERROR  # Send errors as events
    )
    sentry_sdk.init(
        dsn=os.getenv("SENTRY_DSN"),
        integrations=[
            FastApiIntegration(transaction_style='endpoint'),
            sentry_logging,
        ],
        traces_sample_rate=0.1,
        environment=ENVIRONMENT,
        send_default_pii=False,
    )

from glam_agents.ai.clients import ModelClient
from glam_agents.catalog.product_catalog import load_catalog
from glam_agents.exceptions import InvalidConfigError
from glam_agents.interpretation.prompt_interpreter import PromptInterpreter
from glam_agents.persistence.look_cache import LookCache
from glam_agents.recommendation.product_matcher import ProductRecommender
from glam_api.api_makeup import router as makeup_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    try:
        model_client = ModelClient(
            config.model.model,
            temperature=config.model.temperature,
            max_tokens=config.model.max_tokens
        )
    except ValueError as e:
        raise InvalidConfigError(f"Unsupported MAKEUP_MODEL {config.model.model!r}", cause=e)

    app.state.model_name = config.model.model
    app.state.interpreter = PromptInterpreter(
        model_client,
        cache=LookCache(config.cache.max_entries, config.cache.ttl_seconds),
        timeout=config.model.timeout_seconds
    )
    app.state.recommender = ProductRecommender(top_k=config.recommendation.top_k)
    app.state.catalog = load_catalog(config.recommendation.catalog_path)
    logger.info(f"Makeup API ready (model={config.model.model}, env={ENVIRONMENT})")
    yield
    app.state.interpreter.cache.clear()
    await model_client.aclose()


app = FastAPI(title="Glam Agents Makeup API", lifespan=lifespan)

allowed_origins = set(filter(None, os.getenv("CORS_ORIGINS", "").split(",")))
if ENVIRONMENT != "production":
    allowed_origins.update(
        {
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        }
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(allowed_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)

app.include_router(makeup_router)


if __name__ == "__main__":
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "9090"))
    logger.info(f"Starting Glam Agents Makeup API on http://{host}:{port}")
    uvicorn.run("glam_api.makeup_server:app", host=host, port=port, reload=ENVIRONMENT != "production", workers=1)
