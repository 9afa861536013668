"""
Makeup look endpoints: prompt interpretation, product recommendations, presets.

The server has no rendering engine of its own; the browser applies the
returned look and uses the recommendations as they are.
"""

import base64
import binascii
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, HTTPException, Request

from glam_agents.interpretation.presets import list_presets
from glam_agents.interpretation.prompt_interpreter import PromptInterpreter
from glam_agents.recommendation.product_matcher import ProductRecommender
from glam_api.requests import HealthResponse, LookRequest, LookResponse, PresetsResponse
from setup_logging_optimized import get_logger

router = APIRouter(prefix="/api/makeup", tags=["makeup"])

logger = get_logger(__name__)


def _decode_image(image: Optional[str]) -> Optional[bytes]:
    if not image:
        return None
    if image.startswith("data:") and "," in image:
        image = image.split(",", 1)[1]
    try:
        return base64.b64decode(image, validate=True)
    except (binascii.Error, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid base64 image: {e}")


@router.post("/looks", response_model=LookResponse)
async def create_look(body: LookRequest, request: Request):
    """Interpret a styling prompt and recommend matching products."""
    if not body.prompt.strip():
        raise HTTPException(status_code=422, detail="Prompt must not be blank")

    interpreter: PromptInterpreter = request.app.state.interpreter
    recommender: ProductRecommender = request.app.state.recommender
    catalog = request.app.state.catalog

    image_bytes = _decode_image(body.image)
    look = await interpreter.interpret(body.prompt, image_bytes)
    recommendations = await recommender.recommend(look, catalog, k=body.top_k)

    logger.info(f"Served look '{look.style}' ({look.source.value}) for {body.prompt!r}")
    return {
        "look": look.to_dict(),
        "recommendations": {
            filter_type: [m.to_dict() for m in matches]
            for filter_type, matches in recommendations.items()
        },
        "timestamp": datetime.now(),
    }


@router.get("/presets", response_model=PresetsResponse)
async def get_presets(category: Optional[str] = None):
    return {"presets": [p.to_dict() for p in list_presets(category)]}


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    return {
        "status": "healthy",
        "model": request.app.state.model_name,
        "catalog_categories": len(request.app.state.catalog),
        "timestamp": datetime.now(),
    }
