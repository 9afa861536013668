from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class LookRequest(BaseModel):
    prompt: str = Field(..., min_length=1)
    image: Optional[str] = None  # Base64 encoded face frame, data URL prefix allowed
    top_k: Optional[int] = Field(default=None, ge=1, le=10)


class FilterModel(BaseModel):
    type: str
    colorHex: str
    intensity: float
    style: Optional[str] = None
    name: Optional[str] = None
    extra: Dict[str, Any] = Field(default_factory=dict)


class LookModel(BaseModel):
    filters: List[FilterModel]
    style: str
    description: str
    source: str
    occasion: Optional[str] = None


class ProductMatchModel(BaseModel):
    product: Dict[str, Any]
    distance: float
    similarity: float


class LookResponse(BaseModel):
    look: LookModel
    recommendations: Dict[str, List[ProductMatchModel]]
    timestamp: datetime


class PresetModel(BaseModel):
    name: str
    description: str
    prompt: str
    category: str


class PresetsResponse(BaseModel):
    presets: List[PresetModel]


class HealthResponse(BaseModel):
    status: str
    model: str
    catalog_categories: int
    timestamp: datetime
