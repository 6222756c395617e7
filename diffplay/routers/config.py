"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from diffplay.models.base import FrozenModel
from diffplay.models.config import PresentationConfig
from diffplay.services.config_manager import ConfigManager

router = APIRouter()


class ConfigUpdateRequest(FrozenModel):
    """Request to update the default presentation options"""

    presentation: dict[str, Any] | None = None
    max_input_chars: int | None = None


class ConfigResponse(FrozenModel):
    """Configuration response"""

    presentation: PresentationConfig
    max_input_chars: int


@router.get("", response_model=ConfigResponse)
def get_config() -> ConfigResponse:
    """Get current default presentation options and limits"""
    config_manager = ConfigManager.get_instance()
    return ConfigResponse(
        presentation=config_manager.get_presentation(),
        max_input_chars=config_manager.get_max_input_chars(),
    )


@router.put("", response_model=ConfigResponse)
def update_config(request: ConfigUpdateRequest) -> ConfigResponse:
    """Update configuration"""
    config_manager = ConfigManager.get_instance()
    if request.max_input_chars is not None and request.max_input_chars <= 0:
        raise HTTPException(status_code=400, detail="maxInputChars must be positive")

    # Update only provided fields
    try:
        if request.presentation is not None:
            merged = {**config_manager.get_presentation().model_dump(by_alias=True), **request.presentation}
            presentation = PresentationConfig.from_options(merged)
            config_manager.set("presentation", presentation.model_dump(by_alias=True))
        if request.max_input_chars is not None:
            limits = config_manager.get("limits", {})
            if not isinstance(limits, dict):
                limits = {}
            config_manager.set("limits", {**limits, "maxInputChars": request.max_input_chars})
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return get_config()
