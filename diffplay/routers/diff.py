"""Diff API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import Field

from diffplay.models.base import FrozenModel
from diffplay.models.config import PresentationConfig
from diffplay.models.diff import DiffView, FileContents
from diffplay.services.config_manager import ConfigManager
from diffplay.services.diff_generator import DiffGenerator

router = APIRouter()
diff_generator = DiffGenerator()


class DiffRequest(FrozenModel):
    """Request to compare two file snapshots"""

    old_file: FileContents
    new_file: FileContents
    options: dict[str, Any] | None = None  # validated leniently, bad values fall back
    swap: bool = False


class PatchRequest(FrozenModel):
    """Request for unified patch text"""

    old_file: FileContents
    new_file: FileContents
    context_lines: int = Field(default=3, ge=0, le=1000)


class PatchResponse(FrozenModel):
    """Unified patch text"""

    patch: str


def ensure_within_limits(old_file: FileContents, new_file: FileContents) -> None:
    """Reject inputs too large to diff within a request"""
    limit = ConfigManager.get_instance().get_max_input_chars()
    total = len(old_file.contents) + len(new_file.contents)
    if total > limit:
        raise HTTPException(
            status_code=413,
            detail=f"Input too large: {total} characters exceeds the limit of {limit}",
        )


@router.post("", response_model=DiffView)
def compute_diff(request: DiffRequest) -> DiffView:
    """Compute the rows for a split or unified diff view"""
    ensure_within_limits(request.old_file, request.new_file)

    # Valid request options override the saved defaults field by field
    options = ConfigManager.get_instance().get_presentation().model_dump(by_alias=True)
    if request.options:
        requested = PresentationConfig.from_options(request.options)
        options.update(requested.model_dump(by_alias=True, exclude_unset=True))

    return diff_generator.generate_diff(
        request.old_file,
        request.new_file,
        options=options,
        swap=request.swap,
    )


@router.post("/patch", response_model=PatchResponse)
def compute_patch(request: PatchRequest) -> PatchResponse:
    """Render the comparison as unified patch text"""
    ensure_within_limits(request.old_file, request.new_file)

    patch = diff_generator.generate_patch(
        request.old_file,
        request.new_file,
        context_lines=request.context_lines,
    )
    return PatchResponse(patch=patch)
