"""Generation API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request

from item_factory.api.schemas import (
    ErrorResponse,
    GenerateRequest,
    GenerateResponse,
    ParseErrorInfo,
    PromptPreviewResponse,
    RejectionInfo,
)
from item_factory.config import settings
from item_factory.core.logging import get_logger
from item_factory.services.generation_service import (
    GenerationRequest,
    GenerationResult,
    GenerationService,
    ProfileNotFoundError,
)

logger = get_logger(__name__)

router = APIRouter(tags=["generation"])


def get_generation_service(request: Request) -> GenerationService:
    """GenerationService instance (dependency injection)"""
    service: GenerationService = request.app.state.generation_service
    return service


def _to_service_request(body: GenerateRequest) -> GenerationRequest:
    return GenerationRequest(
        profile_id=body.profile_id or "",
        item_type=body.item_type or "",
        player_profile_id=body.player_profile_id or "",
        count=body.count or settings.DEFAULT_ITEM_COUNT,
        output_path=body.output_path or "",
    )


def _build_response(result: GenerationResult) -> GenerateResponse:
    response = GenerateResponse(
        success=result.success,
        profile_id=result.profile_id,
        item_type=result.item_type,
        output_path=result.output_path,
        model_name=result.model_name,
        error=result.error or None,
        parsed_count=len(result.items),
        rejections=[
            RejectionInfo(index=r.index, item_id=r.item_id, errors=r.errors)
            for r in result.rejections
        ],
        items=result.items,
    )
    if result.parse_error is not None:
        response.parse_error = ParseErrorInfo(
            kind=result.parse_error.kind.value,
            message=result.parse_error.message,
            position=result.parse_error.position,
        )
    if result.write is not None:
        response.added_count = result.write.added_count
        response.skipped_duplicates = result.write.skipped_duplicates
        response.total_count = result.write.total_count
    if result.registry is not None:
        response.registry_added = result.registry.added_count
        response.registry_total = result.registry.after_count
    if result.guardrail is not None:
        response.banned_hits = result.guardrail.banned_hits
        response.rarity_counts = result.guardrail.rarity_counts
    return response


@router.post(
    "/generate",
    response_model=GenerateResponse,
    responses={404: {"model": ErrorResponse}},
)
def generate_items(
    body: GenerateRequest,
    service: GenerationService = Depends(get_generation_service),
) -> GenerateResponse:
    """
    Run one generation batch.

    A failed batch (model error, unparsable output, nothing valid) is a
    200 with success=false; only an unknown profile is an HTTP error.
    """
    try:
        result = service.generate(_to_service_request(body))
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if not result.success:
        logger.warning("Generation failed for %s: %s", result.profile_id, result.error)
    return _build_response(result)


@router.post(
    "/prompt/preview",
    response_model=PromptPreviewResponse,
    responses={404: {"model": ErrorResponse}},
)
def preview_prompt(
    body: GenerateRequest,
    service: GenerationService = Depends(get_generation_service),
) -> PromptPreviewResponse:
    """Compiled prompt for a request, without calling the model."""
    try:
        profile, prompt = service.build_prompt(_to_service_request(body))
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return PromptPreviewResponse(profile_id=profile.id, prompt=prompt)
