"""Health check endpoint."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
def health_check(request: Request) -> dict[str, str]:
    """Return application status, profile directory and model provider."""
    state = request.app.state
    provider = state.generation_service.provider
    return {
        "status": "ok",
        "profiles_dir": str(state.profile_store.directory),
        "provider": provider.name,
        "model": provider.model_name,
    }
