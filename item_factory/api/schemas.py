"""API request/response schemas.

Profile documents themselves travel in their on-disk camelCase JSON form
(see core.profile.codec); only summaries and generation payloads are
modelled here.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator


# === Request Schemas ===


class GenerateRequest(BaseModel):
    """Generation batch request. Either profile_id or item_type is required."""

    profile_id: Optional[str] = Field(None, description="Item profile id")
    item_type: Optional[str] = Field(
        None, description="Item type; its default profile is used"
    )
    player_profile_id: Optional[str] = Field(None, description="Player profile id")
    count: Optional[int] = Field(None, ge=1, le=100, description="Items to request")
    output_path: Optional[str] = Field(None, description="Output JSON array file")

    @model_validator(mode="after")
    def _needs_profile_or_type(self) -> "GenerateRequest":
        if not self.profile_id and not self.item_type:
            raise ValueError("profile_id or item_type is required")
        return self


# === Response Schemas ===


class ProfileSummary(BaseModel):
    """Item profile list entry"""

    id: str
    display_name: str
    item_type_name: str
    version: int
    is_default: bool
    field_count: int


class PlayerProfileSummary(BaseModel):
    """Player profile list entry"""

    id: str
    display_name: str
    is_default: bool
    section_count: int


class ValidationResponse(BaseModel):
    valid: bool
    errors: list[str] = []


class ParseErrorInfo(BaseModel):
    kind: str
    message: str
    position: Optional[int] = None


class RejectionInfo(BaseModel):
    index: int
    item_id: str
    errors: list[str]


class GenerateResponse(BaseModel):
    """Outcome of one generation batch"""

    success: bool
    profile_id: str
    item_type: str
    output_path: str
    model_name: str
    error: Optional[str] = None
    parse_error: Optional[ParseErrorInfo] = None
    parsed_count: int = 0
    added_count: int = 0
    skipped_duplicates: int = 0
    total_count: int = 0
    rejections: list[RejectionInfo] = []
    registry_added: int = 0
    registry_total: Optional[int] = None
    banned_hits: int = 0
    rarity_counts: dict[str, int] = {}
    items: list[dict[str, Any]] = []


class PromptPreviewResponse(BaseModel):
    profile_id: str
    prompt: str


class ErrorResponse(BaseModel):
    """Error response"""

    detail: Any
