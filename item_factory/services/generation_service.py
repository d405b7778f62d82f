"""Generation Service: one batch through the whole pipeline

compile prompt -> call model -> parse/validate -> merge/write -> registry.
Phases run strictly in that order; a failing phase ends the batch and is
reported in the returned GenerationResult, never raised. The one
exception is an unknown profile, raised as ProfileNotFoundError before
any work starts.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from item_factory.core.generation import (
    GuardrailSummary,
    ItemRejection,
    ParseError,
    parse_items,
    summarize,
)
from item_factory.core.logging import get_logger
from item_factory.core.profile import (
    GeneratedItem,
    ItemProfile,
    PlayerProfile,
    PlayerProfileStore,
    ProfileStore,
)
from item_factory.core.prompt import (
    GenerationParams,
    PromptTemplateLoader,
    compile_prompt,
)
from item_factory.core.storage import (
    IdRegistry,
    RegistryUpdate,
    WriteResult,
    get_existing_ids,
    write_items,
)
from item_factory.services.ai.base import AIProvider

logger = get_logger(__name__)


class ProfileNotFoundError(LookupError):
    """No item profile for the requested id / item type."""


@dataclass
class GenerationRequest:
    profile_id: str = ""  # takes precedence over item_type
    item_type: str = ""
    player_profile_id: str = ""
    count: int = 5
    output_path: str = ""


@dataclass
class GenerationResult:
    success: bool
    profile_id: str
    item_type: str
    output_path: str
    model_name: str = ""
    prompt: str = ""
    error: str = ""
    parse_error: Optional[ParseError] = None
    items: list[GeneratedItem] = field(default_factory=list)
    rejections: list[ItemRejection] = field(default_factory=list)
    write: Optional[WriteResult] = None
    registry: Optional[RegistryUpdate] = None
    guardrail: Optional[GuardrailSummary] = None


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class GenerationService:
    """Runs generation batches against one set of stores and one provider."""

    def __init__(
        self,
        profiles: ProfileStore,
        player_profiles: PlayerProfileStore,
        registry: IdRegistry,
        provider: AIProvider,
        output_dir: str | Path,
        template_loader: Optional[PromptTemplateLoader] = None,
        clock: Callable[[], str] = _utc_timestamp,
    ):
        self._profiles = profiles
        self._players = player_profiles
        self._registry = registry
        self._provider = provider
        self._output_dir = Path(output_dir)
        self._templates = template_loader
        self._clock = clock

    @property
    def provider(self) -> AIProvider:
        return self._provider

    # === Resolution ===

    def resolve_profile(self, request: GenerationRequest) -> ItemProfile:
        """profile_id if given, else the default profile of item_type."""
        if request.profile_id:
            profile = self._profiles.load(request.profile_id)
            what = f"id '{request.profile_id}'"
        else:
            profile = self._profiles.get_default(request.item_type)
            what = f"item type '{request.item_type}'"
        if profile.is_empty:
            raise ProfileNotFoundError(f"No item profile for {what}")
        return profile

    def resolve_player_profile(self, player_profile_id: str = "") -> PlayerProfile:
        """Requested or default player profile; built-in maximums when none exist."""
        if player_profile_id:
            player = self._players.load(player_profile_id)
            if not player.is_empty:
                return player
            logger.warning(
                "Player profile '%s' not found, using default", player_profile_id
            )
        player = self._players.get_default()
        return player if not player.is_empty else PlayerProfile()

    def output_path_for(self, profile: ItemProfile, request: GenerationRequest) -> Path:
        if request.output_path:
            return Path(request.output_path)
        return self._output_dir / f"items_{profile.type_slug or 'item'}.json"

    def known_ids(self, profile: ItemProfile, output_path: Path) -> set[str]:
        """Ids in the output file plus every id ever issued for the type."""
        return get_existing_ids(output_path) | self._registry.load_ids(
            profile.item_type_name
        )

    # === Phases ===

    def build_prompt(self, request: GenerationRequest) -> tuple[ItemProfile, str]:
        profile = self.resolve_profile(request)
        player = self.resolve_player_profile(request.player_profile_id)
        output_path = self.output_path_for(profile, request)
        ids = self.known_ids(profile, output_path)
        prompt = compile_prompt(
            profile,
            player,
            GenerationParams(count=request.count, output_path=str(output_path)),
            existing_ids=ids,
            model_name=self._provider.model_name,
            timestamp=self._clock(),
            existing_count=len(ids),
            template_loader=self._templates,
        )
        return profile, prompt

    def generate(self, request: GenerationRequest) -> GenerationResult:
        profile, prompt = self.build_prompt(request)
        output_path = self.output_path_for(profile, request)
        result = GenerationResult(
            success=False,
            profile_id=profile.id,
            item_type=profile.item_type_name,
            output_path=str(output_path),
            model_name=self._provider.model_name,
            prompt=prompt,
        )
        logger.info(
            "Generating %d %s items with %s (profile: %s)",
            request.count,
            profile.item_type_name,
            self._provider.name,
            profile.id,
        )

        try:
            raw = self._provider.generate(prompt)
        except RuntimeError as e:
            logger.error("Model call failed: %s", e)
            result.error = str(e)
            return result

        parsed = parse_items(raw, profile)
        result.parse_error = parsed.error
        result.rejections = parsed.rejections
        if not parsed.success:
            result.error = (
                parsed.error.message if parsed.error else "No valid items in model output"
            )
            return result
        result.items = parsed.items
        result.guardrail = summarize(
            profile.item_type_name, parsed.items, rejected=len(parsed.rejections)
        )

        write = write_items(parsed.items, output_path)
        result.write = write
        if not write.success:
            result.error = f"Failed to write {output_path}"
            return result

        result.registry = self._registry.append(profile.item_type_name, parsed.items)
        result.success = True
        return result
