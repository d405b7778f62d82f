"""External prompt templates

Optional plain-text files ``{prompts_dir}/<name>.txt`` holding the header of
a generation prompt. Placeholders are literal ``{NAME}`` tokens, replaced
with ``str.replace`` so JSON braces in the template survive untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from item_factory.core.logging import get_logger

logger = get_logger(__name__)

MAX_EXCLUDED_IDS = 20


@dataclass
class TemplateContext:
    item_type: str
    count: int
    preset_context: str = ""
    preset_name: str = ""
    model_name: str = ""
    timestamp: str = ""
    max_hunger: int = 100
    max_thirst: int = 100
    existing_count: int = 0
    exclude_ids: tuple[str, ...] = ()


def render_exclude_ids(ids: Iterable[str], limit: int = MAX_EXCLUDED_IDS) -> str:
    """Sorted id list capped at ``limit``, or "" when there is nothing to avoid."""
    ordered = sorted(set(ids))
    if not ordered:
        return ""
    shown = ", ".join(ordered[:limit])
    if len(ordered) > limit:
        shown += f" ... (and {len(ordered) - limit} more, list truncated)"
    return (
        "IMPORTANT - Avoid these existing item IDs (do NOT use these):\n"
        f"{shown}\n"
        "Generate NEW unique IDs that are different from all existing IDs.\n"
    )


class PromptTemplateLoader:
    """Reads and fills ``.txt`` templates from one directory."""

    def __init__(self, prompts_dir: str | Path) -> None:
        self._dir = Path(prompts_dir)

    @property
    def directory(self) -> Path:
        return self._dir

    def template_path(self, name: str) -> Path:
        return self._dir / f"{name}.txt"

    def exists(self, name: str) -> bool:
        return bool(name) and self.template_path(name).is_file()

    def find(self, names: Iterable[str]) -> Optional[str]:
        """First existing template among ``names``."""
        for name in names:
            if self.exists(name):
                return name
        return None

    def read(self, name: str) -> str:
        """Raw template text, or "" when missing or unreadable."""
        path = self.template_path(name)
        if not path.is_file():
            return ""
        try:
            with path.open(encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            logger.warning("Failed to read prompt template %s: %s", path, e)
            return ""
        return text

    def load(self, name: str, ctx: TemplateContext) -> str:
        """Filled template text, or "" when missing or unreadable."""
        text = self.read(name)
        return fill_template(text, ctx) if text else ""


def fill_template(text: str, ctx: TemplateContext) -> str:
    replacements = {
        "{PRESET_CONTEXT}": ctx.preset_context,
        "{PRESET_NAME}": ctx.preset_name,
        "{ITEM_TYPE}": ctx.item_type,
        "{MODEL_NAME}": ctx.model_name,
        "{TIMESTAMP}": ctx.timestamp,
        "{MAX_HUNGER}": str(ctx.max_hunger),
        "{MAX_THIRST}": str(ctx.max_thirst),
        "{COUNT}": str(ctx.count),
        "{EXISTING_COUNT}": str(ctx.existing_count),
        "{EXCLUDE_IDS}": render_exclude_ids(ctx.exclude_ids),
    }
    for token, value in replacements.items():
        text = text.replace(token, value)
    return text
