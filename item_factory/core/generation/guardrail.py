"""Post-parse quality summary: placeholder text hits and rarity spread.

Report only. Nothing here rejects items.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable

from item_factory.core.logging import get_logger

logger = get_logger(__name__)

BANNED_WORDS = ("dummy", "lorem", "ipsum", "placeholder", "test item", "badword")


@dataclass
class GuardrailSummary:
    type_name: str
    total: int = 0
    rejected: int = 0
    banned_hits: int = 0
    flagged_ids: list[str] = field(default_factory=list)
    rarity_counts: dict[str, int] = field(default_factory=dict)

    def rarity_share(self, rarity: str) -> float:
        if not self.total:
            return 0.0
        return self.rarity_counts.get(rarity, 0) / self.total


def _strings(value: Any) -> Iterable[str]:
    if isinstance(value, str):
        yield value
    elif isinstance(value, list):
        for v in value:
            yield from _strings(v)
    elif isinstance(value, dict):
        for v in value.values():
            yield from _strings(v)


def count_banned_hits(text: str) -> int:
    """Number of distinct banned words contained in ``text``."""
    low = text.lower()
    return sum(1 for w in BANNED_WORDS if w in low)


def summarize(
    type_name: str, items: list[dict[str, Any]], rejected: int = 0
) -> GuardrailSummary:
    summary = GuardrailSummary(type_name=type_name, total=len(items), rejected=rejected)
    rarities: Counter[str] = Counter()

    for item in items:
        hits = sum(count_banned_hits(s) for s in _strings(item))
        if hits:
            summary.banned_hits += hits
            summary.flagged_ids.append(str(item.get("id", "")))
        rarity = item.get("rarity")
        if isinstance(rarity, str) and rarity:
            rarities[rarity] += 1

    summary.rarity_counts = dict(sorted(rarities.items()))

    spread = " ".join(
        f"{k}={v} ({v * 100 // summary.total}%)"
        for k, v in summary.rarity_counts.items()
    )
    logger.info(
        "[Guardrail] type=%s items=%d rejected=%d bannedHits=%d %s",
        type_name,
        summary.total,
        rejected,
        summary.banned_hits,
        spread,
    )
    if summary.flagged_ids:
        logger.warning(
            "Placeholder text found in items: %s", ", ".join(summary.flagged_ids)
        )
    return summary
