"""Mock AI provider for testing and fallback."""

import json
import re
from typing import Any, Optional

from item_factory.services.ai.base import AIProvider

_COUNT_RULE = re.compile(r"^- Return exactly (\d+) (.+?) items\.$", re.MULTILINE)
_FIELD = re.compile(r"^- (\w+) \((\w+), (REQUIRED|optional)\)$")
_ALLOWED = re.compile(r"^\s+Allowed values: (.+)$")
_RANGE_BOTH = re.compile(r"^\s+Range: (-?[\d.]+) to (-?[\d.]+)$")
_RANGE_MIN = re.compile(r"^\s+Range: >= (-?[\d.]+)$")
_RANGE_MAX = re.compile(r"^\s+Range: <= (-?[\d.]+)$")
_DEFAULT_COUNT = 3


def _required_fields(prompt: str) -> list[dict[str, Any]]:
    """Required fields listed in the prompt's field section, in order."""
    fields: list[dict[str, Any]] = []
    current: Optional[dict[str, Any]] = None
    for line in prompt.splitlines():
        m = _FIELD.match(line)
        if m:
            current = {
                "name": m.group(1),
                "type": m.group(2),
                "min": None,
                "max": None,
            }
            if m.group(3) == "REQUIRED":
                fields.append(current)
            continue
        if current is None:
            continue
        m = _ALLOWED.match(line)
        if m:
            current["allowed"] = json.loads("[" + m.group(1).replace(" | ", ", ") + "]")
            continue
        m = _RANGE_BOTH.match(line)
        if m:
            current["min"] = float(m.group(1))
            current["max"] = float(m.group(2))
            continue
        m = _RANGE_MIN.match(line)
        if m:
            current["min"] = float(m.group(1))
            continue
        m = _RANGE_MAX.match(line)
        if m:
            current["max"] = float(m.group(1))
    return fields


def _mock_value(f: dict[str, Any], type_name: str, n: int) -> Any:
    if f.get("allowed"):
        return f["allowed"][0]
    kind = f["type"]
    if kind in ("integer", "float"):
        value = f["min"] if f["min"] is not None else float(n)
        if f["max"] is not None:
            value = min(value, f["max"])
        return int(value) if kind == "integer" else value
    if kind == "boolean":
        return False
    if kind == "array":
        return []
    if kind == "object":
        return {}
    if f["name"] == "displayName":
        return f"Mock {type_name} {n}"
    return f"Mock {f['name']} {n}"


def build_mock_items(prompt: str) -> list[dict[str, Any]]:
    """Deterministic items satisfying the required fields named in ``prompt``."""
    m = _COUNT_RULE.search(prompt)
    count = int(m.group(1)) if m else _DEFAULT_COUNT
    type_name = m.group(2) if m else "Item"
    fields = [f for f in _required_fields(prompt) if f["name"] != "id"]
    items = []
    for n in range(1, count + 1):
        item = {f["name"]: _mock_value(f, type_name, n) for f in fields}
        item.setdefault("displayName", f"Mock {type_name} {n}")
        items.append(item)
    return items


class MockProvider(AIProvider):
    """Mock AI provider that returns static text.

    Used for testing and as a fallback when no API key is configured.
    A fixed ``response`` can be injected for tests.
    """

    def __init__(self, response: Optional[str] = None) -> None:
        self._response = response
        self.calls: list[str] = []

    @property
    def name(self) -> str:
        """Return the provider name."""
        return "mock"

    def is_available(self) -> bool:
        """Check if the provider is available."""
        return True

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 4096,
        context: Optional[dict[str, Any]] = None,
    ) -> str:
        """Generate mock text response.

        Returns a JSON item array when prompt contains "JSON", otherwise
        static text.
        """
        self.calls.append(prompt)
        if self._response is not None:
            return self._response
        if "JSON" in prompt or (system_prompt and "JSON" in system_prompt):
            return json.dumps(build_mock_items(prompt), ensure_ascii=False, indent=2)
        return "[Mock] No items requested."
