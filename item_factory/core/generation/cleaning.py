"""Model response text cleanup before JSON parsing."""

from __future__ import annotations

import re

_FENCE_BLOCK = re.compile(r"```(?:json|JSON)?\s*(.*?)\s*```", re.DOTALL)
_OPEN_FENCE = re.compile(r"```(?:json|JSON)?\s*")
_OBJECT_ARRAY_START = re.compile(r"\[\s*\{")
_EMPTY_ARRAY = re.compile(r"\[\s*\]")


def _strip_fences(text: str) -> str:
    """Content of the first fenced block, or text minus any stray fences."""
    match = _FENCE_BLOCK.search(text)
    if match:
        return match.group(1)
    # unterminated fence (truncated response)
    return _OPEN_FENCE.sub("", text).replace("```", "")


def _scan_brackets(text: str) -> tuple[int, int]:
    """(index of the ']' closing text[0], unclosed '[' count) outside strings.

    The index is -1 when the first array never closes.
    """
    balance = 0
    in_string = False
    escaped = False
    for i, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "[":
            balance += 1
        elif ch == "]":
            balance -= 1
            if balance == 0:
                return i, 0
    return -1, balance


def _slice_array(text: str) -> str:
    """Cut leading/trailing prose around the outermost array.

    An array of objects wins over an earlier ``[]`` or bare ``[`` in prose.
    """
    match = _OBJECT_ARRAY_START.search(text) or _EMPTY_ARRAY.search(text)
    start = match.start() if match else text.find("[")
    if start < 0:
        return text
    end, _ = _scan_brackets(text[start:])
    if end < 0:
        return text[start:]
    return text[start : start + end + 1]


def clean_json_array_text(raw: str) -> str:
    """Reduce a model response to a bare JSON array text.

    Strips markdown fences and surrounding prose, drops a dangling
    trailing comma and closes unbalanced ``[``. Returns "" for blank input.
    """
    if not raw or not raw.strip():
        return ""

    text = _slice_array(_strip_fences(raw)).strip()
    if not text:
        return ""

    if text.endswith(","):
        text = text[:-1].rstrip()

    _, missing = _scan_brackets(text)
    if missing > 0:
        text += "\n]" * missing

    return text
