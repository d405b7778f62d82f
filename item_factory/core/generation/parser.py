"""Raw model text -> validated, identity-complete items

Failures before per-item processing (blank text, bad JSON, wrong root)
abort the call. After that each element is handled independently: a bad
element is rejected with its errors and the rest of the batch survives.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from item_factory.core.logging import get_logger
from item_factory.core.profile.models import GeneratedItem, ItemProfile

from .cleaning import clean_json_array_text
from .identity import assign_identity
from .validation import apply_defaults, validate_item

logger = get_logger(__name__)


class ParseErrorKind(str, Enum):
    EMPTY_INPUT = "empty_input"
    MALFORMED_JSON = "malformed_json"
    NOT_AN_ARRAY = "not_an_array"
    EMPTY_ARRAY = "empty_array"


@dataclass
class ParseError:
    kind: ParseErrorKind
    message: str
    position: Optional[int] = None  # character offset into the cleaned text


@dataclass
class ItemRejection:
    index: int  # 0-based index in the model's array
    errors: list[str]
    item_id: str = ""


@dataclass
class ParseResult:
    items: list[GeneratedItem] = field(default_factory=list)
    error: Optional[ParseError] = None
    rejections: list[ItemRejection] = field(default_factory=list)
    skipped_non_objects: int = 0
    total_elements: int = 0

    @property
    def success(self) -> bool:
        return bool(self.items)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def _load_array(raw_text: str) -> tuple[Optional[list[Any]], Optional[ParseError]]:
    cleaned = clean_json_array_text(raw_text)
    if not cleaned:
        return None, ParseError(ParseErrorKind.EMPTY_INPUT, "Model response is empty")

    try:
        data = json.loads(cleaned, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        return None, ParseError(
            ParseErrorKind.MALFORMED_JSON,
            f"JSON parse error: {e.msg}",
            position=e.pos,
        )
    except ValueError as e:
        return None, ParseError(ParseErrorKind.MALFORMED_JSON, f"JSON parse error: {e}")

    if not isinstance(data, list):
        return None, ParseError(
            ParseErrorKind.NOT_AN_ARRAY,
            f"Root JSON is not an array (got {type(data).__name__})",
        )
    if not data:
        return None, ParseError(ParseErrorKind.EMPTY_ARRAY, "JSON array is empty")
    return data, None


def parse_items(raw_text: str, profile: ItemProfile) -> ParseResult:
    """Clean, parse and validate one model response against ``profile``."""
    data, error = _load_array(raw_text or "")
    if error is not None:
        logger.error("Parse failed (%s): %s", error.kind.value, error.message)
        return ParseResult(error=error)

    result = ParseResult(total_elements=len(data))
    for index, element in enumerate(data):
        if not isinstance(element, dict):
            logger.warning("Element %d is not an object, skipping", index)
            result.skipped_non_objects += 1
            continue

        item = copy.deepcopy(element)
        apply_defaults(item, profile)
        assign_identity(item, profile.item_type_name, index + 1)

        errors = validate_item(item, profile)
        if errors:
            logger.warning(
                "Item %d (%s) rejected: %s", index, item["id"], "; ".join(errors)
            )
            result.rejections.append(
                ItemRejection(index=index, errors=errors, item_id=item["id"])
            )
            continue
        result.items.append(item)

    logger.info(
        "Parsed %d/%d items for profile '%s' (%d rejected, %d non-objects)",
        len(result.items),
        result.total_elements,
        profile.id,
        len(result.rejections),
        result.skipped_non_objects,
    )
    return result
