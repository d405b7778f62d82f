"""Model output cleaning, identity synthesis and validation"""

from .cleaning import clean_json_array_text
from .guardrail import GuardrailSummary, summarize
from .identity import assign_identity, derive_id
from .parser import ItemRejection, ParseError, ParseErrorKind, ParseResult, parse_items
from .validation import apply_defaults, validate_item

__all__ = [
    "clean_json_array_text",
    "GuardrailSummary",
    "summarize",
    "assign_identity",
    "derive_id",
    "ItemRejection",
    "ParseError",
    "ParseErrorKind",
    "ParseResult",
    "parse_items",
    "apply_defaults",
    "validate_item",
]
