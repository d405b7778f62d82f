"""Profile + player context -> generation prompt

Pure function of its arguments: identical input state renders a
byte-identical prompt, so prompts can be diffed across runs. Anything
time-dependent (the timestamp) is passed in by the caller.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from item_factory.core.profile.models import (
    FieldType,
    ItemProfile,
    PlayerProfile,
    ProfileField,
)

from .templates import (
    MAX_EXCLUDED_IDS,
    PromptTemplateLoader,
    TemplateContext,
    fill_template,
    render_exclude_ids,
)

EXAMPLE_FIELD_LIMIT = 5

CONTEXT_PLACEHOLDER = "{PRESET_CONTEXT}"
EXCLUDE_IDS_PLACEHOLDER = "{EXCLUDE_IDS}"


@dataclass
class GenerationParams:
    count: int = 5
    output_path: str = ""


def _num(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def _value_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _num(value)
    return json.dumps(value, ensure_ascii=False, sort_keys=True)


def _section(title: str, lines: list[str]) -> str:
    return "\n".join([f"## {title}", *lines])


def _header(profile: ItemProfile, params: GenerationParams) -> str:
    return (
        f"Generate {params.count} {profile.item_type_name} items "
        "for the world described below.\n"
        "Return ONLY a JSON array of objects, one object per item."
    )


def _template_block(
    loader: Optional[PromptTemplateLoader],
    profile: ItemProfile,
    player: PlayerProfile,
    params: GenerationParams,
    existing_ids: list[str],
    model_name: str,
    timestamp: str,
    existing_count: int,
) -> tuple[str, str]:
    """(filled header, raw template text); both "" without a template."""
    if loader is None:
        return "", ""
    name = loader.find([profile.id, profile.type_slug])
    if name is None:
        return "", ""
    raw = loader.read(name)
    ctx = TemplateContext(
        item_type=profile.item_type_name,
        count=params.count,
        preset_context=profile.custom_context,
        preset_name=profile.display_name,
        model_name=model_name,
        timestamp=timestamp,
        max_hunger=player.player_settings.max_hunger,
        max_thirst=player.player_settings.max_thirst,
        existing_count=existing_count,
        exclude_ids=tuple(existing_ids),
    )
    return fill_template(raw, ctx).strip(), raw


def _profile_block(profile: ItemProfile) -> str:
    lines = [
        f"Profile: {profile.id}",
        f"Name: {profile.display_name}",
        f"Item type: {profile.item_type_name}",
    ]
    if profile.description:
        lines.append(f"Description: {profile.description}")
    if profile.metadata:
        lines.append("Metadata:")
        for key in sorted(profile.metadata):
            lines.append(f"  {key}: {_value_text(profile.metadata[key])}")
    return _section("Item Profile", lines)


def _player_block(player: PlayerProfile) -> str:
    s = player.player_settings
    lines = []
    if not player.is_empty:
        lines.append(f"Player profile: {player.display_name or player.id}")
    lines += [
        f"- maxHunger = {s.max_hunger}",
        f"- maxThirst = {s.max_thirst}",
        f"- maxHealth = {s.max_health}",
        f"- maxStamina = {s.max_stamina}",
        f"- maxWeight = {s.max_weight} (grams)",
        f"- maxEnergy = {s.max_energy}",
    ]
    for section in player.sorted_sections():
        lines.append("")
        title = section.display_name or section.name
        if section.description:
            title += f": {section.description}"
        else:
            title += ":"
        lines.append(title)
        for stat in section.sorted_fields():
            label = stat.display_name or stat.name
            line = f"  - {label} ({stat.name}) = {_value_text(stat.value)}"
            if stat.description:
                line += f" // {stat.description}"
            lines.append(line)
    return _section("Player", lines)


def _identity_rules(f: ProfileField, profile: ItemProfile) -> list[str]:
    if f.name == "id":
        slug = profile.type_slug or "item"
        return [
            "  CRITICAL: unique identifier of the item.",
            "  Derive it from displayName: lowercase, remove every "
            "non-alphanumeric character, then prefix with "
            f'"{slug}_" (e.g. "{slug}_ironration").',
        ]
    return [
        "  CRITICAL: human-readable item name, unique within the batch.",
        "  The id is derived from this value.",
    ]


def _field_block(f: ProfileField, profile: ItemProfile) -> str:
    rules = f.validation
    head = f"- {f.name} ({f.type.value}"
    head += ", REQUIRED)" if rules.required else ", optional)"
    lines = [head]

    if f.display_name and f.display_name != f.name:
        lines.append(f"  Label: {f.display_name}")
    if f.description:
        lines.append(f"  Description: {f.description}")
    if f.is_identity:
        lines += _identity_rules(f, profile)
    if f.default_value is not None:
        lines.append(f"  Default: {_value_text(f.default_value)}")

    if f.type.has_length and (rules.min_length > 0 or rules.max_length > 0):
        unit = "characters" if f.type == FieldType.STRING else "elements"
        if rules.min_length > 0 and rules.max_length > 0:
            lines.append(f"  Length: {rules.min_length} to {rules.max_length} {unit}")
        elif rules.min_length > 0:
            lines.append(f"  Length: at least {rules.min_length} {unit}")
        else:
            lines.append(f"  Length: at most {rules.max_length} {unit}")

    if f.type.is_numeric and (rules.has_min_value or rules.has_max_value):
        if rules.has_min_value and rules.has_max_value:
            lines.append(f"  Range: {_num(rules.min_value)} to {_num(rules.max_value)}")
        elif rules.has_min_value:
            lines.append(f"  Range: >= {_num(rules.min_value)}")
        else:
            lines.append(f"  Range: <= {_num(rules.max_value)}")

    if rules.allowed_values:
        allowed = " | ".join(json.dumps(v, ensure_ascii=False) for v in rules.allowed_values)
        lines.append(f"  Allowed values: {allowed}")

    for c in rules.relationship_constraints:
        text = f"  Constraint: {f.name} {c.operator} {c.target_field}"
        if c.offset > 0:
            text += f" + {_num(c.offset)}"
        elif c.offset < 0:
            text += f" - {_num(abs(c.offset))}"
        if c.description:
            text += f" ({c.description})"
        lines.append(text)

    if rules.custom_constraint:
        lines.append(f"  Rule: {rules.custom_constraint}")
    if rules.regex_pattern:
        lines.append(f"  Pattern: {rules.regex_pattern}")

    return "\n".join(lines)


def _fields_block(profile: ItemProfile) -> str:
    blocks = [_field_block(f, profile) for f in profile.sorted_fields()]
    return _section("Fields", ["\n".join(blocks)] if blocks else ["(none)"])


def _existing_ids_block(existing_ids: list[str], existing_count: int) -> str:
    text = render_exclude_ids(existing_ids, MAX_EXCLUDED_IDS)
    if not text:
        return ""
    lines = text.rstrip("\n").split("\n")
    if existing_count > len(set(existing_ids)):
        lines.append(f"({existing_count} items of this type already exist.)")
    return _section("Existing IDs", lines)


def example_value(f: ProfileField, profile: ItemProfile) -> Any:
    """Type-appropriate placeholder for the output example."""
    if f.name == "id":
        return f"{profile.type_slug or 'item'}_example"
    if f.default_value is not None:
        return f.default_value
    rules = f.validation
    if rules.allowed_values:
        return rules.allowed_values[0]
    if f.type == FieldType.INTEGER:
        return int(rules.min_value) if rules.has_min_value else 0
    if f.type == FieldType.FLOAT:
        return float(rules.min_value) if rules.has_min_value else 0.0
    if f.type == FieldType.BOOLEAN:
        return False
    if f.type == FieldType.ARRAY:
        return []
    if f.type == FieldType.OBJECT:
        return {}
    return f"<{f.display_name or f.name}>"


def _output_block(profile: ItemProfile, params: GenerationParams) -> str:
    example = {
        f.name: example_value(f, profile)
        for f in profile.sorted_fields()[:EXAMPLE_FIELD_LIMIT]
    }
    rendered = json.dumps([example], indent=2, ensure_ascii=False)
    lines = [
        "Example (first fields only, include ALL fields listed above):",
        rendered,
        "",
        "Rules:",
        f"- Return exactly {params.count} {profile.item_type_name} items.",
        "- Output ONLY the JSON array. No Markdown, no comments, no explanation.",
        "- Every item must be a JSON object containing all REQUIRED fields.",
        "- Use the exact field names and JSON types listed above.",
    ]
    return _section("Output Format", lines)


def compile_prompt(
    profile: ItemProfile,
    player_profile: PlayerProfile,
    params: GenerationParams,
    existing_ids: Iterable[str] = (),
    model_name: str = "",
    timestamp: str = "",
    existing_count: Optional[int] = None,
    template_loader: Optional[PromptTemplateLoader] = None,
) -> str:
    """Render the full generation prompt.

    ``existing_count`` defaults to the number of distinct ``existing_ids``.
    """
    ids = sorted(set(existing_ids))
    count = len(ids) if existing_count is None else existing_count

    header, template = _template_block(
        template_loader,
        profile,
        player_profile,
        params,
        ids,
        model_name,
        timestamp,
        count,
    )

    blocks = [header or _header(profile, params)]
    if profile.custom_context and CONTEXT_PLACEHOLDER not in template:
        blocks.append(_section("World Context", [profile.custom_context.strip()]))
    blocks.append(_profile_block(profile))
    blocks.append(_player_block(player_profile))
    blocks.append(_fields_block(profile))
    if EXCLUDE_IDS_PLACEHOLDER not in template:
        existing = _existing_ids_block(ids, count)
        if existing:
            blocks.append(existing)
    blocks.append(_output_block(profile, params))

    return "\n\n".join(blocks) + "\n"
