"""Parse raw model output into the four STAR fields.

Model output is prose-shaped rather than schema-enforced, so parsing
degrades through three strategies, tried in order, first success wins:

  1. "json"        the whole text is one flat JSON object with all four
                    fields as non-empty strings.
  2. "regex"       each ``"field": "..."`` pair is located independently.
                    All four must be found; a partial match fails the whole
                    strategy and is never merged into a result.
  3. "positional"  last resort, four fixed 100-character windows of the
                    raw text.  Always succeeds, quality unverified.

The fallback strategies keep the raw text on the result so callers can tell
a verified result from a degraded one.
"""
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)

STAR_FIELDS = ("situation", "task", "action", "result")

STRATEGY_JSON = "json"
STRATEGY_REGEX = "regex"
STRATEGY_POSITIONAL = "positional"

POSITIONAL_WINDOW = 100

# "field" : "value with \"escaped\" quotes"
_FIELD_PATTERNS = {
    name: re.compile(rf'"{name}"\s*:\s*"((?:[^"\\]|\\.)*)"', re.DOTALL)
    for name in STAR_FIELDS
}


@dataclass
class ParseResult:
    """Outcome of parsing one model response."""
    fields: dict = field(default_factory=dict)
    strategy: str = STRATEGY_JSON
    raw_response: Optional[str] = None

    @property
    def degraded(self):
        """True when field boundaries are unverified (positional fallback)."""
        return self.strategy == STRATEGY_POSITIONAL


def _parse_strict_json(raw):
    try:
        data = json.loads(raw.strip())
    except (ValueError, RecursionError):
        return None
    if not isinstance(data, dict):
        return None
    values = {name: data.get(name) for name in STAR_FIELDS}
    if not all(isinstance(v, str) and v.strip() for v in values.values()):
        return None
    return values


def _unescape(captured):
    """Decode JSON string escapes in a regex capture, keeping it as-is if invalid."""
    try:
        return json.loads(f'"{captured}"')
    except (ValueError, RecursionError):
        return captured


def _parse_regex(raw):
    values = {}
    for name, pattern in _FIELD_PATTERNS.items():
        match = pattern.search(raw)
        if not match:
            return None
        value = _unescape(match.group(1)).strip()
        if not value:
            return None
        values[name] = value
    return values


def _parse_positional(raw):
    return {
        name: raw[i * POSITIONAL_WINDOW:(i + 1) * POSITIONAL_WINDOW]
        for i, name in enumerate(STAR_FIELDS)
    }


def parse_star_response(raw):
    """Parse model output into a ParseResult. Never raises."""
    raw = raw if isinstance(raw, str) else ("" if raw is None else str(raw))

    fields = _parse_strict_json(raw)
    if fields is not None:
        return ParseResult(fields=fields, strategy=STRATEGY_JSON)

    fields = _parse_regex(raw)
    if fields is not None:
        logger.info("STAR response was not strict JSON; recovered fields by pattern match")
        return ParseResult(fields=fields, strategy=STRATEGY_REGEX, raw_response=raw)

    logger.warning("STAR response had no recognisable fields (%d chars); "
                   "using positional fallback", len(raw))
    return ParseResult(fields=_parse_positional(raw), strategy=STRATEGY_POSITIONAL,
                       raw_response=raw)
