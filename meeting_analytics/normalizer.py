"""Turn Gemini's free-text reply into transcript and analytics strings.

The model is asked for a JSON object, but it often wraps it in a fenced
code block, surrounds it with prose, or ignores the instruction entirely.
``normalize_response`` tries a fixed list of strategies in order and always
returns something displayable.
"""

import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from pydantic import ValidationError

from .models import MeetingAnalysis, Topic

logger = logging.getLogger(__name__)

NO_TRANSCRIPT = "No transcript available"
NO_ANALYTICS = "No analytics available"

_LEADING_FENCE = re.compile(r"^```[\w+-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?```\s*$")
_EMBEDDED_OBJECT = re.compile(r"\{[\s\S]*\}")


class ParseStrategy(str, Enum):
    DIRECT = "direct"
    EMBEDDED_OBJECT = "embedded_object"
    RAW_TEXT = "raw_text"
    MIDPOINT_SPLIT = "midpoint_split"


@dataclass
class NormalizedResponse:
    strategy: ParseStrategy
    transcript: str
    analytics: str
    analysis: Optional[MeetingAnalysis] = None


def unstructured_placeholder(media_kind: str) -> str:
    return (
        "Unable to generate structured analytics. "
        f"Please try with a different {media_kind} or check the transcript above."
    )


def strip_code_fences(text: str) -> str:
    """Remove a leading ```lang fence and a trailing ``` fence."""
    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def _load_object(text: str) -> dict:
    try:
        parsed = json.loads(text)
    except RecursionError as e:
        raise ValueError(f"JSON nested too deeply: {e}") from e
    if not isinstance(parsed, dict):
        raise ValueError(f"expected a JSON object, got {type(parsed).__name__}")
    return parsed


def _parse_direct(raw: str) -> Tuple[bool, Optional[dict]]:
    cleaned = strip_code_fences(raw)
    try:
        return True, _load_object(cleaned)
    except ValueError as e:
        logger.warning("Reply is not plain JSON: %s", e)
        logger.debug("Failed to parse: %s", cleaned[:200])
        return False, None


def _parse_embedded(raw: str) -> Tuple[bool, Optional[dict]]:
    match = _EMBEDDED_OBJECT.search(raw)
    if not match:
        return False, None
    try:
        return True, _load_object(match.group(0))
    except ValueError as e:
        logger.warning("Embedded JSON object could not be parsed: %s", e)
        return False, None


# Tried in order; the first one that parses wins.
PARSE_STRATEGIES: List[Tuple[ParseStrategy, Callable[[str], Tuple[bool, Optional[dict]]]]] = [
    (ParseStrategy.DIRECT, _parse_direct),
    (ParseStrategy.EMBEDDED_OBJECT, _parse_embedded),
]


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, indent=2, ensure_ascii=False)


def _validate(data: dict) -> Optional[MeetingAnalysis]:
    try:
        return MeetingAnalysis.model_validate(data)
    except ValidationError as e:
        logger.warning("Reply does not match the meeting analysis shape: %d errors", e.error_count())
        return None


def render_transcript(analysis: MeetingAnalysis) -> str:
    """Rebuild a speaker transcript from the participants' segments."""
    turns = []
    for participant in analysis.participants:
        for segment in participant.segments:
            if segment.text:
                turns.append((segment.timestamp or "", participant.label, segment.text))
    turns.sort(key=lambda turn: turn[0])
    lines = []
    for timestamp, speaker, text in turns:
        prefix = f"[{timestamp}] " if timestamp else ""
        lines.append(f"{prefix}{speaker}: {text}")
    return "\n".join(lines)


def _participant_line(participant) -> str:
    details = []
    if participant.speaking_time:
        details.append(f"speaking time: {participant.speaking_time}")
    if participant.presence_duration:
        details.append(f"present: {participant.presence_duration}")
    if participant.sentiment:
        details.append(f"sentiment: {participant.sentiment}")
    if participant.emotion:
        details.append(f"emotion: {participant.emotion}")
    if participant.engagement_score is not None:
        details.append(f"engagement: {participant.engagement_score:.2f}")
    if participant.verified is False:
        details.append("unverified")
    line = f"- {participant.label}"
    if details:
        line += f" ({', '.join(details)})"
    if participant.summary:
        line += f": {participant.summary}"
    return line


def _topic_line(topic) -> str:
    if isinstance(topic, Topic):
        line = f"- {topic.name or 'Untitled topic'}"
        if topic.start and topic.end:
            line += f" [{topic.start} - {topic.end}]"
        if topic.summary:
            line += f": {topic.summary}"
        return line
    return f"- {topic}"


def render_analytics(analysis: MeetingAnalysis) -> str:
    """Plain-text meeting report from the structured fields."""
    sections = []
    if analysis.headline:
        sections.append(f"Summary:\n{analysis.headline}")
    if analysis.overall_sentiment:
        sections.append(f"Overall sentiment: {analysis.overall_sentiment}")
    if analysis.participants:
        sections.append("Participants:\n" + "\n".join(_participant_line(p) for p in analysis.participants))
    if analysis.topics:
        sections.append("Topics:\n" + "\n".join(_topic_line(t) for t in analysis.topics))
    if analysis.decisions:
        sections.append("Decisions:\n" + "\n".join(f"- {d}" for d in analysis.decisions))
    if analysis.action_items:
        sections.append("Action items:\n" + "\n".join(f"- {a}" for a in analysis.action_items))
    if analysis.key_moments:
        moments = []
        for moment in analysis.key_moments:
            prefix = f"[{moment.timestamp}] " if moment.timestamp else ""
            moments.append(f"- {prefix}{moment.description or ''}".rstrip())
        sections.append("Key moments:\n" + "\n".join(moments))
    return "\n\n".join(sections)


def _from_parsed(strategy: ParseStrategy, parsed: dict) -> NormalizedResponse:
    analysis = _validate(parsed)
    transcript = _as_text(parsed.get("transcript"))
    analytics = _as_text(parsed.get("analytics"))
    if analysis is not None:
        transcript = transcript or render_transcript(analysis)
        analytics = analytics or render_analytics(analysis)
    return NormalizedResponse(
        strategy,
        transcript or NO_TRANSCRIPT,
        analytics or NO_ANALYTICS,
        analysis,
    )


def normalize_response(
    raw: Optional[str],
    media_kind: str = "video",
    split_on_missing_json: bool = False,
) -> NormalizedResponse:
    """Parse a model reply; never raises.

    With ``split_on_missing_json`` a reply that has no ``{...}`` span at all
    is cut at its midpoint into transcript and analytics instead of being
    returned whole as the transcript.
    """
    raw = raw or ""
    for strategy, parse in PARSE_STRATEGIES:
        ok, parsed = parse(raw)
        if ok:
            return _from_parsed(strategy, parsed)

    if split_on_missing_json and not _EMBEDDED_OBJECT.search(raw):
        half = len(raw) // 2
        return NormalizedResponse(
            ParseStrategy.MIDPOINT_SPLIT,
            raw[:half] or NO_TRANSCRIPT,
            raw[half:] or NO_ANALYTICS,
        )

    return NormalizedResponse(
        ParseStrategy.RAW_TEXT,
        raw or NO_TRANSCRIPT,
        unstructured_placeholder(media_kind),
    )
