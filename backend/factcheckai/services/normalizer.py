# backend/factcheckai/services/normalizer.py
"""
Turns raw provider output into a FactCheckResult.

Providers are asked for JSON but answer in whatever shape they like: bare
JSON, JSON inside a markdown fence, JSON wrapped in conversational prose, or
plain prose. Decoding happens in two stages:
 - decode() classifies the text as Structured (a JSON object) or Freeform;
 - from_structured() / from_freeform() map each shape onto the result.
normalize() never raises; the worst case is a verdict of "Unknown".
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Union

from factcheckai.models.schema import FactCheckResult, Source

logger = logging.getLogger("normalizer")

DEFAULT_VERDICT = "Unknown"
DEFAULT_EXPLANATION = "No explanation available"
DEFAULT_SNIPPET = "Source reference"

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", flags=re.S | re.I)
_OBJECT_RE = re.compile(r"\{.*\}", flags=re.S)

_VERDICT_RE = re.compile(r"verdict[\"'*:\s]*(True|False|Misleading)\b", flags=re.I)
_VERDICT_LINE_RE = re.compile(r"^[\W_]*verdict[\W_]*(true|false|misleading)[\W_]*$", flags=re.I)
_EXPLANATION_RE = re.compile(r"explanation[:\s]*(.+?)(?=sources|$)", flags=re.I | re.S)
_URL_RE = re.compile(r"https?://[^\s]+")
_URL_TRAILING = ".,;:!?)]}\"'>*`"


@dataclass
class Structured:
    data: Dict[str, Any]


@dataclass
class Freeform:
    text: str


Decoded = Union[Structured, Freeform]


def _loads_object(candidate: str):
    try:
        obj = json.loads(candidate)
    except (ValueError, TypeError, RecursionError):
        return None
    return obj if isinstance(obj, dict) else None


def decode(raw: str) -> Decoded:
    text = (raw or "").strip()

    obj = _loads_object(text)
    if obj is not None:
        return Structured(obj)

    # JSON inside a fence, or wrapped in prose
    m = _FENCE_RE.search(text)
    if m:
        obj = _loads_object(m.group(1).strip())
        if obj is not None:
            return Structured(obj)
    m = _OBJECT_RE.search(text)
    if m:
        obj = _loads_object(m.group(0))
        if obj is not None:
            return Structured(obj)

    return Freeform(text)


def _coerce_source(item: Any):
    if isinstance(item, dict):
        url = item.get("url") or ""
        snippet = item.get("snippet")
        if snippet is None:
            snippet = item.get("title") or DEFAULT_SNIPPET
        return Source(url=str(url), snippet=str(snippet))
    if isinstance(item, str):
        item = item.strip()
        if _URL_RE.match(item):
            return Source(url=item, snippet=DEFAULT_SNIPPET)
        if item:
            return Source(url="", snippet=item)
    return None


def from_structured(data: Dict[str, Any]) -> FactCheckResult:
    raw_sources = data.get("sources") or []
    if not isinstance(raw_sources, list):
        raw_sources = []
    sources = [s for s in (_coerce_source(item) for item in raw_sources) if s is not None]

    return FactCheckResult(
        verdict=str(data.get("verdict") or DEFAULT_VERDICT),
        explanation=str(data.get("explanation") or DEFAULT_EXPLANATION),
        sources=sources,
    )


def _extract_urls(text: str) -> List[str]:
    urls = []
    for url in _URL_RE.findall(text):
        url = url.rstrip(_URL_TRAILING)
        if url and url not in urls:
            urls.append(url)
    return urls


def _without_verdict_line(text: str) -> str:
    lines = text.splitlines()
    for i, line in enumerate(lines):
        if _VERDICT_LINE_RE.match(line.strip()):
            del lines[i]
            break
    return "\n".join(lines).strip()


def from_freeform(text: str) -> FactCheckResult:
    m = _VERDICT_RE.search(text)
    verdict = m.group(1).capitalize() if m else DEFAULT_VERDICT

    m = _EXPLANATION_RE.search(text)
    if m:
        explanation = m.group(1).strip()
    else:
        explanation = _without_verdict_line(text) or text or DEFAULT_EXPLANATION

    sources = [Source(url=url, snippet=DEFAULT_SNIPPET) for url in _extract_urls(text)]
    return FactCheckResult(verdict=verdict, explanation=explanation, sources=sources)


def normalize(raw: str) -> FactCheckResult:
    decoded = decode(raw)
    if isinstance(decoded, Structured):
        return from_structured(decoded.data)
    logger.debug("Provider response was not JSON; using text heuristics")
    return from_freeform(decoded.text)
