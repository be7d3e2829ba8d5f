from urllib.parse import urlparse

MAX_CLAIM_CHARS = 5000

_VERDICT_LABELS = {
    "true": "True",
    "false": "False",
    "misleading": "Misleading",
    "mixed": "Mixed",
    "unverifiable": "Unverifiable",
}


def validate_claim(claim: str) -> bool:
    text = claim.strip()
    return 0 < len(text) <= MAX_CLAIM_CHARS


def is_valid_url(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def format_verdict(verdict: str) -> str:
    """Map a free-text verdict onto the display label set; anything else is Unknown."""
    return _VERDICT_LABELS.get((verdict or "").strip().lower(), "Unknown")
