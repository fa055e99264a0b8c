import re

_PROTOCOL_RE = re.compile(r"^https?://")
_WWW_RE = re.compile(r"^www\.")

SOCIAL_MARKERS = ("facebook.com/", "instagram.com/")


def normalize_social_url(url: str | None) -> str | None:
    """Reduce a Facebook/Instagram URL to ``host/path`` for substring matching.

    Lower-cases, drops the protocol, a leading ``www.``, the query string and
    trailing slashes. Returns None for anything that is not recognisably a
    Facebook or Instagram link, so off-platform input never matches.
    """
    if not url or not isinstance(url, str):
        return None

    normalized = url.strip().lower()
    normalized = _PROTOCOL_RE.sub("", normalized)
    normalized = _WWW_RE.sub("", normalized)
    normalized = normalized.split("?", 1)[0].rstrip("/")

    if any(marker in normalized for marker in SOCIAL_MARKERS):
        return normalized
    return None
