"""Uri helpers"""
from urllib import parse

__all__ = ["join"]


def join(*parts: str, quote: bool = False) -> str:
    """Join a base uri with path parts, one slash between each."""
    if not parts:
        return ""

    base, *rest = parts
    segments = [part.strip("/") for part in rest]
    path = "/".join(
        (parse.quote_plus(segment, safe="/") if quote else segment)
        for segment in segments
        if segment
    )
    if not path:
        return base

    return base.rstrip("/") + "/" + path
