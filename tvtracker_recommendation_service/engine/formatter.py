"""Render ranked recommendations as plain-text and HTML email bodies."""
from html import escape
from typing import Dict, List, Optional, Sequence, Tuple

DEFAULT_DISPLAY_LIMIT = 25


def _genre_names(show: Dict) -> List[str]:
    """Genre names of a show in ascending alphabetical order."""
    return sorted(genre["name"] for genre in show.get("genres") or [])


def _year_suffix(show: Dict) -> str:
    year = show.get("release_year")
    return f" ({year})" if year is not None else ""


def _header(total: int, shown: int) -> str:
    header = f"We found {total} TV shows you might like."
    if shown < total:
        header += f" Here are the top {shown}."
    return header


def format_plain(
        ranked: Sequence[Tuple[Dict, int]],
        total: Optional[int] = None,
        display_limit: int = DEFAULT_DISPLAY_LIMIT
) -> str:
    """
    Render the plain-text body.

    Example line:
        • Breaking Bad (2008) - Crime, Drama - affinity: 2
    """
    total = len(ranked) if total is None else total
    shown = list(ranked[:display_limit])

    lines = [_header(total, len(shown)), ""]
    for show, overlap in shown:
        parts = [f"• {show['title']}{_year_suffix(show)}"]
        genres = _genre_names(show)
        if genres:
            parts.append(", ".join(genres))
        parts.append(f"affinity: {overlap}")
        lines.append(" - ".join(parts))

    return "\n".join(lines)


def format_html(
        ranked: Sequence[Tuple[Dict, int]],
        total: Optional[int] = None,
        display_limit: int = DEFAULT_DISPLAY_LIMIT
) -> str:
    """
    Render the HTML body.

    Titles and genre names are always HTML-escaped.
    """
    total = len(ranked) if total is None else total
    shown = list(ranked[:display_limit])

    header = f"We found <b>{total}</b> TV shows you might like."
    if len(shown) < total:
        header += f" Here are the top <b>{len(shown)}</b>."

    items = []
    for show, overlap in shown:
        parts = [f"<b>{escape(show['title'])}</b>{escape(_year_suffix(show))}"]
        genres = _genre_names(show)
        if genres:
            parts.append(", ".join(escape(name) for name in genres))
        parts.append(f"affinity: <b>{overlap}</b>")
        items.append(f"<li>{' - '.join(parts)}</li>")

    return f"<p>{header}</p>\n<ol>\n" + "\n".join(items) + "\n</ol>"


def format_recommendations(
        ranked: Sequence[Tuple[Dict, int]],
        total: Optional[int] = None,
        display_limit: int = DEFAULT_DISPLAY_LIMIT
) -> Tuple[str, str]:
    """
    Render ranked (show, overlap) pairs for delivery.

    Args:
        ranked: Ordered (show, overlap) pairs, most relevant first
        total: Candidate count before display truncation (defaults to len(ranked)).
            The orchestrator passes the number of ranked candidates, which is
            already capped at its candidate limit, so it never exceeds that cap.
        display_limit: Maximum number of shows to list

    Returns:
        (plain_body, html_body) tuple
    """
    return (
        format_plain(ranked, total=total, display_limit=display_limit),
        format_html(ranked, total=total, display_limit=display_limit),
    )
