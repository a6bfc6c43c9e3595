"""Score and order candidate shows by genre overlap with a user's favorites."""
import logging
from collections import Counter
from typing import Dict, Hashable, Iterable, List, Mapping, Sequence, Set, Tuple

from tvtracker_recommendation_service.errors import NoCandidates

logger = logging.getLogger(__name__)

DEFAULT_CANDIDATE_LIMIT = 100


def _rank_key(count: int, title: str) -> Tuple[int, str]:
    return -count, title


def count_overlap(
        associations: Iterable[Tuple[Hashable, Hashable]],
        affinity: Set,
        exclude: Set
) -> Dict:
    """
    Count, per show, how many affinity genres it carries.

    In-memory counterpart of ShowRepository.get_overlap_counts, which does
    the same count in SQL for the database-backed gateway. Use it for
    gateways over plain Python collections.

    Args:
        associations: (show_id, genre_id) pairs
        affinity: Genre ids implied by the user's favorites
        exclude: Show ids already favorited

    Returns:
        Mapping of show_id to overlap count (shows with no overlap are absent)
    """
    counts: Counter = Counter()
    # dict.fromkeys drops duplicate pairs but keeps first-seen order
    for show_id, genre_id in dict.fromkeys(associations):
        if genre_id in affinity and show_id not in exclude:
            counts[show_id] += 1
    return dict(counts)


def order_candidates(
        counts: Mapping,
        titles: Mapping,
        limit: int | None = DEFAULT_CANDIDATE_LIMIT
) -> List[Tuple]:
    """
    Order candidates by overlap (descending), then title (ascending).

    Python's sort is stable, so candidates with equal overlap and title
    keep the order in which `counts` yields them.

    Args:
        counts: Mapping of show_id to overlap count
        titles: Mapping of show_id to title
        limit: Maximum number of candidates to keep (None keeps all)

    Returns:
        List of (show_id, overlap) tuples, most relevant first
    """
    ordered = sorted(
        counts.items(),
        key=lambda item: _rank_key(item[1], titles[item[0]])
    )
    if limit is not None:
        ordered = ordered[:limit]
    return ordered


def rank_candidates(
        gateway,
        affinity: Set,
        exclude: Set,
        limit: int = DEFAULT_CANDIDATE_LIMIT,
        user_id=None
) -> List[Tuple]:
    """
    Ask the data gateway for the top overlapping candidates.

    Raises:
        NoCandidates: if no unfavorited show shares an affinity genre
    """
    ranked = gateway.candidate_overlap(affinity, exclude, limit)
    if not ranked:
        raise NoCandidates(
            "No unfavorited shows share a genre with the user's favorites",
            user_id=user_id
        )

    logger.info(f"Ranked {len(ranked)} candidates (top overlap: {ranked[0][1]})")
    return list(ranked)


def order_ranked_shows(shows: Sequence[Dict], overlaps: Mapping) -> List[Tuple[Dict, int]]:
    """
    Pair hydrated shows with their overlap and re-sort for display.

    Uses the same key as `order_candidates`, so hydrated shows come out
    in the ranked order.

    Args:
        shows: Hydrated show dicts (must contain 'show_id' and 'title')
        overlaps: Mapping of show_id to overlap count

    Returns:
        List of (show, overlap) tuples
    """
    pairs = [(show, overlaps[show["show_id"]]) for show in shows if show["show_id"] in overlaps]
    return sorted(pairs, key=lambda pair: _rank_key(pair[1], pair[0]["title"]))
