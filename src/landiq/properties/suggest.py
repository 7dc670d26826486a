from __future__ import annotations

from typing import Iterable, List


MIN_QUERY_LENGTH = 3


def suggest_addresses(query: str, addresses: Iterable[str], limit: int = 5) -> List[str]:
    """Case-insensitive substring matches for address autocomplete."""

    q = (query or "").strip().lower()
    if len(q) < MIN_QUERY_LENGTH:
        return []
    out: List[str] = []
    for address in addresses:
        if q in address.lower():
            out.append(address)
            if len(out) >= limit:
                break
    return out
