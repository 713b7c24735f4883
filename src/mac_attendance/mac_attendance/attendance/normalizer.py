from __future__ import annotations

from typing import Iterable


def normalize_mac(value: object) -> str:
    """Trim and upper-case one raw address; non-strings become ''."""
    if not isinstance(value, str):
        return ""
    return value.strip().upper()


def normalize_macs(raw_addresses: Iterable[object]) -> list[str]:
    """Canonicalize a scanned batch.

    Trims, upper-cases, drops empties and removes duplicates keeping the
    first-seen order:

        >>> normalize_macs([" aa:bb ", "AA:BB", ""])
        ['AA:BB']
    """
    seen: set[str] = set()
    out: list[str] = []
    for raw in raw_addresses:
        mac = normalize_mac(raw)
        if not mac or mac in seen:
            continue
        seen.add(mac)
        out.append(mac)
    return out
