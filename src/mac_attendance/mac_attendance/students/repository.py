from __future__ import annotations

from typing import Optional, Protocol

from .model import Student


class StudentRepository(Protocol):
    """Lookup contract used by the attendance engine.

    registered_mac is unique across students (schema-enforced), so an exact
    match yields at most one row.
    """

    def find_by_mac(self, mac: str) -> Optional[Student]:
        raise NotImplementedError
