from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Student:
    """Registered student and the Bluetooth MAC address tied to them.

    Plain data object; maintained by an administrative process, read-only here.
    """

    internal_id: int
    student_id: str
    name: str
    registered_mac: str
