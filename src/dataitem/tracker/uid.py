# src/dataitem/tracker/uid.py
import random
import string
from typing import List, Optional

from dataitem.tracker.models import Event

LETTERS = string.ascii_letters
ALLOWED_CHARS = string.ascii_letters + string.digits
UID_LENGTH = 11


class UidGenerator:
    """Generates 11 character identifiers: one letter, then letters or digits."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.SystemRandom()

    def generate(self) -> str:
        first = self.rng.choice(LETTERS)
        rest = "".join(self.rng.choice(ALLOWED_CHARS) for _ in range(UID_LENGTH - 1))
        return first + rest

    @staticmethod
    def is_valid(uid: Optional[str]) -> bool:
        return (
            uid is not None
            and len(uid) == UID_LENGTH
            and uid[0] in LETTERS
            and all(c in ALLOWED_CHARS for c in uid)
        )

    def assign_uids(self, events: List[Event]) -> List[Event]:
        """Copy of `events` where every event has a uid; input is left untouched."""
        return [
            event if event.event else event.model_copy(update={"event": self.generate()})
            for event in events
        ]
