from __future__ import annotations


class ConfirmationGate:
    """Arm-then-confirm primitive.

    A key must be armed before the same key can be confirmed. Arming a
    different key replaces the armed one, so a confirmation never lands on a
    key that was not the last one armed.
    """

    def __init__(self) -> None:
        self._armed_key: str | None = None

    @property
    def armed_key(self) -> str | None:
        return self._armed_key

    def is_armed(self, key: str | None = None) -> bool:
        if key is None:
            return self._armed_key is not None
        return self._armed_key == key

    def arm(self, key: str) -> None:
        self._armed_key = key

    def confirm(self, key: str) -> bool:
        """Return True and clear the gate only if ``key`` is the armed key."""
        if self._armed_key is None or self._armed_key != key:
            return False
        self._armed_key = None
        return True

    def disarm(self) -> None:
        self._armed_key = None
