from __future__ import annotations

from typing import Protocol, Sequence

from .model import ShiftRecord


class ShiftRepository(Protocol):
    """Giao diện repository cho ca trực (remote).

    Lưu ý (DIP): session actions only call this interface. HttpShiftRepository
    is the HTTP implementation; ShiftEditingSession.from_transport builds one
    from a transport handle and a token.
    Implementations raise TransportError on network/protocol failure.
    """

    def fetch_all(self) -> Sequence[ShiftRecord]:
        raise NotImplementedError

    def create(self, record: ShiftRecord) -> ShiftRecord:
        """Persist a new shift.

        Returns the stored record (the server assigns the id).
        """

        raise NotImplementedError

    def update(self, record: ShiftRecord) -> bool:
        """Returns False when the server refuses the update."""

        raise NotImplementedError

    def delete(self, shift_id: int) -> bool:
        raise NotImplementedError
