class TypesError(Exception):
    """Base error for the SportsMonks types subsystem."""


class InvalidTypeRecord(TypesError):
    def __init__(self, raw: object, reason: str) -> None:
        super().__init__(f"invalid type record ({reason}): {raw!r}")
        self.raw = raw
        self.reason = reason


class SyncInProgressError(TypesError):
    def __init__(self) -> None:
        super().__init__("types sync already in progress")
