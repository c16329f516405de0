"""Editor error types.

Everything here is a ``ValueError`` subclass: each one is a local,
operator-correctable condition, and the shell reports them all the same way.
"""

from __future__ import annotations


class MapEditorError(ValueError):
    pass


class InvalidDimension(MapEditorError):
    def __init__(self, dimension: str, value: int, lo: int, hi: int):
        super().__init__(
            f"Map {dimension} must be between {lo} and {hi} (got {value})"
        )
        self.dimension = dimension
        self.value = value


class InvalidPlayerCount(MapEditorError):
    def __init__(self, value: int, lo: int, hi: int):
        super().__init__(
            f"Player count must be between {lo} and {hi} (got {value})"
        )
        self.value = value


class InvalidBrush(MapEditorError):
    def __init__(self, mode: str, value: str):
        super().__init__(f"Unknown {mode} brush value: {value!r}")
        self.mode = mode
        self.value = value


class MissingField(MapEditorError):
    def __init__(self, field: str):
        super().__init__(f"Please enter a map {field}")
        self.field = field


class PlayerCountMismatch(MapEditorError):
    def __init__(self, required: int, actual: int):
        super().__init__(
            f"Player base count mismatch! The map requires {required} "
            f"players but has {actual} player bases."
        )
        self.required = required
        self.actual = actual


class SaveInProgress(MapEditorError):
    def __init__(self):
        super().__init__("A save is already in progress")


class SaveFailed(MapEditorError):
    pass


class NotAuthorized(MapEditorError):
    def __init__(self, user_id: str):
        super().__init__(f"User {user_id!r} does not have admin privileges")
        self.user_id = user_id
