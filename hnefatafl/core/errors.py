from __future__ import annotations


class HnefataflError(ValueError):
    pass


class MalformedLayoutError(HnefataflError):
    pass


class InvalidKingCountError(HnefataflError):
    pass


class MoveFormatError(HnefataflError):
    pass


class GameOverError(HnefataflError):
    pass
