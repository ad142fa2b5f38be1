from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlayCardsAction:
    indices: tuple[int, ...]

    @staticmethod
    def of(*indices: int) -> "PlayCardsAction":
        return PlayCardsAction(indices=tuple(indices))


@dataclass(frozen=True)
class YieldAction:
    pass


@dataclass(frozen=True)
class DiscardAction:
    indices: tuple[int, ...]

    @staticmethod
    def of(*indices: int) -> "DiscardAction":
        return DiscardAction(indices=tuple(indices))


@dataclass(frozen=True)
class UseJesterAction:
    pass


Action = PlayCardsAction | YieldAction | DiscardAction | UseJesterAction
