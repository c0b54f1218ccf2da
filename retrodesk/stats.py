from __future__ import annotations
from dataclasses import dataclass


@dataclass
class SessionStats:
    games: int = 0
    wins: int = 0

    def record(self, won: bool) -> None:
        self.games += 1
        if won:
            self.wins += 1

    @property
    def win_rate(self) -> float:
        return (self.wins / self.games) if self.games > 0 else 0.0

    def summary(self) -> str:
        return f'Games: {self.games} | Wins: {self.wins} | Win%: {self.win_rate:.3f}'
