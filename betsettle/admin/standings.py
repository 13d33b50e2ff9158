"""Read-only views over the round log: wins, balance trend, leaders."""
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Optional

from betsettle.game.player import Player
from betsettle.game.round import RoundRecord

UNKNOWN_PLAYER = "Unknown"


@dataclass
class TrendPoint:
    """Everyone's cumulative balance after one round."""
    label: str
    balances: dict[str, int]
    
    def to_dict(self) -> dict:
        """Flatten for charting: {"name": label, <player>: balance, ...}."""
        return {"name": self.label, **self.balances}


@dataclass
class Leaders:
    """Biggest winner and biggest loser of the session."""
    top_winner: Optional[str]
    biggest_loser: Optional[str]


def win_counts(history: Iterable[RoundRecord]) -> dict[str, int]:
    """Count rounds won per player ID."""
    counts: dict[str, int] = {}
    for record in history:
        counts[record.winner_id] = counts.get(record.winner_id, 0) + 1
    return counts


def win_share(players: Iterable[Player], history: Iterable[RoundRecord]) -> list[tuple[str, int]]:
    """Win counts by player name, most wins first.
    
    Winners no longer on the roster are listed as "Unknown".
    """
    names = {p.id: p.name for p in players}
    share = [
        (names.get(player_id, UNKNOWN_PLAYER), count)
        for player_id, count in win_counts(history).items()
    ]
    share.sort(key=lambda item: item[1], reverse=True)
    return share


class BalanceTrend:
    """Cumulative balance per round, oldest round first.
    
    Iterating yields a "Start" point with everyone at 0, then one point per
    round labelled "1R", "2R", .... Balances are keyed by the roster's
    current names, so renames show up across the whole trend. Each iteration
    replays the log from scratch.
    """
    
    def __init__(self, players: Iterable[Player], history: Sequence[RoundRecord]):
        """Snapshot the inputs.
        
        Args:
            players: Current roster.
            history: Round log, newest first.
        """
        self._players = [Player(id=p.id, name=p.name) for p in players]
        self._history = list(history)
    
    def __iter__(self) -> Iterator[TrendPoint]:
        names = {p.id: p.name for p in self._players}
        running = {p.name: 0 for p in self._players}
        yield TrendPoint(label="Start", balances=dict(running))
        
        for idx, record in enumerate(reversed(self._history), start=1):
            won = 0
            for loss in record.losses:
                name = names.get(loss.player_id)
                if name is not None:
                    running[name] -= loss.amount
                won += loss.amount
            winner = names.get(record.winner_id)
            if winner is not None:
                running[winner] += won
            yield TrendPoint(label=f"{idx}R", balances=dict(running))
    
    def __len__(self) -> int:
        return len(self._history) + 1


def balance_trend(players: Iterable[Player], history: Sequence[RoundRecord]) -> BalanceTrend:
    """Per-round cumulative balances for charting."""
    return BalanceTrend(players, history)


def leaders(players: Iterable[Player], balances: Mapping[str, int]) -> Leaders:
    """Find the session's top winner and biggest loser.
    
    Args:
        players: Current roster.
        balances: Net balances by player ID.
        
    Returns:
        Names of the highest positive and lowest negative balance holders;
        None where nobody is up (or down).
    """
    names = {p.id: p.name for p in players}
    ranked = sorted(balances.items(), key=lambda item: item[1], reverse=True)
    if not ranked:
        return Leaders(top_winner=None, biggest_loser=None)
    
    top_id, top_balance = ranked[0]
    low_id, low_balance = ranked[-1]
    return Leaders(
        top_winner=names.get(top_id) if top_balance > 0 else None,
        biggest_loser=names.get(low_id) if low_balance < 0 else None,
    )


def format_standings_table(players: Iterable[Player], balances: Mapping[str, int]) -> str:
    """Format net balances as a text table, highest first.
    
    Args:
        players: Current roster.
        balances: Net balances by player ID.
        
    Returns:
        Formatted table string.
    """
    names = {p.id: p.name for p in players}
    if not balances:
        return "No players."
    
    lines = [
        "| Player     | Net (+/-)  |",
        "|------------|------------|",
    ]
    
    for player_id, net in sorted(balances.items(), key=lambda item: item[1], reverse=True):
        net_str = f"+{net:,}" if net >= 0 else f"{net:,}"
        lines.append(f"| {names.get(player_id, player_id):<10} | {net_str:>10} |")
    
    return "\n".join(lines)
