"""Plain-text renderings for sharing (clipboard export, round history)."""
from collections.abc import Iterable, Sequence
from typing import Optional

from betsettle.admin.settlement import Transfer
from betsettle.admin.standings import UNKNOWN_PLAYER
from betsettle.config import config
from betsettle.game.player import Player
from betsettle.game.round import RoundRecord

EMPTY_SETTLEMENT = "Nothing to settle."


def format_amount(amount: int, suffix: Optional[str] = None) -> str:
    """Format an amount with thousands separators and the currency suffix."""
    suffix = config.currency_suffix if suffix is None else suffix
    return f"{amount:,}{suffix}"


def format_settlement(transfers: Sequence[Transfer]) -> str:
    """Render a settlement plan for pasting into a chat.
    
    Layout: header, blank line, one "<from> -> <to> : <amount>" line per
    transfer, blank line, closing note.
    
    Args:
        transfers: Plan from settle().
        
    Returns:
        The text, or EMPTY_SETTLEMENT if there is nothing to pay.
    """
    if not transfers:
        return EMPTY_SETTLEMENT
    
    lines = [config.settlement_header, ""]
    for t in transfers:
        lines.append(f"{t.sender} -> {t.receiver} : {format_amount(t.amount)}")
    lines.append("")
    lines.append(config.settlement_footer)
    return "\n".join(lines)


def format_history(players: Iterable[Player], history: Sequence[RoundRecord]) -> list[str]:
    """One line per round, newest first.
    
    Example: "Round 3 | alice (+1,500) | bob -1,000, carol -500".
    Zero losses are left out.
    """
    names = {p.id: p.name for p in players}
    lines = []
    for idx, record in enumerate(history):
        number = len(history) - idx
        winner = names.get(record.winner_id, UNKNOWN_PLAYER)
        losers = ", ".join(
            f"{names.get(l.player_id, UNKNOWN_PLAYER)} -{format_amount(l.amount)}"
            for l in record.losses
            if l.amount > 0
        )
        line = f"Round {number} | {winner} (+{format_amount(record.total)})"
        if losers:
            line += f" | {losers}"
        lines.append(line)
    return lines
