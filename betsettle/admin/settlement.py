"""Debt settlement: reduce net balances to a short list of transfers."""
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from betsettle.errors import UnbalancedLedger
from betsettle.game.player import Player
from betsettle.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Transfer:
    """One payment in a settlement plan."""
    sender: str
    receiver: str
    amount: int
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "from": self.sender,
            "to": self.receiver,
            "amount": self.amount,
        }


@dataclass
class _Party:
    name: str
    remaining: int


def settle(balances: Mapping[str, int], players: Iterable[Player] = ()) -> list[Transfer]:
    """Build a settlement plan from net balances.
    
    Greedy matching: the largest remaining debtor pays the largest remaining
    creditor as much as either side still needs, then whichever side hit zero
    is dropped. This gives at most k - 1 transfers for k non-zero balances.
    It is not always the global minimum (that problem is NP-hard).
    
    Ties in magnitude keep the input order.
    
    Args:
        balances: Dict of player_id -> net balance; must sum to zero.
        players: Roster used to turn IDs into names. IDs without a player
            are shown as-is.
        
    Returns:
        Transfers in the order the sweep produced them.
        
    Raises:
        UnbalancedLedger: If debts and credits do not cancel out.
    """
    names = {p.id: p.name for p in players}
    
    debtors: list[_Party] = []
    creditors: list[_Party] = []
    for player_id, balance in balances.items():
        name = names.get(player_id, player_id)
        if balance < 0:
            debtors.append(_Party(name, -balance))
        elif balance > 0:
            creditors.append(_Party(name, balance))
    
    debtors.sort(key=lambda p: p.remaining, reverse=True)
    creditors.sort(key=lambda p: p.remaining, reverse=True)
    
    transfers: list[Transfer] = []
    i = j = 0
    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]
        amount = min(debtor.remaining, creditor.remaining)
        
        transfers.append(Transfer(sender=debtor.name, receiver=creditor.name, amount=amount))
        debtor.remaining -= amount
        creditor.remaining -= amount
        
        if debtor.remaining == 0:
            i += 1
        if creditor.remaining == 0:
            j += 1
    
    owed = sum(d.remaining for d in debtors[i:])
    due = sum(c.remaining for c in creditors[j:])
    if owed or due:
        raise UnbalancedLedger(
            f"Settlement left {owed} unpaid and {due} uncollected"
        )
    
    logger.debug(f"Settled {len(debtors)} debtors and {len(creditors)} creditors in {len(transfers)} transfers")
    return transfers
