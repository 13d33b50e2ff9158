"""Round ledger: player roster, round log and net balances."""
import uuid
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

from betsettle.config import config
from betsettle.errors import InvalidReference, InvariantViolation, StorageError
from betsettle.game.player import Player
from betsettle.game.round import Loss, RoundRecord, coerce_amount
from betsettle.state.ledger_store import LedgerStore
from betsettle.state.schema import parse_history, parse_players
from betsettle.utils.logger import get_logger

logger = get_logger(__name__)

LossInput = Union[Mapping[str, Any], Iterable[tuple[str, Any]]]

# A roster can never shrink below this, whatever is configured.
ROSTER_FLOOR = 2

_MISSING = object()
_UNREADABLE = object()


def default_roster() -> list[Player]:
    """Build the starting roster (p1..pN)."""
    return [
        Player(id=f"p{i}", name=f"{config.player_name_prefix} {i}")
        for i in range(1, config.default_players + 1)
    ]


def compute_net_balances(players: Iterable[Player], history: Iterable[RoundRecord]) -> dict[str, int]:
    """Compute every current player's net gain (+) or loss (-).

    Rounds that mention players no longer on the roster still count for the
    players that remain: a removed loser's amount is still credited to the
    winner, and a removed winner's round still debits the losers.

    Args:
        players: Current roster.
        history: Round log, in any order.

    Returns:
        Dict of player_id -> net balance, in roster order.
    """
    balances = {p.id: 0 for p in players}
    for record in history:
        won = 0
        for loss in record.losses:
            if loss.player_id in balances:
                balances[loss.player_id] -= loss.amount
            won += loss.amount
        if record.winner_id in balances:
            balances[record.winner_id] += won
    return balances


class Ledger:
    """Roster plus round log for one betting session.

    The log is kept newest-first. Net balances are never stored; they are
    recomputed from the full log on every call.
    """

    def __init__(self, store: Optional[LedgerStore] = None, min_players: Optional[int] = None):
        """Initialize the ledger, restoring state from the store if given.

        Args:
            store: Persistence backend. Without one, nothing is saved.
            min_players: Roster floor (defaults to config.min_players).
                Values below ROSTER_FLOOR are raised to it.
        """
        self._store = store
        requested = min_players if min_players is not None else config.min_players
        self.min_players = max(ROSTER_FLOOR, requested)
        self._players: list[Player] = default_roster()
        self._history: list[RoundRecord] = []
        self._load()
        self._next_round_id = max((r.id for r in self._history), default=0) + 1

    # ---- Persistence ----

    def _load(self) -> None:
        """Restore roster and log from the store.

        Each key is restored on its own, so a bad roster does not cost the
        round log. A missing roster gets the default one written back; a key
        that fails to load or validate is left as it is in the store.
        """
        if self._store is None:
            return

        raw_players = self._load_key(config.players_key)
        if raw_players is _MISSING:
            self._save_players()
        elif raw_players is not _UNREADABLE:
            try:
                players = parse_players(raw_players)
            except StorageError as e:
                logger.warning(f"Could not restore roster: {e}")
            else:
                if len(players) >= self.min_players:
                    self._players = players
                else:
                    logger.warning(
                        f"Stored roster has {len(players)} players, using default roster"
                    )

        raw_history = self._load_key(config.history_key)
        if raw_history is not _MISSING and raw_history is not _UNREADABLE:
            try:
                self._history = parse_history(raw_history)
            except StorageError as e:
                logger.warning(f"Could not restore round history: {e}")

        logger.info(
            f"Restored ledger: {len(self._players)} players, {len(self._history)} rounds"
        )

    def _load_key(self, key: str) -> Any:
        """Read one key; _MISSING or _UNREADABLE instead of None or an error."""
        try:
            raw = self._store.load(key)
        except StorageError as e:
            logger.warning(f"Could not read {key}: {e}")
            return _UNREADABLE
        return _MISSING if raw is None else raw

    def _save_players(self) -> None:
        self._save(config.players_key, [p.to_dict() for p in self._players])

    def _save_history(self) -> None:
        self._save(config.history_key, [r.to_dict() for r in self._history])

    def _save(self, key: str, value: Any) -> None:
        """Best-effort write; the in-memory change stands if it fails."""
        if self._store is None:
            return
        try:
            self._store.save(key, value)
        except StorageError as e:
            logger.warning(f"Failed to persist {key}: {e}")

    # ---- Roster ----

    @property
    def players(self) -> list[Player]:
        """Copy of the roster, in display order."""
        return [Player(id=p.id, name=p.name) for p in self._players]

    @property
    def history(self) -> list[RoundRecord]:
        """Copy of the round log, newest first."""
        return list(self._history)

    def get_player(self, player_id: str) -> Optional[Player]:
        """Find a roster player by ID."""
        for p in self._players:
            if p.id == player_id:
                return p
        return None

    def player_name(self, player_id: str, default: Optional[str] = None) -> Optional[str]:
        """Get a player's current name, or default if not on the roster."""
        player = self.get_player(player_id)
        return player.name if player else default

    def _require_player(self, player_id: str) -> Player:
        player = self.get_player(player_id)
        if player is None:
            raise InvalidReference(f"Unknown player: {player_id}")
        return player

    def add_player(self) -> Player:
        """Add a player with a generated ID and default name.

        Returns:
            The new player.
        """
        player = Player(
            id=f"p{uuid.uuid4().hex[:12]}",
            name=f"{config.player_name_prefix} {len(self._players) + 1}",
        )
        self._players.append(player)
        logger.info(f"Added player {player.id} ({player.name})")
        self._save_players()
        return player

    def remove_player(self, player_id: str) -> None:
        """Remove a player from the roster.

        Rounds that reference the player stay in the log.

        Args:
            player_id: Player to remove.

        Raises:
            InvariantViolation: If the roster is already at its minimum size.
            InvalidReference: If the player is not on the roster.
        """
        if len(self._players) <= self.min_players:
            raise InvariantViolation(f"At least {self.min_players} players are required")
        player = self._require_player(player_id)
        self._players.remove(player)
        logger.info(f"Removed player {player.id} ({player.name})")
        self._save_players()

    def rename_player(self, player_id: str, new_name: str) -> None:
        """Change a player's display name. Any string is accepted.

        Raises:
            InvalidReference: If the player is not on the roster.
        """
        player = self._require_player(player_id)
        player.name = new_name
        logger.debug(f"Renamed player {player_id} to {new_name!r}")
        self._save_players()

    # ---- Rounds ----

    def record_round(self, winner_id: str, losses: Optional[LossInput] = None) -> RoundRecord:
        """Record a finished round.

        Every roster player other than the winner gets a loss line, in roster
        order; players missing from ``losses`` lost 0. Amounts go through
        coerce_amount, so junk input counts as 0 instead of failing.

        Args:
            winner_id: Round winner.
            losses: Mapping or (player_id, amount) pairs of raw amounts.

        Returns:
            The new round record.

        Raises:
            InvalidReference: If the winner or a loser is not on the roster,
                or the winner is listed as a loser.
        """
        self._require_player(winner_id)

        raw_losses: dict[str, Any] = dict(losses) if losses is not None else {}

        for player_id in raw_losses:
            if player_id == winner_id:
                raise InvalidReference(f"Winner {winner_id} cannot also be a loser")
            self._require_player(player_id)

        record = RoundRecord(
            id=self._next_round_id,
            winner_id=winner_id,
            losses=tuple(
                Loss(player_id=p.id, amount=coerce_amount(raw_losses.get(p.id)))
                for p in self._players
                if p.id != winner_id
            ),
        )
        self._next_round_id += 1
        self._history.insert(0, record)

        logger.info(f"Recorded round {record.id}: {winner_id} +{record.total}")
        self._save_history()
        return record

    def remove_round(self, round_id: int) -> None:
        """Remove a round by ID. Unknown IDs are ignored."""
        remaining = [r for r in self._history if r.id != round_id]
        if len(remaining) == len(self._history):
            return
        self._history = remaining
        logger.info(f"Removed round {round_id}")
        self._save_history()

    def reset(self) -> None:
        """Wipe the log and restore the default roster."""
        self._players = default_roster()
        self._history = []
        self._next_round_id = 1
        if self._store is not None:
            try:
                self._store.clear()
            except StorageError as e:
                logger.warning(f"Failed to clear stored ledger: {e}")
        logger.info("Ledger reset")

    # ---- Balances ----

    def compute_net_balances(self) -> dict[str, int]:
        """Net balance per current player, from the full round log."""
        return compute_net_balances(self._players, self._history)
