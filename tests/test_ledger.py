"""Tests for the round ledger (roster, round log, net balances)."""
import random

import pytest

from betsettle.admin.ledger import Ledger, compute_net_balances
from betsettle.errors import InvalidReference, InvariantViolation
from betsettle.game.player import Player
from betsettle.game.round import Loss, RoundRecord


@pytest.fixture
def ledger():
    """Four-player ledger named A-D, no storage."""
    ledger = Ledger()
    for player, name in zip(ledger.players, "ABCD"):
        ledger.rename_player(player.id, name)
    return ledger


class TestRoster:
    """Test roster management."""
    
    def test_default_roster(self):
        """Test a fresh ledger starts with four players."""
        ledger = Ledger()
        assert [p.id for p in ledger.players] == ["p1", "p2", "p3", "p4"]
        assert ledger.players[0].name == "Player 1"
        assert ledger.history == []
    
    def test_add_player(self, ledger):
        """Test adding a player generates a unique id and default name."""
        first = ledger.add_player()
        second = ledger.add_player()
        
        assert first.id != second.id
        assert first.name == "Player 5"
        assert second.name == "Player 6"
        assert len(ledger.players) == 6
    
    def test_remove_player(self, ledger):
        """Test removing a player."""
        ledger.remove_player("p4")
        assert [p.id for p in ledger.players] == ["p1", "p2", "p3"]
    
    def test_floor_cannot_go_below_two(self):
        """Test a configured floor under two is raised to two."""
        ledger = Ledger(min_players=1)
        ledger.remove_player("p4")
        ledger.remove_player("p3")

        assert ledger.min_players == 2
        with pytest.raises(InvariantViolation):
            ledger.remove_player("p2")
        assert len(ledger.players) == 2

    def test_remove_player_at_floor_fails(self):
        """Test a two-player roster cannot shrink."""
        ledger = Ledger()
        ledger.remove_player("p4")
        ledger.remove_player("p3")
        
        with pytest.raises(InvariantViolation):
            ledger.remove_player("p2")
        assert len(ledger.players) == 2
    
    def test_remove_unknown_player_fails(self, ledger):
        """Test removing a player that isn't on the roster."""
        with pytest.raises(InvalidReference):
            ledger.remove_player("nobody")
        assert len(ledger.players) == 4
    
    def test_rename_allows_empty_name(self, ledger):
        """Test renaming accepts any string."""
        ledger.rename_player("p1", "")
        assert ledger.player_name("p1") == ""
    
    def test_rename_unknown_player_fails(self, ledger):
        """Test renaming an unknown player."""
        with pytest.raises(InvalidReference):
            ledger.rename_player("nobody", "x")
    
    def test_players_is_a_copy(self, ledger):
        """Test mutating the returned roster doesn't touch the ledger."""
        ledger.players[0].name = "changed"
        assert ledger.player_name("p1") == "A"


class TestRecordRound:
    """Test recording and removing rounds."""
    
    def test_record_round(self, ledger):
        """Test a round lists every non-winner in roster order."""
        record = ledger.record_round("p1", {"p2": 1000, "p3": 500})
        
        assert record.winner_id == "p1"
        assert record.losses == (
            Loss("p2", 1000),
            Loss("p3", 500),
            Loss("p4", 0),
        )
        assert record.total == 1500
    
    def test_accepts_pairs(self, ledger):
        """Test losses may be given as (player_id, amount) pairs."""
        record = ledger.record_round("p2", [("p1", 300)])
        assert record.losses[0] == Loss("p1", 300)
    
    def test_history_is_newest_first(self, ledger):
        """Test new rounds go to the front of the log."""
        first = ledger.record_round("p1", {"p2": 100})
        second = ledger.record_round("p2", {"p1": 100})
        
        assert [r.id for r in ledger.history] == [second.id, first.id]
        assert second.id > first.id
    
    def test_unknown_winner_fails(self, ledger):
        """Test the winner must be on the roster."""
        with pytest.raises(InvalidReference):
            ledger.record_round("nobody", {"p2": 100})
        assert ledger.history == []
    
    def test_winner_as_loser_fails(self, ledger):
        """Test the winner cannot also lose."""
        with pytest.raises(InvalidReference):
            ledger.record_round("p1", {"p1": 100, "p2": 100})
        assert ledger.history == []
    
    def test_unknown_loser_fails(self, ledger):
        """Test losers must be on the roster."""
        with pytest.raises(InvalidReference):
            ledger.record_round("p1", {"ghost": 100})
        assert ledger.history == []
    
    @pytest.mark.parametrize("raw,expected", [
        (-500, 0),
        ("abc", 0),
        ("", 0),
        (None, 0),
        ("250", 250),
        (99.9, 99),
        (float("nan"), 0),
    ])
    def test_amounts_are_coerced(self, ledger, raw, expected):
        """Test junk amounts count as zero instead of failing."""
        record = ledger.record_round("p1", {"p2": raw})
        assert record.losses[0].amount == expected
    
    def test_remove_round(self, ledger):
        """Test removing a round."""
        record = ledger.record_round("p1", {"p2": 100})
        ledger.remove_round(record.id)
        assert ledger.history == []
    
    def test_remove_round_is_idempotent(self, ledger):
        """Test removing the same round twice is a no-op the second time."""
        keep = ledger.record_round("p2", {"p3": 50})
        drop = ledger.record_round("p1", {"p2": 100})
        
        ledger.remove_round(drop.id)
        ledger.remove_round(drop.id)
        
        assert ledger.history == [keep]
    
    def test_round_ids_not_reused(self, ledger):
        """Test a removed round's id is not handed out again."""
        record = ledger.record_round("p1", {"p2": 100})
        ledger.remove_round(record.id)
        assert ledger.record_round("p1", {"p2": 100}).id != record.id
    
    def test_reset(self, ledger):
        """Test reset restores the default roster and clears the log."""
        ledger.add_player()
        ledger.record_round("p1", {"p2": 100})
        
        ledger.reset()
        
        assert [p.name for p in ledger.players] == ["Player 1", "Player 2", "Player 3", "Player 4"]
        assert ledger.history == []


class TestNetBalances:
    """Test net balance computation."""
    
    def test_single_round(self, ledger):
        """Test A wins 1000 from B and 500 from C."""
        ledger.record_round("p1", {"p2": 1000, "p3": 500, "p4": 0})
        
        assert ledger.compute_net_balances() == {
            "p1": 1500,
            "p2": -1000,
            "p3": -500,
            "p4": 0,
        }
    
    def test_rounds_cancel_out(self, ledger):
        """Test A and B trading the same amount nets to zero."""
        ledger.record_round("p1", {"p2": 1000})
        ledger.record_round("p2", {"p1": 1000})
        
        assert set(ledger.compute_net_balances().values()) == {0}
    
    def test_reflects_removed_round(self, ledger):
        """Test balances are recomputed after a round is removed."""
        record = ledger.record_round("p1", {"p2": 1000})
        ledger.remove_round(record.id)
        assert set(ledger.compute_net_balances().values()) == {0}
    
    def test_removed_loser_still_pays_winner(self, ledger):
        """Test a removed loser's amount is still credited to the winner."""
        ledger.record_round("p1", {"p2": 100, "p4": 200})
        ledger.remove_player("p4")
        
        balances = ledger.compute_net_balances()
        
        assert "p4" not in balances
        assert balances["p1"] == 300
        assert balances["p2"] == -100
    
    def test_removed_winner_is_skipped(self, ledger):
        """Test a removed winner's round still debits its losers."""
        ledger.record_round("p4", {"p1": 100})
        ledger.remove_player("p4")
        
        assert ledger.compute_net_balances() == {"p1": -100, "p2": 0, "p3": 0}
    
    def test_new_player_starts_at_zero(self, ledger):
        """Test a player added after some rounds has a zero balance."""
        ledger.record_round("p1", {"p2": 100})
        player = ledger.add_player()
        assert ledger.compute_net_balances()[player.id] == 0
    
    @pytest.mark.parametrize("seed", range(20))
    def test_zero_sum(self, ledger, seed):
        """Test balances always sum to zero."""
        rng = random.Random(seed)
        ids = [p.id for p in ledger.players]
        for _ in range(rng.randint(1, 15)):
            winner = rng.choice(ids)
            ledger.record_round(winner, {
                pid: rng.randint(0, 5000) for pid in ids if pid != winner
            })
        
        assert sum(ledger.compute_net_balances().values()) == 0
    
    def test_function_ignores_log_order(self):
        """Test the free function gives the same result for any log order."""
        players = [Player("a", "A"), Player("b", "B")]
        history = [
            RoundRecord(1, "a", (Loss("b", 10),)),
            RoundRecord(2, "b", (Loss("a", 30),)),
        ]
        
        assert compute_net_balances(players, history) == compute_net_balances(players, history[::-1])
        assert compute_net_balances(players, history) == {"a": -20, "b": 20}
