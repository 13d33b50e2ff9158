"""Tests for player and round models."""
import pytest

from betsettle.game.player import Player
from betsettle.game.round import Loss, RoundRecord, coerce_amount


class TestPlayer:
    """Test Player model."""
    
    def test_to_dict(self):
        """Test serialization."""
        assert Player("p1", "alice").to_dict() == {"id": "p1", "name": "alice"}
    
    def test_from_dict(self):
        """Test deserialization."""
        player = Player.from_dict({"id": "p1", "name": "alice"})
        assert player.id == "p1"
        assert player.name == "alice"


class TestRoundRecord:
    """Test RoundRecord model."""
    
    def test_total(self):
        """Test the winner's total is the sum of losses."""
        record = RoundRecord(1, "p1", (Loss("p2", 1000), Loss("p3", 500)))
        assert record.total == 1500
    
    def test_from_dict(self):
        """Test restoring a stored round."""
        record = RoundRecord.from_dict({
            "gameId": 7,
            "winnerId": "p1",
            "losers": [{"playerId": "p2", "amount": 300}],
        })
        
        assert record == RoundRecord(7, "p1", (Loss("p2", 300),))
        assert record.to_dict()["losers"] == [{"playerId": "p2", "amount": 300}]
    
    def test_from_dict_drops_winner_loss(self):
        """Test a stored loss line naming the winner is left out."""
        record = RoundRecord.from_dict({
            "gameId": 1,
            "winnerId": "p1",
            "losers": [
                {"playerId": "p1", "amount": 50},
                {"playerId": "p2", "amount": 300},
            ],
        })

        assert record.losses == (Loss("p2", 300),)

    def test_immutable(self):
        """Test records can't be edited in place."""
        record = RoundRecord(1, "p1")
        with pytest.raises(AttributeError):
            record.winner_id = "p2"


class TestCoerceAmount:
    """Test lenient amount parsing."""
    
    @pytest.mark.parametrize("raw,expected", [
        (1000, 1000),
        ("1000", 1000),
        (" 42 ", 42),
        (12.7, 12),
        (0, 0),
        (-1, 0),
        ("-300", 0),
        ("1,000", 0),
        ("1_000", 0),
        ("1e3", 1000),
        ("99.9", 99),
        (10**17 + 1, 10**17 + 1),
        (str(10**17 + 1), 10**17 + 1),
        ("100000000000000001.5", 10**17 + 1),
        ("Infinity", 0),
        ("abc", 0),
        ("", 0),
        (None, 0),
        (True, 0),
        (float("inf"), 0),
        ([1], 0),
    ])
    def test_coerce(self, raw, expected):
        """Test raw input becomes a non-negative int."""
        assert coerce_amount(raw) == expected
