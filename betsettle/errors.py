"""Ledger error types."""


class LedgerError(Exception):
    """Base class for ledger errors."""
    pass


class InvariantViolation(LedgerError):
    """Operation would break a roster invariant (e.g. minimum player count)."""
    pass


class InvalidReference(LedgerError):
    """A player id that is not on the roster, or not allowed in this position."""
    pass


class UnbalancedLedger(LedgerError):
    """Settlement could not zero out debtors and creditors together.
    
    Net balances that do not sum to zero end up here. This is a bug in
    balance computation or corrupted input, never a user error.
    """
    pass


class StorageError(LedgerError):
    """Persistence backend failed to load or save."""
    pass
