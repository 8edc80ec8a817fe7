"""walkwage — turn daily walks into a weekly allowance ledger."""

__version__ = "0.1.0"
