"""Multi-signature wallet: threshold approval of proposed transactions on an in-memory ledger."""

__version__ = "0.1.0"
__all__ = ["errors", "state", "context", "program"]