from .services import closing


class DatabaseLedger:
    """Ledger backed by the closing services of this app (same process, same database)."""

    def __init__(self, user=None):
        # acting user recorded on closures and audit rows
        self.user = user

    def closure_exists(self, month, year):
        return closing.closure_exists(month, year)

    def preview_counts(self, month, year, division):
        return closing.preview_close(month, year, division)

    def close_month(self, month, year, notes=None):
        return closing.close_month(month, year, notes=notes, user=self.user)

    def restore_month(self, month, year, division):
        return closing.restore_month(month, year, division, user=self.user)
