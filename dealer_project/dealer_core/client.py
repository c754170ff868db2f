"""
Close-month page logic, kept free of any UI toolkit.

ClosureClient holds the form state of the close-month screen and talks to
a ledger object with four calls:

    closure_exists(month, year) -> bool
    preview_counts(month, year, division) -> {kind: count}
    close_month(month, year, notes) -> {"month", "year", "records_moved"}
    restore_month(month, year, division) -> {"month", "year", "records_restored"}

dealer_core.ledger.DatabaseLedger is the in-process implementation; tests
pass stubs. Every ledger failure becomes a notification, nothing is raised
out of the client.
"""
import enum
import logging
from dataclasses import dataclass

from django.core.exceptions import ValidationError

from .managers import ALL_DIVISIONS
from .services.movable import PRIMARY_KEYS

logger = logging.getLogger(__name__)

INVALID_PERIOD_MESSAGE = "Silakan masukkan bulan dan tahun yang valid"


class ClosureState(str, enum.Enum):
    UNKNOWN = "unknown"
    CHECKED = "checked"
    PREVIEWED = "previewed"
    CLOSING = "closing"
    CLOSED = "closed"
    RESTORING = "restoring"
    RESTORED = "restored"


@dataclass
class Notification:
    title: str
    description: str
    variant: str = "default"  # "default" | "destructive" | "info"


class Notifier:
    """Collects transient notifications (toasts) in the order they were raised."""

    def __init__(self):
        self.notifications = []

    def notify(self, title, description, variant="default"):
        note = Notification(title, description, variant)
        self.notifications.append(note)
        logger.debug("notify [%s] %s: %s", variant, title, description)
        return note

    @property
    def last(self):
        return self.notifications[-1] if self.notifications else None

    def clear(self):
        self.notifications.clear()


def _error_message(exc, fallback):
    if isinstance(exc, ValidationError):
        return "; ".join(exc.messages) or fallback
    return str(exc) or fallback


class ClosureClient:

    def __init__(self, ledger, notifier=None, division=ALL_DIVISIONS):
        self.ledger = ledger
        self.notifier = notifier or Notifier()
        self.division = division or ALL_DIVISIONS

        # form
        self.month = ""
        self.year = ""
        self.notes = ""

        self.state = ClosureState.UNKNOWN
        self.is_already_closed = False
        self.preview = None
        self.close_result = None
        self.restore_result = None

        # in-flight flags disable the control that triggered the call
        self.is_loading = False
        self.is_previewing = False
        self.is_restoring = False

        # confirmation dialogs
        self.close_dialog_open = False
        self.restore_dialog_open = False

    # ----------------------------
    # Form state
    # ----------------------------
    def _period(self):
        """(month, year) as ints, or None when the form is incomplete."""
        if not str(self.month).strip() or not str(self.year).strip():
            return None
        try:
            return int(self.month), int(self.year)
        except (TypeError, ValueError):
            return None

    def _reject_invalid_period(self):
        self.notifier.notify("Error", INVALID_PERIOD_MESSAGE, "destructive")

    def select_period(self, month, year):
        """
        Change the target month/year. Closure state is never cached across
        periods: the ledger is asked again for every complete selection.
        """
        self.month = "" if month is None else str(month)
        self.year = "" if year is None else str(year)
        self.preview = None
        self.is_already_closed = False
        self.state = ClosureState.UNKNOWN
        if self._period() is not None:
            self.check_closure_status()

    def set_division(self, division):
        self.division = division or ALL_DIVISIONS
        self.preview = None

    @property
    def can_close(self):
        return not self.is_loading and self._period() is not None

    @property
    def can_restore(self):
        return (not self.is_restoring and self._period() is not None
                and self.division != ALL_DIVISIONS)

    @property
    def nothing_to_move(self):
        # advisory only, never blocks the close button
        if self.preview is None:
            return False
        return all(self.preview.get(key, 0) == 0 for key in PRIMARY_KEYS)

    # ----------------------------
    # Ledger reads
    # ----------------------------
    def check_closure_status(self):
        period = self._period()
        if period is None:
            return False
        month, year = period
        try:
            self.is_already_closed = bool(self.ledger.closure_exists(month, year))
        except Exception as exc:
            self.is_already_closed = False
            self.notifier.notify(
                "Error", _error_message(exc, "Gagal memeriksa status closure"), "destructive"
            )
            return False
        self.state = ClosureState.CHECKED
        return self.is_already_closed

    def preview_close(self):
        """Fetch per-kind counts; read-only and informational."""
        period = self._period()
        if period is None:
            self._reject_invalid_period()
            return None
        month, year = period

        self.is_previewing = True
        try:
            counts = self.ledger.preview_counts(month, year, self.division)
        except Exception as exc:
            # one failed count voids the whole preview
            self.preview = None
            self.notifier.notify(
                "Error", _error_message(exc, "Gagal memuat preview close month"), "destructive"
            )
            return None
        finally:
            self.is_previewing = False

        self.preview = {key: int(value) for key, value in counts.items()}
        if self.state in (ClosureState.UNKNOWN, ClosureState.CHECKED):
            self.state = ClosureState.PREVIEWED
        if self.nothing_to_move:
            self.notifier.notify(
                "Info",
                "Tidak ada data pembelian, penjualan, atau cicilan yang akan dipindahkan",
                "info",
            )
        return self.preview

    # ----------------------------
    # Close
    # ----------------------------
    def request_close(self):
        # first step: the button opens the confirmation dialog
        if not self.can_close:
            return False
        self.close_dialog_open = True
        return True

    def confirm_close(self):
        # the dialog closes as soon as the user confirms, whatever the outcome
        self.close_dialog_open = False
        return self.close_month()

    def close_month(self):
        period = self._period()
        if period is None:
            self._reject_invalid_period()
            return None
        if self.is_loading:
            return None
        month, year = period

        self.is_loading = True
        self.state = ClosureState.CLOSING
        try:
            data = self.ledger.close_month(month, year, self.notes or None)
        except Exception as exc:
            self.state = ClosureState.CHECKED
            self.notifier.notify(
                "Error", _error_message(exc, "Terjadi kesalahan saat menutup bulan"), "destructive"
            )
            return None
        finally:
            self.is_loading = False

        self.close_result = data
        self.restore_result = None
        self.is_already_closed = True
        self.state = ClosureState.CLOSED
        self.notifier.notify("Sukses", f"Berhasil menutup bulan {month}/{year}")
        return data

    # ----------------------------
    # Restore
    # ----------------------------
    def request_restore(self):
        if not self.can_restore:
            return False
        self.restore_dialog_open = True
        return True

    def confirm_restore(self):
        self.restore_dialog_open = False
        return self.restore_month()

    def restore_month(self):
        period = self._period()
        if period is None:
            self._reject_invalid_period()
            return None
        if self.division == ALL_DIVISIONS:
            self.notifier.notify("Error", "Pilih divisi terlebih dahulu untuk restore bulan", "destructive")
            return None
        if self.is_restoring:
            return None
        month, year = period

        self.is_restoring = True
        self.state = ClosureState.RESTORING
        try:
            data = self.ledger.restore_month(month, year, self.division)
        except Exception as exc:
            self.state = ClosureState.CHECKED
            self.notifier.notify(
                "Error", _error_message(exc, "Terjadi kesalahan saat restore bulan"), "destructive"
            )
            return None
        finally:
            self.is_restoring = False

        self.restore_result = data
        self.close_result = None
        # the ledger may have dropped the closure record
        self.check_closure_status()
        self.state = ClosureState.RESTORED
        self.notifier.notify("Sukses", f"Berhasil restore bulan {month}/{year} ({self.division})")
        return data
