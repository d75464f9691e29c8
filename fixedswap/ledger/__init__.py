"""fixedswap.ledger: sale counters, per-account quotas and the swap audit record."""

from fixedswap.ledger.accounting import AccountingLedger as AccountingLedger
from fixedswap.ledger.accounting import LedgerSnapshot as LedgerSnapshot
from fixedswap.ledger.events import SwapEvent as SwapEvent
