from .asset import AssetRecord, AssetRecordHistory
from .auditlog import AuditLog
from .brokerage import BrokerageJob, BrokerageJobHistory, BrokerageStatus
from .closure import MonthlyClosure
from .company import Branch, Brand, Company, ModalHistory, MotorType
from .operational import (LedgerEntry, LedgerEntryHistory, OperationalExpense,
                          OperationalExpenseHistory)
from .profit import ProfitAdjustment
from .purchase import Purchase, PurchaseHistory, PurchaseStatus
from .sale import (Installment, InstallmentHistory, InstallmentStatus, Sale,
                   SaleHistory, SalesFee, SalesFeeHistory, SaleStatus)
