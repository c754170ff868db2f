from .actions import make_restore_action
from .auditlog import AuditLogAdmin
from .closure import MonthlyClosureAdmin
from .company import (BranchAdmin, BrandAdmin, CompanyAdmin,
                      ModalHistoryInline, MotorTypeAdmin)
from .history import (AssetRecordHistoryAdmin, BrokerageJobHistoryAdmin,
                      InstallmentHistoryAdmin, LedgerEntryHistoryAdmin,
                      OperationalExpenseHistoryAdmin, PurchaseHistoryAdmin,
                      SaleHistoryAdmin, SalesFeeHistoryAdmin)
from .mixins import DivisionAdminMixin
from .ReadOnly import ReadOnlyAdmin
from .records import (AssetRecordAdmin, BrokerageJobAdmin, InstallmentAdmin,
                      LedgerEntryAdmin, OperationalExpenseAdmin,
                      ProfitAdjustmentAdmin, PurchaseAdmin, SaleAdmin,
                      SalesFeeAdmin)
