from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


def _id():
    return ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID"))


def _money(**kwargs):
    # nullable amounts have no default
    if not kwargs.get("null"):
        kwargs.setdefault("default", Decimal("0.00"))
    return models.DecimalField(decimal_places=2, max_digits=18, **kwargs)


def _fk(to, **kwargs):
    return models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="+", to=to, **kwargs)


def _timestamps():
    return [
        ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
        ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
    ]


def _division():
    return _timestamps() + [("division", models.CharField(db_index=True, max_length=20))]


def _closed_period():
    return [
        ("source_id", models.BigIntegerField(db_index=True)),
        ("closed_month", models.PositiveSmallIntegerField()),
        ("closed_year", models.PositiveSmallIntegerField()),
        ("closed_at", models.DateTimeField(default=django.utils.timezone.now)),
    ]


# ---------- Business columns shared by each active/history pair ----------
def _purchase_fields():
    return _division() + [
        ("branch", _fk("dealer_core.branch")),
        ("brand", _fk("dealer_core.brand")),
        ("motor_type", _fk("dealer_core.motortype")),
        ("source_company", _fk("dealer_core.company", blank=True, null=True)),
        ("plate_number", models.CharField(max_length=20)),
        ("model_year", models.PositiveSmallIntegerField()),
        ("color", models.CharField(blank=True, max_length=40)),
        ("mileage", models.PositiveIntegerField(default=0)),
        ("purchase_date", models.DateField(db_index=True)),
        ("tax_date", models.DateField(blank=True, null=True)),
        ("purchase_price", _money()),
        ("final_price", _money(blank=True, null=True)),
        ("status", models.CharField(
            choices=[("ready", "Ready"), ("booked", "Booked"), ("sold", "Sold")],
            default="ready", max_length=20)),
        ("notes", models.TextField(blank=True)),
    ]


def _sale_fields():
    return _division() + [
        ("branch", _fk("dealer_core.branch")),
        ("brand", _fk("dealer_core.brand")),
        ("motor_type", _fk("dealer_core.motortype")),
        ("company", _fk("dealer_core.company")),
        ("purchase_id", models.BigIntegerField(db_index=True)),
        ("plate_number", models.CharField(max_length=20)),
        ("sale_date", models.DateField(db_index=True)),
        ("payment_type", models.CharField(
            choices=[("cash", "Cash"), ("cash_bertahap", "Cash bertahap"), ("kredit", "Kredit")],
            default="cash", max_length=20)),
        ("purchase_price", _money()),
        ("sale_price", _money()),
        ("down_payment", _money()),
        ("remaining", _money()),
        ("profit", _money(blank=True, null=True)),
        ("status", models.CharField(
            choices=[("booked", "Booked"), ("sold", "Sold"), ("cancelled", "Cancelled")],
            default="booked", max_length=20)),
        ("paid_off_date", models.DateField(blank=True, null=True)),
        ("notes", models.TextField(blank=True)),
    ]


def _installment_fields():
    return _division() + [
        ("sale_id", models.BigIntegerField(db_index=True)),
        ("batch_no", models.PositiveIntegerField()),
        ("payment_date", models.DateField(db_index=True)),
        ("amount", models.DecimalField(decimal_places=2, max_digits=18)),
        ("remaining", models.DecimalField(decimal_places=2, max_digits=18)),
        ("payment_type", models.CharField(default="cash", max_length=40)),
        ("destination_company", _fk("dealer_core.company", blank=True, null=True)),
        ("status", models.CharField(
            choices=[("pending", "Pending"), ("completed", "Completed")],
            default="pending", max_length=20)),
        ("notes", models.TextField(blank=True)),
    ]


def _sales_fee_fields():
    return _division() + [
        ("sale_id", models.BigIntegerField(db_index=True)),
        ("fee_date", models.DateField(db_index=True)),
        ("amount", models.DecimalField(decimal_places=2, max_digits=18)),
        ("notes", models.TextField(blank=True)),
    ]


def _operational_fields():
    return _division() + [
        ("branch", _fk("dealer_core.branch")),
        ("company", _fk("dealer_core.company")),
        ("date", models.DateField(db_index=True)),
        ("category", models.CharField(max_length=80)),
        ("description", models.CharField(max_length=400)),
        ("amount", models.DecimalField(decimal_places=2, max_digits=18)),
        ("is_retroactive", models.BooleanField(default=False)),
        ("original_month", models.DateField(blank=True, null=True)),
    ]


def _ledger_fields():
    return _division() + [
        ("branch", _fk("dealer_core.branch", blank=True, null=True)),
        ("company", _fk("dealer_core.company", blank=True, null=True)),
        ("date", models.DateField(db_index=True)),
        ("description", models.CharField(max_length=400)),
        ("debit", _money()),
        ("credit", _money()),
        ("purchase_id", models.BigIntegerField(blank=True, null=True)),
        ("origin_type", models.CharField(blank=True, max_length=40)),
        ("origin_id", models.BigIntegerField(blank=True, null=True)),
    ]


def _brokerage_fields():
    return _division() + [
        ("date", models.DateField(db_index=True)),
        ("service_type", models.CharField(max_length=120)),
        ("plate_number", models.CharField(blank=True, max_length=20)),
        ("brand_name", models.CharField(blank=True, max_length=120)),
        ("motor_type_name", models.CharField(blank=True, max_length=120)),
        ("estimated_finish", models.DateField(blank=True, null=True)),
        ("estimated_cost", _money()),
        ("down_payment", _money()),
        ("total_paid", _money()),
        ("remaining", _money()),
        ("capital_cost", _money()),
        ("profit", _money(blank=True, null=True)),
        ("destination_company", _fk("dealer_core.company", blank=True, null=True)),
        ("status", models.CharField(
            choices=[("dalam proses", "Dalam Proses"), ("selesai", "Selesai")],
            default="dalam proses", max_length=20)),
        ("notes", models.TextField(blank=True)),
    ]


def _asset_fields():
    return _division() + [
        ("branch", _fk("dealer_core.branch")),
        ("source_company", _fk("dealer_core.company")),
        ("date", models.DateField(db_index=True)),
        ("name", models.CharField(max_length=200)),
        ("amount", _money()),
        ("notes", models.TextField(blank=True)),
    ]


def _history(name, fields, db_table, verbose_name_plural, constraint_name):
    return migrations.CreateModel(
        name=name,
        fields=[_id()] + _closed_period() + fields,
        options={
            "db_table": db_table,
            "verbose_name_plural": verbose_name_plural,
            "constraints": [models.UniqueConstraint(fields=("source_id",), name=constraint_name)],
        },
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        # ---------- Master data ----------
        migrations.CreateModel(
            name="Company",
            fields=[_id()] + _timestamps() + [
                ("name", models.CharField(max_length=200)),
                ("division", models.CharField(db_index=True, max_length=20)),
                ("account_number", models.CharField(blank=True, max_length=64)),
                ("modal", _money()),
                ("status", models.CharField(
                    choices=[("active", "Active"), ("inactive", "Inactive")],
                    default="active", max_length=20)),
            ],
            options={"db_table": "companies", "verbose_name_plural": "companies", "ordering": ("name",)},
        ),
        migrations.CreateModel(
            name="Branch",
            fields=[_id()] + _timestamps() + [("name", models.CharField(max_length=120, unique=True))],
            options={"db_table": "cabang", "verbose_name_plural": "branches", "ordering": ("name",)},
        ),
        migrations.CreateModel(
            name="Brand",
            fields=[_id()] + _timestamps() + [("name", models.CharField(max_length=120, unique=True))],
            options={"db_table": "brands", "ordering": ("name",)},
        ),
        migrations.CreateModel(
            name="MotorType",
            fields=[_id()] + _timestamps() + [
                ("brand", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT,
                                            related_name="motor_types", to="dealer_core.brand")),
                ("name", models.CharField(max_length=120)),
                ("qty", models.PositiveIntegerField(default=0)),
            ],
            options={
                "db_table": "jenis_motor",
                "constraints": [models.UniqueConstraint(fields=("brand", "name"), name="uq_motor_type_brand_name")],
            },
        ),
        migrations.CreateModel(
            name="ModalHistory",
            fields=[
                _id(),
                ("company", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT,
                                              related_name="modal_history", to="dealer_core.company")),
                ("amount", models.DecimalField(decimal_places=2, max_digits=18)),
                ("description", models.CharField(blank=True, max_length=400)),
                ("date", models.DateField(default=django.utils.timezone.localdate)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "modal_history",
                "ordering": ("-created_at", "-id"),
                "indexes": [models.Index(fields=["company", "date"], name="ix_modal_history_company_date")],
            },
        ),

        # ---------- Closures, profit, audit ----------
        migrations.CreateModel(
            name="MonthlyClosure",
            fields=[
                _id(),
                ("closure_month", models.PositiveSmallIntegerField()),
                ("closure_year", models.PositiveSmallIntegerField()),
                ("closure_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("notes", models.TextField(blank=True, null=True)),
                ("created_by", models.ForeignKey(blank=True, null=True,
                                                 on_delete=django.db.models.deletion.SET_NULL,
                                                 related_name="+", to=settings.AUTH_USER_MODEL)),
                ("total_pembelian_moved", models.PositiveIntegerField(default=0)),
                ("total_penjualan_moved", models.PositiveIntegerField(default=0)),
                ("total_pembukuan_moved", models.PositiveIntegerField(default=0)),
                ("total_cicilan_moved", models.PositiveIntegerField(default=0)),
                ("total_fee_moved", models.PositiveIntegerField(default=0)),
                ("total_operational_moved", models.PositiveIntegerField(default=0)),
                ("total_biro_jasa_moved", models.PositiveIntegerField(default=0)),
                ("total_assets_moved", models.PositiveIntegerField(default=0)),
                ("reopened_divisions", models.JSONField(blank=True, default=list)),
            ],
            options={
                "db_table": "monthly_closures",
                "ordering": ("-closure_year", "-closure_month"),
                "constraints": [
                    models.UniqueConstraint(fields=("closure_month", "closure_year"),
                                            name="uq_monthly_closure_period"),
                    models.CheckConstraint(
                        condition=models.Q(("closure_month__gte", 1), ("closure_month__lte", 12)),
                        name="ck_monthly_closure_month_range",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProfitAdjustment",
            fields=[
                _id(),
                ("operational_id", models.BigIntegerField(db_index=True)),
                ("date", models.DateField()),
                ("division", models.CharField(db_index=True, max_length=20)),
                ("category", models.CharField(max_length=80)),
                ("description", models.CharField(blank=True, max_length=400)),
                ("amount", _money()),
                ("adjustment_type", models.CharField(
                    choices=[("deduction", "Deduction"), ("restoration", "Restoration")],
                    default="deduction", max_length=20)),
                ("status", models.CharField(
                    choices=[("active", "Active"), ("reversed", "Reversed")],
                    default="active", max_length=20)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "profit_adjustments",
                "ordering": ("-created_at", "-id"),
                "indexes": [models.Index(fields=["division", "date"], name="ix_profit_adj_div_date")],
            },
        ),
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                _id(),
                ("action", models.CharField(max_length=50)),
                ("object_type", models.CharField(max_length=100)),
                ("object_id", models.CharField(max_length=100)),
                ("changes", models.JSONField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("user", models.ForeignKey(blank=True, null=True,
                                           on_delete=django.db.models.deletion.SET_NULL,
                                           to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "indexes": [
                    models.Index(fields=["object_type", "object_id"], name="ix_auditlog_object"),
                    models.Index(fields=["created_at"], name="ix_auditlog_created"),
                ],
            },
        ),

        # ---------- Active tables ----------
        migrations.CreateModel(
            name="Purchase",
            fields=[_id()] + _purchase_fields(),
            options={
                "db_table": "pembelian",
                "indexes": [models.Index(fields=["division", "status", "purchase_date"],
                                         name="ix_pembelian_div_status_date")],
            },
        ),
        migrations.CreateModel(
            name="Sale",
            fields=[_id()] + _sale_fields(),
            options={
                "db_table": "penjualans",
                "indexes": [models.Index(fields=["division", "status", "sale_date"],
                                         name="ix_penjualan_div_status_date")],
            },
        ),
        migrations.CreateModel(
            name="Installment",
            fields=[_id()] + _installment_fields(),
            options={
                "db_table": "cicilan",
                "constraints": [models.UniqueConstraint(fields=("sale_id", "batch_no"),
                                                        name="uq_cicilan_sale_batch")],
            },
        ),
        migrations.CreateModel(
            name="SalesFee",
            fields=[_id()] + _sales_fee_fields(),
            options={"db_table": "fee_penjualan"},
        ),
        migrations.CreateModel(
            name="OperationalExpense",
            fields=[_id()] + _operational_fields(),
            options={
                "db_table": "operational",
                "indexes": [models.Index(fields=["division", "date"], name="ix_operational_div_date")],
            },
        ),
        migrations.CreateModel(
            name="LedgerEntry",
            fields=[_id()] + _ledger_fields(),
            options={
                "db_table": "pembukuan",
                "verbose_name_plural": "ledger entries",
                "indexes": [
                    models.Index(fields=["division", "date"], name="ix_pembukuan_div_date"),
                    models.Index(fields=["origin_type", "origin_id"], name="ix_pembukuan_origin"),
                ],
            },
        ),
        migrations.CreateModel(
            name="BrokerageJob",
            fields=[_id()] + _brokerage_fields(),
            options={"db_table": "biro_jasa"},
        ),
        migrations.CreateModel(
            name="AssetRecord",
            fields=[_id()] + _asset_fields(),
            options={"db_table": "pencatatan_asset"},
        ),

        # ---------- History tables ----------
        _history("PurchaseHistory", _purchase_fields(), "pembelian_history",
                 "purchase history", "uq_pembelian_history_source"),
        _history("SaleHistory", _sale_fields(), "penjualans_history",
                 "sale history", "uq_penjualans_history_source"),
        _history("InstallmentHistory", _installment_fields(), "cicilan_history",
                 "installment history", "uq_cicilan_history_source"),
        _history("SalesFeeHistory", _sales_fee_fields(), "fee_penjualan_history",
                 "sales fee history", "uq_fee_penjualan_history_source"),
        _history("OperationalExpenseHistory", _operational_fields(), "operational_history",
                 "operational expense history", "uq_operational_history_source"),
        _history("LedgerEntryHistory", _ledger_fields(), "pembukuan_history",
                 "ledger entry history", "uq_pembukuan_history_source"),
        _history("BrokerageJobHistory", _brokerage_fields(), "biro_jasa_history",
                 "brokerage job history", "uq_biro_jasa_history_source"),
        _history("AssetRecordHistory", _asset_fields(), "pencatatan_asset_history",
                 "asset record history", "uq_pencatatan_asset_history_source"),
    ]
