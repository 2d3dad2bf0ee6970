from __future__ import annotations

from property_dedupe.schema import FieldTag, RecordSchema

# Columns of the loan dashboard display view, in source order.
LOAN_DASHBOARD_COLUMNS = [
    "property_id",
    "property_name",
    "first_year",
    "last_year",
    "last_balance_year",
    "last_balance",
    "interest_total",
    "principal_total",
]


LOAN_DASHBOARD_SCHEMA = RecordSchema.from_mapping(
    {
        FieldTag.PROPERTY_ID: ["property_id"],
        FieldTag.LABEL: ["property_name"],
        FieldTag.FIRST_YEAR: ["first_year"],
        FieldTag.LAST_YEAR: ["last_year"],
        FieldTag.BALANCE_YEAR: ["last_balance_year"],
        FieldTag.BALANCE: ["last_balance"],
        FieldTag.INTEREST_TOTAL: ["interest_total"],
        FieldTag.PRINCIPAL_TOTAL: ["principal_total"],
    }
)
