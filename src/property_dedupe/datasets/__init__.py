from property_dedupe.datasets.profiles import LOAN_DASHBOARD_COLUMNS, LOAN_DASHBOARD_SCHEMA
from property_dedupe.datasets.reference import ReferenceDatasetGenerator

__all__ = ["LOAN_DASHBOARD_COLUMNS", "LOAN_DASHBOARD_SCHEMA", "ReferenceDatasetGenerator"]
