"""Domain models for the vendor/company price reconciliation tool.

This package contains the frozen dataclasses passed between the row
processors, the match engine and the markup calculator.
"""

from .company_row import COMPANY_HEADERS, NormalizedCompanyRow
from .mapping import ColumnMapping, MappingError, VendorMapping
from .markup import Markup
from .matched_item import MatchedItem
from .processing_result import MatchSummary, ProcessResult, ReconcileResult
from .row_error import RowError
from .vendor_row import NormalizedVendorRow

__all__ = [
    # Mapping models
    "ColumnMapping",
    "MappingError",
    "VendorMapping",
    # Row models
    "COMPANY_HEADERS",
    "NormalizedCompanyRow",
    "NormalizedVendorRow",
    "RowError",
    # Matching / pricing models
    "MatchedItem",
    "Markup",
    # Results
    "MatchSummary",
    "ProcessResult",
    "ReconcileResult",
]
