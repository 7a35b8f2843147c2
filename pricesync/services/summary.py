from __future__ import annotations

from ..models.processing_result import ReconcileResult

"""SUMMARY line rendering for a reconcile run."""

SUMMARY_LABEL = "SUMMARY"


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for very small numbers
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_fields(result: ReconcileResult) -> str:
    """Render the ``key=value`` body of the SUMMARY line (no label).

    Format:
    vendor_rows={ok}/{total} company_rows={ok}/{total} matched={n}
    orphaned={n} row_errors={n} elapsed_sec={elapsed}
    """
    return (
        f"vendor_rows={result.vendor.success_count}/{result.vendor.total_rows} "
        f"company_rows={result.company.success_count}/{result.company.total_rows} "
        f"matched={result.summary.matched} "
        f"orphaned={result.summary.orphaned} "
        f"row_errors={result.row_errors} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )


def render_summary_line(result: ReconcileResult) -> str:
    """Render the full SUMMARY line, label included."""
    return f"{SUMMARY_LABEL} {render_summary_fields(result)}"
