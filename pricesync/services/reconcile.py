from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import ConfigError, PriceSyncConfig, resolve_vendor_mapping
from ..excel.reader import SheetData, SheetHeaderError, SheetReadError, read_sheet
from ..excel.writer import SheetWriteError, company_rows_to_table, write_sheet
from ..logging.error_log import ErrorLogBuffer
from ..models.mapping import MappingError
from ..models.processing_result import ReconcileResult
from ..processors.company import process_company_rows
from ..processors.vendor import process_vendor_rows
from .matching import match_items, summarize_matches
from .pricing import apply_price_updates, apply_subclass_price_updates
from .progress import StageProgress

"""Reconcile orchestration.

Runs one full pass over a vendor price list and a company export:

1. Read both spreadsheets
2. Resolve the vendor column mapping and normalize vendor rows
3. Normalize company rows
4. Match company rows to vendor rows by MPN
5. Recompute prices (per-subclass markups when configured)
6. Write the updated company rows (when an output file is configured)

Rejected rows never stop the run; they are collected and flushed to the
JSON Lines error log at the end. Unreadable inputs, an unresolvable mapping
or a failed write raise ReconcileError.
"""

logger = logging.getLogger(__name__)

STAGES = ["read", "vendor", "company", "match", "price", "write"]


class ReconcileError(Exception):
    """Fatal error that prevents a reconcile run from completing."""


def _read(path: Path, null_sentinels: list[str] | None, dataset: str) -> SheetData:
    try:
        sheet = read_sheet(path, null_sentinels=null_sentinels)
    except (SheetReadError, SheetHeaderError) as e:
        raise ReconcileError(f"{dataset} file: {e}") from e
    logger.info(f"Read {dataset} sheet '{sheet.sheet_name}' from {path.name}: {len(sheet.rows)} rows")
    return sheet


def reconcile(
    config: PriceSyncConfig,
    *,
    write_output: bool = True,
    error_log: ErrorLogBuffer | None = None,
) -> ReconcileResult:
    """Run a full reconcile pass described by ``config``.

    Args:
        config: Loaded configuration
        write_output: False skips writing the output file (dry run)
        error_log: Buffer for rejected rows (a fresh one writing to ./logs by default)

    Raises:
        ReconcileError: For fatal read/mapping/write errors
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()
    vendor_path = Path(config.vendor_file)
    company_path = Path(config.company_file)
    output_path: Path | None = None

    with StageProgress(STAGES) as progress:
        progress.start_stage("read")
        vendor_sheet = _read(vendor_path, config.null_sentinels, "vendor")
        company_sheet = _read(company_path, config.null_sentinels, "company")
        progress.finish_stage()

        progress.start_stage("vendor")
        try:
            mapping = resolve_vendor_mapping(vendor_sheet.headers, config.vendor_mapping)
        except (ConfigError, MappingError) as e:
            raise ReconcileError(f"vendor mapping: {e}") from e
        logger.debug(f"vendor mapping resolved: {mapping.to_dict()}")
        vendor = process_vendor_rows(vendor_sheet.rows, mapping)
        progress.finish_stage(ok=vendor.success_count, errors=vendor.error_count)

        progress.start_stage("company")
        company = process_company_rows(company_sheet.rows, company_sheet.headers)
        progress.finish_stage(ok=company.success_count, errors=company.error_count)

        progress.start_stage("match")
        matched = match_items(company.normalized, vendor.normalized)
        summary = summarize_matches(matched, vendor.normalized)
        progress.finish_stage(matched=summary.matched, orphaned=summary.orphaned)

        progress.start_stage("price")
        if config.markup.subclasses:
            updated = apply_subclass_price_updates(
                matched, config.markup.markup_table, config.markup.default_markup
            )
        else:
            updated = apply_price_updates(matched, config.markup.default_markup)
        progress.finish_stage()

        progress.start_stage("write")
        if write_output and config.output_file:
            headers, rows = company_rows_to_table(updated)
            try:
                output_path = write_sheet(Path(config.output_file), headers, rows)
            except SheetWriteError as e:
                raise ReconcileError(str(e)) from e
            logger.info(f"Wrote {len(rows)} updated company rows to {output_path}")
        elif not write_output:
            logger.info("dry run: output file not written")
        progress.finish_stage()

    error_log.extend_row_errors(vendor_path.name, "vendor", vendor.errors)
    error_log.extend_row_errors(company_path.name, "company", company.errors)
    error_log_path = error_log.flush()
    if error_log_path is not None:
        logger.warning(
            f"{vendor.error_count + company.error_count} rows rejected; details in {error_log_path}"
        )

    end_time = datetime.now(UTC)
    return ReconcileResult(
        vendor=vendor,
        company=company,
        matched=matched,
        updated_rows=updated,
        summary=summary,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        output_path=output_path,
        error_log_path=error_log_path,
    )
