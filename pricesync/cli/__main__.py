from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, PriceSyncConfig, default_config_path, load_config
from ..excel.reader import SheetHeaderError, SheetReadError, read_sheet
from ..logging.init import log_summary, set_debug, setup_logging
from ..services.reconcile import ReconcileError, reconcile
from ..services.summary import render_summary_fields

"""CLI entrypoint.

Flow:
- Load .env (may set PRICESYNC_CONFIG)
- Load and validate the YAML config
- Reconcile vendor and company sheets, write the updated company sheet
- Print the SUMMARY line and exit with a contract exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_ROW_ERRORS = 2

INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path) -> None:
    """Load .env without overriding variables already set in the process."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="pricesync", description="Reconcile a vendor price list against a company catalog export"
    )
    p.add_argument("--config", type=Path, default=None, help="Path to YAML config (default: $PRICESYNC_CONFIG or config/pricesync.yml)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print sheet headers & first rows then exit")
    p.add_argument("--dry-run", action="store_true", help="Process and report without writing the output file")
    return p.parse_args(argv)


def _inspect_data(cfg: PriceSyncConfig) -> int:
    for label, file in (("vendor", cfg.vendor_file), ("company", cfg.company_file)):
        path = Path(file)
        print(f"FILE ({label}): {path.name}")
        try:
            sheet = read_sheet(path, null_sentinels=cfg.null_sentinels)
        except (SheetReadError, SheetHeaderError) as e:
            print(f"  read_error: {e}")
            return EXIT_FATAL
        print(f"  SHEET: {sheet.sheet_name} headers={sheet.headers} rows={len(sheet.rows)}")
        for i, row in enumerate(sheet.rows[:INSPECT_SAMPLE_ROWS], start=1):
            print(f"    [{i}] {row}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only reads sys.argv; an explicit [] must not pick up pytest's arguments
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    config_path = args.config or default_config_path()
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg)

    logger.info(f"Reconciling vendor={cfg.vendor_file} company={cfg.company_file}")
    try:
        result = reconcile(cfg, write_output=not args.dry_run)
    except ReconcileError as e:
        logger.error(f"reconcile: {e}")
        return EXIT_FATAL

    # the SUMMARY label comes from the log formatter
    log_summary(render_summary_fields(result))

    if result.row_errors > 0:
        return EXIT_ROW_ERRORS
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
