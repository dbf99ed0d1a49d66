"""CLI interface for computing invoices from JSON records."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ..config import (
    get_currency_prefix,
    get_default_output_dir,
    get_output_subdirs,
    get_page_size,
    get_validation_tolerance,
)
from ..config.profile_manager import set_profile
from ..export.excel_export import export_to_excel
from ..pipeline.invoice_builder import build_invoice
from ..pipeline.number_normalizer import format_inr
from ..pipeline.validation import validate_document

logger = logging.getLogger(__name__)


class InvoiceProcessingError(Exception):
    """Raised when an input record cannot be read."""
    pass


def load_records(path: Path) -> List[Dict[str, Any]]:
    """Load invoice input records from a JSON file.

    The file holds either one record or a list of records, each shaped
    {"transaction", "company", "party", "shippingAddress"?, "serviceNameById"?,
    "bank"?}.

    Raises:
        InvoiceProcessingError: If the file is missing or not valid JSON
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise InvoiceProcessingError(f"Input file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise InvoiceProcessingError(f"Invalid JSON in {path}: {e}") from e

    records = data if isinstance(data, list) else [data]
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise InvoiceProcessingError(f"Record {index} in {path} is not an object")
    return records


def process_record(
    record: Mapping[str, Any],
    page_size: Optional[int] = None,
    tolerance: Optional[float] = None,
) -> Dict[str, Any]:
    """Compute and validate one invoice record.

    Returns:
        Dict with keys: status, document, validation
    """
    # Records exported straight from the database may carry the
    # transaction at the top level
    transaction = record.get("transaction", record)
    document = build_invoice(
        transaction,
        company=record.get("company"),
        party=record.get("party"),
        service_name_by_id=record.get("serviceNameById"),
        shipping_address=record.get("shippingAddress"),
        page_size=page_size,
        bank=record.get("bank"),
    )
    validation = validate_document(
        document,
        tolerance=tolerance if tolerance is not None else get_validation_tolerance(),
    )
    return {
        "status": validation.status,
        "document": document,
        "validation": validation,
    }


def _input_files(input_path: Path) -> List[Path]:
    if input_path.is_dir():
        return sorted(input_path.glob("*.json"))
    return [input_path]


def process_batch(
    input_path: str,
    output_dir: str,
    output_format: str = "json",
    page_size: Optional[int] = None,
    fail_fast: bool = False,
    verbose: bool = False,
) -> Dict[str, Any]:
    """Process one JSON file or every *.json file in a directory.

    Args:
        input_path: JSON file or directory of JSON files
        output_dir: Output directory (json/ and excel/ subdirectories)
        output_format: "json", "excel" or "both"
        page_size: Optional page size override
        fail_fast: Stop on the first unreadable file
        verbose: Print per-invoice progress

    Returns:
        Dict with counts (processed, ok, review, failed), errors and output paths
    """
    files = _input_files(Path(input_path))
    subdirs = get_output_subdirs(Path(output_dir))
    size = get_page_size(page_size)
    currency_prefix = get_currency_prefix()

    results: Dict[str, Any] = {
        "processed": 0,
        "ok": 0,
        "review": 0,
        "failed": 0,
        "errors": [],
        "json_paths": [],
        "excel_path": None,
    }
    entries = []

    for file_path in files:
        try:
            records = load_records(file_path)
        except InvoiceProcessingError as e:
            results["failed"] += 1
            results["errors"].append({"file": str(file_path), "error": str(e)})
            logger.error(str(e))
            if fail_fast:
                break
            continue

        for index, record in enumerate(records, start=1):
            result = process_record(record, page_size=size)
            document = result["document"]
            validation = result["validation"]
            source = file_path.stem if len(records) == 1 else f"{file_path.stem}__{index}"

            results["processed"] += 1
            if validation.status == "OK":
                results["ok"] += 1
            else:
                results["review"] += 1

            if verbose:
                print(
                    f"  {source}: {document.invoice_number} {validation.status} "
                    f"regime={document.regime.value} "
                    f"total={format_inr(document.totals.grand_total, prefix=currency_prefix)}"
                )

            if output_format in ("json", "both"):
                out_path = subdirs["json"] / f"{source}.json"
                payload = document.to_dict()
                payload["validation"] = validation.to_dict()
                with open(out_path, "w", encoding="utf-8") as f:
                    json.dump(payload, f, indent=2, ensure_ascii=False)
                results["json_paths"].append(str(out_path))

            entries.append({"document": document, "validation": validation, "source": source})

    if entries and output_format in ("excel", "both"):
        results["excel_path"] = export_to_excel(entries, str(subdirs["excel"] / "invoices.xlsx"))

    return results


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="GST Invoice Engine - compute tax-correct, paginated invoices from transaction records"
    )

    parser.add_argument(
        "--input",
        required=True,
        help="Input JSON file or directory of JSON files"
    )

    parser.add_argument(
        "--output",
        required=False,
        help="Output directory (default: ./out or GSTINVOICE_OUTPUT_DIR)"
    )

    parser.add_argument(
        "--format",
        choices=["json", "excel", "both"],
        default="json",
        help="Output format (default: json)"
    )

    parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help="Item rows per page (default: from profile)"
    )

    parser.add_argument(
        "--profile",
        type=str,
        default=None,
        help="Configuration profile name (default: GSTINVOICE_PROFILE or default)"
    )

    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop processing on first unreadable file"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with error code if any invoice requires review"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose debug output"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.page_size is not None and args.page_size < 1:
        parser.error("--page-size must be >= 1")

    output_dir = args.output
    if not output_dir:
        output_dir = str(get_default_output_dir())
        print(f"Using default output directory: {output_dir}")

    try:
        if args.profile:
            set_profile(args.profile)

        results = process_batch(
            args.input,
            output_dir,
            output_format=args.format,
            page_size=args.page_size,
            fail_fast=args.fail_fast,
            verbose=args.verbose,
        )

        print(
            f"\nDone: {results['processed']} processed. "
            f"OK={results['ok']}, REVIEW={results['review']}, failed={results['failed']}."
        )
        if results.get("excel_path"):
            print(f"Excel: {results['excel_path']}")
        for error in results["errors"]:
            print(f"Error: {error['file']}: {error['error']}", file=sys.stderr)

        exit_code = 0
        if results["failed"] > 0:
            exit_code = 1
        elif args.strict and results["review"] > 0:
            exit_code = 1

        sys.exit(exit_code)

    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
