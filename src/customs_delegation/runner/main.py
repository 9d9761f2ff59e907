"""
CLI main entry point.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from ..config import Config, ConfigValidationError, create_default_config, load_config
from ..exporters import export_delegation_agreements, export_delegation_letter
from ..readers import WorkbookReadError, read_workbook
from ..services import DelegationPipeline

logger = logging.getLogger(__name__)

LETTER_FILE_NAME = "delegation-letter.xlsx"
AGREEMENTS_FILE_NAME = "delegation-agreements.xlsx"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_cli() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="customs-delegation",
        description="Generate customs delegation letters and agreements from Excel files",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path("config.yaml"),
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # classify command
    classify_parser = subparsers.add_parser("classify", help="Show the detected type of each sheet")
    classify_parser.add_argument("files", nargs="+", type=Path, help="Excel files")

    # extract command
    extract_parser = subparsers.add_parser(
        "extract", help="Extract records from one file and print them as JSON"
    )
    extract_parser.add_argument("file", type=Path, help="Excel file")

    # generate command
    generate_parser = subparsers.add_parser(
        "generate", help="Merge files and export the delegation letter and agreements"
    )
    generate_parser.add_argument("files", nargs="+", type=Path, help="Excel files")
    generate_parser.add_argument(
        "--output-dir",
        type=Path,
        help="Directory for generated workbooks (default: output_dir from config)",
    )
    generate_parser.add_argument(
        "--json",
        action="store_true",
        help="Also print the full run result as JSON",
    )

    # init-config command
    subparsers.add_parser("init-config", help="Write a default config file")

    return parser


def cmd_classify(config: Config, files: list[Path]) -> int:
    """Classify every sheet of the given files."""
    pipeline = DelegationPipeline(config)

    for path in files:
        try:
            sheets = read_workbook(path)
        except WorkbookReadError as e:
            print(f"❌ {e}")
            return 1

        print(f"📄 {path.name}")
        for sheet in sheets:
            verdict = pipeline.classifier.classify(sheet.name, sheet.rows)
            print(
                f"  → {sheet.name}: {verdict.sheet_type.value} "
                f"({verdict.confidence:.0%}, {verdict.data_row_count} rows)"
            )

    return 0


def cmd_extract(config: Config, file: Path) -> int:
    """Extract one file and print its records."""
    try:
        sheets = read_workbook(file)
    except WorkbookReadError as e:
        print(f"❌ {e}")
        return 1

    extraction = DelegationPipeline(config).process_file(file.name, sheets)
    print(json.dumps(extraction.to_dict(), ensure_ascii=False, indent=2))
    return 0


def cmd_generate(
    config: Config, files: list[Path], output_dir: Path | None, as_json: bool
) -> int:
    """Run the full pipeline and write the delegation workbooks.

    Args:
        config: Configuration object.
        files: Excel files making up one batch.
        output_dir: Target directory (overrides config.output_dir).
        as_json: Print the full run result as JSON.
    """
    print(f"📊 Processing {len(files)} file(s)...")

    try:
        run = DelegationPipeline(config).run_paths(files)
    except WorkbookReadError as e:
        print(f"❌ {e}")
        return 1

    for extraction in run.files:
        print(f"  📄 {extraction.file_name} (priority {extraction.priority:g})")

    target = output_dir or config.output_dir
    target.mkdir(parents=True, exist_ok=True)

    letter_path = target / LETTER_FILE_NAME
    letter_path.write_bytes(export_delegation_letter(run.mapping.delegation_letter))
    print(f"  ✓ Letter written to {letter_path}")

    agreements = run.mapping.delegation_agreements
    if agreements:
        agreements_path = target / AGREEMENTS_FILE_NAME
        agreements_path.write_bytes(export_delegation_agreements(agreements))
        print(f"  ✓ {len(agreements)} agreement(s) written to {agreements_path}")

    for warning in run.mapping.warnings:
        print(f"  ⚠ {warning}")

    if as_json:
        print(json.dumps(run.to_dict(), ensure_ascii=False, indent=2))

    print(f"\n✓ Done in {run.duration_ms}ms")
    return 0


def cmd_init_config(config_path: Path) -> int:
    """Write the default config file."""
    if config_path.exists():
        print(f"❌ Config already exists: {config_path}")
        return 1

    create_default_config(config_path)
    print(f"✓ Wrote default config to {config_path}")
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_cli()
    parsed = parser.parse_args(args)

    setup_logging(parsed.verbose)

    if not parsed.command:
        parser.print_help()
        return 1

    if parsed.command == "init-config":
        return cmd_init_config(parsed.config)

    # Load config
    try:
        config = load_config(parsed.config)
        errors = config.validate()
        if errors:
            raise ConfigValidationError("; ".join(errors))
    except Exception as e:
        print(f"❌ Failed to load config: {e}")
        return 1

    # Route to command
    if parsed.command == "classify":
        return cmd_classify(config, parsed.files)
    elif parsed.command == "extract":
        return cmd_extract(config, parsed.file)
    elif parsed.command == "generate":
        return cmd_generate(config, parsed.files, parsed.output_dir, parsed.json)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
