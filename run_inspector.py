import argparse
import os
import sys
from typing import List, Optional

from inspector.config import DEFAULT_SPEC_FILE, SPEC_BASE_DIR
from inspector.loader import load_document
from inspector.report import ReportLog, print_usage_map
from inspector.resolver import build_schema_index
from inspector.walker import walk_document


def resolve_spec_path(spec_arg: Optional[str], base_dir: str = SPEC_BASE_DIR) -> str:
    """
    Абсолютний шлях використовуємо як є, інакше шукаємо файл у base_dir.
    Порожній аргумент означає файл за замовчуванням.
    """
    if not spec_arg or not spec_arg.strip():
        spec_arg = DEFAULT_SPEC_FILE
    if os.path.isabs(spec_arg):
        return spec_arg
    return os.path.join(base_dir, spec_arg)


def run(spec_arg: Optional[str], report: ReportLog, base_dir: str = SPEC_BASE_DIR) -> int:
    spec_path = resolve_spec_path(spec_arg, base_dir)

    if not os.path.isfile(spec_path):
        report.error("OpenAPI spec file not found.")
        report.error(f"Resolved path: {spec_path}")
        report.error("Tip: place the spec file in the project directory or pass an absolute path.")
        report.error("Example: python run_inspector.py petstore-expanded.json")
        return 1

    report.log(f"Using spec: {os.path.abspath(spec_path)}")

    # --- КРОК 1: ПАРСИНГ ---
    # UnsupportedSpecFormatError свідомо не перехоплюємо
    document = load_document(spec_path)

    # --- КРОК 2: ІНДЕКС СХЕМ ---
    schema_index = build_schema_index(document.component_schemas)

    # --- КРОК 3: ОБХІД ДОКУМЕНТА ---
    usages = walk_document(document, schema_index, [], report)

    # --- КРОК 4: КАРТА ВИКОРИСТАННЯ ---
    print_usage_map(usages, report)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Print the structure and schema usage map of an OpenAPI document")
    parser.add_argument(
        "spec",
        nargs="?",
        default=None,
        help=f"Path or file name of the OpenAPI document (default: {DEFAULT_SPEC_FILE})",
    )
    args = parser.parse_args(argv)
    return run(args.spec, ReportLog())


if __name__ == "__main__":
    sys.exit(main())
