"""CLI scripts called from __main__.py"""

import argparse
import logging
import os
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path


def setup_logging(verbose: int = 0) -> None:
    """Configure logging based on verbosity level.

    Args:
        verbose: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
    """
    if verbose == 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("ntcgeometry").setLevel(level)


def validate_file_path(input_path: str) -> Path:
    """Validate file_path and readability"""
    file_path = Path(input_path)
    checks = [
        (file_path.exists(), "Path does not exist"),
        (file_path.is_file(), "Not a valid file"),
        (os.access(file_path, os.R_OK), "No read permission"),
    ]
    for condition, error_message in checks:
        if not condition:
            raise argparse.ArgumentTypeError(f"File Validation Error: {error_message}: {input_path}")
    if file_path.stat().st_size == 0:
        raise argparse.ArgumentTypeError(f"File Validation Error: File is empty: {input_path}")
    return file_path


def validate_dir_path(input_path: str) -> Path:
    """Validate that a path is a readable directory"""
    dir_path = Path(input_path)
    if not dir_path.is_dir():
        raise argparse.ArgumentTypeError(f"Not a directory: {input_path}")
    return dir_path


def get_version() -> str:
    """Get version from package metadata"""
    try:
        return version("ntcgeometry")
    except PackageNotFoundError:
        return "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    """Assemble command-line argument processing"""
    parser = argparse.ArgumentParser(
        prog="ntcgeometry",
        description="Measure the geometry of dinucleotide steps in a nucleic acid structure",
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=get_version(),
        help="View NtCGeometry version number",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase output verbosity (-v for INFO, -vv for DEBUG/trace)",
    )

    parser.add_argument(
        "structure",
        type=validate_file_path,
        help="Path to a PDB or mmCIF structure file",
    )
    parser.add_argument(
        "-m",
        "--model",
        type=int,
        default=None,
        help="Measure only the model at this index (default: all models)",
    )
    parser.add_argument(
        "--entry-id",
        type=str,
        help="Entry identifier used in step names (default: file name stem)",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Save step measurements to this CSV file",
    )

    # Reference comparison
    parser.add_argument(
        "-r",
        "--references",
        type=validate_dir_path,
        help="Directory with reference conformer structures (<NtC>.cif)",
    )
    parser.add_argument(
        "--reference-metrics",
        type=validate_file_path,
        help="Semicolon separated table of averaged NtC metrics",
    )
    parser.add_argument(
        "--ntc",
        type=str,
        help="Compare every step to this NtC (requires -r and --reference-metrics)",
    )

    return parser


def arg_parser(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse and cross-check the command line arguments"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.ntc is not None and (args.references is None or args.reference_metrics is None):
        parser.error("--ntc requires both --references and --reference-metrics")

    return args
