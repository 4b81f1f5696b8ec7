#!/usr/bin/env python3

"""Entry point for ntcgeometry"""

import math
import sys

from ntcgeometry.analysis.measurement import measure_structure_steps, save_to_csv
from ntcgeometry.analysis.references import load_reference_table
from ntcgeometry.cli import arg_parser, setup_logging
from ntcgeometry.core.errors import NtCGeometryError
from ntcgeometry.core.io import load_structure


def main(argv: list[str] | None = None) -> int:
    """Main entry point for step measurement."""
    args = arg_parser(argv)
    setup_logging(args.verbose)

    try:
        structure = load_structure(args.structure, model_index=args.model)
    except NtCGeometryError as e:
        print(f"Cannot read structure from {args.structure}: {e}", file=sys.stderr)
        return 1
    if structure is None:
        print(f"Cannot read structure from {args.structure}", file=sys.stderr)
        return 1

    references = None
    if args.ntc is not None:
        try:
            references = load_reference_table(args.references, args.reference_metrics)
        except (NtCGeometryError, OSError) as e:
            print(f"Cannot load reference conformers: {e}", file=sys.stderr)
            return 1

    entry_id = args.entry_id or args.structure.stem
    try:
        measurements = measure_structure_steps(structure, entry_id, references=references, ntc=args.ntc)
    except NtCGeometryError as e:
        print(f"Measurement failed: {e}", file=sys.stderr)
        return 1

    print(f"=== STEP METRICS ({len(measurements)} steps) ===")
    for m in measurements:
        values = m.metrics.as_dict(degrees=True)
        line = "  ".join(f"{name} {value:8.2f}" for name, value in values.items())
        print(f"{m.name:<32} {line}")
        if m.ntc is not None:
            print(f"{'':<32} vs {m.ntc}: RMSD {m.rmsd:.3f} Å, distance {m.euclidean_distance:.2f}")

    if measurements and args.ntc is not None:
        mean_rmsd = math.fsum(x.rmsd for x in measurements) / len(measurements)
        print(f"\nMean RMSD to {args.ntc}: {mean_rmsd:.3f} Å")

    if args.output:
        try:
            save_to_csv(measurements, args.output)
        except OSError as e:
            print(f"\n{e}", file=sys.stderr)
            return 1
        print(f"\nStep measurements saved to: {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
