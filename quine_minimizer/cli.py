"""Command-line interface for Quine-McCluskey minimization and Verilog export."""

import argparse
import re
import sys
import traceback
from collections import Counter
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .cover import DEFAULT_MAX_COVER_SIZE
from .export import to_equations, to_report, to_verilog
from .function import BooleanFunction, load_function
from .solver import MinimizationResult, minimize
from .verify import verify_result


@dataclass
class FileOutcome:
    """Minimization outcome for one input file."""
    path: Path
    function: Optional[BooleanFunction] = None
    result: Optional[MinimizationResult] = None
    error: Optional[str] = None
    error_trace: Optional[str] = None


def collect_inputs(paths: list[str]) -> list[Path]:
    """Expand directories to their sorted *.txt files."""
    files = []
    for name in paths:
        path = Path(name)
        if path.is_dir():
            files.extend(sorted(p for p in path.glob("*.txt") if p.is_file()))
        elif path.is_file():
            files.append(path)
        else:
            raise FileNotFoundError(f"File not found: {name}")
    return files


def module_name_for(path: Path) -> str:
    """Derive a Verilog identifier from a file name."""
    name = re.sub(r"\W", "_", path.stem, flags=re.ASCII)
    if not name or name[0].isdigit():
        name = f"f_{name}"
    return name


def _duplicate_module_names(files: list[Path], module_name: Optional[str]) -> list[str]:
    """Module names that more than one input maps to."""
    counts = Counter(module_name or module_name_for(path) for path in files)
    return sorted(name for name, count in counts.items() if count > 1)


def process_file(path: Path, max_cover_size: int, use_maxsat: bool) -> FileOutcome:
    """Load and minimize one file. Run in a worker process with --jobs."""
    outcome = FileOutcome(path=path)
    try:
        outcome.function = load_function(path)
        outcome.result = minimize(outcome.function, max_cover_size, use_maxsat)
    except Exception as e:
        outcome.error = str(e)
        outcome.error_trace = traceback.format_exc()
    return outcome


def _print_header(title: str):
    print("=" * 70)
    print(f"  {title}")
    print("=" * 70)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Minimize Boolean functions and synthesize them to Verilog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Input file format:
  Line 1: Number of variables (1-20)
  Line 2: Minterms (m0,m1,...) or Maxterms (M0,M1,...)
  Line 3: Don't-cares (d0,d1,...) [optional]

Examples:
  quine-minimize tests/                     Minimize every .txt in a directory
  quine-minimize f.txt --format verilog     Output as Verilog module
  quine-minimize f.txt --format equations   Output minimal equations only
  quine-minimize f.txt -o build/ --verify   Save f.v and check all solutions
        """,
    )

    parser.add_argument(
        "paths",
        nargs="+",
        help="Function description files or directories of *.txt files",
    )
    parser.add_argument(
        "--format", "-f",
        choices=["text", "verilog", "equations"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--solution",
        type=int,
        default=1,
        help="Minimal solution to synthesize, 1-based (default: 1)",
    )
    parser.add_argument(
        "--module-name",
        help="Verilog module name (default: derived from the file name)",
    )
    parser.add_argument(
        "--output-dir", "-o",
        help="Write <module>.v for each function into this directory",
    )
    parser.add_argument(
        "--max-cover-size",
        type=int,
        default=DEFAULT_MAX_COVER_SIZE,
        help="Largest cover extension the exhaustive search tries "
             f"(default: {DEFAULT_MAX_COVER_SIZE})",
    )
    parser.add_argument(
        "--no-maxsat",
        action="store_true",
        help="Do not fall back to MaxSAT when the search bound is exceeded",
    )
    parser.add_argument(
        "--jobs", "-j",
        type=int,
        default=1,
        help="Minimize files in this many worker processes (default: 1)",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Check every solution against the full truth table",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args(argv)

    try:
        files = collect_inputs(args.paths)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not files:
        print("Error: no input files found", file=sys.stderr)
        return 1

    if args.output_dir:
        duplicates = _duplicate_module_names(files, args.module_name)
        if duplicates:
            print(
                f"Error: several inputs would write the same module file: "
                f"{', '.join(duplicates)}",
                file=sys.stderr,
            )
            return 1

    # Progress output only for the text report
    quiet = args.format != "text"
    use_maxsat = not args.no_maxsat

    if args.verbose and not quiet:
        print(f"Minimizing {len(files)} file(s) with {args.jobs} job(s)...")

    if args.jobs > 1:
        with ProcessPoolExecutor(max_workers=args.jobs) as pool:
            outcomes = list(pool.map(
                process_file,
                files,
                [args.max_cover_size] * len(files),
                [use_maxsat] * len(files),
            ))
    else:
        outcomes = [
            process_file(path, args.max_cover_size, use_maxsat) for path in files
        ]

    failed = 0
    for outcome in outcomes:
        if not _emit(outcome, args, quiet):
            failed += 1

    if not quiet and len(outcomes) > 1:
        print()
        _print_header("Summary")
        print(f"Total: {len(outcomes)}")
        print(f"Passed: {len(outcomes) - failed}")
        if failed:
            print(f"Failed: {failed}")

    return 0 if failed == 0 else 1


def _emit(outcome: FileOutcome, args, quiet: bool) -> bool:
    """Print/write the output for one file; returns False on failure."""
    if outcome.error is not None:
        print(f"Error: {outcome.path}: {outcome.error}", file=sys.stderr)
        if args.verbose:
            print(outcome.error_trace, file=sys.stderr)
        return False

    function, result = outcome.function, outcome.result
    module_name = args.module_name or module_name_for(outcome.path)

    if not quiet:
        print()
        _print_header(f"Function: {outcome.path.name}")
        print(to_report(function, result))
        if args.verbose:
            print()
            print(f"  Phase 1: {len(result.prime_implicants)} prime implicants")
            print(f"  Phase 2: {len(result.essential_implicants)} essential, "
                  f"{len(result.uncovered_minterms)} minterms left")
            print(f"  Phase 3: cover search {result.status.value} "
                  f"(max {result.max_cover_size} terms)")

    ok = True

    if args.verify:
        correct, errors = verify_result(function, result)
        if correct:
            if not quiet:
                print("\nVerification PASSED: All solutions correct!")
        else:
            ok = False
            print(f"Verification FAILED: {outcome.path}", file=sys.stderr)
            for err in errors:
                print(f"  {err}", file=sys.stderr)

    if args.format == "equations":
        print(to_equations(result))

    if args.format == "verilog" or args.output_dir:
        try:
            verilog = to_verilog(result, args.solution - 1, module_name)
        except ValueError as e:
            print(f"Error: {outcome.path}: {e}", file=sys.stderr)
            return False

        if args.format == "verilog":
            print(verilog, end="")

        if args.output_dir:
            out_dir = Path(args.output_dir)
            out_dir.mkdir(parents=True, exist_ok=True)
            out_path = out_dir / f"{module_name}.v"
            out_path.write_text(verilog)
            if not quiet:
                print(f"\nVerilog module saved to: {out_path}")

    return ok


if __name__ == "__main__":
    sys.exit(main())
