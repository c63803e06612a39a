"""
CLI entry point. Run as: python -m hilbertproof [input] [output] [mode]
"""

import argparse
import sys

from .core.parser import ParseError
from .core.proof import load_proof, render_check, render_deduction
from .core.verifier import VerificationFailure, check_proof, incorrect_from
from .deduction import DeductionError, deduce


def main(argv=None):
    parser = argparse.ArgumentParser(description="Hilbert-style proof checker")
    parser.add_argument("input", nargs="?", default="task2.in",
                        help="Proof file to read (default task2.in)")
    parser.add_argument("output", nargs="?", default="task2.out",
                        help="File to write (default task2.out)")
    parser.add_argument("mode", nargs="?", choices=["check", "elaborate"],
                        default="check",
                        help="check: annotate every line; "
                             "elaborate: discharge the last hypothesis")
    parser.add_argument("--quiet", action="store_true",
                        help="No diagnostics on stderr")
    args = parser.parse_args(argv)

    proof = load_proof(args.input)

    if args.mode == "check":
        report = check_proof(proof.hypotheses, proof.goal, proof.lines,
                             verbose=not args.quiet)
        text = render_check(report)
        if not args.quiet:
            print(f"{len(report.lines)} formulas, {report.failures} not proved",
                  file=sys.stderr)
    else:
        try:
            text = render_deduction(
                deduce(proof.hypotheses, proof.goal, proof.lines))
        except (ParseError, VerificationFailure) as error:
            if error.line is None:
                text = f"Proof is incorrect: {error}"
            else:
                text = incorrect_from(error.line, str(error))
        except DeductionError as error:
            text = f"Proof is incorrect: {error}"
        if not args.quiet and text.startswith("Proof is incorrect"):
            print(text, file=sys.stderr)

    with open(args.output, "w", encoding="utf-8") as f:
        f.write(text)


if __name__ == "__main__":
    main()
