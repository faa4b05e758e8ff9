#!/usr/bin/env python3
"""
parameter_advisor.py - Parameter Advisor Entry Points

Dispatches an AdvisorRequest to the SEG or fLPS engine and hosts the command
line shared by the two executables (SEGparameters, fLPSparameters).

CLI shape (both executables):
    -h          print help to stderr and exit 0
    -f FOCUS    'narrow' selects NARROW focus, anything else DIVERSE (default)
    -l LENGTH   target region length, 5-300 inclusive (reset to 15 otherwise);
                repeatable, each value is checked and the last one wins
    -v          verbose (DEBUG) logging
    --log-file  also log to a rotating file

Exit codes:
    0 - report printed (or help shown)
    1 - usage error (unknown option, missing option argument) or invalid request

Operands that are not options are ignored.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from common.constants import (
    CITATION,
    COVERAGE_LEVELS,
    DEFAULT_TARGET_LENGTH,
    FLPS_PROGRAM_NAME,
    PROJECT_URLS,
    SEG_PROGRAM_NAME,
    TARGET_LENGTH_MAX,
    TARGET_LENGTH_MIN,
)
from common.input_validation import build_request
from common.logging_config import setup_logging
from common.report import render_report
from common.types import AdvisorRequest, AlgorithmKind, CoverageResult
from flps_parameter_engine import FLPSParameterEngine
from seg_parameter_engine import SEGParameterEngine

logger = logging.getLogger(__name__)

__version__ = "1.0.0"

ENGINES = {
    AlgorithmKind.FILTER: SEGParameterEngine,
    AlgorithmKind.DETECTOR: FLPSParameterEngine,
}

PROGRAM_NAMES = {
    AlgorithmKind.FILTER: SEG_PROGRAM_NAME,
    AlgorithmKind.DETECTOR: FLPS_PROGRAM_NAME,
}

# Title line of the help text, per algorithm
HELP_TITLES = {
    AlgorithmKind.FILTER: (
        "Parameter choosing program for finding low-complexity or compositionally-biased "
        "regions using SEG in proteins of a given target length"
    ),
    AlgorithmKind.DETECTOR: (
        "Parameter choosing program for finding low-complexity or compositionally-biased "
        "regions using fLPS in proteins of a given target length"
    ),
}


def advise(request: AdvisorRequest) -> List[CoverageResult]:
    """
    Recommend parameters for every coverage level.

    Returns:
        Five results in coverage order 2, 5, 10, 25, 40; invalid levels carry
        parameters=None (NA)
    """
    engine_cls = ENGINES.get(request.algorithm)
    if engine_cls is None:
        raise ValueError(f"Unknown algorithm kind: {request.algorithm!r}")
    return engine_cls().advise(request)


# =============================================================================
# CLI
# =============================================================================

class AdvisorArgumentParser(argparse.ArgumentParser):
    """
    ArgumentParser with getopt-style behaviour: help goes to stderr and usage
    errors exit with status 1 after printing the help.
    """

    def print_help(self, file=None):
        super().print_help(file if file is not None else sys.stderr)

    def error(self, message):
        sys.stderr.write(f"{self.prog}: {message}\n")
        self.print_help()
        self.exit(1)


def _help_epilog(program_name: str) -> str:
    levels = ", ".join(f"{level}%" for level in COVERAGE_LEVELS)
    return (
        "The program outputs lists of suitable parameters for a given target length for "
        "low-complexity or compositionally-biased regions.\n"
        f"There are sets of parameters output for estimated protein coverage of approximately {levels}.\n"
        "The protein coverage is simply the proportion of proteins that are expected to be "
        "annotated or 'covered' when you choose\n"
        "a certain set of parameters.\n"
        "For some combinations of coverage level and target lengths, sets of parameters "
        "cannot be output because they are out of bounds.\n"
        "This is an example of running the program:\n"
        f"        {program_name} -f diverse -l {DEFAULT_TARGET_LENGTH} > parameters.out\n\n"
        "Here, diverse focus is specified with a target region length of "
        f"{DEFAULT_TARGET_LENGTH} residues.\n\n"
        "CITATION:\n"
        f"{CITATION}"
        "URLs:\n"
        f"{PROJECT_URLS}"
    )


def build_parser(algorithm: AlgorithmKind) -> AdvisorArgumentParser:
    """Build the command-line parser for one executable."""
    program_name = PROGRAM_NAMES[algorithm]
    parser = AdvisorArgumentParser(
        prog=program_name,
        description=HELP_TITLES[algorithm],
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_help_epilog(program_name),
    )

    parser.add_argument(
        "-f",
        dest="focus",
        metavar="FOCUS",
        help=(
            "focus of the parameters: 'diverse' (more diversity or variance of length "
            "is allowed, DEFAULT) or 'narrow' (narrowest focus on a particular target length)"
        ),
    )

    parser.add_argument(
        "-l",
        dest="length",
        action="append",
        metavar="LENGTH",
        help=(
            f"target length. This must be in the range {TARGET_LENGTH_MIN}-{TARGET_LENGTH_MAX} "
            f"inclusive (otherwise reset to {DEFAULT_TARGET_LENGTH})"
        ),
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging (regression band chosen per coverage level)",
    )

    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this file (rotated at 10 MB)",
    )

    return parser


def parse_options(
    parser: argparse.ArgumentParser,
    argv: Optional[Sequence[str]] = None,
) -> argparse.Namespace:
    """
    Parse options, ignoring stray operands.

    Leftover words that look like options are still usage errors.
    """
    args, leftovers = parser.parse_known_args(argv)
    unknown = [word for word in leftovers if word.startswith("-") and word != "-"]
    if unknown:
        parser.error(f"unrecognized arguments: {' '.join(unknown)}")
    return args


def run_cli(algorithm: AlgorithmKind, argv: Optional[Sequence[str]] = None) -> int:
    """
    Parse arguments, compute the parameters and print the report.

    Args:
        algorithm: Which executable is running
        argv: Arguments without the program name (default sys.argv[1:])

    Returns:
        Process exit code
    """
    parser = build_parser(algorithm)
    args = parse_options(parser, argv)

    setup_logging(
        log_level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=args.log_file,
    )

    try:
        request = build_request(args.focus, args.length, algorithm)
        results = advise(request)
    except ValueError as e:
        logger.error(f"ERROR: {e}")
        return 1

    sys.stdout.write(render_report(request, results, PROGRAM_NAMES[algorithm]))
    na_count = sum(1 for result in results if result.is_na)
    logger.debug(
        "%s: target length %d, focus %s, %d of %d levels NA",
        PROGRAM_NAMES[algorithm],
        request.target_length,
        request.focus.value,
        na_count,
        len(results),
    )
    return 0
