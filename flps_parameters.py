#!/usr/bin/env python3
"""
flps_parameters.py - fLPSparameters

Chooses fLPS parameters (minimum window m, maximum window M, binomial
p-value threshold t) for finding compositionally-biased regions of a given
target length in proteins.

Usage:
    python flps_parameters.py -h
    python flps_parameters.py -f diverse -l 15 > parameters.out
    python flps_parameters.py -f narrow -l 120
"""

import sys
from typing import Optional, Sequence

from common.types import AlgorithmKind
from parameter_advisor import run_cli


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entrypoint."""
    return run_cli(AlgorithmKind.DETECTOR, argv)


if __name__ == "__main__":
    sys.exit(main())
