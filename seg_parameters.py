#!/usr/bin/env python3
"""
seg_parameters.py - SEGparameters

Chooses SEG parameters (window length L, thresholds K1 and K2) for finding
low-complexity or compositionally-biased regions of a given target length in
proteins.

Usage:
    python seg_parameters.py -h
    python seg_parameters.py -f diverse -l 15 > parameters.out
    python seg_parameters.py -f narrow -l 60
"""

import sys
from typing import Optional, Sequence

from common.types import AlgorithmKind
from parameter_advisor import run_cli


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entrypoint."""
    return run_cli(AlgorithmKind.FILTER, argv)


if __name__ == "__main__":
    sys.exit(main())
