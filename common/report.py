"""
Parameter Report Rendering

Formats the five coverage-level results of one advisor run as the text report
printed on stdout:

- Header naming the program, target length and focus
- One explanatory sentence for the focus mode
- Table header, then one row per coverage level (tuple or NA explanation)
- Footer explaining coverage and NA rows
"""
from __future__ import annotations

from typing import List, Sequence

from common.constants import FOCUS_EXPLANATIONS
from common.types import (
    AdvisorRequest,
    AlgorithmKind,
    CoverageResult,
    DetectorParameters,
    FilterParameters,
)

# Column header and underline per algorithm
TABLE_HEADERS = {
    AlgorithmKind.FILTER: ("\tEstimated_coverage\tL\tK1\tK2:", "\t------------------\t-\t--\t---"),
    AlgorithmKind.DETECTOR: ("\tEstimated_coverage\tm\tM\tt:", "\t------------------\t-\t-\t--"),
}

# How the footer names the downstream tool
DOWNSTREAM_NAMES = {
    AlgorithmKind.FILTER: "SEG algorithm",
    AlgorithmKind.DETECTOR: "fLPS program",
}


def format_row(algorithm: AlgorithmKind, result: CoverageResult) -> str:
    """One table row: the tuple when valid, an NA explanation otherwise."""
    prefix = f"\t~{result.coverage}%\t\t\t"
    verdict = result.verdict

    if algorithm is AlgorithmKind.FILTER:
        if verdict.valid:
            params: FilterParameters = result.computed
            return f"{prefix}{params.window_length}\t{params.k1:.2f}\t{params.k2:.2f}"
        return (
            f"{prefix}NA [ target length <{verdict.min_length} "
            f"OR >{verdict.upper_bound}, OR K2>4.2]"
        )

    if verdict.valid:
        params: DetectorParameters = result.computed
        return f"{prefix}{params.min_window}\t{params.max_window}\t{params.threshold:.1e}"
    return (
        f"{prefix}NA [ target length <{verdict.min_length} "
        f"OR >{verdict.upper_bound}, OR t>0.001]"
    )


def render_report(
    request: AdvisorRequest,
    results: Sequence[CoverageResult],
    program_name: str,
) -> str:
    """
    Render the full text report.

    Args:
        request: The request the results were computed for
        results: advise() output, in coverage order
        program_name: Name shown in the header (e.g. "SEGparameters")

    Returns:
        Report text, ending with a blank line
    """
    algorithm = request.algorithm
    focus_name = request.focus.value
    header, underline = TABLE_HEADERS[algorithm]

    lines: List[str] = [
        "",
        f"{program_name} has chosen the following parameters for target length "
        f"{request.target_length} and focus {focus_name}:",
        "",
        FOCUS_EXPLANATIONS[focus_name],
        header,
        underline,
    ]
    lines.extend(format_row(algorithm, result) for result in results)
    lines.extend([
        "",
        "",
        "Coverage is the proportion of protein sequences expected to be labelled "
        "by these parameter sets.",
        "",
        "It is recommended to use all of the parameters progressively in separate runs "
        f"of the {DOWNSTREAM_NAMES[algorithm]},",
        " and compare the outputs.",
        "If the calculated parameters are listed as 'NA', it means that at least one "
        "of them was out of bounds.",
        "",
    ])
    return "\n".join(lines) + "\n"
