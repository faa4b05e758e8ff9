"""
common/input_validation.py - Command-Line Input Validation

Turns raw -f / -l option values into a validated AdvisorRequest.

Out-of-range or unparsable target lengths are NOT errors: they are reset to
DEFAULT_TARGET_LENGTH with a warning on the error stream and the run goes on.

Usage:
    from common.input_validation import build_request

    request = build_request("narrow", "40", AlgorithmKind.DETECTOR)
"""

import logging
import re
from typing import Optional, Sequence, Union

from common.constants import (
    DEFAULT_TARGET_LENGTH,
    TARGET_LENGTH_MAX,
    TARGET_LENGTH_MIN,
    is_target_length_in_range,
)
from common.types import AdvisorRequest, AlgorithmKind, Focus

logger = logging.getLogger(__name__)

# Leading integer, as scanf("%d") reads it: optional whitespace and sign, then digits
_LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")

OUT_OF_BOUNDS_WARNING = (
    f"-l value is out of bounds, re-setting to a DEFAULT VALUE = {DEFAULT_TARGET_LENGTH}"
)


def parse_target_length(text: Optional[str]) -> Optional[int]:
    """
    Read the leading integer of an -l value.

    Trailing characters are ignored ("40aa" -> 40); a value with no leading
    digits yields None.

    Examples:
        >>> parse_target_length("15")
        15
        >>> parse_target_length(" 40aa")
        40
        >>> parse_target_length("abc") is None
        True
    """
    if text is None:
        return None
    match = _LEADING_INT_PATTERN.match(text)
    if match is None:
        return None
    return int(match.group(1))


def normalize_target_length(length: Optional[int], option_given: bool = True) -> int:
    """
    Validate a parsed target length against [5, 300].

    Args:
        length: Parsed length (None when unparsable or absent)
        option_given: False when -l was never supplied

    Returns:
        length itself when in range, DEFAULT_TARGET_LENGTH otherwise
    """
    if not option_given:
        logger.info(
            "No -l value given, using DEFAULT VALUE = %d", DEFAULT_TARGET_LENGTH
        )
        return DEFAULT_TARGET_LENGTH

    if length is None or not is_target_length_in_range(length):
        logger.warning(OUT_OF_BOUNDS_WARNING)
        logger.debug(
            "Rejected target length %r (allowed %d-%d)",
            length,
            TARGET_LENGTH_MIN,
            TARGET_LENGTH_MAX,
        )
        return DEFAULT_TARGET_LENGTH

    return length


def resolve_target_length(length_options: Optional[Sequence[str]]) -> int:
    """
    Validate every -l value in command-line order; the last one wins.

    Each out-of-range value logs its own warning, so "-l 400 -l 20" still
    reports the rejected 400 before settling on 20.
    """
    if not length_options:
        return normalize_target_length(None, option_given=False)

    target_length = DEFAULT_TARGET_LENGTH
    for text in length_options:
        target_length = normalize_target_length(parse_target_length(text))
    return target_length


def build_request(
    focus_option: Optional[str],
    length_option: Union[str, Sequence[str], None],
    algorithm: AlgorithmKind,
) -> AdvisorRequest:
    """
    Build the request from raw -f / -l option values.

    length_option is a single -l value or every -l value given, in order.
    """
    focus = Focus.from_option(focus_option)
    if isinstance(length_option, str):
        length_option = [length_option]
    target_length = resolve_target_length(length_option)
    return AdvisorRequest(target_length=target_length, focus=focus, algorithm=algorithm)


__all__ = [
    "parse_target_length",
    "normalize_target_length",
    "resolve_target_length",
    "build_request",
    "OUT_OF_BOUNDS_WARNING",
]
