"""Formal validation of the German tax identification number (IdNr).

The IdNr (steuerliche Identifikationsnummer) is an eleven-digit number whose
11th digit is a check digit computed from digits 1-10. A formally correct IdNr:

    - has no leading zero,
    - has exactly one digit in positions 1-10 occurring twice or three times,
    - never has three identical digits in directly consecutive positions,
    - carries the check digit produced by the iterative mod-11 recurrence.

Validation does not tell whether a number is currently assigned, or to whom.

References:
    - Deutsche Rentenversicherung, "Prüfziffernberechnung"
    - ELSTER, "Prüfung der Steuer- und Steueridentifikationsnummer"
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Callable
from enum import Enum

from .utils import mask_idnr

logger = logging.getLogger(__name__)

# Length of the number part (digits 1-10).
IDNR_NUMBER_LENGTH = 10

# Length of the check digit.
IDNR_CHECKSUM_LENGTH = 1

# Absolute length of the IdNr.
IDNR_LENGTH = IDNR_NUMBER_LENGTH + IDNR_CHECKSUM_LENGTH

IDNR_RE = re.compile(r"[1-9][0-9]{10}")
NUMBER_RE = re.compile(r"[1-9][0-9]{9}")
TRIPLE_SEQUENCE_RE = re.compile(r"(.)\1\1")


class ValidationError(Enum):
    """Kinds of failure reported by :func:`validate`."""

    # Given check digit does not match the computed one
    CHECKSUM_MISSMATCH = "checksum_missmatch"
    # IdNr is None
    IDNR_IS_NULL = "idnr_is_null"
    # IdNr is not 11 characters long
    IDNR_LENGTH_MISSMATCH = "idnr_length_missmatch"
    # IdNr is not digits-only or has a leading zero
    IDNR_FORMAT_MISSMATCH = "idnr_format_missmatch"
    # Number part contains a run of three equal digits (like 111...)
    NUMBER_INVALID_3_DIGITS_SEQUENCE = "number_invalid_3_digits_sequence"
    # Number part contains the same digit more than three times (like 1111...)
    NUMBER_TO_MANY_OCCURENCES_OF_SAME_DIGIT = "number_to_many_occurences_of_same_digit"
    # Number part contains more than one tripled digit (like 111222...)
    NUMBER_TO_MANY_TRIPLE_OCCURENCES = "number_to_many_triple_occurences"
    # Number part contains more than one doubled digit (like 1122...)
    NUMBER_TO_MANY_DOUBLE_OCCURENCES = "number_to_many_double_occurences"
    # Number part has no doubled or tripled digit at all
    NUMBER_NO_OCCURENCES_OF_SAME_DIGIT = "number_no_occurences_of_same_digit"


Observer = Callable[[str | None, set[ValidationError]], None]


def compute_check_digit(number: str) -> int:
    """Return the check digit for a 10-digit number part.

    Starts with a product of 10 and folds every digit into it:
    ``total = (digit + product) % 10`` (0 becomes 10), then
    ``product = (2 * total) % 11``. The check digit is ``11 - product``.
    """
    product = IDNR_NUMBER_LENGTH
    for digit in map(int, number):
        total = (digit + product) % IDNR_NUMBER_LENGTH
        if total == 0:
            total = IDNR_NUMBER_LENGTH
        product = (2 * total) % IDNR_LENGTH

    return IDNR_LENGTH - product


def is_valid_checksum(number: str, check_digit: int) -> bool:
    """Return True if check_digit matches the one computed from number."""
    computed = compute_check_digit(number)
    if computed != check_digit:
        logger.warning(
            "IdNr number %s, check digit missmatch (given: %d, computed: %d)",
            mask_idnr(number),
            check_digit,
            computed,
        )
    return computed == check_digit


def _validate_number(number: str) -> set[ValidationError]:
    """Return the content errors of the number part (digits 1-10)."""
    errors: set[ValidationError] = set()

    if not NUMBER_RE.fullmatch(number):
        errors.add(ValidationError.IDNR_FORMAT_MISSMATCH)

    if TRIPLE_SEQUENCE_RE.search(number):
        errors.add(ValidationError.NUMBER_INVALID_3_DIGITS_SEQUENCE)

    digits = Counter(number)
    counts = list(digits.values())
    distinct = len(digits)
    logger.debug(
        "IdNr number %s, %d distinct digits, digit distribution %s",
        mask_idnr(number),
        distinct,
        sorted(counts, reverse=True),
    )

    if distinct == 8:
        # a single triple leaves two digits unused
        if counts.count(3) != 1:
            errors.add(ValidationError.NUMBER_TO_MANY_TRIPLE_OCCURENCES)
    elif distinct == 9:
        # a single double leaves one digit unused
        if counts.count(2) != 1:
            errors.add(ValidationError.NUMBER_TO_MANY_DOUBLE_OCCURENCES)
    elif distinct == 10:
        errors.add(ValidationError.NUMBER_NO_OCCURENCES_OF_SAME_DIGIT)
    else:
        errors.add(ValidationError.NUMBER_TO_MANY_OCCURENCES_OF_SAME_DIGIT)

    return errors


def validate(idnr: str | None) -> set[ValidationError]:
    """Return the set of validation errors for idnr; empty means valid.

    Returns immediately with a single error if idnr is None, not 11 characters
    long, or not made of ASCII digits without a leading zero. Otherwise the
    repetition rules and the check digit are evaluated independently and all
    failures are returned together.
    """
    if idnr is None:
        return {ValidationError.IDNR_IS_NULL}

    if len(idnr) != IDNR_LENGTH:
        return {ValidationError.IDNR_LENGTH_MISSMATCH}

    if not IDNR_RE.fullmatch(idnr):
        return {ValidationError.IDNR_FORMAT_MISSMATCH}

    number = idnr[:IDNR_NUMBER_LENGTH]
    check_digit = int(idnr[IDNR_NUMBER_LENGTH:])

    errors = _validate_number(number)
    if not is_valid_checksum(number, check_digit):
        errors.add(ValidationError.CHECKSUM_MISSMATCH)

    return errors


def is_valid(idnr: str | None, *, observer: Observer | None = None) -> bool:
    """Return True if :func:`validate` reports no errors for idnr.

    observer, if given, is called once with idnr and the error set, e.g.
    :func:`idnr.utils.log_outcome`.
    """
    errors = validate(idnr)
    if observer is not None:
        observer(idnr, errors)
    return not errors
