"""Utility helpers for logging and masking.

Security:
    - We never log raw IdNrs, only masked ones.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .validators import ValidationError

MASK_CHAR = "*"
VISIBLE_DIGITS = 2

logger = logging.getLogger(__name__)


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger that avoids duplicate handlers."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    return logger


def mask_idnr(idnr: str | None) -> str:
    """Return idnr with all but the last two characters replaced by '*'."""
    if idnr is None:
        return "<none>"
    if len(idnr) <= VISIBLE_DIGITS:
        return MASK_CHAR * len(idnr)
    return MASK_CHAR * (len(idnr) - VISIBLE_DIGITS) + idnr[-VISIBLE_DIGITS:]


def error_names(errors: Iterable[ValidationError]) -> list[str]:
    """Return the sorted member names of errors."""
    return sorted(error.name for error in errors)


def log_outcome(idnr: str | None, errors: set[ValidationError]) -> None:
    """Log the outcome of a validation; usable as ``is_valid`` observer."""
    if not errors:
        logger.info('IdNr "%s" is valid.', mask_idnr(idnr))
    else:
        logger.warning('IdNr "%s" is invalid, errors %s!', mask_idnr(idnr), error_names(errors))
