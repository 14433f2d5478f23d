import logging

from idnr.utils import get_logger, mask_idnr


def test_mask_idnr() -> None:
    assert mask_idnr("86095742719") == "*********19"
    assert mask_idnr(None) == "<none>"
    assert mask_idnr("") == ""
    assert mask_idnr("12") == "**"


def test_get_logger_no_duplicate_handlers() -> None:
    first = get_logger("idnr.test")
    second = get_logger("idnr.test")

    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.INFO
