from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from worksfinder.config import configure_logging
from worksfinder.config.logging import HTTP_LOGGERS

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def restore_logger_levels() -> Iterator[None]:
    names = ("worksfinder", *HTTP_LOGGERS)
    levels = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


@pytest.mark.parametrize(("verbose", "expected"), [(True, logging.DEBUG), (False, logging.INFO)])
def test_verbose_controls_worksfinder_level(verbose: bool, expected: int) -> None:
    configure_logging(verbose=verbose)

    assert logging.getLogger("worksfinder").level == expected
    assert logging.getLogger("worksfinder.domain.discovery.collect").getEffectiveLevel() == expected


def test_http_libraries_stay_quiet_in_verbose_mode() -> None:
    configure_logging(verbose=True)

    assert all(logging.getLogger(name).level == logging.WARNING for name in HTTP_LOGGERS)
