"""Human readable progress reporting.

:func:`log_progress` can be passed as the ``on_progress`` observer of an
:class:`~gravity.engine.Engine`.
"""

import logging

from . import constants as C

logger = logging.getLogger(__name__)


def format_elapsed(seconds: float) -> str:
    """Break ``seconds`` down into years, months, days, hours and minutes.

    Years count 365 days and months 30 days.
    """
    if seconds < 0:
        return "N/A"
    remaining = int(seconds)
    years, remaining = divmod(remaining, C.SECONDS_PER_YEAR)
    months, remaining = divmod(remaining, C.SECONDS_PER_MONTH)
    days, remaining = divmod(remaining, C.SECONDS_PER_DAY)
    hours, remaining = divmod(remaining, C.SECONDS_PER_HOUR)
    minutes = remaining // C.SECONDS_PER_MINUTE
    return f"{years} years {months} months {days} days {hours} hours {minutes} minutes"


def log_progress(elapsed_seconds: float, tick_index: int) -> None:
    logger.info("Elapsed time: %s (tick %d)", format_elapsed(elapsed_seconds), tick_index)
