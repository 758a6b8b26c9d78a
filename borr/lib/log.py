"""
Debug tracing for borr, written to stderr through Loguru.

The parser and the expansion engine report what they do while a language file
is read and looked up:

- the builder logs the file it reads, every section it enters, the lang_id,
  lang_desc and lang_ver metadata it finds, and a malformed lang_ver before
  the error propagates;
- the registry logs expander registration, refused duplicate registration
  and removal;
- the expansion engine logs the variable that exceeded the round bound, and
  the cross-reference resolver logs the reference that closed a cycle;
- the commands log load failures and per-field expansion failures before
  printing them.

All of this goes through `LOG`, which checks `appsettings.beQuiet` on every
call, so `BORR_BEQUIET=true` silences the trace without re-importing anything.

Example:
    from borr.lib.log import LOG
    LOG(f"Entering section [{section}]")
"""

from loguru import logger
from typing import Any
import sys

# Logger bound to borr, so host applications can filter its records
app_logger = logger.bind(app="BORR")

logger_format = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<yellow>{name: >28}</yellow>::"
    "<cyan>{function: <30}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

app_logger.remove()  # Remove any default handlers
app_logger.add(sys.stderr, format=logger_format)


def LOG(*args: Any, **kwargs: Any) -> None:
    """
    Log a borr debug message from the caller's frame.

    Logs the message at debug level unless `beQuiet` is set in `appsettings`.

    :param args: Positional arguments for the log message.
    :param kwargs: Keyword arguments for additional log metadata.
    """
    from borr.config.settings import appsettings  # Ensure up-to-date settings

    if not appsettings.beQuiet:
        app_logger.opt(depth=1).debug(*args, **kwargs)
