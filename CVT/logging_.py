#!/usr/bin/env python
#
# logging_.py - Common VMX Tool infrastructure for logging
#
# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Logging module for the Common VMX Tool (CVT).

**Classes**

.. autosummary::
  :nosignatures:

  CVTFormatter
"""

import logging
from verboselogs import VerboseLogger
from colorlog import ColoredFormatter

# VerboseLogger adds a log level 'verbose' between 'info' and 'debug'.
# This lets us be a bit more fine-grained in our logging verbosity.
logging.setLoggerClass(VerboseLogger)

logger = logging.getLogger(__name__)


class CVTFormatter(ColoredFormatter, object):
    r"""Logging formatter with colorization and variable verbosity.

    CVT logs are formatted differently (more or less verbosely) depending
    on the logging level.

    .. seealso:: :class:`logging.Formatter`

    Args:
      verbosity (int): Logging level as defined by :mod:`logging`.

    Examples::

      >>> record = logging.LogRecord(
      ... "CVT.doctests",   # logger name
      ... logging.INFO,     # message level
      ... "/fakemodule.py", # file reporting the message
      ... 22,               # line number in file
      ... "Hello world!",   # message text
      ... None,             # %-style args for message
      ... None,             # exception info
      ... "test_func")      # function reporting the message
      >>> record.created = 0
      >>> record.msecs = 0
      >>> CVTFormatter(logging.NOTICE).format(record)
      '\x1b[32mINFO    :\x1b[0m Hello world!'
      >>> CVTFormatter(logging.INFO).format(record) # doctest:+ELLIPSIS
      '\x1b[32mINFO    : fakemodule ... Hello world!'
      >>> CVTFormatter(logging.VERBOSE).format(record) # doctest:+ELLIPSIS
      '\x1b[32mINFO    : fakemodule ... test_func()... Hello world!'
    """

    LOG_COLORS = {
        'SPAM':     '',
        'DEBUG':    'blue',
        'VERBOSE':  'cyan',
        'INFO':     'green',
        'NOTICE':   'yellow',
        'WARNING':  'red',
        'ERROR':    'fg_white,bg_red',
        'CRITICAL': 'purple,bold',   # should never be used in CVT
    }

    def __init__(self, verbosity=logging.INFO):
        """Create formatter for CVT log output with the given verbosity."""
        format_string = "%(log_color)s"
        datefmt = None
        # Start with log level string
        format_items = ["%(levelname)-7s"]
        if verbosity <= logging.DEBUG:
            # Provide timestamps
            format_items.append("%(asctime)s.%(msecs)d")
            datefmt = "%H:%M:%S"
        if verbosity <= logging.INFO:
            # Longest module names at present:
            #   data_validation (15)
            format_items.append("%(module)-15s")
        if verbosity <= logging.DEBUG:
            # Provide line number, up to 4 digits
            format_items.append("%(lineno)4d")
        if verbosity <= logging.VERBOSE:
            format_items.append("%(funcName)31s()")

        format_string += " : ".join(format_items)
        format_string += " :%(reset)s %(message)s"
        super(CVTFormatter, self).__init__(format_string,
                                           datefmt=datefmt,
                                           reset=False,
                                           log_colors=self.LOG_COLORS)


if __name__ == "__main__":   # pragma: no cover
    import doctest
    doctest.testmod()
