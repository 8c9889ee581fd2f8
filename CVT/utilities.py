#!/usr/bin/env python
#
# utilities.py - General utility functions
#
# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.
"""General-purpose utility functions for CVT.

**Functions**

.. autosummary::
  :nosignatures:

  pretty_bytes
  replace_file_contents
"""

import logging
import os
import shutil
import tempfile

logger = logging.getLogger(__name__)


def pretty_bytes(byte_value, base_shift=0):
    """Pretty-print the given bytes value.

    Args:
      byte_value (float): Value
      base_shift (int): Base value of byte_value
            (0 = bytes, 1 = KiB, 2 = MiB, etc.)

    Returns:
      str: Pretty-printed byte string such as "1.00 GiB"

    Examples:
      ::

        >>> pretty_bytes(512)
        '512 B'
        >>> pretty_bytes(512, 2)
        '512 MiB'
        >>> pretty_bytes(65547)
        '64.01 KiB'
        >>> pretty_bytes(2560)
        '2.5 KiB'
        >>> pretty_bytes(100, -1)
        Traceback (most recent call last):
            ...
        ValueError: base_shift must not be negative
    """
    if base_shift < 0:
        raise ValueError("base_shift must not be negative")
    tags = ["B", "KiB", "MiB", "GiB", "TiB"]
    byte_value = float(byte_value)
    shift = base_shift
    while byte_value >= 1024.0:
        byte_value /= 1024.0
        shift += 1
    while byte_value < 1.0 and shift > 0:
        byte_value *= 1024.0
        shift -= 1
    # Fractions of a byte should be considered a rounding error:
    if shift == 0:
        byte_value = round(byte_value)
    return "{0:.4g} {1}".format(byte_value, tags[shift])


def replace_file_contents(path, data):
    """Atomically replace the contents of the given file.

    The new contents are written to a temporary file in the same directory,
    flushed to disk, and then renamed over ``path``. Readers therefore see
    either the complete old contents or the complete new contents, never
    a mix of the two, and no stale trailing bytes survive when the new
    contents are shorter than the old.

    If ``path`` already exists, its permission bits are carried over to the
    replacement file. If ``path`` is a symlink, the file it points to is
    replaced and the link itself is left alone.

    Args:
      path (str): File to replace.
      data (bytes): New file contents.

    Raises:
      OSError: if the temporary file cannot be created or written, or the
          rename fails. The original file is left untouched in this case.
    """
    path = os.path.realpath(path)
    dirpath, basename = os.path.split(path)
    fd, temp_path = tempfile.mkstemp(prefix="." + basename + ".",
                                     suffix=".tmp",
                                     dir=dirpath)
    logger.spam("Writing %s to temporary file %s",
                pretty_bytes(len(data)), temp_path)
    try:
        with os.fdopen(fd, 'wb') as fileobj:
            fileobj.write(data)
            fileobj.flush()
            os.fsync(fileobj.fileno())
        if os.path.exists(path):
            shutil.copymode(path, temp_path)
        os.replace(temp_path, path)
    except BaseException:
        logger.debug("Write to %s failed, removing %s", path, temp_path)
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise
    logger.debug("Wrote %s to %s", pretty_bytes(len(data)), path)


if __name__ == "__main__":   # pragma: no cover
    import doctest
    doctest.testmod()
