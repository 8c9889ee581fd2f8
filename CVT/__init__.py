# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""
Package implementing the Common VMX Tool.

Utility modules
---------------
.. autosummary::
  :toctree:

  CVT.data_validation
  CVT.logging_
  CVT.utilities
  CVT.vmx_file

Sub-packages
------------
.. autosummary::
  :toctree:

  CVT.commands
  CVT.helpers
  CVT.ui
  CVT.vm_description

.. note::
  The hierarchy of permissible imports between sub-packages is as follows::

      CVT.ui
         |
         +---> CVT.commands
         |        |
         |        +---> CVT.vm_description
         |        |        |
         |        |        +---> CVT.vmx_file
         |        |        |
         +--------+--------+---> CVT.helpers

  Thus, to avoid circular dependencies, none of the other sub-packages may
  ``import CVT.ui``.
"""

import logging

# VerboseLogger adds a log level 'verbose' between 'info' and 'debug'.
# This lets us be a bit more fine-grained in our logging verbosity.
from verboselogs import VerboseLogger

logging.setLoggerClass(VerboseLogger)
logging.captureWarnings(True)

__version__ = "1.0.0"

__version_long__ = (
    """Common VMX Tool (CVT), version """ + __version__ +
    """\nCopyright (C) 2026 the CVT project developers."""
)
