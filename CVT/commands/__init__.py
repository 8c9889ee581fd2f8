# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Package describing various commands that are part of CVT.

API
---

.. autosummary::
  :nosignatures:

  Command
  ReadCommand
  DeviceCommand

Command modules
---------------

.. autosummary::
  :toctree:

  CVT.commands.attach_cddvd
  CVT.commands.detach_cddvd
  CVT.commands.list_cddvds
  CVT.commands.show_cddvd
"""

from .command import command_classes, Command, ReadCommand, DeviceCommand

# flake8: noqa: F401
from .attach_cddvd import CVTAttachCDDVD
from .detach_cddvd import CVTDetachCDDVD
from .list_cddvds import CVTListCDDVDs
from .show_cddvd import CVTShowCDDVD

__all__ = (
    'command_classes',
    'Command',
    'ReadCommand',
    'DeviceCommand',
)
