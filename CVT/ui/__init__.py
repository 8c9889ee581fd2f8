# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""User interface classes for CVT.

API
---

.. autosummary::
  :nosignatures:

  UI
  CLI

Modules
-------

.. autosummary::
  :toctree:

  CVT.ui.ui
  CVT.ui.cli
"""

from .ui import UI
from .cli import CLI

__all__ = (
    'UI',
    'CLI',
)
