# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""
Provides a common interface for interacting with various non-Python programs.

API
---

.. autosummary::
  :nosignatures:

  Helper
  helpers
  vmrun_power_probe

Exceptions
----------

.. autosummary::

  ~CVT.helpers.helper.HelperError
  ~CVT.helpers.helper.HelperNotFoundError

Helper modules
--------------

.. autosummary::
  :toctree:

  CVT.helpers.helper
  CVT.helpers.vmrun
"""

from .helper import (
    Helper, helpers, HelperError, HelperNotFoundError,
)

# flake8: noqa: F401

from .vmrun import VMRun, vmrun_power_probe

# pylint doesn't know about __subclasses__
# pylint:disable=no-member


# Populate helpers dictionary
for cls in Helper.__subclasses__():
    ins = cls()
    helpers[ins.name] = ins


__all__ = (
    'Helper',
    'HelperError',
    'HelperNotFoundError',
    'VMRun',
    'helpers',
    'vmrun_power_probe',
)
