# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Package for handling VMware ``.vmx`` virtual machine definitions.

API
---

.. autosummary::
  :nosignatures:

  VMX

Modules
-------

.. autosummary::
  :toctree:

  CVT.vm_description.vmx.vmx
"""

from .vmx import VMX

__all__ = ('VMX', )
