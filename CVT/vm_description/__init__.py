# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Support for virtual machine description formats (currently VMX).

The :class:`~CVT.vm_description.VMDescription` class describes the abstract
API that is implemented by various subclasses.

In general, other modules should not access subclasses directly but should
instead use the :meth:`~CVT.vm_description.VMDescription.factory`
API to derive the appropriate subclass object.

API
---

.. autosummary::
  :nosignatures:

  BusType
  CDDVDConfig
  VMDescription
  VMInitError
  VMPreconditionError
  canonicalize_bus_type

VM description modules
-------------------------

.. autosummary::
  :toctree:

  CVT.vm_description.vmx
"""

# flake8: noqa: F401

from .vm_description import (
    VMDescription, VMInitError, VMPreconditionError,
    BusType, CDDVDConfig, canonicalize_bus_type,
    CDROM_IMAGE, CDROM_RAW,
)
from .vmx import VMX


__all__ = (
    'BusType',
    'CDDVDConfig',
    'CDROM_IMAGE',
    'CDROM_RAW',
    'VMDescription',
    'VMInitError',
    'VMPreconditionError',
    'VMX',
    'canonicalize_bus_type',
)
