#!/usr/bin/env python
#
# detach_cddvd.py - Implements "cvt detach-cddvd" command
#
# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Module for detaching CD/DVD drives from a VM.

**Classes**

.. autosummary::
  :nosignatures:

  CVTDetachCDDVD
"""

import logging
import re

from CVT.vm_description import BusType, CDDVDConfig, canonicalize_bus_type
from .command import command_classes, DeviceCommand

logger = logging.getLogger(__name__)


class CVTDetachCDDVD(DeviceCommand):
    """Remove a CD/DVD drive from a powered-off VM.

    Inherited attributes:
    :attr:`~Command.ui`,
    :attr:`~ReadCommand.vmx`,
    :attr:`~DeviceCommand.device_id`

    Attributes:
    :attr:`bus`,
    :attr:`removed`
    """

    def __init__(self, ui):
        """Instantiate this command with the given UI.

        Args:
          ui (UI): User interface instance.
        """
        super(CVTDetachCDDVD, self).__init__(ui)
        self._bus = None
        self.removed = None
        """Number of device records removed, once :meth:`run`."""

    @property
    def bus(self):
        """Bus to remove the drive from, as a :class:`BusType`.

        If not set, the bus is derived from the prefix of :attr:`device_id`.

        Raises:
          ValueUnsupportedError: if set to an unknown bus name.
        """
        if self._bus is None and self.device_id is not None:
            return canonicalize_bus_type(
                re.match("[a-z]+", self.device_id).group(0))
        return self._bus

    @bus.setter
    def bus(self, value):
        self._bus = canonicalize_bus_type(value)

    def run(self):
        """Do the actual work of this command.

        Raises:
          InvalidInputError: if :meth:`ready_to_run` reports ``False``
        """
        super(CVTDetachCDDVD, self).run()

        if not self.device_id.startswith(self.bus.value):
            self.ui.confirm_or_die(
                "Device {0} is not on the {1} bus, so nothing will be"
                " removed. Continue anyway?".format(self.device_id, self.bus))
        self.removed = self.vm.detach_cddvd(
            CDDVDConfig(id=self.device_id, bus=self.bus))

    def create_subparser(self):
        """Create 'detach-cddvd' CLI subparser."""
        parser = self.ui.add_subparser(
            'detach-cddvd',
            aliases=['remove-cddvd'],
            help="Detach a CD/DVD drive from a powered-off VM",
            usage=self.ui.fill_usage("detach-cddvd", [
                "VMX DEVICE_ID [-b {ide,scsi,sata}]",
            ]),
            description="""
Remove the CD/DVD drive with the given device ID (such as ide1:0 or sata0:1)
from the given VMware VM (.vmx file). The VM must be powered off.""",
            epilog=self.ui.fill_examples([
                ("Remove the drive at SATA controller 0, unit 1.",
                 'cvt detach-cddvd myvm.vmx sata0:1'),
            ]))

        parser.add_argument('-b', '--bus',
                            type=str.lower,
                            choices=[bus.value for bus in BusType],
                            help="Bus to remove the drive from"
                            " (default: derived from DEVICE_ID)")
        parser.add_argument('VMX',
                            help="VMware .vmx configuration file to edit")
        parser.add_argument('DEVICE_ID',
                            help="ID of the drive to remove, such as ide1:0")
        parser.set_defaults(instance=self)


command_classes.append(CVTDetachCDDVD)
