#!/usr/bin/env python
#
# attach_cddvd.py - Implements "cvt attach-cddvd" command
#
# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Module for attaching CD/DVD drives to a VM.

**Classes**

.. autosummary::
  :nosignatures:

  CVTAttachCDDVD
"""

import logging

from CVT.vm_description import BusType, CDDVDConfig, canonicalize_bus_type
from .command import command_classes, ReadCommand

logger = logging.getLogger(__name__)


class CVTAttachCDDVD(ReadCommand):
    """Attach a new CD/DVD drive to a powered-off VM.

    Inherited attributes:
    :attr:`~Command.ui`,
    :attr:`~ReadCommand.vmx`

    Attributes:
    :attr:`bus`,
    :attr:`image`,
    :attr:`result`
    """

    def __init__(self, ui):
        """Instantiate this command with the given UI.

        Args:
          ui (UI): User interface instance.
        """
        super(CVTAttachCDDVD, self).__init__(ui)
        self._bus = None
        self.image = None
        """Image file to back the new drive, or ``None`` for a host drive."""
        self.result = None
        """:class:`CDDVDConfig` of the attached drive, once :meth:`run`."""

    @property
    def bus(self):
        """Bus to attach the drive to, as a :class:`BusType`.

        Raises:
          ValueUnsupportedError: if set to an unknown bus name.
        """
        return self._bus

    @bus.setter
    def bus(self, value):
        self._bus = canonicalize_bus_type(value)

    def ready_to_run(self):
        """Check whether the module is ready to :meth:`run`.

        Returns:
          tuple: ``(True, ready_message)`` or ``(False, reason_why_not)``
        """
        if self.bus is None:
            return False, "A bus type (--bus) must be specified"
        return super(CVTAttachCDDVD, self).ready_to_run()

    def run(self):
        """Do the actual work of this command.

        Raises:
          InvalidInputError: if :meth:`ready_to_run` reports ``False``
        """
        super(CVTAttachCDDVD, self).run()

        if not self.image:
            logger.verbose("No image specified; the new drive will use the"
                           " host's physical CD/DVD drive")
        self.result = self.vm.attach_cddvd(
            CDDVDConfig(bus=self.bus, filename=self.image or ""))
        print(self.result.id)

    def create_subparser(self):
        """Create 'attach-cddvd' CLI subparser."""
        parser = self.ui.add_subparser(
            'attach-cddvd',
            aliases=['add-cddvd'],
            help="Attach a CD/DVD drive to a powered-off VM",
            usage=self.ui.fill_usage("attach-cddvd", [
                "VMX -b {ide,scsi,sata} [-i IMAGE]",
            ]),
            description="""
Add a new CD/DVD drive to the given VMware VM (.vmx file), backed by an
ISO image or, if no image is given, by the host's physical drive.
The new drive is placed in the first free slot of the requested bus, and its
device ID is printed. The VM must be powered off.""",
            epilog=self.ui.fill_examples([
                ("Attach a SATA CD/DVD drive backed by an ISO image.",
                 'cvt attach-cddvd myvm.vmx -b sata -i /isos/install.iso'),
                ("Attach an IDE CD/DVD drive that uses the host's drive.",
                 'cvt attach-cddvd myvm.vmx -b ide'),
            ]))

        parser.add_argument('-b', '--bus', required=True,
                            type=str.lower,
                            choices=[bus.value for bus in BusType],
                            help="Bus to attach the drive to")
        parser.add_argument('-i', '--image',
                            help="ISO image to insert into the drive"
                            " (default: use the host's physical drive)")
        parser.add_argument('VMX',
                            help="VMware .vmx configuration file to edit")
        parser.set_defaults(instance=self)


command_classes.append(CVTAttachCDDVD)
