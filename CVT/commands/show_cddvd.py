#!/usr/bin/env python
#
# show_cddvd.py - Implements "cvt show-cddvd" command
#
# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Module for displaying a single device of a VM.

**Classes**

.. autosummary::
  :nosignatures:

  CVTShowCDDVD
"""

import logging

from CVT.data_validation import InvalidInputError
from .command import command_classes, DeviceCommand
from .list_cddvds import RAW_DEVICE_LABEL

logger = logging.getLogger(__name__)


class CVTShowCDDVD(DeviceCommand):
    """Display the device with a given ID.

    Inherited attributes:
    :attr:`~Command.ui`,
    :attr:`~ReadCommand.vmx`,
    :attr:`~DeviceCommand.device_id`
    """

    def run(self):
        """Do the actual work of this command.

        Raises:
          InvalidInputError: if :meth:`ready_to_run` reports ``False``,
              or if there is no device with the given ID.
        """
        super(CVTShowCDDVD, self).run()

        config = self.vm.cddvd(self.device_id)
        if config is None:
            raise InvalidInputError("No device {0} found in {1}"
                                    .format(self.device_id, self.vmx))
        print("Device ID: {0}".format(config.id))
        print("Bus:       {0}".format(config.bus))
        print("Image:     {0}".format(config.filename or RAW_DEVICE_LABEL))

    def create_subparser(self):
        """Create 'show-cddvd' CLI subparser."""
        parser = self.ui.add_subparser(
            'show-cddvd',
            help="Show one device of a VM",
            usage=self.ui.fill_usage("show-cddvd", [
                "VMX DEVICE_ID",
            ]),
            description="""
Show the bus and backing image of the device with the given ID (such as
scsi0:1) in the given VMware VM (.vmx file).""")

        parser.add_argument('VMX',
                            help="VMware .vmx configuration file to read")
        parser.add_argument('DEVICE_ID',
                            help="ID of the device to show, such as ide1:0")
        parser.set_defaults(instance=self)


command_classes.append(CVTShowCDDVD)
