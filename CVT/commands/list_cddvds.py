#!/usr/bin/env python
#
# list_cddvds.py - Implements "cvt list-cddvds" command
#
# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Module for listing the CD/DVD drives of a VM.

**Classes**

.. autosummary::
  :nosignatures:

  CVTListCDDVDs
"""

import logging

from .command import command_classes, ReadCommand

logger = logging.getLogger(__name__)

RAW_DEVICE_LABEL = "(raw device)"


def cddvd_table(cddvds, width=79):
    """Render a list of CD/DVD drives as a text table.

    Args:
      cddvds (list): List of :class:`~CVT.vm_description.CDDVDConfig`.
      width (int): Maximum line width.
    Returns:
      str: Table text, without a trailing newline.

    Examples:
      ::

        >>> from CVT.vm_description import BusType, CDDVDConfig
        >>> print(cddvd_table([
        ...     CDDVDConfig("ide1:0", BusType.IDE, ""),
        ...     CDDVDConfig("sata0:1", BusType.SATA, "/isos/install.iso"),
        ... ]))
        Device ID  Bus   Image
        ---------  ----  -----------------
        ide1:0     ide   (raw device)
        sata0:1    sata  /isos/install.iso
        >>> print(cddvd_table([]))
        No CD/DVD drives
    """
    if not cddvds:
        return "No CD/DVD drives"
    rows = [(config.id, str(config.bus), config.filename or RAW_DEVICE_LABEL)
            for config in cddvds]
    headers = ("Device ID", "Bus", "Image")
    id_width = max(len(r[0]) for r in rows + [headers])
    bus_width = max(len(r[1]) for r in rows + [headers])
    image_width = max(len(r[2]) for r in rows + [headers])
    template = "{0:" + str(id_width) + "}  {1:" + str(bus_width) + "}  {2}"
    lines = [template.format(*headers),
             template.format("-" * id_width, "-" * bus_width,
                             "-" * min(image_width,
                                       width - id_width - bus_width - 4))]
    lines.extend(template.format(*row) for row in rows)
    return "\n".join(lines)


class CVTListCDDVDs(ReadCommand):
    """List the CD/DVD drives attached to a VM.

    Inherited attributes:
    :attr:`~Command.ui`,
    :attr:`~ReadCommand.vmx`
    """

    def run(self):
        """Do the actual work of this command.

        Raises:
          InvalidInputError: if :meth:`ready_to_run` reports ``False``
        """
        super(CVTListCDDVDs, self).run()

        print(cddvd_table(self.vm.cddvds(), self.ui.terminal_width - 1))

    def create_subparser(self):
        """Create 'list-cddvds' CLI subparser."""
        parser = self.ui.add_subparser(
            'list-cddvds',
            help="List the CD/DVD drives of a VM",
            usage=self.ui.fill_usage("list-cddvds", [
                "VMX",
            ]),
            description="""
Show the ID, bus, and backing image of each CD/DVD drive in the given
VMware VM (.vmx file).""")

        parser.add_argument('VMX',
                            help="VMware .vmx configuration file to read")
        parser.set_defaults(instance=self)


command_classes.append(CVTListCDDVDs)
