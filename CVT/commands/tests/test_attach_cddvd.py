#!/usr/bin/env python
#
# test_attach_cddvd.py - Unit test cases for CVT attach-cddvd command
#
# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Unit test cases for the CVT.commands.attach_cddvd module."""

import errno

from CVT.commands.attach_cddvd import CVTAttachCDDVD
from CVT.commands.tests.command_testcase import CommandTestCase
from CVT.data_validation import InvalidInputError, ValueUnsupportedError
from CVT.vm_description import (
    BusType, CDDVDConfig, VMX, VMPreconditionError,
)


class TestAttachCDDVD(CommandTestCase):
    """Test the 'attach-cddvd' command."""

    command_class = CVTAttachCDDVD

    def check_drives(self, expected):
        """Compare the CD/DVD drives in :attr:`temp_file`, in any order."""
        self.assertCountEqual(expected, VMX(self.temp_file).cddvds())

    def test_readiness(self):
        """Both VMX and bus are needed."""
        self.check_not_ready("--bus")
        self.instance.bus = "ide"
        self.check_not_ready("VMX is a mandatory argument")
        self.instance.vmx = self.copy_input()
        self.assertTrue(self.instance.ready_to_run()[0])

    def test_invalid_bus(self):
        """Unknown bus types are rejected."""
        with self.assertRaises(ValueUnsupportedError):
            self.instance.bus = "usb"
        self.assertTrue(issubclass(ValueUnsupportedError, InvalidInputError))

    def test_attach_image(self):
        """Attach an ISO-backed drive and print its ID."""
        self.instance.vmx = self.copy_input()
        self.instance.bus = "SATA"
        self.instance.image = "/isos/test.iso"
        self.assertEqual("sata0:0\n", self.run_command())
        self.assertEqual(CDDVDConfig("sata0:0", BusType.SATA,
                                     "/isos/test.iso"),
                         self.instance.result)
        self.check_drives([
            CDDVDConfig("ide1:0", BusType.IDE, "/isos/ubuntu.iso"),
            CDDVDConfig("sata0:0", BusType.SATA, "/isos/test.iso"),
            CDDVDConfig("sata0:1", BusType.SATA, ""),
        ])
        self.mock_probe.assert_called_with(self.temp_file)

    def test_attach_raw(self):
        """Attach a host drive to a VM with no CD/DVD drives."""
        self.instance.vmx = self.copy_input(self.minimal_vmx)
        self.instance.bus = BusType.SCSI
        self.assertEqual("scsi0:1\n", self.run_command())
        self.check_drives([CDDVDConfig("scsi0:1", BusType.SCSI, "")])

    def test_attach_powered_on(self):
        """A running VM cannot be changed."""
        self.mock_probe.return_value = True
        self.instance.vmx = self.copy_input()
        self.instance.bus = "ide"
        with self.assertRaises(VMPreconditionError) as catcher:
            self.run_command()
        self.assertEqual(errno.EBUSY, catcher.exception.errno)
        self.assertEqual(None, self.instance.result)
        self.assertEqual(self.read_output(self.input_vmx), self.read_output())
