# test_vmx.py - Unit test cases for the VMX class
#
# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Unit test cases for the CVT.vm_description.vmx.VMX class."""

import errno
import os
import threading
from unittest import mock

from CVT.data_validation import ValueUnsupportedError
from CVT.tests import CVTTestCase
from CVT.vm_description import (
    VMX, VMInitError, VMPreconditionError, BusType, CDDVDConfig,
)
from CVT.vmx_file import DeviceRecord, VMXParseError, unmarshal


def powered_off(path):
    """Power probe for a VM that is never running."""
    return False


def powered_on(path):
    """Power probe for a VM that is always running."""
    return True


class VMXTestCase(CVTTestCase):
    """Common setup for VMX test cases."""

    def vmx(self, source=None, power_probe=powered_off):
        """Copy a sample file to :attr:`temp_file` and open it.

        Args:
          source (str): File to copy (default: :attr:`input_vmx`).
          power_probe (callable): Power probe for the VM.
        Returns:
          VMX: Handle on :attr:`temp_file`.
        """
        return VMX(self.copy_input(source), power_probe=power_probe)

    def document(self):
        """Parse :attr:`temp_file`."""
        with open(self.temp_file, 'rb') as fileobj:
            return unmarshal(fileobj.read())


class TestVMXBasics(VMXTestCase):
    """Test cases for VMX construction and file handling."""

    def test_missing_file(self):
        """A VMX handle requires an existing file."""
        with self.assertRaises(VMInitError) as catcher:
            VMX(self.temp_file)
        self.assertEqual(errno.ENOENT, catcher.exception.errno)

    def test_read_write(self):
        """Reading and writing back an unchanged document keeps its data."""
        vm = self.vmx()
        document = vm.read()
        vm.write(document)
        self.assertEqual(document, self.document())

    def test_read_invalid(self):
        """Malformed files are reported with their line number."""
        vm = VMX(self.invalid_vmx, power_probe=powered_off)
        with self.assertRaises(VMXParseError) as catcher:
            vm.read()
        self.assertEqual(3, catcher.exception.line_number)
        self.assertRaises(VMXParseError, vm.cddvds)


class TestAttachCDDVD(VMXTestCase):
    """Test cases for VMX.attach_cddvd()."""

    def test_attach_image_ide(self):
        """Attach an ISO image to the IDE bus."""
        vm = self.vmx()
        result = vm.attach_cddvd(CDDVDConfig(bus=BusType.IDE,
                                             filename="/isos/new.iso"))
        self.assertEqual(CDDVDConfig("ide0:0", BusType.IDE, "/isos/new.iso"),
                         result)
        record = self.document().find_device('ide', 'ide0:0')
        self.assertTrue(record.present)
        self.assertTrue(record.start_connected)
        self.assertEqual("cdrom-image", record.device_type)
        self.assertEqual("/isos/new.iso", record.filename)
        self.assertEqual(None, record.autodetect)
        # IDE controllers are implicit
        self.assertFalse("ide0.present" in self.document())

    def test_attach_raw_scsi(self):
        """Attach a host drive to the SCSI bus."""
        vm = self.vmx()
        result = vm.attach_cddvd(CDDVDConfig(bus="scsi"))
        self.assertEqual(CDDVDConfig("scsi0:1", BusType.SCSI, ""), result)
        record = self.document().find_device('scsi', 'scsi0:1')
        self.assertEqual("cdrom-raw", record.device_type)
        self.assertTrue(record.autodetect)
        self.assertTrue(record.start_connected)
        self.assertEqual(None, record.filename)

    def test_attach_sata_existing_controller(self):
        """Attaching to SATA fills the first free unit of sata0."""
        vm = self.vmx()
        result = vm.attach_cddvd(CDDVDConfig(bus="SATA",
                                             filename="/isos/a.iso"))
        self.assertEqual("sata0:0", result.id)
        self.assertEqual(BusType.SATA, result.bus)
        # sata0:1 already exists, so the next drive gets sata0:2
        result = vm.attach_cddvd(CDDVDConfig(bus=BusType.SATA))
        self.assertEqual("sata0:2", result.id)

    def test_attach_ignores_id(self):
        """Any ID given when attaching is ignored."""
        vm = self.vmx()
        result = vm.attach_cddvd(CDDVDConfig("ide1:1", BusType.IDE))
        self.assertEqual("ide0:0", result.id)

    def test_attach_ide_next_controller(self):
        """Once both IDE units of a controller are used, go to the next."""
        vm = self.vmx()
        ids = [vm.attach_cddvd(CDDVDConfig(bus=BusType.IDE)).id
               for _ in range(4)]
        self.assertEqual(["ide0:0", "ide0:1", "ide1:1", "ide2:0"], ids)

    def test_attach_scsi_skips_unit_7(self):
        """SCSI unit 7 is reserved for the controller itself."""
        vm = self.vmx()
        ids = [vm.attach_cddvd(CDDVDConfig(bus=BusType.SCSI)).id
               for _ in range(8)]
        self.assertEqual(["scsi0:1", "scsi0:2", "scsi0:3", "scsi0:4",
                          "scsi0:5", "scsi0:6", "scsi0:8", "scsi0:9"], ids)

    def test_attach_minimal_sata(self):
        """Attaching to a new bus adds the controller and the drive."""
        vm = self.vmx(self.minimal_vmx)
        result = vm.attach_cddvd(CDDVDConfig(bus=BusType.SATA,
                                             filename="/isos/test.iso"))
        self.assertEqual("sata0:0", result.id)
        self.assertEqual("""\
.encoding = "UTF-8"
config.version = "8"
virtualHW.version = "19"
displayName = "minimal"
guestOS = "other-64"
memsize = "512"
scsi0.present = "TRUE"
scsi0.virtualDev = "pvscsi"
sata0.present = "TRUE"
scsi0:0.present = "TRUE"
scsi0:0.fileName = "minimal.vmdk"
sata0:0.present = "TRUE"
sata0:0.startConnected = "TRUE"
sata0:0.deviceType = "cdrom-image"
sata0:0.fileName = "/isos/test.iso"
""", self.read_output())

    def test_attach_keeps_other_settings(self):
        """Unrelated entries and devices are unchanged by an attach."""
        vm = self.vmx()
        before = vm.read()
        vm.attach_cddvd(CDDVDConfig(bus=BusType.IDE))
        after = self.document()
        for (key, value) in before.items():
            self.assertEqual(value, after[key])
        self.assertEqual(before.scsi_devices, after.scsi_devices)
        self.assertEqual(before.sata_devices, after.sata_devices)
        self.assertEqual(before.ide_devices, after.ide_devices[:1])

    def test_attach_through_symlink(self):
        """Changes made through a symlinked VMX land in the real file."""
        self.copy_input()
        link = os.path.join(self.temp_dir, "link.vmx")
        os.symlink(self.temp_file, link)
        vm = VMX(link, power_probe=powered_off)
        result = vm.attach_cddvd(CDDVDConfig(bus=BusType.SATA))
        self.assertTrue(os.path.islink(link))
        self.assertIn(result,
                      VMX(self.temp_file, power_probe=powered_off).cddvds())

    def test_attach_powered_on(self):
        """Attaching to a running VM fails and leaves the file alone."""
        vm = self.vmx(power_probe=powered_on)
        with self.assertRaises(VMPreconditionError) as catcher:
            vm.attach_cddvd(CDDVDConfig(bus=BusType.IDE))
        self.assertEqual(errno.EBUSY, catcher.exception.errno)
        self.assertEqual(self.read_output(self.input_vmx), self.read_output())

    def test_attach_invalid_bus(self):
        """An unknown bus is rejected without writing the file."""
        vm = self.vmx()
        with mock.patch.object(vm, 'write') as mock_write:
            self.assertRaises(ValueUnsupportedError,
                              vm.attach_cddvd, CDDVDConfig(bus="floppy"))
            mock_write.assert_not_called()
        self.assertEqual(self.read_output(self.input_vmx), self.read_output())

    def test_attach_write_error(self):
        """A failure to write the file is reported to the caller."""
        vm = self.vmx()
        with mock.patch('CVT.vm_description.vmx.vmx.replace_file_contents',
                        side_effect=OSError(errno.ENOSPC,
                                            "No space left on device")):
            with self.assertRaises(OSError) as catcher:
                vm.attach_cddvd(CDDVDConfig(bus=BusType.IDE))
        self.assertEqual(errno.ENOSPC, catcher.exception.errno)
        self.assertEqual(self.read_output(self.input_vmx), self.read_output())

    def test_attach_concurrent(self):
        """Concurrent attaches to one file each get a distinct ID."""
        path = self.copy_input()
        results = []
        errors = []

        def attach():
            try:
                vm = VMX(path, power_probe=powered_off)
                results.append(vm.attach_cddvd(CDDVDConfig(bus="sata")).id)
            except Exception as exc:   # pylint: disable=broad-except
                errors.append(exc)

        threads = [threading.Thread(target=attach) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual([], errors)
        self.assertEqual(8, len(set(results)))
        self.assertEqual(9, len(self.document().sata_devices))


class TestDetachCDDVD(VMXTestCase):
    """Test cases for VMX.detach_cddvd()."""

    def test_detach(self):
        """Detach an existing drive."""
        vm = self.vmx()
        self.assertEqual(1, vm.detach_cddvd(CDDVDConfig("ide1:0",
                                                        BusType.IDE)))
        document = self.document()
        self.assertEqual([], document.ide_devices)
        self.assertEqual(1, len(document.sata_devices))
        self.assertEqual(1, len(document.scsi_devices))
        self.assertEqual(["sata0:1"], [c.id for c in vm.cddvds()])

    def test_detach_duplicates(self):
        """Every record with the given ID is removed."""
        vm = self.vmx()
        document = vm.read()
        document.ide_devices.insert(0, DeviceRecord("ide1:0",
                                                    device_type="cdrom-raw"))
        document.ide_devices.append(DeviceRecord("ide1:0", present=False))
        with mock.patch.object(vm, 'read', return_value=document):
            self.assertEqual(3, vm.detach_cddvd(CDDVDConfig("ide1:0",
                                                            "ide")))
        self.assertEqual([], self.document().ide_devices)
        self.assertEqual(1, len(self.document().sata_devices))

    def test_detach_not_found(self):
        """Detaching a nonexistent drive is not an error."""
        vm = self.vmx()
        with mock.patch.object(vm, 'write', wraps=vm.write) as mock_write:
            self.assertEqual(0, vm.detach_cddvd(CDDVDConfig("ide0:1",
                                                            BusType.IDE)))
            self.assertEqual(1, mock_write.call_count)
        self.assertLogged(**self.NOTHING_TO_DETACH)
        self.assertEqual(unmarshal(self.read_output(self.input_vmx)),
                         self.document())

    def test_detach_wrong_bus(self):
        """The ID must be on the given bus to be removed."""
        vm = self.vmx()
        self.assertEqual(0, vm.detach_cddvd(CDDVDConfig("sata0:1",
                                                        BusType.IDE)))
        self.assertLogged(**self.NOTHING_TO_DETACH)
        self.assertEqual(["ide1:0", "sata0:1"],
                         [c.id for c in vm.cddvds()])

    def test_detach_any_device_type(self):
        """Detach removes any device with the ID, not just CD/DVD drives."""
        vm = self.vmx()
        self.assertEqual(1, vm.detach_cddvd(CDDVDConfig("scsi0:0",
                                                        BusType.SCSI)))
        self.assertEqual([], self.document().scsi_devices)
        # the controller stays
        self.assertEqual("TRUE", self.document()["scsi0.present"])

    def test_detach_powered_on(self):
        """Detaching from a running VM fails and leaves the file alone."""
        vm = self.vmx(power_probe=powered_on)
        with self.assertRaises(VMPreconditionError) as catcher:
            vm.detach_cddvd(CDDVDConfig("ide1:0", BusType.IDE))
        self.assertEqual(errno.EBUSY, catcher.exception.errno)
        self.assertEqual(self.read_output(self.input_vmx), self.read_output())

    def test_detach_probe_failure(self):
        """If the power state is unknown, the change goes ahead."""
        def probe(path):
            raise RuntimeError("vmrun crashed")

        vm = self.vmx(power_probe=probe)
        self.assertEqual(1, vm.detach_cddvd(CDDVDConfig("ide1:0", "ide")))
        self.assertLogged(**self.PROBE_FAILED)

    def test_detach_invalid_bus(self):
        """An unknown bus is rejected."""
        vm = self.vmx()
        self.assertRaises(ValueUnsupportedError,
                          vm.detach_cddvd, CDDVDConfig("ide1:0", "usb"))
        self.assertEqual(self.read_output(self.input_vmx), self.read_output())

    def test_attach_then_detach(self):
        """Detaching a newly attached drive restores the original devices."""
        vm = self.vmx()
        before = vm.read()
        new = vm.attach_cddvd(CDDVDConfig(bus=BusType.IDE,
                                          filename="/isos/x.iso"))
        self.assertEqual(1, vm.detach_cddvd(new))
        self.assertEqual(before, self.document())


class TestListCDDVDs(VMXTestCase):
    """Test cases for VMX.cddvds() and VMX.cddvd()."""

    def test_list(self):
        """Only CD/DVD drives are listed, tagged with their bus."""
        vm = self.vmx()
        self.assertEqual([
            CDDVDConfig("ide1:0", BusType.IDE, "/isos/ubuntu.iso"),
            CDDVDConfig("sata0:1", BusType.SATA, ""),
        ], vm.cddvds())

    def test_list_order(self):
        """Drives are listed IDE first, then SCSI, then SATA."""
        vm = self.vmx()
        vm.attach_cddvd(CDDVDConfig(bus=BusType.SCSI,
                                    filename="/isos/scsi.iso"))
        vm.attach_cddvd(CDDVDConfig(bus=BusType.IDE))
        self.assertEqual(["ide1:0", "ide0:0", "scsi0:1", "sata0:1"],
                         [c.id for c in vm.cddvds()])
        self.assertEqual([BusType.IDE, BusType.IDE,
                          BusType.SCSI, BusType.SATA],
                         [c.bus for c in vm.cddvds()])

    def test_list_empty(self):
        """A VM without CD/DVD drives has an empty list."""
        vm = self.vmx(self.minimal_vmx)
        self.assertEqual([], vm.cddvds())

    def test_list_sees_external_changes(self):
        """Each call rereads the file."""
        vm = self.vmx()
        other = VMX(self.temp_file, power_probe=powered_off)
        other.detach_cddvd(CDDVDConfig("sata0:1", BusType.SATA))
        self.assertEqual(["ide1:0"], [c.id for c in vm.cddvds()])

    def test_get(self):
        """Look up a drive by its ID."""
        vm = self.vmx()
        self.assertEqual(CDDVDConfig("ide1:0", BusType.IDE,
                                     "/isos/ubuntu.iso"),
                         vm.cddvd("ide1:0"))
        self.assertEqual(CDDVDConfig("sata0:1", BusType.SATA, ""),
                         vm.cddvd("sata0:1"))

    def test_get_any_device(self):
        """Any device may be looked up, not only CD/DVD drives."""
        vm = self.vmx()
        self.assertEqual(CDDVDConfig("scsi0:0", BusType.SCSI,
                                     "test-vm.vmdk"),
                         vm.cddvd("scsi0:0"))

    def test_get_not_found(self):
        """Unknown IDs give None."""
        vm = self.vmx()
        self.assertEqual(None, vm.cddvd("ide0:0"))
        self.assertEqual(None, vm.cddvd("sata1:1"))
        self.assertEqual(None, vm.cddvd("floppy0"))

    def test_read_only_operations_do_not_write(self):
        """Listing does not modify the file."""
        vm = self.vmx()
        mtime = os.stat(self.temp_file).st_mtime
        with mock.patch.object(vm, 'write') as mock_write:
            vm.cddvds()
            vm.cddvd("ide1:0")
            mock_write.assert_not_called()
        self.assertEqual(mtime, os.stat(self.temp_file).st_mtime)

    def test_powered_on_read(self):
        """Reading a running VM is allowed."""
        vm = self.vmx(power_probe=powered_on)
        self.assertEqual(2, len(vm.cddvds()))
