#!/usr/bin/env python
#
# vmx.py - Class for editing CD/DVD drives of a VMware VM (.vmx file)
#
# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Module for handling VMware ``.vmx`` virtual machine configuration files.

**Classes**

.. autosummary::
  :nosignatures:

  VMX
"""

import errno
import logging
import os.path

from CVT.data_validation import ValueUnsupportedError
from CVT.utilities import pretty_bytes, replace_file_contents
from CVT.vmx_file import DeviceRecord, marshal, unmarshal
from ..vm_description import (
    VMDescription, VMInitError, VMPreconditionError,
    BusType, CDDVDConfig, canonicalize_bus_type,
    CDROM_IMAGE, CDROM_RAW, CDDVD_DEVICE_TYPES,
)

logger = logging.getLogger(__name__)


class VMX(VMDescription):
    """Representation of the contents of a VMware ``.vmx`` file.

    Every public operation reads the file afresh, and every change is
    written back before the operation returns; nothing is cached between
    calls. Each operation holds :attr:`lock` from start to finish.

    **Methods**

    .. autosummary::
      :nosignatures:

      attach_cddvd
      detach_cddvd
      cddvds
      cddvd
      read
      write
    """

    @classmethod
    def detect_type_from_name(cls, filename):
        """Check the given filename to see if it looks like a VMX file.

        Args:
          filename (str): File name/path
        Returns:
          str: 'vmx'
        Raises:
          ValueUnsupportedError: if filename doesn't end in ``.vmx``.

        Examples:
          ::

            >>> VMX.detect_type_from_name("/foo/bar/My VM.VMX")
            'vmx'
            >>> try:
            ...     VMX.detect_type_from_name("foo.vmxf")
            ... except ValueUnsupportedError as e:
            ...     print(e)
            Unsupported value 'foo.vmxf' for filename - expected ('.vmx',)
        """
        extension = os.path.splitext(filename)[1]
        if extension.lower() == '.vmx':
            return 'vmx'
        raise ValueUnsupportedError("filename", filename, ('.vmx',))

    def __init__(self, input_file, power_probe=None):
        """Create a handle on the VM defined by the given ``.vmx`` file.

        Args:
          input_file (str): Existing ``.vmx`` file.
          power_probe (callable): see :class:`VMDescription`.
        Raises:
          VMInitError: if ``input_file`` does not exist.
        """
        super(VMX, self).__init__(input_file, power_probe)
        if not os.path.isfile(input_file):
            raise VMInitError(errno.ENOENT, "No such file", input_file)

    def read(self):
        """Read and parse :attr:`input_file`.

        Returns:
          CVT.vmx_file.VMXDocument: Freshly parsed document.
        Raises:
          OSError: if the file cannot be read.
          CVT.vmx_file.VMXParseError: if the file is malformed.
        """
        with open(self.input_file, 'rb') as fileobj:
            data = fileobj.read()
        logger.spam("Read %s from %s", pretty_bytes(len(data)),
                    self.input_file)
        return unmarshal(data)

    def write(self, document):
        """Serialize the given document and replace :attr:`input_file`.

        Args:
          document (CVT.vmx_file.VMXDocument): Document to write.
        Raises:
          OSError: if the file cannot be written.
          CVT.vmx_file.VMXSerializeError: if the document cannot be
              serialized.
        """
        replace_file_contents(self.input_file, marshal(document))

    def _check_powered_off(self, action):
        """Raise an error if this VM is powered on.

        Args:
          action (str): Description of the intended change, for the message.
        Raises:
          VMPreconditionError: if the VM is powered on.
        """
        if self.is_powered_on():
            raise VMPreconditionError(
                errno.EBUSY,
                "Virtual machine must be powered off in order to {0}"
                .format(action),
                self.input_file)

    def attach_cddvd(self, config):
        """Attach a new CD/DVD drive to the VM.

        If ``config.filename`` is non-empty, the drive is backed by that
        image file; otherwise it passes through a host drive, autodetected
        at power-on. The drive gets the first unused ID on the requested bus.
        The image file is not checked for existence.

        Args:
          config (CDDVDConfig): Bus and (optional) image filename.
              ``config.id`` is ignored.
        Returns:
          CDDVDConfig: The drive as stored, including its assigned ID.
        Raises:
          VMPreconditionError: if the VM is powered on.
          ValueUnsupportedError: if ``config.bus`` is not a known bus.
        """
        with self.lock:
            self._check_powered_off("attach a CD/DVD drive")
            bus = canonicalize_bus_type(config.bus)
            document = self.read()

            record = DeviceRecord(present=True, start_connected=True)
            if config.filename:
                record.device_type = CDROM_IMAGE
                record.filename = config.filename
            else:
                record.device_type = CDROM_RAW
                record.autodetect = True
            device_id = document.add_device(bus.value, record)

            self.write(document)
        logger.info("Attached %s CD/DVD drive %s to %s",
                    record.device_type, device_id, self.input_file)
        return CDDVDConfig(device_id, bus, config.filename or "")

    def detach_cddvd(self, config):
        """Remove the CD/DVD drive(s) with the given ID from the given bus.

        Every record on the bus whose ID equals ``config.id`` is removed.
        The file is rewritten even if nothing matched.

        Args:
          config (CDDVDConfig): ID and bus of the drive.
              ``config.filename`` is ignored.
        Returns:
          int: Number of device records removed.
        Raises:
          VMPreconditionError: if the VM is powered on.
          ValueUnsupportedError: if ``config.bus`` is not a known bus.
        """
        with self.lock:
            self._check_powered_off("detach a CD/DVD drive")
            bus = canonicalize_bus_type(config.bus)
            document = self.read()

            removed = document.remove_devices(bus.value, config.id)
            if removed:
                logger.info("Detached %s from %s", config.id, self.input_file)
            else:
                logger.notice("No device %s found on the %s bus of %s;"
                              " nothing to detach",
                              config.id, bus, self.input_file)

            self.write(document)
        return removed

    def cddvds(self):
        """List the CD/DVD drives attached to the VM.

        Only devices whose ``deviceType`` is ``cdrom-image`` or ``cdrom-raw``
        are included, IDE drives first, then SCSI, then SATA.

        Returns:
          list: List of :class:`CDDVDConfig`.
        """
        with self.lock:
            document = self.read()
        result = []
        for bus in BusType:
            for record in document.devices(bus.value):
                if (record.device_type or "").lower() in CDDVD_DEVICE_TYPES:
                    result.append(CDDVDConfig(record.device_id, bus,
                                              record.filename or ""))
        logger.debug("Found %d CD/DVD drive(s) in %s",
                     len(result), self.input_file)
        return result

    def cddvd(self, device_id):
        """Get the device with the given ID.

        The bus to search is chosen by the prefix of ``device_id``. Any
        device with that ID is returned, CD/DVD drive or not.

        Args:
          device_id (str): Device ID such as ``"sata0:1"``.
        Returns:
          CDDVDConfig: the device, or ``None`` if not found.
        """
        with self.lock:
            document = self.read()
        for bus in BusType:
            if not str(device_id).startswith(bus.value):
                continue
            record = document.find_device(bus.value, device_id)
            if record is not None:
                return CDDVDConfig(record.device_id, bus,
                                   record.filename or "")
        logger.debug("No device %s in %s", device_id, self.input_file)
        return None
