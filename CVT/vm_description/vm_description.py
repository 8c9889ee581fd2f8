#!/usr/bin/env python
#
# vm_description.py - Abstract class for reading and editing VM definitions
#
# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Abstract superclass for reading and editing VM definitions.

.. autosummary::
  :nosignatures:

  BusType
  CDDVDConfig
  VMDescription
  VMInitError
  VMPreconditionError
  canonicalize_bus_type
  file_lock
"""

import collections
import enum
import errno
import logging
import os.path
import re
import threading
import weakref

from CVT.data_validation import ValueUnsupportedError, canonicalize_helper
from CVT.helpers import vmrun_power_probe

logger = logging.getLogger(__name__)


class VMInitError(EnvironmentError):
    """Class representing errors encountered when trying to init/load a VM."""


class VMPreconditionError(EnvironmentError):
    """The VM is not in a state that permits the requested change.

    Currently this means the VM is powered on. The ``errno`` is
    :data:`errno.EBUSY`.
    """


class BusType(enum.Enum):
    """Storage bus to which a CD/DVD drive can be attached."""

    IDE = "ide"
    SCSI = "scsi"
    SATA = "sata"

    def __str__(self):
        """Use the VMX spelling of the bus name."""
        return self.value


def canonicalize_bus_type(value):
    """Convert user input to a :class:`BusType`.

    Args:
      value (object): A :class:`BusType` or a string such as ``"SCSI"``.
    Returns:
      BusType: The matching bus type.
    Raises:
      ValueUnsupportedError: if ``value`` does not name a known bus.

    Examples:
      ::

        >>> canonicalize_bus_type("SATA")
        <BusType.SATA: 'sata'>
        >>> canonicalize_bus_type(BusType.IDE)
        <BusType.IDE: 'ide'>
        >>> try:
        ...     canonicalize_bus_type("fd")
        ... except ValueUnsupportedError as e:
        ...     print(e)
        Unsupported value 'fd' for bus type - expected ['ide', 'scsi', 'sata']
    """
    if isinstance(value, BusType):
        return value
    return canonicalize_helper("bus type", value,
                               [("^{0}$".format(bus.value), bus)
                                for bus in BusType],
                               re.IGNORECASE)


CDROM_IMAGE = "cdrom-image"
"""``deviceType`` of a CD/DVD drive backed by an image file."""

CDROM_RAW = "cdrom-raw"
"""``deviceType`` of a CD/DVD drive passed through from the host."""

CDDVD_DEVICE_TYPES = (CDROM_IMAGE, CDROM_RAW)


CDDVDConfig = collections.namedtuple('CDDVDConfig',
                                     ['id', 'bus', 'filename'],
                                     defaults=(None, None, ""))
CDDVDConfig.__doc__ = """Description of one CD/DVD drive.

``id`` is a device ID such as ``"ide1:0"`` (ignored when attaching),
``bus`` a :class:`BusType` (or its name), and ``filename`` the backing image,
or ``""`` for a drive passed through from the host.
"""


_FILE_LOCKS = weakref.WeakValueDictionary()
_FILE_LOCKS_GUARD = threading.Lock()


def file_lock(path):
    """Get the process-wide lock for the given file.

    All callers asking about the same file (after resolving symlinks and
    relative paths) receive the same re-entrant lock. A lock is forgotten
    once nobody holds a reference to it, so the table does not grow with
    every file ever touched.

    Args:
      path (str): File path.
    Returns:
      threading.RLock: Lock for this file.

    Examples:
      ::

        >>> file_lock("foo.vmx") is file_lock("./foo.vmx")
        True
        >>> file_lock("foo.vmx") is file_lock("bar.vmx")
        False
    """
    key = os.path.realpath(path)
    with _FILE_LOCKS_GUARD:
        return _FILE_LOCKS.setdefault(key, threading.RLock())


class VMDescription(object):
    """Abstract class for reading and editing VM definitions.

    Examples:
      If the specific VM class is unknown, you can use the
      :meth:`factory` method to try to obtain an appropriate subclass::

        >>> try:    # doctest: +ELLIPSIS
        ...     VMDescription.factory("foo.txt")
        ... except VMInitError as e:
        ...     print(e)
        [Errno 2] Unknown VM description type for input file...

    **Properties**

    .. autosummary::
      :nosignatures:

      input_file
      lock

    **Methods**

    .. autosummary::
      :nosignatures:

      is_powered_on
      attach_cddvd
      detach_cddvd
      cddvds
      cddvd
    """

    # Many of these methods are abstract interfaces, so quiet, Pylint!
    # pylint: disable=missing-raises-doc
    # pylint: disable=redundant-returns-doc
    # pylint: disable=no-self-use, unused-argument

    @classmethod
    def detect_type_from_name(cls, filename):
        """Check the given filename to see if it looks like a type we support.

        Does not check file contents, as the given filename may not yet exist.

        Args:
          filename (str): File name or path
        Returns:
          str: A string representing a recognized and supported type of file
        Raises:
          ValueUnsupportedError: if CVT can't recognize the file type or
              doesn't know how to handle this file type.
        """
        raise ValueUnsupportedError("filename", filename, ("none implemented"))

    @classmethod
    def factory(cls, input_file, *args, **kwargs):
        """Factory method to select and create the appropriate subclass.

        Args:
          input_file (str): Input file to test against each class's
            :meth:`detect_type_from_name` implementation.
          *args: Passed through to selected subclass :meth:`__init__`.
          **kwargs: Passed through to selected subclass :meth:`__init__`.

        Returns:
          VMDescription: appropriate subclass instance.

        Raises:
          VMInitError: if no appropriate subclass is identified
          VMInitError: if the selected subclass fails instantiation
        """
        vm_class = None
        supported_types = []
        # pylint doesn't know about __subclasses__
        # pylint:disable=no-member
        for candidate_class in VMDescription.__subclasses__():
            try:
                candidate_class.detect_type_from_name(input_file)
                vm_class = candidate_class
                break
            except ValueUnsupportedError as exc:
                supported_types += [exc.expected_value]

        if not vm_class:
            raise VMInitError(errno.ENOENT,
                              "Unknown VM description type for input file -"
                              " only supported types are {0}"
                              .format(supported_types),
                              input_file)

        logger.verbose("Loading '%s' as %s", input_file, vm_class.__name__)
        try:
            vm = vm_class(input_file, *args, **kwargs)
        except ValueUnsupportedError as exc:
            raise VMInitError(errno.ENOENT, str(exc), input_file)
        logger.debug("Successfully loaded %s from %s",
                     vm_class.__name__, input_file)

        return vm

    def __init__(self, input_file, power_probe=None):
        """Create a handle on the VM defined by the given file.

        Args:
          input_file (str): VM description file.
          power_probe (callable): Function taking the file path and returning
              ``True`` if the VM is powered on. Defaults to
              :func:`~CVT.helpers.vmrun.vmrun_power_probe`.
        """
        self._input_file = input_file
        if power_probe is None:
            power_probe = vmrun_power_probe
        self.power_probe = power_probe
        self._lock = file_lock(input_file)

    @property
    def input_file(self):
        """VM description file that this instance reads and writes."""
        return self._input_file

    @property
    def lock(self):
        """Re-entrant lock shared by every instance using this file.

        Held for the whole of each read-modify-write operation.
        """
        return self._lock

    def is_powered_on(self):
        """Check whether this VM is currently powered on.

        If the power state cannot be determined, the VM is assumed to be
        powered off and a warning is logged.

        Returns:
          bool: ``True`` if powered on, else ``False``.
        """
        try:
            return bool(self.power_probe(self.input_file))
        except Exception as exc:    # pylint: disable=broad-except
            logger.warning("Unable to determine power state of %s (%s);"
                           " assuming it is powered off",
                           self.input_file, exc)
            return False

    def attach_cddvd(self, config):
        """Attach a new CD/DVD drive to the VM.

        Args:
          config (CDDVDConfig): Bus and (optional) image filename.
        Returns:
          CDDVDConfig: The drive as stored, including its assigned ID.
        """
        raise NotImplementedError("attach_cddvd not implemented")

    def detach_cddvd(self, config):
        """Remove the CD/DVD drive(s) with the given ID from the given bus.

        Args:
          config (CDDVDConfig): ID and bus of the drive.
        Returns:
          int: Number of device records removed.
        """
        raise NotImplementedError("detach_cddvd not implemented")

    def cddvds(self):
        """List the CD/DVD drives attached to the VM.

        Returns:
          list: List of :class:`CDDVDConfig`.
        """
        raise NotImplementedError("cddvds not implemented")

    def cddvd(self, device_id):
        """Get the device with the given ID.

        Args:
          device_id (str): Device ID such as ``"sata0:1"``.
        Returns:
          CDDVDConfig: the device, or ``None`` if not found.
        """
        raise NotImplementedError("cddvd not implemented")


if __name__ == "__main__":   # pragma: no cover
    import doctest
    doctest.testmod()
