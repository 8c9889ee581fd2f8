#!/usr/bin/env python
#
# command.py - Abstract interface for CVT commands
#
# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Parent classes for implementing CVT subcommands.

**Classes**

.. autosummary::
  :nosignatures:

  Command
  DeviceCommand
  ReadCommand
"""

import os.path
import logging

from CVT.data_validation import InvalidInputError
from CVT.data_validation import device_id as validate_device_id
from CVT.vm_description import VMDescription

logger = logging.getLogger(__name__)

command_classes = []   # pylint: disable=invalid-name
"""Dynamically constructed list of concrete command classes."""


class Command(object):
    """Abstract interface for CVT commands.

    Attributes:
    :attr:`vm`,
    :attr:`ui`

    .. note :: Generally a command should not inherit directly from this class,
      but should instead subclass :class:`ReadCommand`.
    """

    def __init__(self, ui):
        """Instantiate this command with the given UI.

        Args:
          ui (UI): User interface instance.
        """
        self.vm = None
        """Virtual machine description (:class:`VMDescription`)."""
        self.ui = ui
        """User interface instance (:class:`~CVT.ui.UI` or subclass)."""

    def ready_to_run(self):
        """Check whether the module is ready to :meth:`run`.

        Returns:
          tuple: ``(True, ready_message)`` or ``(False, reason_why_not)``
        """
        return True, "Ready to go!"

    def run(self):
        """Do the actual work of this command.

        Raises:
          InvalidInputError: if :meth:`ready_to_run` reports ``False``
        """
        (ready, reason) = self.ready_to_run()
        if not ready:
            raise InvalidInputError(reason)
        # Do the work now...

    def finished(self):
        """Do any final actions before being destroyed.

        This class does nothing; every change a CVT command makes is written
        to disk by the VM description before :meth:`run` returns.
        """
        pass

    def destroy(self):
        """Release any VM associated with this command."""
        self.vm = None

    def create_subparser(self):
        """Add subparser for the CLI of this command."""
        pass


class ReadCommand(Command):
    """Command that operates on an existing ``.vmx`` file.

    Inherited attributes:
    :attr:`vm`,
    :attr:`ui`

    Attributes:
    :attr:`vmx`
    """

    def __init__(self, ui):
        """Instantiate this command with the given UI.

        Args:
          ui (UI): User interface instance.
        """
        super(ReadCommand, self).__init__(ui)
        self._vmx = None

    @property
    def vmx(self):
        """VM configuration file to operate on.

        Calls :meth:`CVT.vm_description.VMDescription.factory` to instantiate
        :attr:`self.vm` from the provided file.

        Raises:
          InvalidInputError: if the file does not exist.
        """
        return self._vmx

    @vmx.setter
    def vmx(self, value):
        if value is not None and not os.path.exists(value):
            raise InvalidInputError("Specified VMX file {0} does not exist!"
                                    .format(value))
        self.vm = None
        if value is not None:
            self.vm = VMDescription.factory(value)
        self._vmx = value

    def ready_to_run(self):
        """Check whether the module is ready to :meth:`run`.

        Returns:
          tuple: ``(True, ready_message)`` or ``(False, reason_why_not)``
        """
        if self.vmx is None:
            return False, "VMX is a mandatory argument!"
        return super(ReadCommand, self).ready_to_run()


class DeviceCommand(ReadCommand):
    """Command that operates on a single device of a VM.

    Inherited attributes:
    :attr:`vm`,
    :attr:`ui`,
    :attr:`vmx`

    Attributes:
    :attr:`device_id`
    """

    def __init__(self, ui):
        """Instantiate this command with the given UI.

        Args:
          ui (UI): User interface instance.
        """
        super(DeviceCommand, self).__init__(ui)
        self._device_id = None

    @property
    def device_id(self):
        """Device ID such as ``ide1:0``.

        Raises:
          InvalidInputError: if the value is not a well-formed device ID.
        """
        return self._device_id

    @device_id.setter
    def device_id(self, value):
        self._device_id = validate_device_id(value)

    def ready_to_run(self):
        """Check whether the module is ready to :meth:`run`.

        Returns:
          tuple: ``(True, ready_message)`` or ``(False, reason_why_not)``
        """
        if self.device_id is None:
            return False, "DEVICE_ID is a mandatory argument!"
        return super(DeviceCommand, self).ready_to_run()
