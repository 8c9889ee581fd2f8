#!/usr/bin/env python
#
# vmrun.py - Helper for VMware's 'vmrun' VM control utility
#
# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Give CVT access to ``vmrun`` for checking whether a VM is running.

``vmrun`` ships with VMware Workstation, Fusion and Player.

https://www.vmware.com/support/developer/vix-api/

Two environment variables adjust how ``vmrun`` is invoked:

``CVT_VMRUN_PATH``
  Location of the ``vmrun`` executable, if it is not on ``$PATH``.
``CVT_VMRUN_HOST_TYPE``
  Host type passed as ``vmrun -T <type>`` (``ws``, ``fusion``, ``player``).
"""

import logging
import os

from .helper import Helper, helpers

logger = logging.getLogger(__name__)


class VMRun(Helper):
    """Helper provider for ``vmrun`` from VMware.

    https://www.vmware.com/support/developer/vix-api/
    """

    def __init__(self):
        """Initializer."""
        super(VMRun, self).__init__(
            "vmrun",
            info_uri="https://www.vmware.com/support/developer/vix-api/",
            path_env_var="CVT_VMRUN_PATH")

    @property
    def host_type(self):
        """Value of ``CVT_VMRUN_HOST_TYPE``, or ``None`` if unset."""
        return os.environ.get("CVT_VMRUN_HOST_TYPE") or None

    def call(self, args, **kwargs):
        """Call ``vmrun``, adding ``-T <host type>`` if configured.

        For the parameters, see :meth:`Helper.call`.
        """
        if self.host_type:
            args = ['-T', self.host_type] + list(args)
        return super(VMRun, self).call(args, **kwargs)

    def list_running(self):
        """Get the paths of all VMs that ``vmrun`` reports as running.

        Returns:
          list: VMX file paths, as reported by ``vmrun list``.
        """
        output = self.call(['list'])
        running = []
        for line in output.splitlines():
            line = line.strip()
            if not line or line.startswith("Total running VMs"):
                continue
            running.append(line)
        logger.debug("vmrun reports %d running VM(s)", len(running))
        return running

    def is_running(self, vmx_path):
        """Check whether the VM described by the given file is running.

        Args:
          vmx_path (str): Path to a ``.vmx`` file.
        Returns:
          bool: ``True`` if ``vmrun list`` includes this file.
        """
        target = os.path.realpath(vmx_path)
        return any(os.path.realpath(path) == target
                   for path in self.list_running())


def vmrun_power_probe(vmx_path):
    """Default power-state probe, backed by ``vmrun list``.

    Args:
      vmx_path (str): Path to a ``.vmx`` file.
    Returns:
      bool: ``True`` if the VM is running, ``False`` if it is not running
      or if ``vmrun`` is not installed.
    Raises:
      HelperError: if ``vmrun`` fails.
    """
    vmrun = helpers['vmrun']
    if not vmrun:
        logger.verbose("vmrun is not installed; assuming %s is powered off",
                       vmx_path)
        return False
    return vmrun.is_running(vmx_path)
