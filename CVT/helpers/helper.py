#!/usr/bin/env python
#
# helper.py - Abstract provider of a non-Python helper program.
#
# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Common interface for providers of non-Python helper programs.

Provides the ability to locate and call helper programs such as ``vmrun``.

**Classes and Exceptions**

.. autosummary::
  :nosignatures:

  Helper
  HelperDict
  HelperError
  HelperNotFoundError

**Functions**

.. autosummary::
  :nosignatures:

  check_output

**Attributes**

.. autosummary::
  :nosignatures:

  helpers
"""

import errno
import logging
import os
import shutil
import subprocess

logger = logging.getLogger(__name__)


class HelperNotFoundError(OSError):
    """A helper program cannot be located."""


class HelperError(EnvironmentError):
    """A helper program exited with non-zero return code."""


class HelperDict(dict):
    """Dictionary of Helper objects by name.

    Similar to :class:`collections.defaultdict` but takes the key
    as a parameter to the factory.
    """

    def __init__(self, factory, *args, **kwargs):
        """Create the given dictionary with the given factory class/method.

        Args:
          factory (object): Factory class or method to be called to populate
              a new entry in response to :meth:`__missing__`.

        For the other parameters, see :class:`dict`.
        """
        super(HelperDict, self).__init__(*args, **kwargs)
        self.factory = factory

    def __missing__(self, key):
        """Method called when accessing a non-existent key.

        Automatically populate the given key with an instance of the factory.

        Args:
          key (object): Key that was not yet defined in this dictionary.

        Returns:
          object: Result of calling ``self.factory(key)``
        """
        self[key] = self.factory(key)
        return self[key]


class Helper(object):
    """A provider of a non-Python helper program.

    **Instance Properties**

    .. autosummary::
      name
      info_uri
      installed
      path

    **Instance Methods**

    .. autosummary::
      :nosignatures:

      call
    """

    def __init__(self, name, info_uri=None, path_env_var=None):
        """Initializer.

        Args:
          name (str): Name of helper executable
          info_uri (str): URI to refer to for more info about this helper.
          path_env_var (str): Name of an environment variable that, if set,
              gives the location of the helper, overriding the ``$PATH``
              search.
        """
        self._name = name
        self._info_uri = info_uri
        self._path_env_var = path_env_var
        self._path = None

    def __bool__(self):
        """A helper is True if installed and False if not installed."""
        return self.installed

    @property
    def name(self):
        """Name of the helper program."""
        return self._name

    @property
    def info_uri(self):
        """URI for more information about this helper."""
        return self._info_uri

    @property
    def path(self):
        """Discovered path to the helper."""
        if not self._path:
            override = None
            if self._path_env_var:
                override = os.environ.get(self._path_env_var)
            if override:
                logger.debug("Using %s=%s as path to %s",
                             self._path_env_var, override, self.name)
                self._path = shutil.which(override)
                if not self._path:
                    logger.warning("%s is set to '%s' but no executable"
                                   " was found there",
                                   self._path_env_var, override)
            else:
                logger.spam("Checking for helper executable %s", self.name)
                self._path = shutil.which(self.name)
            if self._path:
                logger.debug("%s is at %s", self.name, self._path)
            else:
                logger.debug("No path to %s found", self.name)
        return self._path

    @property
    def installed(self):
        """Whether this helper program is installed and available to run."""
        return self.path is not None

    def call(self, args, **kwargs):
        """Call the helper program with the given arguments.

        Args:
          args (list): List of arguments to the helper program.

        For the other parameters, see :func:`check_output`.

        Returns:
          str: Captured stdout/stderr.

        Raises:
          HelperNotFoundError: if the helper is not installed.
        """
        if not self.path:
            raise HelperNotFoundError(
                errno.ENOENT,
                "Unable to proceed without helper program '{0}'. "
                "Please install it and/or check your $PATH."
                .format(self.name))
        return check_output([self.path] + list(args), **kwargs)


helpers = HelperDict(Helper)   # pylint: disable=invalid-name
"""Dictionary of concrete Helper subclass instances that CVT can use."""


def check_output(args, require_success=True, **kwargs):
    r"""Wrapper for :func:`subprocess.check_output`.

    Automatically redirects stderr to stdout, captures both to a buffer,
    and generates a debug message with the stdout contents.

    Args:
      args (list): Command to invoke and its associated args
      require_success (boolean): If ``False``, do not raise an error when the
          command exits with a return code other than 0

    For the other parameters, see :func:`subprocess.check_output`.

    Returns:
      str: Captured stdout/stderr from the command

    Raises:
      HelperNotFoundError: if the command doesn't exist (instead of a
          :class:`OSError`)
      HelperError: if :attr:`require_success` is not ``False`` and the command
          returns a value other than 0 (instead of a
          :class:`subprocess.CalledProcessError`).
      OSError: as :func:`subprocess.check_output`.

    Examples:
      ::

        >>> output = check_output(['echo', 'Hello world!'])
        >>> assert output == "Hello world!\n"
        >>> try:
        ...     check_output(['false'])
        ... except HelperError as e:
        ...     print(e.errno)
        ...     print(e.strerror)
        1
        Helper program 'false' exited with error 1:
        > false
        <BLANKLINE>
        >>> output = check_output(['false'], require_success=False)
        >>> assert output == ''
        >>> try:
        ...     check_output(['/non/exist'])
        ... except HelperNotFoundError as e:
        ...     print(e.errno)
        ...     print(e.strerror)
        2
        Unable to locate helper program '/non/exist'. Please check your $PATH.
    """
    cmd = args[0]
    logger.debug("Calling '%s' and capturing its output...", " ".join(args))
    try:
        stdout = subprocess.check_output(args,
                                         stderr=subprocess.STDOUT,
                                         **kwargs).decode('utf-8', 'replace')
    except OSError as exc:
        if exc.errno != errno.ENOENT:
            raise
        raise HelperNotFoundError(exc.errno,
                                  "Unable to locate helper program '{0}'. "
                                  "Please check your $PATH.".format(cmd))
    except subprocess.CalledProcessError as exc:
        stdout = exc.output.decode('utf-8', 'replace')
        if require_success:
            raise HelperError(exc.returncode,
                              "Helper program '{0}' exited with error {1}:"
                              "\n> {2}\n{3}".format(cmd, exc.returncode,
                                                    " ".join(args),
                                                    stdout))
    logger.debug("...done")
    logger.spam("%s output:\n%s", cmd, stdout)
    return stdout


if __name__ == "__main__":   # pragma: no cover
    import doctest
    doctest.testmod()
