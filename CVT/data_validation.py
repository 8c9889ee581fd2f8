#!/usr/bin/env python
#
# data_validation.py - Helper libraries to validate data sanity
#
# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Various helpers for data sanity checks.

**Exceptions**

.. autosummary::
  :nosignatures:

  InvalidInputError
  ValueUnsupportedError

**Functions**

.. autosummary::
  :nosignatures:

  canonicalize_helper
  device_id
  truth_value
  vmx_bool
"""

import re


def canonicalize_helper(label, user_input, mappings, re_flags=0):
    """Try to find a mapping of input to output.

    Args:
      label (str): Label to use in any error raised
      user_input (str): User-provided string
      mappings (list): List of ``(expr, canonical)`` pairs for mapping.
      re_flags (int): ``re.IGNORECASE``, etc. if desired
    Returns:
      object: The canonical value
    Raises:
      ValueUnsupportedError: If no ``expr`` in ``mappings`` matches the given
          ``user_input``, or if ``user_input`` is empty.
    """
    if user_input is None or user_input == "":
        raise ValueUnsupportedError(label, user_input,
                                    [str(c) for (_, c) in mappings])
    for (expr, canonical) in mappings:
        if re.match(expr, str(user_input), flags=re_flags):
            return canonical
    raise ValueUnsupportedError(label, user_input,
                                [str(c) for (_, c) in mappings])


_DEVICE_ID_RE = re.compile(r"^(ide|scsi|sata)(\d+):(\d+)$", re.IGNORECASE)


def device_id(string):
    r"""Parser helper function for VMX device identifier arguments.

    Validate string is an appropriately formed device ID such as 'ide1:0'.

    Args:
      string (str): String to validate
    Raises:
      InvalidInputError: if string is not a well-formatted device ID
    Returns:
      str: Validated string (lower-cased, with whitespace stripped)
    Examples:
      ::

        >>> device_id("  SATA0:1\n")
        'sata0:1'
        >>> try:
        ...     device_id("ide:0")
        ... except InvalidInputError as e:
        ...     print(e)
        'ide:0' is not a valid device ID
    """
    string = string.strip()
    if not _DEVICE_ID_RE.match(string):
        raise InvalidInputError("'{0}' is not a valid device ID"
                                .format(string))
    return string.lower()


_TRUE_STRINGS = ('y', 'yes', 't', 'true', 'on', '1')
_FALSE_STRINGS = ('n', 'no', 'f', 'false', 'off', '0')


def truth_value(value):
    """Parser helper function for truth values like '0', 'y', or 'false'.

    Args:
      value (str): String to parse/validate
    Returns:
      bool: True or False
    Raises:
      ValueUnsupportedError: if the value can't be parsed to a boolean.
    Examples:
      ::

        >>> truth_value('y')
        True
        >>> truth_value('FALSE')
        False
        >>> truth_value(True)
        True
        >>> try:    # doctest: +ELLIPSIS
        ...     truth_value('foo')
        ... except ValueUnsupportedError as e:
        ...     print(e)
        Unsupported value 'foo' for truth value - expected ['y', ...
    """
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    raise ValueUnsupportedError("truth value", value,
                                list(_TRUE_STRINGS + _FALSE_STRINGS))


def vmx_bool(value):
    """Render a boolean the way VMware writes it in a .vmx file.

    Args:
      value (bool): Value to render
    Returns:
      str: ``"TRUE"`` or ``"FALSE"``
    Examples:
      ::

        >>> vmx_bool(True)
        'TRUE'
        >>> vmx_bool(0)
        'FALSE'
    """
    return "TRUE" if value else "FALSE"


# Some handy exception and error types we can throw
class InvalidInputError(ValueError):
    """Miscellaneous error during validation of user input."""


class ValueUnsupportedError(InvalidInputError):
    """An unsupported value was provided.

    Args:
      value_type (str): descriptive string
      actual_value (str): invalid value that was provided
      expected_value (object): expected/valid value(s) (item or list)
    """

    def __init__(self, value_type, actual_value, expected_value):
        """Create an instance of this class."""
        self.value_type = value_type
        self.actual_value = actual_value
        self.expected_value = expected_value
        super(ValueUnsupportedError, self).__init__(str(self))

    def __str__(self):
        """Human-readable string representation."""
        return ("Unsupported value '{0}' for {1} - expected {2}"
                .format(self.actual_value, self.value_type,
                        self.expected_value))


if __name__ == "__main__":   # pragma: no cover
    import doctest
    doctest.testmod()
