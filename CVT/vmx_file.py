#!/usr/bin/env python
#
# vmx_file.py - reading, editing, and writing VMX configuration files
#
# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Reading, editing, and writing VMware ``.vmx`` configuration files.

A ``.vmx`` file is a flat list of ``key = "value"`` lines. Keys of the form
``<bus><controller>:<unit>.<attribute>`` (such as ``ide1:0.fileName``)
describe a device attached to a storage bus; this module groups those keys
into :class:`DeviceRecord` objects, one ordered list per bus, and keeps every
other key in an ordered mapping.

Values are written the way VMware writes them: double-quoted, with
special characters escaped as ``|XX`` where ``XX`` is the hexadecimal
character code.

**Functions**

.. autosummary::
  :nosignatures:

  escape_value
  marshal
  unescape_value
  unmarshal

**Classes**

.. autosummary::
  :nosignatures:

  DeviceRecord
  VMXDocument
  VMXParseError
  VMXSerializeError
"""

import logging
import re

from CVT.data_validation import truth_value, vmx_bool

logger = logging.getLogger(__name__)

BUS_TYPES = ('ide', 'scsi', 'sata')
"""Storage buses whose device keys are grouped into :class:`DeviceRecord`."""

DEFAULT_ENCODING = "UTF-8"

_UNITS_PER_CONTROLLER = {
    'ide': 2,
    'scsi': 16,
    'sata': 30,
}

# scsiN:7 is the address of the SCSI controller itself
_RESERVED_UNITS = {
    'scsi': (7,),
}

# IDE controllers are implicit in a VMX file
_EXPLICIT_CONTROLLER_BUSES = ('scsi', 'sata')

_LINE_RE = re.compile(r'^\s*([^=\s]+)\s*=\s*(.*?)\s*$')
_QUOTED_RE = re.compile(r'^"(.*?)"(\s*#.*)?$')
_KEY_RE = re.compile(r'^[^\s="#|]+$')
_DEVICE_KEY_RE = re.compile(r'^(ide|scsi|sata)(\d+):(\d+)\.(.+)$',
                            re.IGNORECASE)
_DEVICE_ID_RE = re.compile(r'^(ide|scsi|sata)(\d+):(\d+)$')
_ENCODING_RE = re.compile(br'^\s*\.encoding\s*=\s*"?([^"\r\n]*)"?',
                          re.MULTILINE | re.IGNORECASE)
_ESCAPE_RE = re.compile(r'[\x00-\x1f\x7f"#|]')
_UNESCAPE_RE = re.compile(r'\|([0-9A-Fa-f]{2})')


class VMXParseError(ValueError):
    """The contents of a VMX file could not be parsed.

    Args:
      message (str): Description of the problem.
      line_number (int): 1-based line number of the offending line, if known.
      line (str): Text of the offending line, if known.
    """

    def __init__(self, message, line_number=None, line=None):
        """Create an instance of this class."""
        self.message = message
        self.line_number = line_number
        self.line = line
        super(VMXParseError, self).__init__(str(self))

    def __str__(self):
        """Human-readable string representation."""
        if self.line_number is None:
            return self.message
        return ("Line {0}: {1}:\n> {2}"
                .format(self.line_number, self.message, self.line))


class VMXSerializeError(ValueError):
    """A VMX document could not be serialized."""


def escape_value(value):
    """Escape special characters in a value the way VMware does.

    Args:
      value (str): Raw value.
    Returns:
      str: Value safe to place between double quotes in a VMX file.
    Examples:
      ::

        >>> escape_value('My "special" VM')
        'My |22special|22 VM'
        >>> escape_value('a|b')
        'a|7Cb'
    """
    return _ESCAPE_RE.sub(lambda m: "|{0:02X}".format(ord(m.group(0))),
                          value)


def unescape_value(value):
    """Reverse :func:`escape_value`.

    Args:
      value (str): Value as found in a VMX file, without the quotes.
    Returns:
      str: Raw value.
    Examples:
      ::

        >>> unescape_value('My |22special|22 VM|0A')
        'My "special" VM\\n'
    """
    return _UNESCAPE_RE.sub(lambda m: chr(int(m.group(1), 16)), value)


def _split_device_id(device_id):
    """Split a device ID into its bus, controller and unit.

    Args:
      device_id (str): Device ID such as ``"scsi0:1"``.
    Returns:
      tuple: ``(bus, controller, unit)`` or ``None`` if not a device ID.
    """
    match = _DEVICE_ID_RE.match(str(device_id))
    if not match:
        return None
    return match.group(1), int(match.group(2)), int(match.group(3))


class DeviceRecord(object):
    """One device attached to an IDE, SCSI or SATA bus.

    Known attributes are exposed as Python properties with parsed values;
    any other ``<device_id>.<attribute>`` keys are kept verbatim in
    :attr:`extra` so that rewriting a file does not lose them.
    Unset attributes are ``None`` and are not written out.
    """

    KNOWN_ATTRIBUTES = (
        # (python name, VMX attribute, is boolean)
        ('present', 'present', True),
        ('start_connected', 'startConnected', True),
        ('device_type', 'deviceType', False),
        ('filename', 'fileName', False),
        ('autodetect', 'autodetect', True),
    )

    _ATTRIBUTE_LOOKUP = dict((vmx_name.lower(), (name, is_bool))
                             for (name, vmx_name, is_bool) in KNOWN_ATTRIBUTES)

    def __init__(self, device_id=None, present=None, start_connected=None,
                 device_type=None, filename=None, autodetect=None,
                 extra=None):
        """Create a device record.

        Args:
          device_id (str): ID such as ``"ide1:0"``, or ``None`` if the
              record has not yet been added to a :class:`VMXDocument`.
          present (bool): Whether the device is present.
          start_connected (bool): Whether it is connected at power on.
          device_type (str): Device type, such as ``"cdrom-image"``.
          filename (str): Backing file name.
          autodetect (bool): Whether to autodetect the backing host device.
          extra (dict): Other attributes, VMX attribute name to string value.
        """
        self.device_id = device_id
        self.present = present
        self.start_connected = start_connected
        self.device_type = device_type
        self.filename = filename
        self.autodetect = autodetect
        self.extra = dict(extra) if extra else {}

    @property
    def bus(self):
        """Bus name (``'ide'``, ``'scsi'``, ``'sata'``) or ``None``."""
        parts = _split_device_id(self.device_id)
        return parts[0] if parts else None

    @property
    def controller(self):
        """Controller number on the bus, or ``None``."""
        parts = _split_device_id(self.device_id)
        return parts[1] if parts else None

    def set_attribute(self, attribute, value):
        """Set an attribute from its VMX name and string value.

        Args:
          attribute (str): VMX attribute name, matched case-insensitively.
          value (str): Unescaped value text.
        Raises:
          ValueUnsupportedError: if a boolean attribute has a value that is
              not a recognized truth value.
        """
        known = self._ATTRIBUTE_LOOKUP.get(attribute.lower())
        if known is None:
            # Keep the first spelling seen
            for name in self.extra:
                if name.lower() == attribute.lower():
                    attribute = name
                    break
            self.extra[attribute] = value
            return
        name, is_bool = known
        if is_bool:
            value = truth_value(value)
        setattr(self, name, value)

    def items(self):
        """List the attributes of this record to be written out.

        Returns:
          list: ``(vmx_attribute, string_value)`` pairs, known attributes
          first (in a fixed order), then :attr:`extra` in insertion order.
        """
        result = []
        for (name, vmx_name, is_bool) in self.KNOWN_ATTRIBUTES:
            value = getattr(self, name)
            if value is None:
                continue
            result.append((vmx_name, vmx_bool(value) if is_bool else value))
        result.extend(self.extra.items())
        return result

    def __eq__(self, other):
        """Records are equal if their IDs and all attributes are equal."""
        if not isinstance(other, DeviceRecord):
            return NotImplemented
        return (self.device_id == other.device_id and
                self.items() == other.items())

    def __ne__(self, other):
        """Inverse of :meth:`__eq__`."""
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __repr__(self):
        """Debugging representation."""
        return "<DeviceRecord {0} {1}>".format(self.device_id,
                                               dict(self.items()))


class VMXDocument(object):
    """In-memory representation of a parsed ``.vmx`` file.

    Keys outside the device namespace are stored in file order and looked up
    case-insensitively, as VMware does. Devices live in one ordered list per
    bus, available through :meth:`devices`.
    """

    def __init__(self):
        """Create an empty document."""
        self._entries = {}
        self._keys = {}
        self._devices = dict((bus, []) for bus in BUS_TYPES)

    @property
    def encoding(self):
        """Text encoding named by the ``.encoding`` key, default UTF-8."""
        return self.get('.encoding') or DEFAULT_ENCODING

    @property
    def ide_devices(self):
        """Ordered list of :class:`DeviceRecord` on the IDE bus."""
        return self._devices['ide']

    @property
    def scsi_devices(self):
        """Ordered list of :class:`DeviceRecord` on the SCSI bus."""
        return self._devices['scsi']

    @property
    def sata_devices(self):
        """Ordered list of :class:`DeviceRecord` on the SATA bus."""
        return self._devices['sata']

    def devices(self, bus):
        """Get the ordered device list for the given bus.

        Args:
          bus (str): ``'ide'``, ``'scsi'`` or ``'sata'``.
        Returns:
          list: The document's own list (mutations are reflected).
        Raises:
          KeyError: if ``bus`` is not one of :data:`BUS_TYPES`.
        """
        return self._devices[bus]

    def set_devices(self, bus, records):
        """Replace the device list for the given bus.

        Args:
          bus (str): ``'ide'``, ``'scsi'`` or ``'sata'``.
          records (list): New list of :class:`DeviceRecord`.
        Raises:
          KeyError: if ``bus`` is not one of :data:`BUS_TYPES`.
        """
        if bus not in self._devices:
            raise KeyError(bus)
        self._devices[bus] = list(records)

    def find_device(self, bus, device_id):
        """Find the first device with the given ID on the given bus.

        Args:
          bus (str): Bus to search.
          device_id (str): Exact device ID.
        Returns:
          DeviceRecord: matching record, or ``None``.
        """
        for record in self.devices(bus):
            if record.device_id == device_id:
                return record
        return None

    def next_free_device_id(self, bus):
        """Get the first device ID on the given bus that is not in use.

        Controllers are searched in increasing order, and within each
        controller, units in increasing order. There is no upper limit on
        the controller number.

        Args:
          bus (str): ``'ide'``, ``'scsi'`` or ``'sata'``.
        Returns:
          str: Device ID such as ``"scsi0:2"``.

        Examples:
          ::

            >>> doc = VMXDocument()
            >>> doc.next_free_device_id('ide')
            'ide0:0'
            >>> for unit in range(7):
            ...     _ = doc.add_device('scsi', DeviceRecord(present=True))
            >>> doc.next_free_device_id('scsi')
            'scsi0:8'
        """
        used = set(record.device_id for record in self.devices(bus))
        reserved = _RESERVED_UNITS.get(bus, ())
        controller = 0
        while True:
            for unit in range(_UNITS_PER_CONTROLLER[bus]):
                if unit in reserved:
                    continue
                candidate = "{0}{1}:{2}".format(bus, controller, unit)
                if candidate not in used:
                    return candidate
            controller += 1

    def add_device(self, bus, record):
        """Assign an ID to the given record and append it to the bus.

        If the record's controller is not yet declared present (SCSI and SATA
        only), a ``<bus><n>.present = "TRUE"`` entry is added as well.

        Args:
          bus (str): ``'ide'``, ``'scsi'`` or ``'sata'``.
          record (DeviceRecord): Record to add. Its :attr:`device_id` is
              overwritten.
        Returns:
          str: The assigned device ID.
        """
        record.device_id = self.next_free_device_id(bus)
        self.devices(bus).append(record)
        if bus in _EXPLICIT_CONTROLLER_BUSES:
            controller_key = "{0}{1}.present".format(bus, record.controller)
            if controller_key not in self:
                logger.verbose("Enabling controller %s%s",
                               bus, record.controller)
                self[controller_key] = vmx_bool(True)
        logger.debug("Added %r", record)
        return record.device_id

    def remove_devices(self, bus, device_id):
        """Remove every record with the given ID from the given bus.

        The relative order of the remaining records is preserved.

        Args:
          bus (str): ``'ide'``, ``'scsi'`` or ``'sata'``.
          device_id (str): Device ID to remove.
        Returns:
          int: Number of records removed.
        """
        records = self.devices(bus)
        survivors = [r for r in records if r.device_id != device_id]
        removed = len(records) - len(survivors)
        self.set_devices(bus, survivors)
        return removed

    def get(self, key, default=None):
        """Get the value of a non-device key, case-insensitively."""
        actual = self._keys.get(key.lower())
        if actual is None:
            return default
        return self._entries[actual]

    def items(self):
        """List the non-device ``(key, value)`` pairs in file order."""
        return list(self._entries.items())

    def __getitem__(self, key):
        """Get the value of a non-device key, case-insensitively."""
        actual = self._keys.get(key.lower())
        if actual is None:
            raise KeyError(key)
        return self._entries[actual]

    def __setitem__(self, key, value):
        """Set a non-device key, keeping the first spelling seen."""
        actual = self._keys.setdefault(key.lower(), key)
        self._entries[actual] = value

    def __delitem__(self, key):
        """Delete a non-device key."""
        actual = self._keys.pop(key.lower())
        del self._entries[actual]

    def __contains__(self, key):
        """Check whether a non-device key is defined."""
        return key.lower() in self._keys

    def __len__(self):
        """Number of non-device keys."""
        return len(self._entries)

    def __eq__(self, other):
        """Documents are equal if their entries and devices are equal."""
        if not isinstance(other, VMXDocument):
            return NotImplemented
        return (self.items() == other.items() and
                all(self.devices(bus) == other.devices(bus)
                    for bus in BUS_TYPES))

    def __ne__(self, other):
        """Inverse of :meth:`__eq__`."""
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result


def _detect_encoding(data):
    """Find the encoding named by the ``.encoding`` key in raw file data."""
    match = _ENCODING_RE.search(data)
    if match and match.group(1).strip():
        return match.group(1).strip().decode('ascii', 'replace')
    return DEFAULT_ENCODING


def _parse_value(raw, line_number, line):
    """Parse the right-hand side of a ``key = value`` line."""
    if raw.startswith('"'):
        match = _QUOTED_RE.match(raw)
        if not match:
            raise VMXParseError("Unterminated quoted value",
                                line_number, line)
        raw = match.group(1)
    return unescape_value(raw)


def unmarshal(data):
    """Parse the contents of a ``.vmx`` file.

    Args:
      data (bytes): Raw file contents. A :class:`str` is also accepted.
    Returns:
      VMXDocument: Parsed document.
    Raises:
      VMXParseError: if the data cannot be decoded, a line is not of the
          form ``key = value``, a quoted value is unterminated, or a boolean
          device attribute has an unrecognized value.

    Examples:
      ::

        >>> doc = unmarshal(b'.encoding = "UTF-8"\\n'
        ...                 b'displayName = "test"\\n'
        ...                 b'ide1:0.present = "TRUE"\\n'
        ...                 b'ide1:0.deviceType = "cdrom-raw"\\n')
        >>> doc['displayname']
        'test'
        >>> doc.ide_devices
        [<DeviceRecord ide1:0 {'present': 'TRUE', 'deviceType': 'cdrom-raw'}>]
    """
    if isinstance(data, bytes):
        encoding = _detect_encoding(data)
        try:
            text = data.decode(encoding)
        except LookupError:
            raise VMXParseError("Unknown text encoding '{0}'"
                                .format(encoding))
        except UnicodeDecodeError as exc:
            raise VMXParseError("Unable to decode file as {0}: {1}"
                                .format(encoding, exc))
    else:
        text = data

    document = VMXDocument()
    records = {}
    for line_number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith('#'):
            continue
        match = _LINE_RE.match(line)
        if not match:
            raise VMXParseError("Expected 'key = value'", line_number, line)
        key, raw = match.groups()
        value = _parse_value(raw, line_number, line)

        device_match = _DEVICE_KEY_RE.match(key)
        if not device_match:
            document[key] = value
            continue

        bus = device_match.group(1).lower()
        device_id = "{0}{1}:{2}".format(bus,
                                        int(device_match.group(2)),
                                        int(device_match.group(3)))
        record = records.get(device_id)
        if record is None:
            record = DeviceRecord(device_id)
            records[device_id] = record
            document.devices(bus).append(record)
        try:
            record.set_attribute(device_match.group(4), value)
        except ValueError as exc:
            raise VMXParseError(str(exc), line_number, line)

    logger.spam("Parsed %d entries and %d devices",
                len(document), len(records))
    return document


def _format_line(key, value):
    """Format one ``key = "value"`` line.

    Raises:
      VMXSerializeError: if the key or value cannot be represented.
    """
    if not _KEY_RE.match(key):
        raise VMXSerializeError("Key '{0}' cannot be written to a VMX file"
                                .format(key))
    if not isinstance(value, str):
        raise VMXSerializeError("Value for key '{0}' must be a string, not {1}"
                                .format(key, type(value).__name__))
    return '{0} = "{1}"'.format(key, escape_value(value))


def marshal(document):
    """Serialize a document to ``.vmx`` file contents.

    The ``.encoding`` key, if any, is written first, followed by the other
    non-device keys in their original order, then the IDE, SCSI and SATA
    device records in list order.

    Args:
      document (VMXDocument): Document to serialize.
    Returns:
      bytes: File contents, encoded per :attr:`VMXDocument.encoding`.
    Raises:
      VMXSerializeError: if a key is malformed, a value is not a string,
          a device record has no valid ID, or the text cannot be encoded.

    Examples:
      ::

        >>> doc = VMXDocument()
        >>> doc['displayName'] = 'My "VM"'
        >>> _ = doc.add_device('sata', DeviceRecord(present=True))
        >>> print(marshal(doc).decode())
        displayName = "My |22VM|22"
        sata0.present = "TRUE"
        sata0:0.present = "TRUE"
        <BLANKLINE>
    """
    lines = []
    encoding_value = document.get('.encoding')
    if encoding_value is not None:
        lines.append(_format_line('.encoding', encoding_value))
    for key, value in document.items():
        if key.lower() == '.encoding':
            continue
        lines.append(_format_line(key, value))

    for bus in BUS_TYPES:
        for record in document.devices(bus):
            parts = _split_device_id(record.device_id)
            if parts is None or parts[0] != bus:
                raise VMXSerializeError(
                    "Device record on {0} bus has invalid ID '{1}'"
                    .format(bus, record.device_id))
            for attribute, value in record.items():
                lines.append(_format_line(
                    "{0}.{1}".format(record.device_id, attribute), value))

    text = "\n".join(lines) + "\n"
    try:
        return text.encode(document.encoding)
    except LookupError:
        raise VMXSerializeError("Unknown text encoding '{0}'"
                                .format(document.encoding))
    except UnicodeEncodeError as exc:
        raise VMXSerializeError("Unable to encode document as {0}: {1}"
                                .format(document.encoding, exc))


if __name__ == "__main__":   # pragma: no cover
    import doctest
    doctest.testmod()
