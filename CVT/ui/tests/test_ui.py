#!/usr/bin/env python
#
# test_ui.py - Unit test cases for the generic UI class
#
# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""Unit test cases for the CVT.ui.UI class."""

from CVT.tests import CVTTestCase
from CVT.ui import UI


class TestUI(CVTTestCase):
    """Test cases for the stub UI used by API callers and tests."""

    def test_defaults(self):
        """A plain UI is unforced, 80 columns wide, and agrees by default."""
        ui = UI()
        self.assertFalse(ui.force)
        self.assertEqual(80, ui.terminal_width)
        self.assertTrue(ui.confirm("Proceed?"))
        ui.confirm_or_die("Proceed?")

    def test_decline(self):
        """If the default response is 'no', confirm_or_die exits."""
        ui = UI()
        ui.default_confirm_response = False
        self.assertFalse(ui.confirm("Proceed?"))
        with self.assertRaises(SystemExit) as catcher:
            ui.confirm_or_die("Proceed?")
        self.assertEqual("Aborting.", catcher.exception.code)

    def test_force(self):
        """A forced UI agrees to everything, and says so."""
        ui = UI(force=True)
        ui.default_confirm_response = False
        self.assertTrue(ui.confirm("Proceed?"))
        self.assertLogged(**self.AUTO_AGREE)

    def test_fill_usage(self):
        """Usage strings are simply prefixed with the subcommand."""
        self.assertEqual("list-cddvds VMX\nlist-cddvds --help",
                         UI().fill_usage("list-cddvds", ["VMX", "--help"]))

    def test_fill_examples(self):
        """Only real user interfaces format examples."""
        self.assertRaises(NotImplementedError,
                          UI().fill_examples, [("List.", "cvt list-cddvds")])
