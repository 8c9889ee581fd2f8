#!/usr/bin/env python
#
# cli.py - CLI handling for the Common VMX Tool (CVT)
#
# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.
#
# PYTHON_ARGCOMPLETE_OK

"""CLI entry point for the Common VMX Tool (CVT).

**Classes**

.. autosummary::
  :nosignatures:

  CLI

**Functions**

.. autosummary::
  :nosignatures:

  main
"""

import argparse
import logging
import os
import re
import shutil
import sys
import textwrap

from CVT import __version_long__
from CVT.data_validation import InvalidInputError
from CVT.commands import command_classes
from CVT.logging_ import CVTFormatter
from CVT.vmx_file import VMXParseError, VMXSerializeError
from .ui import UI

logger = logging.getLogger(__name__)


class CLI(UI):
    """Command-line user interface for CVT.

    .. autosummary::
      :nosignatures:

      adjust_verbosity
      confirm
      create_parser
      create_subparsers
      fill_examples
      fill_usage
      main
      parse_args
      run
      set_verbosity
      terminal_width
    """

    def __init__(self, terminal_width=None):
        """Create CLI handler instance.

        Args:
          terminal_width (int): (optional) Set the terminal width for this
              CLI, independent of the actual terminal in use.
        """
        super(CLI, self).__init__(force=True)
        self.input = input
        self.handler = None
        self.master_logger = None
        self._terminal_width = terminal_width
        self.wrapper = textwrap.TextWrapper(width=self.terminal_width - 1)

        self.create_parser()
        self.create_subparsers()
        try:
            # Enable argument completion, if argcomplete is installed
            import argcomplete
            argcomplete.autocomplete(self.parser)
        except ImportError:
            pass

    @property
    def terminal_width(self):
        """The width of the terminal in columns."""
        if self._terminal_width is None:
            try:
                self._terminal_width = shutil.get_terminal_size().columns
            except ValueError:
                # sometimes seen in unit tests:
                # ValueError: underlying buffer has been detached
                self._terminal_width = 80
            if self._terminal_width <= 0:
                self._terminal_width = 80
        return self._terminal_width

    def fill_usage(self, subcommand, usage_list):
        """Pretty-print a list of usage strings for a CVT subcommand.

        Automatically prepends a ``cvt subcommand --help`` usage string
        to the provided list.

        Args:
          subcommand (str): Subcommand name/keyword
          usage_list (list): List of usage strings for this subcommand.
        Returns:
          string: All usage strings, each appropriately wrapped to the
          :func:`terminal_width` value.

        Examples:
          ::

            >>> print(CLI(50).fill_usage('attach-cddvd',
            ...       ["VMX -b {ide,scsi,sata} [-i IMAGE]"]))
            <BLANKLINE>
              cvt attach-cddvd --help
              cvt <opts> attach-cddvd VMX -b {ide,scsi,sata}
                                      [-i IMAGE]
        """
        # Automatically add a line for --help to the usage
        output_lines = ["\n  cvt "+subcommand+" --help"]
        # Prefix for all other usage lines:
        prefix = "  cvt <opts> {0}".format(subcommand)
        # Wrap whole argument groups rather than individual words, so that
        # "[-i IMAGE]" is never split across two lines.
        splitter = re.compile(r"""
          \(.*?\)+   |  # Params inside (possibly nested) parens
          \[.*?\]+   |  # Params inside (possibly nested) brackets
          -\S+\s+\S+ |  # Dashed arg followed by metavar
          \S+           # Positional arg
        """, re.VERBOSE)
        width = self.terminal_width
        for line in usage_list:
            usage_groups = re.findall(splitter, line)

            # Align wrapped params with the end of the subcommand name,
            # unless the terminal is too narrow for that.
            max_group_len = max([len(s) for s in usage_groups])
            if len(prefix) + max_group_len >= width:
                indent_line = "     "
            else:
                indent_line = " "*len(prefix)

            wrapped_line = prefix
            for group in usage_groups:
                if len(wrapped_line) + len(group) >= width:
                    # time to save this line and start a new one
                    output_lines.append(wrapped_line)
                    wrapped_line = indent_line
                wrapped_line += " " + group
            output_lines.append(wrapped_line)
        return "\n".join(output_lines)

    def fill_examples(self, example_list):
        r"""Pretty-print a set of usage examples.

        Args:
          example_list (list): List of (description, CLI example) tuples.

        Returns:
          str: Concatenation of examples, each wrapped appropriately to the
          :func:`terminal_width` value. CLI examples will be wrapped with
          backslashes and a hanging indent.

        Examples:
          ::

            >>> print(CLI(60).fill_examples([
            ...  ("Attach a SATA CD/DVD drive backed by an ISO image, then"
            ...   " print the new drive's device ID.",
            ...   'cvt attach-cddvd myvm.vmx -b sata -i /isos/install.iso'),
            ... ]))
            Examples:
              Attach a SATA CD/DVD drive backed by an ISO image, then
              print the new drive's device ID.
            <BLANKLINE>
                cvt attach-cddvd myvm.vmx -b sata \
                    -i /isos/install.iso
        """
        output_lines = ["Examples:"]
        # Just as in fill_usage, the default textwrap behavior
        # results in less-than-ideal formatting for CLI examples.
        splitter = re.compile(r"""
          -\S+[ =]\S+   |  # Dashed arg followed by simple value
          -\S+[ =]".*?" |  # Dashed arg followed by quoted value
          \S+              # Positional arg
        """, re.VERBOSE)
        width = self.terminal_width
        self.wrapper.width = width - 1
        self.wrapper.initial_indent = '  '
        self.wrapper.subsequent_indent = '  '
        self.wrapper.break_on_hyphens = False
        for (desc, example) in example_list:
            if len(output_lines) > 1:
                output_lines.append("")
            output_lines.extend(self.wrapper.wrap(desc))
            output_lines.append("")
            wrapped_line = "   "
            for param in re.findall(splitter, example):
                if len(wrapped_line) + len(param) >= (width - 4):
                    wrapped_line += " \\"
                    output_lines.append(wrapped_line)
                    wrapped_line = "       "
                wrapped_line += " " + param
            output_lines.append(wrapped_line)
        return "\n".join(output_lines)

    def adjust_verbosity(self, delta):
        """Set the logging verbosity relative to the CVT default.

        Wrapper for :meth:`set_verbosity`, to be used when you have
        a delta (number of steps to offset more or less verbose)
        rather than an actual logging level in mind.

        Args:
          delta (int): Shift in verbosity level. 0 = default verbosity;
            positive implies more verbose; negative implies less verbose.
        """
        verbosity_levels = [
            logging.CRITICAL, logging.ERROR, logging.WARNING,  # quieter
            logging.NOTICE,                  # default
            logging.INFO, logging.VERBOSE,   # more verbose
            logging.DEBUG, logging.SPAM,     # really noisy
        ]
        verbosity = verbosity_levels.index(logging.NOTICE) + delta
        if verbosity < 0:
            verbosity = 0
        elif verbosity >= len(verbosity_levels):
            verbosity = len(verbosity_levels) - 1
        level = verbosity_levels[verbosity]
        self.set_verbosity(level)

    def set_verbosity(self, level):
        """Enable logging and/or change the logging verbosity level.

        Will create a :class:`~CVT.logging_.CVTFormatter` and use it for
        colorized, appropriately verbose log formatting.

        Args:
          level (int): Logging level as defined in :mod:`logging`.
        """
        if not self.handler:
            self.handler = logging.StreamHandler()
        self.handler.setLevel(level)
        self.handler.setFormatter(CVTFormatter(level))
        if not self.master_logger:
            self.master_logger = logging.getLogger('CVT')
            self.master_logger.addHandler(self.handler)
        self.master_logger.setLevel(level)
        logger.debug("Verbosity level is now %s",
                     logging.getLevelName(level))

    def run(self, argv):
        """Parse the given CLI args then run.

        Calls :func:`parse_args` followed by :func:`main`.

        Args:
          argv (list): The CLI argv value (not including argv[0])
        Returns:
          int: Return code from :func:`main`
        """
        args = self.parse_args(argv)
        return self.main(args)

    def confirm(self, prompt):
        """Prompt user to confirm the requested operation.

        Auto-accepts if :attr:`force` is set to ``True``.

        Args:
          prompt (str): Message to prompt the user with
        Returns:
          bool: ``True`` (user accepts) or ``False`` (user declines)
        """
        if self.force:
            logger.warning("Automatically agreeing to '%s'", prompt)
            return True

        # Wrap prompt to screen
        prompt_w = []
        self.wrapper.width = self.terminal_width - 1
        self.wrapper.initial_indent = ''
        self.wrapper.subsequent_indent = ''
        self.wrapper.break_on_hyphens = False
        for line in prompt.splitlines():
            prompt_w.extend(self.wrapper.wrap(line))
        prompt = "\n".join(prompt_w)

        while True:
            ans = self.input("{0} [y] ".format(prompt)).strip()
            if not ans or ans == 'y' or ans == 'Y':
                return True
            elif ans == 'n' or ans == 'N':
                return False
            else:
                print("Please enter 'y' or 'n'")

    def create_parser(self):
        """Create :attr:`parser` object for global ``cvt`` command.

        Includes a number of globally applicable CLI options.
        """
        # Argparse checks the environment variable COLUMNS to control
        # its line-wrapping
        os.environ['COLUMNS'] = str(self.terminal_width)
        self.wrapper.width = self.terminal_width - 1
        self.wrapper.initial_indent = ''
        self.wrapper.subsequent_indent = ''
        parser = argparse.ArgumentParser(
            prog="cvt",
            usage="""
  cvt --help
  cvt --version
  cvt <command> --help
  cvt <options> <command> <command-options>""",
            description=(__version_long__ + "\n" + self.wrapper.fill(
                "A tool for managing the CD/DVD drives of VMware virtual "
                "machines by editing their .vmx configuration files.")),
            epilog=self.wrapper.fill(
                "Set CVT_VMRUN_PATH to the location of VMware's vmrun tool "
                "if it is not on your $PATH, and CVT_VMRUN_HOST_TYPE to "
                "pass a host type (ws, fusion, player) to it."),
            formatter_class=argparse.RawDescriptionHelpFormatter)

        parser.add_argument('-V', '--version', action='version',
                            version=__version_long__)
        parser.add_argument('-f', '--force', dest='_force',
                            action='store_true',
                            help="""Perform requested actions without """
                            """prompting for confirmation""")

        debug_group = parser.add_mutually_exclusive_group()
        debug_group.add_argument(
            '-q', '--quiet', dest='_quietude', action='count', default=0,
            help="Decrease verbosity of the program (repeatable)")
        debug_group.add_argument(
            '-v', '--verbose', dest='_verbosity', action='count', default=0,
            help="Increase verbosity of the program (repeatable)")

        self.parser = parser

        # Subcommand definitions
        self.subparsers = parser.add_subparsers(prog="cvt",
                                                dest='_subcommand',
                                                metavar="<command>",
                                                title="commands")

        self.subparser_lookup = {}

    def create_subparsers(self):
        """Populate the CLI sub-parsers for all known commands.

        Creates an instance of each :class:`~CVT.commands.Command` subclass in
        :data:`CVT.commands.command_classes`, then calls
        :func:`~CVT.commands.Command.create_subparser` for each.
        """
        for klass in command_classes:
            instance = klass(self)
            # the subparser stores a reference to the instance (args.instance)
            # so we don't need to persist it here...
            instance.create_subparser()

    def add_subparser(self, title, aliases=None, **kwargs):
        """Create a subparser for a command.

        Args:
          title (str): Canonical keyword for this subparser
          aliases (list): Aliases for ``title``.
          kwargs (dict): Passed through to :meth:`add_parser`

        Returns:
          object: Subparser object
        """
        if aliases:
            kwargs['aliases'] = aliases
        if 'epilog' in kwargs:
            kwargs.setdefault('formatter_class',
                              argparse.RawDescriptionHelpFormatter)

        parser = self.subparsers.add_parser(title, **kwargs)
        self.subparser_lookup[title] = parser
        for alias in aliases or []:
            self.subparser_lookup[alias] = parser
        return parser

    def parse_args(self, argv):
        """Parse the given CLI arguments into a namespace object.

        Args:
          argv (list): List of CLI arguments, not including argv0
        Returns:
          argparse.Namespace: Parser namespace object
        """
        # Parse the user input
        args = self.parser.parse_args(argv)

        # If being run non-interactively, treat as if --force is set, in order
        # to avoid hanging while trying to read input that will never come.
        if not (sys.stdin.isatty() and sys.stdout.isatty()):
            args._force = True  # pylint: disable=protected-access

        return args

    @staticmethod
    def args_to_dict(args):
        """Convert args to a dict and perform any needed cleanup.

        Args:
          args (argparse.Namespace): Namespace from :meth:`parse_args`.
        Returns:
          dict: Dictionary of arg to value
        """
        arg_dict = vars(args)
        del arg_dict["_verbosity"]
        del arg_dict["_quietude"]
        del arg_dict["_force"]
        del arg_dict["_subcommand"]
        return arg_dict

    @staticmethod
    def set_instance_attributes(arg_dict):
        """Set attributes of the :attr:`instance` based on the given arg_dict.

        Args:
          arg_dict (dict): Dictionary of (attribute, value).
        Raises:
          InvalidInputError: if attributes are not validly set.
        """
        # Set mandatory (CAPITALIZED) args first, then optional args
        for (arg, value) in arg_dict.items():
            if arg[0].isupper() and value is not None:
                setattr(arg_dict["instance"], arg.lower(), value)
        for (arg, value) in arg_dict.items():
            if arg == "instance":
                continue
            if not arg[0].isupper() and value is not None:
                setattr(arg_dict["instance"], arg, value)

    def main(self, args):
        """Main worker function for CVT when invoked from the CLI.

        * Calls :meth:`adjust_verbosity` with the appropriate verbosity level
          derived from the args.
        * Looks up the appropriate :class:`~CVT.commands.Command`
          instance corresponding to the subcommand that was invoked.
        * Converts :attr:`args` to a dict and calls
          :func:`set_instance_attributes` to pass these args to the instance.
        * Calls :func:`~CVT.commands.Command.run` followed by
          :func:`~CVT.commands.Command.finished`.
        * Catches various exceptions and handles them appropriately.

        Args:
          args (argparse.Namespace): Parser namespace object returned from
              :func:`parse_args`.

        Returns:
          int: Exit code for the CVT executable.

           * 0 on successful completion
           * 1 on runtime error, including a malformed VMX file
           * 2 on input error (parser error,
             :class:`~CVT.data_validation.InvalidInputError`, etc.)
           * the ``errno`` of any :class:`EnvironmentError`, such as
             :data:`errno.EBUSY` if the VM is powered on.
        """
        # pylint: disable=protected-access
        self.force = args._force

        # Verbosity level adjusted by -v and -q options
        self.adjust_verbosity(args._verbosity - args._quietude)

        if not args._subcommand:
            self.parser.error("too few arguments")

        subp = self.subparser_lookup[args._subcommand]

        # Call the appropriate command and handle any resulting errors
        arg_dict = self.args_to_dict(args)
        try:
            self.set_instance_attributes(arg_dict)
            args.instance.run()
            args.instance.finished()
        except InvalidInputError as exc:
            subp.error(exc)
        except (VMXParseError, VMXSerializeError) as exc:
            sys.exit("Unable to process {0}:\n{1}"
                     .format(args.instance.vmx, exc))
        except NotImplementedError as exc:
            sys.exit("Missing functionality:\n{0}\n"
                     "Please contact the CVT development team."
                     .format(exc.args[0]))
        except EnvironmentError as exc:
            # EnvironmentError may have some of (errno, strerror, filename).
            if exc.errno is not None:
                if exc.filename is not None:
                    # implicitly we also have e.strerror
                    print("{0}: {1}".format(exc.filename, exc.strerror))
                else:
                    print(exc)
                sys.exit(exc.errno)
            else:
                print(exc.args[0])
                sys.exit(1)
        except (KeyboardInterrupt, EOFError):
            sys.exit("\nAborted by user.")
        finally:
            args.instance.destroy()
            if self.master_logger:
                self.master_logger.removeHandler(self.handler)
                self.master_logger = None
                self.handler.close()
                self.handler = None
        return 0


def main():
    """Launch CVT from the CLI."""
    CLI().run(sys.argv[1:])


if __name__ == "__main__":   # pragma: no cover
    main()
