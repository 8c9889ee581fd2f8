#!/usr/bin/env python
#
# setup.py - installer script for CVT package
#
# Copyright (c) 2026 the CVT project developers.
# See the COPYRIGHT.txt file at the top-level directory of this distribution.
#
# This file is part of the Common VMX Tool (CVT) project.
# It is subject to the license terms in the LICENSE.txt file found in the
# top-level directory of this distribution. No part of CVT, including this
# file, may be copied, modified, propagated, or distributed except according
# to the terms contained in the LICENSE.txt file.

"""CVT - the Common VMX Tool."""

import os.path

from setuptools import setup

README_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                           'README.rst')

install_requires = [
    'colorlog>=2.5.0',
    'verboselogs>=1.6',
]

extras_require = {
    'tab-completion': ['argcomplete>=1.3.0'],
    'test': ['pytest'],
}

with open(README_FILE) as readme:
    long_description = readme.read()

setup(
    # Package description
    name='cvt',
    version='1.0.0',
    author='the CVT project developers',
    description='Common VMX Tool',
    long_description=long_description,
    license='MIT',

    # Requirements
    python_requires='>=3.6',
    install_requires=install_requires,
    extras_require=extras_require,

    # Package contents
    packages=[
        'CVT',
        'CVT.commands',
        'CVT.commands.tests',
        'CVT.helpers',
        'CVT.helpers.tests',
        'CVT.tests',
        'CVT.ui',
        'CVT.ui.tests',
        'CVT.vm_description',
        'CVT.vm_description.tests',
        'CVT.vm_description.vmx',
        'CVT.vm_description.vmx.tests',
    ],
    package_data={
        'CVT.tests': ['*.vmx'],
    },
    entry_points={
        'console_scripts': [
            'cvt = CVT.ui.cli:main',
        ],
    },
    include_package_data=True,

    # PyPI search categories
    classifiers=[
        # Project status
        'Development Status :: 4 - Beta',
        # Target audience
        'Intended Audience :: Developers',
        'Intended Audience :: Information Technology',
        'Intended Audience :: System Administrators',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Topic :: System :: Emulators',
        'Topic :: System :: Systems Administration',
        # Licensing
        'License :: OSI Approved :: MIT License',
        # Environment
        'Environment :: Console',
        'Operating System :: MacOS :: MacOS X',
        'Operating System :: POSIX :: Linux',
        # Supported versions
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
    ],
    keywords='virtualization vmx vmware workstation fusion cdrom',
)
