#!/usr/bin/env python3
# encoding: utf-8
"""
setup.py

License: 3-clause BSD. (See the COPYRIGHT file)
"""

import os

import setuptools


def filesOf(directory):
    files = []
    for l, d, fs in os.walk(directory):
        if not d:
            for f in fs:
                files.append(os.path.join(l, f))
    return files


setuptools.setup(
    name='bofh',
    version='0.1.0',
    description='Interactive client for the Cerebrum bofhd administration server',
    license='BSD-3-Clause',
    python_requires='>=3.10',
    package_dir={'': 'src'},
    packages=setuptools.find_packages('src', include=['bofh', 'bofh.*']),
    install_requires=[
        'prompt_toolkit>=3.0',
    ],
    extras_require={
        'test': [
            'pytest',
            'hypothesis',
        ],
    },
    entry_points={
        'console_scripts': [
            'bofh = bofh.application.main:main',
        ],
    },
    data_files=[
        ('etc/bofh/examples', filesOf('etc/bofh')),
    ],
)
