#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""The setup script."""

from setuptools import setup, find_packages

with open('README.rst') as readme_file:
    readme = readme_file.read()

requirements = [
    'colorful',
    'Pygments',
]

test_requirements = [
    'pytest',
]

setup(
    name='moprint',
    version='0.1.0',
    description="Wadler-style document layout engine with a Modelica code formatter",
    long_description=readme,
    author="moprint contributors",
    packages=find_packages(include=['moprint', 'moprint.*']),
    include_package_data=True,
    install_requires=requirements,
    extras_require={
        'test': test_requirements,
    },
    python_requires='>=3.6',
    license="MIT license",
    zip_safe=False,
    keywords='moprint prettier modelica formatter',
    classifiers=[
        'Development Status :: 2 - Pre-Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
    ],
    test_suite='tests',
    tests_require=test_requirements,
)
