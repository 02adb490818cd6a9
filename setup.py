#!/usr/bin/env python
# -*- coding: utf-8 -*-
import os

from setuptools import setup, find_packages

here = os.path.abspath(os.path.dirname(__file__))

# To update the package version number, edit dhde/__version__.py
version = {}
with open(os.path.join(here, 'dhde', '__version__.py')) as f:
    exec(f.read(), version)

with open(os.path.join(here, 'README.rst')) as readme_file:
    readme = readme_file.read()

with open(os.path.join(here, 'requirements.txt')) as requirements_file:
    requirements = [line.strip('\n') for line in requirements_file.readlines()
                    if line.strip()]

setup(
    name='dhde',
    version=version['__version__'],
    description='Construction of the matting Laplacian, the sparse pixel '
                'affinity operator used to propagate sparse defocus '
                'estimates over a colour image.',
    long_description=readme + '\n\n',
    author='DHDE developers',
    url='https://github.com/zzangjinsun/DHDE_CVPR17',
    packages=find_packages(exclude=['*tests*']),
    include_package_data=True,
    license='Apache Software License 2.0',
    zip_safe=False,
    keywords='dhde',
    classifiers=[
        'Development Status :: 2 - Pre-Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: Apache Software License',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
    ],
    test_suite='tests',
    install_requires=requirements,
    extras_require={
        'test': ['pytest', 'pytest-cov', 'pycodestyle'],
        'dev':  ['prospector[with_pyroma]', 'yapf', 'isort'],
    }
)
