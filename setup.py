# Copyright (c) 2019 Horizon Robotics. All Rights Reserved.

from setuptools import setup, find_packages

setup(
    name='segtree',
    version='0.0.1',
    install_requires=['gin-config', 'numpy >= 1.13.3', 'absl-py'],
    extras_require={'test': ['pytest']},
    package_dir={'': 'python'},
    packages=find_packages('python'),
)
