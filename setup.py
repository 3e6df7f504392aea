import os
from setuptools import setup
VERSION = open(os.path.join(os.path.dirname(__file__),  'version')).read().strip()
setup(
    name='commit-msg',
    version=VERSION,
    license='BSD3',
    packages=['commitmsg'],
    data_files=[('.', ['version'])],
    install_requires=[
        'ConfigArgParse',
        'PyYAML',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['commit-msg = commitmsg.__main__:run'],
    },
)
