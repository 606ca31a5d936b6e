import os
import re

from setuptools import setup


def get_version():
    with open(os.path.join(os.path.dirname(__file__), 'pascommander', '__init__.py'), encoding='utf-8') as f:
        m = re.search(r"^__version__ = '([^']+)'", f.read(), re.MULTILINE)
    return m.group(1)


install_requires = [
    'certifi',
    'colorama',
    'requests>=2.31.0',
    'tabulate',
    'urllib3',
]

if __name__ == '__main__':
    setup(
        name='pascommander',
        version=get_version(),
        description='Command-line and library access to CyberArk PVWA privileged accounts',
        packages=['pascommander', 'pascommander.commands'],
        python_requires='>=3.8',
        install_requires=install_requires,
        extras_require={
            'test': ['pytest'],
        },
        entry_points={
            'console_scripts': [
                'pas-commander=pascommander.__main__:main',
            ],
        },
    )
