from setuptools import setup, find_packages
import re

# Read version from esttax/__init__.py
with open('esttax/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='est-tax',
    version=version,
    packages=find_packages(include=['esttax', 'esttax.*']),
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'est-tax=esttax.cli.__main__:main',
        ],
    },
    author='Personal',
    description='Federal estimated quarterly tax calculator for the self-employed.',
    python_requires='>=3.10',
)
