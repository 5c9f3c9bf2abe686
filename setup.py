from setuptools import setup

from aws_config_mod import (
    __title__,
    __description__,
    __url__,
    __version__,
    __author__,
    __license__,
    __copyright__,
)

with open('README.md') as f:
    readme = f.read()

with open('requirements.txt') as f:
    requirements = [
        line for line in f.read().splitlines()
        if line.strip() and not line.lstrip().startswith('#')
    ]

kwargs = dict(
    name=__title__,
    version=__version__,
    description=__description__,
    long_description=readme,
    long_description_content_type='text/markdown',
    author=__author__,
    url=__url__,
    packages=[
        'aws_config_mod'
    ],
    classifiers=[

        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Software Development :: Libraries",
        "Topic :: Utilities",

    ],

    license=__license__,
    platforms="Platform Independent",

    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.12',

    project_urls={
        'Source': __url__,
    }
)

setup(**kwargs)
