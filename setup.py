from setuptools import setup, find_packages  # Always prefer setuptools over distutils
from codecs import open  # To use a consistent encoding
from os import path

__author__ = 'Alex Maskovyak'
__pkg_name__ = 'searchrequest'


here = path.abspath(path.dirname(__file__))

# Get the long description from the relevant file
with open(path.join(here, 'DESCRIPTION.rst'), encoding='utf-8') as f:
    long_description = f.read()

with open(path.join(here, 'searchrequest', 'VERSION'), encoding='utf-8') as f:
    version = f.read().strip()

# run-time dependencies, listed here so that they can be shared with test requirements
install_requirements = [
    'requests>=2.3.0'
]

test_requirements = [
    'pytest',
    'mock',
    'hypothesis',
] + install_requirements


# setuptool packaging info
setup(
    name=__pkg_name__,
    version=version,
    description='Gzip-compressing request helpers for search service clients.',
    long_description=long_description,

    author=__author__,
    author_email='alex.maskovyak@vertical-knowledge.com',

    license='GPLv2',

    # See https://pypi.python.org/pypi?%3Aaction=list_classifiers
    classifiers=[
        #   2 - Pre-Alpha, 3 - Alpha, 4 - Beta, 5 - Production/Stable
        'Development Status :: 4 - Beta',

        'Intended Audience :: Developers',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Topic :: Internet :: WWW/HTTP',

        'License :: OSI Approved :: GNU General Public License v2 (GPLv2)',

        'Programming Language :: Python :: 3',
    ],

    keywords='client rest http search gzip compression request body',

    packages=find_packages(exclude=['contrib', 'docs', 'tests*']),
    python_requires='>=3.6',

    install_requires=install_requirements,
    extras_require={
        'test': test_requirements,
    },

    package_data={
        'searchrequest': ['VERSION'],
    },
)
