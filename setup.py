import os

from setuptools import setup, find_packages

__version__ = "1.0"

tests_require = ['pytest', 'mypy', 'pycodestyle', 'types-setuptools']

extras_require = {
    'test': tests_require,
}


def read(fname):
    return open(os.path.join(os.path.dirname(__file__), fname)).read()


setup(
    name='python-s7marshal',
    version=__version__,
    description='Conversion between Siemens S7 PLC memory buffers and Python values',
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={'s7marshal': ['py.typed']},
    license='MIT',
    long_description=read('README.rst'),
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Topic :: System :: Hardware",
        "Intended Audience :: Developers",
        "Intended Audience :: Manufacturing",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires='>=3.8',
    extras_require=extras_require,
    tests_require=tests_require,
    test_suite="tests",
)
