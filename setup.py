import os.path

from setuptools import find_packages, setup

with open(os.path.join(os.path.dirname(__file__), 'README.md')) as f:
    LONG_DESCRIPTION = f.read()
    DESCRIPTION = LONG_DESCRIPTION.splitlines()[0].lstrip('#').strip()

setup(
    name='rackctl',
    version='0.1.0',

    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type='text/markdown',
    keywords=['rackspace', 'cloud', 'servers', 'api', 'client', 'python'],
    license='MIT',
    classifiers = [
        'Intended Audience :: Developers',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.13',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: Implementation :: CPython',
        'Topic :: Software Development :: Libraries',
        'Topic :: System :: Systems Administration',
    ],

    zip_safe=True,
    packages=find_packages(include=['rackctl', 'rackctl.*']),
    include_package_data=True,
    entry_points={
        'console_scripts': [
            'rackctl = rackctl.cli:main',
        ],
    },

    python_requires='>=3.10',
    install_requires=[
        'python-json-logger>=3.1',  # 0.05 MB
        'iso8601',                  # 0.07 MB
        'click',                    # 0.60 MB
        'aiohttp',                  # 7.80 MB
        'aiohttp>=3.9.0; python_version>="3.12"',
        'pyyaml',                   # 0.90 MB
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-asyncio',
            'pytest-mock',
            'aresponses>=3',
        ],
    },
    package_data={"rackctl": ["py.typed"]},
)
