"""Install the manuscript submission core package.

This installs the ``journal.submission`` package from ``./core``.
"""

from setuptools import setup, find_packages

setup(
    name='journal-submission-core',
    version='0.1.0',
    package_dir={'': 'core'},
    packages=find_packages(where='core'),
    zip_safe=False,
    python_requires='>=3.8',
    install_requires=[
        'flask',
        'werkzeug',
        'python-dateutil',
        'requests',
        'urllib3',
        'retry',
        'pytz',
        'typing_extensions'
    ],
    extras_require={
        'test': ['pytest', 'mimesis']
    },
    include_package_data=True
)
