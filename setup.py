"""
Setup configuration for the pymbit library.

Pure Python; the only runtime dependencies are pyserial and numpy.
It can be installed via:
    - pip install .
    - pip install -e .[dev]  (for development)
"""

from setuptools import setup, find_packages

package_name = 'pymbit'

setup(
    name=package_name,
    version='1.0.0',
    packages=find_packages(exclude=['test', 'tests']),

    install_requires=[
        'setuptools',
        'pyserial>=3.5',
        'numpy',
    ],

    extras_require={
        'dev': [
            'pytest>=7.0',
            'pytest-cov',
            'pytest-timeout',
        ],
    },

    zip_safe=True,

    description='Python library for the micro:bit UART bridge firmware (line-based protocol)',
    long_description=open('README.md').read() if __import__('os').path.exists('README.md') else '',
    long_description_content_type='text/markdown',
    license='MIT',

    tests_require=['pytest'],

    # CLI tools
    entry_points={
        'console_scripts': [
            'pymbit-monitor = pymbit.tools.monitor:run_monitor_cli',
        ],
    },

    python_requires='>=3.10',

    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Education',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Education',
        'Topic :: System :: Hardware',
    ],
)
