"""Setup configuration for scan report package."""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_file = Path(__file__).parent / 'README.md'
long_description = readme_file.read_text() if readme_file.exists() else ''

setup(
    name='scan-report',
    version='1.0.0',
    description='Type inference, column statistics and frequency reports for delimited data files',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='Your Team',
    author_email='your.email@company.com',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    python_requires='>=3.8',
    install_requires=[
        'pandas>=2.0.0',
        'numpy>=1.24.0',
        'openpyxl>=3.1.0',
        'pyyaml>=6.0',
        'python-dotenv>=1.0.0',
        'click>=8.1.0',
    ],
    extras_require={
        'dev': [
            'pytest>=7.4.0',
            'pytest-cov>=4.1.0',
            'black>=23.0.0',
            'flake8>=6.0.0',
            'mypy>=1.5.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'scan-report=scan_report.cli:cli',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Scientific/Engineering :: Information Analysis',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
    ],
)
