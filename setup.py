"""
See COPYRIGHT.md for copyright information.

  install lxml regex isodate PyYAML
  install pytest  (to run tests/unit_tests)
"""
import os

from setuptools import find_packages, setup


def get_version():
    """
    Retrieving version string from git tag using GitHub Actions environment variables.
    Returns 0.0.0 if no tag included.
    """
    github_ref_type = os.getenv('GITHUB_REF_TYPE')
    github_ref_name = os.getenv('GITHUB_REF_NAME')
    return github_ref_name if github_ref_type == 'tag' else '0.0.0'


setup(
    name='amsfsurvey',
    version=get_version(),
    description='AMSF AML/CFT survey questionnaires from XBRL taxonomies and XBRL instance generation',
    python_requires='>=3.9',
    include_package_data=True,
    packages=find_packages('.', exclude=['tests', 'tests.*']),
    install_requires=[
        'isodate',
        'lxml',
        'PyYAML',
        'regex',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
)
