#!/usr/bin/env python3

from setuptools import setup

setup(
    name="siteprofile",
    python_requires=">= 3.9",
    install_requires=[
        'markdown', 'pygments',
        'toml', 'ruamel.yaml',
        'jinja2',
        'python_dateutil', 'python_slugify', 'pytz'],

    # http://setuptools.readthedocs.io/en/latest/setuptools.html#declaring-extras-optional-features-with-their-own-dependencies
    extras_require={
        'serve': ['livereload'],
        'colors': ['coloredlogs'],
        'test': ['pytest', 'livereload'],
    },
    version="1.0",
    description="Build environment configuration for a static site",
    author="Enrico Zini",
    author_email="enrico@enricozini.org",
    license="http://www.gnu.org/licenses/gpl-3.0.html",
    packages=["siteprofile", "siteprofile.cmd", "siteprofile.utils"],
    package_data={"siteprofile": ["templates/*"]},
    scripts=['sprofile']
)
