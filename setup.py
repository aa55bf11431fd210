from setuptools import setup, find_packages

from txec2 import __version__

long_description = """
A small Twisted client for Amazon EC2's Query API.  Requests are signed with
AWS Signature Version 2 and posted to the regional EC2 endpoint; the XML
response comes back as plain Python dicts and lists.
"""


setup(
    name="txEC2",
    version=__version__.public(),
    description="Twisted client for raw, signed EC2 Query API calls",
    author="txEC2 Developers",
    license="MIT",
    packages=find_packages(include=["txec2", "txec2.*"]),
    long_description=long_description,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Framework :: Twisted",
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Internet :: WWW/HTTP",
        "License :: OSI Approved :: MIT License",
       ],
    python_requires=">=3.8",
    install_requires=[
        "attrs>=19.2.0", "python-dateutil", "twisted[tls]>=19.7.0",
        "incremental", "pyrsistent", "zope.interface",
    ],
    extras_require={
        "dev": ["treq"],
        "test": ["treq"],
    },
    entry_points={
        "console_scripts": [
            "txec2-send = txec2.entry_point:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
    )
