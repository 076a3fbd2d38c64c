from setuptools import setup, find_packages

setup(
    name="edid-decoder",
    version="0.1.0",
    description="Decode the 128-byte EDID display identification block",
    author="Garrett Johnson",
    packages=find_packages(include=["edid_decoder"]),
    python_requires=">=3.11",
    install_requires=[
        "pyserial==3.5",
    ],
    extras_require={
        "test": ["pytest"],
    },
    tests_require=['pytest'],
)
