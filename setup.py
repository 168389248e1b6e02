from setuptools import setup, find_packages

setup(
    name="ktelex",
    version="0.1.0",
    description="KTelex for Linux/X11 — Telex Vietnamese input method",
    packages=find_packages(exclude=["tests"]),
    python_requires=">=3.8",
    install_requires=[
        "python-xlib",
        "PyQt5",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "ktelex=ktelex.main:main",
        ],
    },
    package_data={
        "ktelex": [
            "resources/*",
        ],
    },
    include_package_data=True,
)
