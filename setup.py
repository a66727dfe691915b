"""Setup for MyTrainer.

Install for development:
    pip install -e .[test]

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

import sys

from setuptools import setup, find_packages

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,
    "plist": {
        "CFBundleName": "MyTrainer",
        "CFBundleDisplayName": "MyTrainer",
        "CFBundleIdentifier": "com.mytrainer.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
    },
}

# py2app options only apply when building the bundle
app_kwargs = {}
if "py2app" in sys.argv:
    app_kwargs = dict(app=APP, data_files=DATA_FILES, options={"py2app": OPTIONS})

setup(
    name="MyTrainer",
    version="0.1.0",
    packages=find_packages(exclude=["tests"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6>=6.6",
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "gui_scripts": ["mytrainer = mytrainer.__main__:main"],
    },
    **app_kwargs,
)
