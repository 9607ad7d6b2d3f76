#!/usr/bin/env python


import os.path
import sys

try:
    from setupkit.cli.main import run_setup
except ImportError as err:
    setup_root = os.path.dirname(__file__)
    requirements_path = os.path.join(setup_root, "requirements.txt")
    print(f"Python environment is not completely set up: module `{err.name}` is missing", file=sys.stderr)
    print(f"Please run `{sys.executable} -m pip install -r {requirements_path}` and try again.", file=sys.stderr)
    sys.exit(255)

sys.exit(run_setup())
