"""PyInstaller entry point for glyphgrid.

PyInstaller needs a concrete .py file, it cannot run `python -m`.

On Windows with --windowed, sys.stdout/stderr are None (no console).
Redirect to devnull so print() calls (e.g. Export) don't crash the app.
"""

import os
import sys

if sys.stdout is None:
    sys.stdout = open(os.devnull, "w")  # noqa: SIM115
if sys.stderr is None:
    sys.stderr = open(os.devnull, "w")  # noqa: SIM115

from glyphgrid.frontend.app import main  # noqa: E402

main()
