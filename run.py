"""
Development launcher for the Screen Configurator window.

Runs the GUI straight from a source checkout: ``src`` is put at the front of
``sys.path`` so ``screenconfigurator`` imports without ``pip install -e .``.
Installed copies use the ``screenconfigurator`` console script instead.

Usage:
    $ python run.py
"""
import os
import sys

repo_root: str = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.join(repo_root, 'src'))

# Windows taskbar identity
try:
    import ctypes
    ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID('screenconfigurator.desktop')
except (AttributeError, ImportError):
    pass

from screenconfigurator.main import main

if __name__ == "__main__":
    main()
