"""
osutil

Workflow helpers for openSUSE package maintainers: report which of your
maintained packages are outdated according to repology.org.
"""

__version__ = "0.1.0"

from .cli import main

__all__ = ["main"]
