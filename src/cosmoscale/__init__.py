"""
Cosmoscale - an interactive "powers of ten" scale journey.

Cosmoscale flies a single camera along a logarithmic distance axis past
reference objects ranging from a strand of DNA to the observable universe,
labelling each with its size in the best-fitting physical unit.
"""

from cosmoscale.version import __version__, __version_display__

__all__ = ["__version__", "__version_display__"]
