"""Version information for Cosmoscale."""

__version__ = "1.0.0"
__version_display__ = f"Cosmoscale V{__version__}"
