"""motoflash - scripted firmware flashing for Motorola devices.

This package interprets servicefile.xml / flashfile.xml flashing documents
and runs each step through the external mfastboot utility, verifying image
digests before use.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
