"""
Interactive shell package: menu loop and input validation.
"""

from .menu import CalibrationShell

__all__ = ['CalibrationShell']
