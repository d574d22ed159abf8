"""
parlor: rules engines for Tic Tac Toe and Twenty-One played against the computer.
"""

__version__ = "0.1.0"
