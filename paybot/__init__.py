"""Paybot: turns chat payment commands into signable transaction requests."""

__version__ = "0.1.0"
