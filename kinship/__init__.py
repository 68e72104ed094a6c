"""Kinship registry - person records linked to families and named relatives."""

__version__ = "0.1.0"
