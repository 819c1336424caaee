"""Syntax trees, lexical scope annotation, string interning and error reports for Pointless."""

__version__ = "0.1.0"