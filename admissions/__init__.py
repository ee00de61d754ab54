"""Admissions intake service: applications, supporting documents and storage URLs."""

__version__ = "0.1.0"
