"""Removable disk discovery."""

from .classifier import BusSignals, DiskClassifier


__all__ = ["BusSignals", "DiskClassifier"]
