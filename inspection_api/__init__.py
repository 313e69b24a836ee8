"""Airplane inspection API: relays inspection photos to Roboflow and aggregates defects."""

__version__ = '1.0.0'
