"""OMI / Vapi voice bridge service."""

__version__ = "0.1.0"
