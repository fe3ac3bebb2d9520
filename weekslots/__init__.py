"""
weekslots - weekly free-slot resolution from openings and appointments.
"""

__version__ = "0.1.0"
