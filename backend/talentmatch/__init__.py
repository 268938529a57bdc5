"""Talent Match - candidate/job matching core and API."""

__version__ = "0.1.0"
