# Contradiction Detector Meta-Harness

"""
Core invariant: the harness passes only if the detector exits 0 for every
consistent fixture and 1 for every contradictory one, in every mode that
was scheduled.

The detector is a black box reached through its command line and exit code.
"""

__version__ = "0.1.0"
