"""
Round-robin league season engine: fixtures, match simulation, standings and
champion determination over immutable season snapshots.
"""

__version__ = "0.1.0"
