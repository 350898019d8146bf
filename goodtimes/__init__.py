"""
goodtimes - compilation timing analyzer for Cargo workspaces.

Builds the crate dependency graph of a workspace, attaches per-crate
compile times from cargo's ``--timings`` report and finds the critical
path: the chain of crates that bounds total build wall-time.
"""

__version__ = "0.1.0"
