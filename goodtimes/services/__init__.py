"""
Services for goodtimes.

Graph construction, timing reconciliation, critical path computation and
the cargo collaborators that feed them.
"""
