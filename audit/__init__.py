"""
Audit trail: immutable change records and their resolution into a
human-readable history (who did what, to whom, on which object).
"""
