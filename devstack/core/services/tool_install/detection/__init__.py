"""
L1 Detection: read-only probes.

These functions READ system state but never WRITE.
"""
