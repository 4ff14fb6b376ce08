"""
Core numerics for protocol state transitions.

Pure, deterministic building blocks with no I/O and no persistent state:
fixed-point math primitives and smoothed estimates built on top of them.
"""
