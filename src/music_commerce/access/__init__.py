"""
Access core - ownership decisions and list query normalization.

Pure functions of their inputs: no storage access, no shared state.
"""
