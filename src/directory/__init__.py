"""
Directory domain logic: distance math, radius filtering, tier ordering and record shaping.
Modules here are pure functions over plain mappings so routers and services can share them.
"""
