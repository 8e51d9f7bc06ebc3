"""Services Layer — the read side (QueryService) and write side (MutationPipeline).

Invariants:
    - Services receive the store handle and invalidator by injection, never from globals
    - Services never build HTTP responses; routes translate their results

Design Decisions:
    - Two independent components sharing only the store handle: the read path has
      no writes, the write path has no paginated reads
"""
