"""Services — async orchestration between repositories and the pure core.

Invariants:
    - Services fetch through repository protocols, then delegate to core/
    - No HTTP concerns (status codes, responses) in services
"""
