DEFAULTS = {
    # Intersect instead of replace when a query vertex is its own child
    "SELF_LOOPS": False,
    # Maximum refinement passes per match (0 = no budget)
    "MAX_PASSES": 0,
}
