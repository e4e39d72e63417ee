"""Named numerical tolerances and limits for the intersection solver.

Parameter-space values are fractions of the [0, 1] curve domain.  Geometric
slacks are relative to the size of the coordinates, so results do not
depend on the units the curves are drawn in.
"""

# Convergence
TOLERANCE = 1e-5                  # both parameter spans must shrink below this
MAX_ITERATIONS = 100              # clip steps per single-root solve

# Stall detection
STALL_RATIO = 0.8                 # step keeping > 80% of the span is a stall
STALL_LIMIT = 10                  # consecutive stalls before giving up

# Multi-root search
SPLIT_RATIO = 0.8                 # bisect when a step keeps > 80% of the span
MAX_DEPTH = 12                    # bisection depth
MAX_SEARCH_STEPS = 2048           # clip steps per search
MAX_INTERSECTIONS = 9             # cubic-cubic root bound (Bezout)
DEDUP_FACTOR = 10.0               # duplicate-root radius, in tolerances

# Numerical slack
CLIP_SLACK = 1e-12                # clip distance slack, relative to coordinate size
CHORD_EPS = 1e-12                 # chord shorter than this share of the curve size is degenerate
