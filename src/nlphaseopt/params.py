# Swing phases
DEFAULT_LIFT_HEIGHT = 0.03

# Phase lookup tolerance on the global time axis (seconds)
TIME_EPS = 1e-10

MAX_EE_COUNT = 6

# Phase duration bounds used when none are given
DEFAULT_MIN_PHASE_DURATION = 0.1
DEFAULT_MAX_PHASE_DURATION = 1.0

# Ipopt
MAX_CPU_TIME = 60.0
MAX_ITER = 1000
TOL = 1e-4
PRINT_LEVEL = 3
