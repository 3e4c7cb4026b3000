# Numerical constants shared by the NumPy and TF code paths.

POSFUN_PENALTY_WEIGHT = 0.01   # weight on (x - eps)^2 when posfun lifts x above eps
CR_NO_ESTIMATE = -1.0          # Chapman-Robson sentinel when mean relative age is zero
BARANOV_N_ITER = 10            # default Newton-Raphson iterations for the Baranov solver
BARANOV_B_STEP = 1.0           # default fraction of the Newton step taken per iteration
