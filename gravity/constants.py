"""Physical constants and engine defaults."""

from decimal import Decimal

# Gravitational constant (SI, m^3 kg^-1 s^-2)
G_DECIMAL = Decimal("6.67384E-11")
G = float(G_DECIMAL)

# Significant digits used for the force divisions, same class as decimal128
DECIMAL_PRECISION = 34

DEFAULT_MAX_DELTA_V = 80.0
DEFAULT_MIN_DELTA_T = 0.00001
DEFAULT_TICK_SECONDS = 30.0

# Ticks between two progress notifications
PROGRESS_PERIOD = 50000

PRECISION_DECIMAL = "decimal"
PRECISION_FLOAT = "float"
PRECISION_MODES = (PRECISION_DECIMAL, PRECISION_FLOAT)

# Duration used to advance positions after each substep:
# "substep" moves by the substep just integrated, "tick" by the whole
# configured tick.
POSITION_STEP_SUBSTEP = "substep"
POSITION_STEP_TICK = "tick"
POSITION_STEPS = (POSITION_STEP_SUBSTEP, POSITION_STEP_TICK)

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400
SECONDS_PER_MONTH = 30 * SECONDS_PER_DAY
SECONDS_PER_YEAR = 365 * SECONDS_PER_DAY
