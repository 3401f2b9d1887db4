"""
Intcode Toolkit — Machine / Search Configuration
=================================================

Constants shared by the decoder, the stepper, the parameter search and
the CLI. CLI flags override the search bound and the noun/verb inputs
per invocation; nothing here is mutated at runtime.
"""

from pathlib import Path

# =============================================================================
#  OPCODES
# =============================================================================
OP_ADD = 1
OP_MUL = 2
OP_HALT = 99

# Cells occupied by each instruction, opcode included
ARITH_WIDTH = 4           # [opcode, srcA, srcB, dest]
HALT_WIDTH = 1            # [opcode]


# =============================================================================
#  PARAMETER SEARCH
# =============================================================================
NOUN_SLOT = 1
VERB_SLOT = 2
OUTPUT_SLOT = 0

# Exclusive upper bound for noun and verb: candidates are 0..98
DEFAULT_SEARCH_BOUND = 99

# "1202 program alarm" state: noun 12, verb 2
ALARM_NOUN = 12
ALARM_VERB = 2

# Answer encoding for a found pair: 100 * noun + verb
ANSWER_NOUN_FACTOR = 100


# =============================================================================
#  LOGGING
# =============================================================================
LOG_DIR = Path("logs")
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
FILE_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
