"""
Intcode Parameter Search

Treats the machine as a black box: writes a (noun, verb) pair into
slots 1 and 2 of a fresh copy of the template program, runs it, and
compares slot 0 against the wanted output.

Candidates are enumerated noun-major (noun outer, verb inner) over
range(bound) x range(bound), so when several pairs produce the target
the lexicographically first one is returned. A candidate whose run
fails (unknown opcode, address outside memory) is discarded; it never
ends the search.
"""

import itertools
import logging
from typing import Optional, Sequence, Tuple

from .config import (
    DEFAULT_SEARCH_BOUND, NOUN_SLOT, VERB_SLOT, OUTPUT_SLOT,
    ANSWER_NOUN_FACTOR,
)
from .machine import run
from .memory import IntcodeError, read, write

log = logging.getLogger(__name__)


def run_with_inputs(program: Sequence[int], noun: int, verb: int) -> int:
    """Run a copy of program with noun/verb substituted; return slot 0.

    The template is left untouched. Machine errors propagate.
    """
    memory = list(program)
    write(memory, NOUN_SLOT, noun)
    write(memory, VERB_SLOT, verb)
    run(memory)
    return read(memory, OUTPUT_SLOT)


def search_for_inputs(output: int, program: Sequence[int],
                      bound: int = DEFAULT_SEARCH_BOUND) -> Optional[Tuple[int, int]]:
    """Find the first (noun, verb) pair whose run leaves output in slot 0.

    Args:
        output: Wanted value of slot 0 after HALT.
        program: Template program, length >= 3. Never mutated.
        bound: Exclusive upper limit for noun and verb.

    Returns:
        (noun, verb), or None when no candidate in range matches.
    """
    if len(program) <= VERB_SLOT:
        raise ValueError(
            f"Program needs at least {VERB_SLOT + 1} cells, got {len(program)}")
    if bound < 0:
        raise ValueError(f"Search bound must be non-negative, got {bound}")

    discarded = 0
    for noun, verb in itertools.product(range(bound), repeat=2):
        try:
            result = run_with_inputs(program, noun, verb)
        except IntcodeError as e:
            discarded += 1
            log.debug("noun=%d verb=%d discarded: %s", noun, verb, e)
            continue
        if result == output:
            log.info("Found noun=%d verb=%d for output %d (%d candidates discarded)",
                     noun, verb, output, discarded)
            return noun, verb

    log.info("No pair in 0..%d produces %d (%d candidates discarded)",
             bound - 1, output, discarded)
    return None


def encode_answer(noun: int, verb: int) -> int:
    """Combine a found pair as 100 * noun + verb."""
    return ANSWER_NOUN_FACTOR * noun + verb
