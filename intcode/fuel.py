"""
Rocket-equation fuel counter.

Fuel for a module is mass // 3 - 2, floored at zero. The full
requirement also fuels the fuel itself: apply the same formula to the
fuel just added and keep going until it reaches zero.

  mass 1969 -> 654 + 216 + 70 + 21 + 5 = 966
"""

import itertools
from pathlib import Path
from typing import Iterable, Iterator, List, Union


def naive_fuel_required_for_module(module_mass: int) -> int:
    partial_result = module_mass // 3
    return partial_result - 2 if partial_result >= 2 else 0


def naive_total_fuel_required_for_modules(masses: Iterable[int]) -> int:
    return sum(naive_fuel_required_for_module(m) for m in masses)


def _fuel_chain(mass: int) -> Iterator[int]:
    fuel = naive_fuel_required_for_module(mass)
    while True:
        yield fuel
        fuel = naive_fuel_required_for_module(fuel)


def fuel_required_for_module(module_mass: int) -> int:
    """Fuel for a module including the fuel needed to carry that fuel."""
    return sum(itertools.takewhile(lambda m: m > 0, _fuel_chain(module_mass)))


def total_fuel_required_for_modules(masses: Iterable[int]) -> int:
    return sum(fuel_required_for_module(m) for m in masses)


def parse_masses(text: str) -> List[int]:
    """Parse one module mass per line; blank lines are skipped."""
    masses = []
    for lineno, line in enumerate(text.splitlines(), 1):
        line = line.strip()
        if not line:
            continue
        try:
            mass = int(line)
        except ValueError:
            raise ValueError(f"Line {lineno}: {line!r} is not an integer") from None
        if mass < 0:
            raise ValueError(f"Line {lineno}: mass {mass} is negative")
        masses.append(mass)
    return masses


def load_masses(path: Union[str, Path]) -> List[int]:
    return parse_masses(Path(path).read_text(encoding='utf-8'))
