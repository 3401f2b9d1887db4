#!/usr/bin/env python3
"""
intcodekit — Intcode Machine Toolkit
====================================

One CLI for everything:
    intcodekit run     — Run a program, print slot 0 (or the whole memory)
    intcodekit trace   — Single-step a program with an instruction trace
    intcodekit disasm  — Static listing of a program
    intcodekit search  — Find the noun/verb pair producing a target output
    intcodekit fuel    — Total rocket-equation fuel for a list of masses

PROGRAM arguments are a file holding one comma-separated line, or the
program text itself ("1,0,0,0,99").

Usage:
    python intcodekit.py <command> [options]
    python intcodekit.py --help
    python intcodekit.py <command> --help

Examples:
    python intcodekit.py run day2.txt --noun 12 --verb 2
    python intcodekit.py run "1,9,10,3,2,3,11,0,99,30,40,50" --dump
    python intcodekit.py trace day2.txt --break 4
    python intcodekit.py disasm day2.txt
    python intcodekit.py search day2.txt 19690720
    python intcodekit.py fuel masses.txt
"""

import argparse
import logging
import re
import sys
import os
from pathlib import Path

# Allow running from project root or as module
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from intcode import __version__
from intcode.config import DEFAULT_SEARCH_BOUND, LOG_DIR, NOUN_SLOT, VERB_SLOT, OUTPUT_SLOT
from intcode.decoder import disassemble
from intcode.fuel import load_masses, naive_total_fuel_required_for_modules, total_fuel_required_for_modules
from intcode.log_setup import setup_logging
from intcode.machine import IntcodeMachine, StopReason, run
from intcode.memory import IntcodeError, load_program, parse_program, read, write
from intcode.search import encode_answer, search_for_inputs

log = logging.getLogger("intcode.cli")

PROGRAM_TEXT = re.compile(r"[\d,\s]+")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="intcodekit",
        description="Intcode toolkit — run, trace, disassemble, search",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""commands:
  run        Run a program to HALT
  trace      Single-step a program with an instruction trace
  disasm     List a program's instructions
  search     Find the noun/verb pair that produces TARGET
  fuel       Total fuel for a list of module masses
""",
    )
    parser.add_argument("--version", action="version", version=f"intcodekit {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show DEBUG log output on the console")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="Only show errors on the console")
    parser.add_argument("--log", action="store_true",
                        help=f"Also write a timestamped log file under {LOG_DIR}/")
    parser.add_argument("--log-dir", default=None,
                        help="Directory for the log file (implies --log)")
    sub = parser.add_subparsers(dest="command", metavar="command")

    # ── run ──────────────────────────────────────────────────────────────
    p_run = sub.add_parser("run", help="Run a program to HALT")
    p_run.add_argument("program", help="Program file or comma-separated text")
    p_run.add_argument("--noun", type=int, help="Value written to slot 1 before running")
    p_run.add_argument("--verb", type=int, help="Value written to slot 2 before running")
    p_run.add_argument("--dump", action="store_true",
                       help="Print the whole final memory instead of slot 0")

    # ── trace ────────────────────────────────────────────────────────────
    p_tr = sub.add_parser("trace", help="Single-step with an instruction trace")
    p_tr.add_argument("program", help="Program file or comma-separated text")
    p_tr.add_argument("--noun", type=int, help="Value written to slot 1 before running")
    p_tr.add_argument("--verb", type=int, help="Value written to slot 2 before running")
    p_tr.add_argument("--break", dest="breakpoints", type=int, action="append",
                      default=[], metavar="ADDR",
                      help="Report when execution reaches ADDR (repeatable)")

    # ── disasm ───────────────────────────────────────────────────────────
    p_dis = sub.add_parser("disasm", help="List a program's instructions")
    p_dis.add_argument("program", help="Program file or comma-separated text")

    # ── search ───────────────────────────────────────────────────────────
    p_s = sub.add_parser("search", help="Find the noun/verb pair producing TARGET")
    p_s.add_argument("program", help="Program file or comma-separated text")
    p_s.add_argument("target", type=int, help="Wanted value of slot 0 after HALT")
    p_s.add_argument("--bound", type=int, default=DEFAULT_SEARCH_BOUND,
                     help=f"Exclusive upper limit for noun and verb (default: {DEFAULT_SEARCH_BOUND})")

    # ── fuel ─────────────────────────────────────────────────────────────
    p_f = sub.add_parser("fuel", help="Total fuel for a list of module masses")
    p_f.add_argument("masses", help="File with one module mass per line")
    p_f.add_argument("--naive", action="store_true",
                     help="Ignore the fuel needed to carry the fuel")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    if args.quiet:
        console_level = logging.ERROR
    elif args.verbose:
        console_level = logging.DEBUG
    else:
        console_level = logging.WARNING
    setup_logging("intcode", console_level=console_level,
                  log_dir=_log_dir(args))

    handler = COMMANDS[args.command]
    try:
        return handler(args)
    except (IntcodeError, ValueError, OSError) as e:
        log.error("%s: %s", args.command, e)
        return 1


def _log_dir(args):
    if args.log_dir:
        return Path(args.log_dir)
    if args.log:
        return LOG_DIR
    return None


# ═════════════════════════════════════════════════════════════════════════════
# COMMAND IMPLEMENTATIONS
# ═════════════════════════════════════════════════════════════════════════════

def _read_program(source: str):
    """Load a program from a file path, or parse the argument as program text."""
    if PROGRAM_TEXT.fullmatch(source):
        return parse_program(source)
    return load_program(source)


def _apply_inputs(memory, args):
    if args.noun is not None:
        write(memory, NOUN_SLOT, args.noun)
    if args.verb is not None:
        write(memory, VERB_SLOT, args.verb)


# ── run ──────────────────────────────────────────────────────────────────
def cmd_run(args):
    memory = _read_program(args.program)
    _apply_inputs(memory, args)
    run(memory)
    if args.dump:
        print(",".join(str(v) for v in memory))
    else:
        print(read(memory, OUTPUT_SLOT))
    return 0


# ── trace ────────────────────────────────────────────────────────────────
def cmd_trace(args):
    memory = _read_program(args.program)
    _apply_inputs(memory, args)

    machine = IntcodeMachine(memory)
    machine.enable_trace()
    for addr in args.breakpoints:
        machine.add_breakpoint(addr)

    reason = machine.run()
    while reason is StopReason.BREAK:
        reason = machine.run()

    print(machine.get_trace())
    print(f"{reason.value} at {machine.pc} after {machine.steps} steps")
    return 0 if reason is StopReason.HALT else 1


# ── disasm ───────────────────────────────────────────────────────────────
def cmd_disasm(args):
    memory = _read_program(args.program)
    print("\n".join(disassemble(memory)))
    return 0


# ── search ───────────────────────────────────────────────────────────────
def cmd_search(args):
    program = _read_program(args.program)
    found = search_for_inputs(args.target, program, bound=args.bound)
    if found is None:
        print(f"No noun/verb below {args.bound} produces {args.target}", file=sys.stderr)
        return 1
    noun, verb = found
    print(f"noun={noun} verb={verb} answer={encode_answer(noun, verb)}")
    return 0


# ── fuel ─────────────────────────────────────────────────────────────────
def cmd_fuel(args):
    masses = load_masses(args.masses)
    if args.naive:
        print(naive_total_fuel_required_for_modules(masses))
    else:
        print(total_fuel_required_for_modules(masses))
    return 0


COMMANDS = {
    "run": cmd_run,
    "trace": cmd_trace,
    "disasm": cmd_disasm,
    "search": cmd_search,
    "fuel": cmd_fuel,
}


if __name__ == "__main__":
    sys.exit(main())
