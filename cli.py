import os
import sys
import traceback

import colorama

from errors import BfRuntimeError, BracketError, SourceLoadError
from jumps import build_jump_table
from loader import read_source
from vm import interpret

USAGE = "Usage: {prog} [--debug] [--trace] [--max-steps N] [--jumps] program.bf"


def _error(msg: str):
    # red only when a human is looking at the terminal
    if sys.stderr.isatty():
        msg = f"{colorama.Fore.RED}{msg}{colorama.Style.RESET_ALL}"
    print(msg, file=sys.stderr)


def _usage(prog: str) -> int:
    print(USAGE.format(prog=prog), file=sys.stderr)
    return 2


def _silence_stdout():
    # the reader went away; later writes and the exit-time flush go nowhere
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


def _out_of_memory(debug: bool) -> int:
    if debug:
        traceback.print_exc()
    _error("Out of memory allocating source, tape or jump table")
    return 1


def cmd_jumps(source: bytes):
    try:
        table = build_jump_table(source)
    except BracketError as e:
        _error(str(e))
        _error("Bracket matching failed. Aborting.")
        return
    for open_idx, close_idx in table.pairs():
        print(f"  {open_idx:04d} -> {close_idx:04d}")


def cmd_run(source: bytes, debug: bool = False, trace: bool = False, max_steps=None) -> int:
    try:
        interpret(
            source,
            stdin=sys.stdin.buffer,
            stdout=sys.stdout.buffer,
            max_steps=max_steps,
            trace=trace,
        )
    except BracketError as e:
        # reported, but not a failure exit: nothing ran
        _error(str(e))
        _error("Bracket matching failed. Aborting.")
        return 0
    except MemoryError:
        return _out_of_memory(debug)
    except BrokenPipeError:
        _silence_stdout()
        return 1
    except KeyboardInterrupt:
        print(file=sys.stderr)
        return 130
    except BfRuntimeError as e:
        if debug:
            traceback.print_exc()
        else:
            _error(str(e))
        return 1
    return 0


def main(argv=None) -> int:
    colorama.just_fix_windows_console()

    if argv is None:
        argv = sys.argv
    prog = argv[0] if argv else "bfc"
    args = list(argv[1:])

    debug = False
    if "--debug" in args:
        debug = True
        args.remove("--debug")

    trace = False
    if "--trace" in args:
        trace = True
        args.remove("--trace")

    dump_jumps = False
    if "--jumps" in args:
        dump_jumps = True
        args.remove("--jumps")

    max_steps = None
    if "--max-steps" in args:
        i = args.index("--max-steps")
        if i + 1 >= len(args):
            return _usage(prog)
        try:
            max_steps = int(args[i + 1])
        except ValueError:
            return _usage(prog)
        if max_steps < 0:
            return _usage(prog)
        del args[i : i + 2]

    if len(args) != 1:
        return _usage(prog)

    path = args[0]
    try:
        source = read_source(path)
    except SourceLoadError as e:
        if debug:
            traceback.print_exc()
        else:
            _error(str(e))
        _error(f"Failed to read '{path}'")
        return 1
    except MemoryError:
        return _out_of_memory(debug)

    if dump_jumps:
        cmd_jumps(source)
        return 0

    return cmd_run(source, debug=debug, trace=trace, max_steps=max_steps)


if __name__ == "__main__":
    sys.exit(main())
