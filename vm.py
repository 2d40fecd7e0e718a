import sys

from errors import BfError, BfRuntimeError
from jumps import build_jump_table
from tape import Tape


class ExecutionContext:
    """Everything one run touches: program bytes, jump table, tape, I/O.

    The engine keeps no state of its own outside this object, so a context
    can be built by hand (e.g. with a pre-filled tape) and stepped.
    """

    def __init__(self, source: bytes, jumps, tape: Tape, stdin=None, stdout=None):
        self.source = source
        self.jumps = jumps
        self.tape = tape
        self.stdin = stdin if stdin is not None else sys.stdin.buffer      # binary, read(1)
        self.stdout = stdout if stdout is not None else sys.stdout.buffer  # binary, write/flush
        self.ip = 0  # instruction pointer into source


def op_increment(ctx):
    ctx.tape.increment()


def op_decrement(ctx):
    ctx.tape.decrement()


def op_right(ctx):
    ctx.tape.move_right()


def op_left(ctx):
    ctx.tape.move_left()


def op_output(ctx):
    ctx.stdout.write(bytes((ctx.tape.read_cell(),)))
    ctx.stdout.flush()


def op_input(ctx):
    data = ctx.stdin.read(1)
    if not data:
        ctx.tape.write_cell(0)  # end of input
    else:
        ctx.tape.write_cell(data[0])


def op_loop_open(ctx):
    if ctx.tape.read_cell() == 0:
        ctx.ip = ctx.jumps.target(ctx.ip)


def op_loop_close(ctx):
    if ctx.tape.read_cell() != 0:
        ctx.ip = ctx.jumps.target(ctx.ip)


OPERATIONS = {
    ord("+"): op_increment,
    ord("-"): op_decrement,
    ord(">"): op_right,
    ord("<"): op_left,
    ord("."): op_output,
    ord(","): op_input,
    ord("["): op_loop_open,
    ord("]"): op_loop_close,
}


class VM:
    def __init__(self, ctx: ExecutionContext, trace_stream=None):
        self.ctx = ctx
        self.max_steps = None  # set to an int to guard against infinite loops
        self.trace_enabled = False
        self.trace_stream = trace_stream
        self.steps = 0

    def _trace(self, op: int):
        ctx = self.ctx
        stream = self.trace_stream if self.trace_stream is not None else sys.stderr
        print(
            f"TRACE ip={ctx.ip:04d} op={chr(op)!r} pos={ctx.tape.pos} cell={ctx.tape.read_cell()}",
            file=stream,
        )

    def step(self) -> bool:
        ctx = self.ctx
        if ctx.ip >= len(ctx.source):
            return True

        op = ctx.source[ctx.ip]
        handler = OPERATIONS.get(op)
        if handler is not None:
            if self.trace_enabled:
                self._trace(op)
            handler(ctx)

        # a jump leaves ip on the partner bracket; this moves past it
        ctx.ip += 1
        return ctx.ip >= len(ctx.source)

    def run(self):
        ctx = self.ctx
        try:
            # only bytes that are actually consumed count against max_steps
            while ctx.ip < len(ctx.source):
                if self.max_steps is not None:
                    self.steps += 1
                    if self.steps > self.max_steps:
                        raise BfRuntimeError("Step limit exceeded (possible infinite loop)", ip=ctx.ip)

                self.step()
        except BfError:
            raise
        except (MemoryError, BrokenPipeError):
            raise
        except Exception as e:
            raise BfRuntimeError(str(e), ip=ctx.ip)
        return self.ctx.tape


def interpret(source: bytes, stdin=None, stdout=None, tape_length: int | None = None,
              max_steps: int | None = None, trace: bool = False, trace_stream=None) -> Tape:
    # brackets are validated before the tape exists, so a bad program
    # never executes a single instruction
    jumps = build_jump_table(source)

    if tape_length is None:
        tape_length = len(source)
    tape = Tape(tape_length)

    ctx = ExecutionContext(source, jumps, tape, stdin=stdin, stdout=stdout)
    vm = VM(ctx, trace_stream=trace_stream)
    vm.max_steps = max_steps
    vm.trace_enabled = trace
    return vm.run()
