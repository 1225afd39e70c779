from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .emitter import DEFAULT_TAPE_SIZE
from .errors import StepLimitExceeded, TapeBoundsError
from .parser import InstructionNode, Loop, Program, RepeatedOp
from .scanner import TokenKind


@dataclass
class TreeInterpreter:
    """Execute a parsed Program with the semantics of the emitted C code.

    Cells are unsigned bytes, ``getchar`` past the end of input stores
    ``eof_value`` (``EOF`` truncated to ``unsigned char``).
    """

    tape_size: int = DEFAULT_TAPE_SIZE
    eof_value: int = 255

    tape: List[int] = field(init=False, repr=False)
    pointer: int = field(init=False, repr=False)
    steps: int = field(init=False, repr=False)
    output_buffer: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.tape = [0] * self.tape_size
        self.pointer = 0
        self.steps = 0
        self.output_buffer = bytearray()

    def run(
        self,
        program: Program,
        input_data: Optional[Iterable[int]] = None,
        max_steps: Optional[int] = None,
    ) -> bytes:
        self.reset()
        input_iter = iter(list(input_data or b""))
        self._run_block(program, input_iter, max_steps)
        return bytes(self.output_buffer)

    def _tick(self, max_steps: Optional[int]) -> None:
        if max_steps is not None and self.steps >= max_steps:
            raise StepLimitExceeded("Brainfuck program exceeded allowed step count")
        self.steps += 1

    def _run_block(
        self,
        nodes: Sequence[InstructionNode],
        input_iter: Iterator[int],
        max_steps: Optional[int],
    ) -> None:
        # Each frame is (remaining nodes, enclosing loop); the root frame has
        # no loop. Reaching the end of a loop frame re-tests the cell.
        frames: List[Tuple[Iterator[InstructionNode], Optional[Loop]]] = [(iter(nodes), None)]
        while frames:
            remaining, loop = frames[-1]
            node = next(remaining, None)
            if node is None:
                if loop is None:
                    frames.pop()
                    continue
                self._tick(max_steps)
                if self.tape[self.pointer] != 0:
                    frames[-1] = (iter(loop.body), loop)
                else:
                    frames.pop()
                continue
            self._tick(max_steps)
            if isinstance(node, Loop):
                if self.tape[self.pointer] != 0:
                    frames.append((iter(node.body), node))
            else:
                self._execute(node, input_iter)

    def _execute(self, node: RepeatedOp, input_iter: Iterator[int]) -> None:
        kind, count = node.kind, node.count
        if kind is TokenKind.INCREMENT:
            self.tape[self.pointer] = (self.tape[self.pointer] + count) % 256
        elif kind is TokenKind.DECREMENT:
            self.tape[self.pointer] = (self.tape[self.pointer] - count) % 256
        elif kind is TokenKind.MOVE_RIGHT:
            self._move(count)
        elif kind is TokenKind.MOVE_LEFT:
            self._move(-count)
        elif kind is TokenKind.WRITE:
            self.output_buffer.extend([self.tape[self.pointer]] * count)
        elif kind is TokenKind.READ:
            for _ in range(count):
                self.tape[self.pointer] = next(input_iter, self.eof_value) % 256

    def _move(self, delta: int) -> None:
        target = self.pointer + delta
        if target >= self.tape_size:
            raise TapeBoundsError("Pointer moved beyond the tape length.")
        if target < 0:
            raise TapeBoundsError("Pointer moved before start of tape.")
        self.pointer = target


__all__ = ["TreeInterpreter"]
