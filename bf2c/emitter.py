from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from .parser import InstructionNode, Loop, Program, RepeatedOp
from .scanner import TokenKind

DEFAULT_TAPE_SIZE = 30000
INDENT = "    "

# Statements for the primitive kinds whose effect scales with the run length.
_SCALED_STATEMENTS = {
    TokenKind.INCREMENT: "*ptr += {count};",
    TokenKind.DECREMENT: "*ptr -= {count};",
    TokenKind.MOVE_RIGHT: "ptr += {count};",
    TokenKind.MOVE_LEFT: "ptr -= {count};",
}

# Statements for I/O kinds, repeated through a counted loop when count > 1.
_IO_STATEMENTS = {
    TokenKind.WRITE: "putchar(*ptr);",
    TokenKind.READ: "*ptr = getchar();",
}


@dataclass
class CEmitter:
    """Render a Program as a standalone C translation unit."""

    tape_size: int = DEFAULT_TAPE_SIZE

    def __post_init__(self) -> None:
        if self.tape_size < 1:
            raise ValueError(f"Tape size must be at least 1, got {self.tape_size}")

    def emit(self, program: Program) -> str:
        lines: List[str] = []
        self._emit_intro(lines)
        self._emit_block(program, 1, lines)
        self._emit_outro(lines)
        return "\n".join(lines) + "\n"

    # --- Helpers ---

    def _emit_intro(self, lines: List[str]) -> None:
        lines.extend(
            [
                "#include <stdio.h>",
                "#include <stdlib.h>",
                "",
                f"#define TAPE_SIZE {self.tape_size}",
                "",
                "int main(void) {",
                f"{INDENT}unsigned char array[TAPE_SIZE] = {{0}};",
                f"{INDENT}unsigned char *ptr = array;",
                "",
            ]
        )

    def _emit_outro(self, lines: List[str]) -> None:
        lines.extend(["", f"{INDENT}return 0;", "}"])

    def _emit_block(self, nodes: Sequence[InstructionNode], level: int, lines: List[str]) -> None:
        # One (remaining nodes, level) frame per open loop; popping a nested
        # frame closes its while block.
        frames: List[Tuple[Iterator[InstructionNode], int]] = [(iter(nodes), level)]
        while frames:
            remaining, depth = frames[-1]
            node = next(remaining, None)
            if node is None:
                frames.pop()
                if frames:
                    self._line("}", depth - 1, lines)
                continue
            if isinstance(node, Loop):
                self._line("while (*ptr) {", depth, lines)
                frames.append((iter(node.body), depth + 1))
                continue
            self._emit_op(node, depth, lines)

    def _emit_op(self, node: InstructionNode, level: int, lines: List[str]) -> None:
        if isinstance(node, RepeatedOp):
            if node.kind in _SCALED_STATEMENTS:
                self._line(_SCALED_STATEMENTS[node.kind].format(count=node.count), level, lines)
                return
            if node.kind in _IO_STATEMENTS:
                self._emit_io(node, level, lines)
                return
        raise TypeError(f"Cannot emit node {node!r}")

    def _emit_io(self, node: RepeatedOp, level: int, lines: List[str]) -> None:
        statement = _IO_STATEMENTS[node.kind]
        if node.count == 1:
            self._line(statement, level, lines)
            return
        self._line(f"for (int i = 0; i < {node.count}; i++) {{", level, lines)
        self._line(statement, level + 1, lines)
        self._line("}", level, lines)

    def _line(self, text: str, level: int, lines: List[str]) -> None:
        lines.append(INDENT * level + text)


def emit(program: Program, tape_size: int = DEFAULT_TAPE_SIZE) -> str:
    return CEmitter(tape_size=tape_size).emit(program)


__all__ = ["CEmitter", "DEFAULT_TAPE_SIZE", "emit"]
