from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from .errors import UnmatchedCloseError, UnmatchedOpenError
from .scanner import PRIMITIVE_KINDS, Token, TokenKind


# === AST Nodes ===


@dataclass
class RepeatedOp:
    kind: TokenKind
    count: int = 1

    def __post_init__(self) -> None:
        if self.kind not in PRIMITIVE_KINDS:
            raise ValueError(f"RepeatedOp cannot hold bracket token {self.kind.value!r}")
        if self.count < 1:
            raise ValueError("RepeatedOp count must be at least 1")


@dataclass
class Loop:
    body: List["InstructionNode"] = field(default_factory=list)


InstructionNode = Union[RepeatedOp, Loop]
Program = List[InstructionNode]


# === Parser ===


class Parser:
    """Parser turning a token list into a Program.

    Consecutive tokens of the same primitive kind are merged into a single
    ``RepeatedOp``; each ``[`` ... ``]`` pair becomes a ``Loop``. Open loops
    are kept on an explicit stack of ``(enclosing nodes, opening token)``
    frames.
    """

    def __init__(self) -> None:
        self.tokens: Sequence[Token] = ()
        self.pos = 0

    def parse(self, tokens: Sequence[Token]) -> Program:
        self.tokens = tokens
        self.pos = 0
        return self._parse_levels()

    def _peek(self) -> Optional[Token]:
        if self.pos >= len(self.tokens):
            return None
        return self.tokens[self.pos]

    def _advance(self) -> Optional[Token]:
        token = self._peek()
        if token is not None:
            self.pos += 1
        return token

    def _parse_levels(self) -> Program:
        nodes: Program = []
        open_loops: List[Tuple[Program, Token]] = []
        while self.pos < len(self.tokens):
            token = self._peek()
            in_loop = bool(open_loops)
            if token.kind is TokenKind.LOOP_END:
                if not in_loop:
                    raise UnmatchedCloseError(token.offset)
                self._advance()
                enclosing, _ = open_loops.pop()
                enclosing.append(Loop(body=nodes))
                nodes = enclosing
                continue
            if token.kind is TokenKind.LOOP_START:
                self._advance()
                open_loops.append((nodes, token))
                nodes = []
                continue
            nodes.append(self._parse_run(token.kind))
        if open_loops:
            _, opener = open_loops[-1]
            raise UnmatchedOpenError(opener.offset)
        return nodes

    def _parse_run(self, kind: TokenKind) -> RepeatedOp:
        count = 0
        while self.pos < len(self.tokens) and self.tokens[self.pos].kind is kind:
            count += 1
            self.pos += 1
        return RepeatedOp(kind=kind, count=count)


def parse(tokens: Sequence[Token]) -> Program:
    return Parser().parse(tokens)


def loop_depth(nodes: Sequence[InstructionNode]) -> int:
    depth = 0
    pending: List[Tuple[Sequence[InstructionNode], int]] = [(nodes, 0)]
    while pending:
        current, level = pending.pop()
        for node in current:
            if isinstance(node, Loop):
                depth = max(depth, level + 1)
                pending.append((node.body, level + 1))
    return depth


__all__ = [
    "InstructionNode",
    "Loop",
    "Parser",
    "Program",
    "RepeatedOp",
    "loop_depth",
    "parse",
]
