from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Union


class TokenKind(str, Enum):
    INCREMENT = "+"
    DECREMENT = "-"
    MOVE_RIGHT = ">"
    MOVE_LEFT = "<"
    WRITE = "."
    READ = ","
    LOOP_START = "["
    LOOP_END = "]"

    @property
    def is_primitive(self) -> bool:
        return self not in (TokenKind.LOOP_START, TokenKind.LOOP_END)


PRIMITIVE_KINDS = frozenset(kind for kind in TokenKind if kind.is_primitive)

_SYMBOL_TABLE: Dict[int, TokenKind] = {ord(kind.value): kind for kind in TokenKind}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    offset: int


def scan(source: Union[bytes, str]) -> List[Token]:
    """Classify every instruction byte of ``source``, skipping everything else.

    Text input is encoded as UTF-8 first so offsets always count bytes.
    """
    if isinstance(source, str):
        source = source.encode("utf-8")
    tokens: List[Token] = []
    for offset, byte in enumerate(source):
        kind = _SYMBOL_TABLE.get(byte)
        if kind is None:
            continue
        tokens.append(Token(kind=kind, offset=offset))
    return tokens


__all__ = ["PRIMITIVE_KINDS", "Token", "TokenKind", "scan"]
