from __future__ import annotations

import logging
from typing import List, Union

from .emitter import DEFAULT_TAPE_SIZE, CEmitter
from .parser import Parser, Program
from .scanner import Token, scan

logger = logging.getLogger(__name__)


class BrainfuckToCTranspiler:
    """Scan, parse and emit a Brainfuck program as C source.

    Each phase runs to completion before the next starts. Structural errors
    raised by the parser propagate unchanged and no C text is produced.
    """

    def __init__(self, tape_size: int = DEFAULT_TAPE_SIZE) -> None:
        self.parser = Parser()
        self.emitter = CEmitter(tape_size=tape_size)

    @property
    def tape_size(self) -> int:
        return self.emitter.tape_size

    def scan(self, source: Union[bytes, str]) -> List[Token]:
        tokens = scan(source)
        logger.debug("scanned %d instruction tokens", len(tokens))
        return tokens

    def parse(self, source: Union[bytes, str]) -> Program:
        program = self.parser.parse(self.scan(source))
        logger.debug("parsed %d top-level nodes", len(program))
        return program

    def transpile(self, source: Union[bytes, str]) -> str:
        program = self.parse(source)
        code = self.emitter.emit(program)
        logger.debug("emitted %d lines of C (tape size %d)", code.count("\n"), self.tape_size)
        return code


__all__ = ["BrainfuckToCTranspiler"]
