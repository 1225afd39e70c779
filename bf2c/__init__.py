from .emitter import DEFAULT_TAPE_SIZE, CEmitter, emit
from .errors import (
    Bf2cError,
    ExecutionError,
    StepLimitExceeded,
    StructureError,
    TapeBoundsError,
    UnmatchedCloseError,
    UnmatchedOpenError,
)
from .interpreter import TreeInterpreter
from .parser import Loop, Parser, RepeatedOp, loop_depth, parse
from .scanner import Token, TokenKind, scan
from .transpiler import BrainfuckToCTranspiler

__all__ = [
    "Bf2cError",
    "BrainfuckToCTranspiler",
    "CEmitter",
    "DEFAULT_TAPE_SIZE",
    "ExecutionError",
    "Loop",
    "Parser",
    "RepeatedOp",
    "StepLimitExceeded",
    "StructureError",
    "TapeBoundsError",
    "Token",
    "TokenKind",
    "TreeInterpreter",
    "UnmatchedCloseError",
    "UnmatchedOpenError",
    "emit",
    "loop_depth",
    "parse",
    "scan",
]
