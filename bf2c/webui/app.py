from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel, Field

from bf2c.emitter import DEFAULT_TAPE_SIZE
from bf2c.errors import ExecutionError, StructureError
from bf2c.interpreter import TreeInterpreter
from bf2c.parser import loop_depth
from bf2c.transpiler import BrainfuckToCTranspiler


def _structure_error_detail(exc: StructureError) -> dict:
    return {"error": exc.kind, "message": exc.message, "offset": exc.offset}


class TranspileRequest(BaseModel):
    code: str = ""
    tape_size: int = Field(default=DEFAULT_TAPE_SIZE, ge=1)


class TranspileResponse(BaseModel):
    c_source: str
    tape_size: int
    token_count: int
    node_count: int
    loop_depth: int


class RunRequest(BaseModel):
    code: str = ""
    input: str = ""
    tape_size: int = Field(default=DEFAULT_TAPE_SIZE, ge=1)
    max_steps: Optional[int] = Field(default=100_000, ge=1)


class RunResponse(BaseModel):
    output: str
    steps: int


def create_app() -> FastAPI:
    app = FastAPI(title="bf2c API", version="0.1.0")

    @app.get("/api/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.post("/api/transpile", response_model=TranspileResponse)
    def transpile(payload: TranspileRequest) -> TranspileResponse:
        transpiler = BrainfuckToCTranspiler(tape_size=payload.tape_size)
        tokens = transpiler.scan(payload.code)
        try:
            program = transpiler.parser.parse(tokens)
        except StructureError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=_structure_error_detail(exc),
            ) from exc
        return TranspileResponse(
            c_source=transpiler.emitter.emit(program),
            tape_size=transpiler.tape_size,
            token_count=len(tokens),
            node_count=len(program),
            loop_depth=loop_depth(program),
        )

    @app.post("/api/run", response_model=RunResponse)
    def run(payload: RunRequest) -> RunResponse:
        transpiler = BrainfuckToCTranspiler(tape_size=payload.tape_size)
        try:
            program = transpiler.parse(payload.code)
        except StructureError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=_structure_error_detail(exc),
            ) from exc

        interpreter = TreeInterpreter(tape_size=payload.tape_size)
        try:
            output = interpreter.run(
                program,
                input_data=payload.input.encode("utf-8"),
                max_steps=payload.max_steps,
            )
        except ExecutionError as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=str(exc),
            ) from exc
        return RunResponse(output=output.decode("latin-1"), steps=interpreter.steps)

    return app


__all__ = ["create_app"]
