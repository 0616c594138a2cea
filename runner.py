"""Lex, parse and evaluate EZLang source in one step.

``execute`` is the entry point for hosts: it always returns a string and
never raises. ``run`` returns a ``RunResult`` so callers can see which
stage failed.
"""

from errors import EZLangError
from interpreter import Interpreter
from lexer import tokenize
from parser import parse


class RunResult:
    def __init__(self, output: str = "", error: str | None = None, error_kind: str | None = None, exception=None):
        self.output = output
        self.error = error
        self.error_kind = error_kind  # lex, syntax, runtime, internal
        self.exception = exception

    @property
    def ok(self) -> bool:
        return self.error is None

    def render(self) -> str:
        if self.ok:
            return self.output
        return f"Error: {self.error}"

    def __repr__(self):
        if self.ok:
            return f"RunResult(output={self.output!r})"
        return f"RunResult(error={self.error!r}, error_kind={self.error_kind!r})"


def run(source: str, trace: bool = False, trace_stream=None) -> RunResult:
    try:
        program = parse(tokenize(source))
        output = Interpreter(trace=trace, trace_stream=trace_stream).run(program)
    except EZLangError as e:
        return RunResult(error=str(e), error_kind=e.kind, exception=e)
    except RecursionError as e:
        return RunResult(error="maximum nesting depth exceeded", error_kind="internal", exception=e)
    except Exception as e:
        return RunResult(error=f"internal error: {type(e).__name__}: {e}", error_kind="internal", exception=e)
    return RunResult(output=output)


def execute(source: str) -> str:
    return run(source).render()
