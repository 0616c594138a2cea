import sys

from ast_nodes import Program, Print, Assign, If, IntLiteral, StringLiteral, VarRef, BinaryOp
from errors import EZLangRuntimeError
from values import apply_operator, display, is_truthy


class Interpreter:
    def __init__(self, trace: bool = False, trace_stream=None):
        self.env = {}       # variable name -> value, shared by every if body
        self.output = []    # one display string per executed print

        self.trace_enabled = trace
        self.trace_stream = trace_stream

    def reset(self):
        self.env = {}
        self.output = []

    def run(self, program: Program) -> str:
        self.reset()
        self.execute_block(program.statements)
        return "\n".join(self.output)

    def run_incremental(self, program: Program) -> list[str]:
        # REPL: keep env between snippets, hand back this snippet's output
        try:
            self.execute_block(program.statements)
            return self.output
        finally:
            self.output = []

    def trace(self, node):
        stream = self.trace_stream if self.trace_stream is not None else sys.stderr
        print(f"TRACE line={node.line} {node.__class__.__name__}", file=stream)

    # -------- statements --------
    def execute_block(self, statements):
        for stmt in statements:
            self.execute(stmt)

    def execute(self, node):
        if self.trace_enabled:
            self.trace(node)

        if isinstance(node, Print):
            self.output.append(display(self.evaluate(node.expr)))
            return

        if isinstance(node, Assign):
            self.env[node.name] = self.evaluate(node.expr)
            return

        if isinstance(node, If):
            if is_truthy(self.evaluate(node.condition)):
                self.execute_block(node.body)
            return

        raise EZLangRuntimeError(f"Unknown statement node: {node.__class__.__name__}", getattr(node, "line", None))

    # -------- expressions --------
    def evaluate(self, node):
        if isinstance(node, IntLiteral):
            return node.value

        if isinstance(node, StringLiteral):
            return node.value

        if isinstance(node, VarRef):
            # unbound names read as 0
            return self.env.get(node.name, 0)

        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            return apply_operator(node.op, left, right, node.line)

        raise EZLangRuntimeError(f"Unknown expression node: {node.__class__.__name__}", getattr(node, "line", None))
