from dataclasses import dataclass


class ASTNode:
    pass


class Expr(ASTNode):
    pass


class Stmt(ASTNode):
    pass


# ---------- expressions ----------
@dataclass(frozen=True)
class IntLiteral(Expr):
    value: int
    line: int | None = None


@dataclass(frozen=True)
class StringLiteral(Expr):
    value: str
    line: int | None = None


@dataclass(frozen=True)
class VarRef(Expr):
    name: str
    line: int | None = None


@dataclass(frozen=True)
class BinaryOp(Expr):
    op: str  # + - * / < > <= >= ==
    left: Expr
    right: Expr
    line: int | None = None


# ---------- statements ----------
@dataclass(frozen=True)
class Print(Stmt):
    expr: Expr
    line: int | None = None


@dataclass(frozen=True)
class Assign(Stmt):
    name: str
    expr: Expr
    line: int | None = None


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    body: tuple[Stmt, ...]
    line: int | None = None


@dataclass(frozen=True)
class Program(ASTNode):
    statements: tuple[Stmt, ...]
