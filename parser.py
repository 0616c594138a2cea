from ast_nodes import Program, Print, Assign, If, IntLiteral, StringLiteral, VarRef, BinaryOp
from errors import EZLangSyntaxError
from lexer import Token


class Parser:
    def __init__(self, tokens):
        self.tokens = list(tokens)
        self.pos = 0

        # end marker reported on the last line; column is unknown
        last_line = self.tokens[-1].line if self.tokens else 1
        self.eof = Token("EOF", line=last_line, column=None)

    @property
    def current_token(self):
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return self.eof

    @property
    def next_token(self):
        if self.pos + 1 < len(self.tokens):
            return self.tokens[self.pos + 1]
        return self.eof

    def at_end(self):
        return self.pos >= len(self.tokens)

    # move to next token, but only if it matches what we expect
    def eat(self, token_type):
        tok = self.current_token
        if tok.type != token_type:
            raise EZLangSyntaxError(f"Expected {token_type}, got {tok.type}", tok.line, tok.column)
        self.pos += 1
        return tok

    def error_here(self, message):
        tok = self.current_token
        raise EZLangSyntaxError(message, tok.line, tok.column)

    # ---------- TOP LEVEL ----------
    def parse(self):
        statements = []
        while not self.at_end():
            statements.append(self.statement())
        return Program(tuple(statements))

    def parse_expression(self):
        # single expression that must use up all input (REPL auto-print)
        node = self.expr()
        if not self.at_end():
            self.error_here(f"Unexpected token after expression: {self.current_token.type}")
        return node

    # ---------- STATEMENTS ----------
    def statement(self):
        if self.current_token.type == "PRINT":
            return self.print_statement()

        if self.current_token.type == "IF":
            return self.if_statement()

        # assignment is the only statement that starts with a name
        if self.current_token.type == "IDENTIFIER" and self.next_token.type == "ASSIGN":
            return self.assign_statement()

        self.error_here(f"Unexpected token in statement: {self.current_token.type}")

    def print_statement(self):
        tok = self.eat("PRINT")
        return Print(self.expr(), line=tok.line)

    def assign_statement(self):
        name_token = self.eat("IDENTIFIER")
        self.eat("ASSIGN")
        return Assign(name_token.value, self.expr(), line=name_token.line)

    def if_statement(self):
        # IF expr '{' statement* '}'
        tok = self.eat("IF")
        condition = self.expr()
        self.eat("LBRACE")

        body = []
        while self.current_token.type != "RBRACE":
            if self.at_end():
                self.error_here("Expected RBRACE, got EOF")
            body.append(self.statement())

        self.eat("RBRACE")
        return If(condition, tuple(body), line=tok.line)

    # ---------- EXPRESSIONS ----------
    # expr -> comparison
    def expr(self):
        return self.comparison()

    # comparison -> term (COMPARE term)?
    def comparison(self):
        node = self.term()
        if self.current_token.type == "COMPARE":
            op_token = self.eat("COMPARE")
            node = BinaryOp(op_token.value, node, self.term(), line=op_token.line)
        return node

    # term -> factor ((+|-) factor)*
    def term(self):
        node = self.factor()

        while self.current_token.type == "OP" and self.current_token.value in ("+", "-"):
            op_token = self.eat("OP")
            right = self.factor()
            node = BinaryOp(op_token.value, node, right, line=op_token.line)

        return node

    # factor -> unary ((*|/) unary)*
    def factor(self):
        node = self.unary()

        while self.current_token.type == "OP" and self.current_token.value in ("*", "/"):
            op_token = self.eat("OP")
            right = self.unary()
            node = BinaryOp(op_token.value, node, right, line=op_token.line)

        return node

    # unary -> (- unary) | primary
    def unary(self):
        if self.current_token.type == "OP" and self.current_token.value == "-":
            tok = self.eat("OP")
            # represent -x as (0 - x)
            return BinaryOp("-", IntLiteral(0, line=tok.line), self.unary(), line=tok.line)
        return self.primary()

    # primary -> NUMBER | STRING | IDENTIFIER | (expr)
    def primary(self):
        tok = self.current_token

        if tok.type == "NUMBER":
            self.eat("NUMBER")
            return IntLiteral(tok.value, line=tok.line)

        if tok.type == "STRING":
            self.eat("STRING")
            return StringLiteral(tok.value, line=tok.line)

        if tok.type == "IDENTIFIER":
            self.eat("IDENTIFIER")
            return VarRef(tok.value, line=tok.line)

        if tok.type == "LPAREN":
            self.eat("LPAREN")
            node = self.expr()
            self.eat("RPAREN")
            return node

        self.error_here(f"Unexpected token in expression: {tok.type}")


def parse(tokens):
    return Parser(tokens).parse()
