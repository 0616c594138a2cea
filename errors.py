class EZLangError(Exception):
    kind = "error"

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def location(self) -> str:
        if self.line is None:
            return ""
        if self.column is None:
            return f" at line {self.line}"
        return f" at line {self.line}, col {self.column}"

    def __str__(self) -> str:
        return f"{self.message}{self.location()}"


class EZLangLexError(EZLangError):
    kind = "lex"


class EZLangSyntaxError(EZLangError):
    kind = "syntax"


class EZLangRuntimeError(EZLangError):
    kind = "runtime"
