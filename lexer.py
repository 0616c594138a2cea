from errors import EZLangLexError
from values import INT_MAX


class Token:
    def __init__(self, type, value=None, line=1, column=1):
        self.type = type
        self.value = value
        self.line = line
        self.column = column

    def __repr__(self):
        if self.value is not None:
            return f"{self.type}({self.value!r})"
        return f"{self.type}"


KEYWORDS = {
    "print": "PRINT",
    "if": "IF",
}

SINGLE_CHAR_TOKENS = {
    "{": "LBRACE",
    "}": "RBRACE",
    "(": "LPAREN",
    ")": "RPAREN",
}


class Lexer:
    def __init__(self, text):
        self.text = text
        self.pos = 0
        self.current_char = text[0] if text else None
        self.line = 1
        self.column = 1

    def advance(self):
        # track line/column based on current_char before moving
        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1
        if self.pos >= len(self.text):
            self.current_char = None
        else:
            self.current_char = self.text[self.pos]

    def peek(self):
        nxt = self.pos + 1
        if nxt >= len(self.text):
            return None
        return self.text[nxt]

    def skip_whitespace(self):
        while self.current_char and self.current_char in " \t\r\n":
            self.advance()

    @staticmethod
    def is_word_char(ch):
        # ASCII letters and underscore only; digits end a word
        return ch is not None and (ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z"))

    def read_word(self):
        start_line, start_col = self.line, self.column

        # keywords are tried before identifiers, so `printx` is PRINT then x
        for word, kind in KEYWORDS.items():
            if self.text.startswith(word, self.pos):
                for _ in range(len(word)):
                    self.advance()
                return Token(kind, word, line=start_line, column=start_col)

        result = ""
        while self.is_word_char(self.current_char):
            result += self.current_char
            self.advance()
        return Token("IDENTIFIER", result, line=start_line, column=start_col)

    def read_number(self):
        start_line, start_col = self.line, self.column
        result = ""
        while self.current_char and self.current_char in "0123456789":
            result += self.current_char
            self.advance()
        # length check first: int() refuses very long digit strings
        digits = result.lstrip("0") or "0"
        if len(digits) > len(str(INT_MAX)) or int(digits) > INT_MAX:
            raise EZLangLexError("Integer literal out of range", start_line, start_col)
        return Token("NUMBER", int(digits), line=start_line, column=start_col)

    def read_string(self):
        # no escape processing: everything up to the next quote is the value
        start_line, start_col = self.line, self.column
        self.advance()  # skip opening quote
        result = ""
        while self.current_char is not None and self.current_char != '"':
            result += self.current_char
            self.advance()

        if self.current_char != '"':
            raise EZLangLexError(f"Unterminated string (started at line {start_line}, col {start_col})")

        self.advance()  # skip closing quote
        return Token("STRING", result, line=start_line, column=start_col)

    def get_next_token(self):
        while self.current_char:

            if self.current_char in " \t\r\n":
                self.skip_whitespace()
                continue

            start_line, start_col = self.line, self.column

            if self.current_char in "0123456789":
                return self.read_number()

            if self.current_char == '"':
                return self.read_string()

            if self.is_word_char(self.current_char):
                return self.read_word()

            if self.current_char in SINGLE_CHAR_TOKENS:
                ch = self.current_char
                self.advance()
                return Token(SINGLE_CHAR_TOKENS[ch], ch, line=start_line, column=start_col)

            # == before =
            if self.current_char == "=":
                if self.peek() == "=":
                    self.advance()
                    self.advance()
                    return Token("COMPARE", "==", line=start_line, column=start_col)
                self.advance()
                return Token("ASSIGN", "=", line=start_line, column=start_col)

            if self.current_char in "+-*/":
                op = self.current_char
                self.advance()
                return Token("OP", op, line=start_line, column=start_col)

            # <=, <, >=, >
            if self.current_char in "<>":
                op = self.current_char
                self.advance()
                if self.current_char == "=":
                    op += "="
                    self.advance()
                return Token("COMPARE", op, line=start_line, column=start_col)

            raise EZLangLexError(f"Unexpected character {self.current_char!r}", start_line, start_col)

        return None

    def tokenize(self):
        tokens = []
        while True:
            tok = self.get_next_token()
            if tok is None:
                return tokens
            tokens.append(tok)


def tokenize(source):
    return Lexer(source).tokenize()
