import sys
import traceback

import colorama
from colorama import Fore, Style

from ast_nodes import Program, Print
from errors import EZLangError
from interpreter import Interpreter
from lexer import tokenize
from parser import Parser
from runner import run


EXAMPLES = {
    "hello": 'print "Hello, World!"',
    "variables": "x = 10\nprint x\nx = x + 5\nprint x",
    "if": 'x = 10\nif x > 5 {\n  print "x is greater than 5"\n}',
    "math": "a = 10\nb = 5\nprint a + b\nprint a - b\nprint a * b\nprint a / b",
}

USAGE = """Usage:
  python cli.py run <file.ez>
  python cli.py parse <file.ez>
  python cli.py tokens <file.ez>
  python cli.py example [name]
  python cli.py repl
  (optional) --debug to show Python traceback
  (optional) --trace to print executed statements to stderr
  (optional) --no-color to disable colored errors"""


class Options:
    def __init__(self, debug=False, trace=False, color=True):
        self.debug = debug
        self.trace = trace
        self.color = color


def print_error(message, options):
    if options.color and sys.stdout.isatty():
        print(f"{Fore.RED}{message}{Style.RESET_ALL}")
    else:
        print(message)


# Simple AST printer (so you can SEE what the parser built)
def ast_to_dict(node):
    if node is None:
        return None

    t = node.__class__.__name__
    d = {"type": t}

    if t == "Program":
        d["statements"] = [ast_to_dict(s) for s in node.statements]
    elif t == "Print":
        d["expr"] = ast_to_dict(node.expr)
    elif t == "Assign":
        d["name"] = node.name
        d["expr"] = ast_to_dict(node.expr)
    elif t == "If":
        d["condition"] = ast_to_dict(node.condition)
        d["body"] = [ast_to_dict(s) for s in node.body]
    elif t in ("IntLiteral", "StringLiteral"):
        d["value"] = node.value
    elif t == "VarRef":
        d["name"] = node.name
    elif t == "BinaryOp":
        d["op"] = node.op
        d["left"] = ast_to_dict(node.left)
        d["right"] = ast_to_dict(node.right)
    else:
        d["raw"] = str(node)

    return d


def pretty(obj, indent=0):
    sp = "  " * indent
    if isinstance(obj, dict):
        lines = []
        for k, v in obj.items():
            if isinstance(v, (dict, list)):
                lines.append(f"{sp}{k}:")
                lines.append(pretty(v, indent + 1))
            else:
                lines.append(f"{sp}{k}: {v}")
        return "\n".join(lines)
    if isinstance(obj, list):
        lines = []
        for item in obj:
            lines.append(f"{sp}-")
            lines.append(pretty(item, indent + 1))
        return "\n".join(lines)
    return f"{sp}{obj}"


def read_source(path, options):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        print_error(f"Error: cannot read file: {path} ({e.strerror})", options)
        sys.exit(1)


def cmd_parse(path, options):
    code = read_source(path, options)
    try:
        program = Parser(tokenize(code)).parse()
    except EZLangError as e:
        print_error(f"Parse error: {e}", options)
        sys.exit(1)

    if program.statements:
        print(pretty(ast_to_dict(program)))


def cmd_tokens(path, options):
    code = read_source(path, options)
    try:
        tokens = tokenize(code)
    except EZLangError as e:
        print_error(f"Lex error: {e}", options)
        sys.exit(1)

    for tok in tokens:
        print(f"  {tok.line}:{tok.column}  {tok!r}")


def run_source(code, options):
    result = run(code, trace=options.trace)
    if options.debug and result.exception is not None and result.error_kind == "internal":
        traceback.print_exception(result.exception)
    if not result.ok:
        print_error(result.render(), options)
        sys.exit(1)
    if result.output:
        print(result.output)


def cmd_run(path, options):
    run_source(read_source(path, options), options)


def cmd_example(name, options):
    if name is None:
        print("Examples:")
        for key, code in EXAMPLES.items():
            first_line = code.splitlines()[0]
            print(f"  {key:<10} {first_line}")
        return

    if name not in EXAMPLES:
        print_error(f"Unknown example: {name}", options)
        sys.exit(1)

    run_source(EXAMPLES[name], options)


def _count_braces_delta(line: str) -> int:
    # Minimal brace balancer for REPL multiline input.
    # Ignores braces inside "..." strings.
    delta = 0
    in_string = False
    for ch in line:
        if ch == '"':
            in_string = not in_string
        elif not in_string:
            if ch == "{":
                delta += 1
            elif ch == "}":
                delta -= 1
    return delta


def parse_snippet(source):
    # First, try parsing as a normal program (statements).
    tokens = tokenize(source)
    try:
        return Parser(tokens).parse()
    except EZLangError as parse_err:
        # If that fails, try parsing as a single expression and auto-print it.
        try:
            expr = Parser(tokens).parse_expression()
        except EZLangError:
            raise parse_err
        return Program((Print(expr, line=getattr(expr, "line", None)),))


def cmd_repl(options):
    # One interpreter for the whole session so variables persist.
    interp = Interpreter(trace=options.trace)

    print("EZLang REPL. Type :q to quit.")

    buffer_lines = []
    brace_depth = 0
    while True:
        prompt = "ez> " if not buffer_lines else "... "
        try:
            line = input(prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            break

        stripped = line.strip()
        if not buffer_lines and stripped in (":q", ":quit", "quit", "exit"):
            break

        if not stripped and not buffer_lines:
            continue

        buffer_lines.append(line)
        brace_depth += _count_braces_delta(line)

        # Wait for block completion if braces aren't balanced yet.
        if brace_depth > 0:
            continue

        source = "\n".join(buffer_lines)
        buffer_lines = []
        brace_depth = 0

        try:
            program = parse_snippet(source)
            for out_line in interp.run_incremental(program):
                print(out_line)
        except EZLangError as e:
            print_error(f"Error: {e}", options)
        except Exception as e:
            if options.debug:
                traceback.print_exc()
            else:
                print_error(f"Error: internal error: {type(e).__name__}: {e}", options)


def main():
    colorama.just_fix_windows_console()

    options = Options()
    argv = sys.argv[1:]
    if "--debug" in argv:
        options.debug = True
        argv.remove("--debug")
    if "--trace" in argv:
        options.trace = True
        argv.remove("--trace")
    if "--no-color" in argv:
        options.color = False
        argv.remove("--no-color")

    if not argv:
        print(USAGE)
        sys.exit(1)

    cmd = argv[0]

    if cmd == "repl":
        if len(argv) != 1:
            print(USAGE)
            sys.exit(1)
        cmd_repl(options)
        return

    if cmd == "example":
        if len(argv) > 2:
            print(USAGE)
            sys.exit(1)
        cmd_example(argv[1] if len(argv) == 2 else None, options)
        return

    if len(argv) != 2:
        print(USAGE)
        sys.exit(1)

    path = argv[1]

    if cmd == "run":
        cmd_run(path, options)
    elif cmd == "parse":
        cmd_parse(path, options)
    elif cmd == "tokens":
        cmd_tokens(path, options)
    else:
        print_error(f"Unknown command: {cmd}", options)
        sys.exit(1)


if __name__ == "__main__":
    main()
