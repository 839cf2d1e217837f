"""Interactive read-eval-print loop for minirb. Uses cmd as backend."""

import cmd

from termcolor import colored

from .errors import LexerError, MinirbError
from .interpreter import Interpreter
from .lexer import Lexer, TokenKind
from .parser import Parser
from .values import to_string


def needs_more_input(source: str) -> bool:
    """Return True while `source` has a `def` block that is not yet closed.

    Badly formed input counts as complete so the parser gets to report it.
    """
    depth = 0
    try:
        for token in Lexer(source):
            if token.kind is not TokenKind.KEYWORD:
                continue
            if token.lexeme == 'def':
                depth += 1
            elif token.lexeme == 'end':
                depth -= 1
    except LexerError:
        return False
    return depth > 0


class Shell(cmd.Cmd):
    """minirb interpreter shell."""
    intro = "minirb interactive interpreter\nType 'exit' or press Ctrl-D to leave."
    prompt = ">> "
    secondary_prompt = ".. "  # used while a def block is open
    _tmp_prompt = ">> "

    def __init__(self, interpreter: Interpreter, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interpreter = interpreter
        self._tmp_line = ""

    def parseline(self, line):
        """Only a bare `exit` or `EOF` is a command; every other line is code."""
        line = line.strip()
        if line in ("exit", "EOF"):
            return line, "", line
        return None, None, line

    def default(self, line):
        """Evaluates minirb code, buffering lines until every def is closed."""
        source = self._tmp_line + line + "\n"
        if needs_more_input(source):
            self._tmp_line = source
            self.prompt = self.secondary_prompt
            return
        self._tmp_line = ""
        self.prompt = self._tmp_prompt
        self.execute(source)

    def execute(self, source: str) -> None:
        try:
            parser = Parser(Lexer(source))
            parser.skip_separators()
            while not parser.at_end():
                node = parser.parse_statement()
                value = self.interpreter.evaluate(node, self.interpreter.global_env)
                print(f"=> {to_string(value)}", file=self.stdout)
                parser.skip_separators()
        except MinirbError as e:
            self.report(f"Error: {e}")
        except RecursionError:
            self.report("Error: maximum recursion depth exceeded")

    def report(self, message: str) -> None:
        print(colored(message, "red", attrs=["bold"]), file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return True

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
