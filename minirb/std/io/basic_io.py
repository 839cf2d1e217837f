import builtins
from typing import Optional, TextIO


class BasicIO:
    """Line-oriented console access used by the `puts` and `gets` builtins.

    Without explicit streams the process's standard streams are used,
    looked up at call time so redirected or captured streams are honoured.
    """
    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin
        self.stdout = stdout

    def write_line(self, text: str) -> None:
        print(text, file=self.stdout)

    def read_line(self) -> Optional[str]:
        if self.stdin is None:
            try:
                return builtins.input()
            except EOFError:
                return None
        line = self.stdin.readline()
        if line == '':
            return None
        if line.endswith('\n'):
            line = line[:-1]
        return line
