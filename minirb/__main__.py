"""CLI entry point for the minirb interpreter.

Usage:
    python -m minirb [-v|-vv|-vvv] [--lexical-scope] [program_file]
    python -m minirb [-v...] --emit-ast <program_file>
    python -m minirb --dump-ast <program_file>
    python -m minirb [-v...] --ast <ast_json_file>

Options:
  -v               Increase debug verbosity (can be repeated)
  --lexical-scope  Resolve free variables where functions are defined
                   instead of where they are called
  --emit-ast       Parse the given program and emit an AST JSON file
  --dump-ast       Print the parsed program as an indented outline
  --ast            Execute a previously emitted AST JSON file

Without a program file an interactive session is started. Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .ast_json import ast_to_obj, ast_from_obj, dump_ast
from .errors import MinirbError
from .interpreter import Interpreter
from .parser import parse_program
from .repl import Shell


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog='minirb', description="minirb language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--lexical-scope', action='store_true',
                        help='chain function calls to the defining environment')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='PROGRAM_FILE', help='emit AST JSON for the given program')
    group.add_argument('--dump-ast', metavar='PROGRAM_FILE', help='print the AST of the given program')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='program file to execute (omit for an interactive session)')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        try:
            statements = parse_program(source)
        except MinirbError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(statements), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    if args.dump_ast:
        try:
            statements = parse_program(read_source(Path(args.dump_ast)))
        except MinirbError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        for stmt in statements:
            print(dump_ast(stmt))
        return

    interpreter = Interpreter(debug_level=args.v, lexical_scoping=args.lexical_scope)
    try:
        # Execute from AST JSON
        if args.ast:
            try:
                statements = ast_from_obj(json.loads(read_source(Path(args.ast))))
            except (ValueError, TypeError, KeyError) as e:
                print(f"Error: invalid AST file {args.ast}: {e}", file=sys.stderr)
                sys.exit(1)
            if not isinstance(statements, list):
                statements = [statements]
        elif args.program:
            statements = parse_program(read_source(Path(args.program)))
        else:
            Shell(interpreter).cmdloop()
            return
        interpreter.run(statements)
    except MinirbError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except RecursionError:
        print("Error: maximum recursion depth exceeded", file=sys.stderr)
        sys.exit(1)
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()
