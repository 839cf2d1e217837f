from .basic_io import BasicIO
from minirb.builtin_function import BuiltinFunction
from minirb.environment import Environment
from minirb.values import to_string
from typing import List, Any, Optional

def populate_io_environment(env: Optional[Environment] = None, basic_io: Optional[BasicIO] = None) -> Environment:
        """Bind `puts` and `gets` in `env` (a fresh environment by default)."""
        if env is None:
            env = Environment()
        if basic_io is None:
            basic_io = BasicIO()

        def std_puts(args: List[Any]) -> Any:
            for arg in args:
                basic_io.write_line(to_string(arg))
            return None

        def std_gets(args: List[Any]) -> Any:
            return basic_io.read_line()

        env.set('puts', BuiltinFunction('puts', std_puts))
        env.set('gets', BuiltinFunction('gets', std_gets))

        return env
