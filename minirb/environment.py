from typing import Any, Dict, Iterator, Optional


class Environment:
    """A scope mapping identifiers to values, chained to an enclosing scope.

    Lookups walk outward through the parents. Assignment always binds in
    this scope, shadowing (never overwriting) a binding of the same name
    further out.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    def __contains__(self, name: str) -> bool:
        return self.resolve(name) is not None

    def resolve(self, name: str) -> Optional['Environment']:
        """Return the innermost environment that binds `name`, or None."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env
            env = env.parent
        return None

    def get(self, name: str) -> Any:
        # Unbound names read as nil
        owner = self.resolve(name)
        if owner is None:
            return None
        return owner.values[name]

    def set(self, name: str, value: Any) -> Any:
        self.values[name] = value
        return value

    def child(self) -> 'Environment':
        return Environment(parent=self)

    def chain(self) -> Iterator['Environment']:
        env: Optional[Environment] = self
        while env is not None:
            yield env
            env = env.parent

    @property
    def depth(self) -> int:
        return sum(1 for _ in self.chain()) - 1
