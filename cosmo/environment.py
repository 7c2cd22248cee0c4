from typing import Any, Dict, Optional

from cosmo.errors import CosmoError
from cosmo.tokens import Token


class Environment:
    """A scope frame mapping names to values, chained to its enclosing frame."""
    def __init__(self, enclosing: Optional['Environment'] = None):
        self.enclosing = enclosing
        self.values: Dict[str, Any] = {}

    def define(self, name: str, value: Any) -> None:
        # Always the current frame; redefinition and shadowing are allowed
        self.values[name] = value

    def get(self, name: Token) -> Any:
        env: Optional[Environment] = self
        while env is not None:
            if name.lexeme in env.values:
                return env.values[name.lexeme]
            env = env.enclosing
        raise CosmoError('NameError', f"Undefined variable '{name.lexeme}'.", name)

    def assign(self, name: Token, value: Any) -> None:
        env: Optional[Environment] = self
        while env is not None:
            if name.lexeme in env.values:
                env.values[name.lexeme] = value
                return
            env = env.enclosing
        raise CosmoError('NameError', f"Undefined variable '{name.lexeme}'.", name)

    def depth(self) -> int:
        """Number of frames between this one and the outermost scope."""
        count = 0
        env = self.enclosing
        while env is not None:
            count += 1
            env = env.enclosing
        return count
