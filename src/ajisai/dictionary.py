## ajisai — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import logging
from dataclasses import dataclass, field

from .types import Token, WordDefinition, iter_symbols, quotation_to_tokens
from .errors import AjisaiDependencyError, AjisaiRedefineBuiltin, AjisaiDeleteBuiltin, AjisaiWordNotFound


log = logging.getLogger(__name__)


@dataclass
class Dictionary:
    """Words by upper-case name, plus the reverse graph of which custom words call which."""
    words: dict[str, WordDefinition] = field(default_factory=dict)
    dependents: dict[str, set[str]] = field(default_factory=dict)

    # Registration helpers
    def add_builtin(self, name: str, description: str | None = None) -> None:
        self.words[name] = WordDefinition(tokens=[], is_builtin=True, description=description)

    def lookup(self, name: str) -> WordDefinition | None:
        return self.words.get(name.upper())

    def is_builtin(self, name: str) -> bool:
        return (word := self.lookup(name)) is not None and word.is_builtin

    def get_dependents(self, name: str) -> list[str]:
        return sorted(self.dependents.get(name.upper(), ()))

    def is_protected(self, name: str) -> bool:
        return bool(self.dependents.get(name.upper()))

    def custom_words(self) -> list[str]:
        return sorted(n for n, w in self.words.items() if not w.is_builtin)

    def names(self, prefix: str = "") -> list[str]:
        return sorted(n for n in self.words if n.startswith(prefix))

    # Mutation
    def define(self, name: str, body: list, description: str | None = None) -> WordDefinition:
        key = name.upper()
        if (existing := self.words.get(key)) is not None:
            if existing.is_builtin:
                raise AjisaiRedefineBuiltin(f"Cannot redefine built-in word `{key}`.", word=key)
            self._ensure_unused(key, "redefine")
            self._unlink(key, existing)

        # Custom words called by the body, never the word itself.
        dependencies = frozenset(
            sym for sym in iter_symbols(body)
            if sym != key and (w := self.words.get(sym)) is not None and not w.is_builtin)
        for dep in dependencies:
            self.dependents.setdefault(dep, set()).add(key)

        # Words written earlier that already call this name start depending on it now.
        if existing is None:
            call = Token(Token.SYMBOL, key)
            for other, w in self.words.items():
                if not w.is_builtin and call in w.tokens:
                    w.dependencies = w.dependencies | {key}
                    self.dependents.setdefault(key, set()).add(other)

        word = WordDefinition(tokens=quotation_to_tokens(body), is_builtin=False,
                              description=description, dependencies=dependencies)
        self.words[key] = word
        log.info("Defined `%s` depending on %s.", key, sorted(dependencies) or "nothing")
        return word

    def delete(self, name: str) -> None:
        key = name.upper()
        if (existing := self.words.get(key)) is None:
            raise AjisaiWordNotFound(f"Word `{key}` is not defined.", word=key)
        if existing.is_builtin:
            raise AjisaiDeleteBuiltin(f"Cannot delete built-in word `{key}`.", word=key)
        self._ensure_unused(key, "delete")

        del self.words[key]
        for users in self.dependents.values():
            users.discard(key)
        self.dependents.pop(key, None)
        self._prune()
        log.info("Deleted `%s`.", key)

    def _ensure_unused(self, key: str, action: str) -> None:
        if users := self.dependents.get(key):
            names = ', '.join(sorted(users))
            raise AjisaiDependencyError(f"Cannot {action} `{key}`, it is used by: {names}.",
                                        word=key, dependents=users)

    def _unlink(self, key: str, word: WordDefinition) -> None:
        for dep in word.dependencies:
            if (users := self.dependents.get(dep)) is not None:
                users.discard(key)
        self._prune()

    def _prune(self) -> None:
        for dep in [d for d, users in self.dependents.items() if not users]:
            del self.dependents[dep]
