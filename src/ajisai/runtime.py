## ajisai — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import logging

from .config import EngineConfig
from .errors import AjisaiError, AjisaiRecursionLimit, AjisaiWordNotFound
from .parser import tokenize
from .builtins import load_builtins_machine
from .interpreter import interpret


log = logging.getLogger(__name__)


class Engine:
    """Minimal engine facade focused on embedding in a host: execute text, then read snapshots."""

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig.from_env()
        self.reset()

    def reset(self) -> None:
        self.machine = load_builtins_machine(self.config)

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def execute(self, source: str) -> None:
        """Tokenize then evaluate. On failure the stack is left as it was reached, and the engine stays usable."""
        machine = self.machine
        try:
            tokens = tokenize(source)
            interpret(tokens, machine)
        except AjisaiError as exc:
            exc.stack = list(machine.stack)
            log.info("Execution failed with %s: %s", exc.kind, exc)
            raise
        except RecursionError:
            raise AjisaiRecursionLimit("Evaluation nested too deeply for the host stack.",
                                       limit=self.config.max_depth) from None
        finally:
            machine.description = None
            machine.depth = 0

    def run(self, source: str) -> list:
        self.execute(source)
        return self.get_stack()

    # Snapshots ───────────────────────────────────────────────────────────────────────────────
    def get_stack(self) -> list:
        return list(self.machine.stack)

    def get_register(self):
        return self.machine.rstack[-1] if self.machine.rstack else None

    def drain_output(self) -> str:
        return self.machine.output.drain()

    # Introspection ───────────────────────────────────────────────────────────────────────────
    def get_custom_words(self) -> list[str]:
        return self.machine.dictionary.custom_words()

    def get_custom_words_with_descriptions(self) -> list[tuple[str, str | None]]:
        words = self.machine.dictionary.words
        return [(name, words[name].description) for name in self.get_custom_words()]

    def get_custom_words_info(self) -> list[tuple[str, str | None, bool]]:
        dictionary = self.machine.dictionary
        return [(name, desc, dictionary.is_protected(name)) for name, desc in self.get_custom_words_with_descriptions()]

    def list_words(self) -> list[str]:
        return self.machine.dictionary.names()

    def get_dependencies(self, name: str) -> list[str]:
        """Custom words whose bodies call `name`, which block deleting or redefining it."""
        if self.machine.dictionary.lookup(name) is None:
            raise AjisaiWordNotFound(f"Word `{name.upper()}` is not defined.", word=name.upper())
        return self.machine.dictionary.get_dependents(name)

    def delete_word(self, name: str) -> None:
        self.machine.dictionary.delete(name)
