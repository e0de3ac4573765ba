## ajisai — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# ajisai — A small concatenative stack language with exact rationals and vectors.
#

import re
import sys
import logging
from dataclasses import dataclass

import click

from .errors import AjisaiError, AjisaiParseError, AjisaiDependencyError
from .parser import tokenize, format_parse_error_context
from .formatting import write_without_ansi, show_stack

from . import api


@dataclass(frozen=True)
class RunnerConfig:
    verbose: int
    ignore: bool
    plain: bool


@dataclass
class ExecutionItem:
    source: str
    filename: str
    show_stack: bool = False


def _banner(kind: str) -> str:
    return re.sub(r'(?<!^)(?=[A-Z])', ' ', kind).upper() + '.'


class AjisaiRunner:
    def __init__(self, config: RunnerConfig):
        self.ignore = config.ignore
        self.plain = config.plain

        if self.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        level = {0: logging.WARNING, 1: logging.INFO}.get(config.verbose, logging.DEBUG)
        logging.basicConfig(level=level, stream=sys.stderr, format='%(levelname)s %(name)s: %(message)s')

        self.engine = api._ENGINE
        self.failure = False

    def _maybe_fatal_error(self, message: str, detail: str, context: str = '', is_repl: bool = False) -> None:
        print(f'\033[30;43m {message} \033[0m {detail}\n{context}', file=sys.stderr)
        if is_repl: return
        self.failure = True
        if not self.ignore: sys.exit(1)

    def _handle_exception(self, exc: AjisaiError, filename: str, source: str, is_repl: bool = False) -> None:
        if isinstance(exc, AjisaiParseError):
            context = format_parse_error_context(filename, exc.line, exc.column, exc.token, source=source)
            context += f"\n\033[90m{exc.reason}\033[0m\n"
            self._maybe_fatal_error("SYNTAX ERROR.", f"Parsing `\033[97m{filename}\033[0m` caused a problem!", context, is_repl)
        elif isinstance(exc, AjisaiDependencyError):
            detail = f"Word `\033[1;97m{exc.word}\033[0m` is still used by: {', '.join(exc.dependents)}"
            self._maybe_fatal_error(_banner(exc.kind), detail, '', is_repl)
        else:
            detail = f"Word \033[1;97m`{exc.word}`\033[0m from `\033[97m{filename}\033[0m` failed: {exc}"
            print(f'\033[30;43m {_banner(exc.kind)} \033[0m {detail}', file=sys.stderr)
            print('\033[1;33m  Stack content is\033[0;33m\n    ', end='', file=sys.stderr)
            show_stack(exc.stack or [], width=None, file=sys.stderr)
            print('\033[0m', file=sys.stderr)
            if is_repl: return
            self.failure = True
            if not self.ignore: sys.exit(1)

    def _flush_output(self) -> None:
        text = self.engine.drain_output()
        if not text: return
        sys.stdout.write(text if text.endswith('\n') else text + '\n')

    def execute_items(self, items: list[ExecutionItem]) -> None:
        for item in items:
            self._execute_script(item.source, item.filename, show=item.show_stack)

    def _execute_script(self, source: str, filename: str, is_repl: bool = False, show: bool = False) -> None:
        try:
            self.engine.execute(source)
        except AjisaiError as exc:
            self._flush_output()
            self._handle_exception(exc, filename, source, is_repl=is_repl)
            return
        self._flush_output()
        if show:
            print("\033[90m>>>\033[0m ", end='')
            show_stack(self.engine.get_stack(), width=None)

    def repl(self) -> None:
        if sys.platform != "win32": import readline

        print('ajisai - Concatenative stack language REPL; type Ctrl+C to exit.')
        source = ""

        while True:
            try:
                prompt = "\033[36m<<< \033[0m" if not source.strip() else "\033[36m... \033[0m"
                line = input(prompt)
                if len(line.strip()) == 0: continue
                if line.strip() in ('quit', 'exit'): break
                source += line + "\n"

                # Keep reading lines while a string, vector or description is left open.
                try:
                    tokenize(source)
                except AjisaiParseError as exc:
                    if exc.reason.startswith("Unterminated"): continue

                self._execute_script(source, '<REPL>', is_repl=True, show=True)
                source = ""

            except (KeyboardInterrupt, EOFError):
                print(""); break

    def finalize(self) -> int:
        return 1 if self.failure else 0


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--verbose', '-v', default=0, count=True, help='Log word definitions (-v) or every evaluation step (-vv).')
@click.option('--ignore', '-i', is_flag=True, help='Ignore errors and continue executing.')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.option('--command', '-c', 'commands', multiple=True, help='Inline code to run after the files; shows the stack.')
@click.option('--repl', '-r', is_flag=True, help='Start the interactive prompt after running everything else.')
@click.argument('files', nargs=-1, type=click.File('r', encoding='utf-8'))
@click.pass_context
def cli(ctx: click.Context, verbose: int, ignore: bool, plain: bool, commands: tuple[str, ...], repl: bool, files) -> None:
    runner = AjisaiRunner(RunnerConfig(verbose=verbose, ignore=ignore, plain=plain))

    items = [ExecutionItem(f.read(), '<STDIN>' if f.name == '<stdin>' else f.name) for f in files]
    items += [ExecutionItem(code, f'<INPUT_{i}>', show_stack=True) for i, code in enumerate(commands, start=1)]
    if not items and not repl and not sys.stdin.isatty():
        items.append(ExecutionItem(sys.stdin.read(), '<STDIN>'))

    runner.execute_items(items)
    if repl or not items:
        runner.repl()
    ctx.exit(runner.finalize())


def main(argv: list[str] | None = None) -> None:
    cli.main(args=argv, prog_name='ajisai')


if __name__ == "__main__":
    main()
