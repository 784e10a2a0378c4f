## minilua — Copyright © 2025, the minilua authors.  Licensed under AGPLv3; see LICENSE! ⚘
#
# minilua — Command line host: run scripts, inline chunks, stdin or an interactive prompt.
#

import sys
import time
import traceback
from dataclasses import dataclass

import click

from .types import nil
from .errors import LuaParseError, LuaIncompleteParse, LuaTypeError
from .parser import format_parse_error_context
from .formatting import write_without_ansi, format_item
from .builtins import load_builtins
from .interpreter import Interpreter


@dataclass(frozen=True)
class RuntimeConfig:
    verbose: int = 0
    ignore: bool = False
    stats: bool = False
    plain: bool = False


@dataclass
class Chunk:
    """One piece of Lua source handed to the interpreter, named for diagnostics."""
    source: str
    name: str
    show_result: bool = False


class LuaRunner:
    def __init__(self, config: RuntimeConfig):
        self.config = config
        if config.plain:
            sys.stdout.write = sys.stderr.write = write_without_ansi(sys.stdout.write)

        self.stats = {'steps': 0} if config.stats else None
        self.started = time.time()
        self.interpreter = load_builtins(Interpreter(verbosity=config.verbose, stats=self.stats))
        self.failures = 0
        self.completed = 0

    def report(self, exc: Exception, chunk: Chunk) -> None:
        match exc:
            case LuaParseError():
                context = format_parse_error_context(chunk.name, exc.line, exc.column, exc.token, source=chunk.source)
                reason = str(exc).strip().splitlines()[0] if str(exc).strip() else type(exc).__name__
                title, headline = "SYNTAX ERROR.", f"Could not parse `\033[97m{chunk.name}\033[0m`: \033[90m{reason}\033[0m"
            case LuaTypeError():
                where = f"function `\033[1;97m{exc.lua_function}\033[0m`" if exc.lua_function else "main chunk"
                context = ''
                title, headline = "RUNTIME ERROR.", f"\033[1;97m{exc}\033[0m in {where} of `\033[97m{chunk.name}\033[0m`."
            case _:
                context = '\n' + ''.join(traceback.format_exception(exc)).rstrip()
                title, headline = "HOST ERROR.", f"Python code failed while running `\033[97m{chunk.name}\033[0m`!"
        print(f"\033[30;43m {title} \033[0m {headline} (\033[33m{type(exc).__name__}\033[0m){context}", file=sys.stderr)

    def run_chunk(self, chunk: Chunk) -> bool:
        try:
            result = self.interpreter.execute(chunk.source, filename=chunk.name)
        except Exception as exc:
            self.report(exc, chunk)
            self.failures += 1
            return False

        self.completed += 1
        if chunk.show_result and result is not nil:
            print(format_item(result, width=120))
        return True

    def run_all(self, chunks: list[Chunk]) -> bool:
        """Run chunks in order against the same globals; stops at the first failure unless ignoring."""
        for chunk in chunks:
            if not self.run_chunk(chunk) and not self.config.ignore:
                return False
        return True

    def repl(self) -> None:
        if sys.platform != "win32": import readline  # noqa: F401

        print("minilua REPL; type `exit` or Ctrl+D to leave.")
        pending: list[str] = []
        while True:
            try:
                line = input("\033[36m... \033[0m" if pending else "\033[36m<<< \033[0m")
            except (KeyboardInterrupt, EOFError):
                print(""); break

            if not pending:
                if not line.strip(): continue
                if line.strip() in ('quit', 'exit'): break
            pending.append(line)

            chunk = Chunk('\n'.join(pending) + '\n', '<REPL>')
            try:
                result = self.interpreter.execute(chunk.source, filename=chunk.name)
            except LuaIncompleteParse:
                continue
            except Exception as exc:
                self.report(exc, chunk)
            else:
                if result is not nil: print("\033[90m>>>\033[0m", format_item(result, width=72))
            pending = []

    def finish(self) -> int:
        if self.stats is not None and self.completed > 0:
            print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m")
            print(f"step\t\033[97m{self.stats['steps']:,}\033[0m")
            print(f"time\t\033[97m{time.time() - self.started:.3f}s\033[0m")
        return 1 if self.failures else 0


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('scripts', nargs=-1, type=click.File('r', encoding='utf-8'))
@click.option('--execute', '-e', 'inline', multiple=True, metavar='CODE', help='Run a chunk after the scripts, printing any value it returns.')
@click.option('--interactive', '-i', is_flag=True, help='Enter the REPL once scripts and chunks have run.')
@click.option('--ignore', is_flag=True, help='Keep going after a failing script or chunk.')
@click.option('--stats', is_flag=True, help='Display the number of executed statements and elapsed time.')
@click.option('--verbose', '-v', count=True, help='Trace every statement the interpreter executes.')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and send diagnostics to stdout.')
@click.pass_context
def cli(ctx: click.Context, scripts, inline, interactive, ignore, stats, verbose, plain) -> None:
    """Run Lua SCRIPTS (`-` reads stdin); with none, read piped stdin or start the REPL."""
    runner = LuaRunner(RuntimeConfig(verbose=verbose, ignore=ignore, stats=stats, plain=plain))

    chunks = [Chunk(f.read(), '<STDIN>' if f.name == '<stdin>' else f.name) for f in scripts]
    chunks += [Chunk(code.rstrip() + '\n', f'<INPUT_{i}>', show_result=True) for i, code in enumerate(inline, 1)]
    if not chunks and not interactive and not sys.stdin.isatty():
        chunks.append(Chunk(sys.stdin.read(), '<STDIN>'))

    if runner.run_all(chunks) and (interactive or not chunks):
        runner.repl()
    ctx.exit(runner.finish())


def main() -> None:
    cli(prog_name='minilua', auto_envvar_prefix='MINILUA')


if __name__ == "__main__":
    main()
