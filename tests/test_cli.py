## minilua — CLI integration tests

import os, sys
import subprocess
from pathlib import Path


def repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def run_cli(*cli_args: str | Path, stdin: str | None = None, env: dict | None = None, extra_args: list[str] | None = None) -> subprocess.CompletedProcess:
    args = [sys.executable, "-m", "minilua", "--plain"]
    if extra_args:
        args.extend(extra_args)
    args.extend(str(arg) for arg in cli_args)
    merged_env = os.environ.copy()
    merged_env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(repo_root() / "src"), merged_env.get("PYTHONPATH")]))
    if env:
        merged_env.update(env)
    return subprocess.run(args, input=stdin if stdin is not None else "", capture_output=True, text=True, env=merged_env)


def _strip_output_lines(output: str) -> list[str]:
    return [line for line in output.splitlines() if line.strip()]


def test_cli_parser_error_shows_context():
    result = run_cli(repo_root() / "tests" / "error-parser.lua")
    assert result.returncode == 1
    out = result.stdout
    assert "SYNTAX ERROR." in out
    assert "Could not parse `" in out
    assert "File \"" in out
    assert "line 3" in out


def test_cli_runtime_error_names_function_and_stops():
    result = run_cli(repo_root() / "tests" / "error-runtime.lua")
    assert result.returncode == 1
    out = result.stdout
    assert "before" in out
    assert "after" not in out
    assert "RUNTIME ERROR." in out
    assert "attempt to index a nil value" in out
    assert "function `first_field`" in out
    assert "InvalidIndex" in out


def test_cli_runtime_error_in_main_chunk():
    result = run_cli("-e", "return 1 + nil")
    assert result.returncode == 1
    assert "attempt to perform arithmetic on a nil value in main chunk" in result.stdout




def test_cli_runs_script_file(tmp_path: Path):
    program = tmp_path / "hello.lua"
    program.write_text('print("RUNFILE")\n', encoding='utf-8')

    result = run_cli(program)

    assert result.returncode == 0
    assert _strip_output_lines(result.stdout) == ["RUNFILE"]


def test_cli_runs_scripts_then_inline_chunks(tmp_path: Path):
    first = tmp_path / "first.lua"
    first.write_text('print("FIRST")\n', encoding='utf-8')
    second = tmp_path / "second.lua"
    second.write_text('print("SECOND")\n', encoding='utf-8')

    result = run_cli(first, "-e", 'print("THIRD")', second)

    assert result.returncode == 0
    assert _strip_output_lines(result.stdout) == ["FIRST", "SECOND", "THIRD"]


def test_cli_globals_persist_between_inputs(tmp_path: Path):
    setup = tmp_path / "setup.lua"
    setup.write_text('function square(x) return x * x end\n', encoding='utf-8')

    result = run_cli(setup, "-e", "return square(12)")

    assert result.returncode == 0
    assert _strip_output_lines(result.stdout) == ["144"]


def test_cli_inline_chunk_prints_returned_value():
    result = run_cli("-e", "return {1, 2, name = 'x'}", "-e", "return 'text'", "-e", "x = 1")
    assert result.returncode == 0
    assert _strip_output_lines(result.stdout) == ['{1, 2, name = "x"}', '"text"']


def test_cli_stops_at_first_failure():
    result = run_cli("-e", "return nil()", "-e", "print('not reached')")
    assert result.returncode == 1
    assert "attempt to call a nil value" in result.stdout
    assert "not reached" not in result.stdout


def test_cli_ignore_continues_after_failure():
    result = run_cli("-e", "return nil()", "-e", "print('still running')", extra_args=["--ignore"])
    assert result.returncode == 1
    assert "attempt to call a nil value" in result.stdout
    assert "still running" in result.stdout


def test_cli_interactive_after_chunks_reads_prompt_input():
    result = run_cli("-e", "x = 20", "-i", stdin="function f()\nreturn x + 1\nend\nreturn f()\nexit\n")
    assert result.returncode == 0
    assert ">>> 21" in result.stdout


def test_cli_stdin_implicit_runs_program():
    result = run_cli(stdin='print("IMPLICIT")\n')
    assert result.returncode == 0
    assert _strip_output_lines(result.stdout) == ["IMPLICIT"]


def test_cli_stdin_dash_runs_program():
    result = run_cli("-", stdin='for i = 1, 3 do print(i) end\n')
    assert result.returncode == 0
    assert _strip_output_lines(result.stdout) == ["1", "2", "3"]


def test_cli_stats_and_verbose_trace(tmp_path: Path):
    program = tmp_path / "count.lua"
    program.write_text('local x = 1\nx = x + 1\n', encoding='utf-8')

    result = run_cli(program, extra_args=["--stats", "-v"])

    assert result.returncode == 0
    out = result.stdout
    assert "local x" in out
    assert "x = …" in out
    assert "STATISTICS." in out
    assert "step\t2" in out


def test_cli_options_from_environment():
    result = run_cli("-e", "x = 1", env={"MINILUA_STATS": "1"})
    assert result.returncode == 0
    assert "STATISTICS." in result.stdout


def test_cli_missing_script_is_usage_error():
    result = run_cli("does-not-exist.lua")
    assert result.returncode == 2
    assert "does-not-exist.lua" in result.stdout + result.stderr
