"""Running a single exercise and resetting it."""

from __future__ import annotations

import contextlib
import subprocess
import sys
from collections.abc import Iterator

from rich.console import Console

from rustlings.exercise import CompileError, Exercise, Mode
from rustlings.ui import success, warn
from rustlings.verify import ExerciseFailed, test


@contextlib.contextmanager
def _spinner(message: str) -> Iterator[None]:
    console = Console(file=sys.stdout)
    if not console.is_terminal:
        yield
        return
    with console.status(message):
        yield


def _compile_and_run(exercise: Exercise) -> None:
    with _spinner(f"Compiling {exercise}..."):
        try:
            compiled = exercise.compile()
        except CompileError as exc:
            compile_error = exc
        else:
            compile_error = None
            with compiled:
                output = compiled.run()

    if compile_error is not None:
        warn(f"Compilation of {exercise} failed!, Compiler error message:\n")
        print(compile_error.output.stderr)
        raise ExerciseFailed(exercise) from compile_error

    if output.success:
        print(output.stdout)
        success(f"Successfully ran {exercise}")
        return

    print(output.stdout)
    print(output.stderr)
    warn(f"Ran {exercise} with errors")
    raise ExerciseFailed(exercise)


def run(exercise: Exercise, verbose: bool = False) -> None:
    """Compile and run one exercise; raise ExerciseFailed on failure."""
    if exercise.mode is Mode.TEST:
        test(exercise, verbose)
    else:
        _compile_and_run(exercise)


def reset(exercise: Exercise) -> subprocess.Popen:
    """Start stashing the exercise's changes with git; raise ExerciseFailed if git cannot start."""
    try:
        return subprocess.Popen(["git", "stash", "--", str(exercise.path)])
    except OSError as exc:
        raise ExerciseFailed(exercise) from exc