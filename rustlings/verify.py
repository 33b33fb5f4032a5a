"""Checking exercises one after another, with progress and completion prompts."""

from __future__ import annotations

import contextlib
import sys
from collections.abc import Iterable, Iterator

from rich.console import Console
from rich.text import Text

from rustlings.exercise import CompileError, CompiledExercise, Exercise, Mode
from rustlings.ui import no_emoji, success, warn

_BAR_WIDTH = 60
_SEPARATOR = "===================="


class ExerciseFailed(Exception):
    """Raised when an exercise fails to compile, fails its run, or is not finished."""

    def __init__(self, exercise: Exercise) -> None:
        super().__init__(f"{exercise} failed")
        self.exercise = exercise


def _console() -> Console:
    return Console(file=sys.stdout, highlight=False)


@contextlib.contextmanager
def _spinner(message: str) -> Iterator[None]:
    console = _console()
    if not console.is_terminal:
        yield
        return
    with console.status(message):
        yield


def _print_progress(position: int, total: int, percentage: float) -> None:
    filled = _BAR_WIDTH * position // total if total else _BAR_WIDTH
    filled = min(filled, _BAR_WIDTH)
    head = ">" if filled < _BAR_WIDTH else ""
    rest = "-" * (_BAR_WIDTH - filled - len(head))
    bar = Text.assemble(("#" * filled + head, "green"), (rest, "red"))
    line = Text.assemble(
        "Progress: [", bar, f"] {position}/{total} ({percentage:.1f} %)"
    )
    _console().print(line, soft_wrap=True)


def _compile(exercise: Exercise) -> CompiledExercise:
    try:
        return exercise.compile()
    except CompileError as exc:
        warn(f"Compiling of {exercise} failed! Please try again. Here's the output:")
        print(exc.output.stderr)
        raise ExerciseFailed(exercise) from exc


def _print_separator(console: Console) -> None:
    console.print(Text(_SEPARATOR, style="bold"), soft_wrap=True)


def _prompt_for_completion(
    exercise: Exercise, prompt_output: str | None, success_hints: bool
) -> bool:
    context = exercise.state().context
    if not context:
        return True

    verb = {Mode.COMPILE: "ran", Mode.TEST: "tested", Mode.CLIPPY: "compiled"}
    success(f"Successfully {verb[exercise.mode]} {exercise}!")

    emoji = not no_emoji()
    clippy_message = (
        "The code is compiling, and 📎 Clippy 📎 is happy!"
        if emoji
        else "The code is compiling, and Clippy is happy!"
    )
    message = {
        Mode.COMPILE: "The code is compiling!",
        Mode.TEST: "The code is compiling, and the tests pass!",
        Mode.CLIPPY: clippy_message,
    }[exercise.mode]

    print()
    print(f"🎉 🎉  {message} 🎉 🎉" if emoji else f"~*~ {message} ~*~")
    print()

    console = _console()
    if prompt_output is not None:
        print("Output:")
        _print_separator(console)
        print(prompt_output)
        _print_separator(console)
        print()
    if success_hints:
        print("Hints:")
        _print_separator(console)
        print(exercise.hint)
        _print_separator(console)
        print()

    print("You can keep working on this exercise,")
    console.print(
        Text.assemble(
            "or jump into the next one by removing the ",
            ("`I AM NOT DONE`", "bold"),
            " comment:",
        ),
        soft_wrap=True,
    )
    print()
    for context_line in context:
        console.print(
            Text.assemble(
                (f"{context_line.number:>2}", "blue bold"),
                " ",
                ("|", "blue"),
                "  ",
                (context_line.line, "bold" if context_line.important else ""),
            ),
            soft_wrap=True,
        )
    return False


def _compile_only(exercise: Exercise, success_hints: bool) -> bool:
    with _spinner(f"Compiling {exercise}..."):
        _compile(exercise).close()
    return _prompt_for_completion(exercise, None, success_hints)


def _compile_and_run_interactively(exercise: Exercise, success_hints: bool) -> bool:
    with _spinner(f"Compiling {exercise}..."):
        with _compile(exercise) as compiled:
            output = compiled.run()

    if not output.success:
        warn(f"Ran {exercise} with errors")
        print(output.stdout)
        print(output.stderr)
        raise ExerciseFailed(exercise)

    return _prompt_for_completion(exercise, output.stdout, success_hints)


def _compile_and_test(
    exercise: Exercise, interactive: bool, verbose: bool, success_hints: bool
) -> bool:
    with _spinner(f"Testing {exercise}..."):
        with _compile(exercise) as compiled:
            output = compiled.run()

    if not output.success:
        warn(f"Testing of {exercise} failed! Please try again. Here's the output:")
        print(output.stdout)
        raise ExerciseFailed(exercise)

    if verbose:
        print(output.stdout)
    if interactive:
        return _prompt_for_completion(exercise, None, success_hints)
    return True


def verify(
    exercises: Iterable[Exercise],
    progress: tuple[int, int] | None = None,
    verbose: bool = False,
    success_hints: bool = False,
) -> None:
    """Check exercises in order; raise ExerciseFailed at the first that is not solved."""
    if progress is None:
        exercises = list(exercises)
        progress = (0, len(exercises))
    num_done, total = progress
    step = 100.0 / total if total else 0.0
    percentage = num_done * step
    position = num_done
    _print_progress(position, total, percentage)

    for exercise in exercises:
        if exercise.mode is Mode.TEST:
            solved = _compile_and_test(exercise, True, verbose, success_hints)
        elif exercise.mode is Mode.COMPILE:
            solved = _compile_and_run_interactively(exercise, success_hints)
        else:
            solved = _compile_only(exercise, success_hints)
        if not solved:
            raise ExerciseFailed(exercise)
        percentage += step
        position += 1
        _print_progress(position, total, percentage)


def test(exercise: Exercise, verbose: bool = False) -> None:
    """Compile and run an exercise's tests without prompting; raise ExerciseFailed on failure."""
    _compile_and_test(exercise, False, verbose, False)