"""Exercises: their description, compilation, execution and progress state."""

from __future__ import annotations

import contextlib
import os
import re
import subprocess
import threading
import tomllib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from rustlings.ui import no_emoji

RUSTC_COLOR_ARGS = ("--color", "always")
RUSTC_EDITION_ARGS = ("--edition", "2021")
I_AM_DONE_REGEX = re.compile(r"^\s*///?\s*I\s+AM\s+NOT\s+DONE", re.MULTILINE)
CONTEXT = 2
CLIPPY_CARGO_TOML_PATH = Path("./exercises/clippy/Cargo.toml")


def temp_file() -> str:
    """Return a temporary binary name unique to this process and thread."""
    thread_id = "".join(c for c in str(threading.get_ident()) if c.isalnum())
    return f"./temp_{os.getpid()}_{thread_id}"


def _clean() -> None:
    with contextlib.suppress(OSError):
        os.remove(temp_file())


def _capture(args: list[str]) -> subprocess.CompletedProcess:
    return subprocess.run(args, capture_output=True, check=False)


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace")


def _source_lines(source: str) -> list[str]:
    lines = source.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


class Mode(Enum):
    """How an exercise is checked."""

    COMPILE = "compile"
    TEST = "test"
    CLIPPY = "clippy"


@dataclass(frozen=True)
class ContextLine:
    """A source line shown around a pending marker."""

    line: str
    number: int
    important: bool


@dataclass(frozen=True)
class State:
    """Progress of an exercise: done when there is no pending context."""

    context: tuple[ContextLine, ...] = ()


@dataclass
class ExerciseOutput:
    """Captured output of a compiler or exercise run."""

    stdout: str
    stderr: str
    success: bool = True


class CompileError(Exception):
    """Raised when an exercise fails to compile."""

    def __init__(self, exercise: "Exercise", output: ExerciseOutput) -> None:
        super().__init__(f"compilation of {exercise} failed")
        self.exercise = exercise
        self.output = output


@dataclass
class Exercise:
    """One exercise as described in info.toml."""

    name: str
    path: Path
    mode: Mode
    hint: str = ""

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self.mode = Mode(self.mode)

    def __str__(self) -> str:
        return str(self.path)

    def _rustc_args(self, *extra: str) -> list[str]:
        return ["rustc", *extra, str(self.path), "-o", temp_file(),
                *RUSTC_COLOR_ARGS, *RUSTC_EDITION_ARGS]

    def _run_clippy(self) -> subprocess.CompletedProcess:
        cargo_toml = (
            "[package]\n"
            f'name = "{self.name}"\n'
            'version = "0.0.1"\n'
            'edition = "2021"\n'
            "[[bin]]\n"
            f'name = "{self.name}"\n'
            f'path = "{self.name}.rs"'
        )
        message = (
            "Failed to write Clippy Cargo.toml file."
            if no_emoji()
            else "Failed to write 📎 Clippy 📎 Cargo.toml file."
        )
        try:
            CLIPPY_CARGO_TOML_PATH.write_text(cargo_toml, encoding="utf-8")
        except OSError as exc:
            raise OSError(message) from exc
        # Build a binary too, so clippy exercises can be run afterwards.
        _capture(self._rustc_args())
        manifest = str(CLIPPY_CARGO_TOML_PATH)
        _capture(["cargo", "clean", "--manifest-path", manifest, *RUSTC_COLOR_ARGS])
        return _capture([
            "cargo", "clippy", "--manifest-path", manifest, *RUSTC_COLOR_ARGS,
            "--", "-D", "warnings", "-D", "clippy::float_cmp",
        ])

    def compile(self) -> "CompiledExercise":
        """Compile the exercise; raise CompileError with the compiler output on failure."""
        if self.mode is Mode.CLIPPY:
            proc = self._run_clippy()
        elif self.mode is Mode.TEST:
            proc = _capture(self._rustc_args("--test"))
        else:
            proc = _capture(self._rustc_args())

        if proc.returncode == 0:
            return CompiledExercise(self)
        _clean()
        raise CompileError(
            self,
            ExerciseOutput(_decode(proc.stdout), _decode(proc.stderr), success=False),
        )

    def state(self) -> State:
        """Return the pending context around the first marker, or a done state."""
        source = self.path.read_text(encoding="utf-8")
        if not I_AM_DONE_REGEX.search(source):
            return State()

        lines = _source_lines(source)
        matched = next(
            (i for i, line in enumerate(lines) if I_AM_DONE_REGEX.search(line)),
            None,
        )
        if matched is None:
            raise RuntimeError(f"marker in {self.path} spans several lines")

        first = max(matched - CONTEXT, 0)
        last = matched + CONTEXT
        return State(tuple(
            ContextLine(line=line, number=i + 1, important=i == matched)
            for i, line in enumerate(lines)
            if first <= i <= last
        ))

    def looks_done(self) -> bool:
        """Return True when the exercise no longer carries the pending marker."""
        return self.state() == State()


@dataclass
class CompiledExercise:
    """A successfully compiled exercise whose binary is removed on close."""

    exercise: Exercise
    _closed: bool = field(default=False, repr=False)

    def run(self) -> ExerciseOutput:
        """Run the compiled binary and return its output."""
        args = [temp_file()]
        if self.exercise.mode is Mode.TEST:
            args.append("--show-output")
        proc = _capture(args)
        return ExerciseOutput(
            _decode(proc.stdout), _decode(proc.stderr), success=proc.returncode == 0
        )

    def close(self) -> None:
        """Remove the compiled binary."""
        if not self._closed:
            self._closed = True
            _clean()

    def __enter__(self) -> "CompiledExercise":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def load_exercises(path: str | os.PathLike = "info.toml") -> list[Exercise]:
    """Read the exercise list from an info.toml file."""
    with open(path, "rb") as handle:
        data = tomllib.load(handle)
    try:
        return [
            Exercise(
                name=entry["name"],
                path=Path(entry["path"]),
                mode=Mode(entry["mode"]),
                hint=entry["hint"],
            )
            for entry in data["exercises"]
        ]
    except KeyError as exc:
        raise ValueError(f"missing field {exc.args[0]!r} in {path}") from exc