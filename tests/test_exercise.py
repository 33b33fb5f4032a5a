import os
import subprocess
import threading
from pathlib import Path
from unittest import mock

import pytest

from rustlings.exercise import (
    CompileError,
    CompiledExercise,
    ContextLine,
    Exercise,
    Mode,
    State,
    load_exercises,
    temp_file,
)

PENDING = "// fake_exercise\n\n// I AM NOT DONE\n\nfn main() {\n\n}\n"
FINISHED = "// fake_exercise\n\nfn main() {\n\n}\n"
PENDING_TEST = "// I AM NOT DONE\n\n#[test]\nfn it_works() {}\n"


def _write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content)
    return path


def _done(returncode=0, stdout=b"", stderr=b""):
    return subprocess.CompletedProcess(args=[], returncode=returncode,
                                       stdout=stdout, stderr=stderr)


class _Recorder:
    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def __call__(self, args, **kwargs):
        self.calls.append(list(args))
        return self.results.pop(0) if self.results else _done()


def test_temp_file_is_unique_per_process_and_thread():
    name = temp_file()
    assert name.startswith(f"./temp_{os.getpid()}_")
    assert name.endswith(str(threading.get_ident()))


def test_pending_state(tmp_path):
    exercise = Exercise("pending_exercise", _write(tmp_path, "p.rs", PENDING), Mode.COMPILE)
    expected = (
        ContextLine("// fake_exercise", 1, False),
        ContextLine("", 2, False),
        ContextLine("// I AM NOT DONE", 3, True),
        ContextLine("", 4, False),
        ContextLine("fn main() {", 5, False),
    )
    assert exercise.state() == State(expected)
    assert exercise.looks_done() is False


def test_finished_exercise(tmp_path):
    exercise = Exercise("finished_exercise", _write(tmp_path, "f.rs", FINISHED), Mode.COMPILE)
    assert exercise.state() == State()
    assert exercise.looks_done() is True


def test_context_clamped_at_start_of_file(tmp_path):
    exercise = Exercise("t", _write(tmp_path, "t.rs", PENDING_TEST), Mode.TEST)
    assert exercise.state().context == (
        ContextLine("// I AM NOT DONE", 1, True),
        ContextLine("", 2, False),
        ContextLine("#[test]", 3, False),
    )


@pytest.mark.parametrize("marker", ["/// I AM NOT DONE", "  //I   AM  NOT DONE"])
def test_marker_variants_are_pending(tmp_path, marker):
    exercise = Exercise("v", _write(tmp_path, "v.rs", f"{marker}\n"), Mode.COMPILE)
    assert exercise.looks_done() is False
    assert exercise.state().context[0].important is True


def test_exercise_str_is_path():
    exercise = Exercise("x", Path("exercises/intro/intro1.rs"), Mode.COMPILE)
    assert str(exercise) == str(Path("exercises/intro/intro1.rs"))


def test_clean(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Path(temp_file()).touch()
    exercise = Exercise("example", _write(tmp_path, "p.rs", PENDING), Mode.COMPILE)
    with mock.patch("subprocess.run", _Recorder()):
        with exercise.compile() as compiled:
            assert isinstance(compiled, CompiledExercise)
    assert not Path(temp_file()).exists()


def test_compile_failure_raises_and_cleans(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Path(temp_file()).touch()
    exercise = Exercise("broken", _write(tmp_path, "b.rs", "fn main() {\n    let\n}\n"), Mode.COMPILE)
    recorder = _Recorder(_done(1, b"", b"error: expected pattern"))
    with mock.patch("subprocess.run", recorder):
        with pytest.raises(CompileError) as info:
            exercise.compile()
    assert info.value.output.stderr == "error: expected pattern"
    assert info.value.output.success is False
    assert not Path(temp_file()).exists()


def test_exercise_with_output(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    source = _write(tmp_path, "testSuccess.rs", "#[test]\nfn passing() {}\n")
    exercise = Exercise("exercise_with_output", source, Mode.TEST)
    recorder = _Recorder(_done(), _done(0, b"THIS TEST TOO SHALL PASS\n"))
    with mock.patch("subprocess.run", recorder):
        with exercise.compile() as compiled:
            out = compiled.run()
    assert "THIS TEST TOO SHALL PASS" in out.stdout
    assert out.success is True
    assert recorder.calls[0][:2] == ["rustc", "--test"]
    assert recorder.calls[1] == [temp_file(), "--show-output"]


def test_run_failure_reports_output(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    exercise = Exercise("c", _write(tmp_path, "c.rs", "fn main() {}\n"), Mode.COMPILE)
    recorder = _Recorder(_done(), _done(101, b"out", b"panicked"))
    with mock.patch("subprocess.run", recorder):
        with exercise.compile() as compiled:
            out = compiled.run()
    assert out.success is False
    assert (out.stdout, out.stderr) == ("out", "panicked")
    assert recorder.calls[1] == [temp_file()]


def test_load_exercises(tmp_path):
    info = tmp_path / "info.toml"
    info.write_text(
        '[[exercises]]\nname = "compSuccess"\npath = "compSuccess.rs"\n'
        'mode = "compile"\nhint = ""\n\n'
        '[[exercises]]\nname = "testFailure"\npath = "testFailure.rs"\n'
        'mode = "test"\nhint = "Hello!"\n'
    )
    exercises = load_exercises(info)
    assert [e.name for e in exercises] == ["compSuccess", "testFailure"]
    assert [e.mode for e in exercises] == [Mode.COMPILE, Mode.TEST]
    assert exercises[1].hint == "Hello!"
    assert exercises[0].path == Path("compSuccess.rs")


def test_load_exercises_rejects_unknown_mode(tmp_path):
    info = tmp_path / "info.toml"
    info.write_text('[[exercises]]\nname = "a"\npath = "a.rs"\nmode = "bogus"\nhint = ""\n')
    with pytest.raises(ValueError):
        load_exercises(info)


def test_load_exercises_rejects_missing_field(tmp_path):
    info = tmp_path / "info.toml"
    info.write_text('[[exercises]]\nname = "a"\npath = "a.rs"\nmode = "test"\n')
    with pytest.raises(ValueError):
        load_exercises(info)