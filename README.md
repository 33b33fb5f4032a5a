# rustlings

A runner for small Rust exercises. Each exercise is a Rust source file listed
in an `info.toml` file. The runner compiles it with `rustc` (as a binary, as a
test harness, or through `cargo clippy`), runs it, and tells you whether you
have solved it. An exercise counts as finished once it compiles, passes, and
no longer holds an `// I AM NOT DONE` comment.

## Installing

```
pip install .
```

You need `rustc` on your `PATH`, and `cargo` for the Clippy exercises. Every
command checks for `rustc` first and exits with status 1 if it cannot run
`rustc --version`.

## Using it

Run every command from the directory that holds `info.toml` and the
`exercises/` folder; elsewhere the runner exits with status 1.

```
rustlings                     # welcome text and a short introduction
rustlings --version
rustlings watch               # verify in order, re-checking whenever a file changes
rustlings watch --success-hints
rustlings verify              # verify every exercise in the order of info.toml
rustlings run intro1          # compile and run (or test) one exercise
rustlings run next            # the first exercise not yet done
rustlings hint intro1         # print the hint for an exercise
rustlings reset intro1        # start `git stash -- <file>` for the exercise
rustlings list                # name, path and status of every exercise
rustlings list --unsolved --filter iterators,traits
rustlings lsp                 # write rust-project.json for rust-analyzer
rustlings --nocapture run tests1   # show the test harness output
```

`list` accepts `-p/--paths` and `-n/--names` to print only paths or names,
`-s/--solved` and `-u/--unsolved` to pick by status, and `-f/--filter` with
comma-separated patterns, matched (lower-cased) against exercise names and
paths. It ends with a progress line.

`verify` and `run` exit with status 1 when an exercise fails to compile, fails
its run or tests, or (for `verify`) still holds the `I AM NOT DONE` comment; in
that last case the lines around the comment are shown.

In watch mode, saving an `.rs` file under `exercises/` re-verifies the edited
exercise first, then the remaining unfinished ones. You can type `hint`,
`clear`, `quit`, `help`, or `!<cmd>` to run a command such as
`!rustc --explain E0381`.

`lsp` takes the standard library path from `RUST_SRC_PATH` if set, otherwise
from `rustc --print sysroot`, and adds one crate for every `.rs` file under
`exercises/`.

Set `NO_EMOJI` in the environment to print plain symbols instead of emoji.

## The `info.toml` file

```toml
[[exercises]]
name = "intro1"
path = "exercises/intro/intro1.rs"
mode = "compile"   # or "test" or "clippy"
hint = "No hints this time ;)"
```

`rustlings.exercise.load_exercises` reads this file into `Exercise` objects,
whose `compile()`, `state()` and `looks_done()` methods the commands build on.

## Worked solutions

The `rustlings.exercises` sub-package holds worked solutions to many of the
exercises, each module with its own test suite:

- `quizzes`: apple pricing, a string `transformer`, `ReportCard`
- `conditionals`: `bigger`, `foo_if_fizz`, `animal_habitat`, `sale_price`
- `errors`: `generate_nametag_text`, `total_cost`, `PositiveNonzeroInteger`,
  `parse_pos_nonzero`
- `hashmaps`: fruit baskets and `build_scores_table`
- `records`: string helpers and a `Package` with shipping fees
- `iterators`: capitalising words, `divide`, `factorial`, progress counting
- `containers`: `maybe_icecream`, message processing with `State`, cons lists,
  `abs_all`
- `traits`: `append_bar` and `compare_license_types`

## What it does not include

The package ships no exercise files and no `info.toml`; you need an
`exercises/` directory and an `info.toml` of your own to run the commands.
There are no worked solutions for the conversion exercises.

## Running the tests

```
pip install .[test]
pytest
```