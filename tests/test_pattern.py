import pytest

from fsviz import GlobError, compile_patterns
from fsviz.pattern import split_patterns


def test_star_matches_within_one_segment():
    m = compile_patterns("*.js")
    assert m("test.js")
    assert m("example.js")
    assert not m("test.txt")
    # A leading wildcard never matches a dotfile
    assert not m(".js")
    # Matching is done against the whole relative path
    assert not m("src/test.js")


def test_question_mark_matches_exactly_one_character():
    m = compile_patterns("file?.js")
    assert m("file1.js")
    assert m("filea.js")
    assert not m("file12.js")
    assert not m("file.js")


def test_pipe_separated_alternatives():
    m = compile_patterns("*.js|*.ts")
    assert m("test.js")
    assert m("example.ts")
    assert not m("test.txt")
    assert not m("example.jsx")


def test_comma_separated_alternatives():
    m = compile_patterns("node_modules,dist")
    assert m("node_modules")
    assert m("dist")
    assert not m("src")


def test_dotfiles():
    m = compile_patterns(".*")
    assert m(".gitignore")
    assert m(".env")
    assert not m("file.txt")
    assert not m("anotherfile")


def test_brace_alternation():
    m = compile_patterns("*.{js,jsx}")
    assert m("file.js")
    assert m("file.jsx")
    assert not m("file.ts")
    assert not m("filejs")


def test_brace_commas_do_not_split_patterns():
    assert split_patterns("*.{js,jsx},build") == ["*.{js,jsx}", "build"]
    assert split_patterns("a|[,|]|b") == ["a", "[,|]", "b"]
    assert split_patterns("a,,b,") == ["a", "b"]


def test_leading_bracket_in_character_class():
    # "]" first in a class is a member, so the comma after it is too
    assert split_patterns("[],]|b") == ["[],]", "b"]
    assert split_patterns("[!],]") == ["[!],]"]

    m = compile_patterns("[],]")
    assert m("]")
    assert m(",")
    assert not m("a")

    negated = compile_patterns("x[!],]")
    assert negated("xa")
    assert not negated("x]")
    assert not negated("x,")


@pytest.mark.parametrize(
    "path",
    [
        "src/a/b/c/file.js",
        "src/file.js",
        "src/components/test.js",
        "src/a/b/c/d/e/f/g/h/i/j/file.js",
    ],
)
def test_globstar_positive(path):
    assert compile_patterns("src/**/*.js")(path)


@pytest.mark.parametrize(
    "path",
    [
        "src/file.ts",
        "source/file.js",
        "file.js",
        "lib/src/file.js",
        "srcdir1/dir2/test.js",
        "src2/components/test.js",
        "src/components/test.jsx",
        "src/components/test.js.txt",
        "src/dir1/dir2/",
        "src/dir1/dir2/testfile",
    ],
)
def test_globstar_negative(path):
    assert not compile_patterns("src/**/*.js")(path)


def test_leading_globstar_matches_any_depth():
    m = compile_patterns("**/*.log")
    assert m("top.log")
    assert m("a/b/deep.log")
    assert not m("a/b/deep.txt")


def test_bare_double_star_matches_everything():
    m = compile_patterns("**")
    assert m("a")
    assert m("a/b/c")


def test_regex_metacharacters_are_literal():
    m = compile_patterns("a+b(1)=$^!.txt")
    assert m("a+b(1)=$^!.txt")
    assert not m("aab1=.txt")


def test_character_classes():
    m = compile_patterns("file[0-9].txt")
    assert m("file3.txt")
    assert not m("filex.txt")

    negated = compile_patterns("file[!0-9].txt")
    assert negated("filex.txt")
    assert not negated("file3.txt")


def test_escaped_wildcard_is_literal():
    m = compile_patterns(r"what\?.txt")
    assert m("what?.txt")
    assert not m("whats.txt")


def test_iterable_of_patterns():
    m = compile_patterns(["*.log", "build|dist"])
    assert m.patterns == ("*.log", "build", "dist")
    assert m("x.log") and m("build") and m("dist")
    assert not m("src")


def test_matching_is_pure():
    m = compile_patterns("src/**/*.js")
    results = {m("src/a/b.js") for _ in range(5)}
    assert results == {True}


@pytest.mark.parametrize(
    "pattern",
    ["[invalid", "{a,b", "a}", "trailing\\", "", ",|,", "file[z-a].txt"],
)
def test_invalid_patterns_raise(pattern):
    with pytest.raises(GlobError, match="Invalid pattern"):
        compile_patterns(pattern)


def test_glob_error_is_a_value_error():
    with pytest.raises(ValueError):
        compile_patterns("[invalid")
