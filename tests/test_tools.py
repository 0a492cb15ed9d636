import pytest

from duelgame.tools import (
    AssertionFailure,
    bytes_to_gb,
    bytes_to_kb,
    bytes_to_mb,
    defer,
    gb,
    kb,
    mb,
    perma_assert,
    tb,
)


def test_kb_is_1024():
    assert kb(1) == 1024


def test_unit_chain():
    assert mb(1) == kb(1024)
    assert gb(2) == mb(2048)
    assert tb(1) == gb(1024)


def test_bytes_conversions_round_trip():
    assert bytes_to_kb(kb(5)) == 5.0
    assert bytes_to_mb(mb(3)) == 3.0
    assert bytes_to_gb(gb(7)) == 7.0


def test_perma_assert_raises_with_comment():
    with pytest.raises(AssertionFailure) as info:
        perma_assert(False, "boom")
    err = info.value
    assert err.comment == "boom"
    assert err.file_name.endswith("test_tools.py")
    assert err.line_number > 0
    assert "Comment:\nboom" in str(err)


def test_perma_assert_default_comment():
    with pytest.raises(AssertionFailure) as info:
        perma_assert(0)
    assert info.value.comment == "---"
    assert isinstance(info.value, AssertionError)


def test_perma_assert_uses_truthiness():
    assert perma_assert([1], "never") is None
    with pytest.raises(AssertionFailure) as info:
        perma_assert([], "empty")
    assert info.value.comment == "empty"


def test_defer_runs_at_exit():
    calls = []
    with defer(lambda: calls.append("deferred")):
        calls.append("body")
    assert calls == ["body", "deferred"]


def test_defer_runs_on_exception():
    calls = []
    with pytest.raises(RuntimeError):
        with defer(lambda: calls.append("deferred")):
            raise RuntimeError("fail")
    assert calls == ["deferred"]


def test_nested_defers_run_in_reverse():
    calls = []
    with defer(lambda: calls.append(1)):
        with defer(lambda: calls.append(2)):
            pass
    assert calls == [2, 1]