import pytest

from composer import ChainContext


def test_fresh_context_has_no_registered_keys():
    ctx = ChainContext()

    assert ctx.keys() == ()
    assert len(ctx) == 0
    assert "anything" not in ctx


@pytest.mark.parametrize("key", ["missing", "", "  ", "a.b.c", "ключ"])
def test_fetch_unknown_key_returns_empty_list(key):
    ctx = ChainContext()

    assert ctx.fetch(key) == []


def test_fetch_unknown_key_returns_independent_lists():
    ctx = ChainContext()

    first = ctx.fetch("missing")
    first.append("leaked")

    assert ctx.fetch("missing") == []


def test_fetch_returns_producer_result_unchanged():
    ctx = ChainContext()
    produced = ["alpha", "beta"]
    ctx.register("letters", lambda: produced)

    result = ctx.fetch("letters")

    assert result is produced
    assert result == ["alpha", "beta"]


def test_fetch_evaluates_producer_at_read_time():
    ctx = ChainContext()
    state = {"value": "before"}
    ctx.register("value", lambda: [state["value"]])

    state["value"] = "after"

    assert ctx.fetch("value") == ["after"]


def test_register_replaces_previous_producer():
    ctx = ChainContext()
    ctx.register("key", lambda: ["first"])
    ctx.register("key", lambda: ["second"])

    assert ctx.fetch("key") == ["second"]
    assert ctx.fetch("key") == ["second"]
    assert ctx.keys() == ("key",)


def test_fetch_reinvokes_producer_every_time():
    ctx = ChainContext()
    calls = {"count": 0}

    def counter() -> list[str]:
        calls["count"] += 1
        return [str(calls["count"])]

    ctx.register("counter", counter)

    assert ctx.fetch("counter") == ["1"]
    assert ctx.fetch("counter") == ["2"]
    assert calls["count"] == 2


def test_register_does_not_invoke_producer():
    ctx = ChainContext()
    calls: list[str] = []

    def producer() -> list[str]:
        calls.append("called")
        return ["value"]

    ctx.register("lazy", producer)

    assert calls == []
    assert ctx.fetch("lazy") == ["value"]
    assert calls == ["called"]


def test_register_accepts_producer_that_would_raise():
    ctx = ChainContext()

    def boom() -> list[str]:
        raise RuntimeError("should only fire on fetch")

    ctx.register("boom", boom)

    assert "boom" in ctx


def test_producer_exception_propagates_unmodified():
    ctx = ChainContext()
    error = KeyError("upstream lookup failed")

    def failing() -> list[str]:
        raise error

    ctx.register("failing", failing)

    with pytest.raises(KeyError) as excinfo:
        ctx.fetch("failing")

    assert excinfo.value is error


def test_failed_fetch_leaves_registration_in_place():
    ctx = ChainContext()
    attempts = {"count": 0}

    def flaky() -> list[str]:
        attempts["count"] += 1
        if attempts["count"] == 1:
            raise ValueError("first attempt fails")
        return ["ok"]

    ctx.register("flaky", flaky)

    with pytest.raises(ValueError, match="first attempt fails"):
        ctx.fetch("flaky")
    assert ctx.fetch("flaky") == ["ok"]


def test_introspection_never_invokes_producers():
    ctx = ChainContext()

    def boom() -> list[str]:
        raise AssertionError("producer must not run")

    ctx.register("b", boom)
    ctx.register("a", boom)

    assert ctx.keys() == ("b", "a")
    assert "a" in ctx
    assert len(ctx) == 2
    assert repr(ctx) == "ChainContext(keys=['b', 'a'])"


def test_keys_keep_first_registration_order_after_replacement():
    ctx = ChainContext()
    ctx.register("one", lambda: [])
    ctx.register("two", lambda: [])
    ctx.register("one", lambda: ["again"])

    assert ctx.keys() == ("one", "two")


def test_producer_may_return_any_string_sequence():
    ctx = ChainContext()
    ctx.register("tuple", lambda: ("x", "y"))

    assert ctx.fetch("tuple") == ("x", "y")
