"""Tests for context wiring and the library's own settings."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from typedenv.context import (
    EnvContext,
    get_default_context,
    init_default_context,
    reset_default_context,
)
from typedenv.utils.env_loader import load_library_env


@pytest.fixture(autouse=True)
def _no_default_context() -> Iterator[None]:
    """Start and end every test without a default context."""
    reset_default_context()
    yield
    reset_default_context()


def test_env_context__services_share_cache_and_environ(tmp_path: Path) -> None:
    """Wire the reader and loader to the same cache and environment."""
    environ: dict[str, str] = {"PORT": "8000"}
    ctx = EnvContext(environ)

    assert ctx.reader.cache is ctx.cache
    assert ctx.environ is environ
    assert ctx.reader.get_int("PORT", 0) == 8000

    env_file = tmp_path / ".env"
    env_file.write_text("PORT=9000\n")
    ctx.load(env_file)

    assert len(ctx.cache) == 0
    assert environ["PORT"] == "9000"
    assert ctx.reader.get_int("PORT", 0) == 9000


def test_env_context__contexts_are_independent() -> None:
    """Keep caches of separate contexts apart."""
    first = EnvContext({"NAME": "first"})
    second = EnvContext({"NAME": "second"})

    assert first.reader.get_string("NAME", "") == "first"
    assert second.reader.get_string("NAME", "") == "second"

    first.clear_cache()

    assert len(first.cache) == 0
    assert second.cache.get("NAME") == "second"


def test_env_context__load_uses_default_filename(tmp_path: Path) -> None:
    """Load the configured default file when called without paths."""
    env_file = tmp_path / "app.env"
    env_file.write_text("DEBUG=true\n")
    ctx = EnvContext({}, default_filename=env_file)

    ctx.load()

    assert ctx.reader.must_get_bool("DEBUG") is True


def test_default_context__requires_explicit_init() -> None:
    """Raise until the default context has been initialized."""
    with pytest.raises(RuntimeError, match="init_default_context"):
        get_default_context()


def test_default_context__init_get_reset() -> None:
    """Return the initialized context until it is reset or replaced."""
    ctx = init_default_context({"A": "1"})

    assert get_default_context() is ctx
    assert get_default_context().reader.get_string("A", "") == "1"

    replacement = init_default_context({})
    assert get_default_context() is replacement

    reset_default_context()
    with pytest.raises(RuntimeError):
        get_default_context()


def test_load_library_env__returns_prefixed_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    """Snapshot only the TYPEDENV_ settings."""
    monkeypatch.setenv("TYPEDENV_DEFAULT_FILE", "custom.env")
    monkeypatch.setenv("UNRELATED_SETTING", "x")

    settings = load_library_env()

    assert settings["TYPEDENV_DEFAULT_FILE"] == "custom.env"
    assert "UNRELATED_SETTING" not in settings
