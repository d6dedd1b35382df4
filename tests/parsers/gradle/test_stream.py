"""Token stream pushback and lookahead tests."""

from __future__ import annotations

import pytest

from depreport.parsers.base import PushbackError
from depreport.parsers.gradle.scanner import Scanner
from depreport.parsers.gradle.stream import TokenStream
from depreport.parsers.gradle.tokens import Token


def _stream(text: str) -> TokenStream:
    return TokenStream(Scanner(text))


def test_push_back_returns_last_token() -> None:
    stream = _stream("a b")
    first = stream.next()
    stream.push_back()
    assert stream.next() == first
    assert stream.next().kind is Token.WS


def test_second_push_back_without_next_is_rejected() -> None:
    """Pushback is one slot deep."""
    stream = _stream("a b")
    stream.next()
    stream.next()
    stream.push_back()
    with pytest.raises(PushbackError):
        stream.push_back()


def test_push_back_before_any_read_is_rejected() -> None:
    with pytest.raises(PushbackError):
        _stream("a").push_back()


def test_rewind_restores_every_token_read_since_mark() -> None:
    """Multi-token lookahead can be fully undone."""
    stream = _stream("- -\nProject")
    stream.mark()
    consumed = [stream.next() for _ in range(5)]
    assert consumed[-1].kind is Token.PROJECT

    assert stream.rewind() == 5
    assert [stream.next() for _ in range(5)] == consumed
    assert stream.next().kind is Token.EOF


def test_release_keeps_tokens_consumed() -> None:
    stream = _stream("a b c")
    stream.mark()
    stream.next()
    stream.next()
    stream.release()
    assert stream.next().literal == "b"


def test_nested_marks_rewind_independently() -> None:
    stream = _stream("a b c")
    stream.mark()
    assert stream.next().literal == "a"
    stream.mark()
    stream.next()
    assert stream.next().literal == "b"
    assert stream.rewind() == 2
    assert stream.next().kind is Token.WS
    assert stream.rewind() == 2
    assert stream.next().literal == "a"


def test_rewind_without_mark_is_rejected() -> None:
    stream = _stream("a")
    with pytest.raises(PushbackError):
        stream.rewind()
    with pytest.raises(PushbackError):
        stream.release()


def test_peek_does_not_consume() -> None:
    stream = _stream("a b")
    assert stream.peek().literal == "a"
    assert stream.next().literal == "a"
