from concurrent.futures import CancelledError

import pytest

from wordlebot.cancel import CancellationToken


def test_cancel_parent_cancels_children():
    root = CancellationToken()
    child = root.child_token()
    grandchild = child.child_token()
    root.cancel()
    assert child.cancelled
    assert grandchild.cancelled


def test_cancel_child_leaves_parent():
    root = CancellationToken()
    first = root.child_token()
    first.cancel()
    second = root.child_token()
    assert first.cancelled
    assert not root.cancelled
    assert not second.cancelled


def test_child_of_cancelled_parent_starts_cancelled():
    root = CancellationToken()
    root.cancel()
    assert root.child_token().cancelled


def test_raise_if_cancelled():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel()
    with pytest.raises(CancelledError):
        token.raise_if_cancelled()


def test_wait():
    token = CancellationToken()
    assert token.wait(timeout=0.01) is False
    token.cancel()
    assert token.wait(timeout=0.01) is True
