import pytest

from novelmeta.infra.sessions.response import BaseResponse, Headers

# ---------------------------------------------------------
# Headers tests
# ---------------------------------------------------------


def test_headers_init_from_mapping():
    h = Headers({"Content-Type": "text/html", "X-Test": "1"})
    assert h["content-type"] == "text/html"
    assert h["x-test"] == "1"
    assert "content-type" in h
    assert "Content-Type" in h


def test_headers_init_from_sequence():
    h = Headers([("Content-Type", "text/html"), ("X-Test", "1")])
    assert h["content-type"] == "text/html"
    assert h.get_all("x-test") == ["1"]


def test_headers_add_multiple_values():
    h = Headers()
    h.add("Set-Cookie", "a=1")
    h.add("Set-Cookie", "b=2")

    assert h.get_all("set-cookie") == ["a=1", "b=2"]
    assert h["set-cookie"] == "a=1"  # first one


def test_headers_setitem_overwrites():
    h = Headers()
    h.add("X-Test", "a")
    h.add("X-Test", "b")

    h["X-Test"] = "final"

    assert h.get_all("x-test") == ["final"]


def test_headers_delete():
    h = Headers({"A": "1"})
    del h["a"]
    assert "a" not in h


def test_headers_getitem_keyerror():
    h = Headers()
    with pytest.raises(KeyError):
        _ = h["missing"]


def test_headers_iter_and_len():
    h = Headers({"A": "1", "B": "2"})
    assert set(iter(h)) == {"a", "b"}
    assert len(h) == 2


def test_headers_contains_non_string():
    h = Headers({"A": "1"})
    assert ("A" in h) is True
    assert (123 in h) is False
    assert (None in h) is False


# ---------------------------------------------------------
# BaseResponse tests
# ---------------------------------------------------------


@pytest.mark.parametrize(
    "status, ok",
    [(200, True), (301, True), (399, True), (400, False), (404, False), (503, False)],
)
def test_base_response_ok_range(status, ok):
    assert BaseResponse(content=b"", status=status).ok is ok


def test_base_response_keeps_final_url_and_headers():
    resp = BaseResponse(
        content=b"<html></html>",
        headers=[("Content-Type", "text/html; charset=gbk")],
        url="https://youshu.me/book/1",
    )
    assert resp.url == "https://youshu.me/book/1"
    assert resp.headers["content-type"] == "text/html; charset=gbk"
    assert "status=200" in repr(resp)
