"""
下载链接解析单元测试：对象 / 字符串 / false 三种形态，以及过期判定与 cookie 拼接。
"""

from __future__ import annotations

from datetime import timedelta

import httpx
import pytest
from pydantic import ValidationError

from p115api import (
    DownloadData,
    DownloadInfo,
    DownloadURL,
    OpenAPIDownloadResp,
    ShareDownloadInfo,
    decode,
    download_url_with_cookies,
)


def test_object_with_future_t_is_valid(now_ts: int) -> None:
    link = DownloadURL.model_validate_json(f'{{"url":"https://x/y?t={now_ts + 3600}"}}')
    assert link.valid() is True
    assert link.expiry() is not None


def test_object_with_past_t_is_invalid(now_ts: int) -> None:
    link = DownloadURL.model_validate_json(f'{{"url":"https://x/y?t={now_ts - 10}"}}')
    assert link.valid() is False
    assert link.expired() is True


def test_expiry_margin_is_60_seconds(now_ts: int) -> None:
    """剩余不足 60 秒即视为过期。"""
    assert DownloadURL(url=f"https://x/y?t={now_ts + 30}").valid() is False
    assert DownloadURL(url=f"https://x/y?t={now_ts + 120}").valid() is True


def test_literal_false_is_empty_link() -> None:
    link = DownloadURL.model_validate_json(b"false")
    assert link.url == ""
    assert link.valid() is False


def test_bare_string_is_url() -> None:
    link = DownloadURL.model_validate_json(b'"https://cdn.example.com/f?Expires=4102444800"')
    assert link.url == "https://cdn.example.com/f?Expires=4102444800"
    assert link.client == 0
    assert link.valid() is True


@pytest.mark.parametrize("raw", [b"true", b"123", b"[1,2]"])
def test_unknown_shape_raises(raw: bytes) -> None:
    with pytest.raises(ValidationError):
        DownloadURL.model_validate_json(raw)


def test_object_metadata() -> None:
    link = DownloadURL.model_validate(
        {"url": "http://cdnfhnfile.115.com/a", "client": "1", "desc": "", "oss_id": "fhnfile/abc"}
    )
    assert link.client == 1
    assert link.oss_id == "fhnfile/abc"
    # 没有 t / Expires：永不过期
    assert link.expiry() is None
    assert link.valid() is True


def test_t_takes_precedence_over_expires(now_ts: int) -> None:
    link = DownloadURL(url=f"https://x/y?Expires={now_ts + 3600}&t={now_ts - 10}")
    assert link.expiry() is not None
    assert int(link.expiry().timestamp()) == now_ts - 10


def test_unparseable_t_falls_back_to_expires(now_ts: int) -> None:
    link = DownloadURL(url=f"https://x/y?t=abc&Expires={now_ts + 3600}")
    assert int(link.expiry().timestamp()) == now_ts + 3600


def test_cookie_joins_in_jar_order() -> None:
    """按 cookie jar 的遍历顺序（同域同路径下按名称排序）拼接。"""
    cookies = httpx.Cookies()
    cookies.set("UID", "u1", domain="115.com")
    cookies.set("CID", "c1", domain="115.com")
    link = download_url_with_cookies(DownloadURL(url="https://x/y"), cookies)
    assert link.cookie() == "CID=c1;UID=u1;"
    assert DownloadURL(url="https://x/y").cookie() == ""


def test_cookies_from_response() -> None:
    resp = httpx.Response(
        200,
        headers={"set-cookie": "acw_tc=abc; Path=/"},
        request=httpx.Request("GET", "https://proapi.115.com/"),
    )
    link = download_url_with_cookies(DownloadURL(url="https://x/y"), resp)
    assert link.cookie() == "acw_tc=abc;"


def test_cookies_not_serialized() -> None:
    link = download_url_with_cookies(DownloadURL(url="https://x/y"), httpx.Cookies({"a": "b"}))
    assert "cookies" not in link.model_dump()


def test_traditional_download_data() -> None:
    data = decode(
        DownloadData,
        b'{"2879483726431":{"file_name":"a.mkv","file_size":"1024","pick_code":"pc","url":{"url":"https://x/a"}},'
        b'"2879483726432":{"file_name":"b.mkv","file_size":0,"pick_code":"pc2","url":false}}',
    )
    assert data["2879483726431"].file_size == 1024
    assert data["2879483726431"].url.valid() is True
    assert data["2879483726432"].url.valid() is False


def test_openapi_download_resp() -> None:
    resp = OpenAPIDownloadResp.model_validate(
        {
            "state": True,
            "data": {"123": {"file_name": "a", "file_size": 5, "sha1": "S", "url": {"url": "https://x/a"}}},
        }
    )
    assert resp.err() is None
    assert resp.data["123"].url.url == "https://x/a"

    empty = OpenAPIDownloadResp.model_validate({"state": True, "data": []})
    assert empty.data == {}


def test_share_download_info() -> None:
    info = ShareDownloadInfo.model_validate({"fid": 1, "fn": "x", "fs": "3", "url": "https://x/s"})
    assert info.fid == "1"
    assert info.fs == 3
    assert info.url.url == "https://x/s"


def test_expiry_delta_constant() -> None:
    from p115api.download import DOWNLOAD_URL_EXPIRY_DELTA

    assert DOWNLOAD_URL_EXPIRY_DELTA == timedelta(seconds=60)


def test_out_of_range_expiry_keeps_sign() -> None:
    """超出 datetime 范围的 t：负数视为早已过期，正数视为远未过期。"""
    past = DownloadURL(url="https://x/y?t=-99999999999999")
    assert past.expired() is True
    assert past.valid() is False

    future = DownloadURL(url="https://x/y?t=99999999999999")
    assert future.valid() is True


def test_cookies_key_on_wire_is_ignored() -> None:
    """线上对象多出 cookies 字段时按未知字段忽略，不影响解码。"""
    link = DownloadURL.model_validate_json(b'{"url":"https://x/y","cookies":"a=b"}')
    assert link.url == "https://x/y"
    assert link.cookie() == ""


def test_link_records_are_hashable() -> None:
    link = DownloadURL(url="https://x/y")
    assert hash(link) == hash(DownloadURL(url="https://x/y"))
    info = DownloadInfo.model_validate({"file_name": "a", "url": {"url": "https://x/a"}})
    assert isinstance(hash(info), int)

    with_jar = download_url_with_cookies(link, httpx.Cookies({"a": "b"}))
    assert hash(with_jar) == hash(link)


def test_with_cookies_leaves_original_untouched() -> None:
    link = DownloadURL(url="https://x/y")
    copy = link.with_cookies(httpx.Cookies({"a": "b"}))
    assert copy.cookie() == "a=b;"
    assert link.cookie() == ""
    assert copy.url == link.url
