"""
下载链接解析。

url 字段在不同接口中有三种形态：
- 对象 {url, client, desc, oss_id}
- 纯字符串（直接就是 URL）
- 字面量 false（表示没有可用链接，不算错误）

过期时间取自 URL 查询参数 t（Unix 秒），没有则取 Expires；都没有视为永不过期。
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
from pydantic import Field, PrivateAttr, model_validator

from p115api.base import OpenAPIBase, Record, drop_empty_data
from p115api.scalars import Int, Int64, String, UnixTime, parse_int_text

# 链接剩余有效期小于该值即视为过期（OSS 链接有效期较短）
DOWNLOAD_URL_EXPIRY_DELTA = timedelta(seconds=60)


class DownloadURL(Record):
    """下载链接；cookies 由传输层在请求后附加（见 download_url_with_cookies），读取文件分片时需一并带上。"""

    url: String = ""
    client: Int = 0
    desc: String = ""
    oss_id: String = ""

    # 不参与解码、序列化与哈希；线上的同名字段按未知字段忽略
    _cookies: httpx.Cookies = PrivateAttr(default_factory=httpx.Cookies)

    @model_validator(mode="before")
    @classmethod
    def _accept_string_or_false(cls, data: Any) -> Any:
        # false / null：没有链接
        if data is False or data is None:
            return {}
        if isinstance(data, str):
            return {"url": data}
        return data

    @property
    def cookies(self) -> httpx.Cookies:
        return self._cookies

    def with_cookies(self, cookies: httpx.Cookies) -> DownloadURL:
        """返回附带给定 cookies（复制一份）的新链接，自身不变。"""
        link = self.model_copy()
        link._cookies = httpx.Cookies(cookies)
        return link

    def expiry(self) -> datetime | None:
        """从 URL 参数 t 或 Expires 读取过期时间；没有时返回 None，越界时钳制到 datetime 的上下限。"""
        try:
            params = httpx.URL(self.url).params
        except httpx.InvalidURL:
            return None
        for key in ("t", "Expires"):
            value = params.get(key)
            if not value:
                continue
            i = parse_int_text(value)
            if i is None:
                continue
            return UnixTime.from_unix(i)
        return None

    def expired(self) -> bool:
        expiry = self.expiry()
        if expiry is None:
            return False
        return expiry < datetime.now(timezone.utc) + DOWNLOAD_URL_EXPIRY_DELTA

    def valid(self) -> bool:
        """URL 非空且未过期。"""
        return self.url != "" and not self.expired()

    def cookie(self) -> str:
        """按 cookie jar 顺序拼接为 'name=value;' 形式，供分片读取请求的 Cookie 头使用。"""
        return "".join(f"{c.name}={c.value};" for c in self.cookies.jar)


class DownloadInfo(Record):
    """传统下载接口 data 中的一项。"""

    file_name: String = ""
    file_size: Int64 = 0
    pick_code: String = ""
    url: DownloadURL = Field(default_factory=DownloadURL)


# 传统下载接口返回的映射：文件 ID -> DownloadInfo
DownloadData = dict[str, DownloadInfo]


class OpenAPIDownloadInfo(Record):
    file_name: String = ""
    file_size: Int64 = 0
    pick_code: String = ""
    sha1: String = ""
    url: DownloadURL = Field(default_factory=DownloadURL)


class OpenAPIDownloadResp(OpenAPIBase):
    """POST /open/ufile/downurl 的响应，data 以文件 ID 为键。"""

    data: dict[str, OpenAPIDownloadInfo] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _empty_data(cls, data: Any) -> Any:
        return drop_empty_data(data)


class ShareDownloadInfo(Record):
    """从分享链接获取下载地址的响应（传统接口）。"""

    fid: String = ""
    fn: String = ""
    fs: Int64 = 0
    url: DownloadURL = Field(default_factory=DownloadURL)
