"""
OpenAPI 鉴权相关响应与 OSS 临时凭证。
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pydantic import Field

from p115api.base import OpenAPIBase, Record
from p115api.scalars import Int64, String, Time

# 距离过期不足该值即应刷新凭证
OSS_TOKEN_EXPIRY_MARGIN = timedelta(minutes=5)
# 没有给出过期时间时视为（几乎）永不过期，约 95 年
OSS_TOKEN_UNLIMITED = timedelta(seconds=3_000_000_000)


class AuthDeviceCodeData(Record):
    uid: String = ""
    time: Int64 = 0
    qrcode: String = ""
    sign: String = ""


class AuthDeviceCodeResp(OpenAPIBase):
    """扫码登录：获取设备码。"""

    data: AuthDeviceCodeData | None = None


class DeviceCodeTokenData(Record):
    access_token: String = ""
    refresh_token: String = ""
    expires_in: Int64 = 0  # 秒


class DeviceCodeTokenResp(OpenAPIBase):
    """扫码登录：用设备码换取 token。"""

    data: DeviceCodeTokenData | None = None


class RefreshTokenData(Record):
    access_token: String = ""
    refresh_token: String = ""
    expires_in: Int64 = 0  # 秒


class RefreshTokenResp(OpenAPIBase):
    """用 refresh token 刷新 access token。"""

    data: RefreshTokenData | None = None


class OSSToken(Record):
    """OSS 临时凭证，Expiration 为 RFC3339 字符串。"""

    access_key_id: String = Field("", alias="AccessKeyId")
    access_key_secret: String = Field("", alias="AccessKeySecret")
    expiration: Time = Field(None, alias="Expiration")
    security_token: String = Field("", alias="SecurityToken")
    endpoint: String = ""

    # 传统接口附带的状态字段
    status_code: String = Field("", alias="StatusCode")
    error_code: String = Field("", alias="ErrorCode")
    error_message: String = Field("", alias="ErrorMessage")

    def time_to_expiry(self, now: datetime | None = None) -> timedelta:
        """
        距离过期的剩余时间，已预先扣除 5 分钟安全余量，结果可能为负（应立即刷新）。

        没有过期时间的凭证返回一个极大的时长，不会被误判为已过期。
        """
        if self.expiration is None:
            return OSS_TOKEN_UNLIMITED
        if now is None:
            now = datetime.now(timezone.utc)
        return self.expiration - now - OSS_TOKEN_EXPIRY_MARGIN


class OSSTokenResp(OpenAPIBase):
    """GET /open/upload/get_token 的响应。"""

    data: OSSToken | None = None


def time_to_expiry(token: OSSToken | None, now: datetime | None = None) -> timedelta:
    """同 OSSToken.time_to_expiry，尚未拿到凭证（None）时返回 0。"""
    if token is None:
        return timedelta(0)
    return token.time_to_expiry(now)
