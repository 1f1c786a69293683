"""
传输层与本库之间的交接点：原始响应（httpx.Response / bytes / str / 已解析的 JSON）进，规范化的模型出。

本模块不发起任何请求，也不重试、不缓存。
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from p115api.base import OpenAPIBase, TraditionalBase
from p115api.download import DownloadURL
from p115api.errors import P115Error, TokenError

T = TypeVar("T")

# OpenAPI 中表示 token 失效的错误码
TOKEN_ERROR_CODES = (401, 100001)


@lru_cache(maxsize=None)
def _adapter(tp: Any) -> TypeAdapter[Any]:
    return TypeAdapter(tp)


def decode(tp: type[T], source: httpx.Response | bytes | bytearray | str | Any) -> T:
    """
    将响应解码为指定类型（模型类或 DownloadData 这样的类型别名）。

    :param tp: 目标类型，如 FileList、UploadInitInfo、DownloadData
    :param source: httpx.Response、JSON 文本（bytes/str）或已解析的 JSON 值
    :return: 解码后的不可变模型
    :raises pydantic.ValidationError: 输入形态不被接受（如 BoolOrInt 收到字符串）
    """
    adapter = _adapter(tp)
    if isinstance(source, httpx.Response):
        return adapter.validate_json(source.content)
    if isinstance(source, (bytes, bytearray, str)):
        return adapter.validate_json(source)
    return adapter.validate_python(source)


def decode_checked(tp: type[T], source: httpx.Response | bytes | bytearray | str | Any) -> T:
    """解码后检查信封，state 为假时抛出 APIError。"""
    result = decode(tp, source)
    if isinstance(result, (OpenAPIBase, TraditionalBase)):
        result.raise_for_state()
    return result


def download_url_with_cookies(link: DownloadURL, cookies: httpx.Cookies | httpx.Response) -> DownloadURL:
    """返回附带 cookies 的链接副本；cookies 可直接传获取链接时的 httpx.Response。"""
    if isinstance(cookies, httpx.Response):
        cookies = cookies.cookies
    return link.with_cookies(cookies)


def error_from_body(body: bytes, status_code: int, reason: str = "") -> P115Error:
    """
    将非 2xx 响应体归类为异常（供传输层在 HTTP 出错时调用）。

    - 含 code 或 message 字段的按 OpenAPI 信封处理：state 为假且错误码为 401/100001
      或信息含 "token" 时返回 TokenError(is_refresh_token_expired=True)，否则返回其 APIError
    - 其余 JSON 对象按传统信封处理：state 为假时返回其 APIError
    - 都不是：返回携带 HTTP 状态与响应体的 TokenError
    """
    try:
        obj = _adapter(dict[str, Any]).validate_json(body)
    except ValidationError:
        obj = None

    if obj is not None:
        try:
            if "code" in obj or "message" in obj:
                openapi = OpenAPIBase.model_validate(obj)
                error = openapi.err()
                if error is not None and (
                    openapi.err_code() in TOKEN_ERROR_CODES or "token" in openapi.err_msg()
                ):
                    return TokenError(str(error), is_refresh_token_expired=True)
            else:
                error = TraditionalBase.model_validate(obj).err()
        except ValidationError:
            error = None
        if error is not None:
            return error

    text = body.decode("utf-8", errors="replace")
    return TokenError(f"HTTP error {status_code} ({reason}): {text}")


def error_from_response(response: httpx.Response) -> P115Error:
    """error_from_body 的便捷形式。"""
    return error_from_body(response.content, response.status_code, response.reason_phrase)
