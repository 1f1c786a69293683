"""
p115api 异常类型。

- APIError：响应信封报告失败（state 为假），携带方言名、错误码与错误信息
- TokenError：鉴权失败；is_refresh_token_expired 为 True 时表示 refresh token 也已失效，需要重新登录

形态不符的输入（如 BoolOrInt 收到字符串）由 pydantic.ValidationError 直接抛给调用方。
"""

from __future__ import annotations

import json


class P115Error(Exception):
    """p115api 所有异常的基类。"""


class APIError(P115Error):
    """远端接口返回的业务错误。"""

    def __init__(self, dialect: str, code: int, message: str = ""):
        self.dialect = dialect
        self.code = code
        self.message = message
        prefix = "Traditional API Error" if dialect == "Traditional" else f"{dialect} Error"
        text = f"{prefix}({code})"
        if message:
            text += ": " + json.dumps(message, ensure_ascii=False)
        super().__init__(text)


class TokenError(P115Error):
    """access token（以及可能的 refresh token）失效。"""

    def __init__(self, message: str, is_refresh_token_expired: bool = False):
        super().__init__(message)
        self.is_refresh_token_expired = is_refresh_token_expired
