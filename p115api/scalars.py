"""
宽松标量解码（两种 API 方言共用）。

115 的传统接口与 OpenAPI 对同一逻辑值的编码并不一致：
- 数字可能是 JSON 数字，也可能是带引号的字符串，空值可能缺失、为 null 或 ""
- 布尔可能是 true/false，也可能是 0/1
- 时间可能是 Unix 秒，也可能是 RFC3339 字符串

这里每种标量都提供一个 parse_* 函数（作用于 JSON 解析后的 Python 值），
以及供 pydantic 模型字段使用的 Annotated 类型。
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any

from pydantic import PlainSerializer, PlainValidator

# 与 strconv.ParseInt 一致：可选符号 + 十进制数字，不允许空白、下划线、小数点
_INT_RE = re.compile(r"[+-]?[0-9]+")

INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
DATETIME_MIN = datetime.min.replace(tzinfo=timezone.utc)
DATETIME_MAX = datetime.max.replace(tzinfo=timezone.utc)


class UnixTime(datetime):
    """
    由 Unix 秒解码得到的时间，unix 保留线上原值，编码时原样输出。

    超出 datetime 表示范围的秒数钳制到 DATETIME_MIN / DATETIME_MAX，unix 仍为原值。
    """

    unix: int

    @classmethod
    def from_unix(cls, i: int) -> UnixTime:
        try:
            dt = EPOCH + timedelta(seconds=i)
        except OverflowError:
            dt = DATETIME_MAX if i > 0 else DATETIME_MIN
        t = cls(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second, dt.microsecond, tzinfo=dt.tzinfo)
        t.unix = i
        return t


def _raw_text(value: Any) -> str:
    """
    还原一个 JSON 值在线上的文本形式，字符串返回其内容（相当于去掉两侧引号）。

    作用于解析后的值，浮点数无法还原原文：1e5 得到 "100000.0"，1.50 得到 "1.5"。
    """
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def parse_int_text(s: str, lo: int = INT64_MIN, hi: int = INT64_MAX) -> int | None:
    """严格解析十进制整数文本；不合法或越界时返回 None。"""
    if not _INT_RE.fullmatch(s):
        return None
    i = int(s)
    if i < lo or i > hi:
        return None
    return i


def _lenient_int(value: Any, lo: int, hi: int) -> int:
    s = _raw_text(value).strip('"')
    if s == "":
        s = "0"
    i = parse_int_text(s, lo, hi)
    # 解析失败不报错，保持零值
    return 0 if i is None else i


def parse_int(value: Any) -> int:
    """32 位整数：接受数字或数字字符串，空串视为 0，其余无法解析的输入一律为 0。"""
    return _lenient_int(value, INT32_MIN, INT32_MAX)


def parse_int64(value: Any) -> int:
    """64 位整数，规则同 parse_int。"""
    return _lenient_int(value, INT64_MIN, INT64_MAX)


def parse_bool_or_int(value: Any) -> bool:
    """
    布尔或 0/1 整数。

    true/false 按布尔解释；整数仅 1 为 True，其它整数为 False；null 保持零值 False。
    其余形态（字符串、小数、对象等）抛出 ValueError：这通常意味着接口出现了新的编码方式。
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value == 1
    raise ValueError(f"cannot unmarshal {json.dumps(value, ensure_ascii=False)} into BoolOrInt")


def parse_string(value: Any) -> str:
    """宽松字符串：JSON 字符串取其内容，其它标量取其原始文本（如未加引号的数字），null 为空串。"""
    if value is None:
        return ""
    return _raw_text(value)


def _parse_rfc3339(s: str) -> datetime | None:
    if "T" not in s and "t" not in s:
        return None
    text = s[:-1] + "+00:00" if s[-1] in "Zz" else s
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed


def parse_time(value: Any) -> datetime | None:
    """
    时间戳：先按 Unix 秒解析，失败再按 RFC3339 解析。

    空值或 null 返回 None（零时间）；整数秒返回 UnixTime（越界时钳制，不报错）；
    两种格式都不匹配时抛出 ValueError。
    """
    if isinstance(value, datetime):
        return value
    s = _raw_text(value).strip('"')
    if s == "" or s == "null":
        return None
    i = parse_int_text(s)
    if i is not None:
        return UnixTime.from_unix(i)
    parsed = _parse_rfc3339(s)
    if parsed is not None:
        return parsed
    raise ValueError(f"invalid literal for unix time: {s!r}")


def encode_time(t: datetime | None) -> int:
    """时间总是编码为 Unix 秒整数（从不输出 RFC3339）；零时间编码为 0。"""
    if t is None:
        return 0
    unix = getattr(t, "unix", None)
    if unix is not None:
        return unix
    return int(t.timestamp())


Int = Annotated[int, PlainValidator(parse_int)]
Int64 = Annotated[int, PlainValidator(parse_int64)]
BoolOrInt = Annotated[bool, PlainValidator(parse_bool_or_int)]
String = Annotated[str, PlainValidator(parse_string)]
Time = Annotated[
    datetime | None,
    PlainValidator(parse_time),
    PlainSerializer(encode_time, return_type=int),
]
