"""
响应信封（两种方言各自独立，不合并为同一类型）。

传统接口：{state, errno, errNo, error, msg}
OpenAPI：  {state, code, message, error, errno}

两者都提供 err_code() / err_msg() / err()，但字段优先级不同：
- 传统接口 err_code 优先 errno，err_msg 优先 error
- OpenAPI  err_code 优先 code， err_msg 优先 message
state 为真即成功，无论 code/message 是否也有值。
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from p115api.errors import APIError
from p115api.scalars import BoolOrInt, Int, String


class Record(BaseModel):
    """所有响应记录的公共配置：解码后不可变，忽略未知字段，可用属性名构造。"""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class TraditionalBase(Record):
    """传统（cookie）接口的响应信封。"""

    msg: String = ""
    errno: Int = 0
    err_no: Int = Field(0, alias="errNo")  # FileList 用 errNo
    error: String = ""
    state: BoolOrInt = False

    def err_code(self) -> int:
        return self.errno or self.err_no

    def err_msg(self) -> str:
        return self.error or self.msg

    def err(self) -> APIError | None:
        """成功返回 None，否则返回格式化后的 APIError（不抛出）。"""
        if self.state:
            return None
        return APIError("Traditional", self.err_code(), self.err_msg())

    def raise_for_state(self) -> None:
        """state 为假时抛出 APIError。"""
        error = self.err()
        if error is not None:
            raise error


class OpenAPIBase(Record):
    """OpenAPI（token）接口的响应信封。"""

    state: BoolOrInt = False
    code: Int = 0
    message: String = ""
    # 部分接口仍沿用旧字段
    error: String = ""
    errno: Int = 0

    def err_code(self) -> int:
        return self.code or self.errno

    def err_msg(self) -> str:
        return self.message or self.error

    def err(self) -> APIError | None:
        """成功返回 None，否则返回格式化后的 APIError（不抛出）。"""
        if self.state:
            return None
        return APIError("OpenAPI", self.err_code(), self.err_msg())

    def raise_for_state(self) -> None:
        """state 为假时抛出 APIError。"""
        error = self.err()
        if error is not None:
            raise error


def drop_empty_data(data: Any, key: str = "data") -> Any:
    """部分接口在无结果时把对象型的 data 给成 [] 或 ""，按缺失处理。"""
    if isinstance(data, dict) and key in data and data[key] in ([], ""):
        data = {k: v for k, v in data.items() if k != key}
    return data
