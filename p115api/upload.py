"""
上传会话（upload init / resume）解析。

传统接口把 pickcode、bucket、object、callback 等平铺在顶层；
OpenAPI 把它们嵌套在 data 中（pick_code 等）。有 data 时以 data 为准，否则回落到顶层字段。

callback 的形态在解码时未知，访问时依次尝试：
1. 对象 {"callback": "...", "callback_var": "..."}
2. 数组 ["callback", "callback_var"]
3. 原样当作 callback 字符串（此时没有 callback_var）

第 3 步作用于 JSON 解析后的值，拿不到线上原始字节：JSON 字符串取其内容（不含两侧引号），
其它形态（数字、缺少 callback 的对象等）取紧凑 JSON 文本，null 为空串。
返回值一律是 base64 文本：本身不是合法 base64 的会先做编码，可直接放入 OSS 上传的 callback 参数。
"""

from __future__ import annotations

import base64
import json
from enum import IntEnum
from typing import Any, NamedTuple

from pydantic import Field, model_validator

from p115api.base import OpenAPIBase, Record, TraditionalBase, drop_empty_data
from p115api.scalars import BoolOrInt, Int, Int64, String


class UploadStatus(IntEnum):
    """upload init 返回的 status。"""

    NEED_UPLOAD = 1  # 服务器没有相同内容，需要真正上传
    INSTANT = 2  # 秒传成功
    SIGN_CHECK = 7  # 需要按 sign_check 给出的范围计算分块 SHA1 后重新 init



class CallbackParts(NamedTuple):
    callback: str
    callback_var: str = ""


def _parse_callback(raw: Any) -> CallbackParts | None:
    """按「对象 → 数组」的顺序结构化解析 callback；都不可用时返回 None。"""
    if isinstance(raw, dict):
        callback = raw.get("callback", "")
        callback_var = raw.get("callback_var", "")
        if isinstance(callback, str) and isinstance(callback_var, str) and callback:
            return CallbackParts(callback, callback_var)
        return None
    if isinstance(raw, list) and raw and all(isinstance(x, str) for x in raw):
        return CallbackParts(raw[0], raw[1] if len(raw) > 1 else "")
    return None


def _raw_callback(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    return json.dumps(raw, separators=(",", ":"), ensure_ascii=False)


def resolve_callback(raw: Any) -> CallbackParts:
    """解析 callback 原始值（尚未做 base64 规范化）。"""
    parts = _parse_callback(raw)
    if parts is None:
        return CallbackParts(_raw_callback(raw))
    return parts


def normalize_base64(s: str) -> str:
    """已是合法 base64 的原样返回，否则返回其 base64 编码。"""
    try:
        base64.b64decode(s, validate=True)
    except ValueError:
        return base64.b64encode(s.encode("utf-8")).decode("ascii")
    return s


class UploadInitData(Record):
    """OpenAPI upload init 响应中嵌套的 data。"""

    pick_code: String = ""  # 上传任务 ID
    status: Int = 0
    sign_key: String = ""  # 二次认证用的 SHA1 ID
    sign_check: String = ""  # 二次认证的分块范围，如 "0-131071"
    file_id: String = ""  # 秒传成功（status=2）时的文件 ID
    target: String = ""
    bucket: String = ""
    object: String = ""
    callback: Any = None
    version: String = ""


class UploadInitInfo(OpenAPIBase):
    """upload init / resume 响应，兼容平铺（传统）与嵌套（OpenAPI）两种结构。"""

    request: String = ""
    error_code: Int = Field(0, alias="statuscode")
    error_msg: String = Field("", alias="statusmsg")

    data: UploadInitData | None = None

    status: Int = 0
    pick_code: String = Field("", alias="pickcode")
    target: String = ""
    version: String = ""

    bucket: String = ""
    object: String = ""
    callback: Any = None

    file_id_int: Int = Field(0, alias="fileid")
    file_info: String = Field("", alias="fileinfo")

    sign_key: String = ""
    sign_check: String = ""
    file_id: String = ""

    @model_validator(mode="before")
    @classmethod
    def _empty_data(cls, data: Any) -> Any:
        return drop_empty_data(data)

    def _callback_parts(self) -> CallbackParts:
        raw = self.data.callback if self.data is not None else self.callback
        return resolve_callback(raw)

    def get_callback(self) -> str:
        return normalize_base64(self._callback_parts().callback)

    def get_callback_var(self) -> str:
        callback_var = self._callback_parts().callback_var
        if not callback_var:
            return ""
        return normalize_base64(callback_var)

    def get_pick_code(self) -> str:
        if self.data is not None:
            return self.data.pick_code
        return self.pick_code

    def get_status(self) -> int:
        if self.data is not None:
            return self.data.status
        return self.status

    def get_file_id(self) -> str:
        """秒传成功时的文件 ID。"""
        if self.data is not None:
            return self.data.file_id
        return self.file_id

    def get_sign_key(self) -> str:
        if self.data is not None:
            return self.data.sign_key
        return self.sign_key

    def get_sign_check(self) -> str:
        if self.data is not None:
            return self.data.sign_check
        return self.sign_check

    def get_bucket(self) -> str:
        if self.data is not None:
            return self.data.bucket
        return self.bucket

    def get_object(self) -> str:
        if self.data is not None:
            return self.data.object
        return self.object

    def get_target(self) -> str:
        if self.data is not None:
            return self.data.target
        return self.target

    def get_version(self) -> str:
        if self.data is not None:
            return self.data.version
        return self.version

    def is_instant(self) -> bool:
        return self.get_status() == UploadStatus.INSTANT

    def needs_upload(self) -> bool:
        return self.get_status() == UploadStatus.NEED_UPLOAD

    def needs_sign_check(self) -> bool:
        return self.get_status() == UploadStatus.SIGN_CHECK


class UploadBasicInfo(TraditionalBase):
    """/app/uploadinfo 的响应（传统接口）。"""

    uploadinfo: String = ""
    user_id: String = ""
    app_version: Int = 0
    app_id: Int = 0
    userkey: String = ""
    size_limit: Int64 = 0
    size_limit_yun: Int64 = 0
    max_dir_level: Int64 = 0
    max_dir_level_yun: Int64 = 0
    max_file_num: Int64 = 0
    max_file_num_yun: Int64 = 0
    upload_allowed: BoolOrInt = False
    upload_allowed_msg: String = ""


class CallbackData(Record):
    aid: String = ""
    cid: String = ""
    file_id: String = ""
    file_name: String = ""
    file_size: Int64 = 0
    is_video: Int = 0
    pick_code: String = ""
    sha: String = Field("", alias="sha1")
    thumb_url: String = ""


class CallbackInfo(TraditionalBase):
    """OSS 上传完成后回调的结果。"""

    data: CallbackData | None = None


class SampleInitResp(Record):
    """sampleinitupload.php 的响应（表单直传）。"""

    object: String = ""
    access_id: String = Field("", alias="accessid")
    host: String = ""
    policy: String = ""
    signature: String = ""
    expire: Int64 = 0
    callback: String = ""
    error_code: Int = Field(0, alias="errno")
    error: String = ""
