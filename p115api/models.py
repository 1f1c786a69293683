"""
115 文件/目录数据模型（同时兼容传统接口与 OpenAPI 的字段名）。

File 是两种方言字段名的并集，访问器按固定优先级取值：
- 名称 fn > n，大小 fs > s，SHA1 sha1 > sha
- ID fid > cid；父目录 pid 两种方言同名
- 修改时间 upt > uet > te > tu > t（数字字符串）
- 目录判定：fc == 0，或 fid 为空且 cid 非空
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import AliasChoices, Field, PlainValidator

from p115api.base import OpenAPIBase, Record, TraditionalBase
from p115api.scalars import Int, Int64, String, Time, UnixTime, parse_int, parse_int_text


def _folder_flag(value: Any) -> int | None:
    # 缺失或 null 表示接口没有给出 fc，不参与目录判定
    if value is None:
        return None
    return parse_int(value)


FolderFlag = Annotated[int | None, PlainValidator(_folder_flag)]


def _lenient_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


Float = Annotated[float, PlainValidator(_lenient_float)]


class File(Record):
    """文件或文件夹条目（列表项、详情、分享列表通用）。"""

    # 名称 / 大小 / 哈希
    name: String = Field("", alias="n")
    file_name: String = Field("", alias="fn")
    size: Int64 = Field(0, validation_alias=AliasChoices("s", "size"))
    file_size: Int64 = Field(0, alias="fs")
    pick_code: String = Field("", alias="pc")
    sha: String = ""
    sha1: String = ""

    # 标识
    fid: String = ""
    cid: String = ""
    pid: String = ""

    # 时间
    t: String = ""  # 传统接口：可能是 "1715919337"，也可能是 "2024-05-19 03:54"
    te: Time = None  # 修改时间
    tp: Time = None  # 创建时间
    tu: Time = None  # 更新时间
    to: Time = None  # 最近打开，从未打开为 0
    upt: Time = None
    uet: Time = None
    ppt: Time = Field(None, alias="uppt")  # 上传时间

    # 类型
    is_folder: FolderFlag = Field(None, alias="fc")  # 0 文件夹，1 文件
    ico: String = ""
    class_: String = Field("", alias="class")

    # 状态
    is_marked: Int = Field(0, alias="ism")
    star: Int = 0
    is_hidden: Int = Field(0, alias="ih")
    is_locked: Int = Field(0, alias="lo")
    is_crypt: Int = Field(0, alias="isp")
    censored: Int = Field(0, alias="c")

    # 其它
    aid: String = ""
    fco: String = ""
    cm: Int = 0
    fdesc: String = ""
    ispl: Int = 0
    uid: String = ""
    check_code: Int = 0
    check_msg: String = ""
    score: Int = 0
    play_long: Float = 0.0  # 媒体时长（秒）

    def is_dir(self) -> bool:
        return self.is_folder == 0 or (self.fid == "" and self.cid != "")

    def id(self) -> str:
        """优先文件 ID，其次目录 ID；都没有时返回空串。"""
        return self.fid or self.cid

    def parent_id(self) -> str:
        return self.pid

    def file_name_best(self) -> str:
        return self.file_name or self.name

    def file_size_best(self) -> int:
        if self.file_size > 0:
            return self.file_size
        return self.size

    def pick_code_best(self) -> str:
        return self.pick_code

    def sha1_best(self) -> str:
        return self.sha1 or self.sha

    def mod_time(self) -> datetime | None:
        """按 upt、uet、te、tu、t 的顺序取第一个有效时间，都没有时返回 None。"""
        for t in (self.upt, self.uet, self.te, self.tu):
            if t is not None:
                return t
        ts = parse_int_text(self.t)
        if ts is not None:
            return UnixTime.from_unix(ts)
        return None


class FilePath(Record):
    """传统列表中的路径面包屑。"""

    name: String = ""
    aid: String = ""
    cid: String = ""
    pid: String = ""
    isp: String = ""
    p_cid: String = ""
    iss: String = ""
    fv: String = ""
    fvs: String = ""


class FileList(OpenAPIBase):
    """文件列表响应（两种方言的 data 都是条目数组）。"""

    files: list[File] = Field(default_factory=list, alias="data")

    # 分页与计数
    count: Int = 0
    total_count: Int = 0
    file_count: Int = 0
    folder_count: Int = 0
    page_size: Int = 0
    limit: String = ""
    offset: String = ""

    # 查询上下文（传统接口）
    data_source: String = ""
    sys_count: Int = 0
    aid: String = ""
    cid: String = ""
    is_asc: String = ""
    star: Int = 0
    is_share: Int = 0
    type: Int = 0
    is_q: Int = 0
    r_all: Int = 0
    stdir: Int = 0
    cur: Int = 0
    min_size: Int = 0
    max_size: Int = 0
    record_open_time: String = ""
    path: list[FilePath] = Field(default_factory=list)
    fields: String = ""
    order: String = ""
    fc_mix: Int = 0
    natsort: Int = 0
    uid: String = ""
    suffix: String = ""


class FileInfo(TraditionalBase):
    """单个文件信息（传统接口），data 为只含一项的数组。"""

    data: list[File] = Field(default_factory=list)


class NewDirData(Record):
    file_name: String = ""
    file_id: String = ""


class NewDir(OpenAPIBase):
    """新建目录响应。"""

    data: NewDirData | None = None


class DirID(TraditionalBase):
    """按路径查询目录 ID（传统接口）。"""

    id: String = ""
    is_private: String = ""


class FolderPathItem(Record):
    file_id: String = ""
    file_name: String = ""


class FolderInfoData(Record):
    """/open/folder/get_info 的 data；计数类字段以字符串给出。"""

    count: String = ""
    size: String = ""
    folder_count: String = ""
    play_long: Int64 = 0  # -1 表示统计中
    show_play_long: Int = 0
    ptime: String = ""
    utime: String = ""
    file_name: String = ""
    pick_code: String = ""
    sha1: String = ""
    file_id: String = ""
    is_mark: String = ""
    open_time: Int64 = 0
    file_category: String = ""  # "0" 为目录
    paths: list[FolderPathItem] = Field(default_factory=list)


class FileStats(OpenAPIBase):
    """目录统计信息响应。"""

    data: FolderInfoData | None = None


class StringInfo(TraditionalBase):
    """data 为单个字符串的通用响应（传统接口）。"""

    data: String = ""


class SizeInfo(Record):
    size: Float = 0.0
    size_format: String = ""


class IndexData(Record):
    space_info: dict[str, SizeInfo] = Field(default_factory=dict)


class IndexInfo(TraditionalBase):
    """空间配额信息（传统接口）。"""

    data: IndexData | None = None


class ShareUserInfo(Record):
    user_id: String = ""
    user_name: String = ""
    face: String = ""


class ShareInfo(Record):
    snap_id: String = ""
    file_size: String = ""
    share_title: String = ""
    share_state: String = ""
    forbid_reason: String = ""
    create_time: String = ""
    receive_code: String = ""
    receive_count: String = ""
    expire_time: Int64 = 0
    file_category: Int = 0
    auto_renewal: String = ""
    auto_fill_recvcode: String = ""
    can_report: Int = 0
    can_notice: Int = 0
    have_vio_file: Int = 0


class ShareUserAppeal(Record):
    can_appeal: Int = 0
    can_share_appeal: Int = 0
    popup_appeal_page: Int = 0
    can_global_appeal: Int = 0


class ShareSnapData(Record):
    userinfo: ShareUserInfo = Field(default_factory=ShareUserInfo)
    shareinfo: ShareInfo = Field(default_factory=ShareInfo)
    count: Int = 0
    items: list[File] = Field(default_factory=list, alias="list")
    share_state: String = ""
    user_appeal: ShareUserAppeal = Field(default_factory=ShareUserAppeal)


class ShareSnap(TraditionalBase):
    """分享链接的文件列表（传统接口），条目沿用 File。"""

    data: ShareSnapData | None = None
