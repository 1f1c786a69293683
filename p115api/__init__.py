"""115 网盘 API 响应规范化：兼容传统（cookie）接口与 OpenAPI 两种方言。"""

from p115api.auth import (
    AuthDeviceCodeResp,
    DeviceCodeTokenResp,
    OSSToken,
    OSSTokenResp,
    RefreshTokenResp,
    time_to_expiry,
)
from p115api.base import OpenAPIBase, TraditionalBase
from p115api.decode import (
    decode,
    decode_checked,
    download_url_with_cookies,
    error_from_body,
    error_from_response,
)
from p115api.download import (
    DownloadData,
    DownloadInfo,
    DownloadURL,
    OpenAPIDownloadInfo,
    OpenAPIDownloadResp,
    ShareDownloadInfo,
)
from p115api.errors import APIError, P115Error, TokenError
from p115api.models import (
    DirID,
    File,
    FileInfo,
    FileList,
    FilePath,
    FileStats,
    FolderInfoData,
    IndexInfo,
    NewDir,
    ShareSnap,
    StringInfo,
)
from p115api.scalars import BoolOrInt, Int, Int64, String, Time, UnixTime
from p115api.upload import (
    CallbackInfo,
    SampleInitResp,
    UploadBasicInfo,
    UploadInitData,
    UploadInitInfo,
    UploadStatus,
    normalize_base64,
    resolve_callback,
)

__all__ = [
    "APIError",
    "AuthDeviceCodeResp",
    "BoolOrInt",
    "CallbackInfo",
    "DeviceCodeTokenResp",
    "DirID",
    "DownloadData",
    "DownloadInfo",
    "DownloadURL",
    "File",
    "FileInfo",
    "FileList",
    "FilePath",
    "FileStats",
    "FolderInfoData",
    "IndexInfo",
    "Int",
    "Int64",
    "NewDir",
    "OSSToken",
    "OSSTokenResp",
    "OpenAPIBase",
    "OpenAPIDownloadInfo",
    "OpenAPIDownloadResp",
    "P115Error",
    "RefreshTokenResp",
    "SampleInitResp",
    "ShareDownloadInfo",
    "ShareSnap",
    "String",
    "StringInfo",
    "Time",
    "TokenError",
    "TraditionalBase",
    "UnixTime",
    "UploadBasicInfo",
    "UploadInitData",
    "UploadInitInfo",
    "UploadStatus",
    "decode",
    "decode_checked",
    "download_url_with_cookies",
    "error_from_body",
    "error_from_response",
    "normalize_base64",
    "resolve_callback",
    "time_to_expiry",
]
