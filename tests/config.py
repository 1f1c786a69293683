"""
测试用样例响应：两种方言下同一逻辑数据的典型 JSON。

仅在此处维护，conftest 及各 test_*.py 均从此导入。
"""

import json

# ---------- 文件列表 ----------
# OpenAPI 列表项：fn/fs/fid/upt，fc=1 为文件
OPENAPI_FILE_ITEM = {
    "fid": "2879483726431",
    "pid": "2879481234567",
    "fc": "1",
    "fn": "movie.mkv",
    "fs": 1073741824,
    "pc": "abcd1234efgh",
    "sha1": "DA39A3EE5E6B4B0D3255BFEF95601890AFD80709",
    "upt": "1715919337",
    "uet": 1715919300,
    "isp": "0",
    "ism": 0,
}
# OpenAPI 列表项：fc=0 为目录
OPENAPI_FOLDER_ITEM = {
    "fid": "2879481234999",
    "pid": "0",
    "fc": "0",
    "fn": "电影",
    "fs": 0,
    "upt": "1715910000",
}
# 传统列表项：文件有 fid，目录只有 cid
TRADITIONAL_FILE_ITEM = {
    "fid": "99001",
    "cid": "55",
    "n": "notes.txt",
    "s": "2048",
    "sha": "3C363836CF4E16666669A25DA280A1865C2D2874",
    "pc": "pc99001",
    "te": "1700000000",
    "tp": "1690000000",
    "t": "2024-05-19 03:54",
}
TRADITIONAL_FOLDER_ITEM = {
    "cid": "55",
    "pid": "0",
    "n": "docs",
    "te": "",
    "t": "1716165082",
}

OPENAPI_FILE_LIST = {
    "state": True,
    "code": 0,
    "message": "",
    "data": [OPENAPI_FILE_ITEM, OPENAPI_FOLDER_ITEM],
    "count": 2,
    "limit": 1150,
    "offset": 0,
    "path": [{"name": "根目录", "aid": "1", "cid": 0, "pid": "", "isp": "0", "p_cid": "0"}],
}

TRADITIONAL_FILE_LIST = {
    "state": 1,
    "errNo": 0,
    "error": "",
    "data": [TRADITIONAL_FILE_ITEM, TRADITIONAL_FOLDER_ITEM],
    "count": "2",
    "file_count": 1,
    "folder_count": 1,
    "page_size": 1150,
    "cid": 55,
}

# ---------- 信封 ----------
TRADITIONAL_ERROR = {"state": 0, "errno": 20004, "error": "not found"}
OPENAPI_ERROR = {"state": False, "code": 40140116, "message": "refresh token error"}

# ---------- 上传 ----------
UPLOAD_INIT_OPENAPI = {
    "state": True,
    "code": 0,
    "message": "",
    "data": {
        "pick_code": "up_pc_1",
        "status": 1,
        "sign_key": "",
        "sign_check": "",
        "file_id": "",
        "target": "U_1_0",
        "bucket": "fhnfile",
        "object": "8f7a/obj",
        "callback": {"callback": "plain-text", "callback_var": "v"},
    },
}

UPLOAD_INIT_TRADITIONAL = {
    "request": "/3.0/initupload.php",
    "status": "2",
    "statuscode": 0,
    "statusmsg": "",
    "pickcode": "trad_pc",
    "target": "U_1_55",
    "version": "4.0",
    "bucket": "fhnfile",
    "object": "trad/obj",
    "file_id": "123456",
    "callback": ["already_base64_or_not", "var2"],
}

# ---------- OSS 凭证 ----------
OSS_TOKEN_RESP = {
    "state": True,
    "code": 0,
    "message": "",
    "data": {
        "AccessKeyId": "STS.ak",
        "AccessKeySecret": "secret",
        "Expiration": "2030-01-01T00:00:00Z",
        "SecurityToken": "token",
        "endpoint": "http://oss-cn-shenzhen.aliyuncs.com",
    },
}


def as_bytes(payload: object) -> bytes:
    """样例转为原始响应字节。"""
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")
