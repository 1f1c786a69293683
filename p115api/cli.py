"""
p115 CLI：解析抓取到的 115 接口响应（文件或 stdin），打印规范化后的字段，便于排查两种方言的差异。
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from pydantic import ValidationError

from p115api import (
    DownloadURL,
    FileList,
    OpenAPIBase,
    OSSTokenResp,
    TraditionalBase,
    UploadInitInfo,
    decode,
    time_to_expiry,
)
from p115api.cli_config import DIALECTS, OUTPUT_FORMATS, clear_config, effective_config, load_config, save_config

app = typer.Typer(
    name="p115",
    help="Inspect captured 115 API responses (Traditional and OpenAPI dialects).",
)

_path_argument: type = Annotated[str, typer.Argument(help="Response body file, or - for stdin")]
_format_option: type = Annotated[
    Optional[str],
    typer.Option("--format", "-F", help="text or json (default: saved preference)"),
]


def _read_source(path: str) -> bytes | str:
    if path == "-":
        return typer.get_text_stream("stdin").read()
    p = Path(path)
    if not p.is_file():
        typer.echo(f"error: not found: {path}", err=True)
        raise typer.Exit(1)
    return p.read_bytes()


def _decode_or_exit(tp: type, path: str) -> Any:
    raw = _read_source(path)
    try:
        return decode(tp, raw)
    except ValidationError as e:
        typer.echo(f"error: cannot decode {tp.__name__}: {e}", err=True)
        raise typer.Exit(1)


def _use_json(fmt: str | None) -> bool:
    fmt = fmt or effective_config()["output"]
    if fmt not in OUTPUT_FORMATS:
        typer.echo(f"error: format must be one of {', '.join(OUTPUT_FORMATS)}", err=True)
        raise typer.Exit(1)
    return fmt == "json"


def _fmt_time(t: datetime | None) -> str | None:
    return t.isoformat() if t is not None else None


def _emit(values: dict[str, Any], as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(values, ensure_ascii=False, indent=2))
        return
    for key, value in values.items():
        typer.echo(f"{key}: {'-' if value is None or value == '' else value}")


def _exit_on_api_error(resp: OpenAPIBase | TraditionalBase) -> None:
    error = resp.err()
    if error is not None:
        typer.echo(f"error: {error}", err=True)
        raise typer.Exit(1)


# ------------------------- files -------------------------


@app.command("files", help="Decode a file list response and print one line per entry")
def files_cmd(path: _path_argument, fmt: _format_option = None) -> None:
    data: FileList = _decode_or_exit(FileList, path)
    _exit_on_api_error(data)
    rows = [
        {
            "dir": f.is_dir(),
            "id": f.id(),
            "parent_id": f.parent_id(),
            "size": f.file_size_best(),
            "mod_time": _fmt_time(f.mod_time()),
            "name": f.file_name_best(),
            "sha1": f.sha1_best(),
            "pick_code": f.pick_code_best(),
        }
        for f in data.files
    ]
    if _use_json(fmt):
        typer.echo(json.dumps(rows, ensure_ascii=False, indent=2))
        return
    for r in rows:
        kind = "d" if r["dir"] else "-"
        typer.echo(f"  {kind}  {r['id']}  {r['parent_id']}  {r['size']}  {r['mod_time'] or '-'}  {r['name']}")


# ------------------------- link -------------------------


@app.command("link", help="Decode a download URL value (object, string or false)")
def link_cmd(path: _path_argument, fmt: _format_option = None) -> None:
    link: DownloadURL = _decode_or_exit(DownloadURL, path)
    _emit(
        {
            "url": link.url,
            "expiry": _fmt_time(link.expiry()),
            "valid": link.valid(),
        },
        _use_json(fmt),
    )


# ------------------------- upload -------------------------


@app.command("upload", help="Decode an upload init response")
def upload_cmd(path: _path_argument, fmt: _format_option = None) -> None:
    ui: UploadInitInfo = _decode_or_exit(UploadInitInfo, path)
    _emit(
        {
            "status": ui.get_status(),
            "pick_code": ui.get_pick_code(),
            "file_id": ui.get_file_id(),
            "bucket": ui.get_bucket(),
            "object": ui.get_object(),
            "callback": ui.get_callback(),
            "callback_var": ui.get_callback_var(),
        },
        _use_json(fmt),
    )


# ------------------------- token -------------------------


def _seconds(d: timedelta) -> int:
    return int(d.total_seconds())


@app.command("token", help="Decode an OSS token response and show time to expiry")
def token_cmd(path: _path_argument, fmt: _format_option = None) -> None:
    resp: OSSTokenResp = _decode_or_exit(OSSTokenResp, path)
    _exit_on_api_error(resp)
    token = resp.data
    _emit(
        {
            "access_key_id": token.access_key_id if token else None,
            "expiration": _fmt_time(token.expiration) if token else None,
            "time_to_expiry": _seconds(time_to_expiry(token)),
        },
        _use_json(fmt),
    )


# ------------------------- envelope -------------------------


@app.command("envelope", help="Check the success/error envelope of any response")
def envelope_cmd(
    path: _path_argument,
    dialect: Annotated[
        Optional[str],
        typer.Option("--dialect", "-d", help="openapi or traditional (default: saved preference)"),
    ] = None,
) -> None:
    dialect = dialect or effective_config()["dialect"]
    if dialect not in DIALECTS:
        typer.echo(f"error: dialect must be one of {', '.join(DIALECTS)}", err=True)
        raise typer.Exit(1)
    tp = OpenAPIBase if dialect == "openapi" else TraditionalBase
    resp = _decode_or_exit(tp, path)
    _exit_on_api_error(resp)
    typer.echo("ok")


# ------------------------- config -------------------------


config_app = typer.Typer(help="Config subcommands")
app.add_typer(config_app, name="config")


@config_app.command("set", help="Save output format and default dialect")
def config_set(
    output: Annotated[Optional[str], typer.Option("--output", "-o", help="text or json")] = None,
    dialect: Annotated[Optional[str], typer.Option("--dialect", "-d", help="openapi or traditional")] = None,
) -> None:
    if output is None and dialect is None:
        typer.echo("error: at least one of --output/--dialect required", err=True)
        raise typer.Exit(1)
    try:
        save_config(output=output, dialect=dialect)
    except ValueError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo("Saved.")


@config_app.command("show", help="Show effective config")
def config_show() -> None:
    cfg = effective_config()
    typer.echo(f"output: {cfg['output']}")
    typer.echo(f"dialect: {cfg['dialect']}")
    typer.echo(f"saved: {'yes' if load_config() else 'no'}")


@config_app.command("clear", help="Clear saved config")
def config_clear() -> None:
    if clear_config():
        typer.echo("Cleared.")
    else:
        typer.echo("No saved config.")


# ------------------------- main -------------------------


def main() -> None:
    app()


if __name__ == "__main__":
    main()
