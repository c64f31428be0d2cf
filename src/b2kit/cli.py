from __future__ import annotations
from pathlib import Path
from typing import Optional
import typer

from .bootstrap import build_client
from .client.b2_client import B2Client
from .core.errors import ApiError, B2Error
from .core.utilities import get_sha1_hash
from .models import BucketOptions, BucketType

app = typer.Typer(add_completion=False, help="Backblaze B2 bucket tool.")


def _fail(err: Exception) -> None:
    typer.echo(f"error: {err}", err=True)
    if isinstance(err, ApiError) and err.retryable:
        typer.echo("(transient error; the request may be retried)", err=True)
    raise typer.Exit(code=1)


def _client(ctx: typer.Context) -> B2Client:
    try:
        return build_client(ctx.obj["config"])["client"]
    except (B2Error, FileNotFoundError) as e:
        _fail(e)


@app.callback()
def main(ctx: typer.Context, config: Path = Path("config/default.yaml")):
    ctx.obj = {"config": config}


@app.command("buckets")
def list_buckets(ctx: typer.Context):
    """List buckets on the account."""
    with _client(ctx) as client:
        try:
            for b in client.buckets.get_list():
                typer.echo(f"{b.bucket_id}  {b.bucket_name}  {b.bucket_type}")
        except B2Error as e:
            _fail(e)


@app.command()
def create(
    ctx: typer.Context,
    name: str,
    bucket_type: BucketType = typer.Option(BucketType.allPrivate, "--type"),
    cache_control: Optional[int] = typer.Option(None, "--cache-control", help="max-age in seconds"),
):
    """Create a bucket."""
    with _client(ctx) as client:
        try:
            b = client.buckets.create(name, BucketOptions(bucket_type=bucket_type, cache_control=cache_control))
        except B2Error as e:
            _fail(e)
        typer.echo(f"{b.bucket_id}  {b.bucket_name}  {b.bucket_type}")


@app.command()
def delete(ctx: typer.Context, bucket_id: Optional[str] = typer.Argument(None)):
    """Delete a bucket (defaults to the persisted bucket)."""
    with _client(ctx) as client:
        try:
            b = client.buckets.delete(bucket_id)
        except B2Error as e:
            _fail(e)
        typer.echo(f"deleted {b.bucket_id}  {b.bucket_name}")


@app.command()
def sha1(path: Path):
    """Print the SHA-1 B2 expects in X-Bz-Content-Sha1."""
    if not path.is_file():
        _fail(FileNotFoundError(f"No such file: {path}"))
    typer.echo(get_sha1_hash(path.read_bytes()))
