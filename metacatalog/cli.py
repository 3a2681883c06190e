"""
metacatalog CLI - Typer entry point

Commands: init, partition {add,remove,get,list,max}, kv {set,get,delete,list}
"""

import json
import logging
from typing import Optional

import typer

from metacatalog._core import MetaCatalog
from metacatalog.config import load_config
from metacatalog.models import Partition

app = typer.Typer()
partition_app = typer.Typer()
kv_app = typer.Typer()
app.add_typer(partition_app, name="partition")
app.add_typer(kv_app, name="kv")


@app.callback()
def main(
    ctx: typer.Context,
    database_url: Optional[str] = typer.Option(None, "--database-url", "-d"),
    table: Optional[str] = typer.Option(None, "--table", "-t"),
    log_level: Optional[str] = typer.Option(None, "--log-level"),
) -> None:
    """Partition metadata catalog."""
    config = load_config(
        database_url=database_url,
        table_name=table,
        log_level=log_level.upper() if log_level else None,
    )
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = config


def _open(ctx: typer.Context) -> MetaCatalog:
    mc = MetaCatalog(config=ctx.obj).init()
    ctx.call_on_close(mc.close)
    return mc


def _fail(message: str) -> None:
    typer.echo(f"error: {message}", err=True)
    raise typer.Exit(code=1)


@app.command()
def init(ctx: typer.Context) -> None:
    """Create the metadata table if it does not exist."""
    mc = _open(ctx)
    if not mc.schema.table_exists():
        _fail(f"table {mc.table_name} could not be created")
    typer.echo(f"table {mc.table_name}: ok")


@partition_app.command("add")
def partition_add(
    ctx: typer.Context,
    name: str,
    pid: Optional[int] = typer.Option(None, "--id", "-i", min=0),
) -> None:
    """Add a partition. Without --id the next free id is used."""
    mc = _open(ctx)
    if pid is None:
        pid = mc.partitions.get_max_partition() + 1
    p = Partition(pid, name)
    if not mc.partitions.add_partition(p):
        _fail(f"could not add partition {name}")
    typer.echo(f"{p.id}\t{p.name}")


@partition_app.command("remove")
def partition_remove(ctx: typer.Context, name: str) -> None:
    """Remove a partition by name."""
    mc = _open(ctx)
    existing = mc.partitions.get_partition_by_name(name)
    p = existing or Partition(0, name)
    if not mc.partitions.remove_partition(p):
        _fail(f"could not remove partition {name}")


@partition_app.command("get")
def partition_get(ctx: typer.Context, name: str) -> None:
    """Print one partition by name."""
    mc = _open(ctx)
    p = mc.partitions.get_partition_by_name(name)
    if p is None:
        _fail(f"no partition named {name}")
    typer.echo(f"{p.id}\t{p.name}")


@partition_app.command("list")
def partition_list(ctx: typer.Context) -> None:
    """List all partitions, ordered by id."""
    mc = _open(ctx)
    partitions = mc.partitions.get_all_partitions()
    if partitions is None:
        _fail("could not list partitions")
    for p in sorted(partitions, key=lambda p: (p.id, p.name)):
        typer.echo(f"{p.id}\t{p.name}")


@partition_app.command("max")
def partition_max(ctx: typer.Context) -> None:
    """Print the largest partition id (0 when empty)."""
    mc = _open(ctx)
    typer.echo(str(mc.partitions.get_max_partition()))


@kv_app.command("set")
def kv_set(ctx: typer.Context, namespace: str, keytype: str, key: str, value: str) -> None:
    mc = _open(ctx)
    if not mc.rows.insert(namespace, keytype, key, value):
        _fail(f"could not insert {namespace}/{keytype}/{key}")


@kv_app.command("get")
def kv_get(ctx: typer.Context, namespace: str, keytype: str, key: str) -> None:
    mc = _open(ctx)
    value = mc.rows.lookup(namespace, keytype, key)
    if value is None:
        _fail(f"no value for {namespace}/{keytype}/{key}")
    typer.echo(value)


@kv_app.command("delete")
def kv_delete(ctx: typer.Context, namespace: str, keytype: str, key: str) -> None:
    mc = _open(ctx)
    if not mc.rows.delete(namespace, keytype, key):
        _fail(f"could not delete {namespace}/{keytype}/{key}")


@kv_app.command("list")
def kv_list(
    ctx: typer.Context,
    namespace: str,
    keytype: Optional[str] = typer.Argument(None),
) -> None:
    """Print rows as JSON. With KEYTYPE: a key -> value object."""
    mc = _open(ctx)
    if keytype is not None:
        vals = mc.rows.list_by_type(namespace, keytype)
        if vals is None:
            _fail(f"could not list {namespace}/{keytype}")
        typer.echo(json.dumps(vals, ensure_ascii=False, indent=2, sort_keys=True))
        return
    rows = mc.rows.list_namespace(namespace)
    if rows is None:
        _fail(f"could not list {namespace}")
    out = [
        {"keytype": r.keytype, "key": r.key, "value": r.value}
        for r in rows
    ]
    typer.echo(json.dumps(out, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    app()
